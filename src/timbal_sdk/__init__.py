"""Timbal Python SDK."""

from .bodies import BinaryBody, Body, JsonBody, MultipartBody, TextBody
from .client import ApiClient
from .config import ClientConfig, merge_config
from .errors import (
    ClientError,
    ErrorCode,
    NetworkError,
    ParseError,
    RequestTimeoutError,
    ServerError,
    TimbalApiError,
)
from .models import ApiResponse, AppRunRequest, Column, UploadedFile
from .timbal import Timbal

__version__ = "0.1.0"

__all__ = [
    "ApiClient",
    "ApiResponse",
    "AppRunRequest",
    "BinaryBody",
    "Body",
    "ClientConfig",
    "ClientError",
    "Column",
    "ErrorCode",
    "JsonBody",
    "MultipartBody",
    "NetworkError",
    "ParseError",
    "RequestTimeoutError",
    "ServerError",
    "TextBody",
    "Timbal",
    "TimbalApiError",
    "UploadedFile",
    "merge_config",
]
