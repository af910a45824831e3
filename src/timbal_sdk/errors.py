"""Error hierarchy raised by the Timbal SDK.

Every failure that leaves :class:`~timbal_sdk.client.ApiClient` is a
:class:`TimbalApiError`. Callers can branch on the subclass, or on
``status_code`` (``0`` means the request never produced an HTTP response)
and ``code``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    PARSE_ERROR = "PARSE_ERROR"


class TimbalApiError(Exception):
    """Base error carrying the HTTP status, a machine code and optional details."""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code.value if isinstance(code, ErrorCode) else code
        self.details = details

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status_code={self.status_code}, code={self.code!r})"
        )


class RequestTimeoutError(TimbalApiError):
    """No response arrived before the per-attempt timeout."""


class NetworkError(TimbalApiError):
    """The transport failed before any HTTP status was received."""


class ServerError(TimbalApiError):
    """The API answered with a 5xx status."""


class ClientError(TimbalApiError):
    """The API answered with a 4xx status."""


class ParseError(TimbalApiError):
    """A response body could not be decoded as JSON."""


__all__ = [
    "ClientError",
    "ErrorCode",
    "NetworkError",
    "ParseError",
    "RequestTimeoutError",
    "ServerError",
    "TimbalApiError",
]
