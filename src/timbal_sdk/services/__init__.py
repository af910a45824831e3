"""Resource services layered on top of :class:`~timbal_sdk.client.ApiClient`."""

from .app import AppDefaults, AppService
from .file import FileDefaults, FileService
from .query import QueryDefaults, QueryService
from .table import ImportMode, TableDefaults, TableService

__all__ = [
    "AppDefaults",
    "AppService",
    "FileDefaults",
    "FileService",
    "ImportMode",
    "QueryDefaults",
    "QueryService",
    "TableDefaults",
    "TableService",
]
