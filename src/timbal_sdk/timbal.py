"""Top-level client bundling the dispatcher with every resource service."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import httpx

from .client import ApiClient
from .config import ClientConfig
from .errors import TimbalApiError
from .models import Column, UploadedFile
from .services import (
    AppDefaults,
    AppService,
    FileDefaults,
    FileService,
    ImportMode,
    QueryDefaults,
    QueryService,
    TableDefaults,
    TableService,
)

logger = logging.getLogger(__name__)


class Timbal:
    """Entry point for the Timbal platform API.

    Either pass a ready :class:`ClientConfig` or its fields as keywords::

        timbal = Timbal(api_key="...", timeout=10.0)
        timbal.set_query_defaults(org_id="10", kb_id="48")
        rows = timbal.query(sql='SELECT COUNT(*) FROM "Documents"')
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        **config_fields: Any,
    ) -> None:
        if config is None:
            config = ClientConfig(**config_fields)
        elif config_fields:
            raise TypeError("Pass either a ClientConfig or config keywords, not both")
        self._api = ApiClient(config, transport=transport)
        self._queries = QueryService(self._api)
        self._tables = TableService(self._api)
        self._files = FileService(self._api)
        self._apps = AppService(self._api)

    def __enter__(self) -> "Timbal":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def get_api_client(self) -> ApiClient:
        return self._api

    def get_config(self) -> ClientConfig:
        return self._api.get_config()

    def update_config(self, **changes: Any) -> None:
        self._api.update_config(**changes)

    # Queries

    def query(
        self,
        org_id: Optional[str] = None,
        kb_id: Optional[str] = None,
        sql: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        return self._queries.query(org_id=org_id, kb_id=kb_id, sql=sql)

    def query_by_params(self, org_id: str, kb_id: str, sql: str) -> List[Dict[str, Any]]:
        return self._queries.query_by_params(org_id, kb_id, sql)

    def set_query_defaults(self, **defaults: Optional[str]) -> None:
        self._queries.set_defaults(**defaults)

    def get_query_defaults(self) -> QueryDefaults:
        return self._queries.get_defaults()

    # Tables

    def create_table(
        self,
        name: str,
        columns: Iterable[Union[Column, Mapping[str, Any]]],
        org_id: Optional[str] = None,
        kb_id: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> None:
        self._tables.create_table(name, columns, org_id=org_id, kb_id=kb_id, comment=comment)

    def create_table_by_params(
        self,
        org_id: str,
        kb_id: str,
        name: str,
        columns: Iterable[Union[Column, Mapping[str, Any]]],
        comment: Optional[str] = None,
    ) -> None:
        self._tables.create_table_by_params(org_id, kb_id, name, columns, comment)

    def import_csv(
        self,
        table_name: str,
        csv_path: Union[str, Path],
        org_id: Optional[str] = None,
        kb_id: Optional[str] = None,
        mode: ImportMode = "overwrite",
    ) -> None:
        self._tables.import_csv(table_name, csv_path, org_id=org_id, kb_id=kb_id, mode=mode)

    def import_csv_by_params(
        self,
        org_id: str,
        kb_id: str,
        table_name: str,
        csv_path: Union[str, Path],
        mode: ImportMode = "overwrite",
    ) -> None:
        self._tables.import_csv_by_params(org_id, kb_id, table_name, csv_path, mode)

    def delete_table(
        self,
        name: str,
        org_id: Optional[str] = None,
        kb_id: Optional[str] = None,
        cascade: bool = False,
    ) -> None:
        self._tables.delete_table(name, org_id=org_id, kb_id=kb_id, cascade=cascade)

    def delete_table_by_params(self, org_id: str, kb_id: str, name: str, cascade: bool = False) -> None:
        self._tables.delete_table_by_params(org_id, kb_id, name, cascade)

    def set_table_defaults(self, **defaults: Optional[str]) -> None:
        self._tables.set_defaults(**defaults)

    def get_table_defaults(self) -> TableDefaults:
        return self._tables.get_defaults()

    # Files

    def upload_file(self, file_path: Union[str, Path], org_id: Optional[str] = None) -> UploadedFile:
        return self._files.upload_file(file_path, org_id=org_id)

    def upload_file_by_params(self, org_id: str, file_path: Union[str, Path]) -> UploadedFile:
        return self._files.upload_file_by_params(org_id, file_path)

    def upload_file_from_bytes(
        self,
        data: bytes,
        filename: str,
        org_id: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> UploadedFile:
        return self._files.upload_file_from_bytes(data, filename, org_id=org_id, content_type=content_type)

    def set_file_defaults(self, **defaults: Optional[str]) -> None:
        self._files.set_defaults(**defaults)

    def get_file_defaults(self) -> FileDefaults:
        return self._files.get_defaults()

    # Apps

    def run_app(
        self,
        app_id: str,
        input: Mapping[str, Any],
        org_id: Optional[str] = None,
        version_id: Optional[str] = None,
        group_id: Optional[str] = None,
        parent_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        return self._apps.run_app(
            app_id,
            input,
            org_id=org_id,
            version_id=version_id,
            group_id=group_id,
            parent_id=parent_id,
        )

    def run_app_by_params(
        self,
        org_id: str,
        app_id: str,
        input: Mapping[str, Any],
        version_id: Optional[str] = None,
        group_id: Optional[str] = None,
        parent_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        return self._apps.run_app_by_params(org_id, app_id, input, version_id, group_id, parent_id)

    def set_app_defaults(self, **defaults: Optional[str]) -> None:
        self._apps.set_defaults(**defaults)

    def get_app_defaults(self) -> AppDefaults:
        return self._apps.get_defaults()

    def test_connection(self) -> bool:
        """Return True when the API answers a trivial request."""
        defaults = self._queries.get_defaults()
        try:
            if defaults.org_id and defaults.kb_id:
                self.query(sql="SELECT 1")
            else:
                self._api.get("/")
        except TimbalApiError as exc:
            logger.warning("Connection test failed: %s", exc)
            return False
        return True

    def close(self) -> None:
        self._api.close()


__all__ = ["Timbal"]
