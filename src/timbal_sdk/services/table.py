"""Knowledge base table management and CSV import."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Literal, Mapping, Optional, Union

from ..bodies import TextBody
from ..client import ApiClient
from ..models import Column
from .base import merge_defaults, require, resolve

logger = logging.getLogger(__name__)

ImportMode = Literal["append", "overwrite"]
_IMPORT_MODES = ("append", "overwrite")


@dataclass(frozen=True)
class TableDefaults:
    org_id: Optional[str] = None
    kb_id: Optional[str] = None


class TableService:
    def __init__(self, client: ApiClient, defaults: Optional[TableDefaults] = None) -> None:
        self._client = client
        self._defaults = defaults or TableDefaults()

    def _scope(self, org_id: Optional[str], kb_id: Optional[str]) -> str:
        org_id = require("org_id", resolve(org_id, self._defaults.org_id))
        kb_id = require("kb_id", resolve(kb_id, self._defaults.kb_id))
        return f"orgs/{org_id}/kbs/{kb_id}/tables"

    def create_table(
        self,
        name: str,
        columns: Iterable[Union[Column, Mapping[str, Any]]],
        org_id: Optional[str] = None,
        kb_id: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> None:
        base = self._scope(org_id, kb_id)
        require("name", name, has_default=False)
        parsed = _parse_columns(columns)
        if not parsed:
            raise ValueError("columns are required and cannot be empty.")

        payload = {
            "name": name,
            "columns": [column.model_dump() for column in parsed],
            "comment": comment,
        }
        self._client.post(base, payload)
        logger.info("Created table %s with %d column(s)", name, len(parsed))

    def create_table_by_params(
        self,
        org_id: str,
        kb_id: str,
        name: str,
        columns: Iterable[Union[Column, Mapping[str, Any]]],
        comment: Optional[str] = None,
    ) -> None:
        self.create_table(name, columns, org_id=org_id, kb_id=kb_id, comment=comment)

    def import_csv(
        self,
        table_name: str,
        csv_path: Union[str, Path],
        org_id: Optional[str] = None,
        kb_id: Optional[str] = None,
        mode: ImportMode = "overwrite",
    ) -> None:
        """Load a CSV file into an existing table.

        The file must match the table schema. ``mode="overwrite"`` replaces the
        table contents, ``mode="append"`` adds rows.
        """
        base = self._scope(org_id, kb_id)
        require("table_name", table_name, has_default=False)
        require("csv_path", csv_path, has_default=False)
        if mode not in _IMPORT_MODES:
            raise ValueError(f"mode must be one of {_IMPORT_MODES}, got {mode!r}")

        path = Path(csv_path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        csv_data = path.read_text(encoding="utf-8")

        self._client.request(
            f"{base}/{table_name}/csv",
            method="POST",
            body=TextBody(csv_data, "text/csv"),
            params={"mode": mode},
        )
        logger.info("Imported %s into table %s mode=%s", path.name, table_name, mode)

    def import_csv_by_params(
        self,
        org_id: str,
        kb_id: str,
        table_name: str,
        csv_path: Union[str, Path],
        mode: ImportMode = "overwrite",
    ) -> None:
        self.import_csv(table_name, csv_path, org_id=org_id, kb_id=kb_id, mode=mode)

    def delete_table(
        self,
        name: str,
        org_id: Optional[str] = None,
        kb_id: Optional[str] = None,
        cascade: bool = False,
    ) -> None:
        base = self._scope(org_id, kb_id)
        require("name", name, has_default=False)
        params = {"cascade": "true"} if cascade else None
        self._client.delete(f"{base}/{name}", params=params)
        logger.info("Deleted table %s cascade=%s", name, cascade)

    def delete_table_by_params(self, org_id: str, kb_id: str, name: str, cascade: bool = False) -> None:
        self.delete_table(name, org_id=org_id, kb_id=kb_id, cascade=cascade)

    def set_defaults(self, org_id: Optional[str] = None, kb_id: Optional[str] = None) -> None:
        self._defaults = merge_defaults(self._defaults, org_id=org_id, kb_id=kb_id)

    def get_defaults(self) -> TableDefaults:
        return self._defaults


def _parse_columns(columns: Optional[Iterable[Union[Column, Mapping[str, Any]]]]) -> List[Column]:
    if not columns:
        return []
    return [c if isinstance(c, Column) else Column.model_validate(dict(c)) for c in columns]


__all__ = ["ImportMode", "TableDefaults", "TableService"]
