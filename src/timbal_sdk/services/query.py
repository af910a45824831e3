"""SQL queries against knowledge base tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..client import ApiClient
from .base import merge_defaults, require, resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryDefaults:
    org_id: Optional[str] = None
    kb_id: Optional[str] = None
    sql: Optional[str] = None


class QueryService:
    def __init__(self, client: ApiClient, defaults: Optional[QueryDefaults] = None) -> None:
        self._client = client
        self._defaults = defaults or QueryDefaults()

    def query(
        self,
        org_id: Optional[str] = None,
        kb_id: Optional[str] = None,
        sql: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Run a PostgreSQL-dialect query and return the rows as dicts.

        Identifiers are case sensitive on the server side: mixed-case table or
        column names must be double quoted, e.g. ``SELECT COUNT(*) FROM "Documents"``.
        """
        org_id = require("org_id", resolve(org_id, self._defaults.org_id))
        kb_id = require("kb_id", resolve(kb_id, self._defaults.kb_id))
        sql = require("sql", resolve(sql, self._defaults.sql))

        response = self._client.post(f"orgs/{org_id}/kbs/{kb_id}/query", {"sql": sql})
        rows = response.data or []
        logger.debug("Query on org=%s kb=%s returned %d row(s)", org_id, kb_id, len(rows))
        return rows

    def query_by_params(self, org_id: str, kb_id: str, sql: str) -> List[Dict[str, Any]]:
        return self.query(org_id=org_id, kb_id=kb_id, sql=sql)

    def set_defaults(
        self,
        org_id: Optional[str] = None,
        kb_id: Optional[str] = None,
        sql: Optional[str] = None,
    ) -> None:
        self._defaults = merge_defaults(self._defaults, org_id=org_id, kb_id=kb_id, sql=sql)

    def get_defaults(self) -> QueryDefaults:
        return self._defaults


__all__ = ["QueryDefaults", "QueryService"]
