"""Run platform apps."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..client import ApiClient
from ..models import AppRunRequest
from .base import merge_defaults, require, resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppDefaults:
    org_id: Optional[str] = None


class AppService:
    def __init__(self, client: ApiClient, defaults: Optional[AppDefaults] = None) -> None:
        self._client = client
        self._defaults = defaults or AppDefaults()

    def run_app(
        self,
        app_id: str,
        input: Mapping[str, Any],
        org_id: Optional[str] = None,
        version_id: Optional[str] = None,
        group_id: Optional[str] = None,
        parent_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Run an app and wait for its collected output."""
        org_id = require("org_id", resolve(org_id, self._defaults.org_id))
        require("app_id", app_id, has_default=False)
        require("input", input, has_default=False)

        payload = AppRunRequest(
            input=dict(input),
            version_id=version_id,
            group_id=group_id,
            parent_id=parent_id,
        )
        response = self._client.post(
            f"orgs/{org_id}/apps/{app_id}/runs/collect",
            payload.model_dump(exclude_none=True),
        )
        logger.debug("App %s run on org=%s completed", app_id, org_id)
        return response.data

    def run_app_by_params(
        self,
        org_id: str,
        app_id: str,
        input: Mapping[str, Any],
        version_id: Optional[str] = None,
        group_id: Optional[str] = None,
        parent_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        return self.run_app(
            app_id,
            input,
            org_id=org_id,
            version_id=version_id,
            group_id=group_id,
            parent_id=parent_id,
        )

    def set_defaults(self, org_id: Optional[str] = None) -> None:
        self._defaults = merge_defaults(self._defaults, org_id=org_id)

    def get_defaults(self) -> AppDefaults:
        return self._defaults


__all__ = ["AppDefaults", "AppService"]
