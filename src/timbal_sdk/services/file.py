"""File uploads to an organization."""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..client import ApiClient
from ..models import UploadedFile
from .base import merge_defaults, require, resolve

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class FileDefaults:
    org_id: Optional[str] = None


class FileService:
    def __init__(self, client: ApiClient, defaults: Optional[FileDefaults] = None) -> None:
        self._client = client
        self._defaults = defaults or FileDefaults()

    def upload_file(self, file_path: Union[str, Path], org_id: Optional[str] = None) -> UploadedFile:
        org_id = require("org_id", resolve(org_id, self._defaults.org_id))
        require("file_path", file_path, has_default=False)

        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        content_type = mimetypes.guess_type(path.name)[0] or DEFAULT_CONTENT_TYPE
        return self._upload(org_id, path.name, path.read_bytes(), content_type)

    def upload_file_by_params(self, org_id: str, file_path: Union[str, Path]) -> UploadedFile:
        return self.upload_file(file_path, org_id=org_id)

    def upload_file_from_bytes(
        self,
        data: bytes,
        filename: str,
        org_id: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> UploadedFile:
        org_id = require("org_id", resolve(org_id, self._defaults.org_id))
        if data is None:
            raise ValueError("data is required.")
        require("filename", filename, has_default=False)
        return self._upload(org_id, filename, bytes(data), content_type or DEFAULT_CONTENT_TYPE)

    def _upload(self, org_id: str, filename: str, data: bytes, content_type: str) -> UploadedFile:
        response = self._client.post_form_data(
            f"orgs/{org_id}/files",
            files={"file": (filename, data, content_type)},
        )
        uploaded = UploadedFile.model_validate(response.data)
        logger.info("Uploaded %s (%d bytes) to org=%s as file id=%s", filename, len(data), org_id, uploaded.id)
        return uploaded

    def set_defaults(self, org_id: Optional[str] = None) -> None:
        self._defaults = merge_defaults(self._defaults, org_id=org_id)

    def get_defaults(self) -> FileDefaults:
        return self._defaults


__all__ = ["FileDefaults", "FileService"]
