"""Request body variants understood by the dispatcher.

Each variant knows the content type it implies (if any) and how to hand
itself to httpx, so the dispatcher never has to inspect payload types.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

JSON_CONTENT_TYPE = "application/json"

# (filename, content, content_type)
FilePart = Tuple[str, bytes, str]


class Body(ABC):
    @abstractmethod
    def default_content_type(self) -> Optional[str]:
        """Content type to send when the caller supplied none."""

    @abstractmethod
    def request_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``httpx.Client.build_request``."""


@dataclass(frozen=True)
class JsonBody(Body):
    value: Any

    def default_content_type(self) -> Optional[str]:
        return JSON_CONTENT_TYPE

    def request_kwargs(self) -> Dict[str, Any]:
        return {"content": json.dumps(self.value, separators=(",", ":"))}


@dataclass(frozen=True)
class TextBody(Body):
    """Raw text. Without an explicit type it is assumed to be serialized JSON."""

    text: str
    content_type: Optional[str] = None

    def default_content_type(self) -> Optional[str]:
        return self.content_type or JSON_CONTENT_TYPE

    def request_kwargs(self) -> Dict[str, Any]:
        return {"content": self.text.encode("utf-8")}


@dataclass(frozen=True)
class BinaryBody(Body):
    data: bytes
    content_type: Optional[str] = None

    def default_content_type(self) -> Optional[str]:
        return self.content_type

    def request_kwargs(self) -> Dict[str, Any]:
        return {"content": bytes(self.data)}


@dataclass(frozen=True)
class MultipartBody(Body):
    """multipart/form-data; httpx generates the boundary and the header."""

    fields: Mapping[str, str] = field(default_factory=dict)
    files: Mapping[str, FilePart] = field(default_factory=dict)

    def default_content_type(self) -> Optional[str]:
        return None

    def request_kwargs(self) -> Dict[str, Any]:
        if self.files:
            kwargs: Dict[str, Any] = {"files": dict(self.files)}
            if self.fields:
                kwargs["data"] = dict(self.fields)
            return kwargs
        if self.fields:
            # httpx only builds multipart when file parts exist; nameless parts are plain fields
            return {"files": {name: (None, str(value).encode("utf-8")) for name, value in self.fields.items()}}
        return {}


__all__ = ["Body", "BinaryBody", "FilePart", "JSON_CONTENT_TYPE", "JsonBody", "MultipartBody", "TextBody"]
