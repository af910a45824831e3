"""Response envelope and pydantic payload models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    data: T
    success: bool
    status_code: int


class Column(BaseModel):
    name: str = Field(..., min_length=1)
    data_type: str = Field(..., min_length=1)
    default_value: Optional[str] = None
    is_nullable: bool = True
    is_unique: bool = False
    is_primary: bool = False
    comment: Optional[str] = None


class UploadedFile(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    content_type: Optional[str] = None
    content_length: Optional[int] = None
    created_at: Optional[str] = None
    expires_at: Optional[str] = None
    url: Optional[str] = None


class AppRunRequest(BaseModel):
    input: Dict[str, Any]
    version_id: Optional[str] = None
    group_id: Optional[str] = None
    parent_id: Optional[str] = None


__all__ = ["ApiResponse", "AppRunRequest", "Column", "UploadedFile"]
