"""Helpers shared by the resource services."""

from __future__ import annotations

from dataclasses import fields, replace
from typing import Any, Optional, TypeVar

D = TypeVar("D")


def resolve(value: Optional[Any], default: Optional[Any]) -> Optional[Any]:
    return value if value is not None else default


def require(name: str, value: Optional[Any], *, has_default: bool = True) -> Any:
    if not value:
        if has_default:
            raise ValueError(f"{name} is required. Provide it in the method call or set a default.")
        raise ValueError(f"{name} is required.")
    return value


def merge_defaults(current: D, **changes: Any) -> D:
    """Overwrite only the fields given as non-``None``."""
    known = {f.name for f in fields(current)}  # type: ignore[arg-type]
    unknown = set(changes) - known
    if unknown:
        raise TypeError(f"Unknown default(s): {', '.join(sorted(unknown))}")
    updates = {key: value for key, value in changes.items() if value is not None}
    return replace(current, **updates) if updates else current  # type: ignore[type-var]


__all__ = ["merge_defaults", "require", "resolve"]
