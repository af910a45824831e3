"""Configuration objects for the Timbal Python SDK."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any

DEFAULT_BASE_URL = "https://api.timbal.ai"


@dataclass(frozen=True)
class ClientConfig:
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    retry_attempts: int = 3
    retry_delay: float = 1.0

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("api_key is required")
        if not self.base_url:
            raise ValueError("base_url cannot be empty")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.retry_attempts < 0:
            raise ValueError("retry_attempts must be >= 0")
        if self.retry_delay < 0:
            raise ValueError("retry_delay must be >= 0")

    @classmethod
    def from_env(cls) -> "ClientConfig":
        api_key = os.environ.get("TIMBAL_API_KEY")
        if not api_key:
            raise ValueError("TIMBAL_API_KEY must be set")
        return cls(
            api_key=api_key,
            base_url=os.environ.get("TIMBAL_BASE_URL", DEFAULT_BASE_URL),
            timeout=float(os.environ.get("TIMBAL_TIMEOUT", "30")),
            retry_attempts=int(os.environ.get("TIMBAL_RETRY_ATTEMPTS", "3")),
            retry_delay=float(os.environ.get("TIMBAL_RETRY_DELAY", "1")),
        )


_FIELDS = frozenset(f.name for f in fields(ClientConfig))


def merge_config(config: ClientConfig, **changes: Any) -> ClientConfig:
    """Return a copy of ``config`` with the non-``None`` ``changes`` applied.

    Only the named configuration fields are accepted; anything else is a
    ``TypeError`` so typos do not silently disappear.
    """
    unknown = set(changes) - _FIELDS
    if unknown:
        raise TypeError(f"Unknown config field(s): {', '.join(sorted(unknown))}")
    updates = {key: value for key, value in changes.items() if value is not None}
    if not updates:
        return config
    return replace(config, **updates)


__all__ = ["ClientConfig", "DEFAULT_BASE_URL", "merge_config"]
