from __future__ import annotations

import pytest

from timbal_sdk.config import DEFAULT_BASE_URL, ClientConfig, merge_config


def test_defaults() -> None:
    cfg = ClientConfig(api_key="key")
    assert cfg.base_url == DEFAULT_BASE_URL
    assert cfg.timeout == 30.0
    assert cfg.retry_attempts == 3
    assert cfg.retry_delay == 1.0


@pytest.mark.parametrize(
    "overrides",
    [
        {"api_key": ""},
        {"base_url": ""},
        {"timeout": 0},
        {"retry_attempts": -1},
        {"retry_delay": -0.5},
    ],
)
def test_invalid_values_rejected(overrides: dict) -> None:
    values = {"api_key": "key"}
    values.update(overrides)
    with pytest.raises(ValueError):
        ClientConfig(**values)


def test_api_key_is_required() -> None:
    with pytest.raises(ValueError, match="api_key is required"):
        ClientConfig()


def test_merge_returns_new_instance() -> None:
    original = ClientConfig(api_key="key")
    merged = merge_config(original, timeout=5.0, retry_attempts=None)

    assert merged is not original
    assert merged.timeout == 5.0
    assert merged.retry_attempts == 3
    assert original.timeout == 30.0


def test_merge_without_changes_keeps_instance() -> None:
    original = ClientConfig(api_key="key")
    assert merge_config(original) is original


def test_merge_validates_result() -> None:
    with pytest.raises(ValueError):
        merge_config(ClientConfig(api_key="key"), retry_attempts=-2)


def test_merge_rejects_unknown_fields() -> None:
    with pytest.raises(TypeError):
        merge_config(ClientConfig(api_key="key"), headers={"X": "1"})


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMBAL_API_KEY", "env-key")
    monkeypatch.setenv("TIMBAL_BASE_URL", "https://staging.example.com")
    monkeypatch.setenv("TIMBAL_TIMEOUT", "12.5")
    monkeypatch.setenv("TIMBAL_RETRY_ATTEMPTS", "0")
    monkeypatch.delenv("TIMBAL_RETRY_DELAY", raising=False)

    cfg = ClientConfig.from_env()

    assert cfg.api_key == "env-key"
    assert cfg.base_url == "https://staging.example.com"
    assert cfg.timeout == 12.5
    assert cfg.retry_attempts == 0
    assert cfg.retry_delay == 1.0


def test_from_env_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TIMBAL_API_KEY", raising=False)
    with pytest.raises(ValueError):
        ClientConfig.from_env()
