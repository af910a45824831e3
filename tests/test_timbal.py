from __future__ import annotations

import json
from typing import List

import httpx
import pytest

from timbal_sdk import ClientConfig, Timbal


def make_timbal(handler, **overrides) -> Timbal:
    values = dict(api_key="test-key", base_url="https://api.test.com", retry_attempts=0)
    values.update(overrides)
    return Timbal(transport=httpx.MockTransport(handler), **values)


def test_initializes_from_keywords_or_config() -> None:
    timbal = make_timbal(lambda request: httpx.Response(200, json={}))
    cfg = timbal.get_config()
    assert cfg.api_key == "test-key"
    assert cfg.base_url == "https://api.test.com"

    other = Timbal(ClientConfig(api_key="k"))
    assert other.get_config().api_key == "k"
    other.close()

    with pytest.raises(TypeError):
        Timbal(ClientConfig(api_key="k"), timeout=3.0)


def test_missing_api_key_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="api_key is required"):
        Timbal()


def test_update_config_is_visible_through_client() -> None:
    timbal = make_timbal(lambda request: httpx.Response(200, json={}))
    timbal.update_config(timeout=15.0)

    assert timbal.get_config().timeout == 15.0
    assert timbal.get_api_client().get_config().timeout == 15.0


def test_test_connection_uses_query_when_defaults_set() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"?column?": 1}])

    timbal = make_timbal(handler)
    timbal.set_query_defaults(org_id="1", kb_id="2")

    assert timbal.test_connection() is True
    assert seen[0].url.path == "/orgs/1/kbs/2/query"
    assert json.loads(seen[0].content) == {"sql": "SELECT 1"}


def test_test_connection_falls_back_to_root() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"status": "healthy"})

    timbal = make_timbal(handler)

    assert timbal.test_connection() is True
    assert seen[0].method == "GET"
    assert seen[0].url.path == "/"


def test_test_connection_reports_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Network error", request=request)

    timbal = make_timbal(handler)

    assert timbal.test_connection() is False


def test_defaults_are_tracked_per_service() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"result": "ok"})

    with make_timbal(handler) as timbal:
        timbal.set_table_defaults(org_id="t-org", kb_id="t-kb")
        timbal.set_app_defaults(org_id="a-org")
        timbal.set_file_defaults(org_id="f-org")

        assert timbal.get_query_defaults().org_id is None
        assert timbal.get_table_defaults().kb_id == "t-kb"
        assert timbal.get_file_defaults().org_id == "f-org"

        timbal.delete_table("docs")
        timbal.run_app("app1", {"q": "hi"})

    assert seen[0].url.path == "/orgs/t-org/kbs/t-kb/tables/docs"
    assert seen[1].url.path == "/orgs/a-org/apps/app1/runs/collect"
    assert timbal.get_api_client()._client.is_closed
