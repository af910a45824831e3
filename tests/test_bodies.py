from __future__ import annotations

import pytest

from timbal_sdk.bodies import BinaryBody, Body, JsonBody, MultipartBody, TextBody


def test_json_body_is_compact() -> None:
    body = JsonBody({"sql": "SELECT 1", "n": [1, 2]})
    assert body.default_content_type() == "application/json"
    assert body.request_kwargs() == {"content": '{"sql":"SELECT 1","n":[1,2]}'}


def test_json_body_keeps_falsy_values() -> None:
    assert JsonBody({}).request_kwargs() == {"content": "{}"}
    assert JsonBody(0).request_kwargs() == {"content": "0"}


def test_text_and_binary_content_types() -> None:
    assert TextBody("x").default_content_type() == "application/json"
    assert TextBody("x", "text/csv").default_content_type() == "text/csv"
    assert BinaryBody(b"x").default_content_type() is None
    assert BinaryBody(bytearray(b"ab"), "image/png").request_kwargs() == {"content": b"ab"}


def test_multipart_body_never_declares_content_type() -> None:
    body = MultipartBody(fields={"purpose": "kb"}, files={"file": ("a.txt", b"hi", "text/plain")})
    assert body.default_content_type() is None
    assert body.request_kwargs() == {
        "data": {"purpose": "kb"},
        "files": {"file": ("a.txt", b"hi", "text/plain")},
    }
    assert MultipartBody().request_kwargs() == {}


def test_fields_only_multipart_uses_nameless_parts() -> None:
    body = MultipartBody(fields={"purpose": "kb", "size": 3})
    assert body.request_kwargs() == {
        "files": {"purpose": (None, b"kb"), "size": (None, b"3")},
    }


def test_body_base_is_abstract() -> None:
    with pytest.raises(TypeError):
        Body()  # type: ignore[abstract]
