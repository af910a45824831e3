"""HTTP dispatcher for the Timbal platform API.

:class:`ApiClient` owns the configuration and turns every call into exactly
one outcome: an :class:`~timbal_sdk.models.ApiResponse` or a raised
:class:`~timbal_sdk.errors.TimbalApiError`. Timeouts, connection failures and
5xx responses are retried with linear backoff (``retry_delay * n`` before the
n-th retry); everything else fails on the first attempt.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import httpx

from .bodies import BinaryBody, Body, FilePart, JsonBody, MultipartBody, TextBody
from .config import ClientConfig, merge_config
from .errors import (
    ClientError,
    ErrorCode,
    NetworkError,
    ParseError,
    RequestTimeoutError,
    ServerError,
    TimbalApiError,
)
from .metrics import REQUEST_ATTEMPTS, REQUEST_FAILURES, REQUEST_LATENCY, REQUEST_RETRIES
from .models import ApiResponse

logger = logging.getLogger(__name__)

USER_AGENT = "timbal-sdk-python/0.1.0"


class ApiClient:
    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config
        self._client = httpx.Client(timeout=config.timeout, transport=transport)
        self._sleep = sleep

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def get_config(self) -> ClientConfig:
        return self._config

    def update_config(self, **changes: Any) -> None:
        """Merge ``changes`` into the configuration.

        Requests already in flight keep the configuration they started with.
        """
        self._config = merge_config(self._config, **changes)
        logger.debug("Client config updated fields=%s", sorted(k for k, v in changes.items() if v is not None))

    def request(
        self,
        path: str,
        *,
        method: str = "GET",
        body: Optional[Body] = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> ApiResponse[Any]:
        if not path:
            raise ValueError("path cannot be empty")
        config = self._config
        method = method.upper()
        url = _build_url(config.base_url, path)
        request_headers = _build_headers(config, body, headers)
        body_kwargs = body.request_kwargs() if body is not None else {}
        query = {k: v for k, v in params.items() if v is not None} if params else None

        with REQUEST_LATENCY.labels(method=method).time():
            retry_count = 0
            while True:
                logger.debug("Dispatching %s %s attempt=%d", method, url, retry_count + 1)
                cause: Optional[BaseException] = None
                try:
                    return self._send(config, method, url, request_headers, body_kwargs, query)
                except httpx.TimeoutException as exc:
                    failure: TimbalApiError = RequestTimeoutError("Request timeout", 0, ErrorCode.TIMEOUT_ERROR)
                    reason, cause = "timeout", exc
                except httpx.ConnectError as exc:
                    failure = NetworkError(f"Network error: {exc}", 0, ErrorCode.NETWORK_ERROR)
                    reason, cause = "network", exc
                except (httpx.RequestError, httpx.InvalidURL) as exc:
                    REQUEST_FAILURES.labels(kind="network").inc()
                    raise NetworkError(f"Network error: {exc}", 0, ErrorCode.NETWORK_ERROR) from exc
                except ServerError as exc:
                    failure, reason = exc, "server"
                except TimbalApiError as exc:
                    REQUEST_FAILURES.labels(kind=_failure_kind(exc)).inc()
                    raise

                if retry_count >= config.retry_attempts:
                    logger.error(
                        "Request %s %s failed after %d attempt(s): %s",
                        method,
                        url,
                        retry_count + 1,
                        failure.message,
                    )
                    REQUEST_FAILURES.labels(kind=reason).inc()
                    if cause is not None:
                        raise failure from cause
                    raise failure

                retry_count += 1
                delay = config.retry_delay * retry_count
                logger.warning(
                    "Retrying %s %s after %s (retry %d/%d) in %.2fs",
                    method,
                    url,
                    reason,
                    retry_count,
                    config.retry_attempts,
                    delay,
                )
                REQUEST_RETRIES.labels(reason=reason).inc()
                self._sleep(delay)

    def _send(
        self,
        config: ClientConfig,
        method: str,
        url: str,
        headers: httpx.Headers,
        body_kwargs: Dict[str, Any],
        params: Optional[Dict[str, Any]],
    ) -> ApiResponse[Any]:
        REQUEST_ATTEMPTS.labels(method=method).inc()
        deadline = time.monotonic() + config.timeout
        request = self._client.build_request(
            method,
            url,
            headers=headers,
            params=params,
            timeout=config.timeout,
            **body_kwargs,
        )
        response = self._client.send(request, stream=True)
        try:
            content = _read_before(response, deadline)
        finally:
            response.close()
        if not response.is_success:
            raise _error_from_response(response, content)
        return ApiResponse(data=_decode_body(response, content), success=True, status_code=response.status_code)

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> ApiResponse[Any]:
        return self.request(path, method="GET", params=params)

    def post(self, path: str, data: Any = None) -> ApiResponse[Any]:
        return self.request(path, method="POST", body=_json_or_none(data))

    def put(self, path: str, data: Any = None) -> ApiResponse[Any]:
        return self.request(path, method="PUT", body=_json_or_none(data))

    def patch(self, path: str, data: Any = None) -> ApiResponse[Any]:
        return self.request(path, method="PATCH", body=_json_or_none(data))

    def delete(self, path: str, params: Optional[Mapping[str, Any]] = None) -> ApiResponse[Any]:
        return self.request(path, method="DELETE", params=params)

    def post_form_data(
        self,
        path: str,
        fields: Optional[Mapping[str, str]] = None,
        files: Optional[Mapping[str, FilePart]] = None,
    ) -> ApiResponse[Any]:
        return self.request(path, method="POST", body=MultipartBody(fields=fields or {}, files=files or {}))

    def post_file(self, path: str, data: bytes, content_type: Optional[str] = None) -> ApiResponse[Any]:
        return self.request(path, method="POST", body=BinaryBody(data, content_type))

    def post_text(self, path: str, text: str, content_type: str = "text/plain") -> ApiResponse[Any]:
        return self.request(path, method="POST", body=TextBody(text, content_type))

    def close(self) -> None:
        self._client.close()


def _json_or_none(data: Any) -> Optional[Body]:
    return JsonBody(data) if data is not None else None


def _build_url(base_url: str, path: str) -> str:
    if not path.startswith("/"):
        path = "/" + path
    return base_url.rstrip("/") + path


def _build_headers(
    config: ClientConfig,
    body: Optional[Body],
    extra: Optional[Mapping[str, str]],
) -> httpx.Headers:
    headers = httpx.Headers(
        {
            "Authorization": f"Bearer {config.api_key}",
            "User-Agent": USER_AGENT,
        }
    )
    if extra:
        headers.update(extra)
    if body is not None:
        content_type = body.default_content_type()
        if content_type and "content-type" not in headers:
            headers["Content-Type"] = content_type
    return headers


def _read_before(response: httpx.Response, deadline: float) -> bytes:
    """Read the streamed body, giving up once the attempt deadline passes."""
    chunks = []
    _check_deadline(response.request, deadline)
    for chunk in response.iter_bytes():
        chunks.append(chunk)
        _check_deadline(response.request, deadline)
    return b"".join(chunks)


def _check_deadline(request: httpx.Request, deadline: float) -> None:
    if time.monotonic() > deadline:
        raise httpx.ReadTimeout("Attempt deadline exceeded", request=request)


def _decode_body(response: httpx.Response, content: bytes) -> Any:
    if not content:
        return None
    try:
        return json.loads(content)
    except ValueError as exc:
        raise ParseError(
            f"Invalid JSON in response body: {exc}",
            response.status_code,
            ErrorCode.PARSE_ERROR,
        ) from exc


def _parse_error_body(
    response: httpx.Response,
    content: bytes,
) -> Tuple[str, Optional[str], Optional[Dict[str, Any]]]:
    fallback = response.reason_phrase or "Unknown error"
    try:
        payload = json.loads(content)
    except ValueError:
        return fallback, None, None
    if not isinstance(payload, dict):
        return fallback, None, None
    message = payload.get("message") or payload.get("error") or "Unknown error"
    return str(message), payload.get("code"), payload.get("details")


def _error_from_response(response: httpx.Response, content: bytes) -> TimbalApiError:
    message, code, details = _parse_error_body(response, content)
    status = response.status_code
    if status >= 500:
        error_cls = ServerError
    elif status >= 400:
        error_cls = ClientError
    else:
        error_cls = TimbalApiError
    return error_cls(message, status, code, details)


def _failure_kind(exc: TimbalApiError) -> str:
    if isinstance(exc, ParseError):
        return "parse"
    if isinstance(exc, ClientError):
        return "client"
    return "api"


__all__ = ["ApiClient", "USER_AGENT"]
