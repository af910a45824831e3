"""Prometheus instruments for request dispatch."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_ATTEMPTS = Counter(
    "timbal_sdk_request_attempts_total",
    "HTTP attempts issued by the SDK, retries included",
    ["method"],
)
REQUEST_RETRIES = Counter(
    "timbal_sdk_request_retries_total",
    "Retries scheduled after a transient failure",
    ["reason"],
)
REQUEST_FAILURES = Counter(
    "timbal_sdk_request_failures_total",
    "Requests that ended in an error",
    ["kind"],
)
REQUEST_LATENCY = Histogram(
    "timbal_sdk_request_latency_seconds",
    "Wall time of a request including retries and backoff",
    ["method"],
)

__all__ = ["REQUEST_ATTEMPTS", "REQUEST_FAILURES", "REQUEST_LATENCY", "REQUEST_RETRIES"]
