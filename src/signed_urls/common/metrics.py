"""Prometheus metrics for signing and verification."""

import os

from prometheus_client import (
    CollectorRegistry,
    Counter,
    generate_latest,
    multiprocess,
)
from starlette.requests import Request
from starlette.responses import Response

# === Counters ===

URLS_BUILT_TOTAL = Counter(
    "signed_urls_built_total",
    "Total number of signed URLs issued",
)

VERIFICATIONS_TOTAL = Counter(
    "signed_urls_verifications_total",
    "Total inbound signature verifications",
    ["outcome"],  # outcome: accepted, missing_signature, invalid_signature, config_error
)


# === Helper Functions ===


def record_build() -> None:
    """Record an issued signed URL."""
    URLS_BUILT_TOTAL.inc()


def record_verification(outcome: str) -> None:
    """Record a verification decision."""
    VERIFICATIONS_TOTAL.labels(outcome=outcome).inc()


# === HTTP Endpoint ===


async def metrics_endpoint(_request: Request) -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format.
    """
    multiproc_dir = os.environ.get("PROMETHEUS_MULTIPROC_DIR")
    if multiproc_dir:
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)  # type: ignore[no-untyped-call]
        return Response(
            generate_latest(registry),
            media_type="text/plain; version=0.0.4; charset=utf-8",
        )

    return Response(
        generate_latest(),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
