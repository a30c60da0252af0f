"""OpenTelemetry tracing helpers for fsmcp.

The rest of the codebase calls ``get_tracer()`` without caring whether the
SDK is installed. Until :func:`configure_telemetry` runs, the API hands out
no-op tracers.

Usage::

    from fsmcp.utils.telemetry import get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("rpc.dispatch") as span:
        span.set_attribute(ATTR_RPC_METHOD, "ping")

Real tracing needs the ``otel`` extra: ``pip install fsmcp[otel]``. Spans are
exported to stderr; stdout carries protocol traffic only.
"""

from __future__ import annotations

import sys
from typing import Any

from opentelemetry import trace

# ---------------------------------------------------------------------------
# Semantic attribute keys used throughout fsmcp instrumentation
# ---------------------------------------------------------------------------

ATTR_RPC_METHOD = "fsmcp.rpc.method"
ATTR_RPC_ID = "fsmcp.rpc.id"
ATTR_RPC_OUTCOME = "fsmcp.rpc.outcome"
ATTR_RPC_ERROR_CODE = "fsmcp.rpc.error_code"

_INSTRUMENTATION_NAME = "fsmcp"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "fsmcp",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Configure OpenTelemetry tracing (requires ``fsmcp[otel]``).

    Parameters
    ----------
    service_name:
        The ``service.name`` resource attribute.
    export_to_console:
        If ``True``, export spans as JSON to stderr.
    otlp_endpoint:
        If set, export spans via OTLP/gRPC to this endpoint.

    Raises
    ------
    ImportError
        If the ``opentelemetry-sdk`` package is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required for configure_telemetry(). "
            "Install it with: pip install fsmcp[otel]"
        )
        raise ImportError(msg) from exc

    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)

    if export_to_console:
        _add_console_exporter(provider, SimpleSpanProcessor)

    if otlp_endpoint:
        _add_otlp_exporter(provider, BatchSpanProcessor, otlp_endpoint)

    trace.set_tracer_provider(provider)


def _add_console_exporter(provider: Any, processor_cls: Any) -> None:
    """Attach the console exporter (JSON to stderr)."""
    from opentelemetry.sdk.trace.export import ConsoleSpanExporter

    provider.add_span_processor(processor_cls(ConsoleSpanExporter(out=sys.stderr)))


def _add_otlp_exporter(provider: Any, processor_cls: Any, endpoint: str) -> None:
    """Attach the OTLP gRPC exporter."""
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
    except ImportError as exc:
        msg = (
            "opentelemetry-exporter-otlp is required for OTLP export. "
            "Install it with: pip install fsmcp[otel]"
        )
        raise ImportError(msg) from exc

    provider.add_span_processor(processor_cls(OTLPSpanExporter(endpoint=endpoint)))
