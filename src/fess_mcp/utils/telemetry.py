"""Tracing for the MCP server.

Spans go through the OpenTelemetry API, which is a no-op until
:func:`configure_telemetry` installs an SDK tracer provider. The dispatcher
opens ``mcp.dispatch`` per request and ``mcp.tool`` per tool call::

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("mcp.dispatch") as span:
        span.set_attribute(ATTR_RPC_METHOD, method)

``fess-mcp serve --telemetry`` calls :func:`configure_telemetry`; it needs the
``otel`` extra (``pip install fess-mcp[otel]``).
"""

from __future__ import annotations

import sys
from typing import Any

from opentelemetry import trace

ATTR_RPC_METHOD = "fess_mcp.rpc.method"
ATTR_TOOL_NAME = "fess_mcp.tool.name"
ATTR_ERROR_CODE = "fess_mcp.error.code"
ATTR_RESULT_COUNT = "fess_mcp.search.result_count"

_INSTRUMENTATION_NAME = "fess_mcp"
_SDK_HINT = "Install it with: pip install fess-mcp[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return the tracer for *name* (a no-op tracer without the SDK)."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def record_result_count(count: int) -> None:
    """Attach the number of returned hits to the active span."""
    trace.get_current_span().set_attribute(ATTR_RESULT_COUNT, count)


def configure_telemetry(
    *,
    service_name: str = "fess-mcp",
    service_version: str | None = None,
    export_to_stderr: bool = False,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider for this process.

    Console spans are written to stderr because stdout carries the JSON-RPC
    stream. With *otlp_endpoint* set, spans are also batched to that
    OTLP/gRPC collector.

    Raises:
        ImportError: If ``opentelemetry-sdk`` (or, for OTLP, the exporter)
            is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
    except ImportError as exc:
        msg = f"opentelemetry-sdk is required for configure_telemetry(). {_SDK_HINT}"
        raise ImportError(msg) from exc

    attributes: dict[str, str] = {"service.name": service_name}
    if service_version:
        attributes["service.version"] = service_version
    provider = TracerProvider(resource=Resource.create(attributes))  # pyright: ignore[reportUnknownVariableType,reportUnknownMemberType]

    for processor in _span_processors(export_to_stderr, otlp_endpoint):
        provider.add_span_processor(processor)  # pyright: ignore[reportUnknownMemberType]

    trace.set_tracer_provider(provider)  # pyright: ignore[reportUnknownArgumentType]


def _span_processors(export_to_stderr: bool, otlp_endpoint: str | None) -> list[Any]:
    from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        BatchSpanProcessor,
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )

    processors: list[Any] = []
    if export_to_stderr:
        processors.append(SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))
    if otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        except ImportError as exc:
            msg = f"opentelemetry-exporter-otlp is required for OTLP export. {_SDK_HINT}"
            raise ImportError(msg) from exc
        processors.append(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
    return processors
