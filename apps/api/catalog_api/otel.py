from __future__ import annotations

from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from catalog_api.core.config import Settings


SERVICE_NAME = "catalog-api"

_provider: TracerProvider | None = None
_otlp_attached = False


def get_tracer_provider(service_name: str = SERVICE_NAME) -> TracerProvider:
    """Return the process tracer provider, registering it globally on first use."""
    global _provider

    if _provider is None:
        _provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
        trace.set_tracer_provider(_provider)
    return _provider


def setup_otel(settings: Settings) -> TracerProvider | None:
    global _otlp_attached

    if not settings.otel_enabled:
        return None

    provider = get_tracer_provider()
    if settings.otel_exporter_otlp_endpoint and not _otlp_attached:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otel_exporter_otlp_endpoint))
        )
        _otlp_attached = True
    return provider


def setup_inmemory_otel() -> InMemorySpanExporter:
    exporter = InMemorySpanExporter()
    get_tracer_provider().add_span_processor(SimpleSpanProcessor(exporter))
    return exporter


def correlation_request_hook(span, scope: dict[str, Any]) -> None:  # type: ignore[no-untyped-def]
    if span is None or not span.is_recording():
        return
    for name, value in scope.get("headers", []):
        if name == b"x-correlation-id":
            span.set_attribute("correlation_id", value.decode("utf-8"))
            return
