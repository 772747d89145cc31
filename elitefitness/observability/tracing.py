"""OpenTelemetry tracing for page requests and backend form relays."""

from __future__ import annotations

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

# Probes, scrapes and assets only add noise to traces
EXCLUDED_URLS = "healthz,readyz,metrics,static"

_configured = False


def parse_headers(raw: str | None) -> dict[str, str] | None:
    """Parse ``key=value,key2=value2`` (OTEL_EXPORTER_OTLP_HEADERS style)."""
    if not raw:
        return None
    headers: dict[str, str] = {}
    for pair in raw.split(","):
        key, separator, value = pair.partition("=")
        if separator and key.strip():
            headers[key.strip()] = value.strip()
    return headers or None


def build_resource(service_name: str, version: str, environment: str) -> Resource:
    return Resource.create(
        {
            "service.name": service_name,
            "service.version": version,
            "deployment.environment": environment,
        }
    )


def configure_tracing(
    app,
    service_name: str,
    endpoint: str | None,
    headers: str | None,
    *,
    environment: str = "development",
) -> None:
    """Export spans for inbound page requests and outbound backend calls."""
    global _configured
    if _configured or not endpoint:
        return

    provider = TracerProvider(
        resource=build_resource(service_name, app.version, environment)
    )
    exporter = OTLPSpanExporter(endpoint=endpoint, headers=parse_headers(headers))
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    FastAPIInstrumentor.instrument_app(app, excluded_urls=EXCLUDED_URLS)
    HTTPXClientInstrumentor().instrument()
    _configured = True
