"""Logging and tracing setup for the auto-configuration bootstrap."""

from __future__ import annotations

import logging
import sys
from typing import Dict, Optional

import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from structlog.contextvars import bind_contextvars


_logging_configured = False


def resolve_log_level(level: str | int | None) -> int:
    """Numeric level for ``WAVEFRONT_LOG_LEVEL``; unknown names fall back to INFO."""

    if isinstance(level, int):
        return level
    if level is None:
        return logging.INFO
    return logging.getLevelNamesMapping().get(level.strip().upper(), logging.INFO)


def configure_logging(service_name: str, level: str | int | None = None) -> None:
    """Route structlog through stdlib logging on stderr as JSON lines.

    stdout stays free for the CLI's own output.
    """

    global _logging_configured
    numeric_level = resolve_log_level(level)
    if _logging_configured:
        logging.getLogger().setLevel(numeric_level)
    else:
        logging.basicConfig(level=numeric_level, format="%(message)s", stream=sys.stderr)
        _logging_configured = True

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.EventRenamer("message"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    bind_contextvars(service=service_name)


def parse_otlp_headers(headers: str | None) -> Dict[str, str]:
    """Parse ``key=value,key=value`` as accepted by ``WAVEFRONT_OTEL_EXPORTER_HEADERS``."""

    pairs = (item.partition("=") for item in (headers or "").split(","))
    return {key.strip(): value.strip() for key, _, value in pairs if key.strip() and value.strip()}


def configure_tracing(
    service_name: str,
    endpoint: Optional[str] = None,
    headers: Optional[str] = None,
    sampler_ratio: float = 1.0,
) -> Optional[TracerProvider]:
    """Export negotiation spans over OTLP/HTTP when an endpoint is configured.

    Without an endpoint, or when the host already installed an SDK provider,
    nothing is changed and ``None`` is returned.
    """

    if not endpoint or isinstance(trace.get_tracer_provider(), TracerProvider):
        return None

    ratio = max(0.0, min(1.0, sampler_ratio))
    provider = TracerProvider(
        resource=Resource.create({"service.name": service_name}),
        sampler=ParentBased(TraceIdRatioBased(ratio)),
    )
    exporter = OTLPSpanExporter(endpoint=endpoint, headers=parse_otlp_headers(headers))
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    return provider
