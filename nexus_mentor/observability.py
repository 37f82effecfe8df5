from __future__ import annotations

import logging
import time
from typing import Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from prometheus_client import Counter, Histogram


REQUESTS_TOTAL = Counter(
    "nexus_mentor_requests_total",
    "Total requests to the NEXUS Mentor API",
    ["endpoint", "status"],
)

REQUEST_LATENCY = Histogram(
    "nexus_mentor_request_latency_seconds",
    "Latency (seconds) per endpoint",
    ["endpoint"],
)

ROUTER_CALLS = Counter(
    "nexus_mentor_router_calls_total",
    "Router calls by operation and resolution path",
    ["operation", "path"],
)

BACKEND_LATENCY = Histogram(
    "nexus_mentor_backend_latency_seconds",
    "Latency (seconds) of a single Gemini call",
    ["model"],
)

IMAGE_ATTEMPTS = Counter(
    "nexus_mentor_image_attempts_total",
    "Image generation attempts per model",
    ["model", "status"],
)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def setup_tracing(service_name: str, otlp_endpoint: str) -> None:
    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)
    exporter = OTLPSpanExporter(endpoint=f"{otlp_endpoint}/v1/traces")
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    # google-genai talks to the API through httpx
    HTTPXClientInstrumentor().instrument()


def instrument_fastapi(app) -> None:
    FastAPIInstrumentor.instrument_app(app)


class timer:
    """Observe the duration of a block on a histogram, optionally on one label set.

    ``elapsed`` holds the measured seconds once the block exits.
    """

    def __init__(self, hist: Histogram, **labels: str):
        self.hist = hist.labels(**labels) if labels else hist
        self.start: Optional[float] = None
        self.elapsed: Optional[float] = None

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        if self.start is None:
            return
        self.elapsed = time.perf_counter() - self.start
        self.hist.observe(self.elapsed)
