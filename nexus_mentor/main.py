from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Header
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response
from opentelemetry import trace

from .observability import (
    REQUESTS_TOTAL,
    REQUEST_LATENCY,
    instrument_fastapi,
    setup_logging,
    setup_tracing,
)
from .router import MentorRouter
from .schemas import (
    ChatRequest,
    ChatResponse,
    ImageResponse,
    PhaseImageEditRequest,
    PhaseImageRequest,
)
from .settings import settings

setup_logging(settings.log_level)

app = FastAPI(title="NEXUS Mentor", version="0.1.0")

# tracing + instrumentation
if settings.otel_enabled:
    setup_tracing(settings.otel_service_name, settings.otel_endpoint)
instrument_fastapi(app)

router = MentorRouter(settings)
TRACER = trace.get_tracer(__name__)


def _credential(header_key: Optional[str]) -> Optional[str]:
    # header wins over the server's own key; neither means simulation
    return header_key or settings.gemini_api_key or None


@app.get("/health")
def health():
    return {"status": "ok", "mode": "live" if settings.gemini_api_key else "simulation"}


@app.get("/metrics")
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.post("/chat", response_model=ChatResponse)
async def chat(req: ChatRequest, x_goog_api_key: Optional[str] = Header(None)):
    endpoint = "/chat"
    with REQUEST_LATENCY.labels(endpoint=endpoint).time():
        with TRACER.start_as_current_span("chat_request"):
            resp = await router.generate_chat_response(
                req.message,
                _credential(x_goog_api_key),
                attachment=req.attachment,
                use_search=req.use_search,
            )
    REQUESTS_TOTAL.labels(endpoint=endpoint, status="200").inc()
    return resp


@app.post("/images/phase", response_model=ImageResponse)
async def phase_image(req: PhaseImageRequest, x_goog_api_key: Optional[str] = Header(None)):
    endpoint = "/images/phase"
    with REQUEST_LATENCY.labels(endpoint=endpoint).time():
        image = await router.generate_phase_image(
            req.phase_title,
            req.goal,
            req.aspect_ratio,
            _credential(x_goog_api_key),
        )
    REQUESTS_TOTAL.labels(endpoint=endpoint, status="200").inc()
    return ImageResponse(image=image)


@app.post("/images/edit", response_model=ImageResponse)
async def edit_image(req: PhaseImageEditRequest, x_goog_api_key: Optional[str] = Header(None)):
    endpoint = "/images/edit"
    with REQUEST_LATENCY.labels(endpoint=endpoint).time():
        image = await router.edit_phase_image(req.image, req.edit_prompt, _credential(x_goog_api_key))
    REQUESTS_TOTAL.labels(endpoint=endpoint, status="200").inc()
    return ImageResponse(image=image)
