from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional
from urllib.parse import quote

from google.genai import types
from opentelemetry import trace

from .gemini_client import (
    Backend,
    GeminiClient,
    GenerationRequest,
    first_candidate,
    first_inline_image,
    inline_part,
    text_part,
)
from .observability import BACKEND_LATENCY, IMAGE_ATTEMPTS, ROUTER_CALLS, timer
from .outcome import attempt
from .prompts import (
    ANALYSIS_PREFIX,
    CHAT_FAILURE_TEXT,
    IMAGE_EDIT_FRAME,
    NO_RESPONSE_TEXT,
    PLACEHOLDER_IMAGE_URL,
    phase_image_prompt,
)
from .schemas import AspectRatio, Attachment, ChatResponse, GroundingChunk, WebSource
from .settings import ModelRole, Settings
from .simulation import simulate

logger = logging.getLogger(__name__)
TRACER = trace.get_tracer(__name__)

BackendFactory = Callable[[str], Backend]

_DATA_URL_PREFIX = re.compile(r"^data:image/(png|jpeg|webp);base64,")


@dataclass(frozen=True)
class ImageAttempt:
    role: ModelRole
    image_size: Optional[str] = None


# primary model first, then the fast one when the primary is refused (quota/permission)
IMAGE_ATTEMPTS_CHAIN: List[ImageAttempt] = [
    ImageAttempt(ModelRole.IMAGE_DEFAULT, image_size="1K"),
    ImageAttempt(ModelRole.IMAGE_FAST),
]


def _grounding_chunks(response: types.GenerateContentResponse) -> Optional[List[GroundingChunk]]:
    candidate = first_candidate(response)
    if candidate is None or candidate.grounding_metadata is None:
        return None
    raw = candidate.grounding_metadata.grounding_chunks
    if raw is None:
        return None
    chunks = []
    for c in raw:
        web = None
        if c.web is not None and c.web.uri:
            web = WebSource(uri=c.web.uri, title=c.web.title)
        chunks.append(GroundingChunk(web=web))
    return chunks


class MentorRouter:
    """Routes chat and blueprint-image calls to Gemini, or to canned answers offline.

    Holds only immutable configuration, so one instance can serve concurrent calls.
    A credential of ``None`` or ``""`` means "no credential".
    """

    def __init__(self, settings: Settings, backend_factory: BackendFactory = GeminiClient):
        self.settings = settings
        self.backend_factory = backend_factory

    def select_model(self, use_search: bool) -> ModelRole:
        return ModelRole.SEARCH_CAPABLE if use_search else ModelRole.TEXT_DEFAULT

    def build_chat_request(
        self,
        message: str,
        attachment: Optional[Attachment] = None,
        use_search: bool = False,
    ) -> GenerationRequest:
        model = self.settings.models.resolve(self.select_model(use_search))
        if attachment is not None:
            parts = [inline_part(attachment.raw(), attachment.mime_type), text_part(ANALYSIS_PREFIX + message)]
        else:
            parts = [text_part(message)]
        tools = [types.Tool(google_search=types.GoogleSearch())] if use_search else None
        config = types.GenerateContentConfig(
            system_instruction=self.settings.system_instruction,
            temperature=self.settings.temperature,
            tools=tools,
        )
        return GenerationRequest(model=model, parts=parts, config=config)

    async def generate_chat_response(
        self,
        message: str,
        credential: Optional[str],
        attachment: Optional[Attachment] = None,
        use_search: bool = False,
    ) -> ChatResponse:
        if not credential:
            logger.debug("No credential, answering from simulation")
            ROUTER_CALLS.labels(operation="chat", path="simulation").inc()
            return await simulate(message, self.settings.simulation_delay)

        with TRACER.start_as_current_span("generation") as span:
            span.set_attribute("use_search", use_search)
            span.set_attribute("has_attachment", attachment is not None)

            async def call() -> ChatResponse:
                request = self.build_chat_request(message, attachment, use_search)
                span.set_attribute("model", request.model)
                backend = self.backend_factory(credential)
                with timer(BACKEND_LATENCY, model=request.model) as t:
                    response = await backend.generate_content(request)
                logger.debug("%s answered in %.2fs", request.model, t.elapsed)
                text = response.text
                if not text:
                    ROUTER_CALLS.labels(operation="chat", path="empty").inc()
                    text = NO_RESPONSE_TEXT
                else:
                    ROUTER_CALLS.labels(operation="chat", path="live").inc()
                return ChatResponse(text=text, grounding_chunks=_grounding_chunks(response))

            outcome = await attempt(call)

        if not outcome.ok:
            logger.error("Gemini API error: %r", outcome.error)
            ROUTER_CALLS.labels(operation="chat", path="failure").inc()
            return ChatResponse(text=CHAT_FAILURE_TEXT)
        return outcome.value

    async def generate_phase_image(
        self,
        phase_title: str,
        goal: str,
        aspect_ratio: AspectRatio,
        credential: Optional[str],
    ) -> Optional[str]:
        if not credential:
            if self.settings.image_simulation_delay > 0:
                await asyncio.sleep(self.settings.image_simulation_delay)
            ROUTER_CALLS.labels(operation="phase_image", path="simulation").inc()
            return PLACEHOLDER_IMAGE_URL.format(title=quote(phase_title, safe="!*'()"))

        prompt = phase_image_prompt(phase_title)
        with TRACER.start_as_current_span("image_generation") as span:
            span.set_attribute("phase_title", phase_title)
            span.set_attribute("goal", goal)
            for step in IMAGE_ATTEMPTS_CHAIN:
                model = self.settings.models.resolve(step.role)

                async def call(model: str = model, step: ImageAttempt = step) -> Optional[str]:
                    config = types.GenerateContentConfig(
                        image_config=types.ImageConfig(aspect_ratio=aspect_ratio, image_size=step.image_size)
                    )
                    request = GenerationRequest(model=model, parts=[text_part(prompt)], config=config)
                    backend = self.backend_factory(credential)
                    with timer(BACKEND_LATENCY, model=request.model):
                        response = await backend.generate_content(request)
                    return first_inline_image(response)

                outcome = await attempt(call)
                if outcome.ok:
                    IMAGE_ATTEMPTS.labels(model=model, status="ok").inc()
                    span.set_attribute("model", model)
                    path = "live" if outcome.value else "absent"
                    ROUTER_CALLS.labels(operation="phase_image", path=path).inc()
                    return outcome.value
                IMAGE_ATTEMPTS.labels(model=model, status="error").inc()
                logger.warning("Image generation with %s failed, trying next model: %r", model, outcome.error)

        logger.error("Image generation failed on every model for phase %r", phase_title)
        ROUTER_CALLS.labels(operation="phase_image", path="failure").inc()
        return None

    async def edit_phase_image(
        self,
        image: str,
        edit_prompt: str,
        credential: Optional[str],
    ) -> Optional[str]:
        if not credential:
            ROUTER_CALLS.labels(operation="image_edit", path="absent").inc()
            return None

        model = self.settings.models.resolve(ModelRole.IMAGE_FAST)

        with TRACER.start_as_current_span("image_edit") as span:
            span.set_attribute("model", model)

            async def call() -> Optional[str]:
                clean = _DATA_URL_PREFIX.sub("", image)
                request = GenerationRequest(
                    model=model,
                    parts=[
                        inline_part(Attachment(mime_type="image/png", data=clean).raw(), "image/png"),
                        text_part(IMAGE_EDIT_FRAME.format(prompt=edit_prompt)),
                    ],
                )
                backend = self.backend_factory(credential)
                with timer(BACKEND_LATENCY, model=model):
                    response = await backend.generate_content(request)
                return first_inline_image(response)

            outcome = await attempt(call)

        if not outcome.ok:
            logger.error("Image edit error: %r", outcome.error)
            ROUTER_CALLS.labels(operation="image_edit", path="failure").inc()
            return None
        ROUTER_CALLS.labels(operation="image_edit", path="live" if outcome.value else "absent").inc()
        return outcome.value
