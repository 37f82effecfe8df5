from __future__ import annotations

from typing import List, Optional

import pytest
from google.genai import types

from nexus_mentor.router import MentorRouter
from nexus_mentor.settings import ModelTable, Settings

MODELS = ModelTable(
    text_default="text-pro",
    search_capable="text-flash",
    image_default="image-pro",
    image_fast="image-flash",
)


class FakeBackend:
    """Stands in for GeminiClient; replays scripted responses or raises scripted errors."""

    def __init__(self):
        self.script: list = []
        self.requests: list = []
        self.credentials: List[str] = []

    def factory(self, credential: str) -> "FakeBackend":
        self.credentials.append(credential)
        return self

    async def generate_content(self, request):
        self.requests.append(request)
        item = self.script.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def text_response(text: str, chunks: Optional[list] = None) -> types.GenerateContentResponse:
    parts = [types.Part(text=text)] if text else []
    metadata = types.GroundingMetadata(grounding_chunks=chunks) if chunks is not None else None
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=parts),
                grounding_metadata=metadata,
            )
        ]
    )


def image_response(raw: bytes, mime_type: str = "image/png") -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(
                    role="model",
                    parts=[
                        types.Part(text="Here is your blueprint."),
                        types.Part(inline_data=types.Blob(mime_type=mime_type, data=raw)),
                    ],
                )
            )
        ]
    )


def web_chunk(uri: str, title: Optional[str]) -> types.GroundingChunk:
    return types.GroundingChunk(web=types.GroundingChunkWeb(uri=uri, title=title))


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        gemini_api_key="",
        models=MODELS,
        temperature=0.7,
        system_instruction="TEST PERSONA",
        simulation_delay=0,
        image_simulation_delay=0,
    )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def router(test_settings, backend) -> MentorRouter:
    return MentorRouter(test_settings, backend_factory=backend.factory)
