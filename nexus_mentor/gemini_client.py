from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import List, Optional, Protocol

from google import genai
from google.genai import types


@dataclass(frozen=True)
class GenerationRequest:
    model: str
    parts: List[types.Part]
    config: Optional[types.GenerateContentConfig] = None


class Backend(Protocol):
    async def generate_content(self, request: GenerationRequest) -> types.GenerateContentResponse:
        ...


class GeminiClient:
    """One Gemini call per ``generate_content``; the SDK client lives only for that call."""

    def __init__(self, api_key: str):
        if not api_key:
            raise RuntimeError("GeminiClient needs an API key; callers without one use the simulation path.")
        self.api_key = api_key

    async def generate_content(self, request: GenerationRequest) -> types.GenerateContentResponse:
        client = genai.Client(api_key=self.api_key)
        try:
            return await client.aio.models.generate_content(
                model=request.model,
                contents=types.Content(role="user", parts=request.parts),
                config=request.config,
            )
        finally:
            # both the async and the sync httpx pools are opened by genai.Client
            await client.aio.aclose()
            client.close()


def inline_part(raw: bytes, mime_type: str) -> types.Part:
    return types.Part(inline_data=types.Blob(mime_type=mime_type, data=raw))


def text_part(text: str) -> types.Part:
    return types.Part(text=text)


def first_candidate(response: types.GenerateContentResponse) -> Optional[types.Candidate]:
    if not response.candidates:
        return None
    return response.candidates[0]


def first_inline_image(response: types.GenerateContentResponse) -> Optional[str]:
    """Return the first inline data part of the first candidate as a data URL."""
    candidate = first_candidate(response)
    if candidate is None or candidate.content is None:
        return None
    for part in candidate.content.parts or []:
        blob = part.inline_data
        if blob is not None and blob.data:
            encoded = base64.b64encode(blob.data).decode("ascii")
            return f"data:{blob.mime_type};base64,{encoded}"
    return None
