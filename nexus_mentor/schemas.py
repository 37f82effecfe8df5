from __future__ import annotations

import base64
import binascii
from datetime import datetime, timezone
from typing import Iterable, List, Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator, model_validator

AspectRatio = Literal["1:1", "3:4", "4:3", "9:16", "16:9"]


class Attachment(BaseModel):
    """A single image sent alongside a chat message (base64 payload)."""

    mime_type: str = Field(..., min_length=1)
    data: str = Field(..., min_length=1)

    @field_validator("data")
    @classmethod
    def _check_base64(cls, v: str) -> str:
        try:
            base64.b64decode(v, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"attachment data is not valid base64: {e}") from e
        return v

    @classmethod
    def from_bytes(cls, raw: bytes, mime_type: str) -> "Attachment":
        return cls(mime_type=mime_type, data=base64.b64encode(raw).decode("ascii"))

    def raw(self) -> bytes:
        return base64.b64decode(self.data)


class WebSource(BaseModel):
    uri: str
    title: Optional[str] = None


class GroundingChunk(BaseModel):
    web: Optional[WebSource] = None

    def label(self) -> str:
        if self.web is None:
            return ""
        return self.web.title or urlparse(self.web.uri).hostname or self.web.uri


class ChatMessage(BaseModel):
    id: str
    role: Literal["user", "model", "system"]
    text: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    attachment: Optional[Attachment] = None
    grounding_chunks: Optional[List[GroundingChunk]] = None


class ChatRequest(BaseModel):
    message: str = ""
    attachment: Optional[Attachment] = None
    use_search: bool = False

    @model_validator(mode="after")
    def _not_both_empty(self) -> "ChatRequest":
        if not self.message.strip() and self.attachment is None:
            raise ValueError("message and attachment cannot both be empty")
        return self

    @classmethod
    def from_input(cls, text: Optional[str], files: Iterable, use_search: bool = False) -> Optional["ChatRequest"]:
        """Build a request from one chat-box submission, or None when there is nothing to send.

        ``files`` are uploaded-file objects (``getvalue()``, ``type``); only the first
        becomes the attachment, since a message carries at most one image.
        """
        upload = next(iter(files or []), None)
        attachment = Attachment.from_bytes(upload.getvalue(), upload.type) if upload is not None else None
        text = text or ""
        if not text.strip() and attachment is None:
            return None
        return cls(message=text, attachment=attachment, use_search=use_search)


class ChatResponse(BaseModel):
    text: str = Field(..., min_length=1)
    grounding_chunks: Optional[List[GroundingChunk]] = None


class PhaseImageRequest(BaseModel):
    phase_title: str = Field(..., min_length=1)
    goal: str = ""
    aspect_ratio: AspectRatio = "16:9"


class PhaseImageEditRequest(BaseModel):
    image: str = Field(..., min_length=1)
    edit_prompt: str = Field(..., min_length=1)


class ImageResponse(BaseModel):
    image: Optional[str] = None
