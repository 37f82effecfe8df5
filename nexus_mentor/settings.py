from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

from .prompts import SYSTEM_INSTRUCTION

# field defaults below are read at import time
load_dotenv()


_TRUTHY = {"1", "true", "yes", "y", "on"}


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    return default if v is None else v.strip().lower() in _TRUTHY


def _env_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError:
        return default


def _env_text_file(name: str, default: str) -> str:
    v = os.getenv(name)
    if not v:
        return default
    path = Path(v)
    if not path.is_file():
        return default
    return path.read_text(encoding="utf-8")


class ModelRole(str, Enum):
    TEXT_DEFAULT = "text_default"
    SEARCH_CAPABLE = "search_capable"
    IMAGE_DEFAULT = "image_default"
    IMAGE_FAST = "image_fast"


@dataclass(frozen=True)
class ModelTable:
    text_default: str = os.getenv("GEMINI_TEXT_MODEL", "gemini-3-pro-preview")
    # googleSearch tool is only served by the flash family
    search_capable: str = os.getenv("GEMINI_SEARCH_MODEL", "gemini-2.5-flash")
    image_default: str = os.getenv("GEMINI_IMAGE_MODEL", "gemini-3-pro-image-preview")
    image_fast: str = os.getenv("GEMINI_IMAGE_FAST_MODEL", "gemini-2.5-flash-image")

    def resolve(self, role: ModelRole) -> str:
        return getattr(self, role.value)


@dataclass(frozen=True)
class Settings:
    # LLM
    gemini_api_key: str = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or ""
    models: ModelTable = field(default_factory=ModelTable)
    temperature: float = _env_float("GEMINI_TEMPERATURE", 0.7)
    system_instruction: str = _env_text_file("SYSTEM_INSTRUCTION_PATH", SYSTEM_INSTRUCTION)

    # Simulation
    simulation_delay: float = _env_float("SIMULATION_DELAY_SECONDS", 0.8)
    image_simulation_delay: float = _env_float("IMAGE_SIMULATION_DELAY_SECONDS", 1.5)

    # Observability
    log_level: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    otel_enabled: bool = _env_bool("OTEL_ENABLED", False)
    otel_endpoint: str = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318")
    otel_service_name: str = os.getenv("OTEL_SERVICE_NAME", "nexus-mentor")


settings = Settings()
