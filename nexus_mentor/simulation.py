from __future__ import annotations

import asyncio
from enum import Enum
from typing import Dict, List, Tuple

from .prompts import SIMULATION_AGENTS, SIMULATION_GENERIC, SIMULATION_RAG, SIMULATION_SDK
from .schemas import ChatResponse


class SimulationTopic(str, Enum):
    SDK = "sdk"
    RAG = "rag"
    AGENTS = "agents"
    GENERIC = "generic"


# checked in order, first hit wins
_RULES: List[Tuple[SimulationTopic, Tuple[str, ...]]] = [
    (SimulationTopic.SDK, ("semantic kernel", "sdk")),
    (SimulationTopic.RAG, ("rag", "search")),
    (SimulationTopic.AGENTS, ("agent", "autogen")),
]

SIMULATION_TEXTS: Dict[SimulationTopic, str] = {
    SimulationTopic.SDK: SIMULATION_SDK,
    SimulationTopic.RAG: SIMULATION_RAG,
    SimulationTopic.AGENTS: SIMULATION_AGENTS,
    SimulationTopic.GENERIC: SIMULATION_GENERIC,
}


def classify(message: str) -> SimulationTopic:
    msg = message.lower()
    for topic, needles in _RULES:
        if any(n in msg for n in needles):
            return topic
    return SimulationTopic.GENERIC


async def simulate(message: str, delay: float = 0.8) -> ChatResponse:
    """Offline answer used when no credential is available."""
    if delay > 0:
        await asyncio.sleep(delay)
    return ChatResponse(text=SIMULATION_TEXTS[classify(message)])
