from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either the value of a backend call or the error it raised."""

    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "Outcome[T]":
        return cls(error=error)


async def attempt(call: Callable[[], Awaitable[T]]) -> Outcome[T]:
    """Await ``call()`` and capture whatever it raises."""
    try:
        return Outcome.success(await call())
    except Exception as e:
        return Outcome.failure(e)
