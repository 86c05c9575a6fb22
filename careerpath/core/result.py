"""Explicit success/failure values passed between generation stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from careerpath.core.errors import GenerationError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """Outcome of one pipeline stage.

    Either ``ok`` with a ``value``, or a failure carrying the ``error`` and the
    name of the ``stage`` that produced it. Callers chain stages with
    :meth:`then` and decide on fallbacks by inspecting the final result.
    """

    ok: bool
    value: T | None = None
    error: GenerationError | None = None
    stage: str | None = None

    @classmethod
    def success(cls, value: T, *, stage: str | None = None) -> "StageResult[T]":
        return cls(ok=True, value=value, stage=stage)

    @classmethod
    def failure(cls, error: GenerationError, *, stage: str) -> "StageResult[T]":
        return cls(ok=False, error=error, stage=stage)

    @classmethod
    def capture(cls, stage: str, func: Callable[[], T]) -> "StageResult[T]":
        """Run ``func`` and wrap its return value or its GenerationError."""
        try:
            return cls.success(func(), stage=stage)
        except GenerationError as exc:
            return cls.failure(exc, stage=stage)

    def then(self, stage: str, func: Callable[[T], U]) -> "StageResult[U]":
        if not self.ok:
            return StageResult(ok=False, error=self.error, stage=self.stage)
        return StageResult.capture(stage, lambda: func(self.value))  # type: ignore[arg-type]

    @property
    def reason(self) -> str | None:
        if self.ok or self.error is None:
            return None
        return f"{self.stage}: {self.error.reason}: {self.error}"


__all__ = ["StageResult"]
