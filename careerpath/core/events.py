"""JSONL record of which generation runs were served live and which fell back."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

from careerpath.core.result import StageResult

Outcome = Literal["generated", "fallback"]


class GenerationEvent(BaseModel):
    """One service call: which service ran, what it served, and why."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    stage: str = Field(..., description="Service that ran, e.g. 'curriculum' or 'resources'.")
    outcome: Outcome
    failed_stage: str | None = Field(default=None, description="Pipeline stage that failed (client, prompt, generate, extract).")
    reason: str | None = Field(default=None, description="Failure summary when the outcome is a fallback.")
    payload: Dict[str, Any] = Field(default_factory=dict)


class GenerationEventLog:
    """Append a line per service call; the file and its directory appear on first write."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def record(
        self,
        service: str,
        outcome: Outcome,
        result: StageResult[Any],
        payload: Dict[str, Any] | None = None,
    ) -> GenerationEvent:
        event = GenerationEvent(
            stage=service,
            outcome=outcome,
            failed_stage=None if result.ok else result.stage,
            reason=result.reason,
            payload=payload or {},
        )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(event.model_dump_json() + "\n")
        return event

    def read(self) -> List[GenerationEvent]:
        if not self.path.exists():
            return []
        return [
            GenerationEvent.model_validate_json(line)
            for line in self.path.read_text(encoding="utf-8").splitlines()
            if line.strip()
        ]

    def fallback_rate(self) -> float:
        """Share of recorded calls that served fallback data (0.0 when empty)."""
        events = self.read()
        if not events:
            return 0.0
        return sum(1 for event in events if event.outcome == "fallback") / len(events)


__all__ = ["GenerationEvent", "GenerationEventLog", "Outcome"]
