"""Curriculum generation with static fallback."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from careerpath.core.models import CareerStep

from .base import GenerationService, Source
from .extraction import extract_steps
from .prompts import build_curriculum_prompt


@dataclass
class CurriculumOutcome:
    career: str
    steps: List[CareerStep]
    source: Source
    reason: str | None = None

    @property
    def used_fallback(self) -> bool:
        return self.source == "fallback"


class CurriculumService(GenerationService):
    """Produce an ordered list of learning steps for a career track.

    Never raises on generation failures: transport, response-shape,
    extraction and parse problems all degrade to the fallback catalog.
    """

    stage_name = "curriculum"

    def generate(self, career: str) -> CurriculumOutcome:
        result = self._run_pipeline(lambda: build_curriculum_prompt(career), extract_steps)
        payload = {"career": career}
        if result.ok and result.value:
            self._record("generated", result, {**payload, "step_count": len(result.value)})
            return CurriculumOutcome(career=career, steps=result.value, source="generated")

        self._record("fallback", result, payload)
        return CurriculumOutcome(
            career=career,
            steps=self.catalog.default_steps(career),
            source="fallback",
            reason=result.reason,
        )

    def get_steps(self, career: str) -> List[CareerStep]:
        return self.generate(career).steps


__all__ = ["CurriculumOutcome", "CurriculumService"]
