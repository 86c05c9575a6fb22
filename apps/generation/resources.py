"""Resource generation for a single curriculum step, with static fallback."""

from __future__ import annotations

from dataclasses import dataclass

from careerpath.core.models import CareerStep, ResourceBundle

from .base import GenerationService, Source
from .extraction import extract_resources
from .prompts import build_resource_prompt


@dataclass
class ResourceOutcome:
    step_title: str
    resources: ResourceBundle
    source: Source
    reason: str | None = None

    @property
    def used_fallback(self) -> bool:
        return self.source == "fallback"


class ResourceService(GenerationService):
    """Produce videos/documents/projects/practice for one step."""

    stage_name = "resources"

    def generate(self, career: str, step_title: str, step_description: str) -> ResourceOutcome:
        result = self._run_pipeline(
            lambda: build_resource_prompt(career, step_title, step_description),
            extract_resources,
        )
        payload = {"career": career, "step_title": step_title}
        if result.ok and result.value is not None:
            self._record("generated", result, {**payload, "resource_count": result.value.total()})
            return ResourceOutcome(step_title=step_title, resources=result.value, source="generated")

        self._record("fallback", result, payload)
        return ResourceOutcome(
            step_title=step_title,
            resources=self.catalog.default_resources(career, step_title),
            source="fallback",
            reason=result.reason,
        )

    def get_resources(self, career: str, step_title: str, step_description: str) -> ResourceBundle:
        return self.generate(career, step_title, step_description).resources

    def resources_for_step(self, career: str, step: CareerStep) -> ResourceOutcome:
        return self.generate(career, step.title, step.description)


__all__ = ["ResourceOutcome", "ResourceService"]
