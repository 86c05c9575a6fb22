"""Shared plumbing for the curriculum and resource services."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Literal, Protocol, TypeVar

from careerpath.core.errors import GenerationConfigError, PromptError
from careerpath.core.events import GenerationEventLog
from careerpath.core.result import StageResult

from .fallback_catalog import FallbackCatalog

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
Source = Literal["generated", "fallback"]


class TextGenerator(Protocol):
    def generate(self, prompt_text: str) -> str: ...


class GenerationService:
    """Run prompt -> generate -> extract and report each stage as a StageResult."""

    stage_name = "generation"

    def __init__(
        self,
        client: TextGenerator | None = None,
        *,
        catalog: FallbackCatalog | None = None,
        event_log: GenerationEventLog | None = None,
    ) -> None:
        self.client = client
        self.catalog = catalog or FallbackCatalog()
        self.event_log = event_log

    def _run_pipeline(self, build_prompt: Callable[[], str], extract: Callable[[str], T]) -> StageResult[T]:
        client = self.client
        if client is None:
            return StageResult.failure(
                GenerationConfigError("No generative client configured"),
                stage="client",
            )
        try:
            prompt = build_prompt()
        except ValueError as exc:
            return StageResult.failure(PromptError(str(exc)), stage="prompt")
        return StageResult.capture("generate", lambda: client.generate(prompt)).then("extract", extract)

    def _record(self, source: Source, result: StageResult[Any], payload: Dict[str, Any]) -> None:
        if source == "fallback":
            LOGGER.warning(
                "%s generation failed; serving fallback data (%s)",
                self.stage_name,
                result.reason,
                extra={"stage": result.stage, **payload},
            )
        else:
            LOGGER.debug("%s generation succeeded", self.stage_name, extra=payload)
        if self.event_log is not None:
            self.event_log.record(self.stage_name, source, result, payload)


__all__ = ["GenerationService", "Source", "TextGenerator"]
