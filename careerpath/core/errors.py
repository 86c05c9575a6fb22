"""Error taxonomy for the generation pipeline and the account rules."""

from __future__ import annotations


class GenerationError(RuntimeError):
    """Base class for every failure inside the prompt -> text -> JSON pipeline."""

    reason = "generation_error"


class GenerationConfigError(GenerationError):
    """Raised when the generative client cannot be configured (e.g. no API key)."""

    reason = "client_unavailable"


class PromptError(GenerationError):
    """Prompt inputs were blank or not strings."""

    reason = "prompt"


class TransportError(GenerationError):
    """Network failure or non-success HTTP status from the generative endpoint."""

    reason = "transport"

    def __init__(self, message: str, *, status_code: int | None = None, detail: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class MalformedResponseError(GenerationError):
    """Endpoint answered, but not with the expected first-candidate text shape."""

    reason = "malformed_response"


class ExtractionError(GenerationError):
    """No JSON-looking substring could be located in the generated text."""

    reason = "extraction"


class ParseError(GenerationError):
    """A bracketed substring was found but none of the candidates is valid JSON."""

    reason = "parse"


class ShapeError(GenerationError):
    """Parsed JSON does not have the structure the caller asked for."""

    reason = "shape"


class AccountError(ValueError):
    """Signup or login rule violation (duplicate email, bad password, ...)."""


__all__ = [
    "AccountError",
    "ExtractionError",
    "GenerationConfigError",
    "GenerationError",
    "MalformedResponseError",
    "ParseError",
    "PromptError",
    "ShapeError",
    "TransportError",
]
