"""Pull structured JSON out of free-form generated text.

The generated text usually wraps the payload in prose or markdown fences.
:func:`extract_json` walks the text with a balanced-bracket scanner that
understands JSON strings and escapes, so trailing prose, a second JSON blob,
or brackets inside string values do not corrupt the captured substring.
Candidates are tried left to right: an opener that never balances is
skipped, an unparsable candidate is skipped, and for steps and resources a
candidate with the wrong structure is skipped too, so a stray "[1]" or
"[draft" in the prose does not hide the real payload.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Literal, Tuple, TypeVar
from urllib.parse import quote

from pydantic import ValidationError

from careerpath.core.errors import ExtractionError, ParseError, ShapeError
from careerpath.core.models import RESOURCE_CATEGORIES, CareerStep, ResourceBundle

LOGGER = logging.getLogger(__name__)

Shape = Literal["array", "object"]
T = TypeVar("T")

VIDEO_SEARCH_URL = "https://youtube.com/results?search_query={query}"
_BRACKETS: Dict[str, Tuple[str, str]] = {"array": ("[", "]"), "object": ("{", "}")}
# bounds the rescans on adversarial text; each attempt is linear in its length
MAX_CANDIDATES = 32
# encodeURIComponent leaves these unescaped
_URI_COMPONENT_SAFE = "-_.!~*'()"


def video_search_url(query: str) -> str:
    """Build a video-search URL with the query percent-encoded (space -> %20)."""
    return VIDEO_SEARCH_URL.format(query=quote(query, safe=_URI_COMPONENT_SAFE))


def _balanced_end(text: str, start: int, opener: str, closer: str) -> int | None:
    depth = 0
    in_string = False
    escape = False
    for index in range(start, len(text)):
        char = text[index]
        if escape:
            escape = False
            continue
        if in_string:
            if char == "\\":
                escape = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return index
    return None


def _scan(text: str, shape: Shape, accept: Callable[[Any], T]) -> T:
    """Try balanced candidates left to right until ``accept`` takes one.

    An opener that never balances is skipped. A candidate that fails to parse
    is skipped, and its nested openers are tried next. A candidate that parses
    but is rejected by ``accept`` (``ShapeError``) is skipped as a whole.
    """

    if shape not in _BRACKETS:
        raise ValueError(f"Unknown shape {shape!r}; expected 'array' or 'object'")
    opener, closer = _BRACKETS[shape]
    if not isinstance(text, str) or opener not in text:
        raise ExtractionError(f"No '{opener}' found in generated text")
    position = text.find(opener)
    if text.rfind(closer) < position:
        raise ExtractionError(f"No '{closer}' after the first '{opener}' in generated text")

    parse_error: Exception | None = None
    shape_error: ShapeError | None = None
    attempts = 0
    while position != -1 and attempts < MAX_CANDIDATES:
        attempts += 1
        end = _balanced_end(text, position, opener, closer)
        if end is None:
            position = text.find(opener, position + 1)
            continue
        try:
            payload = json.loads(text[position : end + 1])
        except (json.JSONDecodeError, RecursionError) as exc:
            parse_error = exc
            LOGGER.debug("Discarding unparsable %s candidate: %s", shape, exc.__class__.__name__)
            # too deep to decode; nothing nested inside is worth another pass
            resume = end + 1 if isinstance(exc, RecursionError) else position + 1
            position = text.find(opener, resume)
            continue
        try:
            return accept(payload)
        except ShapeError as exc:
            shape_error = exc
            LOGGER.debug("Discarding mis-shaped %s candidate: %s", shape, exc)
            position = text.find(opener, end + 1)

    if shape_error is not None:
        raise shape_error
    if parse_error is not None:
        raise ParseError(f"Generated {shape} is not valid JSON: {parse_error}") from parse_error
    raise ParseError(f"Generated {shape} has no balanced '{opener}...{closer}' pair")


def extract_json(text: str, shape: Shape) -> Any:
    """Return the first well-formed JSON array/object embedded in ``text``.

    Raises ``ExtractionError`` when the text has no opener followed by a
    closer, and ``ParseError`` when brackets exist but no candidate is valid
    JSON (unbalanced, malformed, or nested too deeply to decode).
    """

    return _scan(text, shape, lambda payload: payload)


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors()[:5]:
        location = ".".join(str(loc) for loc in error["loc"])
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def _shape_steps(payload: Any) -> List[CareerStep]:
    if not isinstance(payload, list) or not payload:
        raise ShapeError("Expected a non-empty JSON array of steps")

    steps: List[CareerStep] = []
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise ShapeError(f"Step {index} is not an object")
        try:
            steps.append(CareerStep.model_validate(entry))
        except ValidationError as exc:
            raise ShapeError(f"Step {index} is invalid: {_describe(exc)}") from exc
    return steps


def extract_steps(text: str) -> List[CareerStep]:
    """Extract and validate an ordered, non-empty list of career steps."""
    return _scan(text, "array", _shape_steps)


def _shape_resources(payload: Any) -> ResourceBundle:
    if not isinstance(payload, dict):
        raise ShapeError("Expected a JSON object of resource categories")
    present = [category for category in RESOURCE_CATEGORIES if category in payload]
    if not present:
        raise ShapeError(f"Resource object has none of the keys {', '.join(RESOURCE_CATEGORIES)}")

    shaped: Dict[str, Any] = {}
    for category in present:
        items = payload.get(category)
        if items is None:
            continue
        if not isinstance(items, list):
            raise ShapeError(f"Resource category '{category}' is not an array")
        shaped[category] = [_normalize_video(item) if category == "videos" else item for item in items]

    try:
        return ResourceBundle.model_validate(shaped)
    except ValidationError as exc:
        raise ShapeError(f"Resource bundle is invalid: {_describe(exc)}") from exc


def extract_resources(text: str) -> ResourceBundle:
    """Extract the four-category resource bundle and fill in video search URLs."""
    return _scan(text, "object", _shape_resources)


def _normalize_video(item: Any) -> Any:
    if not isinstance(item, dict):
        return item
    if isinstance(item.get("url"), str) and item["url"].strip():
        return item
    query = item.get("searchQuery") or item.get("search_query") or item.get("title")
    if not isinstance(query, str) or not query.strip():
        return item
    return {**item, "url": video_search_url(query)}


__all__ = [
    "VIDEO_SEARCH_URL",
    "extract_json",
    "extract_resources",
    "extract_steps",
    "video_search_url",
]
