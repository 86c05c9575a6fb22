"""HTTP client for the generative-text (Gemini generateContent) endpoint."""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from careerpath.core.config import GenerationConfig
from careerpath.core.errors import GenerationConfigError, MalformedResponseError, TransportError

LOGGER = logging.getLogger(__name__)

RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


class GenerativeTextClient:
    def __init__(
        self,
        config: GenerationConfig,
        *,
        api_key: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._config = config
        self._api_key = api_key or config.resolve_api_key()
        if not self._api_key:
            raise GenerationConfigError(
                f"Missing API key for generation; set {config.api_key_env} or generation.api_key."
            )
        if client is None:
            self._client = httpx.Client(timeout=config.timeout_seconds)
            self._owns_client = True
        else:
            self._client = client
            self._owns_client = False

    def generate(self, prompt_text: str) -> str:
        """Send one prompt and return the first candidate's text."""

        payload = request_payload(prompt_text)
        attempts = self._config.max_retries + 1
        response: httpx.Response | None = None
        for attempt in range(1, attempts + 1):
            try:
                response = self._client.post(
                    self._config.endpoint_url,
                    params={"key": self._api_key},
                    json=payload,
                    timeout=self._config.timeout_seconds,
                )
            except httpx.TransportError as exc:
                if attempt < attempts:
                    LOGGER.warning("Generation request failed (%s); retrying", exc.__class__.__name__)
                    continue
                raise TransportError(f"Generation request failed: {exc}") from exc
            except httpx.HTTPError as exc:
                raise TransportError(f"Generation request failed: {exc}") from exc

            if response.status_code in RETRYABLE_STATUS and attempt < attempts:
                LOGGER.warning("Generation endpoint returned %s; retrying", response.status_code)
                continue
            break

        if response is None:
            raise TransportError("Generation request was never sent")
        if response.is_error:
            raise TransportError(
                f"Generation endpoint returned HTTP {response.status_code}",
                status_code=response.status_code,
                detail=response.text[:500],
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponseError("Generation endpoint returned non-JSON payload") from exc
        return _first_candidate_text(data)

    def close(self) -> None:
        if getattr(self, "_owns_client", False):
            self._client.close()

    def __enter__(self) -> "GenerativeTextClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _first_candidate_text(data: Any) -> str:
    try:
        parts = data["candidates"][0]["content"]["parts"]
        text = parts[0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedResponseError("Invalid response format from generation endpoint") from exc
    if not isinstance(text, str):
        raise MalformedResponseError("First candidate text is not a string")
    return text


def build_client(config: GenerationConfig, *, client: httpx.Client | None = None) -> GenerativeTextClient | None:
    """Return a client, or None when no API key is configured."""
    try:
        return GenerativeTextClient(config, client=client)
    except GenerationConfigError as exc:
        LOGGER.warning("Generation disabled: %s", exc)
        return None


def request_payload(prompt_text: str) -> Dict[str, Any]:
    return {"contents": [{"parts": [{"text": prompt_text}]}]}


__all__ = ["GenerativeTextClient", "build_client", "request_payload"]
