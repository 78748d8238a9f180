"""Blocking client for an Ollama-style ``/api/generate`` endpoint."""

from __future__ import annotations

import logging

import httpx

from specai.config.settings import GenerationSettings
from specai.errors import GenerationFailedError
from specai.generation.base import GenerationFailureReason, GenerationRequest

_LOGGER = logging.getLogger(__name__)


class OllamaGenerator:
    """Send one non-streaming prompt per call; no retries."""

    def __init__(
        self,
        settings: GenerationSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Store endpoint configuration.

        Args:
            settings: Endpoint settings; defaults apply when omitted.
            transport: Optional httpx transport override.
        """
        self._settings = settings or GenerationSettings()
        self._transport = transport

    def generate(self, request: GenerationRequest) -> str:
        """Submit one prompt and return the stripped completion.

        Args:
            request: Normalized generation request.

        Returns:
            Completion text with surrounding whitespace removed.

        Raises:
            GenerationFailedError: If the service is unreachable, times out,
                answers with a non-success status, or returns a malformed payload.
        """
        payload = {"model": request.model, "prompt": request.prompt, "stream": False}
        _LOGGER.debug(
            "Requesting completion from %s with model %s",
            self._settings.base_url,
            request.model,
        )
        try:
            with httpx.Client(
                base_url=self._settings.base_url,
                timeout=self._settings.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = client.post("/api/generate", json=payload)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise GenerationFailedError(
                GenerationFailureReason.TIMEOUT,
                f"Generation service timed out: {exc}",
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise GenerationFailedError(
                GenerationFailureReason.HTTP_STATUS,
                f"Generation service returned HTTP {exc.response.status_code}.",
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise GenerationFailedError(
                GenerationFailureReason.UNAVAILABLE,
                f"Generation service unavailable at {self._settings.base_url}: {exc}",
            ) from exc
        return self._extract_text(response)

    @staticmethod
    def _extract_text(response: httpx.Response) -> str:
        """Extract completion text from a response payload.

        Args:
            response: Successful HTTP response.

        Returns:
            Stripped completion text.

        Raises:
            GenerationFailedError: If the payload lacks a non-empty text field.
        """
        try:
            body = response.json()
        except ValueError as exc:
            raise GenerationFailedError(
                GenerationFailureReason.INVALID_RESPONSE,
                "Generation service returned a non-JSON payload.",
            ) from exc
        text = body.get("response") if isinstance(body, dict) else None
        if not isinstance(text, str) or not text.strip():
            raise GenerationFailedError(
                GenerationFailureReason.INVALID_RESPONSE,
                "Generation service returned no completion text.",
            )
        return text.strip()
