"""Text-generation contracts used by the phase workflow."""

from __future__ import annotations

from enum import StrEnum
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field


class GenerationFailureReason(StrEnum):
    """Stable generation failure categories."""

    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    INVALID_RESPONSE = "invalid_response"


class GenerationRequest(BaseModel):
    """Normalized request for one blocking completion."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    model: str = Field(min_length=1)
    prompt: str = Field(min_length=1)


class TextGenerator(Protocol):
    """Port for the external text-generation service."""

    def generate(self, request: GenerationRequest) -> str:
        """Return the completion text for one request.

        Args:
            request: Normalized generation request.

        Raises:
            GenerationFailedError: On any transport or payload failure.
        """
