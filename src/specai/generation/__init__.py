"""Text-generation service clients."""

from specai.generation.base import (
    GenerationFailureReason,
    GenerationRequest,
    TextGenerator,
)
from specai.generation.ollama import OllamaGenerator

__all__ = [
    "GenerationFailureReason",
    "GenerationRequest",
    "OllamaGenerator",
    "TextGenerator",
]
