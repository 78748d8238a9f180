"""SpecAI settings loading."""

from specai.config.settings import (
    DEFAULT_GENERATION_URL,
    GenerationSettings,
    SpecAISettings,
    load_settings,
)

__all__ = [
    "DEFAULT_GENERATION_URL",
    "GenerationSettings",
    "SpecAISettings",
    "load_settings",
]
