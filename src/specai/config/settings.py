"""SpecAI tool settings models and loading helpers."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from specai.errors import SettingsError

DEFAULT_GENERATION_URL = "http://127.0.0.1:11434"


class GenerationSettings(BaseModel):
    """Text-generation endpoint configuration."""

    model_config = ConfigDict(extra="forbid")

    base_url: str = Field(default=DEFAULT_GENERATION_URL, min_length=1)
    timeout_seconds: float = Field(default=120.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def check_base_url(cls, value: str) -> str:
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise ValueError(f"invalid base_url: {exc}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("base_url must be an absolute http(s) URL")
        return value


class SpecAISettings(BaseModel):
    """Root SpecAI settings model."""

    model_config = ConfigDict(extra="forbid")

    generation: GenerationSettings = GenerationSettings()


def _decode_settings_payload(path: Path) -> dict[str, object]:
    """Decode settings payload from JSON or YAML.

    Args:
        path: Settings file path.

    Returns:
        Parsed mapping payload.

    Raises:
        SettingsError: If decode fails or payload is not an object.
    """
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise SettingsError(f"Invalid settings JSON: {exc}") from exc
    else:
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise SettingsError(f"Invalid settings YAML: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise SettingsError("Invalid settings payload: root must be an object")
    return payload


def load_settings(path: Path) -> SpecAISettings:
    """Load SpecAI settings from disk, defaulting when missing.

    Args:
        path: Settings file path.

    Returns:
        Parsed settings, or defaults when the file does not exist.

    Raises:
        SettingsError: If payload decode or validation fails.
    """
    if not path.exists():
        return SpecAISettings()
    payload = _decode_settings_payload(path)
    try:
        return SpecAISettings.model_validate(payload)
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings payload: {exc}") from exc
