"""Prompt assembly for phase document edits."""

from specai.prompting.phase_prompts import (
    build_clarification_prompt,
    build_improvement_prompt,
    build_section_prompt,
)

__all__ = [
    "build_clarification_prompt",
    "build_improvement_prompt",
    "build_section_prompt",
]
