"""Pydantic model for project state."""

from __future__ import annotations

from enum import StrEnum
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class Phase(StrEnum):
    """Project workflow phase, in lifecycle order."""

    CONSTITUTION = "constitution"
    SPEC = "spec"
    PLAN = "plan"
    TASKS = "tasks"
    IMPLEMENT = "implement"
    REVIEW = "review"


# Phases whose approval flags are written at init.
INITIAL_APPROVAL_PHASES = (Phase.CONSTITUTION, Phase.SPEC, Phase.PLAN, Phase.TASKS)


class StateModel(BaseModel):
    """Model representing project state stored in specai/state.json.

    ``phase`` is advisory: no command gates on it or advances it. A phase
    missing from ``approved`` is unlocked.
    """

    phase: Phase = Field(
        default=Phase.CONSTITUTION, description="Current workflow phase"
    )
    approved: Dict[Phase, bool] = Field(
        default_factory=lambda: {phase: False for phase in INITIAL_APPROVAL_PHASES},
        description="Per-phase approval (lock) flags",
    )

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "phase": "constitution",
                "approved": {
                    "constitution": False,
                    "spec": False,
                    "plan": False,
                    "tasks": False,
                },
            }
        },
    )

    def is_approved(self, phase: Phase) -> bool:
        """Return whether the phase document is locked."""
        return self.approved.get(phase, False)

    def with_approval(self, phase: Phase, approved: bool) -> StateModel:
        """Return a copy with one approval flag set.

        Args:
            phase: Phase whose flag changes
            approved: New flag value

        Returns:
            New StateModel; the receiver is left untouched
        """
        flags = dict(self.approved)
        flags[phase] = approved
        return self.model_copy(update={"approved": flags})
