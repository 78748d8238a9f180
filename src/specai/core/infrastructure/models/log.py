"""Pydantic model for activity log entries."""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LogAction(str, Enum):
    """Action type for log entries."""

    CREATED = "created"
    OVERWRITTEN = "overwritten"
    APPROVED = "approved"
    UNLOCKED = "unlocked"
    APPLIED = "applied"
    DISCARDED = "discarded"
    REFUSED = "refused"


class LogEntryModel(BaseModel):
    """Model representing a single entry in both log.jsonl and log.md."""

    timestamp: datetime = Field(..., description="ISO 8601 format timestamp")
    command: str = Field(..., min_length=1, description="Command name (e.g., 'init')")
    action: LogAction = Field(..., description="Action type")
    files: List[str] = Field(
        default_factory=list, description="List of file paths affected"
    )
    metadata: Optional[Dict[str, str]] = Field(
        default=None,
        description="Additional context (phase, edit action, error messages, etc.)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "timestamp": "2026-01-14T10:30:00Z",
                "command": "approve",
                "action": "approved",
                "files": ["specai/state.json"],
                "metadata": {"phase": "constitution"},
            }
        }
    )
