"""Error taxonomy for SpecAI commands.

Every error is terminal for the current invocation. The CLI reports the
message and hint to the operator and exits non-zero.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path


class SpecAIErrorCode(StrEnum):
    """Stable machine-readable error categories."""

    ALREADY_INITIALIZED = "already_initialized"
    PROJECT_NOT_FOUND = "project_not_found"
    PHASE_LOCKED = "phase_locked"
    GENERATION_FAILED = "generation_failed"
    INPUT_CLOSED = "input_closed"
    UNKNOWN_COMMAND = "unknown_command"
    SETTINGS_INVALID = "settings_invalid"


class SpecAIError(RuntimeError):
    """Base error carrying a stable code and an operator hint."""

    def __init__(
        self,
        code: SpecAIErrorCode,
        message: str,
        *,
        hint: str | None = None,
    ) -> None:
        """Create error.

        Args:
            code: Stable error category.
            message: Human-readable error message.
            hint: Optional follow-up instruction for the operator.
        """
        super().__init__(message)
        self.code = code
        self.hint = hint


class AlreadyInitializedError(SpecAIError):
    """Raised when init targets a directory that already holds a project."""

    def __init__(self, target_dir: Path) -> None:
        """Create error.

        Args:
            target_dir: Directory that already contains SpecAI metadata.
        """
        super().__init__(
            SpecAIErrorCode.ALREADY_INITIALIZED,
            f"SpecAI already initialized in {target_dir}.",
            hint="Use --force to overwrite.",
        )
        self.target_dir = target_dir


class ProjectNotFoundError(SpecAIError):
    """Raised when no state record exists where a project is expected."""

    def __init__(self, project_dir: Path, detail: str | None = None) -> None:
        """Create error.

        Args:
            project_dir: Directory that was expected to hold a project.
            detail: Optional extra detail, e.g. a parse error.
        """
        message = f"No SpecAI project found in {project_dir}."
        if detail:
            message = f"{message} {detail}"
        super().__init__(
            SpecAIErrorCode.PROJECT_NOT_FOUND,
            message,
            hint="Run `specai init` first.",
        )
        self.project_dir = project_dir


class PhaseLockedError(SpecAIError):
    """Raised when an edit targets an approved (locked) phase."""

    def __init__(self, phase: str) -> None:
        """Create error.

        Args:
            phase: Locked phase name.
        """
        super().__init__(
            SpecAIErrorCode.PHASE_LOCKED,
            f"{phase.capitalize()} is locked.",
            hint=f"Use `specai unlock {phase}` to modify it.",
        )
        self.phase = phase


class GenerationFailedError(SpecAIError):
    """Raised when the text-generation service fails or answers garbage."""

    def __init__(self, reason: str, message: str) -> None:
        """Create error.

        Args:
            reason: Failure category (unavailable, timeout, http_status,
                invalid_response).
            message: Human-readable error message.
        """
        super().__init__(
            SpecAIErrorCode.GENERATION_FAILED,
            message,
            hint="Check that the local generation service is running.",
        )
        self.reason = reason


class InputClosedError(SpecAIError):
    """Raised when operator input ends before an answer was given."""

    def __init__(self) -> None:
        """Create error."""
        super().__init__(
            SpecAIErrorCode.INPUT_CLOSED,
            "Input stream closed before an answer was given.",
        )


class UnknownCommandError(SpecAIError):
    """Raised for unknown commands or command targets."""

    def __init__(self, target: str, choices: tuple[str, ...]) -> None:
        """Create error.

        Args:
            target: Unrecognized command or target.
            choices: Valid values.
        """
        super().__init__(
            SpecAIErrorCode.UNKNOWN_COMMAND,
            f"Unknown target: {target}.",
            hint=f"Expected one of: {', '.join(choices)}.",
        )
        self.target = target


class SettingsError(SpecAIError):
    """Raised when the settings file cannot be decoded or validated."""

    def __init__(self, message: str) -> None:
        """Create error.

        Args:
            message: Human-readable error message.
        """
        super().__init__(SpecAIErrorCode.SETTINGS_INVALID, message)
