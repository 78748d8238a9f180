"""Status command implementation for reporting project initialization and locks."""

import logging
from pathlib import Path

from specai.core.application.commands.base import Command, CommandResult
from specai.core.infrastructure.models.state import Phase
from specai.core.infrastructure.project_store import ProjectStore
from specai.errors import ProjectNotFoundError

_LOGGER = logging.getLogger(__name__)


class StatusCommand(Command):
    """Command to report whether a directory holds a SpecAI project."""

    def __init__(self, store: ProjectStore):
        """Initialize StatusCommand with dependencies.

        Args:
            store: ProjectStore used to inspect the project
        """
        self.store = store

    def execute(self, root_path: Path) -> CommandResult:
        """Execute status command.

        Initialization is decided solely by the presence of both metadata
        directories. When the state record is readable, the current phase and
        each phase's lock are included as well.

        Args:
            root_path: Directory to inspect

        Returns:
            CommandResult with ``data["initialized"]`` and, when available,
            ``data["phase"]`` and ``data["approved"]``
        """
        if not self.store.is_initialized(root_path):
            return CommandResult(
                success=True,
                message="SpecAI not initialized in this directory.",
                data={"initialized": False},
            )

        data = {"initialized": True}
        lines = ["SpecAI is initialized in this directory."]
        try:
            state = self.store.load_state(root_path)
        except ProjectNotFoundError as e:
            _LOGGER.debug("State unavailable for status: %s", e)
            lines.append("State record missing or unreadable.")
        else:
            data["phase"] = state.phase.value
            data["approved"] = {
                phase.value: state.is_approved(phase) for phase in Phase
            }
            lines.append(f"Phase: {state.phase.value}")

        return CommandResult(success=True, message="\n".join(lines), data=data)
