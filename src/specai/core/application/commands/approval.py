"""Approve and unlock commands toggling a phase's lock."""

from abc import abstractmethod
from pathlib import Path

from specai.core.application.commands.base import Command, CommandResult
from specai.core.application.workflow import PhaseWorkflow
from specai.core.infrastructure.models.log import LogAction
from specai.core.infrastructure.models.state import Phase
from specai.core.infrastructure.storage import ActivityLogger


class _ApprovalCommand(Command):
    approved: bool
    action: LogAction

    def __init__(self, workflow: PhaseWorkflow):
        """Initialize command with dependencies.

        Args:
            workflow: Phase workflow engine
        """
        self.workflow = workflow

    def execute(self, project_dir: Path, phase: Phase) -> CommandResult:
        if self.approved:
            state = self.workflow.approve(project_dir, phase)
        else:
            state = self.workflow.unlock(project_dir, phase)

        paths = self.workflow.store.paths(project_dir)
        state_file = paths.relative(paths.state_path)
        ActivityLogger.for_project(self.workflow.store.storage, paths.metadata_dir).log(
            command="approve" if self.approved else "unlock",
            action=self.action,
            files=[state_file],
            metadata={"phase": phase.value},
        )
        return CommandResult(
            success=True,
            message=self._message(phase),
            files_written=[state_file],
            data={"phase": phase.value, "approved": state.is_approved(phase)},
        )

    @abstractmethod
    def _message(self, phase: Phase) -> str:
        """Return the confirmation shown after the lock changes."""


class ApproveCommand(_ApprovalCommand):
    """Approve and lock a phase document."""

    approved = True
    action = LogAction.APPROVED

    def _message(self, phase: Phase) -> str:
        return f"🔒 {phase.value.capitalize()} approved and locked."


class UnlockCommand(_ApprovalCommand):
    """Unlock a phase document for further edits."""

    approved = False
    action = LogAction.UNLOCKED

    def _message(self, phase: Phase) -> str:
        return f"🔓 {phase.value.capitalize()} unlocked."
