"""Edit and show commands for phase documents."""

from pathlib import Path
from typing import Optional

from specai.core.application.commands.base import Command, CommandResult
from specai.core.application.workflow import (
    EditAction,
    EditStatus,
    PhaseWorkflow,
)
from specai.core.infrastructure.models.log import LogAction
from specai.core.infrastructure.models.state import Phase
from specai.core.infrastructure.storage import ActivityLogger
from specai.errors import PhaseLockedError

_STATUS_MESSAGES = {
    EditStatus.APPLIED: "✅ Change applied.",
    EditStatus.DISCARDED: "❌ Change discarded.",
    EditStatus.DISPLAYED: "No changes made.",
    EditStatus.EMPTY: "Nothing entered; no changes made.",
}


class EditPhaseCommand(Command):
    """Run one human-approved edit against a phase document."""

    def __init__(self, workflow: PhaseWorkflow):
        """Initialize EditPhaseCommand with dependencies.

        Args:
            workflow: Phase workflow engine
        """
        self.workflow = workflow

    def execute(
        self,
        project_dir: Path,
        phase: Phase,
        action: Optional[EditAction] = None,
    ) -> CommandResult:
        """Execute the edit loop and record its outcome.

        Args:
            project_dir: Project root
            phase: Phase to edit
            action: Edit sub-action, or None to let the operator choose

        Returns:
            CommandResult describing whether the proposal was applied

        Raises:
            ProjectNotFoundError: If the project has no state record
            PhaseLockedError: If the phase is approved
            GenerationFailedError: If the generation service fails
            InputClosedError: If operator input ends early
        """
        store = self.workflow.store
        paths = store.paths(project_dir)
        activity = ActivityLogger.for_project(store.storage, paths.metadata_dir)
        document = paths.relative(paths.document_path(phase))

        try:
            result = self.workflow.edit(project_dir, phase, action)
        except PhaseLockedError as e:
            activity.log(
                command="edit",
                action=LogAction.REFUSED,
                metadata={"phase": phase.value, "reason": e.code.value},
            )
            raise

        files_written = []
        if result.status == EditStatus.APPLIED:
            files_written.append(document)
            activity.log(
                command="edit",
                action=LogAction.APPLIED,
                files=files_written,
                metadata={"phase": phase.value, "edit_action": result.action.value},
            )
        elif result.status == EditStatus.DISCARDED:
            activity.log(
                command="edit",
                action=LogAction.DISCARDED,
                metadata={"phase": phase.value, "edit_action": result.action.value},
            )

        return CommandResult(
            success=True,
            message=_STATUS_MESSAGES[result.status],
            files_written=files_written,
            data={
                "phase": phase.value,
                "action": result.action.value,
                "status": result.status.value,
            },
        )


class ShowPhaseCommand(Command):
    """Return a phase document's content along with its lock state."""

    def __init__(self, workflow: PhaseWorkflow):
        """Initialize ShowPhaseCommand with dependencies.

        Args:
            workflow: Phase workflow engine
        """
        self.workflow = workflow

    def execute(self, project_dir: Path, phase: Phase) -> CommandResult:
        store = self.workflow.store
        state = store.load_state(project_dir)
        content = store.read_phase_document(project_dir, phase)
        return CommandResult(
            success=True,
            message=content or f"_No {phase.value} document yet._",
            data={"phase": phase.value, "approved": state.is_approved(phase)},
        )
