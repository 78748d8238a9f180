"""Phase workflow engine: approval locks and the confirm-then-append edit loop."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Protocol, Sequence

from specai.core.infrastructure.models.state import Phase, StateModel
from specai.core.infrastructure.project_store import ProjectStore
from specai.errors import PhaseLockedError, UnknownCommandError
from specai.generation.base import GenerationRequest, TextGenerator
from specai.prompting import (
    build_clarification_prompt,
    build_improvement_prompt,
    build_section_prompt,
)

_LOGGER = logging.getLogger(__name__)


class EditAction(StrEnum):
    """Edit sub-actions offered for a phase document."""

    IMPROVE = "improve"
    DRAFT = "draft"
    CLARIFY = "clarify"
    NOTES = "notes"


EDIT_ACTION_LABELS: dict[EditAction, str] = {
    EditAction.IMPROVE: "Propose one small improvement",
    EditAction.DRAFT: "Draft a section from your notes",
    EditAction.CLARIFY: "Ask clarifying questions (no changes)",
    EditAction.NOTES: "Append your notes as-is",
}


class EditStatus(StrEnum):
    """Outcome of one edit invocation."""

    APPLIED = "applied"
    DISCARDED = "discarded"
    DISPLAYED = "displayed"
    EMPTY = "empty"


@dataclass(frozen=True)
class EditResult:
    """Result of one edit invocation.

    Attributes:
        phase: Edited phase
        action: Sub-action that ran
        status: Outcome
        proposal: Text shown to the operator (empty when nothing was produced)
    """

    phase: Phase
    action: EditAction
    status: EditStatus
    proposal: str = ""


class Operator(Protocol):
    """Human side of the edit loop."""

    def choose_action(self, actions: Sequence[EditAction]) -> EditAction:
        """Let the operator pick one edit action."""

    def ask_text(self, question: str) -> str:
        """Read freeform (possibly multi-line) operator text."""

    def show_proposal(self, title: str, text: str) -> None:
        """Display generated or operator-supplied text."""

    def confirm(self, question: str) -> bool:
        """Ask a yes/no question; blocks until a line is read.

        Raises:
            InputClosedError: If input ends before an answer.
        """


def parse_phase(value: str) -> Phase:
    """Resolve a phase name given on the command line.

    Raises:
        UnknownCommandError: If the name is not a known phase.
    """
    try:
        return Phase(value.strip().lower())
    except ValueError as exc:
        raise UnknownCommandError(
            value, tuple(phase.value for phase in Phase)
        ) from exc


class PhaseWorkflow:
    """Enforces per-phase locks and runs the human-approved edit loop."""

    def __init__(
        self,
        store: ProjectStore,
        generator: TextGenerator,
        operator: Operator,
    ) -> None:
        """Store collaborators.

        Args:
            store: Project store for state and documents.
            generator: External text-generation service.
            operator: Console side of the loop.
        """
        self.store = store
        self.generator = generator
        self.operator = operator

    def approve(self, project_dir: Path, phase: Phase) -> StateModel:
        """Lock a phase. Approving a locked phase is a no-op success."""
        return self._set_approval(project_dir, phase, approved=True)

    def unlock(self, project_dir: Path, phase: Phase) -> StateModel:
        """Unlock a phase. Unlocking an unlocked phase is a no-op success."""
        return self._set_approval(project_dir, phase, approved=False)

    def _set_approval(
        self, project_dir: Path, phase: Phase, *, approved: bool
    ) -> StateModel:
        state = self.store.load_state(project_dir)
        updated = state.with_approval(phase, approved)
        self.store.save_state(project_dir, updated)
        _LOGGER.debug("Set approved[%s]=%s in %s", phase.value, approved, project_dir)
        return updated

    def require_unlocked(self, project_dir: Path, phase: Phase) -> StateModel:
        """Return project state, refusing if the phase is locked.

        Raises:
            ProjectNotFoundError: If the project has no state record.
            PhaseLockedError: If the phase is approved.
        """
        state = self.store.load_state(project_dir)
        if state.is_approved(phase):
            raise PhaseLockedError(phase.value)
        return state

    def edit(
        self,
        project_dir: Path,
        phase: Phase,
        action: EditAction | None = None,
    ) -> EditResult:
        """Run one edit sub-action against an unlocked phase document.

        When ``action`` is None the operator chooses from the menu. Every
        writing action ends in the same confirm-then-append-or-discard step;
        the approval flags are never changed here.

        Args:
            project_dir: Project root.
            phase: Phase to edit.
            action: Sub-action to run, or None to ask the operator.

        Returns:
            Outcome of the edit.

        Raises:
            ProjectNotFoundError: If the project has no state record.
            PhaseLockedError: If the phase is approved.
            GenerationFailedError: If the generation service fails.
            InputClosedError: If operator input ends early.
        """
        self.require_unlocked(project_dir, phase)
        if action is None:
            action = self.operator.choose_action(tuple(EditAction))
        current_text = self.store.read_phase_document(project_dir, phase)

        if action == EditAction.CLARIFY:
            questions = self._generate(
                project_dir, phase, build_clarification_prompt(phase, current_text)
            )
            self.operator.show_proposal("Clarifying Questions", questions)
            return EditResult(phase, action, EditStatus.DISPLAYED, questions)

        if action == EditAction.IMPROVE:
            proposal = self._generate(
                project_dir, phase, build_improvement_prompt(phase, current_text)
            )
        else:
            notes = self.operator.ask_text(
                "Enter your text (finish with an empty line):"
            ).strip()
            if not notes:
                return EditResult(phase, action, EditStatus.EMPTY)
            if action == EditAction.DRAFT:
                proposal = self._generate(
                    project_dir,
                    phase,
                    build_section_prompt(phase, current_text, notes),
                )
            else:
                proposal = notes

        return self._confirm_and_apply(project_dir, phase, action, proposal)

    def _generate(self, project_dir: Path, phase: Phase, prompt: str) -> str:
        model = self.store.load_config(project_dir).model_for(phase)
        return self.generator.generate(GenerationRequest(model=model, prompt=prompt))

    def _confirm_and_apply(
        self,
        project_dir: Path,
        phase: Phase,
        action: EditAction,
        proposal: str,
    ) -> EditResult:
        self.operator.show_proposal("Proposed Change", proposal)
        if not self.operator.confirm("Apply this change?"):
            return EditResult(phase, action, EditStatus.DISCARDED, proposal)
        self.store.append_to_phase_document(project_dir, phase, proposal)
        return EditResult(phase, action, EditStatus.APPLIED, proposal)
