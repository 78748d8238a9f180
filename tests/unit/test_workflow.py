"""Unit tests for the phase workflow engine."""

from pathlib import Path

import pytest

from specai.core.application.workflow import (
    EditAction,
    EditStatus,
    parse_phase,
)
from specai.core.infrastructure.models.config import DEFAULT_CODER_MODEL
from specai.core.infrastructure.models.state import Phase
from specai.errors import (
    GenerationFailedError,
    InputClosedError,
    PhaseLockedError,
    ProjectNotFoundError,
    UnknownCommandError,
)


def _constitution(project_dir: Path) -> Path:
    return project_dir / "specai" / "constitution.md"


@pytest.mark.unit
def test_confirmed_improvement_is_appended(project_dir: Path, make_workflow) -> None:
    """A confirmed proposal lands after one blank line."""
    _constitution(project_dir).write_text("# Constitution\n")
    workflow, generator, operator = make_workflow(
        ["## New Rule\nBe concise."], answers=["y"]
    )

    result = workflow.edit(project_dir, Phase.CONSTITUTION, EditAction.IMPROVE)

    assert result.status == EditStatus.APPLIED
    assert (
        _constitution(project_dir).read_text()
        == "# Constitution\n\n## New Rule\nBe concise.\n"
    )
    assert operator.shown == [("Proposed Change", "## New Rule\nBe concise.")]
    assert "# Constitution" in generator.requests[0].prompt


@pytest.mark.unit
def test_declined_improvement_leaves_document_unchanged(
    project_dir: Path, make_workflow
) -> None:
    """Declining keeps the document byte-for-byte."""
    before = _constitution(project_dir).read_bytes()
    workflow, _, _ = make_workflow(["## Rule"], answers=["n"])

    result = workflow.edit(project_dir, Phase.CONSTITUTION, EditAction.IMPROVE)

    assert result.status == EditStatus.DISCARDED
    assert _constitution(project_dir).read_bytes() == before


@pytest.mark.unit
def test_confirmed_edit_keeps_prior_content_as_prefix(
    project_dir: Path, make_workflow
) -> None:
    """Accepted text strictly grows the document."""
    before = _constitution(project_dir).read_text()
    workflow, _, _ = make_workflow(["## Extra"], answers=["YES"])

    workflow.edit(project_dir, Phase.CONSTITUTION, EditAction.IMPROVE)

    after = _constitution(project_dir).read_text()
    assert len(after) > len(before)
    assert after.startswith(before.rstrip())


@pytest.mark.unit
def test_edit_never_changes_approval_flags(project_dir: Path, store, make_workflow) -> None:
    """Only document content changes on acceptance."""
    state_before = store.load_state(project_dir)
    workflow, _, _ = make_workflow(["## Extra"], answers=["y"])

    workflow.edit(project_dir, Phase.CONSTITUTION, EditAction.IMPROVE)

    assert store.load_state(project_dir) == state_before


@pytest.mark.unit
def test_locked_phase_refuses_edit_before_generation(
    project_dir: Path, make_workflow
) -> None:
    """Approved phases fail with PhaseLocked and never call the service."""
    workflow, generator, _ = make_workflow(["## Rule"], answers=["y"])
    workflow.approve(project_dir, Phase.CONSTITUTION)

    with pytest.raises(PhaseLockedError) as exc_info:
        workflow.edit(project_dir, Phase.CONSTITUTION, EditAction.IMPROVE)

    assert "specai unlock constitution" in exc_info.value.hint
    assert generator.requests == []


@pytest.mark.unit
def test_unlock_restores_editability(project_dir: Path, make_workflow) -> None:
    """Unlocking a locked phase allows edits again."""
    workflow, _, _ = make_workflow(["## Rule"], answers=["y"])
    workflow.approve(project_dir, Phase.CONSTITUTION)
    workflow.unlock(project_dir, Phase.CONSTITUTION)

    result = workflow.edit(project_dir, Phase.CONSTITUTION, EditAction.IMPROVE)

    assert result.status == EditStatus.APPLIED


@pytest.mark.unit
@pytest.mark.parametrize("method", ["approve", "unlock"])
def test_approve_and_unlock_are_idempotent(
    project_dir: Path, store, make_workflow, method: str
) -> None:
    """Calling twice produces the same state as calling once."""
    workflow, _, _ = make_workflow()
    transition = getattr(workflow, method)

    once = transition(project_dir, Phase.CONSTITUTION)
    twice = transition(project_dir, Phase.CONSTITUTION)

    assert once == twice
    assert store.load_state(project_dir) == once


@pytest.mark.unit
def test_approve_without_project_raises(tmp_path: Path, make_workflow) -> None:
    """Transitions require a state record."""
    workflow, _, _ = make_workflow()

    with pytest.raises(ProjectNotFoundError):
        workflow.approve(tmp_path, Phase.CONSTITUTION)


@pytest.mark.unit
def test_closed_input_during_confirmation_leaves_document(
    project_dir: Path, make_workflow
) -> None:
    """End of input is an error, not a silent decline."""
    before = _constitution(project_dir).read_bytes()
    workflow, _, _ = make_workflow(["## Rule"], answers=[])

    with pytest.raises(InputClosedError):
        workflow.edit(project_dir, Phase.CONSTITUTION, EditAction.IMPROVE)

    assert _constitution(project_dir).read_bytes() == before


@pytest.mark.unit
def test_generation_failure_propagates(project_dir: Path, store, make_workflow) -> None:
    """Service failures end the edit without touching the document."""
    before = _constitution(project_dir).read_bytes()
    workflow, _, operator = make_workflow(answers=["y"])

    class _FailingGenerator:
        def generate(self, request):
            raise GenerationFailedError("unavailable", "down")

    workflow.generator = _FailingGenerator()

    with pytest.raises(GenerationFailedError):
        workflow.edit(project_dir, Phase.CONSTITUTION, EditAction.IMPROVE)

    assert operator.shown == []
    assert _constitution(project_dir).read_bytes() == before


@pytest.mark.unit
def test_draft_turns_notes_into_section(project_dir: Path, make_workflow) -> None:
    """Draft sends operator notes to the service and appends the section."""
    workflow, generator, _ = make_workflow(
        ["## Testing\nAll code is tested."], text="we always test", answers=["y"]
    )

    result = workflow.edit(project_dir, Phase.CONSTITUTION, EditAction.DRAFT)

    assert result.status == EditStatus.APPLIED
    assert "we always test" in generator.requests[0].prompt
    assert _constitution(project_dir).read_text().endswith(
        "\n\n## Testing\nAll code is tested.\n"
    )


@pytest.mark.unit
def test_clarify_only_displays_questions(project_dir: Path, make_workflow) -> None:
    """Clarifying questions are never written."""
    before = _constitution(project_dir).read_bytes()
    workflow, _, operator = make_workflow(["1. Who approves?"])

    result = workflow.edit(project_dir, Phase.CONSTITUTION, EditAction.CLARIFY)

    assert result.status == EditStatus.DISPLAYED
    assert operator.shown == [("Clarifying Questions", "1. Who approves?")]
    assert _constitution(project_dir).read_bytes() == before


@pytest.mark.unit
def test_notes_append_raw_text_without_generation(
    project_dir: Path, make_workflow
) -> None:
    """Notes skip the service but still require confirmation."""
    workflow, generator, _ = make_workflow(text="Remember the budget.", answers=["y"])

    result = workflow.edit(project_dir, Phase.CONSTITUTION, EditAction.NOTES)

    assert result.status == EditStatus.APPLIED
    assert generator.requests == []
    assert _constitution(project_dir).read_text().endswith("\n\nRemember the budget.\n")


@pytest.mark.unit
def test_empty_notes_change_nothing(project_dir: Path, make_workflow) -> None:
    """Blank input ends the edit without a confirmation prompt."""
    workflow, _, operator = make_workflow(text="   ")

    result = workflow.edit(project_dir, Phase.CONSTITUTION, EditAction.NOTES)

    assert result.status == EditStatus.EMPTY
    assert operator.shown == []


@pytest.mark.unit
def test_menu_choice_used_when_no_action(project_dir: Path, make_workflow) -> None:
    """Without an explicit action the operator picks one."""
    workflow, _, _ = make_workflow(["1. Why?"], choice=EditAction.CLARIFY)

    result = workflow.edit(project_dir, Phase.CONSTITUTION)

    assert result.action == EditAction.CLARIFY


@pytest.mark.unit
def test_coder_phases_use_coder_model(project_dir: Path, make_workflow) -> None:
    """Implement and review phases generate with the coder model."""
    workflow, generator, _ = make_workflow(["- note"], answers=["n"])

    workflow.edit(project_dir, Phase.IMPLEMENT, EditAction.IMPROVE)

    assert generator.requests[0].model == DEFAULT_CODER_MODEL


@pytest.mark.unit
def test_parse_phase_rejects_unknown_target() -> None:
    """Unknown phase names raise UnknownCommand listing valid phases."""
    assert parse_phase(" Spec ") == Phase.SPEC
    with pytest.raises(UnknownCommandError) as exc_info:
        parse_phase("deploy")
    assert "constitution" in exc_info.value.hint
