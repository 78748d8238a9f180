"""Integration tests for status and the approval/edit lifecycle."""

from pathlib import Path

import pytest

from specai.core.application.commands.approval import ApproveCommand, UnlockCommand
from specai.core.application.commands.edit import EditPhaseCommand
from specai.core.application.commands.init import InitCommand
from specai.core.application.commands.status import StatusCommand
from specai.core.application.workflow import EditAction
from specai.core.infrastructure.models.state import Phase
from specai.errors import PhaseLockedError


@pytest.mark.integration
def test_status_tracks_initialization(store, tmp_path: Path) -> None:
    """Status flips to initialized once init ran."""
    status = StatusCommand(store)
    assert status.execute(tmp_path).data["initialized"] is False

    InitCommand(store).execute(tmp_path, "demo", git=False)

    report = status.execute(tmp_path).data
    assert report["initialized"] is True
    assert report["phase"] == "constitution"
    assert not any(report["approved"].values())


@pytest.mark.integration
def test_full_constitution_lifecycle(store, tmp_path: Path, make_workflow) -> None:
    """Init, edit, approve, refuse, unlock, edit again."""
    InitCommand(store).execute(tmp_path, "demo", git=False)
    workflow, _, _ = make_workflow(["## One", "## Two"], answers=["y", "y"])
    edit = EditPhaseCommand(workflow)

    edit.execute(tmp_path, Phase.CONSTITUTION, EditAction.IMPROVE)
    ApproveCommand(workflow).execute(tmp_path, Phase.CONSTITUTION)
    assert StatusCommand(store).execute(tmp_path).data["approved"]["constitution"]

    with pytest.raises(PhaseLockedError):
        edit.execute(tmp_path, Phase.CONSTITUTION, EditAction.IMPROVE)

    UnlockCommand(workflow).execute(tmp_path, Phase.CONSTITUTION)
    edit.execute(tmp_path, Phase.CONSTITUTION, EditAction.IMPROVE)

    content = (tmp_path / "specai" / "constitution.md").read_text()
    assert content.endswith("\n\n## One\n\n## Two\n")
    actions = [
        line.split(": ", 1)[1]
        for line in (tmp_path / ".specai" / "log.md").read_text().splitlines()
        if line.startswith("[")
    ]
    assert actions == ["created", "applied", "approved", "refused", "unlocked", "applied"]
