"""Pytest configuration and shared fixtures."""

from collections.abc import Sequence
from pathlib import Path

import pytest

from specai.core.application.workflow import EditAction, PhaseWorkflow
from specai.core.infrastructure.project_store import ProjectStore
from specai.core.infrastructure.storage import Storage
from specai.errors import InputClosedError
from specai.generation.base import GenerationRequest


class FakeGenerator:
    """Generator returning canned completions and recording requests."""

    def __init__(self, responses: Sequence[str] = ()) -> None:
        self.responses = list(responses)
        self.requests: list[GenerationRequest] = []

    def generate(self, request: GenerationRequest) -> str:
        self.requests.append(request)
        return self.responses.pop(0)


class ScriptedOperator:
    """Operator answering from a script; an exhausted script means closed input."""

    def __init__(
        self,
        *,
        choice: EditAction | None = None,
        answers: Sequence[str] = (),
        text: str | None = None,
    ) -> None:
        self.choice = choice
        self.answers = list(answers)
        self.text = text
        self.shown: list[tuple[str, str]] = []
        self.questions: list[str] = []

    def choose_action(self, actions: Sequence[EditAction]) -> EditAction:
        if self.choice is None:
            raise InputClosedError()
        return self.choice

    def ask_text(self, question: str) -> str:
        self.questions.append(question)
        if self.text is None:
            raise InputClosedError()
        return self.text

    def show_proposal(self, title: str, text: str) -> None:
        self.shown.append((title, text))

    def confirm(self, question: str) -> bool:
        self.questions.append(question)
        if not self.answers:
            raise InputClosedError()
        return self.answers.pop(0).strip().lower() in {"y", "yes"}


@pytest.fixture
def storage() -> Storage:
    """Create a Storage instance."""
    return Storage()


@pytest.fixture
def store(storage: Storage) -> ProjectStore:
    """Create a ProjectStore instance."""
    return ProjectStore(storage)


@pytest.fixture
def project_dir(tmp_path: Path, store: ProjectStore) -> Path:
    """Initialized project root."""
    root = tmp_path / "project"
    store.initialize_project(root, "demo", "Demo project")
    return root


@pytest.fixture
def make_workflow(store: ProjectStore):
    """Factory building a PhaseWorkflow around fakes."""

    def _make(
        responses: Sequence[str] = (),
        **operator_kwargs: object,
    ) -> tuple[PhaseWorkflow, FakeGenerator, ScriptedOperator]:
        generator = FakeGenerator(responses)
        operator = ScriptedOperator(**operator_kwargs)
        return PhaseWorkflow(store, generator, operator), generator, operator

    return _make
