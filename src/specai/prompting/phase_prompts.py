"""Phase-specific prompt assembly for document edits."""

from __future__ import annotations

from specai.core.infrastructure.models.state import Phase

_PHASE_SUBJECTS: dict[Phase, str] = {
    Phase.CONSTITUTION: "a project constitution",
    Phase.SPEC: "a product specification",
    Phase.PLAN: "a technical implementation plan",
    Phase.TASKS: "an implementation task list",
    Phase.IMPLEMENT: "implementation notes",
    Phase.REVIEW: "a project review",
}

_IMPROVEMENT_TARGETS: dict[Phase, str] = {
    Phase.CONSTITUTION: "Propose ONE small improvement or missing rule.",
    Phase.SPEC: "Propose ONE missing requirement or clarified acceptance criterion.",
    Phase.PLAN: "Propose ONE missing design decision or risk.",
    Phase.TASKS: "Propose ONE missing or under-specified task.",
    Phase.IMPLEMENT: "Propose ONE missing implementation note.",
    Phase.REVIEW: "Propose ONE missing review finding.",
}


def _document_block(current_text: str) -> str:
    body = current_text.strip() or "(empty)"
    return f"---\n{body}\n---"


def build_improvement_prompt(phase: Phase, current_text: str) -> str:
    """Build the prompt asking for one small improvement to a phase document.

    Args:
        phase: Phase being edited.
        current_text: Current document content.

    Returns:
        Prompt text.
    """
    return (
        f"You are helping refine {_PHASE_SUBJECTS[phase]}.\n\n"
        f"Current {phase.value}:\n"
        f"{_document_block(current_text)}\n\n"
        f"{_IMPROVEMENT_TARGETS[phase]}\n"
        "Return only the proposed markdown section.\n"
        "Do not explain.\n"
    )


def build_section_prompt(phase: Phase, current_text: str, notes: str) -> str:
    """Build the prompt turning operator notes into a markdown section.

    Args:
        phase: Phase being edited.
        current_text: Current document content.
        notes: Freeform operator input.

    Returns:
        Prompt text.
    """
    return (
        f"You are helping write {_PHASE_SUBJECTS[phase]}.\n\n"
        f"Current {phase.value}:\n"
        f"{_document_block(current_text)}\n\n"
        "The user wrote these notes:\n"
        f"{_document_block(notes)}\n\n"
        "Turn the notes into ONE markdown section that fits the document.\n"
        "Keep the user's intent; do not invent new rules.\n"
        "Return only the markdown section.\n"
    )


def build_clarification_prompt(phase: Phase, current_text: str) -> str:
    """Build the prompt asking for clarifying questions about a document.

    Args:
        phase: Phase being edited.
        current_text: Current document content.

    Returns:
        Prompt text.
    """
    return (
        f"You are reviewing {_PHASE_SUBJECTS[phase]}.\n\n"
        f"Current {phase.value}:\n"
        f"{_document_block(current_text)}\n\n"
        "Ask up to five short clarifying questions that would help complete it.\n"
        "Return a numbered markdown list of questions only.\n"
    )
