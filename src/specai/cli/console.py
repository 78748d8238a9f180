"""Rich console side of the edit loop and result rendering."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from specai.core.application.commands.base import CommandResult
from specai.core.application.workflow import EDIT_ACTION_LABELS, EditAction
from specai.errors import InputClosedError, SpecAIError

_YES_ANSWERS = frozenset({"y", "yes"})


class ConsoleOperator:
    """Operator implementation reading answers from the terminal."""

    def __init__(self, console: Console) -> None:
        """Store console used for prompts and output.

        Args:
            console: Rich console used for prompts and output.
        """
        self._console = console

    def _read_line(self, prompt: str = "") -> str:
        """Read one line, blocking until it arrives.

        Raises:
            InputClosedError: If the input stream ends.
        """
        try:
            return self._console.input(prompt, markup=False, emoji=False)
        except EOFError as exc:
            raise InputClosedError() from exc

    def choose_action(self, actions: Sequence[EditAction]) -> EditAction:
        """Show the action menu and read a choice by number or name.

        Args:
            actions: Offered actions in menu order.

        Returns:
            Chosen action.
        """
        self._console.print("What would you like to do?")
        for index, action in enumerate(actions, start=1):
            self._console.print(
                f"  {index}. {EDIT_ACTION_LABELS[action]}", markup=False
            )
        by_name = {action.value: action for action in actions}
        while True:
            answer = self._read_line(f"Choose [1-{len(actions)}]: ").strip().lower()
            if answer.isdigit() and 1 <= int(answer) <= len(actions):
                return actions[int(answer) - 1]
            if answer in by_name:
                return by_name[answer]
            self._console.print(f"Please enter a number from 1 to {len(actions)}.")

    def ask_text(self, question: str) -> str:
        """Read lines until an empty line; end of input after text also finishes.

        Args:
            question: Instruction shown before reading.

        Returns:
            Entered text joined with newlines.

        Raises:
            InputClosedError: If input ends before any line was entered.
        """
        self._console.print(question, markup=False)
        lines: list[str] = []
        while True:
            try:
                line = self._read_line()
            except InputClosedError:
                if lines:
                    break
                raise
            if not line.strip():
                break
            lines.append(line)
        return "\n".join(lines)

    def show_proposal(self, title: str, text: str) -> None:
        """Display text in a titled panel without markup interpretation.

        Args:
            title: Panel title.
            text: Body text.
        """
        self._console.print(Panel(Text(text), title=title, border_style="cyan"))

    def confirm(self, question: str) -> bool:
        """Ask a yes/no question; only ``y`` or ``yes`` count as yes.

        Args:
            question: Question text.

        Returns:
            True when the operator confirmed.
        """
        answer = self._read_line(f"{question} (y/n): ")
        return answer.strip().lower() in _YES_ANSWERS


def render_result(console: Console, result: CommandResult) -> None:
    """Print a command result message.

    Args:
        console: Output console.
        result: Command result.
    """
    console.print(result.message, markup=False, emoji=False, highlight=False)


def render_status(console: Console, result: CommandResult) -> None:
    """Print status message and, when present, a table of phase locks.

    Args:
        console: Output console.
        result: Status command result.
    """
    render_result(console, result)
    approved = result.data.get("approved")
    if not approved:
        return
    table = Table(header_style="bold")
    table.add_column("Phase", style="cyan")
    table.add_column("Lock")
    for phase, locked in approved.items():
        table.add_row(phase, "locked" if locked else "unlocked")
    console.print(table)


def render_document(console: Console, result: CommandResult) -> None:
    """Render a phase document as markdown with its lock state.

    Args:
        console: Output console.
        result: Show command result.
    """
    lock = "locked" if result.data.get("approved") else "unlocked"
    console.print(
        Panel(
            Markdown(result.message),
            title=f"{result.data.get('phase')} ({lock})",
            border_style="green",
            expand=True,
        )
    )


def render_error(console: Console, error: SpecAIError) -> None:
    """Print an error and its hint.

    Args:
        console: Error console.
        error: Raised SpecAI error.
    """
    console.print(f"✗ {error}", markup=False, highlight=False)
    if error.hint:
        console.print(error.hint, markup=False, highlight=False)
