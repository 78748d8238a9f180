"""Typer CLI entrypoint for SpecAI."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from specai.cli.console import (
    ConsoleOperator,
    render_document,
    render_error,
    render_result,
    render_status,
)
from specai.config import GenerationSettings, load_settings
from specai.core.application.commands.approval import ApproveCommand, UnlockCommand
from specai.core.application.commands.base import CommandResult
from specai.core.application.commands.edit import EditPhaseCommand, ShowPhaseCommand
from specai.core.application.commands.init import InitCommand
from specai.core.application.commands.status import StatusCommand
from specai.core.application.workflow import EditAction, PhaseWorkflow, parse_phase
from specai.core.infrastructure.models.state import Phase
from specai.core.infrastructure.project_store import ProjectStore
from specai.core.infrastructure.storage import Storage
from specai.errors import SpecAIError
from specai.generation import GenerationRequest, OllamaGenerator, TextGenerator

app = typer.Typer(
    name="specai",
    help="SpecAI: Spec-Driven AI Development Framework",
    add_completion=False,
    no_args_is_help=True,
)
_CONSOLE = Console()
_ERR_CONSOLE = Console(stderr=True)
_LOGGING_CONFIGURED = False
_LOGGER = logging.getLogger(__name__)

PathArgument = Annotated[
    Optional[Path],
    typer.Argument(help="Project directory (defaults to the current directory)."),
]
ActionOption = Annotated[
    Optional[EditAction],
    typer.Option(
        "--action",
        "-a",
        case_sensitive=False,
        help="Edit action to run; prompts with a menu when omitted.",
    ),
]


def _configure_logging(verbose: bool = False) -> None:
    """Configure Rich-backed logging once for CLI commands."""
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=_ERR_CONSOLE, show_path=False)],
    )
    _LOGGING_CONFIGURED = True


def _resolve_project_dir(path: Path | None) -> Path:
    """Resolve an optional path argument against the current directory."""
    if path is None:
        return Path.cwd()
    return (Path.cwd() / path).resolve()


def _build_generator(settings: GenerationSettings) -> TextGenerator:
    """Build the generation client used by edit commands."""
    return OllamaGenerator(settings)


class _DeferredGenerator:
    """Load generation settings and build the client on the first request."""

    def __init__(self, settings_path: Path) -> None:
        self._settings_path = settings_path
        self._generator: TextGenerator | None = None

    def generate(self, request: GenerationRequest) -> str:
        if self._generator is None:
            settings = load_settings(self._settings_path)
            self._generator = _build_generator(settings.generation)
        return self._generator.generate(request)


def _build_workflow(project_dir: Path) -> PhaseWorkflow:
    """Wire store, generator and console operator for one project.

    Settings are only read once a proposal is requested, so lock changes and
    reads work even when the settings file is broken.
    """
    store = ProjectStore(Storage())
    return PhaseWorkflow(
        store=store,
        generator=_DeferredGenerator(store.paths(project_dir).settings_path),
        operator=ConsoleOperator(_CONSOLE),
    )


def _run(
    action: Callable[[], CommandResult],
    render: Callable[[Console, CommandResult], None] = render_result,
) -> None:
    """Run one command, rendering its result or reporting its failure.

    Args:
        action: Zero-argument callable executing the command.
        render: Renderer for a successful result.
    """
    try:
        result = action()
    except SpecAIError as exc:
        _LOGGER.debug("Command failed with %s", exc.code.value)
        render_error(_ERR_CONSOLE, exc)
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        _ERR_CONSOLE.print(f"✗ {exc}", markup=False)
        raise typer.Exit(code=1) from exc
    except OSError as exc:
        _ERR_CONSOLE.print(f"✗ File system error: {exc}", markup=False)
        _ERR_CONSOLE.print(
            "Please check file system permissions and available disk space."
        )
        raise typer.Exit(code=1) from exc
    render(_CONSOLE, result)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging.")
    ] = False,
) -> None:
    """SpecAI: Spec-Driven AI Development Framework."""
    _configure_logging(verbose)


@app.command()
def init(
    path: PathArgument = None,
    here: Annotated[
        bool, typer.Option("--here", help="Initialize in the current directory.")
    ] = False,
    force: Annotated[
        bool, typer.Option("--force", help="Overwrite an existing SpecAI setup.")
    ] = False,
    no_git: Annotated[
        bool, typer.Option("--no-git", help="Skip git initialization.")
    ] = False,
    name: Annotated[
        Optional[str],
        typer.Option("--name", help="Project name (defaults to the directory name)."),
    ] = None,
    description: Annotated[
        str, typer.Option("--description", help="Short project description.")
    ] = "",
) -> None:
    """Initialize a SpecAI project."""
    target_dir = Path.cwd() if here else _resolve_project_dir(path)
    command = InitCommand(ProjectStore(Storage()))
    _run(
        lambda: command.execute(
            target_dir,
            name or target_dir.name,
            description,
            force=force,
            git=not no_git,
        )
    )


@app.command()
def status(path: PathArgument = None) -> None:
    """Report whether SpecAI is initialized and which phases are locked."""
    command = StatusCommand(ProjectStore(Storage()))
    _run(lambda: command.execute(_resolve_project_dir(path)), render_status)


@app.command()
def constitution(path: PathArgument = None, action: ActionOption = None) -> None:
    """Refine the constitution with human-approved AI proposals."""
    project_dir = _resolve_project_dir(path)
    _run(
        lambda: EditPhaseCommand(_build_workflow(project_dir)).execute(
            project_dir, Phase.CONSTITUTION, action
        )
    )


@app.command()
def edit(
    phase: Annotated[str, typer.Argument(help="Phase document to edit.")],
    path: PathArgument = None,
    action: ActionOption = None,
) -> None:
    """Refine any phase document with human-approved AI proposals."""
    project_dir = _resolve_project_dir(path)
    _run(
        lambda: EditPhaseCommand(_build_workflow(project_dir)).execute(
            project_dir, parse_phase(phase), action
        )
    )


@app.command()
def show(
    phase: Annotated[str, typer.Argument(help="Phase document to show.")],
    path: PathArgument = None,
) -> None:
    """Show a phase document and its lock state."""
    project_dir = _resolve_project_dir(path)
    _run(
        lambda: ShowPhaseCommand(_build_workflow(project_dir)).execute(
            project_dir, parse_phase(phase)
        ),
        render_document,
    )


@app.command()
def approve(
    phase: Annotated[str, typer.Argument(help="Phase to approve and lock.")],
    path: PathArgument = None,
) -> None:
    """Approve a phase document and lock it against edits."""
    project_dir = _resolve_project_dir(path)
    _run(
        lambda: ApproveCommand(_build_workflow(project_dir)).execute(
            project_dir, parse_phase(phase)
        )
    )


@app.command()
def unlock(
    phase: Annotated[str, typer.Argument(help="Phase to unlock.")],
    path: PathArgument = None,
) -> None:
    """Unlock an approved phase document."""
    project_dir = _resolve_project_dir(path)
    _run(
        lambda: UnlockCommand(_build_workflow(project_dir)).execute(
            project_dir, parse_phase(phase)
        )
    )


def main() -> None:
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
