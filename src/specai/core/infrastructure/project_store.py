"""File-backed project store: config, state record and phase documents."""

import errno
import json
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from pydantic import ValidationError

from specai import __version__
from specai.core.infrastructure.models.config import ConfigModel, ProjectInfo
from specai.core.infrastructure.models.state import Phase, StateModel
from specai.core.infrastructure.storage import Storage
from specai.errors import AlreadyInitializedError, ProjectNotFoundError

_LOGGER = logging.getLogger(__name__)

DOCS_DIR_NAME = "specai"
METADATA_DIR_NAME = ".specai"

DEFAULT_CONSTITUTION = """# Constitution

## Purpose
Define the governing principles for this project.

## Authority
This document overrides all other instructions.

## AI Usage
AI assists but does not decide.

## Review
All outputs require human approval.
"""


def _to_json_text(data: dict) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


@dataclass(frozen=True)
class ProjectPaths:
    """Resolved on-disk locations for one project root."""

    root: Path

    @property
    def docs_dir(self) -> Path:
        return self.root / DOCS_DIR_NAME

    @property
    def metadata_dir(self) -> Path:
        return self.root / METADATA_DIR_NAME

    @property
    def state_path(self) -> Path:
        return self.docs_dir / "state.json"

    @property
    def config_path(self) -> Path:
        return self.metadata_dir / "config.json"

    @property
    def settings_path(self) -> Path:
        return self.metadata_dir / "settings.yaml"

    def document_path(self, phase: Phase) -> Path:
        """Return the markdown document path for a phase."""
        return self.docs_dir / f"{phase.value}.md"

    def relative(self, path: Path) -> str:
        """Return path relative to the project root, POSIX style."""
        return path.relative_to(self.root).as_posix()


class ProjectStore:
    """Reads and writes a project's on-disk structure."""

    def __init__(self, storage: Storage):
        """Initialize ProjectStore with dependencies.

        Args:
            storage: Storage instance for file operations
        """
        self.storage = storage

    def paths(self, project_dir: Path) -> ProjectPaths:
        """Return resolved paths for a project root."""
        return ProjectPaths(project_dir)

    def is_initialized(self, project_dir: Path) -> bool:
        """Return True iff both project metadata directories exist."""
        paths = self.paths(project_dir)
        return self.storage.directory_exists(
            paths.docs_dir
        ) and self.storage.directory_exists(paths.metadata_dir)

    def initialize_project(
        self,
        target_dir: Path,
        project_name: str,
        description: str = "",
        force: bool = False,
    ) -> Tuple[ConfigModel, StateModel, List[str]]:
        """Create the project structure with default config, state and constitution.

        Either all three artifacts are written or none: the existence check
        happens before any write, and directories created by this call are
        removed again if a later write fails.

        Args:
            target_dir: Project root directory
            project_name: Name recorded in the config
            description: Description recorded in the config
            force: Overwrite an existing project

        Returns:
            Tuple of (config, state, written file paths relative to root)

        Raises:
            AlreadyInitializedError: If either metadata directory exists and
                force is not set
            FileExistsError: If a non-directory occupies a metadata path
            OSError: If the filesystem rejects a write
        """
        paths = self.paths(target_dir)
        for path in (paths.docs_dir, paths.metadata_dir):
            if path.exists() and not path.is_dir():
                raise FileExistsError(
                    errno.EEXIST, "A file is in the way of the project directory", str(path)
                )
        docs_existed = self.storage.directory_exists(paths.docs_dir)
        metadata_existed = self.storage.directory_exists(paths.metadata_dir)

        if (docs_existed or metadata_existed) and not force:
            raise AlreadyInitializedError(target_dir)

        config = ConfigModel(
            version=__version__,
            project=ProjectInfo(name=project_name, description=description),
        )
        state = StateModel()
        writes = [
            (paths.config_path, _to_json_text(config.model_dump(mode="json"))),
            (paths.state_path, _to_json_text(state.model_dump(mode="json"))),
            (paths.document_path(Phase.CONSTITUTION), DEFAULT_CONSTITUTION),
        ]

        try:
            self.storage.create_directory(paths.docs_dir)
            self.storage.create_directory(paths.metadata_dir)
            for path, content in writes:
                self.storage.write_text(path, content)
        except OSError:
            # Leave nothing behind that this call created.
            if not docs_existed:
                shutil.rmtree(paths.docs_dir, ignore_errors=True)
            if not metadata_existed:
                shutil.rmtree(paths.metadata_dir, ignore_errors=True)
            raise

        _LOGGER.debug("Initialized project %s at %s", project_name, target_dir)
        return config, state, [paths.relative(path) for path, _ in writes]

    def load_state(self, project_dir: Path) -> StateModel:
        """Load the state record.

        Args:
            project_dir: Project root directory

        Returns:
            Parsed StateModel

        Raises:
            ProjectNotFoundError: If the state record is absent or unreadable
        """
        state_path = self.paths(project_dir).state_path
        if not self.storage.file_exists(state_path):
            raise ProjectNotFoundError(project_dir)
        try:
            return StateModel.model_validate(self.storage.read_json(state_path))
        except (json.JSONDecodeError, ValidationError) as e:
            raise ProjectNotFoundError(
                project_dir, detail=f"Corrupted state file: {state_path.name}"
            ) from e

    def save_state(self, project_dir: Path, state: StateModel) -> None:
        """Overwrite the state record in full."""
        self.storage.write_json(
            self.paths(project_dir).state_path, state.model_dump(mode="json")
        )

    def load_config(self, project_dir: Path) -> ConfigModel:
        """Load project config, falling back to defaults when missing or invalid."""
        config_path = self.paths(project_dir).config_path
        try:
            return ConfigModel.model_validate(self.storage.read_json(config_path))
        except (FileNotFoundError, json.JSONDecodeError, ValidationError) as e:
            _LOGGER.warning("Using default project config: %s", e)
            return ConfigModel(
                version=__version__,
                project=ProjectInfo(name=project_dir.resolve().name or "project"),
            )

    def read_phase_document(self, project_dir: Path, phase: Phase) -> str:
        """Return a phase document's text; a missing document reads as empty."""
        return self.storage.read_text(self.paths(project_dir).document_path(phase))

    def append_to_phase_document(
        self, project_dir: Path, phase: Phase, text: str
    ) -> str:
        """Append text to a phase document, separated by one blank line.

        Trailing whitespace of the existing content is trimmed before the
        separator; the whole document is written back.

        Args:
            project_dir: Project root directory
            phase: Target phase
            text: Text to append verbatim

        Returns:
            The new document content
        """
        existing = self.read_phase_document(project_dir, phase).rstrip()
        if existing:
            content = f"{existing}\n\n{text}\n"
        else:
            content = f"{text}\n"
        self.storage.write_text(self.paths(project_dir).document_path(phase), content)
        return content
