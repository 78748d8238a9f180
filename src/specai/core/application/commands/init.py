"""Init command implementation for initializing a new SpecAI project."""

import re
from pathlib import Path

from specai.core.application.commands.base import Command, CommandResult
from specai.core.infrastructure.git import init_git_repository
from specai.core.infrastructure.models.log import LogAction
from specai.core.infrastructure.project_store import ProjectStore
from specai.core.infrastructure.storage import ActivityLogger


class InitCommand(Command):
    """Command to initialize a new SpecAI project."""

    def __init__(self, store: ProjectStore):
        """Initialize InitCommand with dependencies.

        Args:
            store: ProjectStore used to write the project structure
        """
        self.store = store

    def validate(self, project_name: str) -> bool:
        """Validate the project name.

        Args:
            project_name: Name of the project

        Returns:
            True if validation passes

        Raises:
            ValueError: If the name is empty or contains control characters
        """
        if not project_name or not project_name.strip():
            raise ValueError("Project name cannot be empty")
        if re.search(r"[\x00-\x1f]", project_name):
            raise ValueError("Project name cannot contain control characters")
        return True

    def execute(
        self,
        target_dir: Path,
        project_name: str,
        description: str = "",
        force: bool = False,
        git: bool = True,
    ) -> CommandResult:
        """Execute init command.

        Args:
            target_dir: Project root directory (created if missing)
            project_name: Name recorded in the project config
            description: Description recorded in the project config
            force: Overwrite an existing project
            git: Run ``git init`` when the directory is not a repository

        Returns:
            CommandResult listing the written artifacts

        Raises:
            ValueError: If the project name is invalid
            AlreadyInitializedError: If a project exists and force is not set
            OSError: If the filesystem rejects a write
        """
        self.validate(project_name)
        paths = self.store.paths(target_dir)
        overwriting = self.store.storage.directory_exists(
            paths.docs_dir
        ) or self.store.storage.directory_exists(paths.metadata_dir)

        config, state, files_written = self.store.initialize_project(
            target_dir, project_name.strip(), description, force=force
        )

        git_initialized = False
        if git:
            git_initialized = init_git_repository(target_dir)

        ActivityLogger.for_project(self.store.storage, paths.metadata_dir).log(
            command="init",
            action=LogAction.OVERWRITTEN if overwriting else LogAction.CREATED,
            files=files_written,
            metadata={
                "project_name": config.project.name,
                "phase": state.phase.value,
            },
        )

        message = "SpecAI project initialized successfully.\n\nCreated files:\n"
        for file_path in files_written:
            message += f"  {file_path}\n"

        return CommandResult(
            success=True,
            message=message.rstrip("\n"),
            files_written=files_written,
            data={
                "project_name": config.project.name,
                "phase": state.phase.value,
                "overwritten": overwriting,
                "git_initialized": git_initialized,
            },
        )
