"""Storage and activity logging infrastructure for filesystem operations."""

import json
from datetime import datetime, timezone
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Dict, List, Optional

from specai.core.infrastructure.models.log import LogAction, LogEntryModel


class Storage:
    """Handles filesystem operations for SpecAI project artifacts."""

    def create_directory(self, path: Path) -> None:
        """Create directory if it doesn't exist.

        Args:
            path: Directory path to create
        """
        path.mkdir(parents=True, exist_ok=True)

    def file_exists(self, path: Path) -> bool:
        """Check if file exists.

        Args:
            path: File path to check

        Returns:
            True if file exists, False otherwise
        """
        return path.exists() and path.is_file()

    def directory_exists(self, path: Path) -> bool:
        """Check if directory exists."""
        return path.exists() and path.is_dir()

    def read_text(self, path: Path) -> str:
        """Read a UTF-8 text file, returning empty text when it is absent.

        Args:
            path: Text file path to read

        Returns:
            File content, or "" if the file does not exist
        """
        if not path.exists():
            return ""
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        """Write text file atomically.

        Uses a temporary file and atomic rename so readers never observe a
        partially written document.

        Args:
            path: File path to write
            content: Full file content
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path: Optional[Path] = None
        try:
            with NamedTemporaryFile(
                mode="w", encoding="utf-8", dir=path.parent, delete=False, suffix=".tmp"
            ) as tmp_file:
                tmp_path = Path(tmp_file.name)
                tmp_file.write(content)
            tmp_path.replace(path)
        except OSError:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise

    def read_json(self, path: Path) -> Dict:
        """Read JSON file.

        Args:
            path: JSON file path to read

        Returns:
            Dictionary containing parsed JSON data

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If JSON is corrupted
        """
        if not path.exists():
            raise FileNotFoundError(f"JSON file not found: {path}")

        content = path.read_text(encoding="utf-8")
        try:
            result: Dict = json.loads(content)
        except json.JSONDecodeError as e:
            raise json.JSONDecodeError(
                f"Corrupted JSON file: {path}. Error: {e.msg}", e.doc, e.pos
            ) from e
        return result

    def write_json(self, path: Path, data: Dict) -> None:
        """Write JSON file atomically.

        Args:
            path: JSON file path to write
            data: Dictionary to serialize as JSON
        """
        self.write_text(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")

    def append_jsonl(self, path: Path, entry: Dict) -> None:
        """Append JSONL entry to file.

        Args:
            path: JSONL file path
            entry: Dictionary to append as a single line
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("a", encoding="utf-8") as f:
            json.dump(entry, f, ensure_ascii=False)
            f.write("\n")

    def append_markdown_log(self, path: Path, entry: str) -> None:
        """Append markdown log entry.

        Args:
            path: Markdown log file path
            entry: Markdown-formatted log entry to append
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("a", encoding="utf-8") as f:
            f.write(entry)
            if not entry.endswith("\n"):
                f.write("\n")


class ActivityLogger:
    """Handles dual-format activity logging (JSONL and Markdown) for commands.

    Entries are only written when the log directory already exists, so a
    failed command never creates project metadata as a side effect.
    """

    def __init__(self, storage: Storage, log_jsonl_path: Path, log_md_path: Path):
        """Initialize logger with storage and log file paths.

        Args:
            storage: Storage instance for file operations
            log_jsonl_path: Path to JSONL log file (.specai/log.jsonl)
            log_md_path: Path to Markdown log file (.specai/log.md)
        """
        self.storage = storage
        self.log_jsonl_path = log_jsonl_path
        self.log_md_path = log_md_path

    @classmethod
    def for_project(cls, storage: Storage, metadata_dir: Path) -> "ActivityLogger":
        """Build a logger writing into a project's metadata directory."""
        return cls(storage, metadata_dir / "log.jsonl", metadata_dir / "log.md")

    def log(
        self,
        command: str,
        action: LogAction,
        files: Optional[List[str]] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> Optional[LogEntryModel]:
        """Log command outcome to both log.md and log.jsonl.

        Args:
            command: Command name ("init", "approve", "edit", ...)
            action: Outcome of the command
            files: File paths affected, relative to the project root
            metadata: Optional string metadata (phase, edit action, ...)

        Returns:
            The written entry, or None when the log directory is missing
        """
        if not self.storage.directory_exists(self.log_jsonl_path.parent):
            return None

        now = datetime.now(timezone.utc)
        entry = LogEntryModel(
            timestamp=now,
            command=command,
            action=action,
            files=files or [],
            metadata=metadata,
        )

        self.storage.append_jsonl(self.log_jsonl_path, entry.model_dump(mode="json"))
        self.storage.append_markdown_log(
            self.log_md_path, self._format_markdown_entry(entry, now)
        )
        return entry

    def _format_markdown_entry(self, entry: LogEntryModel, timestamp: datetime) -> str:
        """Format log entry as Markdown.

        Args:
            entry: LogEntryModel instance
            timestamp: Datetime object

        Returns:
            Markdown-formatted log entry string
        """
        display_time = timestamp.strftime("%Y-%m-%d %H:%M:%S")

        lines = [f"[{display_time}] {entry.command}: {entry.action.value}"]
        for file_path in entry.files:
            lines.append(f"- {file_path}")

        if entry.metadata:
            for key, value in entry.metadata.items():
                lines.append(f"  {key}: {value}")

        return "\n".join(lines)
