"""Base command interface following the Command Pattern."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class CommandResult:
    """Result of one command execution.

    Attributes:
        success: Whether the command executed successfully
        message: Human-readable summary message
        files_written: Project-relative paths written by the command
        data: Structured payload for renderers
    """

    success: bool
    message: str
    files_written: List[str] = field(default_factory=list)
    data: Dict[str, Any] = field(default_factory=dict)


class Command(ABC):
    """Abstract base class for all SpecAI commands.

    Commands raise ``SpecAIError`` subclasses for terminal failures and
    return a CommandResult otherwise.
    """

    @abstractmethod
    def execute(self, *args, **kwargs) -> CommandResult:
        """Execute the command and return result.

        Returns:
            CommandResult instance with success status and message
        """
