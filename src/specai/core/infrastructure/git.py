"""Best-effort git repository initialization."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

_LOGGER = logging.getLogger(__name__)


def init_git_repository(target_dir: Path) -> bool:
    """Run ``git init`` in target_dir unless it already is a repository.

    Failure never propagates: a missing git binary or a failing command is
    logged as a warning.

    Args:
        target_dir: Directory to initialize.

    Returns:
        True when a repository was created by this call.
    """
    if (target_dir / ".git").exists():
        return False
    try:
        subprocess.run(
            ["git", "init"],
            cwd=target_dir,
            check=True,
            capture_output=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        _LOGGER.warning("Git initialization failed or git not available: %s", exc)
        return False
    _LOGGER.info("Initialized git repository.")
    return True
