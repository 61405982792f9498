"""Environment helper utilities.

Loads a ``.env`` file from the project root (the first ancestor directory that
holds ``pyproject.toml``) so that ``RETAIL_*`` engine overrides defined there
become visible to ``config.config.EngineConfig.from_env``. A different file can
be selected with the ``RETAIL_ENV_FILE`` variable.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

__all__ = ["find_project_root", "load_project_dotenv"]


def find_project_root(start: Path | None = None) -> Path:
    """Walk upwards until a directory containing `pyproject.toml` is found."""
    current = start or Path(__file__).resolve().parent
    for _ in range(10):
        if (current / "pyproject.toml").exists():
            return current
        if current.parent == current:
            break
        current = current.parent
    return Path(__file__).resolve().parent


def load_project_dotenv(start: Path | None = None) -> bool:
    """Load variables from the project `.env` without overriding the process env.

    Returns True when a file was found and loaded.
    """
    explicit = os.getenv("RETAIL_ENV_FILE")
    dotenv_path = Path(explicit) if explicit else find_project_root(start) / ".env"
    if not dotenv_path.exists():
        return False
    return load_dotenv(dotenv_path=dotenv_path, override=False)
