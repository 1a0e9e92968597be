"""Filesystem path handling for dotenv files."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from envloader.utils.constant import DEFAULT_ENV_FILENAME
from envloader.utils.errors import EnvFileNotFoundError


def resolve_env_path(
    path: str | os.PathLike[str] | None = None,
    *,
    cwd: str | Path | None = None,
) -> Path:
    """Turn ``path`` into an absolute path.

    Args:
        path: File path; defaults to ``DEFAULT_ENV_FILENAME``.
        cwd: Directory used for relative paths (defaults to ``os.getcwd()``).

    Returns:
        Absolute path. Relative inputs are prefixed with the working
        directory; no normalisation or ``~`` expansion is done.
    """
    candidate = Path(path if path is not None else DEFAULT_ENV_FILENAME)
    if candidate.is_absolute():
        return candidate
    base = Path(cwd) if cwd is not None else Path(os.getcwd())
    return base / candidate


def require_env_file(path: Path) -> Path:
    """Check that a regular file exists at ``path``.

    Args:
        path: Resolved absolute path.

    Returns:
        The same path.

    Raises:
        EnvFileNotFoundError: If nothing, or something other than a regular
            file, exists at the path.
    """
    if not path.is_file():
        logging.debug("dotenv file not found: %s", path)
        raise EnvFileNotFoundError(path)
    return path
