"""Environment variable loading utilities for the loader's own settings."""

from __future__ import annotations

import os

SETTINGS_PREFIX = "DOTENV_"


def load_project_env(prefix: str = SETTINGS_PREFIX) -> dict[str, str]:
    """Load the loader's settings from the process environment.

    Args:
        prefix: Only variables whose name starts with this prefix are kept.

    Returns:
        A dictionary of the matching environment variables.
    """
    return {key: value for key, value in os.environ.items() if key.startswith(prefix)}
