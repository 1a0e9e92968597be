"""Project-wide constants and configuration."""

from __future__ import annotations

from .env_loader import load_project_env

# Load once (single source of truth)
_ENV = load_project_env()

# Case-insensitive spellings accepted by DotEnv.get_bool
TRUE_VALUES = frozenset({"true", "yes", "1"})
FALSE_VALUES = frozenset({"false", "no", "0"})

# Exposed constants (typed, with sensible defaults)
DEFAULT_ENV_FILENAME: str = _ENV.get("DOTENV_FILE", ".env")
DEFAULT_ENCODING: str = _ENV.get("DOTENV_ENCODING", "utf-8")
STRICT_PARSING: bool = _ENV.get("DOTENV_STRICT", "0").strip().lower() in TRUE_VALUES
