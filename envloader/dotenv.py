"""Dotenv loader facade.

This module provides a thin layer over the loader services: it resolves the
file, loads it into an environment table and exposes typed accessors that
read live from that table.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from envloader.services.environment import (
    EnvironmentProtocol,
    get_default_environment,
)
from envloader.services.file_resolver import require_env_file, resolve_env_path
from envloader.services.loader import LoaderService, LoadResult, LoadStatus
from envloader.utils.constant import FALSE_VALUES, TRUE_VALUES

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
# Values outside a signed 64-bit integer are treated as unparseable
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


class DotEnv:
    """Load a dotenv file and read variables from the environment.

    By default construction resolves the path, checks that the file exists
    and immediately loads it into the process environment, so later
    ``os.getenv`` calls and child processes see the values. Pass
    ``auto_load=False`` to resolve only and call :meth:`parse` or
    :meth:`load` explicitly.

    Accessors never cache: they always consult the environment table, so
    changes made after loading are visible.
    """

    def __init__(
        self,
        path: str | os.PathLike[str] | None = None,
        *,
        environment: EnvironmentProtocol | None = None,
        strict: bool | None = None,
        auto_load: bool = True,
    ) -> None:
        """Resolve the dotenv file and optionally load it.

        Args:
            path: File path, absolute or relative to the working directory.
                Defaults to ``.env``.
            environment: Table to load into and read from (defaults to the
                process environment).
            strict: Treat malformed lines as a failed load.
            auto_load: Load the file as part of construction.

        Raises:
            EnvFileNotFoundError: If no regular file exists at the path.
        """
        self._file_path = require_env_file(resolve_env_path(path))
        self._environment = environment if environment is not None else get_default_environment()
        self._loader = LoaderService(self._environment, strict=strict)
        self._last_result: LoadResult | None = None

        if auto_load:
            self.load()

    @property
    def file_path(self) -> Path:
        """Absolute path of the dotenv file."""
        return self._file_path

    @property
    def environment(self) -> EnvironmentProtocol:
        return self._environment

    @property
    def last_result(self) -> LoadResult | None:
        """Result of the most recent parse or load, if any."""
        return self._last_result

    def parse(self) -> LoadResult:
        """Read and parse the file without writing anything.

        Returns:
            LoadResult with the parsed entries.
        """
        self._last_result = self._loader.parse(self._file_path)
        return self._last_result

    def apply(self, result: LoadResult) -> list[str]:
        """Write the entries of a parsed result to the environment.

        Args:
            result: Result from :meth:`parse`.

        Returns:
            Keys that were written (empty if ``result`` is not ok).
        """
        return self._loader.apply_result(result).applied_keys

    def load(self) -> LoadResult:
        """Parse the file and apply it to the environment.

        Unreadable files and (in strict mode) malformed files set nothing;
        the returned status says why. Re-running overwrites earlier values.

        Returns:
            LoadResult of this load.
        """
        self._last_result = self._loader.load(self._file_path)
        return self._last_result

    def value(self, key: str, default: str | None = None) -> str | None:
        """Return the value for ``key``, or ``default`` if unset.

        Args:
            key: Variable name.
            default: Value returned when the variable is unset.

        Returns:
            The variable's string value or the default.
        """
        value = self._environment.get(key)
        if value is None:
            return default
        return value

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Return ``key`` parsed as a base-10 integer.

        Args:
            key: Variable name.
            default: Returned when the variable is unset, not an integer or
                outside the signed 64-bit range.

        Returns:
            The parsed integer or the default.
        """
        value = self.value(key)
        if value is None or not _INT_PATTERN.fullmatch(value):
            return default
        number = int(value)
        if not _INT_MIN <= number <= _INT_MAX:
            return default
        return number

    def get_bool(self, key: str, default: bool | None = None) -> bool | None:
        """Return ``key`` interpreted as a boolean.

        ``true``/``yes``/``1`` and ``false``/``no``/``0`` are recognised,
        case-insensitively.

        Args:
            key: Variable name.
            default: Returned when the variable is unset or unrecognised.

        Returns:
            True, False or the default.
        """
        value = self.value(key)
        if value is None:
            return default

        lowered = value.lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
        return default

    def all(self) -> dict[str, str]:
        """Snapshot every variable in the environment table.

        Returns:
            A copy of the whole table, including variables this loader did
            not set.
        """
        return self._environment.snapshot()

    def __getitem__(self, key: str) -> str | None:
        return self.value(key)

    def __contains__(self, key: object) -> bool:
        return key in self._environment

    def __repr__(self) -> str:
        return f"DotEnv({str(self._file_path)!r})"


def load_dotenv(
    path: str | os.PathLike[str] | None = None,
    *,
    environment: EnvironmentProtocol | None = None,
    strict: bool | None = None,
) -> LoadResult:
    """Load a dotenv file without raising when it is missing.

    Args:
        path: File path; defaults to ``.env`` in the working directory.
        environment: Target table (defaults to the process environment).
        strict: Treat malformed lines as a failed load.

    Returns:
        LoadResult; NOT_FOUND when the file does not exist.
    """
    resolved = resolve_env_path(path)
    if not resolved.is_file():
        logging.info("No dotenv file at %s, nothing loaded", resolved)
        return LoadResult(status=LoadStatus.NOT_FOUND, path=resolved)

    target = environment if environment is not None else get_default_environment()
    return LoaderService(target, strict=strict).load(resolved)
