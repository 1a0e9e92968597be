"""Environment table abstraction.

The loader writes into and reads from an environment table through this
protocol, so the real process environment can be swapped for an in-memory
table in tests and dry runs.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Protocol


class EnvironmentProtocol(Protocol):
    """Protocol for environment table implementations."""

    def get(self, key: str) -> str | None:
        """Return the value for ``key`` or None if unset."""
        ...

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite ``key``."""
        ...

    def snapshot(self) -> dict[str, str]:
        """Return a copy of every variable in the table."""
        ...

    def __contains__(self, key: object) -> bool:
        """Check if ``key`` is set."""
        ...


class ProcessEnvironment:
    """The real process environment, shared with the whole process.

    Writes go through ``os.environ`` so they are visible to ``os.getenv`` and
    inherited by child processes.
    """

    def get(self, key: str) -> str | None:
        """Get a variable from the process environment.

        Args:
            key: Variable name.

        Returns:
            The value or None if unset.
        """
        return os.environ.get(key)

    def set(self, key: str, value: str) -> None:
        """Set a variable in the process environment, overwriting any value.

        Args:
            key: Variable name.
            value: Variable value.

        Note:
            May raise ValueError or OSError if the operating system rejects
            the name (for example an empty key or one containing ``=``);
            which one depends on the Python version.
        """
        os.environ[key] = value

    def snapshot(self) -> dict[str, str]:
        """Copy the full process environment.

        Returns:
            Every variable currently set, not only those a loader wrote.
        """
        return dict(os.environ)

    def __contains__(self, key: object) -> bool:
        return key in os.environ


class InMemoryEnvironment:
    """Private dictionary-backed environment table."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        """Initialize the table.

        Args:
            initial: Optional variables to start with (copied).
        """
        self._vars: dict[str, str] = dict(initial or {})

    @property
    def vars(self) -> dict[str, str]:
        """Direct access to the underlying dict."""
        return self._vars

    def get(self, key: str) -> str | None:
        return self._vars.get(key)

    def set(self, key: str, value: str) -> None:
        self._vars[key] = value

    def snapshot(self) -> dict[str, str]:
        return dict(self._vars)

    def __contains__(self, key: object) -> bool:
        return key in self._vars


_default_environment: ProcessEnvironment | None = None


def get_default_environment() -> ProcessEnvironment:
    """Get or create the shared process environment wrapper.

    Returns:
        The singleton ProcessEnvironment instance.
    """
    global _default_environment
    if _default_environment is None:
        _default_environment = ProcessEnvironment()
    return _default_environment
