"""Exceptions raised by the dotenv loader."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from envloader.services.parser import ParseIssue


class DotEnvError(Exception):
    """Base class for all loader errors."""


class EnvFileNotFoundError(DotEnvError, FileNotFoundError):
    """No regular file exists at the resolved dotenv path."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"dotenv file not found: {self.path}")


class EnvFileUnreadableError(DotEnvError, OSError):
    """The dotenv file exists but its contents could not be read or decoded."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"could not read dotenv file {self.path}: {reason}")


class EnvParseError(DotEnvError, ValueError):
    """One or more lines of a dotenv file have no ``=`` delimiter."""

    def __init__(self, path: str | Path, issues: Sequence[ParseIssue]) -> None:
        self.path = Path(path)
        self.issues = list(issues)
        first = self.issues[0]
        super().__init__(
            f"{self.path}:{first.line_number}: {first.reason} "
            f"({len(self.issues)} malformed line(s))"
        )
