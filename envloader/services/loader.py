"""Load orchestration service.

Coordinates reading a dotenv file, parsing it and applying the entries to an
environment table.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path

from envloader.services.environment import EnvironmentProtocol
from envloader.services.parser import (
    ParsedLine,
    ParseIssue,
    entries_as_dict,
    parse_lines,
)
from envloader.utils.constant import DEFAULT_ENCODING, STRICT_PARSING
from envloader.utils.errors import (
    EnvFileNotFoundError,
    EnvFileUnreadableError,
    EnvParseError,
)


class LoadStatus(str, enum.Enum):
    """Outcome of reading and parsing a dotenv file."""

    LOADED = "loaded"
    NOT_FOUND = "not_found"
    UNREADABLE = "unreadable"
    PARSE_ERROR = "parse_error"


@dataclass
class LoadResult:
    """Result of a parse or load.

    Attributes:
        status: What happened.
        path: The file that was read.
        entries: Parsed assignments in file order (empty unless LOADED).
        issues: Malformed lines found while parsing.
        error: Human-readable reason for NOT_FOUND / UNREADABLE.
        applied: True once the entries were written to an environment.
        applied_keys: Keys actually written, in order, without duplicates.
    """

    status: LoadStatus
    path: Path
    entries: list[ParsedLine] = field(default_factory=list)
    issues: list[ParseIssue] = field(default_factory=list)
    error: str | None = None
    applied: bool = False
    applied_keys: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return True if the file was read and parsed."""
        return self.status is LoadStatus.LOADED

    def as_dict(self) -> dict[str, str]:
        """Return the final value of every parsed key (last one wins)."""
        return entries_as_dict(self.entries)

    def raise_for_status(self) -> None:
        """Raise the exception matching a failed status.

        Raises:
            EnvFileNotFoundError: For NOT_FOUND.
            EnvFileUnreadableError: For UNREADABLE.
            EnvParseError: For PARSE_ERROR.
        """
        if self.status is LoadStatus.NOT_FOUND:
            raise EnvFileNotFoundError(self.path)
        if self.status is LoadStatus.UNREADABLE:
            raise EnvFileUnreadableError(self.path, self.error or "unknown error")
        if self.status is LoadStatus.PARSE_ERROR:
            raise EnvParseError(self.path, self.issues)


class LoaderService:
    """Read, parse and apply dotenv files.

    Parsing never writes anything; only ``apply`` and ``load`` touch the
    environment table.
    """

    def __init__(
        self,
        environment: EnvironmentProtocol,
        *,
        strict: bool | None = None,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        """Initialize the loader service.

        Args:
            environment: Table that loaded variables are written to.
            strict: Fail the whole load on a malformed line instead of
                skipping it (defaults to ``STRICT_PARSING``).
            encoding: Text encoding of dotenv files.
        """
        self._environment = environment
        self._strict = STRICT_PARSING if strict is None else strict
        self._encoding = encoding

    @property
    def environment(self) -> EnvironmentProtocol:
        """Get the environment table.

        Returns:
            The environment instance.
        """
        return self._environment

    def read(self, path: Path) -> str:
        """Read the file contents.

        Args:
            path: File to read.

        Returns:
            The decoded text.

        Raises:
            EnvFileNotFoundError: If the file disappeared.
            EnvFileUnreadableError: On permission or decoding failures.
        """
        try:
            return path.read_text(encoding=self._encoding)
        except FileNotFoundError as exc:
            raise EnvFileNotFoundError(path) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise EnvFileUnreadableError(path, str(exc)) from exc

    def parse(self, path: Path) -> LoadResult:
        """Read and parse ``path`` without applying anything.

        Args:
            path: Resolved file path.

        Returns:
            LoadResult describing the parse.
        """
        try:
            text = self.read(path)
        except EnvFileNotFoundError as exc:
            return LoadResult(status=LoadStatus.NOT_FOUND, path=path, error=str(exc))
        except EnvFileUnreadableError as exc:
            logging.warning("Could not read dotenv file %s: %s", path, exc.reason)
            return LoadResult(status=LoadStatus.UNREADABLE, path=path, error=exc.reason)

        outcome = parse_lines(text)
        for issue in outcome.issues:
            logging.warning(
                "%s:%d: malformed line (%s)",
                path,
                issue.line_number,
                issue.reason,
            )

        if outcome.issues and self._strict:
            return LoadResult(
                status=LoadStatus.PARSE_ERROR,
                path=path,
                issues=outcome.issues,
                error=f"{len(outcome.issues)} malformed line(s)",
            )

        return LoadResult(
            status=LoadStatus.LOADED,
            path=path,
            entries=outcome.entries,
            issues=outcome.issues,
        )

    def apply(self, entries: list[ParsedLine]) -> list[str]:
        """Write entries to the environment in order, overwriting.

        Args:
            entries: Parsed assignments.

        Returns:
            Keys that were written.
        """
        written: list[str] = []
        for entry in entries:
            try:
                self._environment.set(entry.key, entry.value)
            except (ValueError, OSError) as exc:
                logging.warning(
                    "Line %d: environment rejected key %r: %s",
                    entry.line_number,
                    entry.key,
                    exc,
                )
                continue
            logging.debug("Set %s (line %d)", entry.key, entry.line_number)
            written.append(entry.key)
        return written

    def apply_result(self, result: LoadResult) -> LoadResult:
        """Apply a parsed result if it is ok.

        Args:
            result: Result from :meth:`parse`.

        Returns:
            The same result, marked as applied when anything was written.
        """
        if not result.ok:
            logging.info("Not applying %s: status %s", result.path, result.status.value)
            return result

        written = self.apply(result.entries)
        result.applied = True
        result.applied_keys = list(dict.fromkeys(written))
        logging.info(
            "Loaded %d variables from %s",
            len(result.applied_keys),
            result.path,
        )
        return result

    def load(self, path: Path) -> LoadResult:
        """Parse ``path`` and apply its entries if parsing succeeded.

        Args:
            path: Resolved file path.

        Returns:
            LoadResult; ``applied`` is True only for LOADED results.
        """
        return self.apply_result(self.parse(path))
