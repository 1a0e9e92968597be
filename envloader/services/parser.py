"""Dotenv line parser.

Turns the text of a dotenv file into ordered key/value entries. Parsing is
pure: nothing here touches the filesystem or the environment.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

COMMENT_CHAR = "#"
QUOTE_CHAR = '"'
DELIMITER = "="
BOM = "\ufeff"
_LINE_BREAK = re.compile(r"\r\n|\n")


@dataclass(frozen=True)
class ParsedLine:
    """A single ``KEY=VALUE`` assignment.

    Attributes:
        key: Trimmed variable name (not validated).
        value: Trimmed value with surrounding double quotes removed.
        line_number: 1-based line number in the source text.
    """

    key: str
    value: str
    line_number: int


@dataclass(frozen=True)
class ParseIssue:
    """A line that could not be turned into an assignment."""

    line_number: int
    line: str
    reason: str


@dataclass
class ParseOutcome:
    """Entries and issues produced from one dotenv text."""

    entries: list[ParsedLine] = field(default_factory=list)
    issues: list[ParseIssue] = field(default_factory=list)

    def as_dict(self) -> dict[str, str]:
        return entries_as_dict(self.entries)


def entries_as_dict(entries: list[ParsedLine]) -> dict[str, str]:
    """Collapse entries into a mapping, last occurrence winning.

    Args:
        entries: Parsed assignments in file order.

    Returns:
        Mapping of key to final value.
    """
    return {entry.key: entry.value for entry in entries}


def strip_inline_comment(line: str) -> str:
    """Truncate ``line`` at the first ``#`` outside a double-quoted region.

    A ``"`` only opens a quoted region when a closing ``"`` follows it on the
    same line; a stray quote is an ordinary character.

    Args:
        line: Raw line without its line terminator.

    Returns:
        The line with any trailing comment removed.
    """
    in_quotes = False
    for index, char in enumerate(line):
        if char == QUOTE_CHAR:
            if in_quotes:
                in_quotes = False
            elif QUOTE_CHAR in line[index + 1 :]:
                in_quotes = True
        elif char == COMMENT_CHAR and not in_quotes:
            return line[:index]
    return line


def strip_quotes(value: str) -> str:
    """Remove one pair of surrounding double quotes, if present.

    Interior escape sequences are kept verbatim.

    Args:
        value: Trimmed value.

    Returns:
        The unquoted value.
    """
    if len(value) >= 2 and value[0] == QUOTE_CHAR and value[-1] == QUOTE_CHAR:
        return value[1:-1]
    return value


def parse_line(line: str, line_number: int) -> ParsedLine | ParseIssue | None:
    """Parse one line.

    Args:
        line: Raw line without its line terminator.
        line_number: 1-based position of the line.

    Returns:
        A ParsedLine for an assignment, a ParseIssue for a line without a
        delimiter, or None for comments and blank lines.
    """
    if line.startswith(COMMENT_CHAR):
        return None

    content = strip_inline_comment(line)
    if not content.strip():
        return None

    key, sep, value = content.partition(DELIMITER)
    if not sep:
        return ParseIssue(
            line_number=line_number,
            line=line,
            reason=f"missing '{DELIMITER}' delimiter",
        )

    return ParsedLine(
        key=key.strip(),
        value=strip_quotes(value.strip()),
        line_number=line_number,
    )


def parse_lines(text: str) -> ParseOutcome:
    """Parse the full text of a dotenv file.

    Args:
        text: File contents; ``\\n`` and ``\\r\\n`` line endings are accepted
            and a leading byte order mark is dropped.

    Returns:
        ParseOutcome with entries in file order and any malformed lines.
    """
    outcome = ParseOutcome()
    text = text.removeprefix(BOM)
    for line_number, line in enumerate(_LINE_BREAK.split(text), start=1):
        parsed = parse_line(line, line_number)
        if parsed is None:
            continue
        if isinstance(parsed, ParseIssue):
            outcome.issues.append(parsed)
            continue
        outcome.entries.append(parsed)

    logging.debug(
        "Parsed %d entries (%d malformed lines)",
        len(outcome.entries),
        len(outcome.issues),
    )
    return outcome
