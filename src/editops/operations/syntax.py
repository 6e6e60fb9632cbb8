"""Edit operation DSL syntax definitions and coordinate checks."""

import re
from typing import Any, Optional, Pattern

from .errors import RangeError

# Building blocks
# "text" - Descriptive (non-authoritative) text
_QUOTED = r'"(?P<{name}>[^"]*)"'

# @N or @NxL - 1-based position and optional length; x, X and × are equivalent
_COORDINATES = r"@(?P<{at}>[0-9]+)(?:[x×](?P<{run}>[0-9]+))?"

_LEAD = r"(?:" + _QUOTED.format(name="input") + r")?\s*"
_LEAD_COORDINATES = _LEAD + _COORDINATES.format(at="at", run="run")

# "A"@NxL! - Delete
DELETE_PATTERN: Pattern = re.compile(_LEAD_COORDINATES + r"\s*!", re.IGNORECASE)

# "A"@N+="B" - Insert before (N may be 0)
INSERT_BEFORE_PATTERN: Pattern = re.compile(
    _LEAD + r"@(?P<at>[0-9]+)\s*\+=\s*" + _QUOTED.format(name="text")
)

# "A"@N=+"B" - Insert after (N may be 0)
INSERT_AFTER_PATTERN: Pattern = re.compile(
    _LEAD + r"@(?P<at>[0-9]+)\s*=\+\s*" + _QUOTED.format(name="text")
)

# "A"@NxL="B" - Replace
REPLACE_PATTERN: Pattern = re.compile(
    _LEAD_COORDINATES + r"\s*=\s*" + _QUOTED.format(name="text"), re.IGNORECASE
)

# "A"@NxL>@M - Move before
MOVE_BEFORE_PATTERN: Pattern = re.compile(
    _LEAD_COORDINATES + r"\s*>\s*@(?P<to>[0-9]+)", re.IGNORECASE
)

# "A"@NxL->@M - Move after
MOVE_AFTER_PATTERN: Pattern = re.compile(
    _LEAD_COORDINATES + r"\s*->\s*@(?P<to>[0-9]+)", re.IGNORECASE
)

# "A"@NxL<>"B"@MxL - Swap
SWAP_PATTERN: Pattern = re.compile(
    _LEAD_COORDINATES
    + r"\s*<>\s*(?:"
    + _QUOTED.format(name="input2")
    + r")?\s*"
    + _COORDINATES.format(at="at2", run="run2"),
    re.IGNORECASE,
)

# Regions that never carry operator tokens: quoted text, (note), {note}, [tags]
LITERAL_PATTERN: Pattern = re.compile(r'"[^"]*"|\([^)]*\)|\{[^}]*\}|\[[^\]]*\]')

# Variant tokens in dispatch priority order. Longer tokens come before the
# single characters they contain.
DELETE_TOKEN = "!"
INSERT_BEFORE_TOKEN = "+="
INSERT_AFTER_TOKEN = "=+"
SWAP_TOKEN = "<>"
MOVE_AFTER_TOKEN = "->"
MOVE_BEFORE_TOKEN = ">"
REPLACE_TOKEN = "="


def mask_literals(text: str) -> str:
    """
    Blank out quoted text, notes and tag lists.

    The result has the same length as the input, so offsets found in it are
    valid offsets into the original text.

    Args:
        text: The DSL text

    Returns:
        The text with every literal region replaced by spaces
    """
    return LITERAL_PATTERN.sub(lambda m: " " * len(m.group(0)), text)


def mask_annotations(text: str) -> str:
    """Blank out notes and tag lists, keeping quoted text in place."""
    return LITERAL_PATTERN.sub(
        lambda m: m.group(0) if m.group(0).startswith('"') else " " * len(m.group(0)), text
    )


def _find_literal(text: str, openers: str) -> Optional[str]:
    for match in LITERAL_PATTERN.finditer(text):
        literal = match.group(0)
        if literal[0] in openers:
            return literal[1:-1]
    return None


def parse_note(text: str) -> Optional[str]:
    """
    Extract the note from DSL text.

    The note is the first parenthesized region, or the first region in
    braces as written by swap operations. Regions inside quoted text are
    ignored.

    Returns:
        The trimmed note, or None if absent or blank
    """
    note = _find_literal(text, "({")
    if note is None:
        return None
    note = note.strip()
    return note or None


def parse_tags(text: str) -> list[str]:
    """Extract the space-separated tags of the first bracketed region."""
    tags = _find_literal(text, "[")
    if tags is None:
        return []
    return tags.split()


def format_coordinates(at: int, run: int = 1) -> str:
    """Format a coordinate token, omitting the length when it is 1."""
    if run > 1:
        return f"@{at}x{run}"
    return f"@{at}"


def format_quoted(text: Optional[str]) -> str:
    """Quote descriptive text, or return an empty string if there is none."""
    return f'"{text}"' if text else ""


def validate_range(text: str, at: int, run: int = 1, operation: Optional[Any] = None) -> None:
    """
    Check that a 1-based range lies within a string.

    Args:
        text: The string the range refers to
        at: 1-based start position
        run: Number of characters from at
        operation: The operation being executed, attached to the error

    Raises:
        RangeError: If at is outside 1..len(text) or the range runs past the end
    """
    if at < 1 or at > len(text):
        raise RangeError(
            f"Position {at} is out of range for input string of length {len(text)}",
            operation=operation,
            at=at,
            run=run,
            bound=len(text),
        )
    if at + run - 1 > len(text):
        raise RangeError(
            f"Length {run} at position {at} exceeds input string length {len(text)}",
            operation=operation,
            at=at,
            run=run,
            bound=len(text),
        )
