"""Parser for edit operation DSL strings."""

import logging
import re
from typing import Iterable, Optional

from pydantic import ValidationError

from .errors import ParseError
from .models import OPERATION_TYPES, BaseEditOperation, OperationKind
from .syntax import (
    DELETE_PATTERN,
    DELETE_TOKEN,
    INSERT_AFTER_PATTERN,
    INSERT_AFTER_TOKEN,
    INSERT_BEFORE_PATTERN,
    INSERT_BEFORE_TOKEN,
    MOVE_AFTER_PATTERN,
    MOVE_AFTER_TOKEN,
    MOVE_BEFORE_PATTERN,
    MOVE_BEFORE_TOKEN,
    REPLACE_PATTERN,
    REPLACE_TOKEN,
    SWAP_PATTERN,
    SWAP_TOKEN,
    mask_annotations,
    mask_literals,
    parse_note,
    parse_tags,
)

logger = logging.getLogger(__name__)

# Checked in order: the first token found in the masked text wins
DISPATCH_ORDER: list[tuple[str, OperationKind]] = [
    (DELETE_TOKEN, OperationKind.DELETE),
    (INSERT_BEFORE_TOKEN, OperationKind.INSERT_BEFORE),
    (INSERT_AFTER_TOKEN, OperationKind.INSERT_AFTER),
    (SWAP_TOKEN, OperationKind.SWAP),
    (MOVE_AFTER_TOKEN, OperationKind.MOVE_AFTER),
    (MOVE_BEFORE_TOKEN, OperationKind.MOVE_BEFORE),
    (REPLACE_TOKEN, OperationKind.REPLACE),
]

_GRAMMAR: dict[OperationKind, tuple[re.Pattern, str]] = {
    OperationKind.DELETE: (DELETE_PATTERN, '"text"@position! or @position!'),
    OperationKind.INSERT_BEFORE: (INSERT_BEFORE_PATTERN, '@position+="text"'),
    OperationKind.INSERT_AFTER: (INSERT_AFTER_PATTERN, '@position=+"text"'),
    OperationKind.REPLACE: (
        REPLACE_PATTERN,
        '"oldtext"@position="newtext" or @position="newtext"',
    ),
    OperationKind.MOVE_BEFORE: (
        MOVE_BEFORE_PATTERN,
        '"text"@position>@target or @position>@target',
    ),
    OperationKind.MOVE_AFTER: (
        MOVE_AFTER_PATTERN,
        '"text"@position->@target or @position->@target',
    ),
    OperationKind.SWAP: (SWAP_PATTERN, '"text1"@position1<>"text2"@position2'),
}


def _read_number(
    match: re.Match, group: str, label: str, minimum: int = 1, default: Optional[int] = None
) -> int:
    """
    Read a numeric group from a match.

    Args:
        match: The grammar match
        group: Name of the group to read
        label: Human-readable name used in error messages
        minimum: Smallest accepted value (1 for positions and lengths,
            0 for insertion anchors)
        default: Value used when an optional group did not participate

    Raises:
        ParseError: If the value is below minimum
    """
    value = match.group(group)
    if value is None:
        if default is None:
            raise ParseError(f"{label} is missing", match.group(0), match.start())
        return default

    number = int(value)
    if number < minimum:
        kind = "positive" if minimum > 0 else "non-negative"
        raise ParseError(f"{label} must be a {kind} integer", value, match.start(group))
    return number


class OperationParser:
    """Parse edit operations from their DSL notation."""

    def detect_kind(self, text: str) -> Optional[OperationKind]:
        """
        Determine which operation a DSL string encodes.

        Operator tokens inside quoted text, notes and tags are ignored.

        Returns:
            The operation kind, or None if no operator token is present
        """
        masked = mask_literals(text)
        for token, kind in DISPATCH_ORDER:
            if token in masked:
                return kind
        return None

    def parse(self, text: str) -> BaseEditOperation:
        """
        Parse a single DSL string.

        Args:
            text: The DSL text, e.g. '"b"@2="z"' or '@2x3! (note) [tag]'

        Returns:
            The parsed operation

        Raises:
            ParseError: If the text is empty, has no known operator, does not
                match the operator's grammar, or has an invalid number
        """
        if text is None or not text.strip():
            raise ParseError("DSL text cannot be empty", text)

        kind = self.detect_kind(text)
        if kind is None:
            raise ParseError("Unknown operation type", text)

        operation = self._parse_kind(kind, text)
        logger.debug(f"Parsed {kind.value} operation: {operation}")
        return operation

    def parse_as(self, kind: OperationKind, text: str) -> BaseEditOperation:
        """Parse text with the grammar of a given kind, skipping detection."""
        if text is None or not text.strip():
            raise ParseError("DSL text cannot be empty", text)
        return self._parse_kind(kind, text)

    def parse_many(self, texts: Iterable[str], strict: bool = True) -> list[BaseEditOperation]:
        """
        Parse a list of DSL strings, as stored in an annotation layer.

        Args:
            texts: The DSL strings
            strict: If True, the first failure is raised; otherwise
                unparsable strings are logged and skipped

        Returns:
            The parsed operations, in input order
        """
        operations = []
        for text in texts:
            try:
                operations.append(self.parse(text))
            except ParseError as e:
                if strict:
                    raise
                logger.warning(f"Skipping unparsable operation {text!r}: {e}")
        return operations

    def _parse_kind(self, kind: OperationKind, text: str) -> BaseEditOperation:
        pattern, expected = _GRAMMAR[kind]
        match = pattern.search(mask_annotations(text))
        if not match:
            label = kind.value.replace("_", "-")
            raise ParseError(f"Invalid {label} operation format. Expected: {expected}", text)

        fields = self._read_fields(kind, match)
        fields["note"] = parse_note(text)
        fields["tags"] = parse_tags(text)

        try:
            return OPERATION_TYPES[kind](**fields)
        except ValidationError as e:
            raise ParseError(f"Invalid {kind.value} operation: {e.errors()[0]['msg']}", text) from e

    def _read_fields(self, kind: OperationKind, match: re.Match) -> dict:
        fields: dict = {"input_text": match.group("input")}

        if kind in (OperationKind.INSERT_BEFORE, OperationKind.INSERT_AFTER):
            fields["at"] = _read_number(match, "at", "Position", minimum=0)
            fields["text"] = match.group("text")
            return fields

        if kind == OperationKind.SWAP:
            fields["at"] = _read_number(match, "at", "First position")
            fields["run"] = _read_number(match, "run", "First length", default=1)
            fields["input_text2"] = match.group("input2")
            fields["at2"] = _read_number(match, "at2", "Second position")
            fields["run2"] = _read_number(match, "run2", "Second length", default=1)
            return fields

        fields["at"] = _read_number(match, "at", "Position")
        fields["run"] = _read_number(match, "run", "Length", default=1)

        if kind == OperationKind.REPLACE:
            fields["replacement_text"] = match.group("text")
        elif kind in (OperationKind.MOVE_BEFORE, OperationKind.MOVE_AFTER):
            fields["to"] = _read_number(match, "to", "Target position")
        return fields


_default_parser = OperationParser()


def parse_operation(text: str) -> BaseEditOperation:
    """Parse a single DSL string into an operation."""
    return _default_parser.parse(text)


def parse_operations(texts: Iterable[str], strict: bool = True) -> list[BaseEditOperation]:
    """Parse several DSL strings; see OperationParser.parse_many."""
    return _default_parser.parse_many(texts, strict=strict)
