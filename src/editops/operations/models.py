"""Data models for edit operations."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from .errors import RangeError
from .syntax import (
    DELETE_TOKEN,
    INSERT_AFTER_TOKEN,
    INSERT_BEFORE_TOKEN,
    MOVE_AFTER_TOKEN,
    MOVE_BEFORE_TOKEN,
    REPLACE_TOKEN,
    SWAP_TOKEN,
    format_coordinates,
    format_quoted,
    validate_range,
)


class OperationKind(str, Enum):
    """Kind of edit operation."""

    DELETE = "delete"  # "A"@NxL!
    INSERT_BEFORE = "insert_before"  # @N+="B"
    INSERT_AFTER = "insert_after"  # @N=+"B"
    REPLACE = "replace"  # "A"@NxL="B"
    MOVE_BEFORE = "move_before"  # "A"@NxL>@M
    MOVE_AFTER = "move_after"  # "A"@NxL->@M
    SWAP = "swap"  # "A"@NxL<>"B"@MxL


class BaseEditOperation(BaseModel, ABC):
    """
    Abstract base for all edit operations.

    Operations are immutable: every field is validated on construction and
    cannot be reassigned afterwards. Coordinates are 1-based.
    """

    model_config = ConfigDict(frozen=True)

    # Smallest accepted at; insertions use 0 to prepend or append
    min_position: ClassVar[int] = 1

    input_text: Optional[str] = None  # Descriptive text, never used by execute
    at: int  # Start position
    run: int = 1  # Number of characters affected from at
    note: Optional[str] = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("input_text")
    @classmethod
    def _empty_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @field_validator("note")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("at")
    @classmethod
    def _check_at(cls, value: int) -> int:
        if value < cls.min_position:
            kind = "positive" if cls.min_position > 0 else "non-negative"
            raise RangeError(f"Position must be a {kind} integer, got {value}", at=value)
        return value

    @field_validator("run")
    @classmethod
    def _check_run(cls, value: int) -> int:
        if value < 1:
            raise RangeError(f"Length must be a positive integer, got {value}", run=value)
        return value

    @field_validator("tags")
    @classmethod
    def _check_tags(cls, value: list[str]) -> list[str]:
        for tag in value:
            if not tag or any(c.isspace() or c in "[]" for c in tag):
                raise ValueError(f"Invalid tag {tag!r}: tags cannot be empty or contain spaces or brackets")
        return value

    @abstractmethod
    def execute(self, text: str) -> str:
        """Return text transformed by this operation."""

    @abstractmethod
    def to_string(self) -> str:
        """Return the DSL representation of this operation."""

    def introduced_text(self) -> Optional[str]:
        """Text this operation adds to its output, if any."""
        return None

    def _note_and_tags(self) -> str:
        parts = ""
        if self.note:
            parts += f" ({self.note})"
        if self.tags:
            parts += f" [{' '.join(self.tags)}]"
        return parts

    def __str__(self) -> str:
        return self.to_string()


class DeleteOperation(BaseEditOperation):
    """Remove run characters starting at at."""

    kind: Literal[OperationKind.DELETE] = OperationKind.DELETE

    def execute(self, text: str) -> str:
        validate_range(text, self.at, self.run, operation=self)
        return text[: self.at - 1] + text[self.at - 1 + self.run :]

    def to_string(self) -> str:
        return (
            format_quoted(self.input_text)
            + format_coordinates(self.at, self.run)
            + DELETE_TOKEN
            + self._note_and_tags()
        )


class InsertBeforeOperation(BaseEditOperation):
    """Insert text before the character at at, or prepend it when at is 0."""

    kind: Literal[OperationKind.INSERT_BEFORE] = OperationKind.INSERT_BEFORE
    min_position: ClassVar[int] = 0
    text: str

    def execute(self, text: str) -> str:
        if self.at == 0:
            return self.text + text
        validate_range(text, self.at, operation=self)
        return text[: self.at - 1] + self.text + text[self.at - 1 :]

    def to_string(self) -> str:
        return (
            format_quoted(self.input_text)
            + f"@{self.at}{INSERT_BEFORE_TOKEN}"
            + f'"{self.text}"'
            + self._note_and_tags()
        )

    def introduced_text(self) -> Optional[str]:
        return self.text


class InsertAfterOperation(BaseEditOperation):
    """Insert text after the character at at, or append it when at is 0."""

    kind: Literal[OperationKind.INSERT_AFTER] = OperationKind.INSERT_AFTER
    min_position: ClassVar[int] = 0
    text: str

    def execute(self, text: str) -> str:
        if self.at == 0:
            return text + self.text
        validate_range(text, self.at, operation=self)
        return text[: self.at] + self.text + text[self.at :]

    def to_string(self) -> str:
        return (
            format_quoted(self.input_text)
            + f"@{self.at}{INSERT_AFTER_TOKEN}"
            + f'"{self.text}"'
            + self._note_and_tags()
        )

    def introduced_text(self) -> Optional[str]:
        return self.text


class ReplaceOperation(BaseEditOperation):
    """Replace run characters at at with replacement_text."""

    kind: Literal[OperationKind.REPLACE] = OperationKind.REPLACE
    replacement_text: str

    def execute(self, text: str) -> str:
        validate_range(text, self.at, self.run, operation=self)
        return text[: self.at - 1] + self.replacement_text + text[self.at - 1 + self.run :]

    def to_string(self) -> str:
        return (
            format_quoted(self.input_text)
            + format_coordinates(self.at, self.run)
            + f'{REPLACE_TOKEN}"{self.replacement_text}"'
            + self._note_and_tags()
        )

    def introduced_text(self) -> Optional[str]:
        return self.replacement_text


class _MoveOperation(BaseEditOperation):
    to: int  # Target position, in the coordinates of the unchanged text

    @field_validator("to")
    @classmethod
    def _check_to(cls, value: int) -> int:
        if value < 1:
            raise RangeError(f"Target position must be a positive integer, got {value}", at=value)
        return value

    def _relocate(self, text: str, after: bool) -> str:
        validate_range(text, self.at, self.run, operation=self)
        validate_range(text, self.to, operation=self)

        moved = text[self.at - 1 : self.at - 1 + self.run]
        rest = text[: self.at - 1] + text[self.at - 1 + self.run :]

        # The target shifts left when it follows the removed span
        target = self.to - self.run if self.to > self.at else self.to
        index = target if after else target - 1
        if index < 0 or index > len(rest):
            raise RangeError(
                f"Target position {self.to} cannot receive {self.run} character(s) "
                f"moved from position {self.at}",
                operation=self,
                at=self.to,
                run=self.run,
                bound=len(text),
            )
        return rest[:index] + moved + rest[index:]


class MoveBeforeOperation(_MoveOperation):
    """Move run characters at at before the character at to."""

    kind: Literal[OperationKind.MOVE_BEFORE] = OperationKind.MOVE_BEFORE

    def execute(self, text: str) -> str:
        return self._relocate(text, after=False)

    def to_string(self) -> str:
        return (
            format_quoted(self.input_text)
            + format_coordinates(self.at, self.run)
            + f"{MOVE_BEFORE_TOKEN}@{self.to}"
            + self._note_and_tags()
        )


class MoveAfterOperation(_MoveOperation):
    """Move run characters at at after the character at to."""

    kind: Literal[OperationKind.MOVE_AFTER] = OperationKind.MOVE_AFTER

    def execute(self, text: str) -> str:
        return self._relocate(text, after=True)

    def to_string(self) -> str:
        return (
            format_quoted(self.input_text)
            + format_coordinates(self.at, self.run)
            + f"{MOVE_AFTER_TOKEN}@{self.to}"
            + self._note_and_tags()
        )


class SwapOperation(BaseEditOperation):
    """
    Exchange two non-overlapping spans.

    The second span is at2/run2, described by input_text2. Unlike the other
    operations, swaps are written with tags before the note, and the note in
    braces: "abc"@2x2<>"def"@5x2 [t1 t2] {note}.
    """

    kind: Literal[OperationKind.SWAP] = OperationKind.SWAP
    at2: int
    run2: int = 1
    input_text2: Optional[str] = None

    @field_validator("input_text2")
    @classmethod
    def _empty_to_none2(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @field_validator("at2")
    @classmethod
    def _check_at2(cls, value: int) -> int:
        if value < 1:
            raise RangeError(f"Second position must be a positive integer, got {value}", at=value)
        return value

    @field_validator("run2")
    @classmethod
    def _check_run2(cls, value: int) -> int:
        if value < 1:
            raise RangeError(f"Second length must be a positive integer, got {value}", run=value)
        return value

    def overlaps(self) -> bool:
        """Check whether the two spans are equal or overlap."""
        if self.at == self.at2:
            return True
        if self.at < self.at2:
            return self.at + self.run > self.at2
        return self.at2 + self.run2 > self.at

    def execute(self, text: str) -> str:
        validate_range(text, self.at, self.run, operation=self)
        validate_range(text, self.at2, self.run2, operation=self)

        if self.overlaps():
            raise RangeError(
                f"Swap spans {format_coordinates(self.at, self.run)} and "
                f"{format_coordinates(self.at2, self.run2)} overlap",
                operation=self,
                at=self.at2,
                run=self.run2,
                bound=len(text),
            )

        first = text[self.at - 1 : self.at - 1 + self.run]
        second = text[self.at2 - 1 : self.at2 - 1 + self.run2]

        # Edit the later span first so the earlier offsets stay valid
        spans = sorted(
            [(self.at, self.run, second), (self.at2, self.run2, first)],
            reverse=True,
        )
        result = text
        for at, run, replacement in spans:
            result = result[: at - 1] + replacement + result[at - 1 + run :]
        return result

    def to_string(self) -> str:
        s = (
            format_quoted(self.input_text)
            + format_coordinates(self.at, self.run)
            + SWAP_TOKEN
            + format_quoted(self.input_text2)
            + format_coordinates(self.at2, self.run2)
        )
        if self.tags:
            s += f" [{' '.join(self.tags)}]"
        if self.note:
            s += f" {{{self.note}}}"
        return s


EditOperation = Annotated[
    Union[
        DeleteOperation,
        InsertBeforeOperation,
        InsertAfterOperation,
        ReplaceOperation,
        MoveBeforeOperation,
        MoveAfterOperation,
        SwapOperation,
    ],
    Field(discriminator="kind"),
]

_operation_adapter: TypeAdapter = TypeAdapter(EditOperation)

OPERATION_TYPES: dict[OperationKind, type[BaseEditOperation]] = {
    OperationKind.DELETE: DeleteOperation,
    OperationKind.INSERT_BEFORE: InsertBeforeOperation,
    OperationKind.INSERT_AFTER: InsertAfterOperation,
    OperationKind.REPLACE: ReplaceOperation,
    OperationKind.MOVE_BEFORE: MoveBeforeOperation,
    OperationKind.MOVE_AFTER: MoveAfterOperation,
    OperationKind.SWAP: SwapOperation,
}


def operation_from_dict(data: dict[str, Any]) -> BaseEditOperation:
    """
    Build an operation from a plain mapping, such as a model_dump() result.

    The "kind" key selects the variant.
    """
    if "kind" not in data:
        raise ValueError("Operation data has no 'kind'")
    data = {**data, "kind": OperationKind(data["kind"])}
    return _operation_adapter.validate_python(data)
