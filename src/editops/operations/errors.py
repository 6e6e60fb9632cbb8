"""Exceptions raised by edit operations."""

from typing import Any, Optional


class EditOperationError(Exception):
    """Base class for edit operation errors."""


class ParseError(EditOperationError, ValueError):
    """Raised when a DSL string cannot be parsed into an operation."""

    def __init__(self, message: str, text: Optional[str] = None, position: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.text = text  # Offending substring
        self.position = position  # Offset in the parsed text, if known

    def __str__(self) -> str:
        if self.text is None:
            return self.message
        if self.position is None:
            return f"{self.message}: {self.text!r}"
        return f"{self.message}: {self.text!r} (at offset {self.position})"


class RangeError(EditOperationError, IndexError):
    """
    Raised when an operation's coordinates do not fit the text it works on.

    Also raised at construction time when a length is not positive.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[Any] = None,
        at: Optional[int] = None,
        run: Optional[int] = None,
        bound: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.at = at
        self.run = run
        self.bound = bound  # Length of the text the range was checked against

    def __str__(self) -> str:
        return self.message
