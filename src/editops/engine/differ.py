"""Derive edit operations between two strings."""

import logging
from typing import Optional

from ..operations import (
    BaseEditOperation,
    DeleteOperation,
    InsertAfterOperation,
    InsertBeforeOperation,
    ReplaceOperation,
)
from .adjuster import MoveAdjuster

logger = logging.getLogger(__name__)


def _find_next(text: str, start: int, char: str) -> Optional[int]:
    index = text.find(char, start)
    return index if index >= 0 else None


class OperationDiffer:
    """
    Generates the edit script turning one string into another.

    The walk is a single greedy pass with one-character lookahead, so the
    script is deterministic but not guaranteed to be minimal. Positions of
    later operations refer to the text as rebuilt so far: deletions do not
    advance the running position, insertions and matches do.
    """

    def __init__(self, adjuster: Optional[MoveAdjuster] = None):
        self.adjuster = adjuster or MoveAdjuster()

    def diff(
        self,
        source: str,
        target: str,
        include_input_text: bool = True,
        adjust: bool = True,
        insert_only: bool = False,
    ) -> list[BaseEditOperation]:
        """
        Compute the operations transforming source into target.

        Args:
            source: The original string (may be empty)
            target: The desired string (may be empty)
            include_input_text: Whether operations carry the source text
                they affect; otherwise their input_text is None
            adjust: Whether to merge delete/insert pairs into moves
            insert_only: Passed to the adjustment pass; when True only
                insertions can pair with a deletion

        Returns:
            The ordered list of operations, empty if the strings are equal
        """
        operations = self._walk(source, target, include_input_text)
        logger.debug(
            f"Diff {source!r} -> {target!r}: {[op.to_string() for op in operations]}"
        )

        if adjust and operations:
            operations = self.adjuster.adjust(operations, insert_only=insert_only)
        return operations

    def _walk(self, source: str, target: str, include_input_text: bool) -> list[BaseEditOperation]:
        def described(text: str) -> Optional[str]:
            return text if include_input_text else None

        if not source and not target:
            return []

        if not source:
            return [InsertAfterOperation(at=0, text=target)]

        if not target:
            return [DeleteOperation(at=1, run=len(source), input_text=described(source))]

        operations: list[BaseEditOperation] = []
        i = 0
        j = 0
        position = 1

        while i < len(source) and j < len(target):
            if source[i] == target[j]:
                i += 1
                j += 1
                position += 1
                continue

            # Look ahead for the current target char in source, and vice versa
            in_source = _find_next(source, i, target[j])
            in_target = _find_next(target, j, source[i])

            if in_source is not None and (in_target is None or in_source <= in_target):
                deleted = source[i:in_source]
                operations.append(
                    DeleteOperation(at=position, run=len(deleted), input_text=described(deleted))
                )
                i = in_source
            elif in_target is not None:
                inserted = target[j:in_target]
                operations.append(InsertBeforeOperation(at=position, text=inserted))
                j = in_target
                position += len(inserted)
            else:
                operations.append(
                    ReplaceOperation(
                        at=position,
                        replacement_text=target[j],
                        input_text=described(source[i]),
                    )
                )
                i += 1
                j += 1
                position += 1

        if i < len(source):
            remaining = source[i:]
            operations.append(
                DeleteOperation(at=position, run=len(remaining), input_text=described(remaining))
            )

        if j < len(target):
            operations.append(InsertAfterOperation(at=position - 1, text=target[j:]))

        return operations


_default_differ = OperationDiffer()


def diff(
    source: str,
    target: str,
    include_input_text: bool = True,
    adjust: bool = True,
    insert_only: bool = False,
) -> list[BaseEditOperation]:
    """Compute the operations transforming source into target."""
    return _default_differ.diff(
        source,
        target,
        include_input_text=include_input_text,
        adjust=adjust,
        insert_only=insert_only,
    )
