"""Recognize relocated text in an edit script."""

import logging
from typing import Optional

from ..operations import (
    BaseEditOperation,
    DeleteOperation,
    InsertAfterOperation,
    InsertBeforeOperation,
    MoveBeforeOperation,
    ReplaceOperation,
)

logger = logging.getLogger(__name__)


class MoveAdjuster:
    """
    Merges a deletion and a later insertion of the same text into a move.

    A deletion of text T pairs with an insert-before, insert-after or
    (unless insert_only) replace operation introducing exactly T. The pair
    is merged only when that candidate is the sole operation introducing T;
    otherwise the script is left as it is.
    """

    def is_candidate(self, operation: BaseEditOperation, insert_only: bool) -> bool:
        """Check whether an operation may supply the target of a move."""
        if isinstance(operation, (InsertBeforeOperation, InsertAfterOperation)):
            return True
        return isinstance(operation, ReplaceOperation) and not insert_only

    def adjust(
        self, operations: list[BaseEditOperation], insert_only: bool = False
    ) -> list[BaseEditOperation]:
        """
        Replace unique delete/insert pairs with move-before operations.

        Args:
            operations: The edit script, usually produced by the differ
            insert_only: If True, replace operations cannot pair with deletions

        Returns:
            A new list; unmatched operations keep their relative order
        """
        consumed: set[int] = set()
        result: list[BaseEditOperation] = []

        for index, operation in enumerate(operations):
            if index in consumed:
                continue

            if isinstance(operation, DeleteOperation) and operation.input_text:
                match = self._find_unique_match(operations, index, consumed, insert_only)
                if match is not None:
                    move = self._merge(operation, operations[match])
                    logger.debug(f"Merged {operation} and {operations[match]} into {move}")
                    consumed.add(match)
                    result.append(move)
                    continue

            result.append(operation)

        return result

    def _find_unique_match(
        self,
        operations: list[BaseEditOperation],
        delete_index: int,
        consumed: set[int],
        insert_only: bool,
    ) -> Optional[int]:
        deleted = operations[delete_index].input_text

        match = None
        for index in range(delete_index + 1, len(operations)):
            candidate = operations[index]
            if (
                index not in consumed
                and self.is_candidate(candidate, insert_only)
                and candidate.introduced_text() == deleted
            ):
                match = index
                break
        if match is None:
            return None

        # Any other operation introducing the same text makes the pair ambiguous
        for index, other in enumerate(operations):
            if (
                index != match
                and self.is_candidate(other, insert_only)
                and other.introduced_text() == deleted
            ):
                logger.debug(
                    f"Not merging {operations[delete_index]}: "
                    f"{deleted!r} is introduced more than once"
                )
                return None
        return match

    def _merge(self, delete: BaseEditOperation, candidate: BaseEditOperation) -> MoveBeforeOperation:
        return MoveBeforeOperation(
            input_text=delete.input_text,
            at=delete.at,
            run=delete.run,
            to=candidate.at + 1,
            note=delete.note or candidate.note,
            tags=list(delete.tags or candidate.tags),
        )


_default_adjuster = MoveAdjuster()


def adjust(operations: list[BaseEditOperation], insert_only: bool = False) -> list[BaseEditOperation]:
    """Replace unique delete/insert pairs with move-before operations."""
    return _default_adjuster.adjust(operations, insert_only=insert_only)
