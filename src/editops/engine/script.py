"""Helpers for whole edit scripts."""

import logging
from collections import Counter
from typing import Iterable

from ..operations import BaseEditOperation

logger = logging.getLogger(__name__)


def apply_operations(text: str, operations: Iterable[BaseEditOperation]) -> str:
    """
    Execute operations in sequence, each against the previous result.

    Raises:
        RangeError: From the first operation that does not fit its input
    """
    result = text
    for operation in operations:
        result = operation.execute(result)
        logger.debug(f"Applied {operation}: {result!r}")
    return result


def count_tags(operations: Iterable[BaseEditOperation]) -> dict[str, int]:
    """Count tag occurrences across operations, ordered by tag."""
    counts = Counter(tag for operation in operations for tag in operation.tags)
    return dict(sorted(counts.items()))


def render_operations(operations: Iterable[BaseEditOperation]) -> list[str]:
    """Write each operation in its DSL notation."""
    return [operation.to_string() for operation in operations]
