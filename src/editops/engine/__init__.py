"""Edit script derivation and execution engine."""

from .adjuster import MoveAdjuster, adjust
from .differ import OperationDiffer, diff
from .script import apply_operations, count_tags, render_operations

__all__ = [
    "MoveAdjuster",
    "adjust",
    "OperationDiffer",
    "diff",
    "apply_operations",
    "count_tags",
    "render_operations",
]
