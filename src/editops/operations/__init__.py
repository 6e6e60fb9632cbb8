"""Edit operations and their DSL.

An edit operation describes how one form of a text becomes another, in a
compact notation such as '"b"@2="z"' (replace the "b" at position 2 with
"z"). Operations can be parsed, executed against a string and written back
to the same notation.
"""

from .errors import EditOperationError, ParseError, RangeError
from .models import (
    OPERATION_TYPES,
    BaseEditOperation,
    DeleteOperation,
    EditOperation,
    InsertAfterOperation,
    InsertBeforeOperation,
    MoveAfterOperation,
    MoveBeforeOperation,
    OperationKind,
    ReplaceOperation,
    SwapOperation,
    operation_from_dict,
)
from .parser import OperationParser, parse_operation, parse_operations
from .syntax import validate_range

__all__ = [
    "EditOperationError",
    "ParseError",
    "RangeError",
    "OPERATION_TYPES",
    "BaseEditOperation",
    "DeleteOperation",
    "EditOperation",
    "InsertAfterOperation",
    "InsertBeforeOperation",
    "MoveAfterOperation",
    "MoveBeforeOperation",
    "OperationKind",
    "ReplaceOperation",
    "SwapOperation",
    "operation_from_dict",
    "OperationParser",
    "parse_operation",
    "parse_operations",
    "validate_range",
]
