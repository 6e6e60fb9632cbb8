"""Pytest configuration and shared fixtures."""

import pytest

from editops.config import Settings
from editops.engine import MoveAdjuster, OperationDiffer
from editops.operations import (
    DeleteOperation,
    InsertAfterOperation,
    InsertBeforeOperation,
    MoveAfterOperation,
    MoveBeforeOperation,
    OperationParser,
    ReplaceOperation,
    SwapOperation,
)


@pytest.fixture
def parser() -> OperationParser:
    """Create an operation parser."""
    return OperationParser()


@pytest.fixture
def differ() -> OperationDiffer:
    """Create a differ with its default adjuster."""
    return OperationDiffer()


@pytest.fixture
def adjuster() -> MoveAdjuster:
    """Create a move adjuster."""
    return MoveAdjuster()


@pytest.fixture
def sample_operations() -> list:
    """One operation of each kind, with descriptive text, notes and tags."""
    return [
        DeleteOperation(input_text="abc", at=2, run=3, note="note", tags=["t1", "t2"]),
        InsertBeforeOperation(at=2, text="abc", note="note", tags=["t1"]),
        InsertAfterOperation(at=0, text="abc"),
        ReplaceOperation(input_text="abc", at=2, run=3, replacement_text="XY", tags=["orth"]),
        MoveBeforeOperation(input_text="abc", at=2, run=3, to=5, note="moved"),
        MoveAfterOperation(at=4, to=2, tags=["t2"]),
        SwapOperation(
            input_text="abc",
            at=2,
            run=2,
            input_text2="def",
            at2=5,
            run2=2,
            note="note",
            tags=["t1", "t2"],
        ),
    ]


@pytest.fixture
def mock_settings() -> Settings:
    """Create settings with test values."""
    return Settings(
        log_level="DEBUG",
        include_input_text=True,
        adjust_moves=True,
        insert_only=False,
        strict_parsing=True,
    )
