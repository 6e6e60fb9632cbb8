"""Tests for DSL syntax helpers and range checks."""

import pytest

from editops.operations import RangeError, validate_range
from editops.operations.syntax import (
    DELETE_PATTERN,
    SWAP_PATTERN,
    format_coordinates,
    format_quoted,
    mask_annotations,
    mask_literals,
    parse_note,
    parse_tags,
)


class TestValidateRange:
    """Test 1-based range validation."""

    def test_valid_ranges(self):
        """Test ranges inside the string pass."""
        validate_range("abc", 1)
        validate_range("abc", 3)
        validate_range("abc", 1, 3)
        validate_range("abc", 2, 2)

    def test_position_zero(self):
        """Test position 0 is out of range."""
        with pytest.raises(RangeError) as exc_info:
            validate_range("abc", 0)

        assert exc_info.value.at == 0
        assert exc_info.value.bound == 3

    def test_position_past_end(self):
        """Test a position after the last character."""
        with pytest.raises(RangeError):
            validate_range("abc", 4)

    def test_length_past_end(self):
        """Test a range running past the end of the string."""
        with pytest.raises(RangeError) as exc_info:
            validate_range("abc", 2, 3)

        assert "exceeds" in str(exc_info.value)
        assert exc_info.value.run == 3

    def test_empty_string(self):
        """Test nothing fits in an empty string."""
        with pytest.raises(RangeError):
            validate_range("", 1)

    def test_operation_attached(self):
        """Test the failing operation is carried by the error."""
        marker = object()
        with pytest.raises(RangeError) as exc_info:
            validate_range("a", 5, operation=marker)

        assert exc_info.value.operation is marker

    def test_range_error_is_index_error(self):
        """Test RangeError can be caught as a builtin IndexError."""
        with pytest.raises(IndexError):
            validate_range("a", 2)


class TestNoteAndTags:
    """Test note and tag extraction."""

    def test_parse_note(self):
        """Test extracting a parenthesized note."""
        assert parse_note('"a"@2! (a note) [t1]') == "a note"

    def test_parse_note_in_braces(self):
        """Test the braces form written by swaps."""
        assert parse_note("@2<>@4 [t1] {swapped}") == "swapped"

    def test_parse_note_missing_or_blank(self):
        """Test absent and blank notes."""
        assert parse_note("@2!") is None
        assert parse_note("@2! (  )") is None

    def test_parse_note_ignores_quoted_text(self):
        """Test parentheses inside quoted text are not a note."""
        assert parse_note('"a(b)"@2x4!') is None
        assert parse_note('"a(b)"@2x4! (real)') == "real"

    def test_parse_tags(self):
        """Test extracting space-separated tags."""
        assert parse_tags("@2! [t1  t2\tt3]") == ["t1", "t2", "t3"]

    def test_parse_tags_before_note(self):
        """Test tags and note are found in any order."""
        assert parse_tags("@2! [t1] (note)") == ["t1"]
        assert parse_note("@2! [t1] (note)") == "note"

    def test_parse_tags_missing(self):
        """Test no tags gives an empty list."""
        assert parse_tags("@2!") == []
        assert parse_tags("@2! []") == []

    def test_brackets_inside_note(self):
        """Test a bracket inside a note is part of the note."""
        assert parse_tags("@2! (see [x])") == []


class TestMaskLiterals:
    """Test literal masking."""

    def test_mask_keeps_length(self):
        """Test masking preserves offsets."""
        text = '"a!b"@2="c" (x=y) [t]'
        masked = mask_literals(text)

        assert len(masked) == len(text)
        assert "!" not in masked
        assert masked.count("=") == 1
        assert masked.index("@") == text.index("@")

    def test_mask_annotations_keeps_quoted_text(self):
        """Test only notes and tags are blanked."""
        text = '"a(b)"@2! (x@3!) [t]'
        masked = mask_annotations(text)

        assert len(masked) == len(text)
        assert masked.startswith('"a(b)"@2!')
        assert "@3" not in masked
        assert "t" not in masked


class TestFormatting:
    """Test DSL formatting helpers."""

    def test_format_coordinates(self):
        """Test the length is written only when above 1."""
        assert format_coordinates(3) == "@3"
        assert format_coordinates(3, 1) == "@3"
        assert format_coordinates(3, 2) == "@3x2"

    def test_format_quoted(self):
        """Test quoting descriptive text."""
        assert format_quoted("abc") == '"abc"'
        assert format_quoted(None) == ""
        assert format_quoted("") == ""


class TestPatterns:
    """Test grammar patterns."""

    @pytest.mark.parametrize("separator", ["x", "X", "×"])
    def test_length_separators(self, separator):
        """Test every accepted length separator."""
        match = DELETE_PATTERN.search(f"@2{separator}3!")

        assert match is not None
        assert match.group("run") == "3"

    def test_swap_groups(self):
        """Test swap pattern groups."""
        match = SWAP_PATTERN.search('"ab"@2x2 <> "de"@5')

        assert match.group("input") == "ab"
        assert match.group("at") == "2"
        assert match.group("run") == "2"
        assert match.group("input2") == "de"
        assert match.group("at2") == "5"
        assert match.group("run2") is None
