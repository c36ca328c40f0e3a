"""Unit tests for the source location codec."""

import pytest
from pydantic import ValidationError

from solc_ast.core.source_location import SourceLocation
from solc_ast.errors import AstParseError, MalformedLocation


class TestParse:
    """Tests for SourceLocation.parse."""

    def test_parses_full_triple(self) -> None:
        """Test that all three fields are read."""
        loc = SourceLocation.parse("1234:56:0")
        assert loc.start == 1234
        assert loc.length == 56
        assert loc.index == 0

    def test_negative_sentinels_become_none(self) -> None:
        """Test that -1 in length and index means unknown."""
        loc = SourceLocation.parse("10:-1:-1")
        assert loc == SourceLocation(start=10, length=None, index=None)

    def test_any_negative_value_becomes_none(self) -> None:
        """Test that negative values other than -1 are also treated as unknown."""
        loc = SourceLocation.parse("0:-7:-2")
        assert loc.length is None
        assert loc.index is None

    @pytest.mark.parametrize(
        "text",
        ["", "1", "1:2", "1:2:", "1:2:3:4", "a:1:1", "1:x:0", "-1:2:3", "1.5:2:3", " 1:2:3", "1:2:3 ", "١:2:3"],
    )
    def test_rejects_malformed_text(self, text: str) -> None:
        """Test that anything but three integer fields is rejected."""
        with pytest.raises(MalformedLocation) as excinfo:
            SourceLocation.parse(text)
        assert excinfo.value.text == text

    def test_malformed_location_is_a_parse_error(self) -> None:
        """Test that MalformedLocation belongs to the parse error hierarchy."""
        with pytest.raises(AstParseError):
            SourceLocation.parse("nope")


class TestFormat:
    """Tests for SourceLocation.format and str()."""

    def test_formats_known_fields(self) -> None:
        """Test formatting a fully known location."""
        assert SourceLocation(start=1234, length=56, index=0).format() == "1234:56:0"

    def test_formats_unknown_fields_as_minus_one(self) -> None:
        """Test that None renders as -1."""
        assert str(SourceLocation(start=10)) == "10:-1:-1"
        assert str(SourceLocation(start=3, length=4)) == "3:4:-1"
        assert str(SourceLocation(start=3, index=2)) == "3:-1:2"

    @pytest.mark.parametrize("text", ["0:0:0", "1234:56:0", "10:-1:-1", "7:-1:3", "99999999999:1:-1"])
    def test_round_trips_canonical_text(self, text: str) -> None:
        """Test that formatting a parsed canonical string gives it back."""
        assert str(SourceLocation.parse(text)) == text


class TestModel:
    """Tests for SourceLocation as a pydantic model."""

    def test_validates_from_wire_string(self) -> None:
        """Test that model_validate accepts the wire string."""
        assert SourceLocation.model_validate("5:6:7") == SourceLocation(start=5, length=6, index=7)

    def test_serializes_to_wire_string(self) -> None:
        """Test that model_dump gives the wire string back."""
        assert SourceLocation(start=5, length=None, index=1).model_dump() == "5:-1:1"

    def test_malformed_string_raises_validation_error(self) -> None:
        """Test that a malformed string fails model validation."""
        with pytest.raises(ValidationError):
            SourceLocation.model_validate("5:6")

    def test_rejects_negative_start_field(self) -> None:
        """Test that a negative start is rejected when built from fields."""
        with pytest.raises(ValidationError):
            SourceLocation(start=-1)

    def test_is_frozen(self) -> None:
        """Test that a location cannot be modified."""
        loc = SourceLocation(start=1, length=2, index=0)
        with pytest.raises(ValidationError):
            loc.start = 5  # type: ignore[misc]

    def test_is_hashable(self) -> None:
        """Test that equal locations hash the same."""
        assert hash(SourceLocation.parse("1:2:3")) == hash(SourceLocation(start=1, length=2, index=3))


class TestRange:
    """Tests for end and slice."""

    def test_end_is_start_plus_length(self) -> None:
        assert SourceLocation.parse("10:5:0").end == 15

    def test_end_is_none_for_unknown_length(self) -> None:
        assert SourceLocation.parse("10:-1:0").end is None

    def test_slice_returns_covered_bytes(self) -> None:
        source = b"pragma solidity ^0.8.0;"
        assert SourceLocation.parse("7:8:0").slice(source) == b"solidity"

    def test_slice_requires_length(self) -> None:
        with pytest.raises(ValueError, match="unknown length"):
            SourceLocation.parse("7:-1:0").slice(b"abc")
