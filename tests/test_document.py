"""Tests for the in-memory TextDocument."""

import pytest

from kafka_file import Position, Range, TextDocument, TextDocumentLike


class TestLines:
    """Line splitting and access."""

    def test_empty_text_has_one_line(self) -> None:
        """An empty document still has a single empty line."""
        doc = TextDocument("")
        assert doc.line_count == 1
        assert doc.line_at(0).text == ""

    def test_all_line_break_styles(self) -> None:
        """\\n, \\r\\n and a lone \\r all break lines."""
        doc = TextDocument("a\r\nb\rc\nd")
        assert doc.line_count == 4
        assert [doc.line_at(i).text for i in range(4)] == ["a", "b", "c", "d"]

    def test_trailing_break_adds_empty_line(self) -> None:
        """Text ending with a break has an empty last line."""
        doc = TextDocument("a\n")
        assert doc.line_count == 2
        assert doc.line_at(1).text == ""

    def test_line_range(self) -> None:
        """A line's range spans its text, break excluded."""
        line = TextDocument("first\nsecond").line_at(1)
        assert line.line_number == 1
        assert line.range == Range(Position(1, 0), Position(1, 6))

    def test_line_out_of_range(self) -> None:
        """line_at outside the document raises IndexError."""
        doc = TextDocument("a\nb")
        with pytest.raises(IndexError):
            doc.line_at(2)
        with pytest.raises(IndexError):
            doc.line_at(-1)


class TestOffsets:
    """Conversions between positions and offsets."""

    def test_offset_at(self) -> None:
        """Offsets count the line breaks of previous lines."""
        doc = TextDocument("ab\r\ncd")
        assert doc.offset_at(Position(0, 0)) == 0
        assert doc.offset_at(Position(1, 1)) == 5

    def test_offset_at_clamps(self) -> None:
        """Past the line end clamps to the line, past the text to the text."""
        doc = TextDocument("ab\ncd")
        assert doc.offset_at(Position(0, 99)) == 2
        assert doc.offset_at(Position(9, 0)) == 5

    def test_position_at(self) -> None:
        """position_at is the inverse of offset_at inside the text."""
        doc = TextDocument("ab\ncd")
        assert doc.position_at(2) == Position(0, 2)
        assert doc.position_at(3) == Position(1, 0)
        assert doc.position_at(4) == Position(1, 1)
        assert doc.position_at(99) == Position(1, 2)

    def test_get_text(self) -> None:
        """get_text returns the whole text or a slice."""
        doc = TextDocument("ab\ncd\nef")
        assert doc.get_text() == "ab\ncd\nef"
        assert doc.get_text(Range(Position(0, 1), Position(1, 1))) == "b\nc"
        assert doc.get_text(Range(Position(1, 0), Position(2, 2))) == "cd\nef"


class TestIdentity:
    """URI, version and language id."""

    def test_defaults(self) -> None:
        """Defaults match an untitled kafka buffer."""
        doc = TextDocument("")
        assert doc.uri == "untitled:Untitled-1"
        assert doc.version == 1
        assert doc.language_id == "kafka"

    def test_update_bumps_version(self) -> None:
        """update returns a new document with version + 1."""
        doc = TextDocument("a", uri="file:///x.kafka", version=3)
        updated = doc.update("b")
        assert updated.version == 4
        assert updated.uri == "file:///x.kafka"
        assert updated.get_text() == "b"
        assert doc.get_text() == "a"

    def test_satisfies_protocol(self) -> None:
        """TextDocument is a TextDocumentLike."""
        assert isinstance(TextDocument(""), TextDocumentLike)
