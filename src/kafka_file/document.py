"""Text document abstraction consumed by the kafka-file parser.

The parser never reads files itself: it works against any object that
satisfies ``TextDocumentLike`` (an editor buffer adapter, for example).
``TextDocument`` is the in-memory implementation used by tests, scripts
and hosts that only have a string at hand.

Line breaks are ``\\n``, ``\\r\\n`` or a lone ``\\r``. A document always has
at least one line; a text ending with a line break has an empty last line.

Thread Safety:
    TextDocument is immutable after construction. ``update`` returns a new
    instance with the version bumped.

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from kafka_file.location import Position, Range

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

DEFAULT_LANGUAGE_ID = "kafka"


@dataclass(frozen=True, slots=True)
class TextLine:
    """A single line of a document, without its line break.

    Attributes:
        line_number: Zero-based line index
        text: Line content excluding the line break
        range: Range from the first character to the end of the line

    """

    line_number: int
    text: str
    range: Range


@runtime_checkable
class TextDocumentLike(Protocol):
    """Protocol for documents the parser and the cache can consume."""

    @property
    def uri(self) -> str: ...

    @property
    def version(self) -> int: ...

    @property
    def language_id(self) -> str: ...

    @property
    def line_count(self) -> int: ...

    def line_at(self, line: int) -> TextLine:
        """Return the line at the given zero-based index."""
        ...

    def get_text(self, range: Range | None = None) -> str:
        """Return the text inside range, or the whole text when range is None."""
        ...


class TextDocument:
    """In-memory text document.

    Usage:
            >>> doc = TextDocument("PRODUCER\\ntopic: abc", uri="file:///a.kafka")
            >>> doc.line_count
            2
            >>> doc.line_at(1).text
            'topic: abc'

    """

    __slots__ = ("_uri", "_text", "_version", "_language_id", "_lines", "_line_offsets")

    def __init__(
        self,
        text: str,
        *,
        uri: str = "untitled:Untitled-1",
        version: int = 1,
        language_id: str = DEFAULT_LANGUAGE_ID,
    ) -> None:
        self._uri = uri
        self._text = text
        self._version = version
        self._language_id = language_id

        lines: list[str] = []
        offsets: list[int] = [0]
        pos = 0
        for match in _LINE_BREAK.finditer(text):
            lines.append(text[pos : match.start()])
            pos = match.end()
            offsets.append(pos)
        lines.append(text[pos:])
        self._lines = lines
        self._line_offsets = offsets

    def __repr__(self) -> str:
        return (
            f"TextDocument(uri={self._uri!r}, version={self._version}, "
            f"language_id={self._language_id!r}, lines={len(self._lines)})"
        )

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def version(self) -> int:
        return self._version

    @property
    def language_id(self) -> str:
        return self._language_id

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_at(self, line: int) -> TextLine:
        """Return the line at the given zero-based index.

        Raises:
            IndexError: If line is outside ``[0, line_count)``
        """
        if line < 0 or line >= len(self._lines):
            msg = f"Line {line} out of range (document has {len(self._lines)} lines)"
            raise IndexError(msg)
        text = self._lines[line]
        return TextLine(line, text, Range(Position(line, 0), Position(line, len(text))))

    def offset_at(self, position: Position) -> int:
        """Convert a position to an offset into the text.

        Positions past the end of a line clamp to the end of that line;
        positions past the last line clamp to the end of the text.
        """
        if position.line >= len(self._lines):
            return len(self._text)
        line_length = len(self._lines[position.line])
        return self._line_offsets[position.line] + min(position.character, line_length)

    def position_at(self, offset: int) -> Position:
        """Convert an offset into the text to a position."""
        offset = max(0, min(offset, len(self._text)))
        line = 0
        for i, line_offset in enumerate(self._line_offsets):
            if line_offset > offset:
                break
            line = i
        character = min(offset - self._line_offsets[line], len(self._lines[line]))
        return Position(line, character)

    def get_text(self, range: Range | None = None) -> str:
        """Return the text inside range, or the whole text when range is None."""
        if range is None:
            return self._text
        return self._text[self.offset_at(range.start) : self.offset_at(range.end)]

    def update(self, text: str) -> TextDocument:
        """Return a new document with the given text and the next version."""
        return TextDocument(
            text,
            uri=self._uri,
            version=self._version + 1,
            language_id=self._language_id,
        )
