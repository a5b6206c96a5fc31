"""Position and range primitives for kafka-file nodes.

Every node of a parsed kafka file is anchored in this coordinate space so
editor features can highlight, replace and navigate text precisely.

All coordinates are 0-indexed (line and character start at 0), matching
the coordinates editors use for text documents.

Thread Safety:
Position and Range are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass

from kafka_file.errors import InvalidPositionError, InvalidRangeError


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A zero-based (line, character) coordinate.

    Positions are totally ordered by line, then character.

    Examples:
            >>> Position(1, 4).is_before(Position(2, 0))
            True
            >>> Position(1, 4) < Position(1, 5)
            True

    """

    line: int
    character: int

    def __post_init__(self) -> None:
        if self.line < 0 or self.character < 0:
            msg = f"Position coordinates must be non-negative, got ({self.line}, {self.character})"
            raise InvalidPositionError(msg)

    def __str__(self) -> str:
        return f"{self.line}:{self.character}"

    def is_before(self, other: Position) -> bool:
        return self < other

    def is_before_or_equal(self, other: Position) -> bool:
        return self <= other

    def is_after(self, other: Position) -> bool:
        return self > other

    def is_after_or_equal(self, other: Position) -> bool:
        return self >= other

    def is_equal(self, other: Position) -> bool:
        return self == other

    def translate(self, line_delta: int = 0, character_delta: int = 0) -> Position:
        """Create a new position shifted by the given deltas."""
        return Position(self.line + line_delta, self.character + character_delta)

    def with_(self, line: int | None = None, character: int | None = None) -> Position:
        """Create a new position with the given coordinates replaced."""
        return Position(
            self.line if line is None else line,
            self.character if character is None else character,
        )


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open span ``[start, end)`` between two positions.

    Attributes:
        start: First position covered by the range
        end: Position just past the last covered character

    """

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.end < self.start:
            msg = f"Range end {self.end} is before start {self.start}"
            raise InvalidRangeError(msg)

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def is_single_line(self) -> bool:
        return self.start.line == self.end.line

    def contains(self, position: Position) -> bool:
        """Check whether position lies within the range, both ends included.

        Editors place the cursor between characters, so a cursor sitting
        right after the last character still touches the range.
        """
        return self.start <= position <= self.end

    @classmethod
    def from_coordinates(
        cls,
        start_line: int,
        start_character: int,
        end_line: int,
        end_character: int,
    ) -> Range:
        """Create a range from four raw coordinates."""
        return cls(Position(start_line, start_character), Position(end_line, end_character))
