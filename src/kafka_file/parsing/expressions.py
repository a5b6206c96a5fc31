"""Mustache expression scanner for dynamic chunks.

Finds ``{{ ... }}`` pairs in the content of a dynamic chunk. Positions are
absolute document positions: the cursor is seeded at the chunk start and
advances over ``\\n``, ``\\r\\n`` and ``\\r`` the same way document lines do,
so an expression may span several lines.

Rules:
- ``{{`` opens an expression when none is open; a nested ``{{`` is ignored.
- ``}}`` closes the open expression; a ``}}`` with nothing open is text.
- An expression still open at the end of the content is dropped, unless
  ``emit_unterminated`` is set, in which case it is emitted with
  ``closed=False`` and ends where the content ends.

Thread Safety:
    ``scan_expressions`` is a pure function. Safe to call from any thread.

"""

from __future__ import annotations

from dataclasses import dataclass

from kafka_file.location import Position, Range
from kafka_file.nodes import MustacheExpression

OPEN_DELIMITER = "{{"
CLOSE_DELIMITER = "}}"


@dataclass(slots=True)
class _ScanCursor:
    """Explicit scan state: offset into content plus document position."""

    offset: int
    line: int
    character: int
    open_offset: int = -1
    open_position: Position | None = None

    def position(self) -> Position:
        return Position(self.line, self.character)


def scan_expressions(
    content: str,
    start: Position,
    *,
    emit_unterminated: bool = False,
) -> tuple[MustacheExpression, ...]:
    """Scan content for mustache expressions.

    Args:
        content: Raw text of the dynamic chunk
        start: Document position of the first character of content
        emit_unterminated: Emit an expression left open at the end

    Returns:
        Expressions in source order, with disjoint ranges

    Example:
        >>> [e.content for e in scan_expressions("{{a}}{{b}}", Position(0, 0))]
        ['a', 'b']

    """
    expressions: list[MustacheExpression] = []
    cursor = _ScanCursor(offset=0, line=start.line, character=start.character)
    length = len(content)

    while cursor.offset < length:
        ch = content[cursor.offset]

        if ch == "\r" or ch == "\n":
            if ch == "\r" and content.startswith("\n", cursor.offset + 1):
                cursor.offset += 1
            cursor.offset += 1
            cursor.line += 1
            cursor.character = 0
            continue

        if content.startswith(OPEN_DELIMITER, cursor.offset):
            if cursor.open_position is None:
                cursor.open_position = cursor.position()
                cursor.open_offset = cursor.offset
            cursor.offset += 2
            cursor.character += 2
            continue

        if cursor.open_position is not None and content.startswith(CLOSE_DELIMITER, cursor.offset):
            inner_end = cursor.position()
            cursor.offset += 2
            cursor.character += 2
            expressions.append(
                _create_expression(content, cursor, inner_end, cursor.offset - 2, closed=True)
            )
            cursor.open_position = None
            cursor.open_offset = -1
            continue

        cursor.offset += 1
        cursor.character += 1

    if emit_unterminated and cursor.open_position is not None:
        expressions.append(
            _create_expression(content, cursor, cursor.position(), length, closed=False)
        )

    return tuple(expressions)


def _create_expression(
    content: str,
    cursor: _ScanCursor,
    inner_end: Position,
    inner_end_offset: int,
    *,
    closed: bool,
) -> MustacheExpression:
    open_position = cursor.open_position
    assert open_position is not None
    inner_start = open_position.translate(character_delta=len(OPEN_DELIMITER))
    return MustacheExpression(
        start=open_position,
        end=cursor.position(),
        content=content[cursor.open_offset + len(OPEN_DELIMITER) : inner_end_offset],
        expression_range=Range(inner_start, inner_end),
        opened=True,
        closed=closed,
    )
