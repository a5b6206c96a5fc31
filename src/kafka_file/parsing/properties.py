"""Property line parser.

Splits a single ``key: value`` line into a key chunk, the offset of the
``:`` assigner and a value chunk, in one left-to-right pass.

Chunk boundaries are set by the first ``:`` and the end of the line only:
- leading spaces/tabs of a chunk are skipped;
- whitespace inside or after a chunk is kept (``property_name`` and
  ``property_value`` trim);
- any ``:`` after the first one is value content.

A line without ``:`` yields a key-only property whose
``assigner_character`` is None. Diagnostics flag it; the parser does not.

Thread Safety:
    Pure function; configuration is read from the ContextVar.

"""

from __future__ import annotations

from dataclasses import dataclass

from kafka_file.config import get_parse_config
from kafka_file.location import Position
from kafka_file.nodes import Chunk, DynamicChunk, NodeKind, Property
from kafka_file.parsing.expressions import scan_expressions

ASSIGNER = ":"
INLINE_WHITESPACE = frozenset(" \t")

# Property whose value may embed mustache expressions
DYNAMIC_VALUE_PROPERTY = "key"

_NOT_STARTED = -1


@dataclass(slots=True)
class _LineCursor:
    start: int = _NOT_STARTED
    within_value: bool = False
    assigner: int | None = None


def parse_property(line_text: str, line_number: int) -> Property:
    """Parse one property line.

    Args:
        line_text: Line content without its line break
        line_number: Zero-based line index in the document

    Returns:
        Property node; never raises

    Example:
        >>> prop = parse_property("topic:  abcd  ", 1)
        >>> prop.property_name, prop.property_value, prop.assigner_character
        ('topic', 'abcd', 5)

    """
    cursor = _LineCursor()
    key: Chunk | None = None
    value: Chunk | None = None

    for i, ch in enumerate(line_text):
        if ch in INLINE_WHITESPACE:
            continue
        if ch == ASSIGNER and not cursor.within_value:
            if cursor.start != _NOT_STARTED:
                key = _create_chunk(line_text, line_number, cursor.start, i, NodeKind.PROPERTY_KEY)
            cursor.assigner = i
            cursor.within_value = True
            cursor.start = _NOT_STARTED
            continue
        if cursor.start == _NOT_STARTED:
            cursor.start = i

    if cursor.start != _NOT_STARTED:
        end = len(line_text)
        if not cursor.within_value:
            key = _create_chunk(line_text, line_number, cursor.start, end, NodeKind.PROPERTY_KEY)
        elif key is not None and key.content.strip() == DYNAMIC_VALUE_PROPERTY:
            value = _create_dynamic_chunk(line_text, line_number, cursor.start, end)
        else:
            value = _create_chunk(line_text, line_number, cursor.start, end, NodeKind.PROPERTY_VALUE)

    start, end = _property_bounds(key, value, line_number, cursor.assigner)
    return Property(start=start, end=end, key=key, assigner_character=cursor.assigner, value=value)


def _create_chunk(line_text: str, line_number: int, start: int, end: int, kind: NodeKind) -> Chunk:
    return Chunk(
        start=Position(line_number, start),
        end=Position(line_number, end),
        content=line_text[start:end],
        kind=kind,
    )


def _create_dynamic_chunk(line_text: str, line_number: int, start: int, end: int) -> DynamicChunk:
    content = line_text[start:end]
    start_position = Position(line_number, start)
    return DynamicChunk(
        start=start_position,
        end=Position(line_number, end),
        content=content,
        kind=NodeKind.PROPERTY_VALUE,
        expressions=scan_expressions(
            content,
            start_position,
            emit_unterminated=get_parse_config().emit_unterminated_expressions,
        ),
    )


def _property_bounds(
    key: Chunk | None,
    value: Chunk | None,
    line_number: int,
    assigner: int | None,
) -> tuple[Position, Position]:
    if key is not None and value is not None:
        return key.start, value.end
    if key is not None:
        return key.start, key.end
    if value is not None:
        return value.start, value.end
    anchor = Position(line_number, assigner if assigner is not None else 0)
    return anchor, anchor
