"""PRODUCER and CONSUMER block sub-parsers.

The block parser (``kafka_file.parser``) finds block boundaries; these
functions turn the lines ``[start_line, end_line]`` of one block into a
block node.

PRODUCER:
    Blank and ``--`` comment lines are skipped. A line whose text before
    the first ':' is a recognized producer property becomes a Property.
    The first other line starts the value: everything from it to the end
    of the block, trimmed, is the value chunk, and scanning stops. A value
    body may therefore contain ``name: value`` looking text.

CONSUMER:
    The rest of the header line after ``CONSUMER``, trimmed, is the
    consumer group id. Every later non-blank, non-comment line is a
    Property, whatever its name.

"""

from __future__ import annotations

import re

from kafka_file.config import ParseConfig
from kafka_file.document import TextDocumentLike
from kafka_file.location import Position, Range
from kafka_file.nodes import (
    BlockType,
    Chunk,
    ConsumerBlock,
    DynamicChunk,
    NodeKind,
    ProducerBlock,
    Property,
)
from kafka_file.parsing.expressions import scan_expressions
from kafka_file.parsing.properties import ASSIGNER, parse_property

COMMENT_PREFIX = "--"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def is_ignored_line(line_text: str) -> bool:
    """Blank lines and ``--`` comments carry no block content."""
    stripped = line_text.strip()
    return not stripped or stripped.startswith(COMMENT_PREFIX)


def is_known_property_line(line_text: str, names: frozenset[str]) -> bool:
    name, sep, _ = line_text.partition(ASSIGNER)
    return bool(sep) and name.strip() in names


def parse_producer_block(
    document: TextDocumentLike,
    start_line: int,
    end_line: int,
    config: ParseConfig,
) -> ProducerBlock:
    """Build a producer block from lines ``start_line..end_line`` (inclusive)."""
    start = Position(start_line, 0)
    end = document.line_at(end_line).range.end
    properties: list[Property] = []
    value: DynamicChunk | None = None

    for line in range(start_line + 1, end_line + 1):
        text = document.line_at(line).text
        if is_ignored_line(text):
            continue
        if is_known_property_line(text, config.producer_properties):
            properties.append(parse_property(text, line))
            continue
        value = _create_producer_value(document, Position(line, 0), end, config)
        break

    return ProducerBlock(start=start, end=end, properties=tuple(properties), value=value)


def parse_consumer_block(
    document: TextDocumentLike,
    start_line: int,
    end_line: int,
) -> ConsumerBlock:
    """Build a consumer block from lines ``start_line..end_line`` (inclusive)."""
    header = document.line_at(start_line)
    properties: list[Property] = []

    for line in range(start_line + 1, end_line + 1):
        text = document.line_at(line).text
        if is_ignored_line(text):
            continue
        properties.append(parse_property(text, line))

    return ConsumerBlock(
        start=Position(start_line, 0),
        end=document.line_at(end_line).range.end,
        properties=tuple(properties),
        consumer_group_id=_create_consumer_group_id(header.text, start_line),
    )


def _create_consumer_group_id(header_text: str, line: int) -> Chunk:
    prefix_length = len(BlockType.CONSUMER.value)
    rest = header_text[prefix_length:]
    content = rest.strip()
    if content:
        start_character = prefix_length + len(rest) - len(rest.lstrip())
    else:
        start_character = len(header_text)
    return Chunk(
        start=Position(line, start_character),
        end=Position(line, start_character + len(content)),
        content=content,
        kind=NodeKind.CONSUMER_GROUP_ID,
    )


def _create_producer_value(
    document: TextDocumentLike,
    value_start: Position,
    block_end: Position,
    config: ParseConfig,
) -> DynamicChunk:
    raw = document.get_text(Range(value_start, block_end))
    content = raw.strip()
    # The first value line is not blank, so leading whitespace stays on it
    start = value_start.translate(character_delta=len(raw) - len(raw.lstrip()))
    return DynamicChunk(
        start=start,
        end=_advance(start, content),
        content=content,
        kind=NodeKind.PRODUCER_VALUE,
        expressions=scan_expressions(
            content,
            start,
            emit_unterminated=config.emit_unterminated_expressions,
        ),
    )


def _advance(start: Position, text: str) -> Position:
    """Return the position reached after text, starting at start."""
    lines = _LINE_BREAK.split(text)
    if len(lines) == 1:
        return start.translate(character_delta=len(text))
    return Position(start.line + len(lines) - 1, len(lines[-1]))
