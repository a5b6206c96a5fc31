"""Block parser producing a kafka-file AST.

Scans a document line by line with a small state machine and hands each
block's line range to the PRODUCER / CONSUMER sub-parsers.

States:
- outside a block: a line starting with ``PRODUCER`` or ``CONSUMER`` opens one;
  any other line is ignored.
- inside a PRODUCER block: only a ``###`` separator line ends it.
- inside a CONSUMER block: a separator or a new block header ends it. When
  the ending line is itself a header, parsing continues inside the new
  block from that same line.

A block ends at the end of the line before its terminating line, or at the
end of the document when the text ends inside it.

The parser is total: it never raises on any text, malformed lines become
incomplete nodes for diagnostics to report.

Thread Safety:
    Parsing is a pure function of the document text and the active
    ParseConfig. The resulting AST is immutable.

"""

from __future__ import annotations

from kafka_file.config import ParseConfig, get_parse_config, parse_config_context
from kafka_file.document import TextDocumentLike
from kafka_file.location import Position
from kafka_file.nodes import Block, BlockType, KafkaFileDocument
from kafka_file.parsing.blocks import parse_consumer_block, parse_producer_block
from kafka_file.utils.logger import get_logger

logger = get_logger(__name__)

SEPARATOR = "###"


def get_block_type(line_text: str) -> BlockType | None:
    """Return the block type a line opens, if any (literal prefix match)."""
    if line_text.startswith(BlockType.PRODUCER.value):
        return BlockType.PRODUCER
    if line_text.startswith(BlockType.CONSUMER.value):
        return BlockType.CONSUMER
    return None


def is_separator(line_text: str) -> bool:
    return line_text.startswith(SEPARATOR)


def is_end_block(line_text: str, block_type: BlockType) -> bool:
    """Check whether line_text ends a block of the given type.

    A CONSUMER block may be directly followed by another block header; a
    PRODUCER block needs a separator, as its value body is free text.
    """
    if block_type is BlockType.CONSUMER:
        return is_separator(line_text) or get_block_type(line_text) is not None
    return is_separator(line_text)


def parse_kafka_file(
    document: TextDocumentLike,
    *,
    config: ParseConfig | None = None,
) -> KafkaFileDocument:
    """Parse a kafka-file text document into an AST.

    Args:
        document: Any object satisfying TextDocumentLike
        config: Parse configuration for this call (defaults to the active
            ContextVar configuration)

    Returns:
        KafkaFileDocument root node

    Example:
        >>> from kafka_file.document import TextDocument
        >>> doc = parse_kafka_file(TextDocument("CONSUMER g1\\nCONSUMER g2"))
        >>> [b.consumer_group_id.content for b in doc.blocks]
        ['g1', 'g2']

    """
    if config is not None:
        with parse_config_context(config):
            return _parse(document, config)
    return _parse(document, get_parse_config())


def _parse(document: TextDocumentLike, config: ParseConfig) -> KafkaFileDocument:
    line_count = document.line_count
    end = document.line_at(line_count - 1).range.end if line_count > 0 else Position(0, 0)
    blocks: list[Block] = []

    current: BlockType | None = None
    block_start = 0
    for line in range(line_count):
        text = document.line_at(line).text
        if current is None:
            current = get_block_type(text)
            if current is not None:
                block_start = line
            continue
        if is_end_block(text, current):
            blocks.append(_create_block(document, block_start, line - 1, current, config))
            current = get_block_type(text) if current is BlockType.CONSUMER else None
            if current is not None:
                block_start = line

    if current is not None:
        blocks.append(_create_block(document, block_start, line_count - 1, current, config))

    logger.debug("Parsed %s (version %s): %d block(s)", document.uri, document.version, len(blocks))
    return KafkaFileDocument(start=Position(0, 0), end=end, blocks=tuple(blocks))


def _create_block(
    document: TextDocumentLike,
    start_line: int,
    end_line: int,
    block_type: BlockType,
    config: ParseConfig,
) -> Block:
    if block_type is BlockType.CONSUMER:
        return parse_consumer_block(document, start_line, end_line)
    return parse_producer_block(document, start_line, end_line, config)
