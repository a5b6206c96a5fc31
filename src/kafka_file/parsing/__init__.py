"""Line and character level parsers used by the block parser.

Modules:
- properties: ``key: value`` line parser
- expressions: mustache expression scanner for dynamic chunks
- blocks: PRODUCER / CONSUMER block sub-parsers
"""

from kafka_file.parsing.blocks import (
    is_ignored_line,
    is_known_property_line,
    parse_consumer_block,
    parse_producer_block,
)
from kafka_file.parsing.expressions import scan_expressions
from kafka_file.parsing.properties import parse_property

__all__ = [
    "is_ignored_line",
    "is_known_property_line",
    "parse_consumer_block",
    "parse_producer_block",
    "parse_property",
    "scan_expressions",
]
