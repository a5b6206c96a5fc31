"""
kafka-file: parser and language model cache for ``.kafka`` files.

A kafka file is a plain-text script of PRODUCER and CONSUMER blocks
separated by ``###`` lines. This package turns one into a typed,
position-annotated AST that editor features (completion, diagnostics,
hover, code lenses) query, and caches those trees per open document.

Quick Start:
    >>> from kafka_file import parse
    >>> doc = parse("PRODUCER keyed-message\\ntopic: demo\\nkey: id-{{random.number}}\\nhello")
    >>> block = doc.blocks[0]
    >>> block.get_property_value("topic")
    'demo'
    >>> block.value.content
    'hello'

Editor integration:
    >>> from kafka_file import LanguageModelCache, TextDocument
    >>> cache = LanguageModelCache(max_entries=10, cleanup_interval_seconds=60)
    >>> model = cache.get(TextDocument("CONSUMER g1\\ntopic: demo", uri="file:///a.kafka"))
    >>> cache.dispose()

Installation:
    pip install kafka-file          # zero runtime dependencies
"""

from kafka_file.cache import LanguageModelCache, ModelCache
from kafka_file.commands import (
    LaunchConsumerCommand,
    ProduceRecordCommand,
    SerializationSetting,
    create_launch_consumer_command,
    create_produce_record_command,
)
from kafka_file.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from kafka_file.document import TextDocument, TextDocumentLike, TextLine
from kafka_file.errors import (
    CacheConfigError,
    InvalidPositionError,
    InvalidRangeError,
    KafkaFileError,
)
from kafka_file.folding import FoldingRange, get_folding_ranges
from kafka_file.location import Position, Range
from kafka_file.nodes import (
    Block,
    BlockNode,
    BlockType,
    Chunk,
    ConsumerBlock,
    DynamicChunk,
    KafkaFileDocument,
    MustacheExpression,
    Node,
    NodeKind,
    ProducerBlock,
    Property,
)
from kafka_file.parser import parse_kafka_file
from kafka_file.serialization import from_dict, from_json, to_dict, to_json
from kafka_file.visitor import BaseVisitor, walk

__version__ = "0.1.0"


def parse(
    text: str,
    *,
    uri: str = "untitled:Untitled-1",
    version: int = 1,
    config: ParseConfig | None = None,
) -> KafkaFileDocument:
    """Parse kafka-file text into a typed AST.

    Args:
        text: Document content
        uri: Document identity (only used in log messages here)
        version: Document version
        config: Parse configuration (defaults to the active ContextVar one)

    Returns:
        KafkaFileDocument root node; never raises on any text

    """
    return parse_kafka_file(TextDocument(text, uri=uri, version=version), config=config)


__all__ = [
    "BaseVisitor",
    "Block",
    "BlockNode",
    "BlockType",
    "CacheConfigError",
    "Chunk",
    "ConsumerBlock",
    "DynamicChunk",
    "FoldingRange",
    "InvalidPositionError",
    "InvalidRangeError",
    "KafkaFileDocument",
    "KafkaFileError",
    "LanguageModelCache",
    "LaunchConsumerCommand",
    "ModelCache",
    "MustacheExpression",
    "Node",
    "NodeKind",
    "ParseConfig",
    "Position",
    "ProduceRecordCommand",
    "ProducerBlock",
    "Property",
    "Range",
    "SerializationSetting",
    "TextDocument",
    "TextDocumentLike",
    "TextLine",
    "__version__",
    "create_launch_consumer_command",
    "create_produce_record_command",
    "from_dict",
    "from_json",
    "get_folding_ranges",
    "get_parse_config",
    "parse",
    "parse_config_context",
    "parse_kafka_file",
    "reset_parse_config",
    "set_parse_config",
    "to_dict",
    "to_json",
    "walk",
]
