"""Typed AST nodes for kafka files.

All AST nodes are frozen dataclasses with slots for:
- Immutability: a tree is produced by one parse call and never edited
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: match statements work naturally on the closed node set

Node Hierarchy:
Node (base)
├── KafkaFileDocument
├── BlockNode
│   ├── ProducerBlock
│   └── ConsumerBlock
├── Property
├── Chunk
│   └── DynamicChunk
└── MustacheExpression

Ownership:
Each container owns its children through tuple fields. ``parent`` is a
non-owning back-reference assigned once, when the parent is constructed.
It is excluded from equality, hashing and repr.

Navigation:
``find_node_before(position)`` returns the innermost node that encloses or
immediately precedes an editor cursor.

"""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar, TypeAlias

from kafka_file.location import Position, Range


class NodeKind(Enum):
    """Closed set of node kinds."""

    DOCUMENT = auto()
    PRODUCER_BLOCK = auto()
    CONSUMER_BLOCK = auto()
    PROPERTY = auto()
    PROPERTY_KEY = auto()
    PROPERTY_VALUE = auto()
    PRODUCER_VALUE = auto()
    CONSUMER_GROUP_ID = auto()
    MUSTACHE_EXPRESSION = auto()


class BlockType(Enum):
    """Block declaration keywords. Values are the literal line prefixes."""

    PRODUCER = "PRODUCER"
    CONSUMER = "CONSUMER"


# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track their start and end positions. Concrete classes expose
    ``kind``.

    """

    start: Position
    end: Position
    parent: Node | None = field(default=None, init=False, repr=False, compare=False)

    @property
    def children(self) -> tuple[Node, ...]:
        """Child nodes in document order. Empty for leaves."""
        return ()

    @property
    def last_child(self) -> Node | None:
        children = self.children
        return children[-1] if children else None

    def range(self) -> Range:
        return Range(self.start, self.end)

    def find_node_before(self, position: Position) -> Node:
        """Return the innermost node enclosing or preceding position.

        Descends into the last child starting strictly before position when
        position is inside it, or at/after its end while the child's own last
        child reaches that end (so a cursor at the end of ``topic: abc`` lands
        on the value). A cursor where two siblings touch belongs to the one
        ending there. Returns self when no child starts before position.
        """
        children = self.children
        if not children:
            return self
        idx = bisect_left([c.start for c in children], position) - 1
        if idx < 0:
            return self
        child = children[idx]
        if position.is_before(child.end):
            return child.find_node_before(position)
        last = child.last_child
        if last is not None and last.end == child.end:
            return child.find_node_before(position)
        return child

    def _adopt(self, *children: Node | None) -> None:
        for child in children:
            if child is not None:
                object.__setattr__(child, "parent", self)


# =============================================================================
# Leaf Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Chunk(Node):
    """A literal text span.

    Used for property keys and values, the producer value body and the
    consumer group id; ``kind`` tells them apart. ``content`` is the raw
    text of the span (callers trim).

    """

    content: str
    kind: NodeKind


@dataclass(frozen=True, slots=True)
class MustacheExpression(Node):
    """A ``{{ ... }}`` expression embedded in a dynamic chunk.

    ``start``/``end`` include the delimiters; ``expression_range`` excludes
    them. ``closed`` is False only for an unterminated expression, which is
    emitted when ``ParseConfig.emit_unterminated_expressions`` is set.

    """

    kind: ClassVar[NodeKind] = NodeKind.MUSTACHE_EXPRESSION

    content: str
    expression_range: Range
    opened: bool = True
    closed: bool = True


@dataclass(frozen=True, slots=True)
class DynamicChunk(Chunk):
    """A chunk whose content may embed mustache expressions.

    Expressions are discovered once, when the chunk is built.

    """

    expressions: tuple[MustacheExpression, ...] = ()

    def __post_init__(self) -> None:
        self._adopt(*self.expressions)

    @property
    def children(self) -> tuple[Node, ...]:
        return self.expressions


# =============================================================================
# Property
# =============================================================================


@dataclass(frozen=True, slots=True)
class Property(Node):
    """A ``key: value`` line inside a block.

    A property with ``assigner_character`` None had no ':' on its line.
    ``key``/``value`` keep the raw chunks; ``property_name`` and
    ``property_value`` are their trimmed contents.

    """

    kind: ClassVar[NodeKind] = NodeKind.PROPERTY

    key: Chunk | None = None
    assigner_character: int | None = None
    value: Chunk | None = None

    def __post_init__(self) -> None:
        self._adopt(self.key, self.value)

    @property
    def children(self) -> tuple[Node, ...]:
        return tuple(c for c in (self.key, self.value) if c is not None)

    @property
    def property_name(self) -> str | None:
        return self.key.content.strip() if self.key is not None else None

    @property
    def property_value(self) -> str | None:
        return self.value.content.strip() if self.value is not None else None

    @property
    def property_range(self) -> Range:
        return self.range()

    @property
    def property_key_range(self) -> Range:
        if self.key is not None:
            return self.key.range()
        return Range(self.start, self.start)

    @property
    def property_value_range(self) -> Range:
        """Range of the raw value, or the empty range where a value would go."""
        if self.value is not None:
            return self.value.range()
        if self.assigner_character is not None:
            after = Position(self.start.line, self.assigner_character + 1)
            return Range(after, after)
        return Range(self.end, self.end)

    @property
    def property_trimmed_value_range(self) -> Range | None:
        if self.value is None:
            return None
        content = self.value.content
        leading = len(content) - len(content.lstrip())
        start = self.value.start.translate(character_delta=leading)
        return Range(start, start.translate(character_delta=len(content.strip())))

    def is_before_assigner(self, position: Position) -> bool:
        """Check whether position is on the key side of the ':' assigner."""
        if self.assigner_character is not None:
            return position.character <= self.assigner_character
        return True

    def find_node_before(self, position: Position) -> Node:
        if self.value is not None and self.value.range().contains(position):
            return self.value.find_node_before(position)
        if self.key is not None and self.key.range().contains(position):
            return self.key
        return self


# =============================================================================
# Blocks
# =============================================================================


@dataclass(frozen=True, slots=True)
class BlockNode(Node):
    """Shared shape of PRODUCER and CONSUMER blocks."""

    block_type: ClassVar[BlockType]

    properties: tuple[Property, ...]

    def get_property(self, name: str) -> Property | None:
        """Return the first property with the given trimmed name."""
        for prop in self.properties:
            if prop.property_name == name:
                return prop
        return None

    def get_property_value(self, name: str) -> str | None:
        prop = self.get_property(name)
        return prop.property_value if prop is not None else None


@dataclass(frozen=True, slots=True)
class ProducerBlock(BlockNode):
    """PRODUCER block: properties followed by an optional value body."""

    kind: ClassVar[NodeKind] = NodeKind.PRODUCER_BLOCK
    block_type: ClassVar[BlockType] = BlockType.PRODUCER

    value: DynamicChunk | None = None

    def __post_init__(self) -> None:
        self._adopt(*self.properties, self.value)

    @property
    def children(self) -> tuple[Node, ...]:
        if self.value is None:
            return self.properties
        return (*self.properties, self.value)


@dataclass(frozen=True, slots=True)
class ConsumerBlock(BlockNode):
    """CONSUMER block: group id from the header line, then properties."""

    kind: ClassVar[NodeKind] = NodeKind.CONSUMER_BLOCK
    block_type: ClassVar[BlockType] = BlockType.CONSUMER

    consumer_group_id: Chunk | None = None

    def __post_init__(self) -> None:
        self._adopt(self.consumer_group_id, *self.properties)

    @property
    def children(self) -> tuple[Node, ...]:
        if self.consumer_group_id is None:
            return self.properties
        return (self.consumer_group_id, *self.properties)


Block: TypeAlias = ProducerBlock | ConsumerBlock


# =============================================================================
# Document
# =============================================================================


@dataclass(frozen=True, slots=True)
class KafkaFileDocument(Node):
    """Root node. Spans the whole text and owns the blocks in order."""

    kind: ClassVar[NodeKind] = NodeKind.DOCUMENT

    blocks: tuple[Block, ...] = ()

    def __post_init__(self) -> None:
        self._adopt(*self.blocks)

    @property
    def children(self) -> tuple[Node, ...]:
        return self.blocks


__all__ = [
    "Block",
    "BlockNode",
    "BlockType",
    "Chunk",
    "ConsumerBlock",
    "DynamicChunk",
    "KafkaFileDocument",
    "MustacheExpression",
    "Node",
    "NodeKind",
    "ProducerBlock",
    "Property",
]
