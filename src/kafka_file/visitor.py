"""AST visitor and walker for kafka-file documents.

Provides a base visitor class with match-based dispatch and a plain
depth-first ``walk`` generator.

Example, collect every topic of a file:

    class TopicCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.topics: list[str] = []

        def visit_property(self, node: Property) -> None:
            if node.property_name == "topic" and node.property_value:
                self.topics.append(node.property_value)

    collector = TopicCollector()
    collector.visit(doc)

Thread Safety:
    Visitors may accumulate mutable state; create one per thread.
    ``walk`` only reads the immutable tree.

"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, TypeVar

from kafka_file.nodes import (
    Chunk,
    ConsumerBlock,
    DynamicChunk,
    KafkaFileDocument,
    MustacheExpression,
    Node,
    ProducerBlock,
    Property,
)

T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base AST visitor with match-based dispatch.

    Override the ``visit_*`` methods for the node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically, in document order, after the ``visit_*`` call.

    """

    def visit(self, node: Node) -> T:
        result = self._dispatch(node)
        for child in node.children:
            self.visit(child)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` override.

        Default returns None (suitable for ``BaseVisitor[None]``).
        """
        return None  # type: ignore[return-value]

    def visit_document(self, node: KafkaFileDocument) -> T:
        return self.visit_default(node)

    def visit_producer_block(self, node: ProducerBlock) -> T:
        return self.visit_default(node)

    def visit_consumer_block(self, node: ConsumerBlock) -> T:
        return self.visit_default(node)

    def visit_property(self, node: Property) -> T:
        return self.visit_default(node)

    def visit_chunk(self, node: Chunk) -> T:
        return self.visit_default(node)

    def visit_dynamic_chunk(self, node: DynamicChunk) -> T:
        return self.visit_default(node)

    def visit_mustache_expression(self, node: MustacheExpression) -> T:
        return self.visit_default(node)

    def _dispatch(self, node: Node) -> T:
        match node:
            case KafkaFileDocument():
                return self.visit_document(node)
            case ProducerBlock():
                return self.visit_producer_block(node)
            case ConsumerBlock():
                return self.visit_consumer_block(node)
            case Property():
                return self.visit_property(node)
            # DynamicChunk is a Chunk: keep it first
            case DynamicChunk():
                return self.visit_dynamic_chunk(node)
            case Chunk():
                return self.visit_chunk(node)
            case MustacheExpression():
                return self.visit_mustache_expression(node)
            case _:
                return self.visit_default(node)


def walk(node: Node) -> Iterator[Node]:
    """Yield node and all of its descendants, depth-first in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


__all__ = ["BaseVisitor", "walk"]
