"""AST serialization: JSON round-trip for kafka-file AST nodes.

Converts typed AST nodes to/from JSON-compatible dicts, for debugging,
snapshot tests and shipping trees to another process.

Positions are written as ``[line, character]`` pairs. Parent links are
not written; ``from_dict`` rebuilds them as nodes are constructed.

All output is deterministic (sorted keys).

Example:
    from kafka_file import parse
    from kafka_file.serialization import to_json, from_json

    doc = parse("PRODUCER\\ntopic: t\\nhello")
    assert from_json(to_json(doc)) == doc

Thread Safety:
    All functions are pure.

"""

from __future__ import annotations

import json
from dataclasses import fields
from enum import Enum
from typing import Any

from kafka_file.location import Position, Range
from kafka_file.nodes import (
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

_NODE_TYPES: dict[str, type[Node]] = {
    "KafkaFileDocument": KafkaFileDocument,
    "ProducerBlock": ProducerBlock,
    "ConsumerBlock": ConsumerBlock,
    "Property": Property,
    "Chunk": Chunk,
    "DynamicChunk": DynamicChunk,
    "MustacheExpression": MustacheExpression,
}

_POSITION_FIELDS = {"start", "end"}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a JSON-compatible dict.

    Includes a ``_type`` discriminator and the node ``kind`` name, then
    every constructor field of the node.
    """
    result: dict[str, Any] = {"_type": type(node).__name__}
    kind = getattr(node, "kind", None)
    if kind is not None:
        result["kind"] = kind.name

    for f in fields(node):
        if not f.init:
            continue
        result[f.name] = _serialize_value(getattr(node, f.name))

    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, Position):
        return [value.line, value.character]
    if isinstance(value, Range):
        return {
            "_type": "Range",
            "start": [value.start.line, value.start.character],
            "end": [value.end.line, value.end.character],
        }
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed AST node from a dict produced by ``to_dict``.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if not f.init or f.name not in data:
            continue
        kwargs[f.name] = _deserialize_value(data[f.name], f.name)

    return node_cls(**kwargs)


def _deserialize_value(value: Any, field_name: str) -> Any:
    if field_name in _POSITION_FIELDS:
        return Position(*value)
    if field_name == "kind":
        return NodeKind[value]
    if isinstance(value, dict):
        if value.get("_type") == "Range":
            return Range(Position(*value["start"]), Position(*value["end"]))
        return from_dict(value)
    if isinstance(value, list):
        return tuple(_deserialize_value(item, "") for item in value)
    return value


def to_json(node: Node, *, indent: int | None = None) -> str:
    """Serialize an AST node to a JSON string with sorted keys."""
    return json.dumps(to_dict(node), sort_keys=True, indent=indent)


def from_json(data: str) -> KafkaFileDocument:
    """Deserialize a KafkaFileDocument from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a KafkaFileDocument.

    """
    node = from_dict(json.loads(data))
    if not isinstance(node, KafkaFileDocument):
        msg = f"Expected KafkaFileDocument, got {type(node).__name__}"
        raise ValueError(msg)
    return node


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
