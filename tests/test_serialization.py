"""Tests for kafka_file.serialization: AST JSON round-trip."""

import json

import pytest

from kafka_file import (
    Chunk,
    DynamicChunk,
    KafkaFileDocument,
    NodeKind,
    Position,
    from_dict,
    from_json,
    parse,
    to_dict,
    to_json,
)

SOURCE = "PRODUCER\ntopic: t\nkey: {{a}}\nhello {{b}}\n###\nCONSUMER g\nfrom: latest"


class TestToDict:
    """Dict shape."""

    def test_chunk(self) -> None:
        """Positions are [line, character] pairs, kinds are names."""
        chunk = Chunk(Position(1, 0), Position(1, 5), "topic", NodeKind.PROPERTY_KEY)
        assert to_dict(chunk) == {
            "_type": "Chunk",
            "kind": "PROPERTY_KEY",
            "start": [1, 0],
            "end": [1, 5],
            "content": "topic",
        }

    def test_no_parent_field(self) -> None:
        """Parent links are not written."""
        data = to_dict(parse(SOURCE))
        assert "parent" not in data
        assert "parent" not in data["blocks"][0]

    def test_expression_range(self) -> None:
        """Ranges are tagged dicts."""
        doc = parse(SOURCE)
        data = to_dict(doc)
        expr = data["blocks"][0]["value"]["expressions"][0]
        assert expr["_type"] == "MustacheExpression"
        assert expr["kind"] == "MUSTACHE_EXPRESSION"
        assert expr["expression_range"] == {"_type": "Range", "start": [3, 8], "end": [3, 9]}
        assert expr["closed"] is True

    def test_json_is_deterministic(self) -> None:
        """Sorted keys, same text every time."""
        first = to_json(parse(SOURCE))
        assert first == to_json(parse(SOURCE))
        assert json.loads(first)["_type"] == "KafkaFileDocument"


class TestRoundTrip:
    """from_dict / from_json rebuild equal trees."""

    def test_document_round_trip(self) -> None:
        """A parsed document survives JSON."""
        doc = parse(SOURCE)
        restored = from_json(to_json(doc, indent=2))
        assert restored == doc

    def test_parents_rebuilt(self) -> None:
        """Deserialized nodes are linked to their containers."""
        restored = from_json(to_json(parse(SOURCE)))
        block = restored.blocks[0]
        assert block.parent is restored
        assert isinstance(block.value, DynamicChunk)
        assert block.value.expressions[0].parent is block.value

    def test_missing_type(self) -> None:
        """A dict without _type is rejected."""
        with pytest.raises(ValueError, match="_type"):
            from_dict({"start": [0, 0]})

    def test_unknown_type(self) -> None:
        """Unknown node names are rejected."""
        with pytest.raises(ValueError, match="Unknown node type"):
            from_dict({"_type": "Paragraph"})

    def test_from_json_requires_document(self) -> None:
        """from_json only returns documents."""
        chunk = Chunk(Position(0, 0), Position(0, 1), "x", NodeKind.PROPERTY_KEY)
        with pytest.raises(ValueError, match="Expected KafkaFileDocument"):
            from_json(to_json(chunk))

    def test_empty_document(self) -> None:
        """No blocks round-trips too."""
        doc = parse("")
        assert isinstance(from_json(to_json(doc)), KafkaFileDocument)
        assert from_json(to_json(doc)) == doc
