"""Property definitions recognized in kafka-file blocks.

The parser treats these tables as opaque configuration: it only needs the
names (see ``ParseConfig.producer_properties``). Descriptions and value
enumerations are carried for completion and hover providers built on top
of the parsed tree.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PropertyDefinition:
    """A recognized property name with optional value enumeration.

    Attributes:
        name: Property name as written before the ':' assigner
        description: Markdown description of the property
        enum: Known values for the property, if any

    """

    name: str
    description: str = ""
    enum: tuple[PropertyDefinition, ...] = ()

    def get_value(self, name: str) -> PropertyDefinition | None:
        for value in self.enum:
            if value.name == name:
                return value
        return None


def _formats(kind: str, *, with_none: bool) -> tuple[PropertyDefinition, ...]:
    values = [PropertyDefinition("none", "No deserializer (ignores content)")] if with_none else []
    for name in ("string", "double", "float", "integer", "long", "short"):
        java_name = f"{name.capitalize()}{kind}"
        values.append(
            PropertyDefinition(
                name,
                f"Similar {kind.lower()} to the Kafka Java client "
                f"org.apache.kafka.common.serialization.{java_name}.",
            )
        )
    return tuple(values)


CONSUMER_PROPERTIES: tuple[PropertyDefinition, ...] = (
    PropertyDefinition("topic", "The topic id *[required]*"),
    PropertyDefinition(
        "from",
        "The offset from which the consumer group will start consuming messages from. "
        "Possible values are: `earliest`, `latest`, or an integer value. *[optional]*.",
        (PropertyDefinition("earliest"), PropertyDefinition("latest"), PropertyDefinition("0")),
    ),
    PropertyDefinition(
        "key-format",
        "Deserializer to use for the key *[optional]*.",
        _formats("Deserializer", with_none=True),
    ),
    PropertyDefinition(
        "value-format",
        "Deserializer to use for the value *[optional]*.",
        _formats("Deserializer", with_none=True),
    ),
    PropertyDefinition(
        "partitions",
        "The partition number(s), or a partitions range, or a combination of "
        "partitions ranges *[optional]*. eg: `0`, `0,1,2`, `0-2`, `0,2-3`",
        (PropertyDefinition("0"),),
    ),
)

PRODUCER_PROPERTIES: tuple[PropertyDefinition, ...] = (
    PropertyDefinition("topic", "The topic id *[required]*"),
    PropertyDefinition("key", "The key *[optional]*."),
    PropertyDefinition(
        "headers",
        "The headers, as comma-separated `name=value` pairs *[optional]*.",
    ),
    PropertyDefinition(
        "key-format",
        "Serializer to use for the key *[optional]*.",
        _formats("Serializer", with_none=False),
    ),
    PropertyDefinition(
        "value-format",
        "Serializer to use for the value *[optional]*.",
        _formats("Serializer", with_none=False),
    ),
    PropertyDefinition(
        "every",
        "Produce the record repeatedly at the given interval (e.g. `5s`, `1m`) *[optional]*.",
    ),
)


def property_names(definitions: tuple[PropertyDefinition, ...]) -> frozenset[str]:
    """Return the set of names declared by a definition table."""
    return frozenset(d.name for d in definitions)


def get_definition(
    definitions: tuple[PropertyDefinition, ...], name: str | None
) -> PropertyDefinition | None:
    """Look up a definition by property name."""
    if name is None:
        return None
    for definition in definitions:
        if definition.name == name:
            return definition
    return None


__all__ = [
    "CONSUMER_PROPERTIES",
    "PRODUCER_PROPERTIES",
    "PropertyDefinition",
    "get_definition",
    "property_names",
]
