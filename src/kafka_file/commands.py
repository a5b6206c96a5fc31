"""Produce / consume command assembly from parsed blocks.

A PRODUCER block becomes a ``ProduceRecordCommand`` and a CONSUMER block a
``LaunchConsumerCommand``: the payloads an editor action hands to the
Kafka client. Only the block's properties and value are read; nothing is
validated here (diagnostics report bad values).

Format properties accept a call syntax carrying serializer settings::

    key-format: string(utf-8)
    value-format: avro(schema.avsc)

When a property is repeated, the last occurrence wins.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from kafka_file.nodes import ConsumerBlock, ProducerBlock


@dataclass(frozen=True, slots=True)
class SerializationSetting:
    """One argument of a ``name(arg, ...)`` format."""

    value: str


SerializationSettings: TypeAlias = tuple[SerializationSetting, ...]


@dataclass(frozen=True, slots=True)
class ProduceRecordCommand:
    cluster_id: str
    topic_id: str | None = None
    key: str | None = None
    value: str | None = None
    message_key_format: str | None = None
    message_key_format_settings: SerializationSettings | None = None
    message_value_format: str | None = None
    message_value_format_settings: SerializationSettings | None = None
    headers: tuple[tuple[str, str], ...] | None = None
    every: str | None = None

    @property
    def headers_dict(self) -> dict[str, str] | None:
        return dict(self.headers) if self.headers is not None else None


@dataclass(frozen=True, slots=True)
class LaunchConsumerCommand:
    cluster_id: str | None
    consumer_group_id: str | None = None
    topic_id: str = ""
    from_offset: str | None = None
    partitions: str | None = None
    message_key_format: str | None = None
    message_key_format_settings: SerializationSettings | None = None
    message_value_format: str | None = None
    message_value_format_settings: SerializationSettings | None = None


def parse_format(text: str | None) -> tuple[str | None, SerializationSettings | None]:
    """Split a format value into its name and settings.

    Returns:
        ``(name, settings)``; settings is None when there are no arguments

    Example:
        >>> parse_format("string(utf-8)")
        ('string', (SerializationSetting(value='utf-8'),))
        >>> parse_format("long")
        ('long', None)

    """
    if text is None:
        return None, None
    name, paren, rest = text.partition("(")
    name = name.strip()
    if not paren:
        return name or None, None
    # A missing ')' still yields the typed arguments
    arguments = rest[: rest.rindex(")")] if ")" in rest else rest
    settings = tuple(
        SerializationSetting(arg.strip()) for arg in arguments.split(",") if arg.strip()
    )
    return name or None, settings or None


def parse_headers(text: str | None) -> tuple[tuple[str, str], ...] | None:
    """Parse ``name=value`` pairs separated by commas.

    Pairs without ``=`` are dropped; a later duplicate name replaces an
    earlier one.

    Example:
        >>> parse_headers("a=1, b = 2, junk")
        (('a', '1'), ('b', '2'))

    """
    if not text:
        return None
    headers: dict[str, str] = {}
    for item in text.split(","):
        name, sep, value = item.strip().partition("=")
        if sep:
            headers[name.strip()] = value.strip()
    return tuple(headers.items())


def create_produce_record_command(block: ProducerBlock, cluster_id: str) -> ProduceRecordCommand:
    topic_id = key = headers_text = every = None
    key_format = value_format = None
    for prop in block.properties:
        match prop.property_name:
            case "topic":
                topic_id = prop.property_value
            case "key":
                key = prop.property_value
            case "key-format":
                key_format = prop.property_value
            case "value-format":
                value_format = prop.property_value
            case "headers":
                headers_text = prop.property_value
            case "every":
                every = prop.property_value

    key_format_name, key_settings = parse_format(key_format)
    value_format_name, value_settings = parse_format(value_format)
    return ProduceRecordCommand(
        cluster_id=cluster_id,
        topic_id=topic_id,
        key=key,
        value=block.value.content if block.value is not None else None,
        message_key_format=key_format_name,
        message_key_format_settings=key_settings,
        message_value_format=value_format_name,
        message_value_format_settings=value_settings,
        headers=parse_headers(headers_text),
        every=every,
    )


def create_launch_consumer_command(
    block: ConsumerBlock,
    cluster_id: str | None,
) -> LaunchConsumerCommand:
    topic_id = from_offset = partitions = None
    key_format = value_format = None
    for prop in block.properties:
        match prop.property_name:
            case "topic":
                topic_id = prop.property_value
            case "from":
                from_offset = prop.property_value
            case "partitions":
                partitions = prop.property_value
            case "key-format":
                key_format = prop.property_value
            case "value-format":
                value_format = prop.property_value

    key_format_name, key_settings = parse_format(key_format)
    value_format_name, value_settings = parse_format(value_format)
    group_id = block.consumer_group_id
    return LaunchConsumerCommand(
        cluster_id=cluster_id,
        consumer_group_id=group_id.content if group_id is not None else None,
        topic_id=topic_id or "",
        from_offset=from_offset,
        partitions=partitions,
        message_key_format=key_format_name,
        message_key_format_settings=key_settings,
        message_value_format=value_format_name,
        message_value_format_settings=value_settings,
    )


__all__ = [
    "LaunchConsumerCommand",
    "ProduceRecordCommand",
    "SerializationSetting",
    "create_launch_consumer_command",
    "create_produce_record_command",
    "parse_format",
    "parse_headers",
]
