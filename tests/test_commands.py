"""Tests for produce / consume command assembly."""

from kafka_file import (
    ConsumerBlock,
    LaunchConsumerCommand,
    ProducerBlock,
    SerializationSetting,
    create_launch_consumer_command,
    create_produce_record_command,
    parse,
)
from kafka_file.commands import parse_format, parse_headers


def producer(text: str) -> ProducerBlock:
    block = parse(text).blocks[0]
    assert isinstance(block, ProducerBlock)
    return block


def consumer(text: str) -> ConsumerBlock:
    block = parse(text).blocks[0]
    assert isinstance(block, ConsumerBlock)
    return block


class TestParseFormat:
    """``name(arg, ...)`` format values."""

    def test_plain_name(self) -> None:
        """No parentheses means no settings."""
        assert parse_format("long") == ("long", None)

    def test_with_settings(self) -> None:
        """Arguments are trimmed settings."""
        assert parse_format("string( utf-8 , x )") == (
            "string",
            (SerializationSetting("utf-8"), SerializationSetting("x")),
        )

    def test_empty_arguments(self) -> None:
        """Empty parentheses give no settings."""
        assert parse_format("string()") == ("string", None)

    def test_unclosed_parenthesis(self) -> None:
        """A missing ')' keeps the typed arguments."""
        assert parse_format("string(utf-8") == ("string", (SerializationSetting("utf-8"),))

    def test_missing(self) -> None:
        """None in, None out."""
        assert parse_format(None) == (None, None)


class TestParseHeaders:
    """Comma-separated ``name=value`` pairs."""

    def test_pairs(self) -> None:
        """Names and values are trimmed."""
        assert parse_headers("a=1, b = 2") == (("a", "1"), ("b", "2"))

    def test_pairs_without_equals_dropped(self) -> None:
        """Items without '=' are ignored."""
        assert parse_headers("a=1,junk") == (("a", "1"),)

    def test_value_may_contain_equals(self) -> None:
        """Only the first '=' splits."""
        assert parse_headers("q=x=y") == (("q", "x=y"),)

    def test_empty(self) -> None:
        """Missing or empty text gives None."""
        assert parse_headers(None) is None
        assert parse_headers("") is None


class TestProduceRecordCommand:
    """Producer block to command."""

    def test_full_block(self) -> None:
        """Every property feeds its command field."""
        block = producer(
            "PRODUCER keyed\n"
            "topic: demo\n"
            "key: k1\n"
            "key-format: string(utf-8)\n"
            "value-format: long\n"
            "headers: trace=abc, retry=1\n"
            "every: 5s\n"
            "42"
        )
        command = create_produce_record_command(block, "local")
        assert command.cluster_id == "local"
        assert command.topic_id == "demo"
        assert command.key == "k1"
        assert command.value == "42"
        assert command.message_key_format == "string"
        assert command.message_key_format_settings == (SerializationSetting("utf-8"),)
        assert command.message_value_format == "long"
        assert command.message_value_format_settings is None
        assert command.headers_dict == {"trace": "abc", "retry": "1"}
        assert command.every == "5s"

    def test_minimal_block(self) -> None:
        """Absent properties stay None."""
        command = create_produce_record_command(producer("PRODUCER"), "c")
        assert command.topic_id is None
        assert command.value is None
        assert command.headers is None
        assert command.headers_dict is None

    def test_last_duplicate_wins(self) -> None:
        """Repeated properties overwrite earlier ones."""
        block = producer("PRODUCER\ntopic: a\ntopic: b\nv")
        assert create_produce_record_command(block, "c").topic_id == "b"


class TestLaunchConsumerCommand:
    """Consumer block to command."""

    def test_full_block(self) -> None:
        """Group id, topic, offset, partitions and formats."""
        block = consumer(
            "CONSUMER group-1\n"
            "topic: demo\n"
            "from: earliest\n"
            "partitions: 0-2\n"
            "value-format: string(utf-8)\n"
        )
        command = create_launch_consumer_command(block, "local")
        assert command == LaunchConsumerCommand(
            cluster_id="local",
            consumer_group_id="group-1",
            topic_id="demo",
            from_offset="earliest",
            partitions="0-2",
            message_value_format="string",
            message_value_format_settings=(SerializationSetting("utf-8"),),
        )

    def test_topic_defaults_to_empty(self) -> None:
        """A missing topic is an empty string, the cluster may be unknown."""
        command = create_launch_consumer_command(consumer("CONSUMER g"), None)
        assert command.topic_id == ""
        assert command.cluster_id is None
        assert command.consumer_group_id == "g"
