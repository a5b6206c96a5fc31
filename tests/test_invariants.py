"""Property-based tests for parser invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from kafka_file import (
    KafkaFileDocument,
    LanguageModelCache,
    Node,
    ParseConfig,
    Position,
    TextDocument,
    parse,
    parse_kafka_file,
    walk,
)

# Line fragments that exercise every parser state
kafka_lines = st.sampled_from(
    [
        "PRODUCER",
        "PRODUCER p1",
        "CONSUMER",
        "CONSUMER group-1",
        "###",
        "### end",
        "",
        "   ",
        "-- comment",
        "topic: demo",
        "topic:",
        "key: id-{{random.number}}",
        "key: {{unclosed",
        "headers: a=1, b=2",
        "from: earliest",
        "unknown: x",
        "no assigner",
        ":",
        '{"id": "{{random.uuid}}"}',
        "{{a}}{{b}}",
        "}} {{",
        "\t topic \t:\t a ",
    ]
)
kafka_text = st.builds(
    "".join,
    st.lists(
        st.tuples(kafka_lines, st.sampled_from(["\n", "\r\n", "\r"])).map("".join),
        max_size=20,
    ),
)
any_text = st.one_of(kafka_text, st.text(max_size=300))


def assert_well_formed(doc: KafkaFileDocument) -> None:
    """Children nest inside parents, siblings never overlap."""
    for node in walk(doc):
        assert node.start <= node.end
        previous: Node | None = None
        for child in node.children:
            assert child.parent is node
            assert node.start <= child.start
            assert child.end <= node.end
            if previous is not None:
                assert previous.end <= child.start
            previous = child


class TestParserInvariants:
    """The parser is total and its trees are well formed."""

    @given(any_text)
    @settings(max_examples=300)
    def test_never_raises_and_well_formed(self, text: str) -> None:
        """Every text parses into nested, non-overlapping ranges."""
        assert_well_formed(parse(text))

    @given(kafka_text)
    @settings(max_examples=100)
    def test_unterminated_expressions_stay_well_formed(self, text: str) -> None:
        """Open expressions end inside their chunk."""
        config = ParseConfig(emit_unterminated_expressions=True)
        assert_well_formed(parse(text, config=config))

    @given(any_text)
    @settings(max_examples=200)
    def test_idempotence(self, text: str) -> None:
        """Parsing the same text twice gives equal trees."""
        assert parse(text) == parse(text)

    @given(any_text)
    @settings(max_examples=200)
    def test_document_spans_text(self, text: str) -> None:
        """The root covers the whole text."""
        source = TextDocument(text)
        doc = parse_kafka_file(source)
        last = source.line_at(source.line_count - 1)
        assert doc.start == Position(0, 0)
        assert doc.end == last.range.end

    @given(kafka_text)
    @settings(max_examples=200)
    def test_block_count_bounded_by_headers(self, text: str) -> None:
        """Every block starts on a header line."""
        source = TextDocument(text)
        doc = parse_kafka_file(source)
        for block in doc.blocks:
            header = source.line_at(block.start.line).text
            assert header.startswith(block.block_type.value)
            assert block.start.character == 0

    @given(kafka_text, st.integers(0, 25), st.integers(0, 40))
    @settings(max_examples=200)
    def test_find_node_before_returns_tree_node(self, text: str, line: int, char: int) -> None:
        """Cursor lookups never raise and stay in the tree."""
        doc = parse(text)
        node = doc.find_node_before(Position(line, char))
        assert any(node is candidate for candidate in walk(doc))


class TestCacheInvariants:
    """The cache never exceeds its bound."""

    @given(st.lists(st.integers(0, 6), max_size=40), st.integers(1, 4))
    @settings(max_examples=100)
    def test_bounded(self, ids: list[int], max_entries: int) -> None:
        """Any access sequence leaves at most max_entries entries."""
        with LanguageModelCache(max_entries=max_entries, cleanup_interval_seconds=0) as cache:
            for i in ids:
                cache.get(TextDocument("CONSUMER g", uri=f"file:///{i}.kafka"))
                assert len(cache) <= max_entries
            if ids:
                assert f"file:///{ids[-1]}.kafka" in cache
