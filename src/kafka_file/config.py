"""ContextVar-based parse configuration for kafka-file.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per host (or per call), read by every sub-parser in the
context without being threaded through each function.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from kafka_file.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(emit_unterminated_expressions=True)):
        doc = parse_kafka_file(text_document)

    # Or per call
    doc = parse_kafka_file(text_document, config=ParseConfig(...))

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from kafka_file.model import PRODUCER_PROPERTIES, property_names


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        producer_properties: Names recognized as property lines in a PRODUCER
            block. The first line that is not one of them starts the value.
        emit_unterminated_expressions: Emit an open, not closed mustache
            expression node for a ``{{`` that is never closed.

    """

    producer_properties: frozenset[str] = property_names(PRODUCER_PROPERTIES)
    emit_unterminated_expressions: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict) -> ParseConfig:
        """Create ParseConfig from dictionary.

        Useful for host integration where settings come from external
        sources (editor settings, TOML files, etc.).

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored. Property name lists are converted to frozensets.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "emit_unterminated_expressions": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.emit_unterminated_expressions
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "producer_properties" in filtered:
            filtered["producer_properties"] = frozenset(filtered["producer_properties"])
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "kafka_file_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(producer_properties=frozenset({"topic"}))):
        ...     doc = parse("PRODUCER\\ntopic: t\\nkey: k")
        >>> # "key: k" was read as the producer value inside the block

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
