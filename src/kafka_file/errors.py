"""Exception classes for kafka-file.

The parser itself never raises: malformed text is represented as
incomplete nodes. These exceptions are reserved for API misuse.
"""

from __future__ import annotations


class KafkaFileError(Exception):
    """Base exception for all kafka-file errors.

    Subclass this for specific error categories.
    """

    pass


class InvalidPositionError(KafkaFileError, ValueError):
    """A position was created with a negative line or character."""

    pass


class InvalidRangeError(KafkaFileError, ValueError):
    """A range was created with its end before its start."""

    pass


class CacheConfigError(KafkaFileError):
    """Error in language model cache configuration.

    Raised when the cache is created with knobs it cannot honor.
    """

    def __init__(self, option: str, message: str) -> None:
        """Initialize cache configuration error.

        Args:
            option: Name of the offending constructor argument
            message: Description of the problem
        """
        self.option = option
        super().__init__(f"Cache option '{option}': {message}")
