"""Namespaced loggers for kafka-file.

Every module logs under the ``kafka_file`` hierarchy and installs no
handlers, so hosts decide where records go. Output is DEBUG only: the
parser reports each parse with its block count, and the model cache
reports hits, misses, evictions, stale results and sweeps.

Example:
    >>> import logging
    >>> logging.getLogger("kafka_file").setLevel(logging.DEBUG)
    >>> from kafka_file import parse
    >>> doc = parse("CONSUMER g", uri="file:///orders.kafka")
    >>> # kafka_file.parser: Parsed file:///orders.kafka (version 1): 1 block(s)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return the logger for name inside the ``kafka_file`` namespace.

    Names already under ``kafka_file`` are kept; anything else is prefixed.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("cache").name
        'kafka_file.cache'
        >>> get_logger("kafka_file.parser").name
        'kafka_file.parser'
    """
    if not (name == "kafka_file" or name.startswith("kafka_file.")):
        name = f"kafka_file.{name}"
    return logging.getLogger(name)
