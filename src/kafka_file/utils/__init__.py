"""Utility modules for kafka-file.

Provides:
- logger: get_logger for logging
"""

from kafka_file.utils.logger import get_logger

__all__ = [
    "get_logger",
]
