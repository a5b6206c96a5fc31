"""Folding ranges for kafka files: one region per multi-line block."""

from __future__ import annotations

from dataclasses import dataclass

from kafka_file.nodes import KafkaFileDocument

REGION = "region"


@dataclass(frozen=True, slots=True)
class FoldingRange:
    start_line: int
    end_line: int
    kind: str = REGION


def get_folding_ranges(document: KafkaFileDocument) -> list[FoldingRange]:
    """Return a region for every block spanning more than one line."""
    return [
        FoldingRange(block.start.line, block.end.line)
        for block in document.blocks
        if block.end.line > block.start.line
    ]


__all__ = ["FoldingRange", "get_folding_ranges"]
