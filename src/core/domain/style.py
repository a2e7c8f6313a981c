"""Aggregation styles.

This module names the three interchangeable ways the aggregator can run.
Keeping it in the domain layer lets the config, the service and the CLI
share one source of truth without circular imports.
"""

from __future__ import annotations

from enum import Enum


class AggregationStyle(str, Enum):
    """Concurrency idiom used to assemble a `PersonInfo`."""

    CHAINED = "chained"
    SEQUENTIAL = "sequential"
    REACTIVE = "reactive"

    @classmethod
    def default(cls) -> "AggregationStyle":
        """Return the style used when nothing else is configured."""

        return cls.SEQUENTIAL

    def label(self) -> str:
        """Human readable label for tables and logging."""

        labels = {
            AggregationStyle.CHAINED: "Chained continuations",
            AggregationStyle.SEQUENTIAL: "Sequential awaits",
            AggregationStyle.REACTIVE: "Reactive stream",
        }
        return labels[self]
