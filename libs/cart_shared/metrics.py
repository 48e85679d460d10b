# libs/cart_shared/metrics.py
"""
Log-backed metrics with in-process counter totals.
"""

from collections import Counter
from typing import Dict, Tuple

from .logging import get_logger

logger = get_logger(__name__)

_LabelKey = Tuple[str, Tuple[Tuple[str, str], ...]]


def _key(name: str, labels: Dict[str, str] = None) -> _LabelKey:
    return name, tuple(sorted((labels or {}).items()))


def _format_labels(labels: Dict[str, str] = None) -> str:
    return ", ".join(f"{k}={v}" for k, v in (labels or {}).items())


class Metrics:
    """
    Simple metrics collection class.

    Every sample is written to the debug log. Counter totals are also kept in
    memory so the health endpoint and tests can read them back.
    """

    _counters: Counter = Counter()

    @classmethod
    def counter(cls, name: str, labels: Dict[str, str] = None, value: int = 1):
        """
        Record a counter metric.

        Args:
            name: Metric name
            labels: Optional labels dictionary
            value: Increment, defaults to 1
        """
        cls._counters[_key(name, labels)] += value
        logger.debug(f"METRIC: counter {name} {_format_labels(labels)}")

    @staticmethod
    def histogram(name: str, value: float, labels: Dict[str, str] = None):
        """
        Record a histogram metric.

        Args:
            name: Metric name
            value: Metric value
            labels: Optional labels dictionary
        """
        logger.debug(f"METRIC: histogram {name}={value} {_format_labels(labels)}")

    @classmethod
    def count(cls, name: str, labels: Dict[str, str] = None) -> int:
        """Current total for a counter and exact label set."""
        return cls._counters[_key(name, labels)]

    @classmethod
    def snapshot(cls, prefix: str = "") -> Dict[str, int]:
        """Counter totals keyed by ``name{k=v,...}``, optionally filtered by prefix."""
        result = {}
        for (name, labels), total in cls._counters.items():
            if not name.startswith(prefix):
                continue
            label_str = ",".join(f"{k}={v}" for k, v in labels)
            result[f"{name}{{{label_str}}}" if label_str else name] = total
        return result

    @classmethod
    def reset(cls) -> None:
        """Drop all counter totals."""
        cls._counters.clear()
