"""Core metric validation.

All five core metrics must reach CORE_METRIC_THRESHOLD (inclusive).
There is no partial credit: one failing metric fails the group.
"""

from typing import Any

from tarot_shade.core.scoring.parsing import parse_core_metrics
from tarot_shade.core.scoring.types import CORE_METRIC_THRESHOLD, CORE_METRICS, CoreMetrics


def get_core_metric_breakdown(metrics: CoreMetrics | dict[str, Any]) -> dict[str, bool]:
    """Pass/fail per core metric, in CORE_METRICS order."""
    parsed = parse_core_metrics(metrics)
    return {name: getattr(parsed, name) >= CORE_METRIC_THRESHOLD for name in CORE_METRICS}


def get_failing_core_metrics(metrics: CoreMetrics | dict[str, Any]) -> list[str]:
    return [name for name, passed in get_core_metric_breakdown(metrics).items() if not passed]


def validate_core_metrics(metrics: CoreMetrics | dict[str, Any]) -> bool:
    """
    Check every core metric against the threshold.

    Args:
        metrics: CoreMetrics (or ReadingScore) or a mapping of the five metrics

    Returns:
        True only if all five metrics are >= CORE_METRIC_THRESHOLD

    Raises:
        ValidationError: If a metric is missing or outside [0, 100]
    """
    return all(get_core_metric_breakdown(metrics).values())
