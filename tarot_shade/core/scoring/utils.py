"""Numeric helpers shared by the scorers."""

import math
from numbers import Real
from typing import Any

from tarot_shade.core.scoring.errors import ValidationError
from tarot_shade.core.scoring.types import SCORE_MAX, SCORE_MIN


def require_finite(value: Any, label: str) -> float:
    """
    Return ``value`` if it is a real, finite number.

    Raises:
        ValidationError: For bools, non-numbers, NaN, and infinities
    """
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise ValidationError(f"{label} must be a finite number, got {value!r}")
    return value


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3, not 2)."""
    return math.floor(value + 0.5)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_score(value: float) -> int:
    """Round and clamp a modified score back into [0, 100]."""
    return int(clamp(round_half_up(value), SCORE_MIN, SCORE_MAX))
