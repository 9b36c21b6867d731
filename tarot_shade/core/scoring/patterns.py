"""Reading history pattern analysis.

Aggregates a user's past readings into the context used for the next
interpretation:
- repeated_themes: themes present in at least 30% of readings
- sophistication_growth: average positive step in shade over time (0-100)
- consistency_score: blend of spread variety and card repetition (0-100)

Always computed fresh from the supplied history (no caching).
"""

import statistics
from collections import Counter
from collections.abc import Iterable
from typing import Any

from tarot_shade.core.logging import get_logger
from tarot_shade.core.scoring.parsing import parse_readings
from tarot_shade.core.scoring.types import (
    RECURRING_THEME_RATIO,
    PatternMetrics,
    Reading,
    UserPatternTracking,
)
from tarot_shade.core.scoring.utils import clamp, round_half_up

logger = get_logger(__name__)


def analyze_reading_patterns(readings: Iterable[Reading | dict[str, Any]]) -> UserPatternTracking:
    """
    Summarize a reading history.

    Args:
        readings: Past readings in any order

    Returns:
        UserPatternTracking for the history (all zero for an empty history)

    Raises:
        ValidationError: If a reading is missing cards, scores, spread type,
            or a parseable created_at
    """
    parsed = parse_readings(readings)
    metrics = calculate_pattern_metrics(parsed)

    tracking = UserPatternTracking(
        repeated_themes=identify_recurring_themes(metrics.theme_frequency, len(parsed)),
        sophistication_growth=calculate_sophistication_growth(parsed),
        consistency_score=calculate_consistency_score(metrics),
    )

    logger.debug(
        f"Analyzed {len(parsed)} readings: growth={tracking.sophistication_growth:.1f}, "
        f"consistency={tracking.consistency_score}, themes={len(tracking.repeated_themes)}"
    )

    return tracking


def calculate_pattern_metrics(readings: Iterable[Reading | dict[str, Any]]) -> PatternMetrics:
    """Card, theme, reversal, and spread counts across a history."""
    parsed = parse_readings(readings)

    repeated_cards: Counter[str] = Counter()
    theme_frequency: Counter[str] = Counter()
    spread_preferences: Counter[str] = Counter()
    total_reversals = 0
    total_cards = 0

    for reading in parsed:
        spread_preferences[reading.spread_type] += 1

        # A theme counts once per reading, however often it is tagged
        for theme in dict.fromkeys(reading.interpretation.themes):
            theme_frequency[theme] += 1

        for card in reading.cards:
            repeated_cards[card.id] += 1
            total_cards += 1
            if card.is_reversed:
                total_reversals += 1

    return PatternMetrics(
        repeated_cards=dict(repeated_cards),
        theme_frequency=dict(theme_frequency),
        reversal_rate=total_reversals / total_cards if total_cards else 0.0,
        spread_preferences=dict(spread_preferences),
    )


def identify_recurring_themes(theme_frequency: dict[str, int], reading_count: int) -> list[str]:
    """Themes in at least RECURRING_THEME_RATIO of readings, most frequent first."""
    if reading_count == 0:
        return []

    recurring = [
        theme
        for theme, count in theme_frequency.items()
        if count / reading_count >= RECURRING_THEME_RATIO
    ]
    # sorted() is stable, so ties keep first-seen order
    return sorted(recurring, key=lambda theme: -theme_frequency[theme])


def calculate_sophistication_growth(readings: list[Reading]) -> float:
    """
    Average positive change in mean shade between consecutive readings.

    Only improvements count; a drop contributes zero. The per-step average
    is scaled by 10 and capped at 100. Fewer than two readings score 0.
    """
    if len(readings) < 2:
        return 0.0

    ordered = sorted(readings, key=lambda r: r.created_at)
    shade_means = [r.interpretation.scores.shade_index.mean() for r in ordered]

    growth = sum(
        max(0.0, current - previous)
        for previous, current in zip(shade_means, shade_means[1:])
    )

    return min(100.0, growth / (len(readings) - 1) * 10)


def _spread_consistency(spread_preferences: dict[str, int]) -> float:
    """Rewards variety while still favoring repeat spreads."""
    variety = len(spread_preferences)
    if variety == 0:
        return 0.0
    total = sum(spread_preferences.values())
    return min(100.0, variety * 20 + total / variety * 10)


def _card_consistency(repeated_cards: dict[str, int]) -> float:
    """Lower spread in card frequencies means steadier draws."""
    frequencies = list(repeated_cards.values())
    if not frequencies:
        return 100.0
    deviation = statistics.pstdev(frequencies)
    return clamp(100 - deviation * 10, 0, 100)


def calculate_consistency_score(metrics: PatternMetrics) -> int:
    """Rounded mean of the spread-variety and card-repetition sub-scores."""
    if not metrics.spread_preferences:
        return 0
    spread = _spread_consistency(metrics.spread_preferences)
    card = _card_consistency(metrics.repeated_cards)
    return round_half_up((spread + card) / 2)
