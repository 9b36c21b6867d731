"""Composite scoring and classification.

This module combines the individual scorers into the verdict shown to
users:
1. Core metrics must all pass (>= 80)
2. The Shade Level must pass (>= 7)
3. The required undertones must be present (level >= 3)
4. Unlocked achievements are reported alongside, never gating

It also produces the display-only weighted score, the classification
label, and the modifier-adjusted reading score.
"""

import logging
from collections.abc import Iterable
from typing import Any, Optional

from tarot_shade.core.logging import get_logger, log_with_context
from tarot_shade.core.scoring.core_metrics import get_failing_core_metrics
from tarot_shade.core.scoring.errors import ValidationError
from tarot_shade.core.scoring.parsing import DateInput, parse_core_metrics, parse_reading_score
from tarot_shade.core.scoring.seasonal import calculate_seasonal_bonus, parse_category
from tarot_shade.core.scoring.shade_levels import (
    get_shade_level,
    has_required_undertones,
    is_shade_level_passing,
)
from tarot_shade.core.scoring.special_conditions import detect_special_conditions
from tarot_shade.core.scoring.spread_modifiers import (
    get_active_spread_conditions,
    get_spread_modifier,
)
from tarot_shade.core.scoring.types import (
    CORE_METRIC_WEIGHTS,
    CORE_METRICS,
    SCORE_MAX,
    SCORE_MIN,
    CoreMetrics,
    QualityEvaluation,
    ReadingScore,
    ScoringDetails,
    SpreadType,
    ThematicCategory,
    WeightedScore,
)
from tarot_shade.core.scoring.utils import clamp_score, require_finite, round_half_up

logger = get_logger(__name__)


# Classification steps on the 10-point scale, highest first
CLASSIFICATIONS = [
    (9, "Cosmic Level Shade"),
    (8, "Expert Passive Aggression"),
    (7, "Advanced Sass Master"),
    (6, "Promising Shade Apprentice"),
]
DEFAULT_CLASSIFICATION = "Needs More Side-Eye"


def convert_to_10_point_scale(score: float) -> int:
    """Convert a 0-100 score to the 10-point scale (85 -> 9, 84 -> 8)."""
    return round_half_up(require_finite(score, "Score") / 10)


def get_score_classification(score: float) -> str:
    """
    Classification label for an aggregate 0-100 score.

    Raises:
        ValidationError: If the score is not a finite number in [0, 100]
    """
    require_finite(score, "Score")
    if not SCORE_MIN <= score <= SCORE_MAX:
        raise ValidationError(f"Score must be within [{SCORE_MIN}, {SCORE_MAX}], got {score!r}")

    score10 = convert_to_10_point_scale(score)
    for minimum, label in CLASSIFICATIONS:
        if score10 >= minimum:
            return label
    return DEFAULT_CLASSIFICATION


def calculate_weighted_score(metrics: CoreMetrics | dict[str, Any]) -> WeightedScore:
    """
    Weighted core-metric total, for display only.

    Humor counts double, creative 1.5x, subtlety 1.3x, relatability 1.2x,
    wisdom 1x. ``max`` is what five perfect scores would earn.
    """
    parsed = parse_core_metrics(metrics)
    weighted = sum(getattr(parsed, name) * weight for name, weight in CORE_METRIC_WEIGHTS.items())
    max_score = sum(weight * 100 for weight in CORE_METRIC_WEIGHTS.values())

    return WeightedScore(
        weighted=round(weighted, 2),
        max=max_score,
        percentage=round(weighted / max_score * 100, 1),
    )


def evaluate_reading_quality(
    score: ReadingScore | dict[str, Any],
    spread_type: Optional[SpreadType | str] = None,
) -> QualityEvaluation:
    """
    Decide whether a reading passes the rubric.

    A reading passes only when all three hold at once: every core metric
    is >= 80, the Shade Level is >= 7, and the required undertones
    (level >= 3) are present.

    Args:
        score: ReadingScore or collaborator mapping
        spread_type: When given, the spread's special condition can unlock

    Returns:
        QualityEvaluation with one feedback line per failing check and per
        unlocked achievement

    Raises:
        ValidationError: If the score is malformed
        ConfigurationError: If the spread type is unknown
    """
    parsed = parse_reading_score(score)
    feedback: list[str] = []

    # ==========================================================================
    # 1. Core metrics
    # ==========================================================================
    failing_metrics = get_failing_core_metrics(parsed)
    for metric in failing_metrics:
        feedback.append(f"{metric} needs work ({getattr(parsed, metric)}/100)")

    # ==========================================================================
    # 2. Shade level and undertones
    # ==========================================================================
    level = get_shade_level(parsed.shade_index)
    shade_passing = is_shade_level_passing(parsed.shade_index)
    undertones_present = has_required_undertones(parsed.shade_index)

    if not shade_passing:
        feedback.append(f"Shade Level™ too low (Level {level})")
    if not undertones_present:
        feedback.append(f"Missing required undertones (Level {level})")

    # ==========================================================================
    # 3. Achievements
    # ==========================================================================
    achievements = [
        f"Achievement: {condition.name} (+{condition.bonus})"
        for condition in detect_special_conditions(parsed)
    ]
    if spread_type is not None:
        achievements.extend(
            f"Achievement: {condition.name} (×{condition.multiplier})"
            for condition in get_active_spread_conditions(parsed.shade_index, spread_type)
        )
    feedback.extend(achievements)

    core_passing = not failing_metrics
    is_passing = core_passing and shade_passing and undertones_present

    log_with_context(
        logger,
        logging.DEBUG,
        "Evaluated reading quality",
        is_passing=is_passing,
        shade_level=level,
        spread_type=SpreadType(spread_type).value if spread_type is not None else "none",
        failing_metrics=failing_metrics,
        achievements=len(achievements),
    )

    return QualityEvaluation(
        is_passing=is_passing,
        feedback=feedback,
        shade_level=level,
        core_metrics_passing=core_passing,
        shade_level_passing=shade_passing,
        has_required_undertones=undertones_present,
        achievements=achievements,
    )


def calculate_reading_score(
    scores: ReadingScore | dict[str, Any],
    spread_type: SpreadType | str,
    categories: Iterable[ThematicCategory | str],
    today: DateInput,
) -> ScoringDetails:
    """
    Reading score after spread, seasonal, and category adjustments.

    Steps:
    1. Mean of the core metrics, each scaled by the spread's base multiplier
    2. Strongest seasonal multiplier for the categories
    3. Category bonus ``total * (multiplier - 1)`` for each category
    4. The spread's thematic bonus for each special-condition threshold reached

    Returns:
        ScoringDetails with the final score clamped to [0, 100]

    Raises:
        ConfigurationError: If the spread type or a category is unknown
        ValidationError: If the scores or the date are malformed
    """
    modifier = get_spread_modifier(spread_type)
    modifier_key = SpreadType(spread_type)
    parsed = parse_reading_score(scores)
    wanted = [parse_category(c) for c in categories]

    breakdown: list[str] = []
    bonuses: dict[str, float] = {}
    base = modifier.base_multiplier

    # Core metrics
    modified_total = 0.0
    for metric, value in parsed.core_metrics().model_dump().items():
        modified = value * base
        modified_total += modified
        breakdown.append(f"{metric}: {value}/100 → {modified:.1f} (×{base})")
    total = modified_total / len(CORE_METRICS)

    # Seasonal events
    seasonal = calculate_seasonal_bonus(total, wanted, today)
    if seasonal.bonus_points > 0:
        total = seasonal.modified_score
        # Only the strongest event is applied; earlier events win ties
        applied = max(seasonal.active_events, key=lambda e: e.score_multiplier)
        breakdown.append(
            f"{applied.name} bonus: +{seasonal.bonus_points:.1f} (×{applied.score_multiplier})"
        )
        bonuses[applied.name] = round(seasonal.bonus_points, 1)

    # Category multipliers apply after the seasonal bonus
    for category in wanted:
        multiplier = modifier.category_multipliers.get(category, 1.0)
        bonus = total * (multiplier - 1)
        total += bonus
        bonuses[category.value] = round(bonus, 1)
        breakdown.append(f"{category.value} bonus: {bonus:+.1f}")

    # Special-condition thresholds
    for condition, threshold in modifier.special_condition_thresholds.items():
        if total >= threshold:
            bonus = modifier.thematic_bonus or 0
            total += bonus
            bonuses[condition] = bonus
            breakdown.append(f"{condition} bonus achieved: +{bonus:g}")

    score = clamp_score(total)
    log_with_context(
        logger,
        logging.DEBUG,
        "Calculated reading score",
        spread_type=modifier_key.value,
        score=score,
        bonuses=sorted(bonuses),
    )

    return ScoringDetails(
        score=score,
        breakdown=breakdown,
        bonuses=bonuses,
        active_events=seasonal.active_events,
    )
