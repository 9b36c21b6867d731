"""Spread-type score modifiers.

Each spread type owns a SpreadModifier:
- base_multiplier scales the core metrics and the shade index
- category_multipliers scale the extended metrics by thematic category
- thematic_bonus is added per special-condition threshold reached
  (see composite.calculate_reading_score)

Modified values are rounded and clamped to [0, 100]. An unknown spread
type is a ConfigurationError; callers choose their own fallback.
"""

from typing import Any

from tarot_shade.core.logging import get_logger
from tarot_shade.core.scoring.errors import ConfigurationError
from tarot_shade.core.scoring.parsing import parse_reading_score, parse_shade_index
from tarot_shade.core.scoring.types import (
    EXTENDED_METRIC_CATEGORIES,
    SHADE_COMPONENTS,
    SPREAD_CONDITION_SHADE_THRESHOLD,
    ReadingScore,
    ShadeIndex,
    SpreadModifier,
    SpreadSpecialCondition,
    SpreadType,
    ThematicCategory,
)
from tarot_shade.core.scoring.utils import clamp_score

logger = get_logger(__name__)


# =============================================================================
# Spread table
# =============================================================================

SPREAD_MODIFIERS: dict[SpreadType, SpreadModifier] = {
    SpreadType.CLASSIC: SpreadModifier(
        base_multiplier=1.2,
        category_multipliers={
            ThematicCategory.HUMOR: 1.4,
            ThematicCategory.SNARK: 1.0,
            ThematicCategory.CULTURAL_RESONANCE: 0.6,
            ThematicCategory.METAPHOR_MASTERY: 0.6,
        },
        thematic_bonus=2,
        special_condition_thresholds={"brilliantInsight": 80, "cosmicShade": 90},
    ),
    SpreadType.THREE_CARD: SpreadModifier(
        base_multiplier=1.1,
        category_multipliers={
            ThematicCategory.HUMOR: 1.2,
            ThematicCategory.SNARK: 1.1,
            ThematicCategory.QUOTABILITY: 1.2,
        },
        thematic_bonus=5,
        special_condition_thresholds={"brilliantInsight": 80},
    ),
    SpreadType.CELTIC_CROSS: SpreadModifier(
        base_multiplier=1.25,
        category_multipliers={
            ThematicCategory.HUMOR: 1.3,
            ThematicCategory.CULTURAL_RESONANCE: 1.2,
            ThematicCategory.METAPHOR_MASTERY: 1.3,
        },
        thematic_bonus=15,
        special_condition_thresholds={"brilliantInsight": 80, "cosmicShade": 90},
        special_condition=SpreadSpecialCondition(
            name="Cross Examination",
            description="Used every position to build a cohesive critique",
            multiplier=1.4,
        ),
    ),
    SpreadType.PAST_PRESENT_FUTURE: SpreadModifier(
        base_multiplier=1.1,
        category_multipliers={
            ThematicCategory.METAPHOR_MASTERY: 1.2,
            ThematicCategory.SNARK: 1.1,
        },
        thematic_bonus=10,
        special_condition_thresholds={"brilliantInsight": 85},
        special_condition=SpreadSpecialCondition(
            name="Time Lord",
            description="Successfully connected past mistakes to future consequences",
            multiplier=1.3,
        ),
    ),
    SpreadType.IM_FINE: SpreadModifier(
        base_multiplier=1.15,
        category_multipliers={
            ThematicCategory.SNARK: 1.3,
            ThematicCategory.HUMOR: 1.2,
        },
        thematic_bonus=20,
        special_condition_thresholds={"brilliantInsight": 85},
        special_condition=SpreadSpecialCondition(
            name="Fine & Dandy",
            description="Maximum contrast between surface and real issues",
            multiplier=1.5,
        ),
    ),
    SpreadType.JUST_SAYING: SpreadModifier(
        base_multiplier=1.15,
        category_multipliers={
            ThematicCategory.SNARK: 1.4,
            ThematicCategory.QUOTABILITY: 1.3,
        },
        thematic_bonus=25,
        special_condition_thresholds={"brilliantInsight": 85},
        special_condition=SpreadSpecialCondition(
            name="Just Being Honest",
            description="Achieved peak passive-aggression while maintaining deniability",
            multiplier=1.6,
        ),
    ),
    SpreadType.WHATEVER: SpreadModifier(
        base_multiplier=1.1,
        category_multipliers={
            ThematicCategory.SNARK: 1.2,
            ThematicCategory.CULTURAL_RESONANCE: 1.3,
        },
        thematic_bonus=15,
        special_condition_thresholds={"brilliantInsight": 85},
        special_condition=SpreadSpecialCondition(
            name="Unbothered Queen",
            description="Conveyed maximum judgment while appearing completely detached",
            multiplier=1.4,
        ),
    ),
    SpreadType.NO_OFFENSE: SpreadModifier(
        base_multiplier=1.2,
        category_multipliers={
            ThematicCategory.HUMOR: 1.3,
            ThematicCategory.SNARK: 1.5,
        },
        thematic_bonus=30,
        special_condition_thresholds={"brilliantInsight": 85},
        special_condition=SpreadSpecialCondition(
            name="Sweet Poison",
            description="Delivered devastating critique wrapped in pure sugar",
            multiplier=1.7,
        ),
    ),
}


def get_spread_modifier(spread_type: SpreadType | str) -> SpreadModifier:
    """
    Look up the modifier for a spread type.

    Raises:
        ConfigurationError: If the spread type is not in SPREAD_MODIFIERS
    """
    try:
        key = SpreadType(spread_type)
    except ValueError:
        raise ConfigurationError(f"Unknown spread type: '{spread_type}'") from None
    return SPREAD_MODIFIERS[key]


# =============================================================================
# Score adjustment
# =============================================================================


def apply_spread_modifiers(
    scores: ReadingScore | dict[str, Any],
    spread_type: SpreadType | str,
) -> ReadingScore:
    """
    Apply a spread's multipliers to a reading's scores.

    Core metrics and shade index components are multiplied by the base
    multiplier; extended metrics by their category multiplier (1.0 when the
    spread has none). Unreported extended metrics stay None.

    Args:
        scores: ReadingScore or collaborator mapping
        spread_type: Spread type key

    Returns:
        A new ReadingScore with every field in [0, 100]

    Raises:
        ConfigurationError: If the spread type is unknown
        ValidationError: If the scores are malformed
    """
    modifier = get_spread_modifier(spread_type)
    parsed = parse_reading_score(scores)
    base = modifier.base_multiplier

    updates: dict[str, Any] = {
        name: clamp_score(value * base)
        for name, value in parsed.core_metrics().model_dump().items()
    }

    for name, category in EXTENDED_METRIC_CATEGORIES.items():
        value = getattr(parsed, name)
        if value is None:
            updates[name] = None
            continue
        updates[name] = clamp_score(value * modifier.category_multipliers.get(category, 1.0))

    updates["shade_index"] = ShadeIndex(
        **{
            name: clamp_score(getattr(parsed.shade_index, name) * base)
            for name in SHADE_COMPONENTS
        }
    )

    logger.debug(f"Applied {SpreadType(spread_type).value} modifiers (base x{base})")

    return ReadingScore(**updates)


def get_active_spread_conditions(
    shade_index: ShadeIndex | dict[str, Any],
    spread_type: SpreadType | str,
) -> list[SpreadSpecialCondition]:
    """
    Special conditions unlocked for this spread.

    A spread's condition activates when the shade index mean reaches
    SPREAD_CONDITION_SHADE_THRESHOLD.
    """
    modifier = get_spread_modifier(spread_type)
    if modifier.special_condition is None:
        return []

    idx = parse_shade_index(shade_index)
    if idx.mean() >= SPREAD_CONDITION_SHADE_THRESHOLD:
        return [modifier.special_condition]
    return []
