"""Shade Level evaluation.

Maps a five-component shade index onto a 1-10 Shade Level:

    level = clamp(floor(mean(shade_index) / 10), 1, 10)

with one adjustment: a level 3 reading whose guilt trip intensity reaches
GUILT_TRIP_BOOST_THRESHOLD is promoted to level 4 ("The Raised Eyebrow").

Tier text comes from SHADE_TIERS, which must cover every ShadeTier.
"""

import math
from typing import Any

from tarot_shade.core.logging import get_logger
from tarot_shade.core.scoring.parsing import parse_shade_index
from tarot_shade.core.scoring.types import (
    GUILT_TRIP_BOOST_THRESHOLD,
    MINIMUM_SHADE_LEVEL,
    REQUIRED_UNDERTONE_LEVEL,
    SHADE_COMPONENTS,
    ShadeComponentBreakdown,
    ShadeIndex,
    ShadeLevelDetails,
    ShadeTier,
    ShadeTierInfo,
    UndertoneStrength,
)
from tarot_shade.core.scoring.utils import clamp

logger = get_logger(__name__)


# =============================================================================
# Tier table
# =============================================================================

SHADE_TIERS: dict[ShadeTier, ShadeTierInfo] = {
    ShadeTier.LEVEL_1: ShadeTierInfo(
        title="Sweet Summer Child",
        description="Barely noticeable criticism. Might actually be a compliment.",
        feedback="Honey, even a rubber band has more snap than this",
        undertone_strength=UndertoneStrength.FAINT,
        color_class="text-green-400",
    ),
    ShadeTier.LEVEL_2: ShadeTierInfo(
        title="The Polite Smile",
        description="A hint of judgment, easily mistaken for good manners.",
        feedback="Honey, even a rubber band has more snap than this",
        undertone_strength=UndertoneStrength.FAINT,
        color_class="text-emerald-400",
    ),
    ShadeTier.LEVEL_3: ShadeTierInfo(
        title="The Pointed Pause",
        description="Clear undertones of judgment. The silence says it all.",
        feedback="The judgment is clear... clearly needs work",
        undertone_strength=UndertoneStrength.CLEAR,
        color_class="text-teal-400",
    ),
    ShadeTier.LEVEL_4: ShadeTierInfo(
        title="The Raised Eyebrow",
        description="Guilt delivered with a look that lingers.",
        feedback="The judgment is clear... clearly needs work",
        undertone_strength=UndertoneStrength.CLEAR,
        color_class="text-cyan-400",
    ),
    ShadeTier.LEVEL_5: ShadeTierInfo(
        title="The Loaded Compliment",
        description="Expert use of passive aggression, wrapped in a bow.",
        feedback="Getting there, but your tea needs more spill",
        undertone_strength=UndertoneStrength.PRONOUNCED,
        color_class="text-blue-400",
    ),
    ShadeTier.LEVEL_6: ShadeTierInfo(
        title="The Knowing Sigh",
        description="Emotional leverage applied with practiced ease.",
        feedback="Getting there, but your tea needs more spill",
        undertone_strength=UndertoneStrength.PRONOUNCED,
        color_class="text-indigo-400",
    ),
    ShadeTier.LEVEL_7: ShadeTierInfo(
        title="Weaponized Politeness",
        description="Devastating criticism wrapped in sweetness.",
        feedback="Weaponized politeness at its finest, dear",
        undertone_strength=UndertoneStrength.SHARP,
        color_class="text-violet-400",
    ),
    ShadeTier.LEVEL_8: ShadeTierInfo(
        title="Sweet Poison",
        description="Every kind word is a scalpel.",
        feedback="Weaponized politeness at its finest, dear",
        undertone_strength=UndertoneStrength.SHARP,
        color_class="text-purple-400",
    ),
    ShadeTier.LEVEL_9: ShadeTierInfo(
        title="The Delayed Reaction",
        description="So subtle it takes days to process.",
        feedback="Your words cut deeper than a June birthday party no-show",
        undertone_strength=UndertoneStrength.DEVASTATING,
        color_class="text-pink-400",
    ),
    ShadeTier.LEVEL_10: ShadeTierInfo(
        title="Cosmic Level Shade",
        description="The stars themselves are offended on your behalf.",
        feedback="Your words cut deeper than a June birthday party no-show",
        undertone_strength=UndertoneStrength.DEVASTATING,
        color_class="text-rose-400",
    ),
}

_missing_tiers = set(ShadeTier) - set(SHADE_TIERS)
if _missing_tiers:
    raise RuntimeError(f"SHADE_TIERS is missing tiers: {sorted(_missing_tiers)}")


# Per-component feedback: (high >= 80, medium >= 50, low)
COMPONENT_FEEDBACK: dict[str, tuple[str, str, str]] = {
    "plausible_deniability": (
        "Airtight deniability. Nobody could prove you meant it.",
        "Mostly deniable, but the receipts are piling up.",
        "Far too direct. Leave yourself an exit.",
    ),
    "guilt_trip_intensity": (
        "A guilt trip with first-class seating.",
        "The guilt lands, eventually.",
        "Not even a guilt day trip. Try harder, or don't, it's fine.",
    ),
    "emotional_manipulation": (
        "Masterful emotional leverage.",
        "Some emotional pull, but the strings are showing.",
        "Emotionally neutral. Suspiciously healthy.",
    ),
    "backhanded_compliments": (
        "Compliments that leave a bruise.",
        "The backhand is there, it just needs more follow-through.",
        "These compliments are worryingly sincere.",
    ),
    "strategic_vagueness": (
        "Vague enough to haunt them for days.",
        "Pleasantly ambiguous, with room to be murkier.",
        "Far too specific. Mystery is the point.",
    ),
}

HIGH_FEEDBACK_THRESHOLD = 80
MEDIUM_FEEDBACK_THRESHOLD = 50


# =============================================================================
# Level computation
# =============================================================================


def _compute_level(shade_index: ShadeIndex) -> ShadeTier:
    """Raw level from the component mean, clamped, with the guilt trip boost."""
    level = int(clamp(math.floor(shade_index.mean() / 10), 1, 10))

    if level == 3 and shade_index.guilt_trip_intensity >= GUILT_TRIP_BOOST_THRESHOLD:
        level = 4

    return ShadeTier(level)


def get_shade_level(shade_index: ShadeIndex | dict[str, Any]) -> int:
    """Numeric Shade Level (1-10) for a shade index."""
    return int(_compute_level(parse_shade_index(shade_index)))


def calculate_shade_level(shade_index: ShadeIndex | dict[str, Any]) -> ShadeLevelDetails:
    """
    Compute the Shade Level and its display details.

    Args:
        shade_index: ShadeIndex or a camelCase/snake_case mapping

    Returns:
        ShadeLevelDetails for the tier the index lands in

    Raises:
        ValidationError: If a component is missing or outside [0, 100]
    """
    idx = parse_shade_index(shade_index)
    tier = _compute_level(idx)
    info = SHADE_TIERS[tier]

    logger.debug(f"Shade level {int(tier)} ({info.title}) from mean {idx.mean():.1f}")

    return ShadeLevelDetails(
        level=int(tier),
        title=info.title,
        description=info.description,
        feedback=info.feedback,
        undertone_strength=info.undertone_strength,
        color_class=info.color_class,
    )


def get_undertone_strength(shade_index: ShadeIndex | dict[str, Any]) -> UndertoneStrength:
    return SHADE_TIERS[_compute_level(parse_shade_index(shade_index))].undertone_strength


def is_shade_level_passing(shade_index: ShadeIndex | dict[str, Any]) -> bool:
    """True when the Shade Level reaches MINIMUM_SHADE_LEVEL (7)."""
    return get_shade_level(shade_index) >= MINIMUM_SHADE_LEVEL


def has_required_undertones(shade_index: ShadeIndex | dict[str, Any]) -> bool:
    """True when the Shade Level reaches REQUIRED_UNDERTONE_LEVEL (3, "The Pointed Pause")."""
    return get_shade_level(shade_index) >= REQUIRED_UNDERTONE_LEVEL


# =============================================================================
# Component breakdown
# =============================================================================


def _component_feedback(component: str, score: int) -> str:
    high, medium, low = COMPONENT_FEEDBACK[component]
    if score >= HIGH_FEEDBACK_THRESHOLD:
        return high
    if score >= MEDIUM_FEEDBACK_THRESHOLD:
        return medium
    return low


def get_shade_breakdown(
    shade_index: ShadeIndex | dict[str, Any],
) -> list[ShadeComponentBreakdown]:
    """
    Per-component feedback for a shade index.

    Returns:
        Five ShadeComponentBreakdown items in SHADE_COMPONENTS order
    """
    idx = parse_shade_index(shade_index)
    return [
        ShadeComponentBreakdown(
            component=name,
            score=getattr(idx, name),
            feedback=_component_feedback(name, getattr(idx, name)),
        )
        for name in SHADE_COMPONENTS
    ]
