"""Special-condition achievements.

Conditions reward standout combinations of a core metric and a shade
component. They add bonus points to a total but never affect pass/fail.
"""

from dataclasses import dataclass
from typing import Any, Callable

from tarot_shade.core.scoring.parsing import parse_reading_score
from tarot_shade.core.scoring.types import SCORE_MAX, ReadingScore


@dataclass(frozen=True)
class SpecialCondition:
    """Definition of a special-condition achievement."""

    id: str
    name: str
    description: str
    bonus: int  # Points added to the total when unlocked
    check: Callable[[ReadingScore], bool]


# =============================================================================
# Condition Definitions
# =============================================================================

SPECIAL_CONDITIONS = [
    SpecialCondition(
        id="shadow-maestro",
        name="Shadow Maestro",
        description="Perfect balance of subtlety and strategic vagueness",
        bonus=15,
        check=lambda s: s.subtlety >= 90 and s.shade_index.strategic_vagueness >= 90,
    ),
    SpecialCondition(
        id="balanced-blade",
        name="Balanced Blade",
        description="Peak performance in both wisdom and emotional manipulation",
        bonus=10,
        check=lambda s: s.wisdom >= 85 and s.shade_index.emotional_manipulation >= 85,
    ),
    SpecialCondition(
        id="zeitgeist-whisperer",
        name="Zeitgeist Whisperer",
        description="Masterful cultural resonance with plausible deniability",
        bonus=12,
        check=lambda s: (
            s.cultural_resonance is not None
            and s.cultural_resonance >= 85
            and s.shade_index.plausible_deniability >= 85
        ),
    ),
]


def detect_special_conditions(score: ReadingScore | dict[str, Any]) -> list[SpecialCondition]:
    """Conditions unlocked by a reading score, in definition order."""
    parsed = parse_reading_score(score)
    return [condition for condition in SPECIAL_CONDITIONS if condition.check(parsed)]


def calculate_total_score(score: ReadingScore | dict[str, Any], base_score: float) -> float:
    """
    Add the bonuses of every unlocked condition to a base score.

    Args:
        score: The reading score the conditions are checked against
        base_score: Score before bonuses

    Returns:
        base_score plus bonuses, capped at 100
    """
    total_bonus = sum(condition.bonus for condition in detect_special_conditions(score))
    return min(SCORE_MAX, base_score + total_bonus)
