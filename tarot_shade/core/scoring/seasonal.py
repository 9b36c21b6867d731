"""Seasonal score modifiers.

An event is active when the supplied date's MM-DD falls inside its window.
Windows whose start sorts after their end wrap the new year
("12-29".."01-18"). Only the single strongest multiplier among matching
events applies; multipliers never stack.

The current date is always passed in by the caller.
"""

from collections.abc import Iterable

from pydantic.alias_generators import to_camel

from tarot_shade.core.logging import get_logger
from tarot_shade.core.scoring.errors import ConfigurationError
from tarot_shade.core.scoring.parsing import DateInput, parse_date
from tarot_shade.core.scoring.types import SeasonalBonus, SeasonalEvent, ThematicCategory
from tarot_shade.core.scoring.utils import require_finite, round_half_up

logger = get_logger(__name__)


SEASONAL_EVENTS: tuple[SeasonalEvent, ...] = (
    SeasonalEvent(
        name="Mercury Retrograde",
        description="Peak communication chaos. Blame it on Mercury, sweetie.",
        start_date="12-29",
        end_date="01-18",
        score_multiplier=1.3,
        categories=(ThematicCategory.SNARK, ThematicCategory.METAPHOR_MASTERY),
    ),
    SeasonalEvent(
        name="Awards Season",
        description="Everyone is a critic, and everyone is thanking their agent.",
        start_date="01-05",
        end_date="03-15",
        score_multiplier=1.2,
        categories=(ThematicCategory.CULTURAL_RESONANCE, ThematicCategory.QUOTABILITY),
    ),
    SeasonalEvent(
        name="Cancer Season",
        description="Maximum emotional manipulation potential.",
        start_date="06-21",
        end_date="07-22",
        score_multiplier=1.2,
        categories=(ThematicCategory.METAPHOR_MASTERY,),
    ),
    SeasonalEvent(
        name="Leo Season",
        description="Dramatic flair intensified. Not to be dramatic, but...",
        start_date="07-23",
        end_date="08-22",
        score_multiplier=1.15,
        categories=(ThematicCategory.HUMOR, ThematicCategory.QUOTABILITY),
    ),
    SeasonalEvent(
        name="Scorpio Season",
        description="Enhanced venomous undertones.",
        start_date="10-23",
        end_date="11-21",
        score_multiplier=1.3,
        categories=(ThematicCategory.SNARK,),
    ),
    SeasonalEvent(
        name="Holiday Season",
        description="Family gatherings, and the commentary that comes with them.",
        start_date="12-01",
        end_date="12-31",
        score_multiplier=1.4,
        categories=(
            ThematicCategory.HUMOR,
            ThematicCategory.CULTURAL_RESONANCE,
            ThematicCategory.METAPHOR_MASTERY,
        ),
    ),
)


def parse_category(category: ThematicCategory | str) -> ThematicCategory:
    """
    Resolve a category name (``culturalResonance`` or ``cultural_resonance``).

    Raises:
        ConfigurationError: If the category is not a ThematicCategory
    """
    try:
        return ThematicCategory(category)
    except ValueError:
        pass
    if isinstance(category, str) and "_" in category:
        try:
            return ThematicCategory(to_camel(category))
        except ValueError:
            pass
    raise ConfigurationError(f"Unknown category: '{category}'")


def get_active_seasonal_events(today: DateInput) -> list[SeasonalEvent]:
    """
    Events whose window covers ``today``, in table order.

    Raises:
        ValidationError: If ``today`` cannot be parsed
    """
    month_day = parse_date(today).strftime("%m-%d")
    return [event for event in SEASONAL_EVENTS if event.is_active(month_day)]


def calculate_seasonal_bonus(
    base_score: float,
    categories: Iterable[ThematicCategory | str],
    today: DateInput,
) -> SeasonalBonus:
    """
    Apply the strongest active seasonal multiplier for the given categories.

    Args:
        base_score: Score before the seasonal bonus
        categories: Thematic categories the score belongs to
        today: The evaluation date

    Returns:
        SeasonalBonus with the modified score, the matching active events,
        and the bonus points gained

    Raises:
        ConfigurationError: If a category is unknown
        ValidationError: If the base score is not a finite number or the date is unparseable
    """
    require_finite(base_score, "Base score")

    wanted = {parse_category(c) for c in categories}
    matching = [
        event
        for event in get_active_seasonal_events(today)
        if wanted.intersection(event.categories)
    ]

    if not matching:
        return SeasonalBonus(modified_score=base_score, active_events=[], bonus_points=0)

    multiplier = max(event.score_multiplier for event in matching)
    modified_score = round_half_up(base_score * multiplier)

    logger.debug(
        f"Seasonal bonus x{multiplier} from {[e.name for e in matching]}: "
        f"{base_score} -> {modified_score}"
    )

    return SeasonalBonus(
        modified_score=modified_score,
        active_events=matching,
        bonus_points=modified_score - base_score,
    )
