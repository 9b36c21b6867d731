"""Pydantic models and rubric constants for the shade scoring engine.

Collaborator payloads arrive as camelCase JSON (``plausibleDeniability``);
Python attributes are snake_case. Every wire model accepts both spellings
and dumps camelCase with ``model_dump(by_alias=True)``.
"""

from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# Rubric constants
# =============================================================================

SCORE_MIN = 0
SCORE_MAX = 100

CORE_METRICS = ("subtlety", "relatability", "wisdom", "creative", "humor")

SHADE_COMPONENTS = (
    "plausible_deniability",
    "guilt_trip_intensity",
    "emotional_manipulation",
    "backhanded_compliments",
    "strategic_vagueness",
)

# Every core metric must reach this (inclusive) for the reading to pass
CORE_METRIC_THRESHOLD = 80

MINIMUM_SHADE_LEVEL = 7          # "Weaponized Politeness" or better to pass
REQUIRED_UNDERTONE_LEVEL = 3     # "The Pointed Pause"
GUILT_TRIP_BOOST_THRESHOLD = 60  # Level 3 -> 4 when guilt trip intensity reaches this

# Display weights for the weighted core score (max = sum(weight) * 100)
CORE_METRIC_WEIGHTS = {
    "humor": 2.0,
    "creative": 1.5,
    "wisdom": 1.0,
    "subtlety": 1.3,
    "relatability": 1.2,
}

# Themes present in at least this share of readings are "repeated"
RECURRING_THEME_RATIO = 0.3

# Mean shade needed for a spread's special condition to activate
SPREAD_CONDITION_SHADE_THRESHOLD = 85


class _WireModel(BaseModel):
    """Base for models exchanged with collaborators (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _StaticModel(_WireModel):
    """Base for immutable configuration tables."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# =============================================================================
# Enums
# =============================================================================


class ThematicCategory(str, Enum):
    """Score categories that spread and seasonal multipliers target."""

    HUMOR = "humor"
    SNARK = "snark"
    CULTURAL_RESONANCE = "culturalResonance"
    METAPHOR_MASTERY = "metaphorMastery"
    QUOTABILITY = "quotability"


class SpreadType(str, Enum):
    """Named tarot card layouts with their own score multipliers."""

    CLASSIC = "classic"
    THREE_CARD = "three-card"
    CELTIC_CROSS = "celtic-cross"
    PAST_PRESENT_FUTURE = "past-present-future"
    IM_FINE = "im-fine"
    JUST_SAYING = "just-saying"
    WHATEVER = "whatever"
    NO_OFFENSE = "no-offense"


class ShadeTier(IntEnum):
    """The ten Shade Level tiers."""

    LEVEL_1 = 1
    LEVEL_2 = 2
    LEVEL_3 = 3
    LEVEL_4 = 4
    LEVEL_5 = 5
    LEVEL_6 = 6
    LEVEL_7 = 7
    LEVEL_8 = 8
    LEVEL_9 = 9
    LEVEL_10 = 10


class UndertoneStrength(str, Enum):
    """How audible the judgment is at a given tier."""

    FAINT = "Faint"              # 1-2: Barely noticeable criticism
    CLEAR = "Clear"              # 3-4: Clear undertones of judgment
    PRONOUNCED = "Pronounced"    # 5-6: Expert use of passive aggression
    SHARP = "Sharp"              # 7-8: Devastating criticism wrapped in sweetness
    DEVASTATING = "Devastating"  # 9-10: So subtle it takes days to process


# Extended metric field -> category its spread multiplier is keyed by
EXTENDED_METRIC_CATEGORIES = {
    "snark": ThematicCategory.SNARK,
    "cultural_resonance": ThematicCategory.CULTURAL_RESONANCE,
    "metaphor_mastery": ThematicCategory.METAPHOR_MASTERY,
    "quotability": ThematicCategory.QUOTABILITY,
}


# =============================================================================
# Score inputs
# =============================================================================


class ShadeIndex(_WireModel):
    """The five-component Shade Scale sub-scores."""

    plausible_deniability: StrictInt = Field(..., ge=0, le=100, description="Level 1-2 signal")
    guilt_trip_intensity: StrictInt = Field(..., ge=0, le=100, description="Level 3-4 signal")
    emotional_manipulation: StrictInt = Field(..., ge=0, le=100, description="Level 5-6 signal")
    backhanded_compliments: StrictInt = Field(..., ge=0, le=100, description="Level 7-8 signal")
    strategic_vagueness: StrictInt = Field(..., ge=0, le=100, description="Level 9-10 signal")

    def component_scores(self) -> list[int]:
        """Component scores in ``SHADE_COMPONENTS`` order."""
        return [getattr(self, name) for name in SHADE_COMPONENTS]

    def mean(self) -> float:
        return sum(self.component_scores()) / len(SHADE_COMPONENTS)


class CoreMetrics(_WireModel):
    """The five primary quality dimensions that gate pass/fail."""

    subtlety: StrictInt = Field(..., ge=0, le=100, description="How artfully the hostility is veiled")
    relatability: StrictInt = Field(..., ge=0, le=100, description="How well it targets common insecurities")
    wisdom: StrictInt = Field(..., ge=0, le=100, description="Quality of actual divinatory insight")
    creative: StrictInt = Field(..., ge=0, le=100, description="Memorability and eloquence of phrasing")
    humor: StrictInt = Field(..., ge=0, le=100, description="Ability to provoke uncomfortable laughter")


class ReadingScore(CoreMetrics):
    """Scores returned by the interpretation collaborator for one reading.

    Core metrics and the shade index are required. The extended metrics
    (snark, cultural resonance, metaphor mastery, quotability) are optional;
    ``None`` means the collaborator did not report them. Scores must be
    real integers: numeric strings and bools are rejected, not coerced.
    """

    snark: Optional[StrictInt] = Field(None, ge=0, le=100)
    cultural_resonance: Optional[StrictInt] = Field(None, ge=0, le=100)
    metaphor_mastery: Optional[StrictInt] = Field(None, ge=0, le=100)
    quotability: Optional[StrictInt] = Field(None, ge=0, le=100)
    shade_index: ShadeIndex

    def core_metrics(self) -> CoreMetrics:
        """The five gating metrics as a standalone CoreMetrics."""
        return CoreMetrics(**{name: getattr(self, name) for name in CORE_METRICS})


# =============================================================================
# Shade level outputs
# =============================================================================


class ShadeTierInfo(_StaticModel):
    """Static display text for one Shade Level tier."""

    title: str
    description: str
    feedback: str
    undertone_strength: UndertoneStrength
    color_class: str


class ShadeLevelDetails(_WireModel):
    """Derived, read-only view of a shade index. Recomputed on demand."""

    level: int = Field(..., ge=1, le=10, description="Shade Level 1-10")
    title: str
    description: str
    feedback: str
    undertone_strength: UndertoneStrength
    color_class: str


class ShadeComponentBreakdown(_WireModel):
    """Feedback for a single shade index component."""

    component: str
    score: int
    feedback: str


# =============================================================================
# Modifier configuration
# =============================================================================


class SpreadSpecialCondition(_StaticModel):
    """Achievement unlocked by a strong performance on a particular spread."""

    name: str
    description: str
    multiplier: float = Field(..., gt=0)


class SpreadModifier(_StaticModel):
    """Score multipliers owned by a spread type."""

    base_multiplier: float = Field(..., gt=0, description="Applied to core metrics and shade index")
    category_multipliers: dict[ThematicCategory, float] = Field(
        default_factory=dict, description="Applied to extended metrics by category"
    )
    thematic_bonus: Optional[float] = Field(
        None, description="Points added per special-condition threshold reached"
    )
    special_condition_thresholds: dict[str, float] = Field(
        default_factory=dict, description="Condition name -> 0-100 score threshold"
    )
    special_condition: Optional[SpreadSpecialCondition] = None


class SeasonalEvent(_StaticModel):
    """A calendar window that multiplies scores in its categories."""

    name: str
    description: str = ""
    start_date: str = Field(..., description="MM-DD, inclusive")
    end_date: str = Field(..., description="MM-DD, inclusive; earlier than start when wrapping the year")
    score_multiplier: float = Field(..., gt=0)
    categories: tuple[ThematicCategory, ...]

    @field_validator("start_date", "end_date")
    @classmethod
    def month_day_format(cls, v: str) -> str:
        """Ensure dates are zero-padded MM-DD strings that exist in a leap year."""
        try:
            datetime.strptime(f"2000-{v}", "%Y-%m-%d")
        except ValueError:
            raise ValueError(f"Expected MM-DD, got {v!r}") from None
        if len(v) != 5:
            raise ValueError(f"Expected zero-padded MM-DD, got {v!r}")
        return v

    @property
    def wraps_year(self) -> bool:
        return self.start_date > self.end_date

    def is_active(self, month_day: str) -> bool:
        """Whether the event covers ``month_day`` (an MM-DD string)."""
        if self.wraps_year:
            return month_day >= self.start_date or month_day <= self.end_date
        return self.start_date <= month_day <= self.end_date


class SeasonalBonus(_WireModel):
    """Result of applying the strongest matching seasonal multiplier."""

    modified_score: float
    active_events: list[SeasonalEvent] = Field(default_factory=list)
    bonus_points: float = 0


# =============================================================================
# Composite scoring outputs
# =============================================================================


class WeightedScore(_WireModel):
    """Weighted core-metric total for display."""

    weighted: float
    max: float
    percentage: float = Field(..., ge=0, le=100)


class QualityEvaluation(_WireModel):
    """Overall pass/fail verdict with human-readable feedback."""

    is_passing: bool
    feedback: list[str] = Field(default_factory=list)
    shade_level: int = Field(..., ge=1, le=10)
    core_metrics_passing: bool
    shade_level_passing: bool
    has_required_undertones: bool
    achievements: list[str] = Field(default_factory=list)


class ScoringDetails(_WireModel):
    """Reading score after spread, seasonal, and category adjustments."""

    score: int = Field(..., ge=0, le=100)
    breakdown: list[str] = Field(default_factory=list)
    bonuses: dict[str, float] = Field(default_factory=dict)
    active_events: list[SeasonalEvent] = Field(default_factory=list)


# =============================================================================
# Readings and pattern tracking
# =============================================================================


class ReadingCard(_WireModel):
    """A card as drawn in a reading."""

    id: str
    name: str = ""
    position: int = 0
    is_reversed: bool = False


class ReadingInterpretation(_WireModel):
    """Resolved interpretation from the LLM collaborator."""

    text: str = ""
    scores: ReadingScore
    themes: list[str] = Field(default_factory=list)


class Reading(_WireModel):
    """A past reading supplied by the persistence collaborator."""

    id: Optional[str] = None
    user_id: Optional[str] = None
    cards: list[ReadingCard]
    interpretation: ReadingInterpretation
    spread_type: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC so mixed inputs sort consistently."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class PatternMetrics(_WireModel):
    """Raw frequency counts over a reading history."""

    repeated_cards: dict[str, int] = Field(default_factory=dict)
    theme_frequency: dict[str, int] = Field(default_factory=dict)
    reversal_rate: float = Field(default=0.0, ge=0, le=1)
    spread_preferences: dict[str, int] = Field(default_factory=dict)


class UserPatternTracking(_WireModel):
    """Pattern context for the next interpretation."""

    repeated_themes: list[str] = Field(default_factory=list)
    sophistication_growth: float = Field(default=0.0, ge=0, le=100)
    consistency_score: int = Field(default=0, ge=0, le=100)
