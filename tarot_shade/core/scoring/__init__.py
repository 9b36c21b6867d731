"""Shade scoring engine.

Grades AI-generated tarot readings against the rubric:
- Core metrics (subtlety, relatability, wisdom, creative, humor) must each reach 80
- The Shade Level (1-10, from the five-component shade index) must reach 7
- Spread and seasonal multipliers adjust scores for display and bonuses
- Reading history is summarized into pattern context

Every function is pure: results depend only on the arguments, including
the evaluation date for seasonal events.

Usage:
    from tarot_shade.core.scoring import evaluate_reading_quality

    result = evaluate_reading_quality(interpretation["scores"])
    print(f"Passing: {result.is_passing} {result.feedback}")
"""

from tarot_shade.core.scoring.composite import (
    calculate_reading_score,
    calculate_weighted_score,
    evaluate_reading_quality,
    get_score_classification,
)
from tarot_shade.core.scoring.core_metrics import (
    get_core_metric_breakdown,
    get_failing_core_metrics,
    validate_core_metrics,
)
from tarot_shade.core.scoring.errors import (
    ConfigurationError,
    ShadeEngineError,
    ValidationError,
)
from tarot_shade.core.scoring.parsing import (
    parse_interpretation,
    parse_reading,
    parse_reading_score,
    parse_readings,
    parse_shade_index,
)
from tarot_shade.core.scoring.patterns import analyze_reading_patterns, calculate_pattern_metrics
from tarot_shade.core.scoring.seasonal import (
    SEASONAL_EVENTS,
    calculate_seasonal_bonus,
    get_active_seasonal_events,
)
from tarot_shade.core.scoring.shade_levels import (
    SHADE_TIERS,
    calculate_shade_level,
    get_shade_breakdown,
    get_undertone_strength,
    has_required_undertones,
    is_shade_level_passing,
)
from tarot_shade.core.scoring.special_conditions import (
    SPECIAL_CONDITIONS,
    calculate_total_score,
    detect_special_conditions,
)
from tarot_shade.core.scoring.spread_modifiers import (
    SPREAD_MODIFIERS,
    apply_spread_modifiers,
    get_active_spread_conditions,
    get_spread_modifier,
)
from tarot_shade.core.scoring.types import (
    CORE_METRIC_THRESHOLD,
    CORE_METRICS,
    MINIMUM_SHADE_LEVEL,
    CoreMetrics,
    QualityEvaluation,
    Reading,
    ReadingScore,
    ShadeIndex,
    ShadeLevelDetails,
    SpreadType,
    ThematicCategory,
    UserPatternTracking,
)

__all__ = [
    "analyze_reading_patterns",
    "apply_spread_modifiers",
    "calculate_pattern_metrics",
    "calculate_reading_score",
    "calculate_seasonal_bonus",
    "calculate_shade_level",
    "calculate_total_score",
    "calculate_weighted_score",
    "detect_special_conditions",
    "evaluate_reading_quality",
    "get_active_seasonal_events",
    "get_active_spread_conditions",
    "get_core_metric_breakdown",
    "get_failing_core_metrics",
    "get_score_classification",
    "get_shade_breakdown",
    "get_spread_modifier",
    "get_undertone_strength",
    "has_required_undertones",
    "is_shade_level_passing",
    "parse_interpretation",
    "parse_reading",
    "parse_reading_score",
    "parse_readings",
    "parse_shade_index",
    "validate_core_metrics",
    "ConfigurationError",
    "ShadeEngineError",
    "ValidationError",
    "CoreMetrics",
    "QualityEvaluation",
    "Reading",
    "ReadingScore",
    "ShadeIndex",
    "ShadeLevelDetails",
    "SpreadType",
    "ThematicCategory",
    "UserPatternTracking",
    "SEASONAL_EVENTS",
    "SHADE_TIERS",
    "SPECIAL_CONDITIONS",
    "SPREAD_MODIFIERS",
    "CORE_METRICS",
    "CORE_METRIC_THRESHOLD",
    "MINIMUM_SHADE_LEVEL",
]
