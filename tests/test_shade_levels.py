"""Tests for Shade Level evaluation."""

import pytest

from tarot_shade.core.scoring.errors import ValidationError
from tarot_shade.core.scoring.shade_levels import (
    COMPONENT_FEEDBACK,
    SHADE_TIERS,
    calculate_shade_level,
    get_shade_breakdown,
    get_shade_level,
    get_undertone_strength,
    has_required_undertones,
    is_shade_level_passing,
)
from tarot_shade.core.scoring.types import (
    GUILT_TRIP_BOOST_THRESHOLD,
    SHADE_COMPONENTS,
    ShadeIndex,
    ShadeTier,
    UndertoneStrength,
)
from tests.fixtures_scoring import LEVEL_3_SHADE, LEVEL_7_SHADE, make_shade_index


# ============================================================================
# Level computation
# ============================================================================


class TestCalculateShadeLevel:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (0, 1),
            (5, 1),
            (10, 1),
            (15, 1),
            (25, 2),
            (35, 3),
            (45, 4),
            (55, 5),
            (65, 6),
            (75, 7),
            (85, 8),
            (95, 9),
            (100, 10),
        ],
    )
    def test_uniform_index_level(self, value, expected):
        assert calculate_shade_level(make_shade_index(value)).level == expected

    def test_zero_index_never_yields_level_zero(self):
        result = calculate_shade_level(make_shade_index(0))
        assert result.level == 1
        assert result.title == "Sweet Summer Child"

    def test_extreme_low_values(self):
        low = {
            "plausibleDeniability": 1,
            "guiltTripIntensity": 0,
            "emotionalManipulation": 2,
            "backhandedCompliments": 1,
            "strategicVagueness": 0,
        }
        result = calculate_shade_level(low)
        assert result.level == 1
        assert result.undertone_strength == UndertoneStrength.FAINT

    def test_level_7_achievement(self):
        result = calculate_shade_level(LEVEL_7_SHADE)
        assert result.level == 7
        assert result.title == "Weaponized Politeness"
        assert is_shade_level_passing(LEVEL_7_SHADE) is True

    def test_pointed_pause(self):
        result = calculate_shade_level(LEVEL_3_SHADE)
        assert result.level == 3
        assert result.title == "The Pointed Pause"
        assert result.undertone_strength == UndertoneStrength.CLEAR
        assert has_required_undertones(LEVEL_3_SHADE) is True
        assert is_shade_level_passing(LEVEL_3_SHADE) is False

    @pytest.mark.parametrize(
        "value, color",
        [
            (10, "text-green-400"),
            (15, "text-green-400"),
            (25, "text-emerald-400"),
            (30, "text-teal-400"),
            (45, "text-cyan-400"),
            (50, "text-blue-400"),
            (70, "text-violet-400"),
            (90, "text-pink-400"),
        ],
    )
    def test_color_classes(self, value, color):
        assert calculate_shade_level(make_shade_index(value)).color_class == color

    def test_accepts_snake_case_and_models(self):
        snake = {name: 78 for name in SHADE_COMPONENTS}
        assert calculate_shade_level(snake).level == 7
        assert calculate_shade_level(ShadeIndex(**snake)).level == 7

    def test_repeated_calls_are_identical(self):
        assert calculate_shade_level(LEVEL_7_SHADE) == calculate_shade_level(LEVEL_7_SHADE)

    def test_every_tier_has_display_text(self):
        assert set(SHADE_TIERS) == set(ShadeTier)
        for info in SHADE_TIERS.values():
            assert info.title
            assert info.color_class.startswith("text-")


# ============================================================================
# Guilt trip boost
# ============================================================================


class TestGuiltTripBoost:
    def test_threshold_is_pinned_at_60(self):
        assert GUILT_TRIP_BOOST_THRESHOLD == 60

    def test_boosts_level_3_to_4_at_threshold(self):
        # mean 36 -> level 3, boosted by guilt trip 60
        index = make_shade_index(30, guiltTripIntensity=60)
        result = calculate_shade_level(index)
        assert result.level == 4
        assert result.title == "The Raised Eyebrow"

    def test_no_boost_just_below_threshold(self):
        # mean 35.8 -> level 3, guilt trip 59 stays below threshold
        index = make_shade_index(30, guiltTripIntensity=59)
        assert calculate_shade_level(index).level == 3

    def test_boost_only_applies_to_level_3(self):
        # mean 28 -> level 2; high guilt trip alone doesn't lift it
        index = make_shade_index(20, guiltTripIntensity=60)
        assert calculate_shade_level(index).level == 2

    def test_weighted_level_3_stays_clear(self):
        # mean 37, guilt trip 55 is below the boost threshold
        index = {
            "plausibleDeniability": 30,
            "guiltTripIntensity": 55,
            "emotionalManipulation": 35,
            "backhandedCompliments": 35,
            "strategicVagueness": 30,
        }
        result = calculate_shade_level(index)
        assert result.level == 3
        assert result.undertone_strength == UndertoneStrength.CLEAR


# ============================================================================
# Predicates
# ============================================================================


class TestPredicates:
    @pytest.mark.parametrize("value", [0, 25, 45, 65, 69])
    def test_not_passing_below_level_7(self, value):
        assert is_shade_level_passing(make_shade_index(value)) is False

    @pytest.mark.parametrize("value", [70, 85, 100])
    def test_passing_at_level_7_and_above(self, value):
        assert is_shade_level_passing(make_shade_index(value)) is True

    def test_passing_mixed_index(self):
        passing = {
            "plausibleDeniability": 70,
            "guiltTripIntensity": 72,
            "emotionalManipulation": 68,
            "backhandedCompliments": 75,
            "strategicVagueness": 70,
        }
        failing = {
            "plausibleDeniability": 60,
            "guiltTripIntensity": 62,
            "emotionalManipulation": 58,
            "backhandedCompliments": 65,
            "strategicVagueness": 55,
        }
        assert is_shade_level_passing(passing) is True
        assert is_shade_level_passing(failing) is False

    def test_undertones_boundary(self):
        assert has_required_undertones(make_shade_index(29)) is False
        assert has_required_undertones(make_shade_index(30)) is True

    def test_predicates_agree_with_level(self):
        for value in range(0, 101, 7):
            index = make_shade_index(value)
            level = get_shade_level(index)
            assert is_shade_level_passing(index) == (level >= 7)
            assert has_required_undertones(index) == (level >= 3)

    def test_undertone_strength(self):
        assert get_undertone_strength(make_shade_index(95)) == UndertoneStrength.DEVASTATING
        assert get_undertone_strength(make_shade_index(55)) == UndertoneStrength.PRONOUNCED


# ============================================================================
# Breakdown
# ============================================================================


class TestShadeBreakdown:
    def test_breakdown_covers_every_component(self):
        index = {
            "plausibleDeniability": 90,
            "guiltTripIntensity": 85,
            "emotionalManipulation": 95,
            "backhandedCompliments": 80,
            "strategicVagueness": 88,
        }
        breakdown = get_shade_breakdown(index)
        assert [item.component for item in breakdown] == list(SHADE_COMPONENTS)
        for item in breakdown:
            assert item.feedback == COMPONENT_FEEDBACK[item.component][0]

    def test_feedback_tiers(self):
        index = make_shade_index(
            50,
            plausibleDeniability=80,
            guiltTripIntensity=79,
            emotionalManipulation=50,
            backhandedCompliments=49,
            strategicVagueness=0,
        )
        feedback = {item.component: item.feedback for item in get_shade_breakdown(index)}
        assert feedback["plausible_deniability"] == COMPONENT_FEEDBACK["plausible_deniability"][0]
        assert feedback["guilt_trip_intensity"] == COMPONENT_FEEDBACK["guilt_trip_intensity"][1]
        assert feedback["emotional_manipulation"] == COMPONENT_FEEDBACK["emotional_manipulation"][1]
        assert feedback["backhanded_compliments"] == COMPONENT_FEEDBACK["backhanded_compliments"][2]
        assert feedback["strategic_vagueness"] == COMPONENT_FEEDBACK["strategic_vagueness"][2]

    def test_fifteen_distinct_strings(self):
        strings = [text for tiers in COMPONENT_FEEDBACK.values() for text in tiers]
        assert len(strings) == 15
        assert len(set(strings)) == 15


# ============================================================================
# Validation
# ============================================================================


class TestShadeIndexValidation:
    def test_missing_component(self):
        index = make_shade_index(50)
        del index["strategicVagueness"]
        with pytest.raises(ValidationError, match="strategicVagueness"):
            calculate_shade_level(index)

    @pytest.mark.parametrize("bad", [-1, 101])
    def test_out_of_range_component(self, bad):
        with pytest.raises(ValidationError):
            calculate_shade_level(make_shade_index(50, guiltTripIntensity=bad))

    @pytest.mark.parametrize("bad", ["75", True, 75.0, None])
    def test_component_must_be_an_integer(self, bad):
        with pytest.raises(ValidationError, match="guiltTripIntensity"):
            calculate_shade_level(make_shade_index(50, guiltTripIntensity=bad))

    def test_numeric_strings_are_not_coerced(self):
        index = make_shade_index(75, plausibleDeniability="75", guiltTripIntensity=True)
        with pytest.raises(ValidationError) as exc_info:
            calculate_shade_level(index)
        assert len(exc_info.value.errors) == 2

    def test_not_a_mapping(self):
        with pytest.raises(ValidationError, match="expected an object"):
            is_shade_level_passing([50, 50, 50, 50, 50])
