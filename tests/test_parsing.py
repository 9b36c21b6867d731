"""Tests for collaborator payload parsing."""

from datetime import date, datetime, timezone

import pytest

from tarot_shade.core.scoring.errors import ShadeEngineError, ValidationError
from tarot_shade.core.scoring.parsing import (
    coerce_model,
    parse_date,
    parse_interpretation,
    parse_reading,
    parse_readings,
    parse_reading_score,
    parse_shade_index,
)
from tarot_shade.core.scoring.types import CoreMetrics, ReadingScore, ShadeIndex
from tarot_shade.core.scoring.utils import clamp_score, round_half_up
from tests.fixtures_scoring import make_reading, make_reading_score, make_shade_index


class TestCoerceModel:
    def test_instance_passes_through(self):
        index = ShadeIndex.model_validate(make_shade_index(40))
        assert parse_shade_index(index) is index

    def test_subclass_instance_accepted(self):
        score = ReadingScore.model_validate(make_reading_score(core=90))
        metrics = coerce_model(CoreMetrics, score)
        assert metrics.humor == 90

    def test_core_metrics_view(self):
        score = parse_reading_score(make_reading_score(core=90, humor=81))
        metrics = score.core_metrics()
        assert type(metrics) is CoreMetrics
        assert metrics.model_dump() == {
            "subtlety": 90,
            "relatability": 90,
            "wisdom": 90,
            "creative": 90,
            "humor": 81,
        }

    def test_camel_and_snake_case_keys(self):
        camel = parse_shade_index(make_shade_index(40))
        snake = parse_shade_index({name: 40 for name in camel.model_dump()})
        assert camel == snake

    def test_errors_are_collected(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_reading_score({"humor": "lots"})
        assert exc_info.value.errors
        assert str(exc_info.value).startswith("Invalid ReadingScore: ")

    def test_engine_errors_share_a_base(self):
        with pytest.raises(ShadeEngineError):
            parse_shade_index(None)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_shade_index("fifty")


class TestParseReadings:
    def test_interpretation_themes_default_empty(self):
        interpretation = parse_interpretation({"text": "Bless your heart.", "scores": make_reading_score()})
        assert interpretation.themes == []
        assert interpretation.scores.shade_index.backhanded_compliments == 85

    def test_reading_wire_names(self):
        reading = parse_reading(make_reading("2024-03-01T12:00:00Z", reversed_cards=("the-moon",)))
        assert reading.user_id == "user-1"
        assert reading.spread_type == "classic"
        assert [card.is_reversed for card in reading.cards] == [False, False, True]
        assert reading.created_at == datetime(2024, 3, 1, 12, tzinfo=timezone.utc)

    def test_naive_timestamp_assumed_utc(self):
        reading = parse_reading(make_reading("2024-03-01T12:00:00"))
        assert reading.created_at.tzinfo is not None

    def test_bad_entry_index_reported(self):
        with pytest.raises(ValidationError, match="^Reading 2: "):
            parse_readings([make_reading("2024-03-01T12:00:00Z")] * 2 + ["not a reading"])


class TestParseDate:
    @pytest.mark.parametrize(
        "value",
        [
            "2024-01-10",
            "2024-01-10T08:00:00Z",
            "2024-01-10T23:59:59+05:00",
            date(2024, 1, 10),
            datetime(2024, 1, 10, 9, 30),
        ],
    )
    def test_accepted_forms(self, value):
        assert parse_date(value) == date(2024, 1, 10)

    @pytest.mark.parametrize("value", ["", "01/10/2024", "2024-13-01", 20240110, None])
    def test_rejected_forms(self, value):
        with pytest.raises(ValidationError, match="Unparseable date"):
            parse_date(value)


class TestRounding:
    @pytest.mark.parametrize("value, expected", [(2.5, 3), (58.5, 59), (0.49, 0), (-0.5, 0)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_clamp_score(self):
        assert clamp_score(162.5) == 100
        assert clamp_score(-3) == 0
        assert clamp_score(99.5) == 100
