"""Tests for core metric validation."""

import pytest

from tarot_shade.core.scoring.core_metrics import (
    get_core_metric_breakdown,
    get_failing_core_metrics,
    validate_core_metrics,
)
from tarot_shade.core.scoring.errors import ValidationError
from tarot_shade.core.scoring.types import CORE_METRICS, CoreMetrics, ReadingScore
from tests.fixtures_scoring import PASSING_CORE, make_reading_score


class TestValidateCoreMetrics:
    def test_all_at_threshold_pass(self):
        assert validate_core_metrics(PASSING_CORE) is True

    @pytest.mark.parametrize("metric", CORE_METRICS)
    def test_single_79_fails(self, metric):
        metrics = {**PASSING_CORE, metric: 79}
        assert validate_core_metrics(metrics) is False

    def test_wisdom_79_fails(self):
        assert validate_core_metrics({**PASSING_CORE, "wisdom": 79}) is False

    def test_perfect_scores_pass(self):
        assert validate_core_metrics({name: 100 for name in CORE_METRICS}) is True

    def test_accepts_reading_score(self):
        score = ReadingScore.model_validate(make_reading_score(core=90))
        assert validate_core_metrics(score) is True

    def test_ignores_extra_payload_fields(self):
        assert validate_core_metrics(make_reading_score(core=80)) is True

    def test_missing_metric_raises(self):
        metrics = dict(PASSING_CORE)
        del metrics["humor"]
        with pytest.raises(ValidationError, match="humor"):
            validate_core_metrics(metrics)

    def test_out_of_range_raises(self):
        with pytest.raises(ValidationError):
            validate_core_metrics({**PASSING_CORE, "creative": 120})


class TestCoreMetricBreakdown:
    def test_breakdown_order_and_values(self):
        metrics = CoreMetrics(subtlety=95, relatability=70, wisdom=80, creative=10, humor=85)
        breakdown = get_core_metric_breakdown(metrics)
        assert list(breakdown) == list(CORE_METRICS)
        assert breakdown == {
            "subtlety": True,
            "relatability": False,
            "wisdom": True,
            "creative": False,
            "humor": True,
        }

    def test_failing_metrics(self):
        metrics = {**PASSING_CORE, "relatability": 40, "humor": 79}
        assert get_failing_core_metrics(metrics) == ["relatability", "humor"]

    def test_no_failing_metrics(self):
        assert get_failing_core_metrics(PASSING_CORE) == []
