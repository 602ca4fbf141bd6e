"""
Tests for climate_ranker/scoring/normalizer.py.

What we test
------------
target_period_to_score():
  - Step table boundaries (2040 / 2045 / 2050) are inclusive.
  - None -> 0; beyond the last step -> 2.5.
  - Custom step tables are honoured.

normalize_cohort():
  - Two-entity emissions {100, 200} -> {10, 0}.
  - Single-entity cohort -> emissions 10 and trend 10 (zero range).
  - All-tied cohort -> every entity scores 10 on emissions and trend.
  - Most negative trend scores 10; most positive scores 0.
  - Credibility maps the fixed 1–3 scale; scale minimum -> 0.
  - Every component stays within [0, 10].
  - Lowering one entity's emissions never lowers its emissions score.
  - Empty cohort raises EmptyCohortError.
"""

from __future__ import annotations

import pytest

from climate_ranker.errors import EmptyCohortError
from climate_ranker.models.scores import EntityRawMetrics
from climate_ranker.scoring.normalizer import normalize_cohort, target_period_to_score
from climate_ranker.scoring.profile import BUILTIN_PROFILES, DEFAULT_TARGET_STEPS, TargetStep

PROFILE = BUILTIN_PROFILES["credibility_v1"]


def _metrics(
    entity_id: str,
    mean_emissions: float = 100.0,
    trend_pct: float = 0.0,
    credibility_avg: float = 2.0,
    declared_target_period: int | None = None,
) -> EntityRawMetrics:
    return EntityRawMetrics(
        entity_id=entity_id,
        mean_emissions=mean_emissions,
        trend_pct=trend_pct,
        credibility_avg=credibility_avg,
        declared_target_period=declared_target_period,
    )


class TestTargetPeriodToScore:
    @pytest.mark.parametrize(
        "period, expected",
        [
            (None, 0.0),
            (2030, 10.0),
            (2040, 10.0),
            (2041, 7.5),
            (2045, 7.5),
            (2046, 5.0),
            (2050, 5.0),
            (2051, 2.5),
            (2060, 2.5),
        ],
    )
    def test_default_steps(self, period, expected):
        assert target_period_to_score(period, DEFAULT_TARGET_STEPS) == expected

    def test_custom_steps(self):
        steps = (TargetStep(max_period=2030, score=9.0),)
        assert target_period_to_score(2030, steps, late_score=1.0) == 9.0
        assert target_period_to_score(2031, steps, late_score=1.0) == 1.0
        assert target_period_to_score(None, steps, undeclared_score=0.5) == 0.5


class TestNormalizeEmissions:
    def test_two_entity_min_max(self):
        scores = normalize_cohort([_metrics("A", 100.0), _metrics("B", 200.0)], PROFILE)
        assert scores[0].emissions == pytest.approx(10.0)
        assert scores[1].emissions == pytest.approx(0.0)

    def test_midpoint(self):
        scores = normalize_cohort(
            [_metrics("A", 100.0), _metrics("B", 150.0), _metrics("C", 200.0)], PROFILE,
        )
        assert scores[1].emissions == pytest.approx(5.0)

    def test_single_entity_zero_range(self):
        (score,) = normalize_cohort([_metrics("A", 12345.0, trend_pct=-37.0)], PROFILE)
        assert score.emissions == 10.0
        assert score.trend == 10.0

    def test_all_tied(self):
        scores = normalize_cohort([_metrics(e, 500.0, 5.0) for e in "ABC"], PROFILE)
        assert all(s.emissions == 10.0 and s.trend == 10.0 for s in scores)

    def test_monotonic_in_own_emissions(self):
        others = [_metrics("B", 300.0), _metrics("C", 800.0)]
        previous = -1.0
        for value in (1000.0, 800.0, 500.0, 300.0, 100.0, 0.0):
            scores = normalize_cohort([_metrics("A", value)] + others, PROFILE)
            assert scores[0].emissions >= previous
            previous = scores[0].emissions


class TestNormalizeTrend:
    def test_most_negative_is_best(self):
        scores = normalize_cohort(
            [_metrics("A", trend_pct=-20.0), _metrics("B", trend_pct=10.0), _metrics("C", trend_pct=-5.0)],
            PROFILE,
        )
        assert scores[0].trend == pytest.approx(10.0)
        assert scores[1].trend == pytest.approx(0.0)
        assert scores[2].trend == pytest.approx(5.0)


class TestFixedScaleComponents:
    def test_credibility_scale(self):
        scores = normalize_cohort(
            [_metrics("A", credibility_avg=1.0), _metrics("B", credibility_avg=2.0), _metrics("C", credibility_avg=3.0)],
            PROFILE,
        )
        assert [s.credibility for s in scores] == pytest.approx([0.0, 5.0, 10.0])

    def test_credibility_not_cohort_relative(self):
        (alone,) = normalize_cohort([_metrics("A", credibility_avg=2.0)], PROFILE)
        assert alone.credibility == pytest.approx(5.0)

    def test_target_component(self):
        (score,) = normalize_cohort([_metrics("A", declared_target_period=2060)], PROFILE)
        assert score.target == 2.5


class TestBoundedness:
    def test_all_components_in_range(self, sample_records):
        from climate_ranker.scoring.aggregator import aggregate_cohort

        for profile in BUILTIN_PROFILES.values():
            for s in normalize_cohort(aggregate_cohort(sample_records, profile), profile):
                for value in (s.emissions, s.trend, s.credibility, s.target):
                    assert 0.0 <= value <= 10.0

    def test_out_of_scale_credibility_is_clamped(self):
        (score,) = normalize_cohort([_metrics("A", credibility_avg=5.0)], PROFILE)
        assert score.credibility == 10.0


class TestEmptyCohort:
    def test_raises(self):
        with pytest.raises(EmptyCohortError):
            normalize_cohort([], PROFILE)
