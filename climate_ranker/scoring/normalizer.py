"""
Cohort normalisation: raw metrics -> ``NormalizedScoreSet`` on [0, 10].

Component mappings (higher is always better)
--------------------------------------------
emissions    cohort min–max, inverted: (max - value) / (max - min) * 10.
             Lowest emitter scores 10.  Zero range -> 10 for everyone.
trend        cohort min–max, inverted: most negative trend scores 10.
             Zero range -> 10 for everyone.
credibility  fixed scale: (avg - scale_min) / (scale_max - scale_min) * 10.
target       fixed step table (``target_period_to_score``), default
             None -> 0, <=2040 -> 10, <=2045 -> 7.5, <=2050 -> 5, later -> 2.5.

Credibility and target never depend on the cohort, so they stay comparable
across cohort sizes, including a cohort of one.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from climate_ranker.errors import EmptyCohortError
from climate_ranker.models.scores import EntityRawMetrics, NormalizedScoreSet
from climate_ranker.scoring.profile import ScoringProfile, TargetStep
from climate_ranker.utils.numeric import inverted_min_max, linear_scale

logger = logging.getLogger(__name__)


def target_period_to_score(
    period: Optional[int],
    steps: Sequence[TargetStep],
    undeclared_score: float = 0.0,
    late_score: float = 2.5,
) -> float:
    """Map a declared net-zero period to a fixed score.

    Args:
        period:           Declared target period, or ``None``.
        steps:            Ascending ``TargetStep`` table; first step whose
                          ``max_period`` is >= ``period`` wins.
        undeclared_score: Score for ``None``.
        late_score:       Score for periods beyond the last step.
    """
    if period is None:
        return undeclared_score
    for step in steps:
        if period <= step.max_period:
            return step.score
    return late_score


def normalize_cohort(
    metrics: Sequence[EntityRawMetrics],
    profile: ScoringProfile,
) -> list[NormalizedScoreSet]:
    """Normalise every entity's raw metrics against the cohort.

    Args:
        metrics: Raw metrics for the whole cohort (order preserved).
        profile: Supplies the credibility scale and target step table.

    Returns:
        One ``NormalizedScoreSet`` per input, same order.

    Raises:
        EmptyCohortError: If ``metrics`` is empty.
    """
    if not metrics:
        raise EmptyCohortError("Cannot normalise an empty cohort.")

    emissions = [m.mean_emissions for m in metrics]
    trends = [m.trend_pct for m in metrics]
    em_lo, em_hi = min(emissions), max(emissions)
    tr_lo, tr_hi = min(trends), max(trends)

    if em_lo == em_hi:
        logger.debug("Zero emissions range across %d entities", len(metrics))
    if tr_lo == tr_hi:
        logger.debug("Zero trend range across %d entities", len(metrics))

    return [
        NormalizedScoreSet(
            entity_id=m.entity_id,
            emissions=inverted_min_max(m.mean_emissions, em_lo, em_hi),
            trend=inverted_min_max(m.trend_pct, tr_lo, tr_hi),
            credibility=linear_scale(
                m.credibility_avg,
                profile.credibility_scale_min,
                profile.credibility_scale_max,
            ),
            target=target_period_to_score(
                m.declared_target_period,
                profile.target_steps,
                profile.undeclared_target_score,
                profile.late_target_score,
            ),
        )
        for m in metrics
    ]
