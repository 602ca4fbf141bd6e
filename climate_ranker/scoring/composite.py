"""
Composite scoring: weighted component sum, then ordered penalties.

Score formula (range 0–10)
--------------------------
    overall = (
        emissions * w_emissions
        + trend   * w_trend
        + third   * w_third        # credibility OR target, per profile
    )

Penalties
---------
Each ``PenaltyRule`` in profile order whose condition holds subtracts its
``adjustment``, and the score is floored at 0 after *every* deduction:

    overall = max(0, overall - adjustment)

Conditions
----------
    NO_NET_ZERO_TARGET : declared_target_period is None
    EMISSIONS_RISING   : trend_pct > threshold (default 0)
    NEVER_ASSURED      : assurance_ratio == 0
    MISSING_EMISSIONS  : no period reported emissions
    LOW_CREDIBILITY    : credibility_avg < threshold
    TARGET_AFTER       : declared_target_period > threshold

Nothing here rounds; ``CompositeScore.display_overall`` is the presentation
value.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from climate_ranker.models.scores import (
    CompositeScore,
    EntityRawMetrics,
    NormalizedScoreSet,
)
from climate_ranker.scoring.classifier import classify_for_profile
from climate_ranker.scoring.profile import PenaltyRule, ScoringProfile
from climate_ranker.taxonomy.scoring_taxonomy import PenaltyCondition, ThirdComponent

logger = logging.getLogger(__name__)


def third_component_score(components: NormalizedScoreSet, profile: ScoringProfile) -> float:
    if profile.third_component == ThirdComponent.TARGET:
        return components.target
    return components.credibility


def weighted_overall(components: NormalizedScoreSet, profile: ScoringProfile) -> float:
    """Weighted sum of the three profile components, before penalties."""
    w = profile.weights
    return math.fsum((
        components.emissions * w.emissions,
        components.trend     * w.trend,
        third_component_score(components, profile) * w.third,
    ))


def penalty_applies(rule: PenaltyRule, metrics: EntityRawMetrics) -> bool:
    """Evaluate ``rule.condition`` against one entity's raw metrics."""
    condition = rule.condition
    if condition == PenaltyCondition.NO_NET_ZERO_TARGET:
        return metrics.declared_target_period is None
    if condition == PenaltyCondition.EMISSIONS_RISING:
        threshold = rule.threshold if rule.threshold is not None else 0.0
        return metrics.trend_pct > threshold
    if condition == PenaltyCondition.NEVER_ASSURED:
        return metrics.assurance_ratio == 0
    if condition == PenaltyCondition.MISSING_EMISSIONS:
        return not metrics.has_emissions_data
    if condition == PenaltyCondition.LOW_CREDIBILITY:
        return rule.threshold is not None and metrics.credibility_avg < rule.threshold
    if condition == PenaltyCondition.TARGET_AFTER:
        return (
            rule.threshold is not None
            and metrics.declared_target_period is not None
            and metrics.declared_target_period > rule.threshold
        )
    raise ValueError(f"Unhandled penalty condition '{condition}'.")


def apply_penalties(
    overall: float,
    rules:   Sequence[PenaltyRule],
    metrics: EntityRawMetrics,
) -> tuple[float, tuple[str, ...]]:
    """Apply ``rules`` in order, flooring at 0 after each deduction.

    Returns:
        ``(penalised_overall, names_of_rules_that_fired)``.
    """
    fired: list[str] = []
    for rule in rules:
        if penalty_applies(rule, metrics):
            overall = max(0.0, overall - rule.adjustment)
            fired.append(rule.name)
    return overall, tuple(fired)


def score_entity(
    components: NormalizedScoreSet,
    metrics:    EntityRawMetrics,
    profile:    ScoringProfile,
) -> CompositeScore:
    """Composite score and tier for one entity."""
    base = weighted_overall(components, profile)
    overall, fired = apply_penalties(base, profile.penalties, metrics)
    if fired:
        logger.debug(
            "Penalties for %s: %s (%.3f -> %.3f)",
            metrics.entity_id, ", ".join(fired), base, overall,
        )
    return CompositeScore(
        entity_id=components.entity_id,
        components=components,
        overall=overall,
        tier=classify_for_profile(overall, profile),
        penalties_applied=fired,
        data_gaps=metrics.data_gaps,
    )


def score_cohort(
    normalized: Sequence[NormalizedScoreSet],
    metrics:    Sequence[EntityRawMetrics],
    profile:    ScoringProfile,
) -> list[CompositeScore]:
    """Score every entity; ``normalized`` and ``metrics`` must align by position.

    Raises:
        ValueError: If the two sequences do not describe the same entities.
    """
    if [n.entity_id for n in normalized] != [m.entity_id for m in metrics]:
        raise ValueError("normalized and metrics must list the same entities in order.")
    return [score_entity(n, m, profile) for n, m in zip(normalized, metrics)]
