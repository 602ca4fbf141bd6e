"""
Scoring profiles: weights, thresholds, and scales that travel together.

A ``ScoringProfile`` is the complete, versioned configuration of one ranking
scheme.  Weights and classification thresholds are calibrated as a pair, so
they are never mixed across profiles.

Model hierarchy
---------------
  ScoringProfile
    ├── ComponentWeights — emissions / trend / third-component weights
    ├── PenaltyRule      — ordered, declarative score deductions
    └── TargetStep       — net-zero target period -> fixed score table

Pydantic validates field *shapes*; ``validate_profile()`` checks the
cross-field contract (weights sum to 1, thresholds strictly descending, scale
and step tables well-formed) and raises ``ConfigurationError``.  Every ranking
run calls it before touching any record.

Built-in profiles
-----------------
credibility_v1  emissions 0.3 / trend 0.4 / credibility 0.3, Finance >= 6.0,
                Monitor >= 4.0.
net_zero_v1     emissions 0.3 / trend 0.4 / net-zero target 0.3,
                Finance >= 5.0, Monitor >= 3.65.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from climate_ranker.errors import ConfigurationError
from climate_ranker.taxonomy.scoring_taxonomy import (
    CredibilityField,
    EmissionsMetric,
    PenaltyCondition,
    ThirdComponent,
)
from climate_ranker.utils.numeric import sums_to_one

NET_ZERO_PATTERN = r"net[\s_-]?zero"


class ComponentWeights(BaseModel):
    """Weight triple applied to the normalised components.

    Attributes:
        emissions: Weight of the mean-emissions score.
        trend:     Weight of the emissions-trend score.
        third:     Weight of the profile's ``third_component`` score.
    """

    model_config = ConfigDict(frozen=True)

    emissions: float
    trend: float
    third: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.emissions, self.trend, self.third)


class TargetStep(BaseModel):
    """Target periods ``<= max_period`` score ``score``."""

    model_config = ConfigDict(frozen=True)

    max_period: int
    score: float


class PenaltyRule(BaseModel):
    """Deduction applied when ``condition`` holds for an entity.

    Attributes:
        name:       Label recorded in ``CompositeScore.penalties_applied``.
        condition:  Predicate evaluated against the entity's raw metrics.
        adjustment: Points subtracted from ``overall`` (floored at 0).
        threshold:  Parameter for threshold-based conditions.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    condition: PenaltyCondition
    adjustment: float
    threshold: Optional[float] = None

    @field_validator("adjustment")
    @classmethod
    def validate_adjustment(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"Penalty adjustment must be >= 0, got {v}.")
        return v


DEFAULT_TARGET_STEPS: tuple[TargetStep, ...] = (
    TargetStep(max_period=2040, score=10.0),
    TargetStep(max_period=2045, score=7.5),
    TargetStep(max_period=2050, score=5.0),
)


class ScoringProfile(BaseModel):
    """Named bundle of everything that shapes a ranking.

    Attributes:
        name:                    Profile identifier, e.g. ``"credibility_v1"``.
        version:                 Free-form version label.
        weights:                 Component weight triple (must sum to 1).
        third_component:         Which fixed-scale score takes ``weights.third``.
        finance_threshold:       ``overall >=`` this -> Finance.
        monitor_threshold:       ``overall >=`` this -> Monitor.
        penalties:               Ordered penalty rules.
        credibility_scale_min:   Lowest possible credibility value.
        credibility_scale_max:   Highest possible credibility value.
        credibility_field:       Credibility sub-score to average.
        emissions_metric:        Scopes used for emissions statistics.
        target_steps:            Ascending step table for target periods.
        undeclared_target_score: Score when no net-zero period is declared.
        late_target_score:       Score for periods after the last step.
        net_zero_pattern:        Case-insensitive regex for net-zero intent.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    version: str = "1"
    weights: ComponentWeights
    third_component: ThirdComponent = ThirdComponent.CREDIBILITY
    finance_threshold: float
    monitor_threshold: float
    penalties: tuple[PenaltyRule, ...] = ()
    credibility_scale_min: float = 1.0
    credibility_scale_max: float = 3.0
    credibility_field: CredibilityField = CredibilityField.SCORE
    emissions_metric: EmissionsMetric = EmissionsMetric.TOTAL
    target_steps: tuple[TargetStep, ...] = DEFAULT_TARGET_STEPS
    undeclared_target_score: float = 0.0
    late_target_score: float = 2.5
    net_zero_pattern: str = NET_ZERO_PATTERN


def validate_profile(profile: ScoringProfile) -> ScoringProfile:
    """Check the cross-field contract of ``profile``.

    Returns:
        ``profile`` unchanged, for chaining.

    Raises:
        ConfigurationError: On the first violated rule.
    """
    weights = profile.weights.as_tuple()
    if any(w < 0 for w in weights):
        raise ConfigurationError(
            f"Profile '{profile.name}': weights must be non-negative, got {weights}."
        )
    if not sums_to_one(weights):
        raise ConfigurationError(
            f"Profile '{profile.name}': weights must sum to 1, "
            f"got {sum(weights):.6f} from {weights}."
        )
    if not profile.finance_threshold > profile.monitor_threshold:
        raise ConfigurationError(
            f"Profile '{profile.name}': finance_threshold "
            f"({profile.finance_threshold}) must be greater than "
            f"monitor_threshold ({profile.monitor_threshold})."
        )
    if not profile.credibility_scale_max > profile.credibility_scale_min:
        raise ConfigurationError(
            f"Profile '{profile.name}': credibility scale "
            f"[{profile.credibility_scale_min}, {profile.credibility_scale_max}] "
            "is empty."
        )

    step_periods = [s.max_period for s in profile.target_steps]
    if any(a >= b for a, b in zip(step_periods, step_periods[1:])):
        raise ConfigurationError(
            f"Profile '{profile.name}': target_steps must be strictly ascending "
            f"by max_period, got {step_periods}."
        )
    step_scores = [s.score for s in profile.target_steps]
    step_scores += [profile.undeclared_target_score, profile.late_target_score]
    if any(not 0.0 <= s <= 10.0 for s in step_scores):
        raise ConfigurationError(
            f"Profile '{profile.name}': target scores must lie in [0, 10], "
            f"got {step_scores}."
        )

    try:
        re.compile(profile.net_zero_pattern)
    except re.error as exc:
        raise ConfigurationError(
            f"Profile '{profile.name}': invalid net_zero_pattern: {exc}"
        ) from exc

    for rule in profile.penalties:
        if rule.condition in _THRESHOLD_CONDITIONS and rule.threshold is None:
            raise ConfigurationError(
                f"Profile '{profile.name}': penalty '{rule.name}' "
                f"({rule.condition}) requires a threshold."
            )

    return profile


_THRESHOLD_CONDITIONS = frozenset({
    PenaltyCondition.LOW_CREDIBILITY,
    PenaltyCondition.TARGET_AFTER,
})


BUILTIN_PROFILES: dict[str, ScoringProfile] = {
    "credibility_v1": ScoringProfile(
        name="credibility_v1",
        weights=ComponentWeights(emissions=0.3, trend=0.4, third=0.3),
        third_component=ThirdComponent.CREDIBILITY,
        finance_threshold=6.0,
        monitor_threshold=4.0,
    ),
    "net_zero_v1": ScoringProfile(
        name="net_zero_v1",
        weights=ComponentWeights(emissions=0.3, trend=0.4, third=0.3),
        third_component=ThirdComponent.TARGET,
        finance_threshold=5.0,
        monitor_threshold=3.65,
    ),
}
