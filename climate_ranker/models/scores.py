"""
Derived score models produced by the ranking pipeline.

``EntityRawMetrics``   — temporal aggregate of one entity's records.
``NormalizedScoreSet`` — every raw metric mapped onto [0, 10], higher = better.
``CompositeScore``     — weighted overall score and recommendation tier.
``RankedEntity``       — a composite score with its 1-based rank and sector.

All models are frozen and rebuilt from scratch on every ranking run.  Stored
floats are *unrounded*; one-decimal rounding happens only through the
``display_*`` / ``rounded()`` helpers so it can never feed back into
classification.
"""

from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from climate_ranker.taxonomy.scoring_taxonomy import DataGap, RecommendationTier
from climate_ranker.utils.numeric import round_display

SCORE_MIN = 0.0
SCORE_MAX = 10.0


class EntityRawMetrics(BaseModel):
    """Raw per-entity metrics reduced from multi-period disclosures.

    Attributes:
        entity_id:              Entity identifier.
        mean_emissions:         Mean emissions over periods with data (0 if none).
        trend_pct:              % change earliest -> latest period with data.
        credibility_avg:        Mean credibility sub-score (scale min if none).
        declared_target_period: Latest net-zero target period, or ``None``.
        periods:                Sorted reporting periods that were aggregated.
        emission_periods:       Number of periods with an emissions value.
        assurance_ratio:        Fraction of aggregated periods externally assured.
        data_gaps:              Inputs that fell back to defaults.
    """

    model_config = ConfigDict(frozen=True)

    entity_id: str
    mean_emissions: float
    trend_pct: float
    credibility_avg: float
    declared_target_period: Optional[int] = None
    periods: tuple[int, ...] = ()
    emission_periods: int = 0
    assurance_ratio: float = 0.0
    data_gaps: tuple[DataGap, ...] = ()

    @field_validator("mean_emissions", "trend_pct", "credibility_avg")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"Raw metric overflowed to {v}; inputs are out of range.")
        return v

    @property
    def has_emissions_data(self) -> bool:
        return self.emission_periods > 0


class NormalizedScoreSet(BaseModel):
    """Component scores on a common 0–10 scale.

    ``emissions`` and ``trend`` are cohort-relative (min–max); ``credibility``
    and ``target`` use fixed scale mappings and are comparable across cohorts.
    """

    model_config = ConfigDict(frozen=True)

    entity_id: str
    emissions: float
    trend: float
    credibility: float
    target: float

    @field_validator("emissions", "trend", "credibility", "target")
    @classmethod
    def validate_bounds(cls, v: float) -> float:
        if not SCORE_MIN <= v <= SCORE_MAX:
            raise ValueError(f"Component score must be in [0, 10], got {v}.")
        return v

    def rounded(self) -> "NormalizedScoreSet":
        """One-decimal copy for presentation."""
        return self.model_copy(
            update={
                "emissions":   round_display(self.emissions),
                "trend":       round_display(self.trend),
                "credibility": round_display(self.credibility),
                "target":      round_display(self.target),
            }
        )


class CompositeScore(BaseModel):
    """Weighted composite for one entity.

    Attributes:
        entity_id:         Entity identifier.
        components:        Unrounded component scores.
        overall:           Unrounded weighted score after penalties (>= 0).
        tier:              Recommendation tier derived from ``overall``.
        penalties_applied: Names of penalty rules that fired, in order.
        data_gaps:         Copied from the entity's raw metrics.
    """

    model_config = ConfigDict(frozen=True)

    entity_id: str
    components: NormalizedScoreSet
    overall: float
    tier: RecommendationTier
    penalties_applied: tuple[str, ...] = ()
    data_gaps: tuple[DataGap, ...] = ()

    @field_validator("overall")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"overall must be >= 0, got {v}.")
        return v

    @property
    def display_overall(self) -> float:
        return round_display(self.overall)


class RankedEntity(BaseModel):
    """One leaderboard position.

    Attributes:
        rank:   1-based position; ties never share a rank.
        sector: Sector from the cohort definition, or ``None``.
        score:  Composite score.
        raw:    Raw metrics the score was derived from.
    """

    model_config = ConfigDict(frozen=True)

    rank: int
    sector: Optional[str] = None
    score: CompositeScore
    raw: EntityRawMetrics

    @field_validator("rank")
    @classmethod
    def validate_rank(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"rank must be >= 1, got {v}.")
        return v

    @property
    def entity_id(self) -> str:
        return self.score.entity_id
