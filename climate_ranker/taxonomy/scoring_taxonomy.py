"""
Scoring taxonomy for the climate ranking engine.

Controlled vocabularies used by the aggregator, scorer, and classifier:
  - ``RecommendationTier`` — the *verdict*: what should a financier do?
  - ``DataGap``            — the *caveat*: which inputs fell back to defaults?
  - ``EmissionsMetric``    — which scopes feed the emissions series.
  - ``CredibilityField``   — which credibility sub-score is averaged.
  - ``ThirdComponent``     — which fixed-scale component takes the third weight.
  - ``PenaltyCondition``   — declarative predicates for penalty rules.

Usage example::

    from climate_ranker.taxonomy.scoring_taxonomy import RecommendationTier

    tier = RecommendationTier.FINANCE

This module has NO imports from any other ``climate_ranker`` package.
"""

from enum import StrEnum


class RecommendationTier(StrEnum):
    """Discrete financing recommendation, ordered best to worst."""

    FINANCE = "finance"
    """Composite score clears the profile's finance threshold."""

    MONITOR = "monitor"
    """Between the monitor and finance thresholds; revisit next cycle."""

    AVOID = "avoid"
    """Below the monitor threshold."""

    @property
    def label(self) -> str:
        return self.value.capitalize()


class DataGap(StrEnum):
    """Input categories that were absent and replaced by a fallback value."""

    NO_EMISSIONS = "no_emissions"
    """No period reported either scope; mean emissions defaulted to 0."""

    NO_CREDIBILITY = "no_credibility"
    """No credibility assessment in any period; scale minimum used."""

    NO_TARGET = "no_target"
    """No net-zero target with a resolvable period."""


class EmissionsMetric(StrEnum):
    """Which scopes make up an emissions value for one period."""

    TOTAL = "total"
    """scope1 + scope2, with a missing scope counted as 0 if the other exists."""

    SCOPE1 = "scope1"
    """Direct emissions only."""

    SCOPE2 = "scope2"
    """Purchased-energy emissions only."""


class CredibilityField(StrEnum):
    """Credibility sub-score averaged into ``credibility_avg``."""

    SCORE = "score"
    ALIGNMENT = "alignment"
    REALISM = "realism"


class ThirdComponent(StrEnum):
    """Fixed-scale component weighted alongside emissions and trend."""

    CREDIBILITY = "credibility"
    TARGET = "target"


class PenaltyCondition(StrEnum):
    """Predicate evaluated against an entity's raw metrics."""

    NO_NET_ZERO_TARGET = "no_net_zero_target"
    """No declared net-zero target period."""

    EMISSIONS_RISING = "emissions_rising"
    """trend_pct above the rule threshold (default 0)."""

    NEVER_ASSURED = "never_assured"
    """No reporting period was externally assured."""

    MISSING_EMISSIONS = "missing_emissions"
    """No emissions data in any period."""

    LOW_CREDIBILITY = "low_credibility"
    """credibility_avg below the rule threshold."""

    TARGET_AFTER = "target_after"
    """Declared target period later than the rule threshold."""
