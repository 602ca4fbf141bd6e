"""
Recommendation tier classification.

Rules (evaluated in order, first match wins), against the *unrounded*
composite score so one-decimal display rounding can never flip a tier:

    1. FINANCE : overall >= finance_threshold
    2. MONITOR : overall >= monitor_threshold
    3. AVOID   : everything else
"""

from __future__ import annotations

from climate_ranker.scoring.profile import ScoringProfile
from climate_ranker.taxonomy.scoring_taxonomy import RecommendationTier


def classify(
    overall:           float,
    finance_threshold: float,
    monitor_threshold: float,
) -> RecommendationTier:
    """Map a composite score to a ``RecommendationTier``."""
    if overall >= finance_threshold:
        return RecommendationTier.FINANCE
    if overall >= monitor_threshold:
        return RecommendationTier.MONITOR
    return RecommendationTier.AVOID


def classify_for_profile(overall: float, profile: ScoringProfile) -> RecommendationTier:
    return classify(overall, profile.finance_threshold, profile.monitor_threshold)
