"""
Scoring engine: disclosures -> raw metrics -> normalised components ->
composite scores -> tiers -> ranks.

Modules
-------
profile     ScoringProfile and friends + validate_profile() + built-in profiles.
emissions   Per-period emissions values, YoY changes, relative change.
aggregator  aggregate_entity() / aggregate_cohort() -> EntityRawMetrics.
normalizer  normalize_cohort() + target_period_to_score().
composite   weighted_overall() + apply_penalties() + score_cohort().
classifier  classify() -> RecommendationTier.
ranker      rank_scores() + top_n_per_sector().

All functions are pure; no DB or I/O.
"""
