"""
Leaderboard adapters for presentation layers.

``leaderboard_rows()`` flattens a ``RankingResult`` into one flat dict per
entity so a chart, table, or API response can consume it without touching
the pydantic models.  Every column is present for every row, even when the
value is zero, tied, or missing (``None``).

Score columns are rounded to one decimal here and only here.

Each row contains:
- ``rank``, ``entity_id``, ``sector``
- ``emissions_score``, ``trend_score``, ``credibility_score``, ``target_score``
- ``overall``, ``tier``, ``tier_label``
- ``mean_emissions``, ``trend_pct``, ``credibility_avg``,
  ``declared_target_period``, ``assurance_ratio``
- ``penalties`` (comma-joined), ``data_gaps`` (comma-joined),
  ``partial_data`` (bool)
- ``profile``, ``profile_version``
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from climate_ranker.pipeline.rank import RankingResult

LEADERBOARD_COLUMNS: tuple[str, ...] = (
    "rank",
    "entity_id",
    "sector",
    "emissions_score",
    "trend_score",
    "credibility_score",
    "target_score",
    "overall",
    "tier",
    "tier_label",
    "mean_emissions",
    "trend_pct",
    "credibility_avg",
    "declared_target_period",
    "assurance_ratio",
    "penalties",
    "data_gaps",
    "partial_data",
    "profile",
    "profile_version",
)


def leaderboard_rows(result: "RankingResult") -> list[dict[str, Any]]:
    """Flatten ``result.entries`` into presentation rows, best first."""
    rows: list[dict[str, Any]] = []
    for entry in result.entries:
        score = entry.score
        comps = score.components.rounded()
        raw = entry.raw
        rows.append(
            {
                "rank":                   entry.rank,
                "entity_id":              entry.entity_id,
                "sector":                 entry.sector,
                "emissions_score":        comps.emissions,
                "trend_score":            comps.trend,
                "credibility_score":      comps.credibility,
                "target_score":           comps.target,
                "overall":                score.display_overall,
                "tier":                   score.tier.value,
                "tier_label":             score.tier.label,
                "mean_emissions":         raw.mean_emissions,
                "trend_pct":              round(raw.trend_pct, 2),
                "credibility_avg":        round(raw.credibility_avg, 2),
                "declared_target_period": raw.declared_target_period,
                "assurance_ratio":        round(raw.assurance_ratio, 2),
                "penalties":              ", ".join(score.penalties_applied),
                "data_gaps":              ", ".join(g.value for g in score.data_gaps),
                "partial_data":           bool(score.data_gaps),
                "profile":                result.profile_name,
                "profile_version":        result.profile_version,
            }
        )
    return rows
