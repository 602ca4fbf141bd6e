"""
Ranker: orders composite scores into a leaderboard.

Ordering
--------
Primary key: unrounded ``overall`` descending.
Tie-break:   cohort sequence order, via a stable sort.  The cohort sequence
             is the ``CohortDefinition`` member order when one is supplied,
             otherwise ``entity_id`` ascending (see ``aggregate_cohort``), so
             equal scores always come out in the same order for the same
             inputs.

Ranks are 1-based list positions; tied entities do not share a rank.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Optional, Sequence

from climate_ranker.models.cohort import CohortDefinition
from climate_ranker.models.scores import CompositeScore, EntityRawMetrics, RankedEntity


def rank_scores(
    scores:  Sequence[CompositeScore],
    metrics: Sequence[EntityRawMetrics],
    cohort:  Optional[CohortDefinition] = None,
) -> list[RankedEntity]:
    """Sort ``scores`` (given in cohort sequence order) into ranked entries.

    Args:
        scores:  Composite scores in cohort sequence order.
        metrics: Raw metrics aligned with ``scores`` by position.
        cohort:  Optional cohort definition, used for sector labels.

    Returns:
        ``RankedEntity`` list, best first.
    """
    raw_by_entity = {m.entity_id: m for m in metrics}
    ordered = sorted(scores, key=lambda s: -s.overall)
    return [
        RankedEntity(
            rank=position,
            sector=cohort.sector_of(score.entity_id) if cohort else None,
            score=score,
            raw=raw_by_entity[score.entity_id],
        )
        for position, score in enumerate(ordered, start=1)
    ]


def top_n_per_sector(
    ranked: Sequence[RankedEntity],
    n:      int = 3,
) -> dict[str, list[RankedEntity]]:
    """Return the best ``n`` entries per sector, preserving leaderboard order.

    Entries without a sector are grouped under ``"unassigned"``.
    """
    by_sector: dict[str, list[RankedEntity]] = defaultdict(list)
    for entry in ranked:
        by_sector[entry.sector or "unassigned"].append(entry)
    return {sector: entries[:n] for sector, entries in by_sector.items()}
