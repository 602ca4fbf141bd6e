"""
End-to-end ranking pipeline.

    rank_cohort(records, profile, cohort=None, periods=None) -> RankingResult

Stages (data flows strictly downstream; no stage mutates another's output):

  1. validate_profile()    reject inconsistent configuration up front
  2. aggregate_cohort()    records -> EntityRawMetrics (cohort sequence order)
  3. normalize_cohort()    raw metrics -> NormalizedScoreSet on [0, 10]
  4. score_cohort()        weighted sum + penalties + tier
  5. rank_scores()         stable descending sort -> RankedEntity

The function is pure: identical ``(records, profile, cohort, periods)``
always yield an identical ``RankingResult``, including tie order, and
concurrent calls with different profiles need no coordination.

Usage::

    from climate_ranker.config import load_config
    from climate_ranker.pipeline.rank import rank_cohort

    config = load_config()
    result = rank_cohort(records, config.profile("net_zero_v1"))
    for entry in result.entries:
        print(entry.rank, entry.entity_id, entry.score.display_overall)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from climate_ranker.config import AppConfig
from climate_ranker.errors import EmptyCohortError, InsufficientDataWarning
from climate_ranker.models.cohort import CohortDefinition
from climate_ranker.models.disclosure import DisclosureRecord
from climate_ranker.models.scores import RankedEntity
from climate_ranker.scoring.aggregator import aggregate_cohort
from climate_ranker.scoring.composite import score_cohort
from climate_ranker.scoring.normalizer import normalize_cohort
from climate_ranker.scoring.profile import ScoringProfile, validate_profile
from climate_ranker.scoring.ranker import rank_scores

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankingResult:
    """Output of one ranking run.

    Attributes:
        profile_name:    Name of the profile used.
        profile_version: Version of the profile used.
        entries:         Ranked entities, best first.
        warnings:        One ``InsufficientDataWarning`` per entity scored
                         with fallback values, in cohort sequence order.
    """

    profile_name:    str
    profile_version: str
    entries:         tuple[RankedEntity, ...]
    warnings:        tuple[InsufficientDataWarning, ...] = ()

    def entry_for(self, entity_id: str) -> Optional[RankedEntity]:
        for entry in self.entries:
            if entry.entity_id == entity_id:
                return entry
        return None


def rank_cohort(
    records: Iterable[DisclosureRecord],
    profile: ScoringProfile,
    cohort:  Optional[CohortDefinition] = None,
    periods: Optional[Iterable[int]] = None,
) -> RankingResult:
    """Score, classify, and rank every entity in the cohort.

    Args:
        records: Disclosure records (treated as read-only).
        profile: Scoring profile; validated before any work.
        cohort:  Optional membership, sector labels, and tie-break order.
        periods: Optional period filter applied before aggregation.

    Returns:
        ``RankingResult`` with every cohort entity, including those with
        partial data.

    Raises:
        ConfigurationError:   If ``profile`` breaks the scoring contract.
        EmptyCohortError:     If no entity remains to rank.
        DuplicateRecordError: If ``(entity_id, period)`` repeats.
    """
    validate_profile(profile)

    metrics = aggregate_cohort(records, profile, cohort=cohort, periods=periods)
    if not metrics:
        raise EmptyCohortError("No entities to rank.")

    normalized = normalize_cohort(metrics, profile)
    scores = score_cohort(normalized, metrics, profile)
    entries = rank_scores(scores, metrics, cohort)

    warnings = tuple(
        InsufficientDataWarning(m.entity_id, m.data_gaps)
        for m in metrics
        if m.data_gaps
    )
    for warning in warnings:
        logger.warning("%s", warning)

    logger.info(
        "Ranked %d entities | profile=%s v%s | warnings=%d",
        len(entries), profile.name, profile.version, len(warnings),
    )
    return RankingResult(
        profile_name=profile.name,
        profile_version=profile.version,
        entries=tuple(entries),
        warnings=warnings,
    )


def rank_with_config(
    records:      Iterable[DisclosureRecord],
    config:       AppConfig,
    profile_name: Optional[str] = None,
    cohort:       Optional[CohortDefinition] = None,
    periods:      Optional[Iterable[int]] = None,
) -> RankingResult:
    """``rank_cohort`` with the profile looked up from ``config``.

    Raises:
        ConfigurationError: If ``profile_name`` is unknown.
    """
    return rank_cohort(
        records, config.profile(profile_name), cohort=cohort, periods=periods,
    )
