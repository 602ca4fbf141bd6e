"""
Temporal aggregation: multi-period disclosures -> ``EntityRawMetrics``.

Metric rules
------------
mean_emissions
    Mean of per-period emissions values (see ``scoring.emissions``) over the
    periods that report any scope.  No such period -> 0 with a
    ``DataGap.NO_EMISSIONS`` flag.

trend_pct
    (last - first) / first * 100 over the earliest and latest periods (by
    period value) that have an emissions value.  0 when fewer than two such
    periods exist or the earliest value is 0.

credibility_avg
    Mean of the profile's credibility sub-score over periods with an
    assessment.  No assessment -> the scale minimum, flagged
    ``DataGap.NO_CREDIBILITY``.

declared_target_period
    All target descriptions across all periods are matched against the
    profile's net-zero pattern (case-insensitive).  The *maximum* dated match
    wins, i.e. the latest declared net-zero year.  No dated match -> ``None``,
    flagged ``DataGap.NO_TARGET``.

Cohort sequence
---------------
``aggregate_cohort`` returns metrics in cohort sequence order: the
``CohortDefinition`` member order when one is given, otherwise ``entity_id``
ascending.  Record order in the input never affects the output.
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from typing import Iterable, Optional

from climate_ranker.errors import DuplicateRecordError
from climate_ranker.models.cohort import CohortDefinition
from climate_ranker.models.disclosure import DisclosureRecord
from climate_ranker.models.scores import EntityRawMetrics
from climate_ranker.scoring.emissions import emission_series
from climate_ranker.scoring.profile import ScoringProfile
from climate_ranker.taxonomy.scoring_taxonomy import DataGap
from climate_ranker.utils.numeric import mean, pct_change

logger = logging.getLogger(__name__)


def group_by_entity(
    records: Iterable[DisclosureRecord],
) -> dict[str, list[DisclosureRecord]]:
    """Group records by entity, each list sorted ascending by period.

    Raises:
        DuplicateRecordError: If ``(entity_id, period)`` repeats.
    """
    grouped: dict[str, dict[int, DisclosureRecord]] = defaultdict(dict)
    for record in records:
        by_period = grouped[record.entity_id]
        if record.period in by_period:
            raise DuplicateRecordError(record.entity_id, record.period)
        by_period[record.period] = record
    return {
        entity_id: [by_period[p] for p in sorted(by_period)]
        for entity_id, by_period in grouped.items()
    }


def declared_net_zero_period(
    records: Iterable[DisclosureRecord],
    pattern: str,
) -> Optional[int]:
    """Latest dated net-zero target across ``records``, or ``None``."""
    regex = re.compile(pattern, re.IGNORECASE)
    periods = [
        target.target_period
        for record in records
        for target in record.targets
        if target.target_period is not None and regex.search(target.description)
    ]
    return max(periods) if periods else None


def aggregate_entity(
    entity_id: str,
    records: list[DisclosureRecord],
    profile: ScoringProfile,
) -> EntityRawMetrics:
    """Reduce one entity's records to raw metrics.

    Args:
        entity_id: Entity the records belong to.
        records:   That entity's records (any order; may be empty).
        profile:   Supplies the emissions metric, credibility field and
                   scale, and net-zero pattern.

    Returns:
        ``EntityRawMetrics`` with ``data_gaps`` listing every fallback used.
    """
    records = sorted(records, key=lambda r: r.period)
    gaps: list[DataGap] = []

    # ── Emissions ─────────────────────────────────────────────────────────────
    series = emission_series(records, profile.emissions_metric)
    values = list(series.values())
    mean_emissions = mean(values)
    if mean_emissions is None:
        mean_emissions = 0.0
        gaps.append(DataGap.NO_EMISSIONS)

    trend_pct = 0.0
    if len(values) >= 2:
        trend_pct = pct_change(values[0], values[-1]) or 0.0

    # ── Credibility ───────────────────────────────────────────────────────────
    field = profile.credibility_field.value
    credibility_avg = mean(
        getattr(r.credibility, field) for r in records if r.credibility is not None
    )
    if credibility_avg is None:
        credibility_avg = profile.credibility_scale_min
        gaps.append(DataGap.NO_CREDIBILITY)

    # ── Net-zero target ───────────────────────────────────────────────────────
    target_period = declared_net_zero_period(records, profile.net_zero_pattern)
    if target_period is None:
        gaps.append(DataGap.NO_TARGET)

    assured = sum(1 for r in records if r.assured)
    assurance_ratio = assured / len(records) if records else 0.0

    return EntityRawMetrics(
        entity_id=entity_id,
        mean_emissions=mean_emissions,
        trend_pct=trend_pct,
        credibility_avg=credibility_avg,
        declared_target_period=target_period,
        periods=tuple(r.period for r in records),
        emission_periods=len(values),
        assurance_ratio=assurance_ratio,
        data_gaps=tuple(gaps),
    )


def aggregate_cohort(
    records: Iterable[DisclosureRecord],
    profile: ScoringProfile,
    cohort: Optional[CohortDefinition] = None,
    periods: Optional[Iterable[int]] = None,
) -> list[EntityRawMetrics]:
    """Aggregate every entity in the cohort.

    Args:
        records: Full record collection (read-only).
        profile: Scoring profile (see ``aggregate_entity``).
        cohort:  Optional membership and ordering.  Records of non-members
                 are ignored; members without records are still returned,
                 flagged with every ``DataGap``.
        periods: Optional period filter; only these periods are aggregated.

    Returns:
        One ``EntityRawMetrics`` per entity, in cohort sequence order.

    Raises:
        DuplicateRecordError: If ``(entity_id, period)`` repeats among the
                              aggregated records.  Non-members and
                              filtered-out periods are never checked.
    """
    if periods is not None:
        allowed = frozenset(periods)
        records = [r for r in records if r.period in allowed]

    if cohort is None:
        grouped = group_by_entity(records)
        members = sorted(grouped)
    else:
        members = list(cohort.members)
        member_set = frozenset(members)
        records = list(records)
        ignored = sorted({r.entity_id for r in records} - member_set)
        grouped = group_by_entity(r for r in records if r.entity_id in member_set)
        if ignored:
            logger.debug(
                "Cohort '%s' ignores %d non-member entities: %s",
                cohort.name, len(ignored), ", ".join(ignored),
            )

    metrics = [aggregate_entity(e, grouped.get(e, []), profile) for e in members]
    logger.debug(
        "Aggregated %d entities from %d records (profile=%s)",
        len(metrics), sum(len(v) for v in grouped.values()), profile.name,
    )
    return metrics
