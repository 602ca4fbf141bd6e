"""
Per-period emissions series and change statistics.

Value rule (``EmissionsMetric.TOTAL``)
--------------------------------------
    total = (scope1 or 0) + (scope2 or 0)   if either scope is reported
    total = None                            if both scopes are absent

A ``None`` period is *skipped*, never treated as zero, by every function in
this module.

Change statistics
-----------------
year_over_year_changes  % change between consecutive periods with data.
                        Pairs whose earlier value is 0 are skipped.
trend_change            first YoY change minus last YoY change.  Positive
                        means reductions are accelerating (e.g. -10% then
                        -20% -> +10).
relative_change         % change between two named periods.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from climate_ranker.models.disclosure import DisclosureRecord
from climate_ranker.taxonomy.scoring_taxonomy import EmissionsMetric
from climate_ranker.utils.numeric import pct_change


@dataclass(frozen=True)
class PeriodChange:
    """Change in emissions from ``previous_period`` to ``period``.

    Attributes:
        entity_id:       Entity identifier.
        previous_period: Earlier period with data.
        period:          Later period with data.
        pct_change:      Unrounded percentage change.
    """

    entity_id:       str
    previous_period: int
    period:          int
    pct_change:      float


def emission_value(
    record: DisclosureRecord,
    metric: EmissionsMetric = EmissionsMetric.TOTAL,
) -> Optional[float]:
    """Return the record's emissions for ``metric``, or ``None`` if absent."""
    if metric == EmissionsMetric.SCOPE1:
        return record.scope1
    if metric == EmissionsMetric.SCOPE2:
        return record.scope2
    if record.scope1 is None and record.scope2 is None:
        return None
    return (record.scope1 or 0.0) + (record.scope2 or 0.0)


def emission_series(
    records: Iterable[DisclosureRecord],
    metric: EmissionsMetric = EmissionsMetric.TOTAL,
) -> dict[int, float]:
    """Map period -> emissions value, ascending by period, skipping gaps."""
    series: dict[int, float] = {}
    for record in sorted(records, key=lambda r: r.period):
        value = emission_value(record, metric)
        if value is not None:
            series[record.period] = value
    return series


def year_over_year_changes(
    records: Iterable[DisclosureRecord],
    metric: EmissionsMetric = EmissionsMetric.TOTAL,
) -> list[PeriodChange]:
    """Percentage change between each consecutive pair of periods with data.

    All ``records`` must belong to one entity.
    """
    records = list(records)
    if not records:
        return []
    entity_id = records[0].entity_id
    series = emission_series(records, metric)
    periods = list(series)

    changes: list[PeriodChange] = []
    for prev, curr in zip(periods, periods[1:]):
        pct = pct_change(series[prev], series[curr])
        if pct is None:
            continue
        changes.append(
            PeriodChange(
                entity_id=entity_id,
                previous_period=prev,
                period=curr,
                pct_change=pct,
            )
        )
    return changes


def trend_change(changes: list[PeriodChange]) -> Optional[float]:
    """First YoY change minus last YoY change, or ``None`` without changes."""
    if not changes:
        return None
    ordered = sorted(changes, key=lambda c: c.period)
    return ordered[0].pct_change - ordered[-1].pct_change


def relative_change(
    records: Iterable[DisclosureRecord],
    from_period: int,
    to_period: int,
    metric: EmissionsMetric = EmissionsMetric.TOTAL,
) -> Optional[float]:
    """Percentage change between two specific periods.

    Returns ``None`` if either period is missing, has no value for
    ``metric``, or the ``from_period`` value is 0.
    """
    series = emission_series(records, metric)
    if from_period not in series or to_period not in series:
        return None
    return pct_change(series[from_period], series[to_period])
