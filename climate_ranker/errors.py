"""
Error taxonomy for the climate ranking engine.

Fatal errors derive from ``ClimateRankerError`` and abort a ranking run:

  - ``ConfigurationError``   — scoring profile is internally inconsistent.
  - ``EmptyCohortError``     — nothing to normalise against.
  - ``DuplicateRecordError`` — two records share ``(entity_id, period)``.

``InsufficientDataWarning`` is non-fatal.  It is never raised by the
pipeline; instances are collected into ``RankingResult.warnings`` so that
presentation layers can flag entities scored on fallback values.

Zero normalisation ranges and zero trend baselines are not errors; they
resolve to defined fallback values inside the scoring modules.
"""

from __future__ import annotations

from typing import Iterable

from climate_ranker.taxonomy.scoring_taxonomy import DataGap


class ClimateRankerError(Exception):
    """Base class for all fatal ranking errors."""


class ConfigurationError(ClimateRankerError):
    """Scoring profile rejected before any computation.

    Raised when weights do not sum to 1, thresholds are not strictly
    descending, or scale/step tables are malformed.  Profiles are never
    silently renormalised.
    """


class EmptyCohortError(ClimateRankerError):
    """Zero entities were supplied for normalisation or ranking."""


class DuplicateRecordError(ClimateRankerError, ValueError):
    """More than one record for the same ``(entity_id, period)``."""

    def __init__(self, entity_id: str, period: int) -> None:
        self.entity_id = entity_id
        self.period = period
        super().__init__(
            f"Duplicate disclosure record for entity '{entity_id}' period {period}."
        )


class InsufficientDataWarning(UserWarning):
    """An entity was scored with one or more fallback inputs.

    Attributes:
        entity_id: Entity the warning refers to.
        gaps:      Data categories that fell back to defaults.
    """

    def __init__(self, entity_id: str, gaps: Iterable[DataGap]) -> None:
        self.entity_id = entity_id
        self.gaps: tuple[DataGap, ...] = tuple(gaps)
        super().__init__(
            f"Entity '{entity_id}' scored with fallback values for: "
            + ", ".join(g.value for g in self.gaps)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InsufficientDataWarning):
            return NotImplemented
        return self.entity_id == other.entity_id and self.gaps == other.gaps

    def __hash__(self) -> int:
        return hash((self.entity_id, self.gaps))
