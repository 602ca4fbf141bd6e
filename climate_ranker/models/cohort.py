"""
Cohort definition: which entities are ranked together, and in what order.

A ``CohortDefinition`` replaces ambient sector/company lists.  Its member
order is the *cohort sequence* used as the ranking tie-break, so two entities
with identical composite scores are always listed in the order the cohort
declares them.

Example::

    cohort = CohortDefinition(
        name="dashboard_2024",
        sectors={
            "Energy & Utilities": ["BP", "ENGIE", "SSE", "Shell"],
            "Technology": ["Amazon", "Intel"],
        },
    )
    cohort.members          # ("BP", "ENGIE", "SSE", "Shell", "Amazon", "Intel")
    cohort.sector_of("SSE") # "Energy & Utilities"
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


class CohortDefinition(BaseModel):
    """Named, ordered grouping of entities into sectors.

    Attributes:
        name:    Cohort label, carried into logs.
        sectors: Sector name -> ordered entity ids.  Dict insertion order is
                 the sector order.
    """

    model_config = ConfigDict(frozen=True)

    name: str = "default"
    sectors: dict[str, tuple[str, ...]]

    @model_validator(mode="after")
    def validate_unique_members(self) -> "CohortDefinition":
        seen: set[str] = set()
        for sector, entities in self.sectors.items():
            for entity_id in entities:
                if entity_id in seen:
                    raise ValueError(
                        f"Entity '{entity_id}' listed more than once "
                        f"(again under sector '{sector}')."
                    )
                seen.add(entity_id)
        if not seen:
            raise ValueError("CohortDefinition must list at least one entity.")
        return self

    @property
    def members(self) -> tuple[str, ...]:
        """All entity ids in cohort sequence order."""
        return tuple(e for entities in self.sectors.values() for e in entities)

    def sector_of(self, entity_id: str) -> Optional[str]:
        """Return the sector an entity belongs to, or ``None``."""
        for sector, entities in self.sectors.items():
            if entity_id in entities:
                return sector
        return None

    def restrict(self, sectors: list[str]) -> "CohortDefinition":
        """Return a copy containing only the named sectors (order preserved).

        Raises:
            ValueError: If a name is unknown or nothing would remain.
        """
        unknown = set(sectors) - set(self.sectors)
        if unknown:
            raise ValueError(f"Unknown sectors: {sorted(unknown)}.")
        kept = {s: e for s, e in self.sectors.items() if s in sectors}
        return CohortDefinition(name=self.name, sectors=kept)
