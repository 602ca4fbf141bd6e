"""
Disclosure input models.

``DisclosureRecord`` is one entity's climate disclosure for one reporting
period, as delivered by the (external) ingestion layer after company-name
aliasing and unit harmonisation.  The engine treats the collection as
read-only; all models are frozen.

Emissions quantities are optional per scope.  A period where both scopes are
absent contributes nothing to emissions statistics; it is *not* a zero.
"""

from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class CredibilityAssessment(BaseModel):
    """Third-party credibility assessment of a period's climate plan.

    Attributes:
        score:     Overall credibility score (default scale 1–3).
        alignment: Alignment of targets with a 1.5°C pathway.
        realism:   Realism of the stated action plan.
    """

    model_config = ConfigDict(frozen=True)

    score: float
    alignment: float
    realism: float

    @field_validator("score", "alignment", "realism")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"Credibility values must be finite, got {v}.")
        return v


class TargetDeclaration(BaseModel):
    """A stated climate target.

    Attributes:
        description:   Free-text target description, e.g. ``"Net Zero by 2050"``.
        target_period: Period the target should be met, or ``None`` if undated.
    """

    model_config = ConfigDict(frozen=True)

    description: str
    target_period: Optional[int] = None


class DisclosureRecord(BaseModel):
    """One entity, one reporting period.

    Attributes:
        entity_id:   Canonical entity (company) identifier.
        period:      Reporting period, typically a calendar year.
        scope1:      Direct emissions (tCO2e), or ``None`` if not reported.
        scope2:      Market-based indirect emissions, or ``None``.
        credibility: Credibility assessment, or ``None``.
        assured:     Whether the period's figures were externally assured.
        targets:     Targets stated in this period's disclosure.
    """

    model_config = ConfigDict(frozen=True)

    entity_id: str
    period: int
    scope1: Optional[float] = None
    scope2: Optional[float] = None
    credibility: Optional[CredibilityAssessment] = None
    assured: bool = False
    targets: tuple[TargetDeclaration, ...] = ()

    @field_validator("entity_id")
    @classmethod
    def validate_entity_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("entity_id must not be blank.")
        return v

    @field_validator("scope1", "scope2")
    @classmethod
    def validate_scope(cls, v: Optional[float]) -> Optional[float]:
        if v is None:
            return v
        if not math.isfinite(v):
            raise ValueError(f"Emissions must be finite, got {v}.")
        if v < 0:
            raise ValueError(f"Emissions must be non-negative, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_total(self) -> "DisclosureRecord":
        total = (self.scope1 or 0.0) + (self.scope2 or 0.0)
        if not math.isfinite(total):
            raise ValueError(
                f"scope1 + scope2 overflows for {self.entity_id} {self.period}."
            )
        return self
