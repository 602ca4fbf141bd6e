"""
Shared pytest fixtures for the climate ranker test suite.

Provides:
  - ``sample_records``: a small three-sector cohort of multi-year
    disclosures with one entity missing credibility and targets.
  - ``sample_cohort``: the matching ``CohortDefinition``.
  - ``credibility_profile`` / ``net_zero_profile``: the built-in profiles.
"""

from __future__ import annotations

import pytest

from climate_ranker.models.cohort import CohortDefinition
from climate_ranker.models.disclosure import (
    CredibilityAssessment,
    DisclosureRecord,
    TargetDeclaration,
)
from climate_ranker.scoring.profile import BUILTIN_PROFILES, ScoringProfile


def _cred(score: float) -> CredibilityAssessment:
    return CredibilityAssessment(score=score, alignment=score, realism=score)


@pytest.fixture
def sample_records() -> list[DisclosureRecord]:
    """Disclosures for four entities over 2021–2023.

    Totals (scope1 + scope2):
      GridCo   : 1000 -> 900 -> 800   (-20%), credibility 3.0, net zero 2040
      PetroCo  : 2000 -> 2100 -> 2200 (+10%), credibility 1.0, net zero 2050
      ChipCo   : 500  -> 450          (-10%), credibility 2.0, net-zero 2045/2060
      SodaCo   : 300 (2021 only), no credibility, no targets
    """
    return [
        DisclosureRecord(
            entity_id="GridCo", period=2021, scope1=600.0, scope2=400.0,
            credibility=_cred(3.0), assured=True,
            targets=(TargetDeclaration(description="Net Zero by 2040", target_period=2040),),
        ),
        DisclosureRecord(
            entity_id="GridCo", period=2022, scope1=500.0, scope2=400.0,
            credibility=_cred(3.0), assured=True,
        ),
        DisclosureRecord(
            entity_id="GridCo", period=2023, scope1=450.0, scope2=350.0,
            credibility=_cred(3.0), assured=True,
        ),
        DisclosureRecord(
            entity_id="PetroCo", period=2021, scope1=1500.0, scope2=500.0,
            credibility=_cred(1.0),
            targets=(TargetDeclaration(description="net zero operations", target_period=2050),),
        ),
        DisclosureRecord(
            entity_id="PetroCo", period=2022, scope1=1600.0, scope2=500.0,
            credibility=_cred(1.0),
        ),
        DisclosureRecord(
            entity_id="PetroCo", period=2023, scope1=1700.0, scope2=500.0,
            credibility=_cred(1.0),
        ),
        DisclosureRecord(
            entity_id="ChipCo", period=2022, scope1=300.0, scope2=200.0,
            credibility=_cred(2.0), assured=True,
            targets=(
                TargetDeclaration(description="Net-Zero scope 1+2", target_period=2045),
                TargetDeclaration(description="NETZERO value chain", target_period=2060),
            ),
        ),
        DisclosureRecord(
            entity_id="ChipCo", period=2023, scope1=250.0, scope2=200.0,
            credibility=_cred(2.0),
        ),
        DisclosureRecord(entity_id="SodaCo", period=2021, scope1=300.0),
    ]


@pytest.fixture
def sample_cohort() -> CohortDefinition:
    return CohortDefinition(
        name="test_cohort",
        sectors={
            "Energy & Utilities": ("GridCo", "PetroCo"),
            "Technology": ("ChipCo",),
            "Consumer Goods": ("SodaCo",),
        },
    )


@pytest.fixture
def credibility_profile() -> ScoringProfile:
    return BUILTIN_PROFILES["credibility_v1"]


@pytest.fixture
def net_zero_profile() -> ScoringProfile:
    return BUILTIN_PROFILES["net_zero_v1"]
