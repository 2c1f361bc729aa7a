"""Shared test fixtures for the TransitionPath API test suite."""

from collections.abc import AsyncGenerator
from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from transitionpath.main import app
from transitionpath.models.enums import Sector
from transitionpath.modules.assessment.schemas import ProjectInput

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ── Sample data ───────────────────────────────────────────────────────────────

SOLAR_DESCRIPTION = (
    "Construction of a 40 MW solar photovoltaic plant with battery storage in "
    "Turkana County, supplying renewable electricity to the national grid under "
    "a 20-year PPA."
)
SOLAR_STRATEGY = (
    "Board-approved transition plan aligned with SBTi criteria and the Paris "
    "Agreement 1.5C pathway, with interim milestones in 2027 and 2029."
)


def make_project(**overrides) -> ProjectInput:
    """Kenyan solar project that clears every LMA criterion except Scope 3.

    Scores 95/100 with no red flags. Override any field to build variants.
    """
    fields = dict(
        project_name="Turkana Solar Expansion",
        country="kenya",
        sector=Sector.ENERGY,
        project_type="Solar PV",
        description=SOLAR_DESCRIPTION,
        transition_strategy=SOLAR_STRATEGY,
        total_cost=10_000_000,
        debt_amount=7_000_000,
        equity_amount=3_000_000,
        total_baseline_emissions=1000,
        total_target_emissions=550,
        target_year=2029,
        has_published_plan=True,
        third_party_verification=True,
    )
    fields.update(overrides)
    return ProjectInput(**fields)


def make_bare_project(**overrides) -> ProjectInput:
    """Only the identifying fields; everything else left at its default."""
    fields = dict(project_name="Bare Project", country="kenya", sector=Sector.MINING)
    fields.update(overrides)
    return ProjectInput(**fields)


@pytest.fixture
def solar_project() -> ProjectInput:
    return make_project()


@pytest.fixture
def bare_project() -> ProjectInput:
    return make_bare_project()


@pytest.fixture
def solar_payload() -> dict:
    """Wire-format (camelCase) body for the Kenyan solar project."""
    return {
        "projectName": "Turkana Solar Expansion",
        "country": "Kenya",
        "sector": "energy",
        "projectType": "Solar PV",
        "description": SOLAR_DESCRIPTION,
        "transitionStrategy": SOLAR_STRATEGY,
        "totalCost": 10_000_000,
        "debtAmount": 7_000_000,
        "equityAmount": 3_000_000,
        "currentEmissions": {"scope1": 800, "scope2": 200},
        "targetEmissions": {"scope1": 400, "scope2": 150},
        "totalBaselineEmissions": 1000,
        "totalTargetEmissions": 550,
        "targetYear": 2029,
        "hasPublishedPlan": True,
        "thirdPartyVerification": True,
    }
