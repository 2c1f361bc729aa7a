"""Matching module API schemas."""

from transitionpath.models.enums import FinancingRole, Sector
from transitionpath.schemas.base import CamelModel

# ── DFI catalogue ─────────────────────────────────────────────────────────────


class DFI(CamelModel):
    id: str
    name: str
    full_name: str
    country: str  # headquarters / mandate origin
    min_size: float | None = None
    max_size: float | None = None
    max_participation: float | None = None  # % of total project cost
    loan_tenor: str | None = None
    eligible_countries: tuple[str, ...] | None = None  # None = all countries
    eligible_sectors: tuple[Sector, ...] | None = None  # None = all sectors
    key_requirements: tuple[str, ...] = ()
    climate_target: str | None = None
    special_programs: tuple[str, ...] = ()
    notes: str | None = None
    source_url: str | None = None


# ── Match results ─────────────────────────────────────────────────────────────


class EstimatedSize(CamelModel):
    min: int
    max: int


class DFIMatchResponse(CamelModel):
    id: str
    name: str
    full_name: str
    match_score: int
    match_reasons: list[str]
    concerns: list[str]
    recommended_role: FinancingRole
    estimated_size: EstimatedSize | None = None
    climate_target: str | None = None
    special_programs: list[str]


# ── Blended structure ─────────────────────────────────────────────────────────


class FinancingTranche(CamelModel):
    percentage: int
    sources: list[str]
    estimated_rate: str | None = None


class Guarantee(CamelModel):
    type: str
    provider: str
    coverage: str


class BlendedStructure(CamelModel):
    senior_debt: FinancingTranche
    subordinated_debt: FinancingTranche
    equity: FinancingTranche
    guarantees: list[Guarantee] = []


class DFIMatchingResponse(CamelModel):
    matches: list[DFIMatchResponse]
    blended_structure: BlendedStructure
