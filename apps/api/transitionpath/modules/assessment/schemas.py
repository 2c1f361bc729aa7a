"""Assessment module schemas: project input, scoring results and the final record."""

from datetime import datetime

from pydantic import Field, field_validator

from transitionpath.models.enums import (
    EligibilityStatus,
    FeedbackStatus,
    LegalSystem,
    RedFlagCategory,
    Region,
    RiskLevel,
    Sector,
)
from transitionpath.modules.dnsh.schemas import DNSHAssessment
from transitionpath.modules.kpi.schemas import KPIRecommendation, SPTRecommendation
from transitionpath.modules.matching.schemas import BlendedStructure, DFIMatchResponse
from transitionpath.schemas.base import CamelModel

# ── Project input ─────────────────────────────────────────────────────────────


class EmissionsData(CamelModel):
    """Annual emissions in tCO2e. Scope 3 is None when not reported."""

    scope1: float = Field(0, ge=0)
    scope2: float = Field(0, ge=0)
    scope3: float | None = Field(None, ge=0)

    @property
    def scope12(self) -> float:
        return self.scope1 + self.scope2


class ExtractedProjectFields(CamelModel):
    """Best-effort field guess produced by the document extractor.

    Every field is optional; yes/no answers arrive as free strings.
    """

    project_name: str = ""
    country: str = ""
    sector: str = ""
    project_type: str = ""
    description: str = ""
    climate_targets: str = ""
    financing_needed: float | None = None
    debt_amount: float | None = None
    equity_amount: float | None = None
    transition_plan: str = ""
    baseline_emissions: str = ""
    current_scope1: float | None = None
    current_scope2: float | None = None
    current_scope3: float | None = None
    target_scope1: float | None = None
    target_scope2: float | None = None
    target_scope3: float | None = None
    total_baseline_emissions: float | None = None
    total_target_emissions: float | None = None
    stated_reduction_percent: float | None = None
    target_year: int | None = None
    verification_status: str = ""
    has_published_plan: str = ""


def normalize_country(value: str) -> str:
    """``"South Africa"`` / ``"south-africa"`` -> ``"south_africa"``."""
    return "_".join(value.strip().lower().replace("-", " ").split())


def _parse_sector(value: str) -> Sector:
    slug = normalize_country(value)
    try:
        return Sector(slug)
    except ValueError:
        return Sector.OTHER


class ProjectInput(CamelModel):
    """The unit of assessment. Validated once at the boundary, immutable after."""

    project_name: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    sector: Sector
    project_type: str = ""
    description: str = ""
    transition_strategy: str = ""
    raw_document_text: str = ""

    total_cost: float = Field(0, ge=0)
    debt_amount: float = Field(0, ge=0)
    equity_amount: float = Field(0, ge=0)

    current_emissions: EmissionsData = Field(default_factory=EmissionsData)
    target_emissions: EmissionsData = Field(default_factory=EmissionsData)
    total_baseline_emissions: float | None = Field(None, ge=0)
    total_target_emissions: float | None = Field(None, ge=0)
    stated_reduction_percent: float | None = None
    target_year: int | None = None

    has_published_plan: bool = False
    third_party_verification: bool = False

    @field_validator("project_name")
    @classmethod
    def _project_name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("projectName must not be blank")
        return v

    @field_validator("country")
    @classmethod
    def _normalize_country(cls, v: str) -> str:
        v = normalize_country(v)
        if not v:
            raise ValueError("country must not be blank")
        return v

    @classmethod
    def from_extraction(cls, fields: ExtractedProjectFields, raw_text: str = "") -> "ProjectInput":
        """Build an input from extractor output. Raises ValueError if country is missing."""
        if not fields.country.strip():
            raise ValueError("country could not be extracted from the document")

        plan_answer = fields.has_published_plan.strip().lower()
        if plan_answer in ("yes", "no"):
            has_plan = plan_answer == "yes"
        else:
            has_plan = bool(fields.transition_plan.strip())

        return cls(
            project_name=fields.project_name.strip() or "Unnamed Project",
            country=fields.country,
            sector=_parse_sector(fields.sector) if fields.sector else Sector.OTHER,
            project_type=fields.project_type,
            description=fields.description,
            transition_strategy=fields.transition_plan,
            raw_document_text=raw_text,
            total_cost=fields.financing_needed or 0,
            debt_amount=fields.debt_amount or 0,
            equity_amount=fields.equity_amount or 0,
            current_emissions=EmissionsData(
                scope1=fields.current_scope1 or 0,
                scope2=fields.current_scope2 or 0,
                scope3=fields.current_scope3 or None,
            ),
            target_emissions=EmissionsData(
                scope1=fields.target_scope1 or 0,
                scope2=fields.target_scope2 or 0,
                scope3=fields.target_scope3 or None,
            ),
            total_baseline_emissions=fields.total_baseline_emissions or None,
            total_target_emissions=fields.total_target_emissions or None,
            stated_reduction_percent=fields.stated_reduction_percent or None,
            target_year=fields.target_year or None,
            has_published_plan=has_plan,
            third_party_verification=bool(fields.verification_status.strip()),
        )


# ── LMA score ─────────────────────────────────────────────────────────────────


class FeedbackItem(CamelModel):
    status: FeedbackStatus
    description: str
    action: str | None = None


class ComponentScore(CamelModel):
    id: str
    name: str
    score: int = Field(..., ge=0, le=20)
    max_score: int = 20
    feedback: list[FeedbackItem]


class LMAScoreResult(CamelModel):
    overall: int = Field(..., ge=0, le=100)
    components: list[ComponentScore]


# ── Greenwashing ──────────────────────────────────────────────────────────────


class RedFlag(CamelModel):
    id: str
    category: RedFlagCategory
    severity: RiskLevel
    description: str
    recommendation: str


class GreenwashingAssessment(CamelModel):
    overall_risk: RiskLevel
    risk_score: int = Field(..., ge=0, le=100)
    red_flags: list[RedFlag]
    positive_indicators: list[str]
    recommendations: list[str]


# ── Eligibility ───────────────────────────────────────────────────────────────


class EligibilityVerdict(CamelModel):
    status: EligibilityStatus
    reasons: list[str]
    overall_score: int = Field(..., ge=0, le=100)
    lma_base_score: int = Field(..., ge=0, le=100)
    greenwashing_penalty: int = Field(..., ge=0, le=50)


# ── Full assessment ───────────────────────────────────────────────────────────


class CountryInfo(CamelModel):
    region: Region
    legal_system: LegalSystem
    currency: str
    sovereign_rating: str
    political_risk: RiskLevel
    ndc_target: str
    renewable_targets: str


class AssessmentResult(CamelModel):
    # Echoed project fields
    project_name: str
    country: str
    country_name: str
    sector: Sector
    project_type: str
    description: str
    transition_strategy: str
    target_year: int | None
    total_cost: float
    debt_amount: float
    equity_amount: float
    current_emissions: EmissionsData
    target_emissions: EmissionsData
    total_baseline_emissions: float | None
    total_target_emissions: float | None
    stated_reduction_percent: float | None
    has_published_plan: bool
    third_party_verification: bool

    # Verdict
    eligibility_status: EligibilityStatus
    ineligibility_reasons: list[str]
    overall_score: int
    lma_base_score: int
    greenwashing_penalty: int
    lma_components: list[ComponentScore]
    greenwashing_risk: GreenwashingAssessment

    # Presentation pass-through
    dfi_matches: list[DFIMatchResponse]
    blended_structure: BlendedStructure
    kpi_recommendations: list[KPIRecommendation]
    spt_recommendations: list[SPTRecommendation]
    frameworks_referenced: list[str]
    kpi_ai_generated: bool
    country_info: CountryInfo | None
    dnsh_assessment: DNSHAssessment
    next_steps: list[str]
    assessment_date: datetime
