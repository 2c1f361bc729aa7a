"""Tests for assessment orchestration and project-input construction."""

import httpx
import pytest
from pydantic import ValidationError

from tests.conftest import FIXED_NOW, make_bare_project, make_project
from transitionpath.models.enums import EligibilityStatus, FinancingRole, RiskLevel, Sector
from transitionpath.modules.assessment.schemas import ExtractedProjectFields, ProjectInput
from transitionpath.modules.assessment.service import AssessmentService, generate_next_steps
from transitionpath.modules.kpi.gateway import GatewayKPIProvider
from transitionpath.modules.kpi.library import SectorKPILibrary
from transitionpath.modules.matching.algorithm import DFIMatcher


def _service(**kwargs) -> AssessmentService:
    kwargs.setdefault("kpi_provider", SectorKPILibrary())
    return AssessmentService(clock=lambda: FIXED_NOW, **kwargs)


class _BrokenKPIProvider:
    async def generate(self, project):
        raise RuntimeError("model quota exceeded")


# ── ProjectInput ─────────────────────────────────────────────────────────────


class TestProjectInput:
    def test_country_normalised(self):
        project = make_project(country="South Africa")
        assert project.country == "south_africa"
        assert make_project(country=" Kenya ").country == "kenya"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            make_project(project_name="   ")

    def test_unknown_sector_rejected(self):
        with pytest.raises(ValidationError):
            make_project(sector="oil_and_gas")

    def test_negative_amounts_rejected(self):
        with pytest.raises(ValidationError):
            make_project(total_cost=-1)

    def test_immutable(self, solar_project):
        with pytest.raises(ValidationError):
            solar_project.target_year = 2040

    def test_accepts_camel_case(self, solar_payload):
        project = ProjectInput.model_validate(solar_payload)
        assert project.total_baseline_emissions == 1000
        assert project.current_emissions.scope12 == 1000
        assert project.country == "kenya"


class TestFromExtraction:
    def test_maps_extractor_fields(self):
        fields = ExtractedProjectFields(
            project_name="Rift Valley Geothermal",
            country="Kenya",
            sector="Energy",
            description="Geothermal wells and a 35 MW binary plant.",
            transition_plan="Phase-out of diesel peakers by 2028.",
            financing_needed=40_000_000,
            debt_amount=28_000_000,
            equity_amount=12_000_000,
            current_scope1=5000,
            current_scope3=0,
            total_baseline_emissions=0,
            stated_reduction_percent=0,
            target_year=2030,
            verification_status="SPO by Sustainalytics",
        )
        project = ProjectInput.from_extraction(fields, raw_text="full text")

        assert project.country == "kenya"
        assert project.sector == Sector.ENERGY
        assert project.transition_strategy == "Phase-out of diesel peakers by 2028."
        assert project.raw_document_text == "full text"
        assert project.has_published_plan is True
        assert project.third_party_verification is True
        assert project.current_emissions.scope3 is None
        assert project.total_baseline_emissions is None
        assert project.stated_reduction_percent is None

    def test_explicit_plan_answer_wins(self):
        fields = ExtractedProjectFields(country="ghana", transition_plan="Draft only", has_published_plan="No")
        assert ProjectInput.from_extraction(fields).has_published_plan is False

    def test_defaults(self):
        project = ProjectInput.from_extraction(ExtractedProjectFields(country="egypt", sector="fintech"))
        assert project.project_name == "Unnamed Project"
        assert project.sector == Sector.OTHER
        assert project.target_year is None
        assert project.third_party_verification is False

    def test_missing_country_raises(self):
        with pytest.raises(ValueError):
            ProjectInput.from_extraction(ExtractedProjectFields(project_name="No Country"))


# ── Next steps ───────────────────────────────────────────────────────────────


class TestNextSteps:
    def test_eligible(self):
        steps = generate_next_steps(EligibilityStatus.ELIGIBLE, RiskLevel.LOW, 3)
        assert steps == [
            "Project is well-positioned for transition loan financing",
            "Prepare detailed term sheet for DFI submissions",
            "3 DFIs identified - begin preliminary discussions",
            "Engage legal counsel to prepare LMA-compliant documentation",
            "Consider second-party opinion for sustainability credentials",
        ]

    def test_ineligible_high_risk_no_dfis(self):
        steps = generate_next_steps(EligibilityStatus.INELIGIBLE, RiskLevel.HIGH, 0)
        assert steps[0] == "Significant improvements needed - consider engaging transition advisor"
        assert steps[1] == "PRIORITY: Address greenwashing red flags before proceeding"
        assert not any("DFIs identified" in s for s in steps)

    def test_partial(self):
        steps = generate_next_steps(EligibilityStatus.PARTIAL, RiskLevel.MEDIUM, 1)
        assert steps[0] == "Address identified gaps before DFI submission"
        assert "1 DFIs identified - begin preliminary discussions" in steps


# ── Service ──────────────────────────────────────────────────────────────────


@pytest.mark.anyio
class TestAssessmentService:
    async def test_reference_project(self, solar_project):
        result = await _service().assess(solar_project)

        assert result.eligibility_status == EligibilityStatus.ELIGIBLE
        assert result.overall_score == result.lma_base_score == 95
        assert result.greenwashing_penalty == 0
        assert result.ineligibility_reasons == []
        assert result.greenwashing_risk.overall_risk == RiskLevel.LOW
        assert result.country_name == "Kenya"
        assert result.country_info is not None
        assert result.country_info.currency == "KES"
        assert result.assessment_date == FIXED_NOW

    async def test_presentation_fields_attached(self, solar_project):
        result = await _service().assess(solar_project)

        assert len(result.dfi_matches) == 5
        assert all(m.recommended_role == FinancingRole.SENIOR for m in result.dfi_matches)
        assert result.blended_structure.equity.percentage == 30
        assert result.kpi_recommendations[0].name == "GHG emissions intensity"
        assert result.spt_recommendations[0].target == "45% reduction by 2029"
        assert result.kpi_ai_generated is False
        assert len(result.dnsh_assessment.criteria) == 6
        assert result.next_steps[0] == "Project is well-positioned for transition loan financing"

    async def test_idempotent(self, solar_project, bare_project):
        service = AssessmentService(kpi_provider=SectorKPILibrary())
        for project in (solar_project, bare_project):
            first = (await service.assess(project)).model_dump(exclude={"assessment_date"})
            second = (await service.assess(project)).model_dump(exclude={"assessment_date"})
            assert first == second

    async def test_unknown_country_is_a_result_not_an_error(self):
        result = await _service().assess(make_project(country="Brazil"))

        assert result.eligibility_status == EligibilityStatus.INELIGIBLE
        assert result.overall_score == 0
        assert result.country_info is None
        assert result.country_name == "brazil"

    async def test_supported_country_without_profile(self):
        result = await _service().assess(make_project(country="uganda"))
        assert result.eligibility_status == EligibilityStatus.ELIGIBLE
        assert result.country_info is None

    async def test_presentation_does_not_change_verdict(self, solar_project):
        default = await _service().assess(solar_project)
        narrow = await _service(dfi_matcher=DFIMatcher(limit=1)).assess(solar_project)

        assert len(narrow.dfi_matches) == 1
        assert narrow.overall_score == default.overall_score
        assert narrow.eligibility_status == default.eligibility_status

    async def test_kpi_provider_failure_falls_back(self, solar_project):
        result = await _service(kpi_provider=_BrokenKPIProvider()).assess(solar_project)

        assert result.kpi_ai_generated is False
        assert result.kpi_recommendations
        assert result.eligibility_status == EligibilityStatus.ELIGIBLE

    async def test_kpi_gateway_error_falls_back(self, solar_project):
        transport = httpx.MockTransport(lambda request: httpx.Response(503))
        provider = GatewayKPIProvider("http://kpi.test", transport=transport)

        result = await _service(kpi_provider=provider).assess(solar_project)

        assert result.kpi_ai_generated is False
        assert result.spt_recommendations[0].name == "Absolute GHG emissions reduction"

    async def test_reference_year_is_configurable(self):
        project = make_project(total_target_emissions=910, target_year=2030)
        early = await _service(reference_year=2025).assess(project)
        late = await _service(reference_year=2026).assess(project)

        assert "below_bau" in [f.id for f in early.greenwashing_risk.red_flags]
        assert "below_bau" not in [f.id for f in late.greenwashing_risk.red_flags]

    async def test_zero_target_year_scored_as_missing(self):
        overrides = dict(
            has_published_plan=False,
            third_party_verification=False,
            transition_strategy="We will decarbonise operations.",
        )
        missing = await _service().assess(make_project(target_year=None, **overrides))
        zero = await _service().assess(make_project(target_year=0, **overrides))

        for result in (missing, zero):
            assert result.greenwashing_risk.overall_risk == RiskLevel.MEDIUM
            assert result.greenwashing_risk.risk_score == 45
            assert result.lma_base_score == 55
            assert result.greenwashing_penalty == 17
            assert result.overall_score == 38
            assert result.eligibility_status == EligibilityStatus.PARTIAL
        assert zero.spt_recommendations[0].target == "45% reduction by 2030"

    async def test_bare_project(self, bare_project):
        result = await _service().assess(bare_project)

        assert result.eligibility_status == EligibilityStatus.INELIGIBLE
        assert result.next_steps[1] == "PRIORITY: Address greenwashing red flags before proceeding"
        assert result.blended_structure.senior_debt.percentage == 0
