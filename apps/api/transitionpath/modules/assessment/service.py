"""Assessment orchestration: scoring core plus presentation collaborators.

The scorer, detector and classifier decide the verdict. DFI matching, KPI
recommendations, DNSH screening and next steps are computed afterwards for
presentation and never feed back into scoring.
"""

from collections.abc import Callable
from datetime import datetime, timezone

import structlog

from transitionpath.core.config import settings
from transitionpath.models.enums import EligibilityStatus, RiskLevel
from transitionpath.modules.assessment.eligibility import classify
from transitionpath.modules.assessment.engine import score_components
from transitionpath.modules.assessment.greenwash import detect_greenwashing
from transitionpath.modules.assessment.schemas import (
    AssessmentResult,
    CountryInfo,
    ProjectInput,
)
from transitionpath.modules.dnsh.evaluator import DNSHEvaluator
from transitionpath.modules.kpi.gateway import GatewayKPIProvider
from transitionpath.modules.kpi.library import KPIProvider, SectorKPILibrary
from transitionpath.modules.kpi.schemas import KPIRecommendations
from transitionpath.modules.matching.algorithm import DFIMatcher, recommend_blended_structure
from transitionpath.modules.reference.countries import get_country_profile
from transitionpath.modules.reference.schemas import CountryProfile

logger = structlog.get_logger()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_next_steps(
    status: EligibilityStatus,
    risk: RiskLevel,
    dfi_count: int,
) -> list[str]:
    steps: list[str] = []

    if status == EligibilityStatus.ELIGIBLE:
        steps.append("Project is well-positioned for transition loan financing")
        steps.append("Prepare detailed term sheet for DFI submissions")
    elif status == EligibilityStatus.PARTIAL:
        steps.append("Address identified gaps before DFI submission")
    else:
        steps.append("Significant improvements needed - consider engaging transition advisor")

    if risk == RiskLevel.HIGH:
        steps.append("PRIORITY: Address greenwashing red flags before proceeding")

    if dfi_count > 0:
        steps.append(f"{dfi_count} DFIs identified - begin preliminary discussions")

    steps.append("Engage legal counsel to prepare LMA-compliant documentation")
    steps.append("Consider second-party opinion for sustainability credentials")
    return steps


def _country_info(profile: CountryProfile | None) -> CountryInfo | None:
    if profile is None:
        return None
    return CountryInfo(
        region=profile.region,
        legal_system=profile.legal_system,
        currency=profile.currency_code,
        sovereign_rating=profile.sovereign_rating,
        political_risk=profile.political_risk_level,
        ndc_target=profile.ndc_target,
        renewable_targets=profile.renewable_targets,
    )


def default_kpi_provider() -> KPIProvider:
    if settings.KPI_GATEWAY_URL:
        return GatewayKPIProvider(
            settings.KPI_GATEWAY_URL,
            api_key=settings.KPI_GATEWAY_API_KEY,
            timeout=settings.KPI_GATEWAY_TIMEOUT,
        )
    return SectorKPILibrary()


class AssessmentService:
    """Runs a full assessment. Collaborators are injectable for tests."""

    def __init__(
        self,
        dfi_matcher: DFIMatcher | None = None,
        kpi_provider: KPIProvider | None = None,
        dnsh_evaluator: DNSHEvaluator | None = None,
        reference_year: int | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.dfi_matcher = dfi_matcher or DFIMatcher(limit=settings.DFI_MATCH_LIMIT)
        self.kpi_provider = kpi_provider or default_kpi_provider()
        self.kpi_fallback = SectorKPILibrary()
        self.dnsh_evaluator = dnsh_evaluator or DNSHEvaluator()
        self.reference_year = reference_year or settings.ASSESSMENT_REFERENCE_YEAR
        self.clock = clock

    async def assess(self, project: ProjectInput) -> AssessmentResult:
        # 1. Scoring core
        lma = score_components(project)
        greenwashing = detect_greenwashing(project, reference_year=self.reference_year)
        verdict = classify(project, lma, greenwashing)

        # 2. Presentation collaborators
        matches = self.dfi_matcher.match(project)
        blended = recommend_blended_structure(project, matches)
        kpis = await self._kpi_recommendations(project)
        dnsh = self.dnsh_evaluator.evaluate(project)
        profile = get_country_profile(project.country)

        result = AssessmentResult(
            project_name=project.project_name,
            country=project.country,
            country_name=profile.name if profile else project.country,
            sector=project.sector,
            project_type=project.project_type,
            description=project.description,
            transition_strategy=project.transition_strategy,
            target_year=project.target_year,
            total_cost=project.total_cost,
            debt_amount=project.debt_amount,
            equity_amount=project.equity_amount,
            current_emissions=project.current_emissions,
            target_emissions=project.target_emissions,
            total_baseline_emissions=project.total_baseline_emissions,
            total_target_emissions=project.total_target_emissions,
            stated_reduction_percent=project.stated_reduction_percent,
            has_published_plan=project.has_published_plan,
            third_party_verification=project.third_party_verification,
            eligibility_status=verdict.status,
            ineligibility_reasons=verdict.reasons,
            overall_score=verdict.overall_score,
            lma_base_score=verdict.lma_base_score,
            greenwashing_penalty=verdict.greenwashing_penalty,
            lma_components=lma.components,
            greenwashing_risk=greenwashing,
            dfi_matches=[m.to_response() for m in matches],
            blended_structure=blended,
            kpi_recommendations=kpis.kpis,
            spt_recommendations=kpis.spts,
            frameworks_referenced=kpis.frameworks_referenced,
            kpi_ai_generated=kpis.ai_generated,
            country_info=_country_info(profile),
            dnsh_assessment=dnsh,
            next_steps=generate_next_steps(verdict.status, greenwashing.overall_risk, len(matches)),
            assessment_date=self.clock(),
        )

        logger.info(
            "assessment_completed",
            project_name=project.project_name,
            country=project.country,
            sector=project.sector.value,
            eligibility=verdict.status.value,
            overall_score=verdict.overall_score,
            lma_base_score=verdict.lma_base_score,
            greenwashing_risk=greenwashing.overall_risk.value,
            risk_score=greenwashing.risk_score,
            dfi_matches=len(matches),
        )
        return result

    async def _kpi_recommendations(self, project: ProjectInput) -> KPIRecommendations:
        try:
            return await self.kpi_provider.generate(project)
        except Exception as exc:
            logger.warning(
                "kpi_provider_failed",
                provider=type(self.kpi_provider).__name__,
                error=str(exc),
            )
            return self.kpi_fallback.recommend(project)
