"""Sector KPI library and science-based SPT derivation.

``SectorKPILibrary`` is the deterministic KPI provider. Any other provider
(e.g. a model-backed one) implements ``KPIProvider``; the assessment
service falls back to the library when such a provider fails.
"""

from dataclasses import dataclass
from typing import Protocol

from transitionpath.models.enums import Sector
from transitionpath.modules.assessment.criteria import has_realistic_target_year
from transitionpath.modules.assessment.schemas import ProjectInput
from transitionpath.modules.assessment.text import resolve_emissions, resolve_reduction
from transitionpath.modules.kpi.schemas import (
    KPIRecommendation,
    KPIRecommendations,
    SPTRecommendation,
)

SBTI_2030_REDUCTION = 42.0
NEAR_TERM_YEAR = 2030

BASE_FRAMEWORKS: tuple[str, ...] = (
    "LMA Sustainability-Linked Loan Principles",
    "Science Based Targets initiative (SBTi)",
    "GHG Protocol Corporate Standard",
)

MARGIN_RATCHET = "-5 bps if met / +5 bps if missed"


class KPIProvider(Protocol):
    async def generate(self, project: ProjectInput) -> KPIRecommendations: ...


@dataclass(frozen=True)
class SectorTemplate:
    kpis: tuple[KPIRecommendation, ...]
    spt: SPTRecommendation
    frameworks: tuple[str, ...]


# ── Sector templates ─────────────────────────────────────────────────────────

_GHG_INTENSITY = KPIRecommendation(
    name="GHG emissions intensity",
    unit="tCO2e per USD million revenue",
    description="Scope 1 and 2 emissions normalised by revenue",
    suggested_target="Year-on-year reduction of at least 4.2%",
    source="SBTi",
    rationale="Linear annual reduction consistent with a 1.5°C pathway",
)

_SECTOR_TEMPLATES: dict[Sector, SectorTemplate] = {
    Sector.ENERGY: SectorTemplate(
        kpis=(
            KPIRecommendation(
                name="Renewable generation capacity",
                unit="MW",
                description="Installed renewable capacity commissioned under the facility",
                suggested_target="100% of financed capacity from renewable sources",
                source="IEA Net Zero by 2050",
                rationale="Power sector decarbonisation leads every 1.5°C scenario",
            ),
            KPIRecommendation(
                name="Grid emission factor displaced",
                unit="tCO2e/MWh",
                description="Emissions avoided per MWh relative to the national grid factor",
                suggested_target="Report annually against the host-country grid baseline",
                source="UNFCCC CDM tool 07",
            ),
        ),
        spt=SPTRecommendation(
            name="Renewable share of generation",
            baseline="Current renewable share of output",
            target="≥90% renewable generation by 2030",
            margin_impact=MARGIN_RATCHET,
            verification_method="Metered generation data, annual third-party assurance",
            source="IEA Net Zero by 2050",
        ),
        frameworks=("IEA Net Zero by 2050",),
    ),
    Sector.AGRICULTURE: SectorTemplate(
        kpis=(
            KPIRecommendation(
                name="Emissions per tonne of output",
                unit="tCO2e/t",
                description="Farm-gate emissions intensity including land-use change",
                suggested_target="30% reduction by 2030",
                source="SBTi FLAG Guidance",
            ),
            KPIRecommendation(
                name="Land under sustainable practices",
                unit="hectares",
                description="Area managed under climate-smart or regenerative practices",
                suggested_target="Majority of cultivated area by 2030",
                source="FAO Climate-Smart Agriculture",
            ),
        ),
        spt=SPTRecommendation(
            name="Zero deforestation in supply chain",
            baseline="Share of sourcing verified deforestation-free",
            target="100% deforestation-free sourcing by 2025",
            margin_impact=MARGIN_RATCHET,
            verification_method="Satellite monitoring and certification audit",
            source="SBTi FLAG Guidance",
        ),
        frameworks=("SBTi FLAG Guidance",),
    ),
    Sector.TRANSPORT: SectorTemplate(
        kpis=(
            KPIRecommendation(
                name="Fleet emissions intensity",
                unit="gCO2e per passenger-km or tonne-km",
                description="Well-to-wheel emissions per unit of transport service",
                suggested_target="50% reduction by 2030",
                source="SBTi Transport Guidance",
            ),
            KPIRecommendation(
                name="Zero-emission vehicle share",
                unit="% of fleet",
                description="Share of fleet that is battery-electric or hydrogen",
                suggested_target="≥30% of fleet by 2030",
                source="IEA Global EV Outlook",
            ),
        ),
        spt=SPTRecommendation(
            name="Zero-emission fleet share",
            baseline="Current zero-emission share of fleet",
            target="≥30% zero-emission vehicles by 2030",
            margin_impact=MARGIN_RATCHET,
            verification_method="Fleet register audited annually",
            source="IEA Global EV Outlook",
        ),
        frameworks=("SBTi Transport Guidance",),
    ),
    Sector.MANUFACTURING: SectorTemplate(
        kpis=(
            KPIRecommendation(
                name="Energy intensity",
                unit="GJ per tonne of product",
                description="Process energy consumed per unit of output",
                suggested_target="20% improvement by 2030",
                source="IEA Industry Tracking",
            ),
            KPIRecommendation(
                name="Renewable electricity share",
                unit="% of consumption",
                description="Share of purchased and self-generated electricity from renewables",
                suggested_target="≥80% by 2030",
                source="RE100",
            ),
        ),
        spt=SPTRecommendation(
            name="Renewable electricity procurement",
            baseline="Current renewable share of electricity",
            target="≥80% renewable electricity by 2030",
            margin_impact=MARGIN_RATCHET,
            verification_method="Energy attribute certificates and utility bills",
            source="RE100",
        ),
        frameworks=("RE100",),
    ),
    Sector.MINING: SectorTemplate(
        kpis=(
            KPIRecommendation(
                name="Emissions per tonne of ore processed",
                unit="tCO2e/t ore",
                description="Scope 1 and 2 intensity of extraction and processing",
                suggested_target="30% reduction by 2030",
                source="ICMM Climate Change Position",
            ),
            KPIRecommendation(
                name="Water recycling rate",
                unit="%",
                description="Share of process water recycled or reused",
                suggested_target="≥70% by 2030",
                source="ICMM Water Stewardship",
            ),
        ),
        spt=SPTRecommendation(
            name="Diesel displacement",
            baseline="Current diesel share of site energy",
            target="≥50% of site energy from renewables by 2030",
            margin_impact=MARGIN_RATCHET,
            verification_method="Fuel and power purchase records, annual assurance",
            source="ICMM Climate Change Position",
        ),
        frameworks=("ICMM Mining Principles", "OECD Due Diligence Guidance"),
    ),
    Sector.REAL_ESTATE: SectorTemplate(
        kpis=(
            KPIRecommendation(
                name="Operational energy intensity",
                unit="kWh/m²/year",
                description="Energy consumed per square metre of floor area",
                suggested_target="Align with CRREM 1.5°C pathway",
                source="CRREM",
            ),
        ),
        spt=SPTRecommendation(
            name="Green-certified floor area",
            baseline="Current certified share of portfolio",
            target="≥75% of floor area EDGE or LEED certified by 2030",
            margin_impact=MARGIN_RATCHET,
            verification_method="Certification records",
            source="IFC EDGE",
        ),
        frameworks=("CRREM", "IFC EDGE"),
    ),
}

_DEFAULT_TEMPLATE = SectorTemplate(
    kpis=(),
    spt=SPTRecommendation(
        name="Renewable energy consumption",
        baseline="Current renewable share of energy use",
        target="≥50% renewable energy by 2030",
        margin_impact=MARGIN_RATCHET,
        verification_method="Energy records with annual third-party assurance",
        source="RE100",
    ),
    frameworks=(),
)


class SectorKPILibrary:
    """Deterministic KPI/SPT recommendations by sector."""

    async def generate(self, project: ProjectInput) -> KPIRecommendations:
        return self.recommend(project)

    def recommend(self, project: ProjectInput) -> KPIRecommendations:
        template = _SECTOR_TEMPLATES.get(project.sector, _DEFAULT_TEMPLATE)
        return KPIRecommendations(
            kpis=[_GHG_INTENSITY, *template.kpis],
            spts=[self._emissions_spt(project), template.spt],
            frameworks_referenced=[*BASE_FRAMEWORKS, *template.frameworks],
            ai_generated=False,
        )

    def _emissions_spt(self, project: ProjectInput) -> SPTRecommendation:
        emissions = resolve_emissions(project)
        reduction = resolve_reduction(project) or 0.0
        target_pct = max(reduction, SBTI_2030_REDUCTION)
        year = project.target_year
        if not has_realistic_target_year(year) or year > NEAR_TERM_YEAR:
            year = NEAR_TERM_YEAR

        if emissions.has_baseline:
            baseline = f"{emissions.baseline:,.0f} tCO2e/year ({emissions.source})"
        else:
            baseline = "To be established (GHG Protocol inventory)"

        return SPTRecommendation(
            name="Absolute GHG emissions reduction",
            baseline=baseline,
            target=f"{target_pct:.0f}% reduction by {year}",
            margin_impact=MARGIN_RATCHET,
            verification_method="Annual limited assurance (ISO 14064-3)",
            source="SBTi Corporate Net-Zero Standard",
        )
