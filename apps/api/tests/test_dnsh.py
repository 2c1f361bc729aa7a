"""Tests for the rule-based DNSH screen."""

from tests.conftest import make_bare_project
from transitionpath.models.enums import DNSHComplianceStatus, DNSHObjective, DNSHStatus, Sector
from transitionpath.modules.dnsh.evaluator import (
    REASON_DEFORESTATION,
    REASON_FOSSIL,
    REASON_PROTECTED_AREA,
    DNSHEvaluator,
)


def _criterion(assessment, objective):
    return next(c for c in assessment.criteria if c.objective == objective)


class TestDNSHEvaluator:
    def test_reference_project_partial(self, solar_project):
        result = DNSHEvaluator().evaluate(solar_project)

        assert [c.objective for c in result.criteria] == list(DNSHObjective)
        assert result.total_score == 13
        assert result.normalized_score == 54
        assert result.overall_status == DNSHComplianceStatus.PARTIAL
        assert result.is_fundamentally_incompatible is False
        assert result.incompatibility_reason is None
        assert len(result.recommendations) == 3
        assert result.key_risks == []

    def test_compliant(self):
        project = make_bare_project(
            sector=Sector.OTHER,
            description=(
                "Emissions reduction target of 45% with climate resilience design, on-site "
                "recycling of panels and a biodiversity management plan."
            ),
        )
        result = DNSHEvaluator().evaluate(project)

        assert result.overall_status == DNSHComplianceStatus.COMPLIANT
        assert result.total_score == 19
        assert result.normalized_score == 79
        assert _criterion(result, DNSHObjective.CLIMATE_MITIGATION).score == 4

    def test_fossil_incompatible(self):
        project = make_bare_project(description="Crude oil pipeline expansion to the coast.")
        result = DNSHEvaluator().evaluate(project)

        mitigation = _criterion(result, DNSHObjective.CLIMATE_MITIGATION)
        assert mitigation.status == DNSHStatus.SIGNIFICANT_HARM
        assert mitigation.is_fundamentally_incompatible is True
        assert mitigation.recommendation is None
        assert result.overall_status == DNSHComplianceStatus.NON_COMPLIANT
        assert result.incompatibility_reason == REASON_FOSSIL
        assert result.recommendations == []
        assert result.key_risks == ["Fossil fuel activities lead to significant GHG emissions"]

    def test_deforestation(self):
        project = make_bare_project(
            sector=Sector.AGRICULTURE,
            description="Cattle ranch requiring land clearing of 2,000 ha.",
        )
        result = DNSHEvaluator().evaluate(project)

        assert _criterion(result, DNSHObjective.BIODIVERSITY).status == DNSHStatus.SIGNIFICANT_HARM
        assert result.incompatibility_reason == REASON_DEFORESTATION

    def test_protected_area_development(self):
        project = make_bare_project(sector=Sector.OTHER, description="Lodge development inside a protected area.")
        result = DNSHEvaluator().evaluate(project)

        assert result.is_fundamentally_incompatible is True
        assert result.incompatibility_reason == REASON_PROTECTED_AREA
        assert result.overall_status == DNSHComplianceStatus.NON_COMPLIANT

    def test_water_intensive_sector_without_measures(self):
        project = make_bare_project(sector=Sector.MINING, description="Open pit copper mine.")
        water = _criterion(DNSHEvaluator().evaluate(project), DNSHObjective.WATER_RESOURCES)
        assert water.status == DNSHStatus.POTENTIAL_HARM
        assert water.score == 2

    def test_water_measures(self):
        project = make_bare_project(
            sector=Sector.MINING,
            description="Open pit copper mine with process water recycling.",
        )
        water = _criterion(DNSHEvaluator().evaluate(project), DNSHObjective.WATER_RESOURCES)
        assert water.status == DNSHStatus.NO_HARM
        assert water.evidence == "Water management measures identified"

    def test_biodiversity_not_assessed(self, bare_project):
        biodiversity = _criterion(DNSHEvaluator().evaluate(bare_project), DNSHObjective.BIODIVERSITY)
        assert biodiversity.status == DNSHStatus.NOT_ASSESSED
        assert biodiversity.score == 2
