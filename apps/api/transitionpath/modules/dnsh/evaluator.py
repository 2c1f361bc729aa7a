"""Rule-based DNSH screen against the six EU Taxonomy Article 17 objectives.

Keyword heuristics over the project narrative; each objective scores 0-4.
The result is presentation only and never feeds the eligibility verdict.
"""

from transitionpath.core.rounding import round_half_up
from transitionpath.models.enums import (
    DNSHComplianceStatus,
    DNSHObjective,
    DNSHStatus,
    Sector,
)
from transitionpath.modules.assessment.criteria import DNSH_FOSSIL_TERMS
from transitionpath.modules.assessment.schemas import ProjectInput
from transitionpath.modules.assessment.text import contains_any
from transitionpath.modules.dnsh.schemas import DNSHAssessment, DNSHCriterionResult

OBJECTIVE_NAMES: dict[DNSHObjective, str] = {
    DNSHObjective.CLIMATE_MITIGATION: "Climate Change Mitigation",
    DNSHObjective.CLIMATE_ADAPTATION: "Climate Change Adaptation",
    DNSHObjective.WATER_RESOURCES: "Water & Marine Resources",
    DNSHObjective.CIRCULAR_ECONOMY: "Circular Economy",
    DNSHObjective.POLLUTION_PREVENTION: "Pollution Prevention",
    DNSHObjective.BIODIVERSITY: "Biodiversity & Ecosystems",
}
MAX_SCORE_PER_OBJECTIVE = 4
MAX_RECOMMENDATIONS = 3

WATER_INTENSIVE_SECTORS = frozenset({Sector.MINING, Sector.AGRICULTURE, Sector.MANUFACTURING})
POLLUTING_SECTORS = frozenset({Sector.MINING, Sector.MANUFACTURING, Sector.ENERGY})

_DEFORESTATION_TERMS = ("deforest", "forest clear", "land clearing", "primary forest")
_ADAPTATION_TERMS = ("adapt", "resilien", "climate risk")
_WATER_MEASURES = ("efficienc", "recycl", "conserv")
_CIRCULAR_TERMS = ("recycl", "waste", "circular", "reuse")
_BIODIVERSITY_TERMS = ("biodiversity", "ecosystem", "protected area", "environmental impact")

REASON_FOSSIL = (
    "Fossil fuel extraction/expansion is fundamentally incompatible with EU Taxonomy "
    "climate objectives. No mitigation measures can change this classification."
)
REASON_DEFORESTATION = (
    "Deforestation or primary forest clearing is fundamentally incompatible with "
    "EU Taxonomy biodiversity objectives."
)
REASON_PROTECTED_AREA = (
    "Development in protected areas without legal exception is fundamentally "
    "incompatible with EU Taxonomy."
)


def _criterion(
    objective: DNSHObjective,
    status: DNSHStatus,
    score: int,
    evidence: str,
    recommendation: str | None = None,
    concern: str | None = None,
    incompatible: bool = False,
) -> DNSHCriterionResult:
    return DNSHCriterionResult(
        objective=objective,
        objective_name=OBJECTIVE_NAMES[objective],
        status=status,
        score=score,
        evidence=evidence,
        concern=concern,
        is_fundamentally_incompatible=incompatible,
        recommendation=None if incompatible else recommendation,
    )


class DNSHEvaluator:
    """Keyword-driven DNSH screen. Deterministic; no external calls."""

    def evaluate(self, project: ProjectInput) -> DNSHAssessment:
        text = " ".join(
            (project.raw_document_text, project.description, project.transition_strategy)
        ).lower()

        fossil = contains_any(text, DNSH_FOSSIL_TERMS)
        deforestation = contains_any(text, _DEFORESTATION_TERMS)
        protected_area = "protected area" in text and "develop" in text
        incompatible = fossil or deforestation or protected_area

        criteria = [
            self._climate_mitigation(text, fossil),
            self._climate_adaptation(text),
            self._water_resources(text, project.sector),
            self._circular_economy(text),
            self._pollution_prevention(text, project.sector),
            self._biodiversity(text, deforestation),
        ]

        total = sum(c.score for c in criteria)
        max_total = MAX_SCORE_PER_OBJECTIVE * len(criteria)
        significant = any(c.status == DNSHStatus.SIGNIFICANT_HARM for c in criteria)
        potential = any(c.status == DNSHStatus.POTENTIAL_HARM for c in criteria)

        if significant or incompatible:
            overall = DNSHComplianceStatus.NON_COMPLIANT
        elif potential:
            overall = DNSHComplianceStatus.PARTIAL
        else:
            overall = DNSHComplianceStatus.COMPLIANT

        if incompatible:
            summary = "Project type is fundamentally incompatible with EU Taxonomy DNSH requirements."
        elif significant:
            summary = "Significant environmental harm detected - requires major remediation."
        elif potential:
            summary = "Potential harm identified - improvements recommended for DNSH compliance."
        else:
            summary = "No significant harm detected - project appears DNSH compliant."

        if fossil:
            reason = REASON_FOSSIL
        elif deforestation:
            reason = REASON_DEFORESTATION
        elif protected_area:
            reason = REASON_PROTECTED_AREA
        else:
            reason = None

        recommendations: list[str] = []
        if not incompatible:
            recommendations = [c.recommendation for c in criteria if c.recommendation]
            recommendations = recommendations[:MAX_RECOMMENDATIONS]

        return DNSHAssessment(
            overall_status=overall,
            total_score=total,
            normalized_score=round_half_up(total / max_total * 100),
            criteria=criteria,
            summary=summary,
            key_risks=[c.concern for c in criteria if c.concern],
            recommendations=recommendations,
            is_fundamentally_incompatible=incompatible,
            incompatibility_reason=reason,
        )

    # ── Objective screens ──────────────────────────────────────────────────

    def _climate_mitigation(self, text: str, fossil: bool) -> DNSHCriterionResult:
        objective = DNSHObjective.CLIMATE_MITIGATION
        if fossil:
            return _criterion(
                objective, DNSHStatus.SIGNIFICANT_HARM, 0,
                "Fossil fuel activity detected",
                concern="Fossil fuel activities lead to significant GHG emissions",
                incompatible=True,
            )
        if "emission" in text and ("reduc" in text or "target" in text):
            return _criterion(
                objective, DNSHStatus.NO_HARM, 4,
                "Emissions reduction targets present",
                "Quantify GHG reduction targets with verified baseline",
            )
        return _criterion(
            objective, DNSHStatus.POTENTIAL_HARM, 2,
            "Limited emissions information",
            "Quantify GHG reduction targets with verified baseline",
        )

    def _climate_adaptation(self, text: str) -> DNSHCriterionResult:
        objective = DNSHObjective.CLIMATE_ADAPTATION
        if contains_any(text, _ADAPTATION_TERMS):
            return _criterion(
                objective, DNSHStatus.NO_HARM, 3,
                "Climate adaptation measures mentioned",
                "Document specific adaptation measures",
            )
        return _criterion(
            objective, DNSHStatus.POTENTIAL_HARM, 2,
            "No explicit adaptation planning found",
            "Include climate risk assessment and adaptation plan",
        )

    def _water_resources(self, text: str, sector: Sector) -> DNSHCriterionResult:
        objective = DNSHObjective.WATER_RESOURCES
        has_measures = "water" in text and contains_any(text, _WATER_MEASURES)
        if sector in WATER_INTENSIVE_SECTORS and not has_measures:
            return _criterion(
                objective, DNSHStatus.POTENTIAL_HARM, 2,
                "Water-intensive sector without clear water management",
                "Include water efficiency and recycling measures",
            )
        evidence = "Water management measures identified" if has_measures else "Low water impact expected"
        return _criterion(objective, DNSHStatus.NO_HARM, 3, evidence)

    def _circular_economy(self, text: str) -> DNSHCriterionResult:
        objective = DNSHObjective.CIRCULAR_ECONOMY
        if contains_any(text, _CIRCULAR_TERMS):
            return _criterion(objective, DNSHStatus.NO_HARM, 3, "Circular economy practices mentioned")
        return _criterion(
            objective, DNSHStatus.POTENTIAL_HARM, 2,
            "No waste management or recycling mentioned",
            "Include waste management and material efficiency plans",
        )

    def _pollution_prevention(self, text: str, sector: Sector) -> DNSHCriterionResult:
        objective = DNSHObjective.POLLUTION_PREVENTION
        has_controls = (
            "emission control" in text
            or "air quality" in text
            or ("pollution" in text and "prevent" in text)
        )
        if sector in POLLUTING_SECTORS and not has_controls:
            return _criterion(
                objective, DNSHStatus.POTENTIAL_HARM, 2,
                "Industrial activity without explicit pollution controls",
                "Document emission controls and pollution prevention measures",
            )
        evidence = "Pollution control measures identified" if has_controls else "Low pollution risk expected"
        return _criterion(objective, DNSHStatus.NO_HARM, 3, evidence)

    def _biodiversity(self, text: str, deforestation: bool) -> DNSHCriterionResult:
        objective = DNSHObjective.BIODIVERSITY
        if deforestation:
            return _criterion(
                objective, DNSHStatus.SIGNIFICANT_HARM, 0,
                "Deforestation or land clearing detected",
                concern="Land clearing causes significant ecosystem harm",
                incompatible=True,
            )
        if contains_any(text, _BIODIVERSITY_TERMS):
            return _criterion(objective, DNSHStatus.NO_HARM, 3, "Biodiversity considerations addressed")
        return _criterion(
            objective, DNSHStatus.NOT_ASSESSED, 2,
            "No biodiversity assessment found",
            "Include environmental impact assessment",
        )
