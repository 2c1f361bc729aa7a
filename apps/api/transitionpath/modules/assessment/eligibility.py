"""Score blender and eligibility classifier.

Hard gates run first, in order; the numeric greenwashing penalty is only
applied when none of them fires. Only the region and fossil gates force
the score to zero.
"""

from transitionpath.core.rounding import round_half_up
from transitionpath.models.enums import EligibilityStatus, RiskLevel
from transitionpath.modules.assessment.criteria import EXCLUDED_FOSSIL_TERMS
from transitionpath.modules.assessment.schemas import (
    EligibilityVerdict,
    GreenwashingAssessment,
    LMAScoreResult,
    ProjectInput,
)
from transitionpath.modules.assessment.text import ProjectText, contains_any
from transitionpath.modules.reference.countries import is_supported_country

SEVERE_GREENWASHING_SCORE = 80
ELIGIBLE_MIN_SCORE = 60
PARTIAL_MIN_SCORE = 30

REASON_OUTSIDE_REGION = (
    "Project location is not in Africa - TransitionPath Africa only supports African projects"
)
REASON_FOSSIL = "Fossil fuel projects are excluded from transition finance"
REASON_GREENWASHING = "High greenwashing risk - significant red flags detected"
REASON_BELOW_MINIMUM = "Project does not meet minimum transition finance requirements"


def is_excluded_fossil(project: ProjectInput) -> bool:
    return contains_any(ProjectText(project).gate, EXCLUDED_FOSSIL_TERMS)


def greenwashing_penalty(risk: RiskLevel, risk_score: int) -> int:
    if risk == RiskLevel.HIGH:
        return round_half_up(30 + risk_score / 100 * 20)
    if risk == RiskLevel.MEDIUM:
        return round_half_up(10 + risk_score / 100 * 15)
    return 0


def classify(
    project: ProjectInput,
    lma: LMAScoreResult,
    greenwashing: GreenwashingAssessment,
) -> EligibilityVerdict:
    """Combine the LMA score and greenwashing risk into the eligibility verdict."""
    base = lma.overall

    def verdict(status: EligibilityStatus, score: int, penalty: int = 0, reason: str | None = None):
        return EligibilityVerdict(
            status=status,
            reasons=[reason] if reason else [],
            overall_score=score,
            lma_base_score=base,
            greenwashing_penalty=penalty,
        )

    if not is_supported_country(project.country):
        return verdict(EligibilityStatus.INELIGIBLE, 0, reason=REASON_OUTSIDE_REGION)

    if is_excluded_fossil(project):
        return verdict(EligibilityStatus.INELIGIBLE, 0, reason=REASON_FOSSIL)

    risk = greenwashing.overall_risk
    if risk == RiskLevel.HIGH and greenwashing.risk_score >= SEVERE_GREENWASHING_SCORE:
        return verdict(EligibilityStatus.INELIGIBLE, base, reason=REASON_GREENWASHING)

    penalty = greenwashing_penalty(risk, greenwashing.risk_score)
    adjusted = max(0, min(100, base - penalty))

    if adjusted >= ELIGIBLE_MIN_SCORE and risk != RiskLevel.HIGH:
        return verdict(EligibilityStatus.ELIGIBLE, adjusted, penalty)
    if adjusted >= PARTIAL_MIN_SCORE:
        return verdict(EligibilityStatus.PARTIAL, adjusted, penalty)
    return verdict(EligibilityStatus.INELIGIBLE, adjusted, penalty, REASON_BELOW_MINIMUM)
