"""Greenwashing detector: rule tables over project narrative and figures.

Red flags and positive indicators are data (``RED_FLAG_RULES``,
``POSITIVE_RULES``); ``detect_greenwashing`` only tallies them. Rules that
share a ``signal`` describe the same underlying finding and are counted
once, first match in catalogue order.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from functools import cached_property

from transitionpath.models.enums import RedFlagCategory, RiskLevel
from transitionpath.modules.assessment import criteria
from transitionpath.modules.assessment.schemas import (
    GreenwashingAssessment,
    ProjectInput,
    RedFlag,
)
from transitionpath.modules.assessment.text import (
    ProjectText,
    ResolvedEmissions,
    contains_any,
    has_year,
    resolve_emissions,
    resolve_reduction,
)

SEVERITY_WEIGHTS: dict[RiskLevel, int] = {
    RiskLevel.HIGH: 25,
    RiskLevel.MEDIUM: 15,
    RiskLevel.LOW: 5,
}
POSITIVE_INDICATOR_CREDIT = 10

HIGH_RISK_THRESHOLD = 70
MEDIUM_RISK_THRESHOLD = 40
MIN_ANNUAL_REDUCTION = 2.0  # % per year; slower than this is business-as-usual
WEAK_TARGET_THRESHOLD = 25.0
MAX_MEDIUM_RECOMMENDATIONS = 3


@dataclass
class RuleContext:
    """Everything a rule may look at, derived once per detection run."""

    project: ProjectInput
    text: ProjectText
    reference_year: int

    @cached_property
    def emissions(self) -> ResolvedEmissions:
        return resolve_emissions(self.project)

    @cached_property
    def reduction(self) -> float:
        return resolve_reduction(self.project) or 0.0

    @cached_property
    def has_explicit_verification(self) -> bool:
        t = self.text.document
        return (
            contains_any(t, _VERIFICATION_STATEMENTS)
            or ("spo" in t and "completed" in t)
            or ("second party opinion" in t and "obtained" in t)
        )

    @property
    def is_verified(self) -> bool:
        return self.project.third_party_verification or self.has_explicit_verification


@dataclass(frozen=True)
class RedFlagRule:
    id: str
    category: RedFlagCategory
    severity: RiskLevel
    description: str
    recommendation: str
    check: Callable[[RuleContext], bool]
    signal: str | None = None
    disqualifying: bool = False

    @property
    def signal_key(self) -> str:
        return self.signal or self.id


@dataclass(frozen=True)
class PositiveIndicatorRule:
    id: str
    indicator: str
    check: Callable[[RuleContext], bool]


# ── Phrase catalogues ────────────────────────────────────────────────────────

_COAL_CONTEXT = ("power", "plant", "generation", "mining")
_LOCKIN_TERMS = ("new coal", "coal expansion", "new diesel", "expand fossil", "new oil")

_EXAGGERATED_REDUCTION_RE = re.compile(r"\b(99|100)\s*%\s*(reduction|decrease|cut)")
_GUARANTEE_TERMS = ("guaranteed return", "guaranteed profit", "guaranteed success", "risk-free")
_ZERO_COST_TERMS = ("zero cost", "no cost")
_UNREALISTIC_TERMS = ("500%", "1000%", "unlimited return", "unlimited profit")

_NET_ZERO_TERMS = ("net zero", "net-zero", "carbon neutral", "carbon-neutral", "climate neutral")

_SECRET_TERMS = (
    "secret formula", "secret method", "confidential methodology",
    "proprietary methodology", "proprietary calculation", "proprietary data",
)
_VERIFICATION_COMMITMENTS = (
    "third-party verification", "independent auditor", "dnv", "kpmg",
    "annual verification", "second party opinion",
)
_VERIFICATION_STATEMENTS = (
    "third-party verification has been completed",
    "third party verification has been completed",
    "independent verifier confirming",
    "verified by dnv",
    "verified by kpmg",
    "verified by ey",
    "verified by deloitte",
)

_VAGUE_DESCRIPTION_TERMS = ("various", "to be determined", "tbd")
_MIN_DESCRIPTION_LENGTH = 50
_HEDGE_RE = re.compile(r"\b(aspire|intend|aim to|explore|consider|may)\b")

_INCONSISTENCY_TERMS = (
    "document contains inconsistenc", "document has inconsistenc",
    "found inconsistenc", "identified inconsistenc", "noted discrepanc",
    "contains discrepanc", "figures contradict", "numbers contradict",
    "data contradicts", "mathematically impossible", "does not add up",
    "numbers do not match", "figures do not match",
)
_CONSISTENCY_SAFEGUARDS = (
    "ensure consistenc", "maintain consistenc", "address any inconsistenc",
    "resolve any inconsistenc", "prevent inconsistenc",
)

_OWNERSHIP_TERMS = ("ownership", "equity", "stake", "shareholding")
_OVER_ALLOCATION_TERMS = ("115%", "120%", "totals exceed 100")

_UNVERIFIABLE_TERMS = (
    "audit cannot be verified", "verification cannot be confirmed",
    "certification cannot be verified", "credentials cannot be verified",
    "auditor has no online presence", "verifier has no online presence",
    "no record of certification", "certification not found",
    "unverifiable audit", "unverifiable certification",
)
_PENDING_VERIFICATION = (
    "verification will be", "verification to be", "audit will be", "certification pending",
)

_CONFLICT_TERMS = (
    "however, the document states", "however, it claims", "but states a different",
    "contradicts the stated", "does not match the stated", "inconsistent with stated",
    "differs from the claimed",
)

_ARTISANAL_SAFEGUARDS = (
    "no artisanal", "not artisanal", "avoid artisanal", "exclude artisanal",
    "prohibit artisanal", "prevent artisanal", "free from artisanal",
    "does not involve artisanal", "does not include artisanal",
    "does not source from artisanal", "does not use artisanal",
    "ensure no artisanal", "ensures no artisanal", "ensuring no artisanal",
    "without artisanal", "zero artisanal", "eliminate artisanal",
    "artisanal mining risk", "artisanal mining due diligence",
    "artisanal mining standards", "artisanal mining compliance",
    "oecd due diligence", "responsible mineral", "conflict-free",
    "traceability", "supply chain due diligence",
)
_DRC_COBALT_TERMS = ("drc cobalt", "congolese cobalt", "cobalt from drc", "cobalt from congo")
_DRC_NEGATIONS = ("not from drc", "not from congo", "no drc", "avoid drc")

_INTERIM_TERMS = ("interim target", "interim milestone", "milestone")


# ── Rule checks ──────────────────────────────────────────────────────────────


def _coal_project(ctx: RuleContext) -> bool:
    t = f"{ctx.text.description} {ctx.project.project_type.lower()}"
    return "coal" in t and contains_any(t, _COAL_CONTEXT)


def _exaggerated_claims(ctx: RuleContext) -> bool:
    t = ctx.text.narrative
    return (
        _EXAGGERATED_REDUCTION_RE.search(t) is not None
        or contains_any(t, _GUARANTEE_TERMS)
        or contains_any(t, _ZERO_COST_TERMS)
        or contains_any(t, _UNREALISTIC_TERMS)
    )


def _proprietary_unverified(ctx: RuleContext) -> bool:
    return (
        contains_any(ctx.text.narrative, _SECRET_TERMS)
        and not ctx.project.third_party_verification
        and not contains_any(ctx.text.document, _VERIFICATION_COMMITMENTS)
    )


def _vague_description(ctx: RuleContext) -> bool:
    return (
        len(ctx.project.description) < _MIN_DESCRIPTION_LENGTH
        or contains_any(ctx.text.description, _VAGUE_DESCRIPTION_TERMS)
    )


def _missing_financials(ctx: RuleContext) -> bool:
    p = ctx.project
    return p.total_cost == 0 or (p.debt_amount == 0 and p.equity_amount == 0)


def _vague_commitment(ctx: RuleContext) -> bool:
    s = ctx.text.strategy
    return _HEDGE_RE.search(s) is not None and not has_year(s)


def _no_timeline(ctx: RuleContext) -> bool:
    return not criteria.has_realistic_target_year(ctx.project.target_year)


def _below_bau(ctx: RuleContext) -> bool:
    year = ctx.project.target_year
    if not criteria.has_realistic_target_year(year) or not ctx.emissions.has_baseline:
        return False
    years_remaining = year - ctx.reference_year
    annual = ctx.reduction / years_remaining if years_remaining > 0 else ctx.reduction
    return annual < MIN_ANNUAL_REDUCTION


def _weak_targets(ctx: RuleContext) -> bool:
    year = ctx.project.target_year
    if not criteria.has_realistic_target_year(year) or not ctx.emissions.has_baseline:
        return False
    return year <= criteria.NEAR_TERM_YEAR and ctx.reduction < WEAK_TARGET_THRESHOLD


def _explicit_inconsistency(ctx: RuleContext) -> bool:
    t = ctx.text.document
    return contains_any(t, _INCONSISTENCY_TERMS) and not contains_any(t, _CONSISTENCY_SAFEGUARDS)


def _unrealistic_payback(ctx: RuleContext) -> bool:
    t = ctx.text.document
    return "payback" in t and "year" in t and ("impossible" in t or "unrealistic" in t)


def _ownership_exceeds_100(ctx: RuleContext) -> bool:
    t = ctx.text.document
    return contains_any(t, _OWNERSHIP_TERMS) and contains_any(t, _OVER_ALLOCATION_TERMS)


def _unverifiable_verification(ctx: RuleContext) -> bool:
    t = ctx.text.document
    return contains_any(t, _UNVERIFIABLE_TERMS) and not contains_any(t, _PENDING_VERIFICATION)


def _artisanal_mining(ctx: RuleContext) -> bool:
    t = ctx.text.document_with_type
    if "artisanal" not in t or "mining" not in t:
        return False
    return not contains_any(t, _ARTISANAL_SAFEGUARDS)


def _cobalt_drc(ctx: RuleContext) -> bool:
    t = ctx.text.document_with_type
    if "cobalt" not in t:
        return False
    explicit = contains_any(t, _DRC_COBALT_TERMS) or (
        "cobalt sourced from" in t and ("drc" in t or "congo" in t)
    )
    return explicit and not contains_any(t, _DRC_NEGATIONS)


def _interim_milestones(ctx: RuleContext) -> bool:
    s = ctx.text.strategy
    return contains_any(s, _INTERIM_TERMS) and has_year(s)


# ── Catalogue ────────────────────────────────────────────────────────────────

RED_FLAG_RULES: tuple[RedFlagRule, ...] = (
    # Eligibility flags
    RedFlagRule(
        id="fossil_sector",
        category=RedFlagCategory.TECHNOLOGY,
        severity=RiskLevel.HIGH,
        description="Project involves fossil fuel extraction/expansion - NOT ELIGIBLE for transition finance",
        recommendation="Fossil fuel expansion projects cannot be financed under transition frameworks",
        check=lambda ctx: contains_any(ctx.text.narrative_with_type, criteria.DETECTOR_FOSSIL_TERMS),
        signal="fossil_activity",
        disqualifying=True,
    ),
    RedFlagRule(
        id="coal_project",
        category=RedFlagCategory.TECHNOLOGY,
        severity=RiskLevel.HIGH,
        description="Coal projects are explicitly excluded from all transition taxonomies",
        recommendation="Coal cannot be financed under any legitimate green/transition framework",
        check=_coal_project,
        signal="fossil_activity",
        disqualifying=True,
    ),
    # Claims
    RedFlagRule(
        id="exaggerated_claims",
        category=RedFlagCategory.AMBITION,
        severity=RiskLevel.HIGH,
        description="Exaggerated or unrealistic claims detected - potential greenwashing",
        recommendation="Remove exaggerated claims and provide realistic, verifiable projections",
        check=_exaggerated_claims,
    ),
    RedFlagRule(
        id="unsupported_net_zero",
        category=RedFlagCategory.AMBITION,
        severity=RiskLevel.MEDIUM,
        description="Net-zero or carbon-neutral claim without baseline emissions to support it",
        recommendation="Back net-zero claims with a measured baseline and a quantified reduction pathway",
        check=lambda ctx: contains_any(ctx.text.narrative, _NET_ZERO_TERMS) and not ctx.emissions.has_baseline,
    ),
    RedFlagRule(
        id="proprietary_unverified",
        category=RedFlagCategory.VERIFICATION,
        severity=RiskLevel.HIGH,
        description="Claims based on proprietary/secret methodology without independent verification",
        recommendation="Provide third-party verification for all technology and emissions claims",
        check=_proprietary_unverified,
    ),
    # Commitment
    RedFlagRule(
        id="vague_description",
        category=RedFlagCategory.COMMITMENT,
        severity=RiskLevel.MEDIUM,
        description="Project description is too vague or incomplete",
        recommendation="Provide detailed project description with specific activities and expected outcomes",
        check=_vague_description,
    ),
    RedFlagRule(
        id="missing_financials",
        category=RedFlagCategory.COMMITMENT,
        severity=RiskLevel.MEDIUM,
        description="Missing or incomplete financial information",
        recommendation="Provide detailed project costs and financing structure",
        check=_missing_financials,
    ),
    RedFlagRule(
        id="vague_commitment",
        category=RedFlagCategory.COMMITMENT,
        severity=RiskLevel.HIGH,
        description="Vague commitments without specific timelines",
        recommendation="Add specific, time-bound targets with measurable milestones",
        check=_vague_commitment,
    ),
    RedFlagRule(
        id="no_timeline",
        category=RedFlagCategory.COMMITMENT,
        severity=RiskLevel.MEDIUM,
        description="Missing or unreasonably distant target timeline",
        recommendation="Set target year aligned with Paris Agreement (2030 interim, 2050 net-zero)",
        check=_no_timeline,
    ),
    RedFlagRule(
        id="no_published_plan",
        category=RedFlagCategory.COMMITMENT,
        severity=RiskLevel.HIGH,
        description="No published transition plan or strategy",
        recommendation="Publish entity-level transition strategy aligned with science-based pathways",
        check=lambda ctx: not ctx.project.has_published_plan,
    ),
    # Scope and ambition
    RedFlagRule(
        id="missing_scope3",
        category=RedFlagCategory.SCOPE,
        severity=RiskLevel.HIGH,
        description="Missing Scope 3 emissions for sector where they are likely material",
        recommendation="Conduct Scope 3 assessment - likely represents significant portion of footprint",
        check=lambda ctx: (
            ctx.project.sector in criteria.SCOPE3_MATERIAL_SECTORS
            and not ctx.project.current_emissions.scope3
        ),
    ),
    RedFlagRule(
        id="below_bau",
        category=RedFlagCategory.AMBITION,
        severity=RiskLevel.HIGH,
        description="Target trajectory appears below business-as-usual",
        recommendation="Increase ambition - current targets may be achieved through normal efficiency gains",
        check=_below_bau,
    ),
    RedFlagRule(
        id="weak_targets",
        category=RedFlagCategory.AMBITION,
        severity=RiskLevel.MEDIUM,
        description="Reduction target insufficient for 2030 milestone",
        recommendation="SBTi requires ~42% reduction by 2030 for 1.5°C alignment",
        check=_weak_targets,
    ),
    RedFlagRule(
        id="no_verification",
        category=RedFlagCategory.VERIFICATION,
        severity=RiskLevel.MEDIUM,
        description="No third-party verification of transition claims",
        recommendation="Engage independent verifier (SBTi, second-party opinion, or assurance provider)",
        check=lambda ctx: not ctx.is_verified,
    ),
    RedFlagRule(
        id="fossil_lockin",
        category=RedFlagCategory.TECHNOLOGY,
        severity=RiskLevel.HIGH,
        description="Project may lock in carbon-intensive infrastructure",
        recommendation="Avoid investments in assets with >20 year life that lock in fossil fuels",
        check=lambda ctx: contains_any(ctx.text.description, _LOCKIN_TERMS),
    ),
    RedFlagRule(
        id="missing_baseline",
        category=RedFlagCategory.BASELINE,
        severity=RiskLevel.HIGH,
        description="No baseline emissions data provided",
        recommendation="Establish robust emissions baseline with third-party verification",
        check=lambda ctx: not ctx.emissions.has_baseline,
    ),
    # Document integrity
    RedFlagRule(
        id="explicit_inconsistency",
        category=RedFlagCategory.VERIFICATION,
        severity=RiskLevel.HIGH,
        description="Document contains explicit inconsistencies or contradictions",
        recommendation="Resolve all internal inconsistencies before submitting - this is a major red flag for DFIs",
        check=_explicit_inconsistency,
    ),
    RedFlagRule(
        id="unrealistic_payback",
        category=RedFlagCategory.COMMITMENT,
        severity=RiskLevel.HIGH,
        description="Financial projections appear unrealistic or impossible",
        recommendation="Provide realistic financial model with achievable repayment schedule",
        check=_unrealistic_payback,
    ),
    RedFlagRule(
        id="ownership_exceeds_100",
        category=RedFlagCategory.VERIFICATION,
        severity=RiskLevel.HIGH,
        description="Ownership structure or allocations exceed 100%",
        recommendation="Correct ownership/allocation errors - fundamental data integrity issue",
        check=_ownership_exceeds_100,
    ),
    RedFlagRule(
        id="unverifiable_verification",
        category=RedFlagCategory.VERIFICATION,
        severity=RiskLevel.HIGH,
        description="Claimed verification or certification cannot be verified",
        recommendation="Provide verifiable third-party credentials from recognized auditors (DNV, KPMG, EY, etc.)",
        check=_unverifiable_verification,
    ),
    RedFlagRule(
        id="conflicting_numbers",
        category=RedFlagCategory.BASELINE,
        severity=RiskLevel.HIGH,
        description="Conflicting emissions or reduction figures within document",
        recommendation="Ensure all emissions figures are consistent throughout the document",
        check=lambda ctx: contains_any(ctx.text.document, _CONFLICT_TERMS),
    ),
    # Supply chain
    RedFlagRule(
        id="artisanal_mining_risk",
        category=RedFlagCategory.TECHNOLOGY,
        severity=RiskLevel.MEDIUM,
        description="Artisanal mining operations carry elevated ESG and supply chain risks",
        recommendation="Demonstrate compliance with OECD Due Diligence Guidance for responsible mineral supply chains",
        check=_artisanal_mining,
    ),
    RedFlagRule(
        id="cobalt_drc_risk",
        category=RedFlagCategory.TECHNOLOGY,
        severity=RiskLevel.MEDIUM,
        description="DRC cobalt mining has high ESG risk (child labor, conflict minerals)",
        recommendation="Demonstrate full supply chain traceability and compliance with responsible mining standards",
        check=_cobalt_drc,
    ),
)

POSITIVE_RULES: tuple[PositiveIndicatorRule, ...] = (
    PositiveIndicatorRule(
        id="published_plan",
        indicator="Published transition strategy exists",
        check=lambda ctx: ctx.project.has_published_plan,
    ),
    PositiveIndicatorRule(
        id="verified",
        indicator="Third-party verification in place",
        check=lambda ctx: ctx.is_verified,
    ),
    PositiveIndicatorRule(
        id="science_based",
        indicator="Aligned with science-based targets",
        check=lambda ctx: contains_any(ctx.text.strategy, ("sbti", "science-based")),
    ),
    PositiveIndicatorRule(
        id="paris_aligned",
        indicator="References Paris Agreement alignment",
        check=lambda ctx: contains_any(ctx.text.strategy, ("paris", "1.5")),
    ),
    PositiveIndicatorRule(
        id="ambitious_reduction",
        indicator="Ambitious reduction target (>42%)",
        check=lambda ctx: ctx.emissions.has_baseline and ctx.reduction >= criteria.SBTI_THRESHOLD,
    ),
    PositiveIndicatorRule(
        id="scope3_measured",
        indicator="Scope 3 emissions measured",
        check=lambda ctx: bool(ctx.project.current_emissions.scope3),
    ),
    PositiveIndicatorRule(
        id="near_term_year",
        indicator="Near-term target year (by 2030)",
        check=lambda ctx: (
            criteria.has_realistic_target_year(ctx.project.target_year)
            and ctx.project.target_year <= criteria.NEAR_TERM_YEAR
        ),
    ),
    PositiveIndicatorRule(
        id="interim_milestones",
        indicator="Interim milestones defined",
        check=_interim_milestones,
    ),
)


# ── Tally ────────────────────────────────────────────────────────────────────


def _match_red_flags(ctx: RuleContext) -> list[RedFlagRule]:
    seen: set[str] = set()
    matched: list[RedFlagRule] = []
    for rule in RED_FLAG_RULES:
        if rule.signal_key in seen:
            continue
        if rule.check(ctx):
            seen.add(rule.signal_key)
            matched.append(rule)
    return matched


def _match_positive(ctx: RuleContext) -> list[str]:
    indicators: list[str] = []
    for rule in POSITIVE_RULES:
        if rule.indicator not in indicators and rule.check(ctx):
            indicators.append(rule.indicator)
    return indicators


def calculate_risk_score(flags: list[RedFlagRule], positive_count: int) -> int:
    score = sum(SEVERITY_WEIGHTS[f.severity] for f in flags)
    score -= positive_count * POSITIVE_INDICATOR_CREDIT
    return max(0, min(100, score))


def classify_risk(risk_score: int, disqualified: bool) -> RiskLevel:
    if disqualified or risk_score >= HIGH_RISK_THRESHOLD:
        return RiskLevel.HIGH
    if risk_score >= MEDIUM_RISK_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def build_recommendations(flags: list[RedFlagRule], overall_risk: RiskLevel) -> list[str]:
    recs = [f"[CRITICAL] {f.recommendation}" for f in flags if f.severity == RiskLevel.HIGH]
    medium = [f.recommendation for f in flags if f.severity == RiskLevel.MEDIUM]
    recs.extend(medium[:MAX_MEDIUM_RECOMMENDATIONS])

    if overall_risk == RiskLevel.HIGH:
        recs.append("Consider engaging transition finance advisor before proceeding")
        recs.append("Significant improvements needed before DFI submission")
    elif overall_risk == RiskLevel.MEDIUM:
        recs.append("Address key concerns to strengthen transition credentials")
    return recs


def detect_greenwashing(project: ProjectInput, reference_year: int = 2025) -> GreenwashingAssessment:
    """Run the red-flag and positive-indicator catalogues over ``project``.

    ``reference_year`` anchors the years-to-target arithmetic; it is passed
    in rather than read from the clock so results are reproducible.
    """
    ctx = RuleContext(project=project, text=ProjectText(project), reference_year=reference_year)

    flags = _match_red_flags(ctx)
    positives = _match_positive(ctx)

    risk_score = calculate_risk_score(flags, len(positives))
    overall_risk = classify_risk(risk_score, any(f.disqualifying for f in flags))

    return GreenwashingAssessment(
        overall_risk=overall_risk,
        risk_score=risk_score,
        red_flags=[
            RedFlag(
                id=f.id,
                category=f.category,
                severity=f.severity,
                description=f.description,
                recommendation=f.recommendation,
            )
            for f in flags
        ],
        positive_indicators=positives,
        recommendations=build_recommendations(flags, overall_risk),
    )
