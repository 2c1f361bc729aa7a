"""DFI Matcher: pure deterministic scoring, no LLM.

Each eligible DFI is scored out of 100 on country, sector, ticket size,
climate commitment and special programmes. The blended-structure
recommender turns the top matches into an indicative capital stack.
"""

from dataclasses import dataclass, field

from transitionpath.core.rounding import round_half_up
from transitionpath.models.enums import FinancingRole, RiskLevel, Sector
from transitionpath.modules.assessment.schemas import ProjectInput
from transitionpath.modules.matching.dfis import (
    get_matching_dfis,
    serves_country,
    serves_sector,
)
from transitionpath.modules.matching.schemas import (
    DFI,
    BlendedStructure,
    DFIMatchResponse,
    EstimatedSize,
    FinancingTranche,
    Guarantee,
)
from transitionpath.modules.reference.countries import get_country_profile

# ── Thresholds (USD) ──────────────────────────────────────────────────────────

LARGE_PROJECT = 100_000_000
MID_PROJECT = 25_000_000
SME_PROJECT = 25_000_000
MEANINGFUL_PARTICIPATION = 10_000_000
MIN_TICKET = 3_000_000
DEFAULT_PARTICIPATION = 0.25
BII_EQUITY_RATIO = 0.3


@dataclass
class SizeScore:
    points: int
    reason: str | None = None
    concern: str | None = None


@dataclass
class DFIMatch:
    dfi: DFI
    match_score: int
    recommended_role: FinancingRole
    match_reasons: list[str] = field(default_factory=list)
    concerns: list[str] = field(default_factory=list)
    estimated_size: EstimatedSize | None = None

    def to_response(self) -> DFIMatchResponse:
        return DFIMatchResponse(
            id=self.dfi.id,
            name=self.dfi.name,
            full_name=self.dfi.full_name,
            match_score=self.match_score,
            match_reasons=self.match_reasons,
            concerns=self.concerns,
            recommended_role=self.recommended_role,
            estimated_size=self.estimated_size,
            climate_target=self.dfi.climate_target,
            special_programs=list(self.dfi.special_programs),
        )


def _millions(amount: float) -> str:
    return f"${amount / 1_000_000:.1f}M"


class DFIMatcher:
    """Scores eligible DFIs for a project; returns the top ``limit`` by score."""

    def __init__(self, limit: int = 5) -> None:
        self.limit = limit

    def match(self, project: ProjectInput) -> list[DFIMatch]:
        candidates = get_matching_dfis(project.country, project.sector, project.total_cost)
        matches = [self.score_dfi(dfi, project) for dfi in candidates]
        # sorted() is stable: equal scores keep catalogue order
        matches = sorted(matches, key=lambda m: m.match_score, reverse=True)
        return matches[: self.limit]

    def score_dfi(self, dfi: DFI, project: ProjectInput) -> DFIMatch:
        score = 0
        reasons: list[str] = []
        concerns: list[str] = []

        if serves_country(dfi, project.country):
            score += 25
            reasons.append(f"Active in {project.country}")

        if serves_sector(dfi, project.sector):
            score += 25
            reasons.append(f"Funds {project.sector.value} sector")

        size = self._score_size(dfi, project.total_cost)
        score += size.points
        if size.reason:
            reasons.append(size.reason)
        if size.concern:
            concerns.append(size.concern)

        if dfi.climate_target:
            score += 15
            reasons.append(f"Climate commitment: {dfi.climate_target}")

        program_pts, program_reason = self._score_special_programs(dfi, project)
        score += program_pts
        if program_reason:
            reasons.append(program_reason)

        return DFIMatch(
            dfi=dfi,
            match_score=min(100, score),
            recommended_role=self._determine_role(dfi, project),
            match_reasons=reasons,
            concerns=concerns,
            estimated_size=self._estimate_contribution(dfi, project),
        )

    # ── Dimension scorers ──────────────────────────────────────────────────

    def _score_size(self, dfi: DFI, project_size: float) -> SizeScore:
        if dfi.min_size and project_size < dfi.min_size:
            return SizeScore(
                points=0,
                concern=(
                    f"Project size ({_millions(project_size)}) below DFI minimum "
                    f"({_millions(dfi.min_size)})"
                ),
            )

        if dfi.min_size and dfi.max_size and dfi.min_size <= project_size <= dfi.max_size:
            return SizeScore(points=20, reason="Project size in optimal range")

        if dfi.max_participation:
            max_amount = project_size * dfi.max_participation / 100
            if max_amount >= MEANINGFUL_PARTICIPATION:
                return SizeScore(
                    points=15,
                    reason=f"Can participate up to {_millions(max_amount)} ({dfi.max_participation:g}%)",
                )

        return SizeScore(points=10)

    def _score_special_programs(self, dfi: DFI, project: ProjectInput) -> tuple[int, str | None]:
        if not dfi.special_programs:
            return 0, None

        # First programme that matches any rule decides the award.
        for program in dfi.special_programs:
            lowered = program.lower()
            if project.sector == Sector.ENERGY and ("energy" in lowered or "power" in lowered):
                return 15, f"Relevant program: {program}"
            if "climate" in lowered or "green" in lowered:
                return 15, f"Climate program available: {program}"
            if project.total_cost < SME_PROJECT and "sme" in lowered:
                return 15, f"SME program available: {program}"
            if "africa" in lowered:
                return 10, f"Africa-focused program: {program}"

        return 5, "Multiple financing programs available"

    def _determine_role(self, dfi: DFI, project: ProjectInput) -> FinancingRole:
        if project.total_cost > LARGE_PROJECT:
            return FinancingRole.SENIOR
        if dfi.id == "dfc":
            return FinancingRole.GUARANTEE
        if (
            dfi.id == "bii"
            and project.total_cost > 0
            and project.equity_amount / project.total_cost > BII_EQUITY_RATIO
        ):
            return FinancingRole.EQUITY

        profile = get_country_profile(project.country)
        if profile is not None and profile.political_risk_level == RiskLevel.HIGH:
            return FinancingRole.SUBORDINATED
        if project.total_cost > MID_PROJECT:
            return FinancingRole.MEZZANINE
        return FinancingRole.SENIOR

    def _estimate_contribution(self, dfi: DFI, project: ProjectInput) -> EstimatedSize:
        cost = project.total_cost
        if dfi.max_participation:
            max_amount = cost * dfi.max_participation / 100
        elif dfi.max_size:
            max_amount = min(dfi.max_size, cost * DEFAULT_PARTICIPATION)
        else:
            max_amount = cost * DEFAULT_PARTICIPATION

        min_amount = dfi.min_size or max(MIN_TICKET, max_amount * 0.3)
        return EstimatedSize(min=round_half_up(min_amount), max=round_half_up(max_amount))


def recommend_blended_structure(project: ProjectInput, matches: list[DFIMatch]) -> BlendedStructure:
    """Indicative capital stack from the sponsor's split and the DFIs' recommended roles."""
    cost = project.total_cost
    equity_ratio = project.equity_amount / cost if cost > 0 else 0.0
    debt_ratio = project.debt_amount / cost if cost > 0 else 0.0

    def names(*roles: FinancingRole) -> list[str]:
        return [m.dfi.name for m in matches if m.recommended_role in roles]

    equity = FinancingTranche(
        percentage=round_half_up(equity_ratio * 100),
        sources=["Project sponsor", *names(FinancingRole.EQUITY)],
    )

    senior_dfis = names(FinancingRole.SENIOR)
    if senior_dfis:
        senior = FinancingTranche(
            percentage=round_half_up(debt_ratio * 60),
            sources=["Commercial banks", *senior_dfis],
            estimated_rate="6-9% USD",
        )
    else:
        senior = FinancingTranche(
            percentage=round_half_up(debt_ratio * 50),
            sources=["Commercial banks"],
        )

    sub_dfis = names(FinancingRole.SUBORDINATED, FinancingRole.MEZZANINE)
    subordinated = FinancingTranche(
        percentage=round_half_up(debt_ratio * 40) if sub_dfis else 0,
        sources=sub_dfis,
    )

    guarantees = [
        Guarantee(type="Political Risk Insurance", provider=name, coverage="Up to 90% of senior debt")
        for name in names(FinancingRole.GUARANTEE)
    ]

    return BlendedStructure(
        senior_debt=senior,
        subordinated_debt=subordinated,
        equity=equity,
        guarantees=guarantees,
    )
