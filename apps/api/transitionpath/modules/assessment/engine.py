"""LMA Score Engine: deterministic five-component rubric, no LLM.

Every component awards fixed points per criterion (see ``criteria``) and
records a feedback item for each criterion, met or not. The engine holds
no state; ``score_components`` is a pure function of the project.
"""

from transitionpath.models.enums import FeedbackStatus
from transitionpath.modules.assessment import criteria as c
from transitionpath.modules.assessment.schemas import (
    ComponentScore,
    FeedbackItem,
    LMAScoreResult,
    ProjectInput,
)
from transitionpath.modules.assessment.text import (
    ProjectText,
    contains_any,
    resolve_emissions,
    resolve_reduction,
)


def _met(description: str) -> FeedbackItem:
    return FeedbackItem(status=FeedbackStatus.MET, description=description)


def _partial(description: str, action: str) -> FeedbackItem:
    return FeedbackItem(status=FeedbackStatus.PARTIAL, description=description, action=action)


def _missing(description: str, action: str) -> FeedbackItem:
    return FeedbackItem(status=FeedbackStatus.MISSING, description=description, action=action)


class LMAScoreEngine:
    """Scores a project against the five LMA transition-loan components (100 points)."""

    def score(self, project: ProjectInput) -> LMAScoreResult:
        text = ProjectText(project)
        components = [
            self._score_strategy_alignment(project, text),
            self._score_use_of_proceeds(project),
            self._score_target_ambition(project),
            self._score_reporting_verification(project),
            self._score_project_selection(project),
        ]
        return LMAScoreResult(
            overall=sum(comp.score for comp in components),
            components=components,
        )

    # ── Component scorers ──────────────────────────────────────────────────

    def _score_strategy_alignment(self, project: ProjectInput, text: ProjectText) -> ComponentScore:
        score = 0
        feedback: list[FeedbackItem] = []

        if project.has_published_plan:
            score += c.points("published_plan")
            feedback.append(_met("Published transition plan exists"))
        else:
            feedback.append(_missing(
                "No published transition plan",
                "Publish a board-approved transition strategy document outlining "
                "decarbonization pathway, interim targets, and implementation timeline",
            ))

        if contains_any(text.full, c.SBTI_TERMS):
            score += c.points("sbti_alignment")
            feedback.append(_met("References science-based targets (SBTi)"))
        else:
            feedback.append(_missing(
                "No SBTi alignment mentioned",
                "Commit to the Science Based Targets initiative (SBTi) and submit "
                "targets for validation at sciencebasedtargets.org",
            ))

        if contains_any(text.full, c.PARIS_TERMS):
            score += c.points("paris_alignment")
            feedback.append(_met("Paris Agreement 1.5°C alignment referenced"))
        else:
            feedback.append(_missing(
                "No Paris Agreement alignment",
                "Demonstrate how the project contributes to national NDC targets and Paris Agreement goals",
            ))

        return self._component(c.STRATEGY_ALIGNMENT, score, feedback)

    def _score_use_of_proceeds(self, project: ProjectInput) -> ComponentScore:
        score = 0
        feedback: list[FeedbackItem] = []

        if len(project.description) > c.MIN_DESCRIPTION_LENGTH:
            score += c.points("description_detail")
            feedback.append(_met("Clear project description provided"))
        else:
            feedback.append(_missing(
                "Project description too brief",
                "Provide a detailed description of project activities, technologies, "
                "and expected environmental outcomes (min. 200 words)",
            ))

        if project.project_type.strip():
            score += c.points("project_type")
            feedback.append(_met("Project type specified"))
        else:
            feedback.append(_missing(
                "Project type not specified",
                "Categorize the project type (e.g. renewable energy, energy efficiency, "
                "clean transport, sustainable agriculture)",
            ))

        if contains_any(project.description.lower(), c.CLEAN_TECH_TERMS):
            score += c.points("transition_activities")
            feedback.append(_met("Proceeds clearly support transition activities"))
        else:
            feedback.append(_missing(
                "Transition use of proceeds unclear",
                "Clearly articulate how funds will be used for climate transition "
                "(renewable energy, efficiency improvements, clean technology)",
            ))

        return self._component(c.USE_OF_PROCEEDS, score, feedback)

    def _score_target_ambition(self, project: ProjectInput) -> ComponentScore:
        feedback: list[FeedbackItem] = []

        reduction = resolve_reduction(project)
        source = resolve_emissions(project).source
        reduction_pts, item = self._score_reduction(reduction, source)
        feedback.append(item)

        year_pts, item = self._score_target_year(project.target_year)
        feedback.append(item)

        return self._component(c.TARGET_AMBITION, reduction_pts + year_pts, feedback)

    def _score_reduction(self, reduction: float | None, source: str) -> tuple[int, FeedbackItem]:
        if reduction is None or reduction <= 0:
            return 0, _missing(
                "No baseline or target emissions data",
                "Conduct a GHG inventory (Scope 1 & 2) following the GHG Protocol. Set "
                "reduction targets aligned with the 1.5°C pathway (min. 42% by 2030)",
            )

        strong, moderate, weak = c.REDUCTION_BANDS
        if reduction >= strong[0]:
            return strong[1], _met(
                f"Strong reduction target: {reduction:.1f}% ({source}), exceeds "
                f"the 1.5°C pathway requirement of {c.SBTI_THRESHOLD:g}%"
            )
        if reduction >= moderate[0]:
            gap = c.SBTI_THRESHOLD - reduction
            return moderate[1], _partial(
                f"Moderate reduction target: {reduction:.1f}% ({source})",
                f"Increase ambition to ≥42% reduction by 2030 to align with the SBTi "
                f"1.5°C pathway (current gap: {gap:.1f}%)",
            )
        return weak[1], _partial(
            f"Weak reduction target: {reduction:.1f}% ({source})",
            "Target is below the science-based threshold. Increase to ≥42% by 2030. "
            "Consider efficiency upgrades, renewable energy and process changes",
        )

    def _score_target_year(self, target_year: int | None) -> tuple[int, FeedbackItem]:
        if not c.has_realistic_target_year(target_year):
            return 0, _missing(
                "No realistic target year specified",
                "Set a target year for emissions reduction (2030 for interim, 2050 for net-zero)",
            )
        if target_year <= c.NEAR_TERM_YEAR:
            return c.points("target_year"), _met(f"Near-term target year: {target_year}")
        return 0, _partial(
            f"Long-term target year: {target_year}",
            "Add an interim 2030 target alongside the long-term goal. DFIs require "
            "near-term milestones to track progress",
        )

    def _score_reporting_verification(self, project: ProjectInput) -> ComponentScore:
        score = 0
        feedback: list[FeedbackItem] = []

        if project.third_party_verification:
            score += c.points("third_party_verification")
            feedback.append(_met("Third-party verification in place"))
        else:
            feedback.append(_missing(
                "No third-party verification",
                "Engage an independent verifier (e.g. DNV, KPMG, EY) to verify emissions "
                "data and transition claims. Consider a Second Party Opinion",
            ))

        scope3 = project.current_emissions.scope3
        if scope3 is not None and scope3 > 0:
            score += c.points("scope3_reporting")
            feedback.append(_met("Scope 3 emissions measured and reported"))
        elif project.sector in c.SCOPE3_MATERIAL_SECTORS:
            feedback.append(_missing(
                "Scope 3 emissions not reported",
                "Scope 3 is likely material for your sector. Conduct a value chain emissions "
                "assessment following the GHG Protocol Scope 3 Standard",
            ))
        else:
            feedback.append(_partial(
                "Scope 3 emissions not reported",
                "Consider Scope 3 screening to identify material categories (supply chain, product use)",
            ))

        return self._component(c.REPORTING_VERIFICATION, score, feedback)

    def _score_project_selection(self, project: ProjectInput) -> ComponentScore:
        score = 0
        feedback: list[FeedbackItem] = []
        sector = project.sector

        if sector in c.TOP_PRIORITY_SECTORS:
            score += c.SECTOR_POINTS_TOP
            feedback.append(_met(c.TOP_PRIORITY_SECTORS[sector]))
        elif sector in c.PRIORITY_SECTORS:
            score += c.SECTOR_POINTS_PRIORITY
            feedback.append(_met(f"{sector.value} sector - recognized transition priority"))
        else:
            score += c.SECTOR_POINTS_OTHER
            feedback.append(_partial(
                f"{sector.value} sector has transition potential",
                "Highlight the sector-specific decarbonization pathway and alignment "
                "with regional transition priorities",
            ))

        if project.total_cost > 0 and project.debt_amount > 0:
            score += c.points("financing_structure")
            feedback.append(_met("Financing structure clearly defined"))
        else:
            feedback.append(_missing(
                "Financing structure incomplete",
                "Provide detailed project costs, debt/equity split, and proposed financing structure",
            ))

        equity_ratio = project.equity_amount / project.total_cost if project.total_cost > 0 else 0.0
        if equity_ratio >= c.MIN_EQUITY_RATIO:
            score += c.points("equity_contribution")
            feedback.append(_met(f"Adequate equity contribution: {equity_ratio * 100:.0f}%"))
        elif equity_ratio > 0:
            feedback.append(_partial(
                f"Low equity contribution: {equity_ratio * 100:.0f}%",
                "Increase equity to ≥20% of project cost. DFIs typically require meaningful sponsor commitment",
            ))
        else:
            feedback.append(_missing(
                "No equity contribution specified",
                "Specify the equity contribution (typically 20-30% of project cost required by DFIs)",
            ))

        return self._component(c.PROJECT_SELECTION, score, feedback)

    @staticmethod
    def _component(component: c.Component, score: int, feedback: list[FeedbackItem]) -> ComponentScore:
        return ComponentScore(
            id=component.id,
            name=component.name,
            score=max(0, min(component.max_points, score)),
            max_score=component.max_points,
            feedback=feedback,
        )


_engine = LMAScoreEngine()


def score_components(project: ProjectInput) -> LMAScoreResult:
    """Score all five LMA components. Pure; safe to call concurrently."""
    return _engine.score(project)
