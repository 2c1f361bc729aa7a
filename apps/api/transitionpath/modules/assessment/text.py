"""Lower-cased text views and resolved emissions over a ProjectInput.

Both the scorer and the greenwashing rules read the same handful of text
combinations; they are built once per assessment here.
"""

import re
from dataclasses import dataclass
from functools import cached_property

from transitionpath.modules.assessment.schemas import ProjectInput

_YEAR_RE = re.compile(r"\b20\d{2}\b")


def contains_any(text: str, terms: tuple[str, ...]) -> bool:
    return any(term in text for term in terms)


def has_year(text: str) -> bool:
    return _YEAR_RE.search(text) is not None


@dataclass(frozen=True)
class ResolvedEmissions:
    """Baseline/target pair after applying the document-totals precedence rule."""

    baseline: float
    target: float
    source: str  # "document totals" | "Scope 1+2"

    @property
    def has_baseline(self) -> bool:
        return self.baseline > 0

    def reduction_percent(self) -> float | None:
        """Computed reduction, or None unless both values are positive."""
        if self.baseline > 0 and self.target > 0:
            return (self.baseline - self.target) / self.baseline * 100
        return None


def resolve_emissions(project: ProjectInput) -> ResolvedEmissions:
    baseline = project.total_baseline_emissions
    target = project.total_target_emissions
    if baseline and baseline > 0 and target and target > 0:
        return ResolvedEmissions(baseline, target, "document totals")
    return ResolvedEmissions(
        project.current_emissions.scope12,
        project.target_emissions.scope12,
        "Scope 1+2",
    )


def resolve_reduction(project: ProjectInput) -> float | None:
    """Stated percentage when positive, otherwise computed from resolved emissions."""
    stated = project.stated_reduction_percent
    if stated is not None and stated > 0:
        return stated
    return resolve_emissions(project).reduction_percent()


class ProjectText:
    """Cached lower-case text combinations used by keyword rules."""

    def __init__(self, project: ProjectInput) -> None:
        self.project = project

    @cached_property
    def description(self) -> str:
        return self.project.description.lower()

    @cached_property
    def strategy(self) -> str:
        return self.project.transition_strategy.lower()

    @cached_property
    def narrative(self) -> str:
        # description + strategy
        return f"{self.description} {self.strategy}"

    @cached_property
    def narrative_with_type(self) -> str:
        return f"{self.narrative} {self.project.project_type.lower()}"

    @cached_property
    def document(self) -> str:
        # Raw document text wins when present; otherwise the narrative stands in.
        raw = self.project.raw_document_text
        return raw.lower() if raw.strip() else self.narrative

    @cached_property
    def document_with_type(self) -> str:
        raw = self.project.raw_document_text
        return raw.lower() if raw.strip() else self.narrative_with_type

    @cached_property
    def full(self) -> str:
        # strategy + description + raw document
        return f"{self.strategy} {self.description} {self.project.raw_document_text.lower()}"

    @cached_property
    def gate(self) -> str:
        # description + strategy + type, used by the fossil exclusion gate
        return self.narrative_with_type
