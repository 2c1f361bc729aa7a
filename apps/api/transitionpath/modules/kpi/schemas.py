"""KPI/SPT recommendation schemas."""

from transitionpath.schemas.base import CamelModel


class KPIRecommendation(CamelModel):
    name: str
    unit: str
    description: str
    suggested_target: str
    source: str | None = None
    rationale: str | None = None


class SPTRecommendation(CamelModel):
    name: str
    baseline: str
    target: str
    margin_impact: str
    verification_method: str | None = None
    source: str | None = None


class KPIRecommendations(CamelModel):
    kpis: list[KPIRecommendation]
    spts: list[SPTRecommendation]
    frameworks_referenced: list[str]
    ai_generated: bool = False
