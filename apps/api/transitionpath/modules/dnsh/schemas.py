"""DNSH (Do No Significant Harm) screening schemas."""

from pydantic import Field

from transitionpath.models.enums import DNSHComplianceStatus, DNSHObjective, DNSHStatus
from transitionpath.schemas.base import CamelModel


class DNSHCriterionResult(CamelModel):
    objective: DNSHObjective
    objective_name: str
    status: DNSHStatus
    score: int = Field(..., ge=0, le=4)
    max_score: int = 4
    evidence: str
    concern: str | None = None
    is_fundamentally_incompatible: bool = False
    recommendation: str | None = None


class DNSHAssessment(CamelModel):
    overall_status: DNSHComplianceStatus
    total_score: int
    normalized_score: int = Field(..., ge=0, le=100)
    criteria: list[DNSHCriterionResult]
    summary: str
    key_risks: list[str]
    recommendations: list[str]
    is_fundamentally_incompatible: bool
    incompatibility_reason: str | None = None
