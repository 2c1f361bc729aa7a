from transitionpath.models.enums import (  # noqa: F401
    DNSHComplianceStatus,
    DNSHObjective,
    DNSHStatus,
    EligibilityStatus,
    FeedbackStatus,
    FinancingRole,
    LegalSystem,
    RedFlagCategory,
    Region,
    RiskLevel,
    Sector,
)
