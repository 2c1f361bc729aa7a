"""Domain enums shared by the scoring core, reference data and API schemas."""

import enum


# ── Project ──────────────────────────────────────────────────────────────────


class Sector(str, enum.Enum):
    ENERGY = "energy"
    MINING = "mining"
    AGRICULTURE = "agriculture"
    TRANSPORT = "transport"
    MANUFACTURING = "manufacturing"
    REAL_ESTATE = "real_estate"
    WATER = "water"
    WASTE = "waste"
    OTHER = "other"


# ── Assessment ───────────────────────────────────────────────────────────────


class RiskLevel(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class EligibilityStatus(str, enum.Enum):
    ELIGIBLE = "eligible"
    PARTIAL = "partial"
    INELIGIBLE = "ineligible"


class FeedbackStatus(str, enum.Enum):
    MET = "met"
    PARTIAL = "partial"
    MISSING = "missing"


class RedFlagCategory(str, enum.Enum):
    COMMITMENT = "commitment"
    SCOPE = "scope"
    AMBITION = "ambition"
    VERIFICATION = "verification"
    TECHNOLOGY = "technology"
    BASELINE = "baseline"


# ── Reference data ───────────────────────────────────────────────────────────


class Region(str, enum.Enum):
    EAST_AFRICA = "east_africa"
    WEST_AFRICA = "west_africa"
    SOUTHERN_AFRICA = "southern_africa"
    NORTH_AFRICA = "north_africa"


class LegalSystem(str, enum.Enum):
    COMMON_LAW = "common_law"
    CIVIL_LAW = "civil_law"
    MIXED = "mixed"


# ── Matching ─────────────────────────────────────────────────────────────────


class FinancingRole(str, enum.Enum):
    SENIOR = "senior"
    SUBORDINATED = "subordinated"
    MEZZANINE = "mezzanine"
    EQUITY = "equity"
    GUARANTEE = "guarantee"


# ── DNSH ─────────────────────────────────────────────────────────────────────


class DNSHObjective(str, enum.Enum):
    CLIMATE_MITIGATION = "climate_mitigation"
    CLIMATE_ADAPTATION = "climate_adaptation"
    WATER_RESOURCES = "water_resources"
    CIRCULAR_ECONOMY = "circular_economy"
    POLLUTION_PREVENTION = "pollution_prevention"
    BIODIVERSITY = "biodiversity"


class DNSHStatus(str, enum.Enum):
    NO_HARM = "no_harm"
    POTENTIAL_HARM = "potential_harm"
    SIGNIFICANT_HARM = "significant_harm"
    NOT_ASSESSED = "not_assessed"


class DNSHComplianceStatus(str, enum.Enum):
    COMPLIANT = "compliant"
    PARTIAL = "partial"
    NON_COMPLIANT = "non_compliant"
