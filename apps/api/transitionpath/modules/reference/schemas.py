"""Reference data schemas."""

from transitionpath.models.enums import LegalSystem, Region, RiskLevel
from transitionpath.schemas.base import CamelModel


class CountryProfile(CamelModel):
    id: str
    name: str
    region: Region
    regulatory_framework: str
    legal_system: LegalSystem
    relevant_laws: tuple[str, ...]
    currency: str
    currency_code: str
    fx_considerations: tuple[str, ...]
    exchange_control_notes: str
    grid_operator: str
    ppa_framework: str
    renewable_targets: str
    sovereign_rating: str
    political_risk_level: RiskLevel
    ndc_target: str
    ndc_baseline_year: int
    ndc_target_year: int
    special_considerations: tuple[str, ...]
