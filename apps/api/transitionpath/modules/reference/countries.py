"""African country profiles and the supported-country allow-list.

Pure data plus lookup helpers. Profiles are keyed by lowercase slug
(``kenya``, ``south_africa`` ...), the same form ``ProjectInput.country``
is normalised to.
"""

from transitionpath.models.enums import LegalSystem, Region, RiskLevel
from transitionpath.modules.reference.schemas import CountryProfile

# Countries the service assesses. Only some carry a full profile.
SUPPORTED_COUNTRIES: frozenset[str] = frozenset(
    {
        "kenya",
        "nigeria",
        "south_africa",
        "tanzania",
        "ghana",
        "egypt",
        "morocco",
        "ethiopia",
        "senegal",
        "drc",
        "uganda",
        "rwanda",
    }
)

_RISK_ORDER: dict[RiskLevel, int] = {
    RiskLevel.LOW: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.HIGH: 3,
}


# ── East Africa ──────────────────────────────────────────────────────────────

KENYA = CountryProfile(
    id="kenya",
    name="Kenya",
    region=Region.EAST_AFRICA,
    regulatory_framework="Strong regulatory environment with established IPP framework",
    legal_system=LegalSystem.COMMON_LAW,
    relevant_laws=(
        "Energy Act 2019",
        "Climate Change Act 2016",
        "Environmental Management and Co-ordination Act (EMCA)",
        "Public Private Partnership Act 2013",
    ),
    currency="Kenyan Shilling",
    currency_code="KES",
    fx_considerations=(
        "Floating exchange rate with Central Bank intervention",
        "PPA payments typically in USD or USD-indexed",
        "Capital account largely liberalized",
    ),
    exchange_control_notes="Relatively liberal FX regime; repatriation of profits permitted",
    grid_operator="Kenya Power and Lighting Company (KPLC)",
    ppa_framework="Standardized PPA available; Feed-in-Tariff (FiT) for renewables up to 10MW",
    renewable_targets="100% renewable electricity by 2030 (national target)",
    sovereign_rating="B (Fitch), B3 (Moody's)",
    political_risk_level=RiskLevel.MEDIUM,
    ndc_target="32% reduction in GHG emissions by 2030 vs BAU",
    ndc_baseline_year=2010,
    ndc_target_year=2030,
    special_considerations=(
        "Lake Turkana Wind Power, Africa's largest wind farm",
        "Geothermal potential (Olkaria)",
        "Strong DFI presence and track record",
        "East African hub for regional projects",
    ),
)

TANZANIA = CountryProfile(
    id="tanzania",
    name="Tanzania",
    region=Region.EAST_AFRICA,
    regulatory_framework="Improving regulatory framework; sector reforms underway",
    legal_system=LegalSystem.COMMON_LAW,
    relevant_laws=(
        "Electricity Act 2008 (amended 2018)",
        "Energy and Water Utilities Regulatory Authority (EWURA) regulations",
        "Environmental Management Act 2004",
        "Public Private Partnership Act 2010",
    ),
    currency="Tanzanian Shilling",
    currency_code="TZS",
    fx_considerations=(
        "Managed float exchange rate",
        "USD-denominated PPAs preferred for IPPs",
        "Bank of Tanzania manages FX availability",
    ),
    exchange_control_notes="Moderate controls; profit repatriation generally permitted",
    grid_operator="Tanzania Electric Supply Company (TANESCO)",
    ppa_framework="Standardized Small Power Producer framework; larger PPAs negotiated",
    renewable_targets="50% renewable electricity by 2030",
    sovereign_rating="B (Fitch)",
    political_risk_level=RiskLevel.MEDIUM,
    ndc_target="30-35% GHG reduction by 2030 (conditional)",
    ndc_baseline_year=2010,
    ndc_target_year=2030,
    special_considerations=(
        "Significant natural gas reserves",
        "Hydropower potential (Rufiji)",
        "Growing mini-grid sector",
        "East African Community member",
        "Improving investment climate",
    ),
)


# ── West Africa ──────────────────────────────────────────────────────────────

NIGERIA = CountryProfile(
    id="nigeria",
    name="Nigeria",
    region=Region.WEST_AFRICA,
    regulatory_framework="Evolving regulatory framework; power sector reform ongoing",
    legal_system=LegalSystem.COMMON_LAW,
    relevant_laws=(
        "Electric Power Sector Reform Act (EPSRA) 2005",
        "Nigerian Electricity Regulatory Commission (NERC) regulations",
        "Climate Change Act 2021",
        "Nigeria Investment Promotion Commission Act",
    ),
    currency="Nigerian Naira",
    currency_code="NGN",
    fx_considerations=(
        "Multiple exchange rate windows (official, I&E, parallel)",
        "USD liquidity constraints historically",
        "PPA payments in Naira with USD indexation common",
        "Recent FX unification efforts (2023+)",
    ),
    exchange_control_notes="FX access can be challenging; DFI guarantees helpful for repatriation",
    grid_operator="Transmission Company of Nigeria (TCN)",
    ppa_framework="Power Purchase Agreements through Nigerian Bulk Electricity Trading Plc (NBET)",
    renewable_targets="30% renewable in energy mix by 2030",
    sovereign_rating="B- (Fitch), Caa1 (Moody's)",
    political_risk_level=RiskLevel.HIGH,
    ndc_target="20% unconditional, 47% conditional GHG reduction by 2030",
    ndc_baseline_year=2010,
    ndc_target_year=2030,
    special_considerations=(
        "Largest economy in Africa",
        "Significant gas-to-power transition potential",
        "Off-grid/mini-grid opportunities due to grid limitations",
        "Power Africa priority country",
        "Currency risk mitigation essential",
    ),
)

GHANA = CountryProfile(
    id="ghana",
    name="Ghana",
    region=Region.WEST_AFRICA,
    regulatory_framework="Stable regulatory environment; established IPP track record",
    legal_system=LegalSystem.COMMON_LAW,
    relevant_laws=(
        "Energy Commission Act 1997",
        "Renewable Energy Act 2011",
        "Public Utilities Regulatory Commission Act 1997",
        "Environmental Assessment Regulations",
    ),
    currency="Ghanaian Cedi",
    currency_code="GHS",
    fx_considerations=(
        "Floating exchange rate with periodic volatility",
        "USD-indexed PPAs common",
        "Bank of Ghana FX auctions",
        "Recent currency pressures (2022-2023)",
    ),
    exchange_control_notes="Generally liberal; some restrictions on capital movements",
    grid_operator="Ghana Grid Company (GRIDCo)",
    ppa_framework="Power Purchase Agreements with Electricity Company of Ghana (ECG)",
    renewable_targets="10% renewable energy in electricity mix by 2030",
    sovereign_rating="RD (Fitch), debt restructuring",
    political_risk_level=RiskLevel.MEDIUM,
    ndc_target="15% unconditional, 45% conditional GHG reduction by 2030",
    ndc_baseline_year=2010,
    ndc_target_year=2030,
    special_considerations=(
        "Recent debt restructuring (2023)",
        "IMF program in place",
        "Strong renewable energy policy framework",
        "West African hub potential",
        "DFI support particularly important given fiscal situation",
    ),
)


# ── Southern Africa ──────────────────────────────────────────────────────────

SOUTH_AFRICA = CountryProfile(
    id="south_africa",
    name="South Africa",
    region=Region.SOUTHERN_AFRICA,
    regulatory_framework="Well-developed legal framework; REIPPPP highly successful",
    legal_system=LegalSystem.MIXED,
    relevant_laws=(
        "National Energy Act 2008",
        "Electricity Regulation Act 2006",
        "Carbon Tax Act 2019",
        "Climate Change Bill (pending)",
        "Broad-Based Black Economic Empowerment Act",
    ),
    currency="South African Rand",
    currency_code="ZAR",
    fx_considerations=(
        "Freely floating, liquid currency",
        "PPA payments in ZAR (REIPPPP)",
        "Well-developed hedging markets",
        "No exchange controls for current account",
    ),
    exchange_control_notes="Liberal regime; some capital account restrictions remain",
    grid_operator="Eskom (vertically integrated utility)",
    ppa_framework="Renewable Energy Independent Power Producer Procurement Programme (REIPPPP)",
    renewable_targets="Just Energy Transition (JET) coal phase-down commitment",
    sovereign_rating="BB- (Fitch), Ba2 (Moody's)",
    political_risk_level=RiskLevel.MEDIUM,
    ndc_target="350-420 Mt CO2e by 2030 (absolute cap)",
    ndc_baseline_year=2010,
    ndc_target_year=2030,
    special_considerations=(
        "Most sophisticated African financial market",
        "REIPPPP: Africa's most successful IPP program",
        "Just Energy Transition Partnership (JETP), $8.5B commitment",
        "Coal transition is key focus",
        "B-BBEE requirements for local participation",
        "LMA South African law templates available",
    ),
)


# ── North Africa ─────────────────────────────────────────────────────────────

EGYPT = CountryProfile(
    id="egypt",
    name="Egypt",
    region=Region.NORTH_AFRICA,
    regulatory_framework="Reformed energy sector; competitive bidding for renewables",
    legal_system=LegalSystem.CIVIL_LAW,
    relevant_laws=(
        "Electricity Law No. 87 of 2015",
        "Renewable Energy Law",
        "Investment Law No. 72 of 2017",
        "Environment Law No. 4 of 1994",
    ),
    currency="Egyptian Pound",
    currency_code="EGP",
    fx_considerations=(
        "Managed float; significant devaluations (2022-2023)",
        "USD-denominated PPAs for IPPs",
        "Central Bank of Egypt FX controls",
        "IMF program supporting reforms",
    ),
    exchange_control_notes="FX access improved with IMF program; repatriation permitted",
    grid_operator="Egyptian Electricity Holding Company (EEHC)",
    ppa_framework="Competitive bidding for large-scale renewables; Feed-in Tariff program",
    renewable_targets="42% renewable electricity by 2035",
    sovereign_rating="B- (Fitch), B3 (Moody's)",
    political_risk_level=RiskLevel.MEDIUM,
    ndc_target="Net-zero by 2050; interim targets in updated NDC",
    ndc_baseline_year=2015,
    ndc_target_year=2030,
    special_considerations=(
        "Benban Solar Park, one of the world's largest",
        "COP27 host (Sharm el-Sheikh)",
        "Strong renewable resource base (solar, wind)",
        "Suez Canal Economic Zone opportunities",
        "Gateway to Middle East and Africa",
    ),
)

MOROCCO = CountryProfile(
    id="morocco",
    name="Morocco",
    region=Region.NORTH_AFRICA,
    regulatory_framework="Advanced renewable energy framework; Noor solar complex",
    legal_system=LegalSystem.CIVIL_LAW,
    relevant_laws=(
        "Renewable Energy Law 13-09",
        "Energy Efficiency Law 47-09",
        "Law 58-15 (liberalized high/medium voltage)",
        "Environmental Impact Assessment Decree",
    ),
    currency="Moroccan Dirham",
    currency_code="MAD",
    fx_considerations=(
        "Pegged to EUR/USD basket",
        "Relatively stable currency",
        "PPAs in MAD with indexation common",
        "Liberal FX regime",
    ),
    exchange_control_notes="Progressive liberalization; current account convertible",
    grid_operator="Office National de l'Electricité et de l'Eau Potable (ONEE)",
    ppa_framework="MASEN (Moroccan Agency for Sustainable Energy) for large projects",
    renewable_targets="52% renewable electricity capacity by 2030",
    sovereign_rating="BB+ (Fitch), Ba1 (Moody's)",
    political_risk_level=RiskLevel.LOW,
    ndc_target="45.5% GHG reduction by 2030 (conditional)",
    ndc_baseline_year=2010,
    ndc_target_year=2030,
    special_considerations=(
        "Noor-Ouarzazate Solar Complex, world's largest CSP",
        "Renewable energy leader in Africa",
        "Strong regulatory framework",
        "EU interconnection potential",
        "Hydrogen strategy (green hydrogen)",
        "Stable political environment",
    ),
)


COUNTRY_PROFILES: list[CountryProfile] = [
    KENYA,
    NIGERIA,
    SOUTH_AFRICA,
    TANZANIA,
    GHANA,
    EGYPT,
    MOROCCO,
]

_PROFILES_BY_ID: dict[str, CountryProfile] = {c.id: c for c in COUNTRY_PROFILES}


def is_supported_country(country: str) -> bool:
    return country.lower() in SUPPORTED_COUNTRIES


def get_country_profile(country_id: str) -> CountryProfile | None:
    return _PROFILES_BY_ID.get(country_id.lower())


def get_countries_by_region(region: Region) -> list[CountryProfile]:
    return [c for c in COUNTRY_PROFILES if c.region == region]


def get_countries_by_risk(max_risk: RiskLevel) -> list[CountryProfile]:
    """Profiles whose political risk is at or below ``max_risk``."""
    ceiling = _RISK_ORDER[max_risk]
    return [c for c in COUNTRY_PROFILES if _RISK_ORDER[c.political_risk_level] <= ceiling]
