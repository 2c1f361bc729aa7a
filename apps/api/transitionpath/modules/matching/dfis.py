"""Development finance institution catalogue and eligibility filters."""

from transitionpath.models.enums import Sector
from transitionpath.modules.matching.schemas import DFI

# Projects larger than this multiple of a DFI's max ticket are out of reach.
OVERSIZE_MULTIPLE = 4

DFI_DATABASE: list[DFI] = [
    DFI(
        id="ifc",
        name="IFC",
        full_name="International Finance Corporation",
        country="International (World Bank Group)",
        max_participation=25,
        loan_tenor="7-12 years typical",
        key_requirements=(
            "IFC Performance Standards compliance",
            "Environmental & Social due diligence",
            "Commercially viable project",
            "Private sector ownership (>50%)",
            "Developmental impact",
        ),
        climate_target="Climate business $15B+ annually",
        special_programs=(
            "IFC SME Ventures (for smaller deals via intermediaries)",
            "Blended Finance Facility",
            "Creating Markets Advisory",
        ),
        notes="Works through intermediaries for SME deals. Equity investments 5-20% of company equity.",
        source_url="https://www.ifc.org/en/what-we-do/products-and-services/how-to-apply-for-financing",
    ),
    DFI(
        id="afdb",
        name="AfDB",
        full_name="African Development Bank",
        country="International (Pan-African)",
        min_size=3_000_000,
        max_participation=33,
        loan_tenor="10-20 years",
        key_requirements=(
            "Located in Regional Member Country (RMC)",
            "Majority private-owned",
            "Strong integrity/governance track record",
            "Clear development impact",
            "Financial viability",
        ),
        climate_target="Climate finance 40% of approvals by 2025",
        special_programs=(
            "Africa50 Infrastructure Fund",
            "Sustainable Energy Fund for Africa (SEFA)",
            "African Legal Support Facility",
        ),
        notes="15 working days for eligibility screening. Higher participation for project expansions.",
        source_url="https://www.afdb.org/en/sectors/private-sector/how-work-us/funding-request",
    ),
    DFI(
        id="fmo",
        name="FMO",
        full_name="Nederlandse Financierings-Maatschappij voor Ontwikkelingslanden",
        country="Netherlands",
        loan_tenor="5-15 years",
        eligible_sectors=(Sector.ENERGY, Sector.AGRICULTURE),
        key_requirements=(
            "OECD-DAC eligible country",
            "FMO Sustainability Policy compliance",
            "Commercial viability",
            "IFC Performance Standards",
        ),
        climate_target="Climate investment focus in energy sector",
        special_programs=(
            "Climate Investor One",
            "Dutch Fund for Climate and Development (DFCD)",
            "MASSIF Fund (for financial inclusion)",
            "Access to Energy Fund",
        ),
        notes="51% Dutch government owned, operates commercially. Offices in Johannesburg and Nairobi.",
        source_url="https://www.edfi.eu/member/fmo/",
    ),
    DFI(
        id="deg",
        name="DEG",
        full_name="Deutsche Investitions- und Entwicklungsgesellschaft",
        country="Germany",
        min_size=500_000,
        max_size=25_000_000,
        loan_tenor="4-10 years",
        key_requirements=(
            "OECD-DAC eligible country",
            "IFC Performance Standards",
            "ILO core labour standards",
            "Minimum 25% equity (SMEs), 30-50% for greenfield",
            "Commercial viability",
        ),
        climate_target="Climate and environment focus",
        special_programs=(
            "ImpactConnect (€0.5M-€10M unsecured)",
            "DEG Impulse (up to €500K, max 50% of investment)",
            "AfricaConnect",
            "Business Support Services",
        ),
        notes="Subsidiary of KfW Group. ImpactConnect offers unsecured financing for smaller deals.",
        source_url="https://www.deginvest.de/index-2.html",
    ),
    DFI(
        id="bii",
        name="BII",
        full_name="British International Investment (formerly CDC)",
        country="United Kingdom",
        min_size=10_000_000,
        max_size=250_000_000,
        loan_tenor="5-15 years",
        eligible_countries=("kenya", "nigeria", "south_africa", "tanzania", "ghana", "egypt"),
        key_requirements=(
            "Priority: Sub-Saharan Africa, South Asia",
            "Strong E&S standards",
            "Development impact",
            "2X Gender criteria encouraged",
        ),
        climate_target="30% of new commitments in climate finance",
        special_programs=(
            "BII Plus (technical assistance)",
            "Climate Finance",
            "Gender Finance (2X Challenge)",
            "Infrastructure Equity",
        ),
        notes="Oldest DFI (1948). 2X Gender: 51% women ownership OR 30% women leadership OR 30-50% women workforce.",
        source_url="https://www.bii.co.uk/en/africa/",
    ),
    DFI(
        id="proparco",
        name="Proparco",
        full_name="Promotion et Participation pour la Coopération Économique",
        country="France",
        loan_tenor="5-15 years",
        key_requirements=(
            "Economically viable",
            "Financially profitable",
            "Environmentally sustainable",
            "Socially equitable",
            "AFD E&S standards",
        ),
        climate_target="Climate finance priority",
        special_programs=(
            "FISEA+ (€210M for African MSMEs)",
            "Choose Africa (€2.5B over 4 years for African SMEs)",
            "Adapt'Action (climate adaptation)",
            "SUNREF (sustainable energy)",
        ),
        notes="Subsidiary of AFD Group (French Development Agency). Strong presence in Francophone Africa.",
        source_url="https://www.proparco.fr/en/countries-regions/our-activities-africa",
    ),
    DFI(
        id="dfc",
        name="DFC",
        full_name="U.S. International Development Finance Corporation",
        country="United States",
        min_size=50_000_000,
        max_size=1_000_000_000,
        loan_tenor="Up to 25 years",
        key_requirements=(
            "Meaningful connection to US private sector",
            "Priority: low/lower-middle income countries",
            "DFC Environmental and Social Policies",
            "Development impact",
        ),
        climate_target="33% of commitments in climate (from FY2023)",
        special_programs=(
            "Power Africa ($2.4B+ committed)",
            "Prosper Africa",
            "Political Risk Insurance (up to $1B)",
            "Equity and Investment Funds",
        ),
        notes="Created 2019 by merging OPIC + USAID DCA. Strong focus on Power Africa (30GW goal).",
        source_url="https://www.dfc.gov/",
    ),
]

_DFIS_BY_ID: dict[str, DFI] = {d.id: d for d in DFI_DATABASE}


def get_dfi(dfi_id: str) -> DFI | None:
    return _DFIS_BY_ID.get(dfi_id)


def serves_country(dfi: DFI, country: str) -> bool:
    return dfi.eligible_countries is None or country in dfi.eligible_countries


def serves_sector(dfi: DFI, sector: Sector) -> bool:
    return dfi.eligible_sectors is None or sector in dfi.eligible_sectors


def fits_size(dfi: DFI, project_size: float) -> bool:
    if dfi.min_size and project_size < dfi.min_size:
        return False
    if dfi.max_size and project_size > dfi.max_size * OVERSIZE_MULTIPLE:
        return False
    return True


def get_matching_dfis(country: str, sector: Sector, size: float) -> list[DFI]:
    """DFIs that pass the country, sector and size filters, in catalogue order."""
    return [
        d
        for d in DFI_DATABASE
        if serves_country(d, country) and serves_sector(d, sector) and fits_size(d, size)
    ]
