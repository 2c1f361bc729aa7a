"""LMA transition-loan criteria: 5 components x 20 points with keyword catalogues."""

from dataclasses import dataclass

from transitionpath.models.enums import Sector


@dataclass(frozen=True)
class Criterion:
    """A single scoring criterion within a component."""

    id: str
    name: str
    max_points: int


@dataclass(frozen=True)
class Component:
    """One of the five LMA components; criteria points sum to ``max_points``."""

    id: str
    name: str
    criteria: tuple[Criterion, ...]

    @property
    def max_points(self) -> int:
        return sum(c.max_points for c in self.criteria)


# ── Strategy Alignment ───────────────────────────────────────────────────────

STRATEGY_ALIGNMENT = Component(
    id="strategy_alignment",
    name="Strategy Alignment",
    criteria=(
        Criterion(id="published_plan", name="Published transition plan", max_points=10),
        Criterion(id="sbti_alignment", name="Science-based targets", max_points=5),
        Criterion(id="paris_alignment", name="Paris Agreement / NDC alignment", max_points=5),
    ),
)

# ── Use of Proceeds ──────────────────────────────────────────────────────────

USE_OF_PROCEEDS = Component(
    id="use_of_proceeds",
    name="Use of Proceeds",
    criteria=(
        Criterion(id="description_detail", name="Detailed project description", max_points=10),
        Criterion(id="project_type", name="Project type specified", max_points=5),
        Criterion(id="transition_activities", name="Proceeds fund transition activities", max_points=5),
    ),
)

# ── Target Ambition ──────────────────────────────────────────────────────────

TARGET_AMBITION = Component(
    id="target_ambition",
    name="Target Ambition",
    criteria=(
        Criterion(id="reduction_target", name="Emissions reduction target", max_points=15),
        Criterion(id="target_year", name="Near-term target year", max_points=5),
    ),
)

# ── Reporting & Verification ─────────────────────────────────────────────────

REPORTING_VERIFICATION = Component(
    id="reporting_verification",
    name="Reporting & Verification",
    criteria=(
        Criterion(id="third_party_verification", name="Third-party verification", max_points=15),
        Criterion(id="scope3_reporting", name="Scope 3 reporting", max_points=5),
    ),
)

# ── Project Selection ────────────────────────────────────────────────────────

PROJECT_SELECTION = Component(
    id="project_selection",
    name="Project Selection",
    criteria=(
        Criterion(id="sector_priority", name="Transition sector priority", max_points=10),
        Criterion(id="financing_structure", name="Financing structure", max_points=5),
        Criterion(id="equity_contribution", name="Sponsor equity", max_points=5),
    ),
)


COMPONENTS: list[Component] = [
    STRATEGY_ALIGNMENT,
    USE_OF_PROCEEDS,
    TARGET_AMBITION,
    REPORTING_VERIFICATION,
    PROJECT_SELECTION,
]

ALL_CRITERIA: dict[str, Criterion] = {}
for _comp in COMPONENTS:
    for _crit in _comp.criteria:
        ALL_CRITERIA[_crit.id] = _crit


def points(criterion_id: str) -> int:
    return ALL_CRITERIA[criterion_id].max_points


# ── Thresholds ───────────────────────────────────────────────────────────────

MIN_DESCRIPTION_LENGTH = 100  # strictly greater than

# (minimum reduction %, points) checked top-down; 42% is the SBTi 1.5°C 2030 pathway
REDUCTION_BANDS: tuple[tuple[float, int], ...] = (
    (42.0, 15),
    (25.0, 10),
    (0.0, 5),  # exclusive lower bound: reduction must be > 0
)
SBTI_THRESHOLD = 42.0

NEAR_TERM_YEAR = 2030
LONG_TERM_YEAR = 2050
EARLIEST_PLAUSIBLE_YEAR = 2000

MIN_EQUITY_RATIO = 0.20

# Sector tiers for Project Selection
TOP_PRIORITY_SECTORS: dict[Sector, str] = {
    Sector.ENERGY: "Energy sector - high transition relevance and DFI priority",
    Sector.AGRICULTURE: "Agriculture sector - key for climate adaptation and sustainable food systems",
}
PRIORITY_SECTORS: frozenset[Sector] = frozenset({Sector.TRANSPORT, Sector.MANUFACTURING})
SECTOR_POINTS_TOP = 10
SECTOR_POINTS_PRIORITY = 8
SECTOR_POINTS_OTHER = 5

# Sectors where value-chain emissions are typically material
SCOPE3_MATERIAL_SECTORS: frozenset[Sector] = frozenset(
    {Sector.MANUFACTURING, Sector.AGRICULTURE, Sector.MINING}
)


# ── Keyword catalogues ───────────────────────────────────────────────────────

SBTI_TERMS: tuple[str, ...] = ("sbti", "science-based", "science based targets")
PARIS_TERMS: tuple[str, ...] = ("paris", "1.5", "ndc")
CLEAN_TECH_TERMS: tuple[str, ...] = (
    "renewable",
    "solar",
    "wind",
    "efficiency",
    "clean",
    "green",
    "transition",
    "decarbonization",
)

# Exclusion gate: narrow list, matched over description, strategy and type
EXCLUDED_FOSSIL_TERMS: tuple[str, ...] = (
    "oil drilling",
    "oil exploration",
    "oil production",
    "offshore drilling",
    "petroleum",
    "coal power",
    "coal plant",
    "coal mining",
    "barrels per day",
    "fossil fuel expansion",
)
# Greenwashing detector: gate list plus extraction and field-development phrasing
DETECTOR_FOSSIL_TERMS: tuple[str, ...] = EXCLUDED_FOSSIL_TERMS + (
    "natural gas extraction",
    "new oil wells",
    "gas field",
)
# DNSH climate-mitigation screen: extraction activities
DNSH_FOSSIL_TERMS: tuple[str, ...] = (
    "coal mining",
    "oil drilling",
    "oil extraction",
    "natural gas extraction",
    "petroleum",
    "crude oil",
    "coal power",
    "fossil fuel expansion",
)


def has_realistic_target_year(year: int | None) -> bool:
    return year is not None and EARLIEST_PLAUSIBLE_YEAR <= year <= LONG_TERM_YEAR
