"""Tests for DFI eligibility filters, match scoring and blended structure."""

from tests.conftest import make_project
from transitionpath.models.enums import FinancingRole, Sector
from transitionpath.modules.matching.algorithm import DFIMatcher, recommend_blended_structure
from transitionpath.modules.matching.dfis import (
    DFI_DATABASE,
    fits_size,
    get_dfi,
    get_matching_dfis,
)


def _ids(items) -> list[str]:
    return [getattr(i, "id", None) or i.dfi.id for i in items]


# ── Catalogue filters ────────────────────────────────────────────────────────


class TestDFICatalogue:
    def test_catalogue(self):
        assert len(DFI_DATABASE) == 7
        assert get_dfi("afdb").full_name == "African Development Bank"
        assert get_dfi("unknown") is None

    def test_sector_restriction(self):
        ids = _ids(get_matching_dfis("kenya", Sector.TRANSPORT, 10_000_000))
        assert "fmo" not in ids
        assert "fmo" in _ids(get_matching_dfis("kenya", Sector.AGRICULTURE, 10_000_000))

    def test_country_restriction(self):
        assert "bii" not in _ids(get_matching_dfis("morocco", Sector.ENERGY, 50_000_000))
        assert "bii" in _ids(get_matching_dfis("ghana", Sector.ENERGY, 50_000_000))

    def test_size_window(self):
        dfc = get_dfi("dfc")
        deg = get_dfi("deg")
        assert not fits_size(dfc, 49_999_999)
        assert fits_size(dfc, 50_000_000)
        assert fits_size(deg, 100_000_000)
        assert not fits_size(deg, 100_000_001)

    def test_catalogue_order_preserved(self):
        ids = _ids(get_matching_dfis("kenya", Sector.ENERGY, 10_000_000))
        assert ids == ["ifc", "afdb", "fmo", "deg", "bii", "proparco"]


# ── Scoring ──────────────────────────────────────────────────────────────────


class TestDFIMatcher:
    def test_top_matches_sorted(self, solar_project):
        matches = DFIMatcher().match(solar_project)

        assert len(matches) == 5
        scores = [m.match_score for m in matches]
        assert scores == sorted(scores, reverse=True)
        assert all(0 <= s <= 100 for s in scores)
        # AfDB (85) is the sixth candidate; ties keep catalogue order
        assert _ids(matches) == ["bii", "deg", "ifc", "fmo", "proparco"]

    def test_ifc_breakdown(self, solar_project):
        match = DFIMatcher().score_dfi(get_dfi("ifc"), solar_project)

        # country 25 + sector 25 + participation 10 + climate 15 + SME programme 15
        assert match.match_score == 90
        assert "Active in kenya" in match.match_reasons
        assert "Funds energy sector" in match.match_reasons
        assert any(r.startswith("SME program available") for r in match.match_reasons)

    def test_below_minimum_concern(self):
        project = make_project(total_cost=2_000_000, debt_amount=1_500_000, equity_amount=500_000)
        match = DFIMatcher().score_dfi(get_dfi("afdb"), project)
        assert match.concerns == ["Project size ($2.0M) below DFI minimum ($3.0M)"]

    def test_optimal_size_range(self):
        match = DFIMatcher().score_dfi(get_dfi("deg"), make_project())
        assert "Project size in optimal range" in match.match_reasons

    def test_limit(self, solar_project):
        assert len(DFIMatcher(limit=2).match(solar_project)) == 2

    def test_large_project_all_senior(self):
        project = make_project(total_cost=200_000_000, debt_amount=140_000_000, equity_amount=60_000_000)
        matches = DFIMatcher(limit=10).match(project)

        assert "deg" not in _ids(matches)
        assert "dfc" in _ids(matches)
        assert {m.recommended_role for m in matches} == {FinancingRole.SENIOR}

    def test_roles_mid_size(self):
        project = make_project(total_cost=60_000_000, debt_amount=36_000_000, equity_amount=24_000_000)
        roles = {m.dfi.id: m.recommended_role for m in DFIMatcher(limit=10).match(project)}

        assert roles["dfc"] == FinancingRole.GUARANTEE
        # 40% sponsor equity
        assert roles["bii"] == FinancingRole.EQUITY
        assert roles["ifc"] == FinancingRole.MEZZANINE

    def test_high_political_risk_subordinated(self):
        project = make_project(country="nigeria")
        match = DFIMatcher().score_dfi(get_dfi("ifc"), project)
        assert match.recommended_role == FinancingRole.SUBORDINATED

    def test_zero_cost_project(self):
        project = make_project(total_cost=0, debt_amount=0, equity_amount=0)
        matches = DFIMatcher().match(project)
        assert all(m.estimated_size is not None for m in matches)

    def test_to_response(self, solar_project):
        response = DFIMatcher().match(solar_project)[0].to_response()
        assert response.id == "bii"
        assert response.match_score == 100
        assert response.special_programs
        assert response.climate_target


# ── Blended structure ────────────────────────────────────────────────────────


class TestBlendedStructure:
    def test_senior_only(self, solar_project):
        matches = DFIMatcher().match(solar_project)
        structure = recommend_blended_structure(solar_project, matches)

        assert structure.equity.percentage == 30
        assert structure.equity.sources == ["Project sponsor"]
        # 70% debt x 60%
        assert structure.senior_debt.percentage == 42
        assert structure.senior_debt.sources[0] == "Commercial banks"
        assert "IFC" in structure.senior_debt.sources
        assert structure.senior_debt.estimated_rate == "6-9% USD"
        assert structure.subordinated_debt.percentage == 0
        assert structure.guarantees == []

    def test_subordinated_and_guarantee(self):
        project = make_project(total_cost=60_000_000, debt_amount=36_000_000, equity_amount=24_000_000)
        matches = DFIMatcher(limit=10).match(project)
        structure = recommend_blended_structure(project, matches)

        assert structure.equity.percentage == 40
        assert "BII" in structure.equity.sources
        # 60% debt x 40%
        assert structure.subordinated_debt.percentage == 24
        assert "IFC" in structure.subordinated_debt.sources
        assert [g.provider for g in structure.guarantees] == ["DFC"]
        # No senior DFI: commercial banks only, 60% debt x 50%
        assert structure.senior_debt.sources == ["Commercial banks"]
        assert structure.senior_debt.percentage == 30

    def test_zero_cost(self):
        project = make_project(total_cost=0, debt_amount=0, equity_amount=0)
        structure = recommend_blended_structure(project, [])
        assert structure.equity.percentage == 0
        assert structure.senior_debt.percentage == 0
        assert structure.subordinated_debt.percentage == 0
