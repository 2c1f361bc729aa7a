"""Tests for the sector KPI library and the KPI gateway client."""

import json

import httpx
import pytest

from tests.conftest import make_bare_project, make_project
from transitionpath.models.enums import Sector
from transitionpath.modules.kpi.gateway import GatewayKPIProvider
from transitionpath.modules.kpi.library import BASE_FRAMEWORKS, SectorKPILibrary


class TestSectorKPILibrary:
    def test_energy_template(self, solar_project):
        result = SectorKPILibrary().recommend(solar_project)

        assert result.ai_generated is False
        assert result.kpis[0].name == "GHG emissions intensity"
        assert "Renewable generation capacity" in [k.name for k in result.kpis]
        assert [s.name for s in result.spts] == [
            "Absolute GHG emissions reduction",
            "Renewable share of generation",
        ]
        assert result.frameworks_referenced[:3] == list(BASE_FRAMEWORKS)
        assert "IEA Net Zero by 2050" in result.frameworks_referenced

    def test_emissions_spt_from_document_totals(self, solar_project):
        spt = SectorKPILibrary().recommend(solar_project).spts[0]
        assert spt.baseline == "1,000 tCO2e/year (document totals)"
        assert spt.target == "45% reduction by 2029"
        assert spt.margin_impact == "-5 bps if met / +5 bps if missed"

    def test_target_floored_at_science_based_level(self):
        project = make_project(total_target_emissions=900, target_year=2040)
        spt = SectorKPILibrary().recommend(project).spts[0]
        assert spt.target == "42% reduction by 2030"

    def test_no_baseline(self, bare_project):
        spt = SectorKPILibrary().recommend(bare_project).spts[0]
        assert spt.baseline == "To be established (GHG Protocol inventory)"
        assert spt.target == "42% reduction by 2030"

    def test_default_template(self):
        result = SectorKPILibrary().recommend(make_bare_project(sector=Sector.WATER))
        assert [k.name for k in result.kpis] == ["GHG emissions intensity"]
        assert result.spts[1].name == "Renewable energy consumption"
        assert result.frameworks_referenced == list(BASE_FRAMEWORKS)

    @pytest.mark.anyio
    async def test_generate_matches_recommend(self, solar_project):
        library = SectorKPILibrary()
        assert await library.generate(solar_project) == library.recommend(solar_project)

    def test_implausible_target_year_defaults_to_2030(self):
        spt = SectorKPILibrary().recommend(make_project(target_year=0)).spts[0]
        assert spt.target == "45% reduction by 2030"

    @pytest.mark.parametrize(
        "sector",
        [Sector.AGRICULTURE, Sector.TRANSPORT, Sector.MANUFACTURING, Sector.MINING, Sector.REAL_ESTATE],
    )
    def test_sector_templates_add_kpis(self, sector):
        result = SectorKPILibrary().recommend(make_project(sector=sector))
        assert len(result.kpis) > 1
        assert len(result.spts) == 2


@pytest.mark.anyio
class TestGatewayKPIProvider:
    async def test_success(self):
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "kpis": [
                        {
                            "name": "Curtailment rate",
                            "unit": "%",
                            "description": "Share of available generation curtailed",
                            "suggestedTarget": "<3%",
                        }
                    ],
                    "spts": [],
                    "frameworksReferenced": ["ICMA Sustainability-Linked Bond Principles"],
                },
            )

        provider = GatewayKPIProvider(
            "http://kpi.test/",
            api_key="secret",
            transport=httpx.MockTransport(handler),
        )
        result = await provider.generate(make_project(raw_document_text="confidential"))

        assert result.ai_generated is True
        assert result.kpis[0].suggested_target == "<3%"
        assert seen["url"] == "http://kpi.test/v1/kpi-recommendations"
        assert seen["auth"] == "Bearer secret"
        assert seen["body"]["projectName"] == "Turkana Solar Expansion"
        assert "rawDocumentText" not in seen["body"]

    async def test_no_auth_header_without_key(self, solar_project):
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, json={"kpis": [], "spts": [], "frameworksReferenced": []})

        provider = GatewayKPIProvider("http://kpi.test", transport=httpx.MockTransport(handler))
        await provider.generate(solar_project)
        assert seen["auth"] is None

    async def test_http_error_raises(self, solar_project):
        provider = GatewayKPIProvider(
            "http://kpi.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )
        with pytest.raises(httpx.HTTPStatusError):
            await provider.generate(solar_project)

    async def test_malformed_body_raises(self, solar_project):
        provider = GatewayKPIProvider(
            "http://kpi.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"kpis": "nope"})),
        )
        with pytest.raises(ValueError):
            await provider.generate(solar_project)
