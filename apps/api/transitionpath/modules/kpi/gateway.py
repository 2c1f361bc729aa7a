"""HTTP KPI provider backed by an external recommendation gateway."""

import httpx
import structlog

from transitionpath.modules.assessment.schemas import ProjectInput
from transitionpath.modules.kpi.schemas import KPIRecommendations

logger = structlog.get_logger()


class GatewayKPIProvider:
    """Posts the project to ``{base_url}/v1/kpi-recommendations``.

    Raises on transport errors, non-2xx responses and malformed bodies;
    the assessment service owns the fallback.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def generate(self, project: ProjectInput) -> KPIRecommendations:
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        # Raw document text stays local; the gateway only needs structured fields.
        payload = project.model_dump(mode="json", by_alias=True, exclude={"raw_document_text"})

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            resp = await client.post(
                f"{self.base_url}/v1/kpi-recommendations",
                headers=headers,
                json=payload,
            )
            resp.raise_for_status()
            data = resp.json()

        result = KPIRecommendations.model_validate(data)
        logger.info(
            "kpi_gateway_completed",
            kpi_count=len(result.kpis),
            spt_count=len(result.spts),
        )
        return result.model_copy(update={"ai_generated": True})
