"""Matching API router: DFI catalogue and project-to-DFI matching."""

import structlog
from fastapi import APIRouter

from transitionpath.core.config import settings
from transitionpath.modules.assessment.schemas import ProjectInput
from transitionpath.modules.matching.algorithm import DFIMatcher, recommend_blended_structure
from transitionpath.modules.matching.dfis import DFI_DATABASE
from transitionpath.modules.matching.schemas import DFI, DFIMatchingResponse

logger = structlog.get_logger()

router = APIRouter(prefix="/matching", tags=["matching"])


@router.get("/dfis", response_model=list[DFI])
async def list_dfis():
    return DFI_DATABASE


@router.post("/dfis", response_model=DFIMatchingResponse)
async def match_dfis(project: ProjectInput):
    """Top DFI matches for a project plus an indicative blended structure."""
    matches = DFIMatcher(limit=settings.DFI_MATCH_LIMIT).match(project)
    logger.info(
        "dfi_matching_completed",
        country=project.country,
        sector=project.sector.value,
        match_count=len(matches),
    )
    return DFIMatchingResponse(
        matches=[m.to_response() for m in matches],
        blended_structure=recommend_blended_structure(project, matches),
    )
