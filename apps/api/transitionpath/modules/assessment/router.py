"""Assessment API router: full assessment and the two independently callable halves."""

import structlog
from fastapi import APIRouter, Depends

from transitionpath.core.config import settings
from transitionpath.core.errors import assessment_failed
from transitionpath.modules.assessment.engine import score_components
from transitionpath.modules.assessment.greenwash import detect_greenwashing
from transitionpath.modules.assessment.schemas import (
    AssessmentResult,
    GreenwashingAssessment,
    LMAScoreResult,
    ProjectInput,
)
from transitionpath.modules.assessment.service import AssessmentService

logger = structlog.get_logger()

router = APIRouter(prefix="/assess", tags=["assessment"])


def get_assessment_service() -> AssessmentService:
    return AssessmentService()


@router.post("", response_model=AssessmentResult)
async def assess_project(
    project: ProjectInput,
    service: AssessmentService = Depends(get_assessment_service),
):
    """Score, screen and classify a project; attach DFI, KPI and DNSH context."""
    try:
        return await service.assess(project)
    except Exception as exc:
        logger.error(
            "assessment_failed",
            project_name=project.project_name,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        raise assessment_failed() from exc


@router.post("/lma-score", response_model=LMAScoreResult)
async def lma_score(project: ProjectInput):
    return score_components(project)


@router.post("/greenwashing", response_model=GreenwashingAssessment)
async def greenwashing(project: ProjectInput):
    return detect_greenwashing(project, reference_year=settings.ASSESSMENT_REFERENCE_YEAR)
