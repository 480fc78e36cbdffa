from typing import Annotated
from fastapi import APIRouter, Depends

from app.dependencies.services import get_analysis_service
from app.schemas.report import AnalysisReport, AnalysisRequest
from app.services.change_review.analyzer import ChangeAnalysisService

router = APIRouter()

AnalysisServiceDep = Annotated[ChangeAnalysisService, Depends(get_analysis_service)]


@router.post("", response_model=AnalysisReport)
async def analyze_change(request: AnalysisRequest, service: AnalysisServiceDep):
    """
    Classify a change description and decide whether formal review is required.

    Args:
        request: Free text plus an optional structured record.

    Returns:
        The assembled analysis report (camelCase JSON).
    """
    return await service.analyze(request.text, request.structured_fields)
