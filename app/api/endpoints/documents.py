from typing import Annotated
from fastapi import APIRouter, Depends

from app.dependencies.services import get_quality_service
from app.schemas.quality import DocumentQualityReport, DocumentQualityRequest
from app.services.quality import DocumentQualityService

router = APIRouter()

QualityServiceDep = Annotated[DocumentQualityService, Depends(get_quality_service)]


@router.post("/quality", response_model=DocumentQualityReport)
async def score_document(request: DocumentQualityRequest, service: QualityServiceDep):
    """Score a plain-text document for grammar, style, technical content and compliance."""
    return await service.analyze(request.text, request.document_type)
