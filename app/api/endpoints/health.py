from fastapi import APIRouter, Request

router = APIRouter()


@router.get("")
def health_check(request: Request):
    """
    Check the health of the API and report which external services are configured.
    """
    service = getattr(request.app.state, "analysis_service", None)
    context = service.context if service is not None else None
    return {
        "status": "ok",
        "reasoning": context is not None and context.reasoning is not None,
        "similarity": context is not None and context.similarity is not None,
    }
