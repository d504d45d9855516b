from fastapi import APIRouter

from profiler.ai.factory import configured_providers
from profiler.core.config import settings

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {"status": "healthy"}


@router.get("/check-api", summary="Provider Status", description="Report which LLM provider keys are configured.")
async def check_api():
    return {
        "default_provider": settings.default_provider,
        "providers": configured_providers(),
        "gptzero": "configured" if settings.gptzero_api_key else "missing",
        "google_search": "configured" if settings.google_api_key and settings.google_cse_id else "missing",
    }
