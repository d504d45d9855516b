from fastapi import APIRouter, Depends, Request

from profiler.api.errors import raise_http_error
from profiler.core.errors import ProviderError, ServiceNotConfiguredError
from profiler.core.rate_limit import rate_limit
from profiler.core.security import require_api_key
from profiler.schemas.analysis import AnalysisResponse, AnalyzeRequest, CompareRequest, ComparisonResponse
from profiler.schemas.rewrite import DetectionRequest, DetectionResponse
from profiler.services.analysis_service import analyze_document, compare_documents
from profiler.services.detection_service import detect_ai_text

router = APIRouter(dependencies=[Depends(require_api_key)])

_HANDLED = (ProviderError, ServiceNotConfiguredError, ValueError)


@router.post("/analyze", response_model=AnalysisResponse)
@rate_limit()
async def analyze(request: Request, payload: AnalyzeRequest):
    _ = request
    try:
        return await analyze_document(payload.content, payload.provider)
    except _HANDLED as exc:
        raise_http_error(exc)


@router.post("/compare", response_model=ComparisonResponse)
@rate_limit()
async def compare(request: Request, payload: CompareRequest):
    _ = request
    try:
        return await compare_documents(payload.document_a, payload.document_b, payload.provider)
    except _HANDLED as exc:
        raise_http_error(exc)


@router.post("/check-ai", response_model=DetectionResponse)
@rate_limit()
async def check_ai(request: Request, payload: DetectionRequest):
    _ = request
    try:
        return await detect_ai_text(payload.content, payload.provider)
    except _HANDLED as exc:
        raise_http_error(exc)
