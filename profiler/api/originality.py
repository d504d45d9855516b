from fastapi import APIRouter, Depends, Request

from profiler.api.errors import raise_http_error
from profiler.core.errors import ProviderError, ServiceNotConfiguredError
from profiler.core.rate_limit import rate_limit
from profiler.core.security import require_api_key
from profiler.schemas.evaluation import (
    DualEvaluateRequest,
    DualEvaluationResponse,
    EvaluateRequest,
    EvaluationResponse,
)
from profiler.services.evaluation_service import evaluate_document, evaluate_dual

router = APIRouter(dependencies=[Depends(require_api_key)])

_HANDLED = (ProviderError, ServiceNotConfiguredError, ValueError)


@router.post("/originality/evaluate", response_model=EvaluationResponse)
@rate_limit()
async def evaluate(request: Request, payload: EvaluateRequest):
    _ = request
    try:
        return await evaluate_document(
            payload.content,
            payload.provider,
            mode=payload.mode,
            comprehensive=payload.comprehensive,
        )
    except _HANDLED as exc:
        raise_http_error(exc)


@router.post("/originality/evaluate-dual", response_model=DualEvaluationResponse)
@rate_limit()
async def evaluate_pair(request: Request, payload: DualEvaluateRequest):
    _ = request
    try:
        return await evaluate_dual(
            payload.document_a,
            payload.document_b,
            payload.provider,
            mode=payload.mode,
            comprehensive=payload.comprehensive,
        )
    except _HANDLED as exc:
        raise_http_error(exc)
