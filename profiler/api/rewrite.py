from fastapi import APIRouter, Depends, Request

from profiler.api.errors import raise_http_error
from profiler.core.errors import ProviderError, ServiceNotConfiguredError
from profiler.core.rate_limit import rate_limit
from profiler.core.security import require_api_key
from profiler.schemas.rewrite import RewriteRequest, RewriteResponse, TranslateRequest, TranslateResponse
from profiler.services.rewrite_service import rewrite_document, translate_document

router = APIRouter(dependencies=[Depends(require_api_key)])

_HANDLED = (ProviderError, ServiceNotConfiguredError, ValueError)


@router.post("/rewrite", response_model=RewriteResponse)
@rate_limit()
async def rewrite(request: Request, payload: RewriteRequest):
    _ = request
    try:
        return await rewrite_document(
            payload.original_text,
            payload.instructions,
            payload.provider,
            payload.options,
        )
    except _HANDLED as exc:
        raise_http_error(exc)


@router.post("/translate", response_model=TranslateResponse)
@rate_limit()
async def translate(request: Request, payload: TranslateRequest):
    _ = request
    try:
        return await translate_document(
            payload.text,
            payload.target_language,
            payload.provider,
            preserve_formatting=payload.preserve_formatting,
            preserve_tone=payload.preserve_tone,
        )
    except _HANDLED as exc:
        raise_http_error(exc)
