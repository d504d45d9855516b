from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

from profiler.api.errors import raise_http_error
from profiler.core.errors import ServiceNotConfiguredError
from profiler.core.rate_limit import rate_limit
from profiler.core.security import require_api_key
from profiler.schemas.research import (
    ExtractTextResponse,
    FetchUrlRequest,
    FetchUrlResponse,
    SearchRequest,
    SearchResponse,
)
from profiler.services.document_service import extract_text
from profiler.services.research_service import fetch_url_content, search_google

router = APIRouter(dependencies=[Depends(require_api_key)])

MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MB


@router.post("/search-google", response_model=SearchResponse)
@rate_limit()
async def search(request: Request, payload: SearchRequest):
    _ = request
    try:
        return await search_google(payload.query, payload.num_results, prefetch=payload.prefetch)
    except (ServiceNotConfiguredError, ValueError) as exc:
        raise_http_error(exc)


@router.post("/fetch-url-content", response_model=FetchUrlResponse)
@rate_limit()
async def fetch_url(request: Request, payload: FetchUrlRequest):
    _ = request
    try:
        return await fetch_url_content(payload.url)
    except ValueError as exc:
        raise_http_error(exc)


@router.post("/extract-text", response_model=ExtractTextResponse)
@rate_limit()
async def extract_text_from_upload(request: Request, file: UploadFile = File(...)):
    _ = request
    filename = (file.filename or "").strip()
    if not filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Filename is required.")

    content = await file.read(MAX_UPLOAD_BYTES + 1)
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="File exceeds 10MB limit.")

    try:
        return extract_text(filename, content)
    except ValueError as exc:
        raise_http_error(exc)
