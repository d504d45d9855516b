from __future__ import annotations

from typing import NoReturn

from fastapi import HTTPException, status

from profiler.core.errors import ProviderError, ServiceNotConfiguredError, UnsupportedProviderError

SERVICE_UNAVAILABLE_DETAIL = "The analysis service is temporarily unavailable. Please try again later."


def raise_http_error(exc: Exception) -> NoReturn:
    if isinstance(exc, UnsupportedProviderError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if isinstance(exc, ProviderError):
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=SERVICE_UNAVAILABLE_DETAIL) from exc
    if isinstance(exc, ServiceNotConfiguredError):
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    if isinstance(exc, ValueError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    raise exc
