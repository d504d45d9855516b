import asyncio

from fastapi import APIRouter, Depends, Request

from profiler.api.errors import raise_http_error
from profiler.core.errors import ServiceNotConfiguredError
from profiler.core.rate_limit import rate_limit
from profiler.core.security import require_api_key
from profiler.integrations.email import share_report_via_email
from profiler.schemas.research import ShareRequest, ShareResponse

router = APIRouter(dependencies=[Depends(require_api_key)])


@router.post("/share-via-email", response_model=ShareResponse)
@rate_limit()
async def share_via_email(request: Request, payload: ShareRequest):
    _ = request
    try:
        await asyncio.to_thread(
            share_report_via_email,
            recipient=payload.recipient_email,
            subject=payload.subject,
            content=payload.content,
            sender_name=payload.sender_name,
        )
    except ServiceNotConfiguredError as exc:
        raise_http_error(exc)
    return ShareResponse(success=True, message=f"Report sent to {payload.recipient_email}.")
