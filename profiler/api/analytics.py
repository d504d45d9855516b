from fastapi import APIRouter, Depends, Query

from profiler.analytics import db as analytics_db
from profiler.core.security import require_api_key

router = APIRouter()


@router.get("/analytics/summary")
def summary(_: None = Depends(require_api_key)):
    return analytics_db.get_summary()


@router.get("/analytics/latest")
def latest(
    limit: int = Query(default=20, ge=1, le=200),
    _: None = Depends(require_api_key),
):
    return analytics_db.get_latest(limit=limit)
