import contextlib
from contextlib import asynccontextmanager
import asyncio
import logging

from profiler.analytics.db import init_db, purge_old_records
from profiler.core.scoring_config import get_scoring_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    get_scoring_config()
    init_db()

    stop_event = asyncio.Event()

    async def periodic_purge() -> None:
        while not stop_event.is_set():
            try:
                deleted = purge_old_records()
                if any(deleted.values()):
                    logger.info("activity_retention_purge deleted=%s", deleted)
            except Exception as exc:  # pragma: no cover - background task must keep running
                logger.warning("activity_retention_purge_failed: %s", exc)
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=3600)
            except asyncio.TimeoutError:
                continue

    purge_task = asyncio.create_task(periodic_purge())
    yield
    stop_event.set()
    if not purge_task.done():
        purge_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await purge_task
