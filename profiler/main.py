import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from profiler.api.health import router as health_router
from profiler.api.analysis import router as analysis_router
from profiler.api.rewrite import router as rewrite_router
from profiler.api.originality import router as originality_router
from profiler.api.research import router as research_router
from profiler.api.share import router as share_router
from profiler.api.analytics import router as analytics_router
from profiler.core.cors import cors_allow_origin_regex, cors_allowed_origins
from profiler.core.rate_limit import limiter
from profiler.core.config import settings
from dotenv import load_dotenv
from profiler.core.lifespan import lifespan

load_dotenv()
logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="Cognitive Profiler API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_origin_regex=cors_allow_origin_regex(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health_router, prefix="/api", tags=["Health"])
app.include_router(analysis_router, prefix="/api", tags=["Analysis"])
app.include_router(rewrite_router, prefix="/api", tags=["Rewrite"])
app.include_router(originality_router, prefix="/api", tags=["Originality"])
app.include_router(research_router, prefix="/api", tags=["Research"])
app.include_router(share_router, prefix="/api", tags=["Share"])
app.include_router(analytics_router, prefix="/api", tags=["Analytics"])
