from contextlib import asynccontextmanager
import logging

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from neo4j.exceptions import AuthError, ServiceUnavailable
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.core.config import settings
from app.core.limiter import limiter
from app.core.logging import setup_logging
from app.db.session import create_driver
from app.ingestion.errors import IngestionError
from app.schemas.imports import ErrorResponse

setup_logging()

logger = logging.getLogger(__name__)

if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        environment=settings.APP_ENV,
        send_default_pii=False,
    )
    logger.info("Sentry initialized")


@asynccontextmanager
async def lifespan(app: FastAPI):
    driver = create_driver()
    try:
        await driver.verify_connectivity()
        logger.info("Connected to Neo4j at %s (database %s)", settings.NEO4J_URI, settings.NEO4J_DATABASE)
    except (ServiceUnavailable, AuthError) as exc:
        # Serve anyway; routes report the outage per request.
        logger.warning("Neo4j not reachable at startup (%s): %s", settings.NEO4J_URI, exc)
    app.state.neo4j_driver = driver
    try:
        yield
    finally:
        await driver.close()
        logger.info("Neo4j driver closed")


app = FastAPI(
    title="Supply Graph API",
    version="0.1.0",
    docs_url="/api/docs" if settings.APP_ENV != "production" else None,
    redoc_url="/api/redoc" if settings.APP_ENV != "production" else None,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(IngestionError)
async def graph_error_handler(request: Request, exc: IngestionError):
    """Store failures that escape a route surface as ``500 {"error": ...}``."""
    logger.error("%s on %s %s: %s", exc.kind.value, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=500, content=ErrorResponse(error=exc.message).model_dump())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception: %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error."})


# ─── Routers ───
from app.api.v1.router import api_router  # noqa: E402

app.include_router(api_router)


@app.get("/health")
async def health():
    return {"status": "ok", "env": settings.APP_ENV}
