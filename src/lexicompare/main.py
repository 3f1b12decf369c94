"""FastAPI application with lifespan startup."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

# Singleton logging before any lexicompare module logs at import time
from lexicompare.logging_config import setup_logging

setup_logging()

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker  # noqa: E402

from lexicompare import __version__  # noqa: E402
from lexicompare.api.middleware.auth import ApiKeyMiddleware  # noqa: E402
from lexicompare.api.routes import (  # noqa: E402
    comparisons,
    contracts,
    health,
    sources,
)
from lexicompare.api.schemas import APIResponse  # noqa: E402
from lexicompare.config import Settings, create_app_engine  # noqa: E402
from lexicompare.errors import ComparisonError  # noqa: E402
from lexicompare.logger import ComparisonLogger  # noqa: E402
from lexicompare.models.base import Base  # noqa: E402
from lexicompare.resilience.errors import classify_error  # noqa: E402
from lexicompare.services.data_service import DataService  # noqa: E402

_logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # 1. Use module-level settings (single source of truth)
    settings = _settings

    # 2. Create async SQLite engine (WAL set via pool-connect listener)
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    engine = create_app_engine(
        settings.database_url, echo=settings.debug_mode
    )

    # 3. Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 4. Create session factory
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    # 5. Audit logger and services
    logger = ComparisonLogger(
        log_dir=settings.log_dir, level=settings.log_level
    )
    data_service = DataService(session_factory, settings)

    # 6. Store in app.state
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.logger = logger
    app.state.data_service = data_service

    if not settings.api_key:
        _logger.warning(
            "event=no_api_key action=all_endpoints_public"
        )

    yield

    await engine.dispose()


app = FastAPI(
    title="lexicompare",
    description=(
        "Cross-source textual comparison and conflict detection"
        " for legal documents"
    ),
    version=__version__,
    openapi_url="/api/openapi.json",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan,
)


@app.exception_handler(ComparisonError)
async def comparison_error_handler(
    request: Request, exc: ComparisonError
) -> JSONResponse:
    """Render domain errors in the standard envelope with their status."""
    _logger.info(
        "event=request_failed path=%s error_class=%s status=%d error=%s",
        request.url.path,
        classify_error(exc).value,
        exc.status_code,
        exc,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=APIResponse(success=False, error=str(exc)).model_dump(),
    )


# Middleware stack (Starlette LIFO: last added = outermost = runs first)
#
# Inbound request order:
#   CORSMiddleware (outermost) -> ApiKeyMiddleware -> Router
#
# CORS must be outermost so OPTIONS preflight is answered before
# ApiKeyMiddleware rejects for missing X-API-Key.
_settings = Settings()
_cors_origins = [
    o.strip()
    for o in _settings.cors_origins.split(",")
    if o.strip()
]

app.add_middleware(ApiKeyMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-API-Key"],
    allow_credentials=False,
)

# Routes
app.include_router(health.router)
app.include_router(sources.router)
app.include_router(comparisons.router)
app.include_router(contracts.router)
