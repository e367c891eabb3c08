"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from scaffold_finance import __version__
from scaffold_finance.api.routes import health_router, payroll_router, projects_router
from scaffold_finance.config import Settings, get_settings
from scaffold_finance.database import create_all, get_engine, get_session_factory
from scaffold_finance.store import RecordStore, SqlRecordStore, StoreWriteError


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Builds a SQL record store from settings unless one was injected.
    """
    engine = None
    if app.state.store is None:
        engine = get_engine(app.state.settings.database_url)
        await create_all(engine)
        app.state.store = SqlRecordStore(get_session_factory(engine))
    yield
    if engine is not None:
        await engine.dispose()
        app.state.store = None


def create_app(
    store: RecordStore | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Scaffold Finance API",
        description="Pay periods, payroll reports and project cost/revenue reconciliation",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings or get_settings()
    app.state.store = store

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(StoreWriteError)
    async def store_write_exception_handler(
        request: Request, exc: StoreWriteError
    ) -> JSONResponse:
        """Surface failed writes so the caller can retry."""
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "detail": str(exc),
                "code": "STORE_WRITE_FAILED",
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(payroll_router, prefix="/api/v1")
    app.include_router(projects_router, prefix="/api/v1")

    return app


# Default app instance for uvicorn
app = create_app()
