"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from papertrade.config.settings import get_settings
from papertrade.config.logging_config import setup_logging
from papertrade.repositories.sqlalchemy.database import init_db
from papertrade.api.routers import (
    accounts_router,
    trades_router,
    social_router,
    copy_trading_router,
    leaderboard_router,
)
from papertrade.core.exceptions import AppError, NotFoundError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    setup_logging()
    init_db()
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Paper trading with copy-trade fanout",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(accounts_router)
app.include_router(trades_router)
app.include_router(social_router)
app.include_router(copy_trading_router)
app.include_router(leaderboard_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=404 if isinstance(exc, NotFoundError) else 400,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
