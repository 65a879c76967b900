"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rediscover.interface.api.routes import auth, health, invites
from rediscover.interface.error import register_error_handlers
from rediscover.util.di.container import create_container, setup_di
from rediscover.util.observability import instrument_fastapi, instrument_httpx


def create_app(
    container: AsyncContainer | None = None, instrument: bool = True
) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this function when
    `instrument` is set; `scripts/start_app.py` handles this.

    Args:
        container: DI container to serve requests from. Defaults to the
            production container built from the environment.
        instrument: Whether to attach logfire instrumentation

    Returns:
        Configured application
    """
    if instrument:
        instrument_httpx()

    app_instance = FastAPI(
        title="Rediscover City API",
        description="Identity and access control for the Rediscover City location-discovery API",
        version="0.1.0",
    )

    if instrument:
        instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "https://app.rediscover.city",
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(invites.router)

    return app_instance
