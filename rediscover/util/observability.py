"""Observability configuration using Logfire.

Domain services log through logfire directly:

    import logfire

    with logfire.span("invite_service.create_invite", email=email):
        logfire.info("Invite created", invite_id=str(invite.id))

This module configures logfire once at startup and instruments the
libraries the API runs on (FastAPI, SQLAlchemy, httpx).
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from rediscover.config import Settings

SERVICE_NAME = "rediscover-api"

# Headers whose values must never end up in traces
_REDACTED_HEADERS = ("authorization", "cookie")


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the API process.

    Cloud sending is enabled when OBSERVABILITY__SEND_TO_LOGFIRE is true,
    or when it is unset and OBSERVABILITY__LOGFIRE_TOKEN is present.
    Console output is always on; verbose in debug mode.

    Args:
        settings: Application settings
    """
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    else:
        send_to_logfire = bool(settings.observability.logfire_token)

    config_kwargs = {
        "service_name": SERVICE_NAME,
        "service_version": "1.0.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "scrubbing": logfire.ScrubbingOptions(
            extra_patterns=["password", "access_token", "refresh_token", "code"]
        ),
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument FastAPI application with Logfire.

    Request headers are not captured since they carry session tokens.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        result = {
            k: v for k, v in attributes.items() if k.lower() not in _REDACTED_HEADERS
        }
        if hasattr(request, "method"):
            result["method"] = request.method
        if hasattr(request, "url"):
            result["path"] = request.url.path
        if hasattr(request, "client") and request.client:
            result["client_host"] = request.client.host
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_map_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Instrument httpx so calls to Google show up as child spans."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
