"""Interface layer error handlers.

Route handlers map business outcomes to HTTP errors themselves; the
handlers here cover the errors any route can hit.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from rediscover.domain.error import (
    CodeGenerationExhaustedError,
    DuplicateInviteError,
    InvalidRecordError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)


async def store_unavailable_handler(
    request: Request, exc: StoreUnavailableError
) -> JSONResponse:
    """Report a lost database as a generic server error."""
    logger.error(f"Store unavailable on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


async def duplicate_invite_handler(
    request: Request, exc: DuplicateInviteError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)}
    )


async def code_generation_exhausted_handler(
    request: Request, exc: CodeGenerationExhaustedError
) -> JSONResponse:
    logger.error(f"Invite code generation exhausted: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


async def invalid_record_handler(
    request: Request, exc: InvalidRecordError
) -> JSONResponse:
    logger.warning(f"Rejected value on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": f"Invalid {exc.entity}"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the shared exception handlers to the app."""
    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)
    app.add_exception_handler(DuplicateInviteError, duplicate_invite_handler)
    app.add_exception_handler(InvalidRecordError, invalid_record_handler)
    app.add_exception_handler(
        CodeGenerationExhaustedError, code_generation_exhausted_handler
    )
