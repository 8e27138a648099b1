"""Translation of domain errors into HTTP responses.

User actions fail only with ``LionsBibleError`` subclasses; this is the
boundary where they are recovered and shown to the user.
"""
from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from lions_bible.core.errors import (
    AlreadyFlagged,
    AlreadyVoted,
    ContainsMarkup,
    DuplicateInterpretation,
    LionsBibleError,
    NotAuthorized,
    StorageUnavailable,
    SubjectNotFound,
    TooLong,
    TooShort,
    Unauthenticated,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[LionsBibleError], HTTPStatus] = {
    Unauthenticated: HTTPStatus.UNAUTHORIZED,
    NotAuthorized: HTTPStatus.FORBIDDEN,
    SubjectNotFound: HTTPStatus.NOT_FOUND,
    AlreadyVoted: HTTPStatus.CONFLICT,
    AlreadyFlagged: HTTPStatus.CONFLICT,
    DuplicateInterpretation: HTTPStatus.CONFLICT,
    ContainsMarkup: HTTPStatus.UNPROCESSABLE_ENTITY,
    TooShort: HTTPStatus.UNPROCESSABLE_ENTITY,
    TooLong: HTTPStatus.UNPROCESSABLE_ENTITY,
    ValidationFailed: HTTPStatus.UNPROCESSABLE_ENTITY,
    StorageUnavailable: HTTPStatus.SERVICE_UNAVAILABLE,
}


def status_for(error: LionsBibleError) -> HTTPStatus:
    for error_type in type(error).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_type]
    return HTTPStatus.BAD_REQUEST


def error_response(error: LionsBibleError) -> JSONResponse:
    status_code = status_for(error)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == HTTPStatus.UNAUTHORIZED else None
    return JSONResponse(
        status_code=status_code,
        content={"detail": error.message, "code": error.code},
        headers=headers,
    )


async def handle_domain_error(request: Request, exc: LionsBibleError) -> JSONResponse:
    if isinstance(exc, StorageUnavailable):
        logger.warning("%s %s failed: storage unavailable", request.method, request.url.path)
    else:
        logger.debug("%s %s rejected: %s", request.method, request.url.path, exc.code)
    return error_response(exc)


async def handle_operational_error(request: Request, exc: OperationalError) -> JSONResponse:
    # Reads run outside Store.transaction, so their failures arrive unwrapped.
    logger.error("%s %s database failure: %s", request.method, request.url.path, exc)
    return error_response(StorageUnavailable())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LionsBibleError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(OperationalError, handle_operational_error)  # type: ignore[arg-type]
