from __future__ import annotations

import logging
import traceback
from dataclasses import asdict, dataclass
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, NoResultFound
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_api.context import get_correlation_id
from catalog_api.core.config import get_settings


logger = logging.getLogger("catalog_api.request")


@dataclass
class ErrorEnvelope:
    message: str
    correlation_id: str | None
    status: str = "error"


def _correlation_id(request: Request) -> str | None:
    return get_correlation_id() or getattr(request.state, "correlation_id", None)


def error_response(
    request: Request,
    *,
    status_code: int,
    message: str,
    extra: dict[str, Any] | None = None,
) -> JSONResponse:
    payload = asdict(ErrorEnvelope(message=message, correlation_id=_correlation_id(request)))
    if extra:
        payload.update(extra)
    return JSONResponse(status_code=status_code, content=payload)


def _validation_message(exc: RequestValidationError) -> str:
    parts: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = str(error.get("msg", "invalid value"))
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "invalid request"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = error_response(request, status_code=exc.status_code, message=str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(request, status_code=status.HTTP_400_BAD_REQUEST, message=_validation_message(exc))


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("http.integrity_error", extra={"path": request.url.path, "error": str(exc.orig)[:500]})
    return error_response(request, status_code=status.HTTP_409_CONFLICT, message="resource already exists")


async def no_result_handler(request: Request, exc: NoResultFound) -> JSONResponse:
    return error_response(request, status_code=status.HTTP_404_NOT_FOUND, message="resource not found")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if get_settings().is_production:
        return error_response(
            request,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="internal server error",
        )
    return error_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message=str(exc) or exc.__class__.__name__,
        extra={"error": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, integrity_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(NoResultFound, no_result_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
