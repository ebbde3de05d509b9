# user_directory/adapters/api/errors.py
from typing import Any, Dict, List, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from user_directory.core.domain.exceptions import (
    AlreadyExistsError,
    DomainError,
    InternalError,
    NotFoundError,
    ValidationError,
)

logger = structlog.get_logger()

GENERIC_INTERNAL_MESSAGE = "Internal Server Error"

# Starlette renamed the 422 constant across releases; the code itself is stable.
HTTP_422_UNPROCESSABLE = 422

# Checked in order; the first matching base class wins.
_STATUS_BY_ERROR = (
    (ValidationError, HTTP_422_UNPROCESSABLE),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AlreadyExistsError, status.HTTP_409_CONFLICT),
    (InternalError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: DomainError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def error_body(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {"error": {"code": code, "message": message, "details": details}}


def _field_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {
            "field": ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")),
            "message": err.get("msg", ""),
        }
        for err in errors
    ]


def register_exception_handlers(app: FastAPI) -> None:
    """
    Maps every failure onto the standard error envelope
    ``{"error": {"code", "message", "details"}}``.
    """

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        status_code = status_for(exc)
        if isinstance(exc, InternalError):
            # Storage error text stays in the logs.
            logger.error("internal_error", path=request.url.path, error=exc.message)
            return JSONResponse(
                status_code=status_code,
                content=error_body(exc.code, GENERIC_INTERNAL_MESSAGE),
            )

        logger.info("domain_error", path=request.url.path, code=exc.code, error=exc.message)
        return JSONResponse(
            status_code=status_code,
            content=error_body(exc.code, exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=HTTP_422_UNPROCESSABLE,
            content=error_body(
                ValidationError.code,
                "Request validation failed",
                {"errors": jsonable_encoder(_field_errors(list(exc.errors())))},
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Standardizes HTTP errors raised by routing (unknown path, wrong method).
        """
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            code, message = NotFoundError.code, "No such route" if exc.detail == "Not Found" else str(exc.detail)
        else:
            code, message = "http_error", str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(code, message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catches unhandled exceptions to avoid leaking stack traces.
        """
        logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(InternalError.code, GENERIC_INTERNAL_MESSAGE),
        )
