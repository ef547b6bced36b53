"""
Error Handler Middleware

Global exception handling for the API.

Every error leaves the API in the same envelope:

    {
        "error": {
            "code": "NOT_FOUND",
            "message": "User with id '42' not found",
            "details": {}
        }
    }

Exception Handling:
===================
1. SpeadwearException subclasses → status from their ErrorKind, body from to_dict()
2. Request validation errors     → 400 VALIDATION_ERROR with field errors
3. Starlette HTTP exceptions     → their status (unknown route, wrong method)
4. Other exceptions              → 500 with generic message (details hidden)

Usage:
======
    from src.api.middleware.error_handler import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.shared.core.exceptions import ErrorKind, SpeadwearException
from src.shared.core.logging import logger


def _error_body(code: str, message: str, details: dict | None = None) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
        }
    }


def _validation_response(request: Request, errors: list) -> JSONResponse:
    # ctx may carry exception objects; jsonable_encoder flattens them
    errors = jsonable_encoder(errors, custom_encoder={Exception: str})
    logger.warning(
        "Validation error",
        errors=errors,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=400,
        content=_error_body(
            ErrorKind.VALIDATION.value,
            "Request validation failed",
            {"errors": errors},
        ),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Set up global exception handlers.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(SpeadwearException)
    async def speadwear_exception_handler(
        request: Request,
        exc: SpeadwearException,
    ) -> JSONResponse:
        """
        Handle application exceptions.

        The status code comes from the exception's kind, never its message.
        """
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "Application error",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Request body, query or path did not match the declared schema."""
        return _validation_response(request, list(exc.errors()))

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: ValidationError,
    ) -> JSONResponse:
        """Pydantic errors raised inside handlers or services."""
        return _validation_response(request, exc.errors())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        code = {
            401: ErrorKind.AUTHENTICATION.value,
            403: ErrorKind.FORBIDDEN.value,
            404: ErrorKind.NOT_FOUND.value,
        }.get(exc.status_code, "HTTP_ERROR")
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Handle unexpected exceptions.

        Full error details are logged but not exposed to clients.
        """
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                ErrorKind.UNEXPECTED.value,
                "An unexpected error occurred",
            ),
        )
