"""Centralized exception handlers for the FastAPI application.

Domain and identity exceptions are mapped to HTTP responses with a
consistent error format.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Usage:
    from userhub.presentation.api.exception_handlers import (
        setup_exception_handlers,
    )

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from userhub.domain.user import (
    CannotDeleteSelfError,
    EmailAlreadyExistsError,
    UserNotFoundError,
)
from userhub.exceptions import (
    AuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    UnsupportedOperationError,
    WeakPasswordError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Exception Type to HTTP Status Mapping
# =============================================================================

EXCEPTION_TO_STATUS: dict[type[Exception], tuple[int, str]] = {
    WeakPasswordError: (status.HTTP_400_BAD_REQUEST, "WEAK_PASSWORD"),
    CannotDeleteSelfError: (status.HTTP_400_BAD_REQUEST, "CANNOT_DELETE_SELF"),
    InvalidCredentialsError: (status.HTTP_401_UNAUTHORIZED, "INVALID_CREDENTIALS"),
    InvalidTokenError: (status.HTTP_401_UNAUTHORIZED, "INVALID_TOKEN"),
    UserNotFoundError: (status.HTTP_404_NOT_FOUND, "USER_NOT_FOUND"),
    EmailAlreadyExistsError: (status.HTTP_409_CONFLICT, "EMAIL_ALREADY_EXISTS"),
    UnsupportedOperationError: (status.HTTP_501_NOT_IMPLEMENTED, "NOT_SUPPORTED"),
}


def _get_status_for_exception(exc: Exception) -> tuple[int, str]:
    """Determine HTTP status and error code for an exception."""
    for exc_type in type(exc).__mro__:
        if exc_type in EXCEPTION_TO_STATUS:
            return EXCEPTION_TO_STATUS[exc_type]

    # Remaining authentication errors are client errors
    return status.HTTP_400_BAD_REQUEST, "AUTH_ERROR"


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": message,
            "code": code,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(EmailAlreadyExistsError)
    @app.exception_handler(UserNotFoundError)
    @app.exception_handler(CannotDeleteSelfError)
    async def domain_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle user domain exceptions with structured response."""
        status_code, code = _get_status_for_exception(exc)

        logger.warning(
            "Domain exception on %s %s: %s (code=%s)",
            request.method,
            request.url.path,
            exc,
            code,
        )

        return _create_error_response(
            status_code=status_code,
            message=str(exc),
            code=code,
        )

    @app.exception_handler(AuthError)
    async def auth_exception_handler(
        request: Request,
        exc: AuthError,
    ) -> JSONResponse:
        """Handle identity exceptions without leaking internal details."""
        status_code, code = _get_status_for_exception(exc)

        logger.warning(
            "Authentication error on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
        )

        response = _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=code,
        )
        if status_code == status.HTTP_401_UNAUTHORIZED:
            response.headers["WWW-Authenticate"] = "Bearer"
        return response

    @app.exception_handler(UnsupportedOperationError)
    async def unsupported_operation_handler(
        request: Request,
        exc: UnsupportedOperationError,
    ) -> JSONResponse:
        """Handle identity store members that are not implemented."""
        logger.error(
            "Unsupported identity store operation on %s %s: %s",
            request.method,
            request.url.path,
            exc.operation,
        )
        return _create_error_response(
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
            message=str(exc),
            code="NOT_SUPPORTED",
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format."""
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An internal error occurred",
            code="INTERNAL_ERROR",
        )
