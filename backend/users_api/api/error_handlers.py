"""Error Handlers — global exception handlers for the Users API.

Invariants:
    - UsersApiError → plain-text body with the error's own status code
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Two-layer handler: domain (UsersApiError), catch-all. Bodies are decoded by a
      route dependency, so framework request validation never fires
    - Plain text rather than a JSON envelope: clients of this API read the
      message body directly
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse

from users_api.core.errors import UsersApiError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(UsersApiError)
    async def users_api_error_handler(request: Request, exc: UsersApiError):
        """Handle all Users API domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={
                **exc.to_log_extra(),
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.http_status,
            },
        )
        return PlainTextResponse(exc.to_response(), status_code=exc.http_status)


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all; never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        return PlainTextResponse(
            "internal server error\n",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
