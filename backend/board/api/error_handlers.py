"""Error Handlers — global exception handlers for the board.

Invariants:
    - BadRequestError (malformed or unauthorized) → the same generic 400 page, whatever
      check failed; the specific error code only reaches the log
    - Other BoardError → structured JSON with public code and severity
    - A tracking cookie issued before the error is still sent with the error response
    - 404 → not_found page; 405 → the generic 400 page (an unsupported method is a
      malformed request); other HTTPExceptions keep FastAPI's default (401 keeps
      its WWW-Authenticate header)
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Extracted from main.py, registered once via register_error_handlers
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from board.api.rendering import templates
from board.core.errors import BadRequestError, BoardError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_board_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _bad_request_page(request: Request) -> Response:
    return templates.TemplateResponse(
        request, "bad_request.html", {},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


def _with_pending_cookies(request: Request, response: Response) -> Response:
    jar = getattr(request.state, "cookie_jar", None)
    if jar is None:
        return response
    return jar.apply(response)


def _register_board_error_handler(app: FastAPI) -> None:

    @app.exception_handler(BoardError)
    async def board_error_handler(request: Request, exc: BoardError):
        """Handle all board domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "user": exc.context.user,
            "post_id": exc.context.post_id,
        }
        if isinstance(exc, BadRequestError):
            logger.warning(f"Rejected request: {exc.message}", extra=extra)
            return _with_pending_cookies(request, _bad_request_page(request))
        logger.error(f"BoardError: {exc.message}", extra=extra)
        return _with_pending_cookies(request, JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        ))


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def board_http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return templates.TemplateResponse(
                request, "not_found.html", {},
                status_code=status.HTTP_404_NOT_FOUND,
            )
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            logger.warning(
                f"Rejected request: unsupported method {request.method}",
                extra={"error_code": "MALFORMED_REQUEST", "path": request.url.path},
            )
            return _bad_request_page(request)
        return await http_exception_handler(request, exc)


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return PlainTextResponse(
            f"Internal error ({ErrorSeverity.CRITICAL.value})",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
