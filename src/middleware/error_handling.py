"""
Error handling middleware.
Centralizes error handling and response formatting for the chat relay.
"""
import json
import logging
import traceback
from typing import Callable, Optional

from fastapi import Request, Response, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from src.api.errors import MessageRequiredError, RelayError

logger = logging.getLogger(__name__)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware for centralized error handling and logging."""

    def __init__(self, app, is_production: bool = True):
        super().__init__(app)
        self.is_production = is_production

    async def _get_request_body(self, request: Request) -> Optional[dict]:
        """
        Safely extract request body for error logging.
        """
        try:
            if hasattr(request.state, "body"):
                body_bytes = request.state.body
            else:
                body_bytes = await request.body()
                request.state.body = body_bytes

            if not body_bytes:
                return None

            return json.loads(body_bytes.decode("utf-8"))
        except (ValueError, RuntimeError):
            return None

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            response = await call_next(request)
            return response

        except RelayError as e:
            log = logger.warning if e.status_code < 500 else logger.error
            log(
                e.error,
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "error_type": type(e).__name__,
                    "status_code": e.status_code,
                },
            )
            return JSONResponse(status_code=e.status_code, content=e.to_content())

        except Exception as e:
            body = await self._get_request_body(request)
            tb_str = traceback.format_exc()

            logger.error(
                "Unhandled error",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "request_body": body,
                    "traceback": tb_str if not self.is_production else None,
                },
                exc_info=True,
            )

            # Don't expose internal errors in production
            if self.is_production:
                message = "An internal error occurred. Please try again later."
            else:
                message = f"{type(e).__name__}: {str(e)}"

            response_content = {
                "error": "Internal Server Error",
                "message": message,
            }

            if not self.is_production:
                response_content["traceback"] = tb_str

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=response_content,
            )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    """
    Render request validation failures.

    A body that cannot yield a usable `message` (not JSON, malformed JSON,
    wrong type) is reported as MessageRequiredError. Anything else keeps
    FastAPI's default 422 rendering.
    """
    errors = exc.errors()
    if not any(tuple(err.get("loc", ()))[:1] == ("body",) for err in errors):
        return await request_validation_exception_handler(request, exc)

    error = MessageRequiredError()
    logger.warning(
        error.error,
        extra={
            "path": request.url.path,
            "method": request.method,
            "errors": [err.get("type") for err in errors],
        },
    )
    return JSONResponse(status_code=error.status_code, content=error.to_content())
