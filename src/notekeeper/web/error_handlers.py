import logging

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from notekeeper.errors import InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    # InvalidIdError is also a NotFoundError: malformed ids are reported like missing notes
    if isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    elif isinstance(exc, InvalidArgumentError):
        status_code = 400
        error_type = "invalid_argument"
    else:
        # Default for any other UserError subclass
        status_code = 400
        error_type = "bad_request"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def storage_error_handler(_: Request, exc: Exception) -> Response:
    """Handle persistence failures (503) without exposing driver details."""
    logger.error("Storage error: %s", exc, exc_info=exc)
    return create_json_error_response(
        status_code=503, message="Storage is temporarily unavailable.", error_type="storage_error"
    )


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
