"""Error envelope shared by the exception handlers and the request-ID middleware."""

from fastapi.responses import JSONResponse


def error_response(status_code: int, message: str) -> JSONResponse:
    """{"success": false, "message": ...} with the given status."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )
