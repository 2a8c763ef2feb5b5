"""
Exception handlers producing the API error shape:

    {"error": <kind>, "message": <text>, "details": <optional>}

AppError subclasses carry their own status code. Anything unexpected is
logged with its traceback and reported as a generic 500.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.infrastructure.observability.logging import get_logger
from app.utils.errors import AppError

logger = get_logger(__name__)

_HTTP_ERROR_NAMES = {
    400: "ValidationError",
    401: "UnauthorizedError",
    403: "ForbiddenError",
    404: "NotFoundError",
    405: "MethodNotAllowed",
    409: "ConflictError",
}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning(
        "Request failed",
        error=exc.name,
        message=exc.message,
        status_code=exc.status_code,
        method=request.method,
        path=request.url.path,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    logger.info("Request validation failed", path=request.url.path, errors=len(details))
    return JSONResponse(
        status_code=400,
        content={"error": "ValidationError", "message": "Invalid request", "details": details},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = "Route not found"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": _HTTP_ERROR_NAMES.get(exc.status_code, "HTTPError"), "message": message},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        error_type=type(exc).__name__,
        method=request.method,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content={"error": "InternalServerError", "message": "An unexpected error occurred"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
