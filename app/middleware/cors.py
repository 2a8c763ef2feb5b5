"""
CORS for the browser dashboard.

Only origins listed in settings.CORS_ORIGINS get CORS headers. A preflight from
any other origin is answered with 403 in the API's error shape. The request id
header is exposed so the dashboard can quote it in bug reports.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from app.config import settings
from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

API_METHODS = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
API_REQUEST_HEADERS = ("Authorization", "Content-Type", "X-Request-ID")
EXPOSED_HEADERS = ("X-Request-ID",)
PREFLIGHT_MAX_AGE = 600


class CORSMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        allowed_origins: list[str] | None = None,
        allow_credentials: bool = True,
    ):
        super().__init__(app)
        self.allowed_origins = frozenset(
            allowed_origins if allowed_origins is not None else settings.CORS_ORIGINS
        )
        self.allow_credentials = allow_credentials

        logger.info(
            "CORS middleware initialized",
            allowed_origins=sorted(self.allowed_origins),
            allow_credentials=allow_credentials,
        )

    def _origin_headers(self, origin: str) -> dict[str, str]:
        headers = {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
        if self.allow_credentials:
            headers["Access-Control-Allow-Credentials"] = "true"
        return headers

    async def dispatch(self, request, call_next):
        origin = request.headers.get("origin")
        is_preflight = (
            request.method == "OPTIONS"
            and origin is not None
            and "access-control-request-method" in request.headers
        )

        if is_preflight:
            if origin not in self.allowed_origins:
                logger.warning("CORS preflight rejected", origin=origin, path=request.url.path)
                return JSONResponse(
                    status_code=403,
                    content={"error": "ForbiddenError", "message": "Origin not allowed"},
                )
            return Response(
                status_code=204,
                headers={
                    **self._origin_headers(origin),
                    "Access-Control-Allow-Methods": ", ".join(API_METHODS),
                    "Access-Control-Allow-Headers": ", ".join(API_REQUEST_HEADERS),
                    "Access-Control-Max-Age": str(PREFLIGHT_MAX_AGE),
                },
            )

        response = await call_next(request)

        if origin in self.allowed_origins:
            response.headers.update(self._origin_headers(origin))
            response.headers["Access-Control-Expose-Headers"] = ", ".join(EXPOSED_HEADERS)
        elif origin:
            logger.warning("CORS request from disallowed origin", origin=origin, path=request.url.path)

        return response
