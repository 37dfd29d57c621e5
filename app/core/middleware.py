import logging
import time
from datetime import datetime, timezone

from fastapi import status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import is_development

logger = logging.getLogger("app.requests")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        client = request.client.host if request.client else "unknown"
        logger.info(
            "%s %s - IP: %s - %s (%.1fms)",
            request.method, request.url.path, client, response.status_code, elapsed_ms,
        )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        if not is_development():
            response.headers.setdefault("Content-Security-Policy", "default-src 'self'")
        return response


def internal_error_response(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "message": str(exc) if is_development() else "Something went wrong",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Turn unexpected exceptions into the 500 JSON body.

    Installed innermost so the response still passes through CORS,
    security headers and request logging on its way out.
    """

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return internal_error_response(exc)
