import logging
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import ENVIRONMENT, FRONTEND_URL, LOG_LEVEL, VERSION, is_development
from app.core.errors import AppError
from app.core.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    UnhandledErrorMiddleware,
    internal_error_response,
)
from app.core.rate_limit import RateLimitMiddleware, limiter
from app.db.init import init_db
from app.db.session import get_db
from app.api import users, predictions, chat, notifications, weather
from app.auth.jwt import router as auth_router

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()

AVAILABLE_ENDPOINTS = [
    "GET /health",
    "POST /api/register",
    "POST /api/login",
    "POST /api/logout",
    "POST /api/reset-password",
    "GET /api/weather?location=<location>",
    "POST /api/predict",
    "POST /api/chat",
    "GET /api/notifications",
    "POST /api/notifications",
    "GET /api/my-predictions",
    "GET /api/chat-history",
    "GET /api/yield-history",
    "GET /api/weather-history",
    "GET /api/profile",
]

app = FastAPI(
    title="agripredict",
    description="Backend API for the AgriPredict AI farming dashboard",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Last added runs first: logging -> security headers -> CORS -> rate limit -> errors
app.add_middleware(UnhandledErrorMiddleware)
app.add_middleware(RateLimitMiddleware, limiter=limiter)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# --------------------------------------------------------------------
# Error handlers
# --------------------------------------------------------------------
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "message": exc.message, "timestamp": _now_iso()},
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        location = err["loc"][0] if err["loc"] else "body"
        field = ".".join(str(part) for part in err["loc"][1:]) or location
        details.append({"field": field, "location": location, "message": err["msg"]})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "details": details},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "Endpoint not found",
                "message": f"{request.method} {request.url.path} is not a valid endpoint",
                "availableEndpoints": AVAILABLE_ENDPOINTS,
                "timestamp": _now_iso(),
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "timestamp": _now_iso()},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return internal_error_response(exc)


# Initialize database
@app.on_event("startup")
def startup_event():
    init_db()
    logger.info("AgriPredict API started (environment: %s)", ENVIRONMENT)


# Include routers
app.include_router(auth_router, prefix="/api", tags=["auth"])
app.include_router(users.router, prefix="/api", tags=["users"])
app.include_router(weather.router, prefix="/api", tags=["weather"])
app.include_router(predictions.router, prefix="/api", tags=["predictions"])
app.include_router(chat.router, prefix="/api", tags=["chat"])
app.include_router(notifications.router, prefix="/api", tags=["notifications"])


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    body = {
        "status": "OK",
        "timestamp": _now_iso(),
        "uptime": round(time.monotonic() - STARTED_AT, 3),
        "version": VERSION,
        "environment": ENVIRONMENT,
    }
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Health check could not reach the database: %s", e)
        body.update(status="ERROR", database="Disconnected")
        if is_development():
            body["error"] = str(e)
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
    body["database"] = "Connected"
    return body
