import logging
import math
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from fastapi import status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import RATE_LIMIT_WINDOW_SECONDS, LOGIN_RATE_LIMIT, GENERAL_RATE_LIMIT

logger = logging.getLogger(__name__)


class RateLimitRule:
    def __init__(self, path_prefix: str, limit: int, message: str):
        self.path_prefix = path_prefix
        self.limit = limit
        self.message = message

    def matches(self, path: str) -> bool:
        return path.startswith(self.path_prefix)


class RateLimiter:
    """Fixed-window request counter per (rule, client).

    Every rule whose prefix matches a request is charged in order; the first
    rule that goes over its budget rejects the request.
    """

    def __init__(self, rules: List[RateLimitRule], window_seconds: int,
                 clock: Callable[[], float] = time.monotonic):
        self.rules = rules
        self.window_seconds = window_seconds
        self.clock = clock
        self._windows: Dict[Tuple[str, str], List[float]] = {}
        self._last_sweep = clock()
        self._lock = threading.Lock()

    def _sweep(self, now: float) -> None:
        # at most once per window; callers hold the lock
        if now - self._last_sweep < self.window_seconds:
            return
        self._windows = {
            key: window for key, window in self._windows.items()
            if now - window[0] < self.window_seconds
        }
        self._last_sweep = now

    def hit(self, client: str, path: str) -> Optional[Tuple[RateLimitRule, int]]:
        """Charge one request; return ``(rule, retry_after)`` if it is over budget."""
        now = self.clock()
        with self._lock:
            self._sweep(now)
            for rule in self.rules:
                if not rule.matches(path):
                    continue
                key = (rule.path_prefix, client)
                window = self._windows.get(key)
                if window is None or now - window[0] >= self.window_seconds:
                    window = [now, 0]
                    self._windows[key] = window
                window[1] += 1
                if window[1] > rule.limit:
                    retry_after = max(1, math.ceil(window[0] + self.window_seconds - now))
                    return rule, retry_after
        return None

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()
            self._last_sweep = self.clock()


def default_rules() -> List[RateLimitRule]:
    return [
        RateLimitRule("/api/login", LOGIN_RATE_LIMIT, "Too many login attempts, please try again later"),
        RateLimitRule("/api/", GENERAL_RATE_LIMIT, "Too many requests, please try again later"),
    ]


limiter = RateLimiter(default_rules(), RATE_LIMIT_WINDOW_SECONDS)


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, limiter: RateLimiter = limiter):
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(self, request, call_next):
        client = request.client.host if request.client else "unknown"
        blocked = self.limiter.hit(client, request.url.path)
        if blocked:
            rule, retry_after = blocked
            logger.warning("Rate limit hit on %s by %s", request.url.path, client)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"error": rule.message},
                headers={"Retry-After": str(retry_after)},
            )
        return await call_next(request)
