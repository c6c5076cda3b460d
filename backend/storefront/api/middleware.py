"""API middleware for request processing."""

import logging
import time
import uuid
from collections import defaultdict, deque
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

_STALE_CLIENT_THRESHOLD = 300  # seconds before a silent client's entry is evicted


def _client_key(request: Request) -> str:
    """Rate-limit and log key: the forwarded user id, else the client address."""
    user_id = request.headers.get("X-User-ID")
    if user_id:
        return f"user:{user_id}"
    return request.client.host if request.client else "unknown"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with its outcome and tags it with a request id."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        start_time = time.monotonic()

        logger.info(
            "Request: %s %s",
            request.method,
            request.url.path,
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "client": _client_key(request),
            },
        )

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.monotonic() - start_time
            logger.error(
                "Request failed after %.3fs: %s",
                process_time,
                e,
                extra={"request_id": request_id, "process_time_s": round(process_time, 3)},
            )
            raise

        process_time = time.monotonic() - start_time
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "Response: %s in %.3fs",
            response.status_code,
            process_time,
            extra={
                "request_id": request_id,
                "status_code": response.status_code,
                "process_time_s": round(process_time, 3),
            },
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.3f}"
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window rate limiting per user (or per address when anonymous).

    Each client keeps a deque of request times inside the current window.
    Clients idle for longer than ``_STALE_CLIENT_THRESHOLD`` are dropped on
    the next sweep.
    """

    exempt_suffixes = ("/health",)

    def __init__(self, app, requests_per_window: int = 120, window_seconds: int = 60) -> None:
        super().__init__(app)
        self.requests_per_window = requests_per_window
        self.window_seconds = window_seconds
        self._hits: dict[str, deque[float]] = defaultdict(deque)
        self._next_sweep = time.monotonic() + _STALE_CLIENT_THRESHOLD

    def _sweep(self, now: float) -> None:
        if now < self._next_sweep:
            return
        idle_since = now - _STALE_CLIENT_THRESHOLD
        for client_id in [cid for cid, hits in self._hits.items() if not hits or hits[-1] < idle_since]:
            del self._hits[client_id]
        self._next_sweep = now + _STALE_CLIENT_THRESHOLD

    def _admit(self, client_id: str, now: float) -> int:
        """Record a hit and return the remaining quota, or -1 when over the limit."""
        hits = self._hits[client_id]
        while hits and hits[0] <= now - self.window_seconds:
            hits.popleft()
        if len(hits) >= self.requests_per_window:
            return -1
        hits.append(now)
        return self.requests_per_window - len(hits)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path.endswith(self.exempt_suffixes):
            return await call_next(request)

        client_id = _client_key(request)
        now = time.monotonic()
        self._sweep(now)

        remaining = self._admit(client_id, now)
        if remaining < 0:
            logger.warning("Rate limit exceeded for %s", client_id)
            return JSONResponse(
                status_code=429,
                content={"success": False, "message": "Rate limit exceeded"},
                headers={
                    "Retry-After": str(self.window_seconds),
                    "X-RateLimit-Limit": str(self.requests_per_window),
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.requests_per_window)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response
