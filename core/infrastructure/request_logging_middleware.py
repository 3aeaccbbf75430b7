"""Middleware that logs one line per request, tagged with the visitor session."""

import re
import time
import uuid

import structlog
import structlog.contextvars
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger("request")

QUIET_PATHS = ("/health", "/favicon.ico")
SESSION_PATH = re.compile(r"^/api/landing/sessions/([0-9a-f]+)")
CONTEXT_KEYS = ("request_id", "method", "path", "session_id")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path.endswith(QUIET_PATHS):
            return await call_next(request)

        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:8]
        session_match = SESSION_PATH.match(path)
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=path,
            session_id=session_match.group(1) if session_match else None,
        )

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error("request_failed", duration_ms=_elapsed_ms(start))
            raise
        else:
            log = logger.warning if response.status_code >= 500 else logger.info
            log(
                "request_completed",
                status_code=response.status_code,
                duration_ms=_elapsed_ms(start),
            )
            response.headers["x-request-id"] = request_id
            return response
        finally:
            structlog.contextvars.unbind_contextvars(*CONTEXT_KEYS)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 1)
