"""
Request logging middleware
"""
import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from jira_assistant.utils.logger import get_logger

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    One log line per request with status and duration

    Request bodies carry Jira and provider credentials and are never logged.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        if request.url.path == "/health" or request.method == "OPTIONS":
            return await call_next(request)

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = int((time.time() - start_time) * 1000)
            logger.error(f"{request.method} {request.url.path} failed ({duration_ms}ms)", exc_info=True)
            raise

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(f"{request.method} {request.url.path} {response.status_code} ({duration_ms}ms)")
        response.headers["X-Process-Time"] = str(duration_ms)
        return response
