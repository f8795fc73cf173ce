import time
import uuid
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("kanban.access")

# Asset fetches are logged at DEBUG so board traffic stays readable
QUIET_PREFIXES = ("/static/", "/health")


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.request_id = request_id
        path = request.url.path
        level = logging.DEBUG if path.startswith(QUIET_PREFIXES) else logging.INFO
        base = {"category": "http", "request_id": request_id, "method": request.method, "path": path}
        start = time.perf_counter()

        logger.log(level, "request.start", extra={**base, "event": "request.start"})

        try:
            response: Response = await call_next(request)
        except Exception:
            logger.exception(
                "request.error",
                extra={**base, "event": "request.error", "duration_ms": _elapsed_ms(start)},
            )
            raise

        response.headers["X-Request-ID"] = request_id
        logger.log(
            level,
            "request.end",
            extra={**base, "event": "request.end", "status_code": response.status_code,
                   "duration_ms": _elapsed_ms(start)},
        )
        return response


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)
