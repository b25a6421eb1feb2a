import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every relay request under a fresh id and echoes the id back to the caller."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = uuid.uuid4().hex
        route = f"{request.method} {request.url.path}"
        started = time.perf_counter()
        logger.info("%s started (request %s)", route, request_id)

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "%s crashed after %.1f ms (request %s)", route, _elapsed_ms(started), request_id
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "%s -> %d in %.1f ms (request %s)",
            route, response.status_code, _elapsed_ms(started), request_id,
        )
        return response
