from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

ALLOWED_ORIGIN_PREFIXES = ("http://localhost:", "http://127.0.0.1:")

CORS_HEADERS = {
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Max-Age": "3600",
}


def is_allowed_origin(origin: str | None) -> bool:
    return bool(origin) and origin.startswith(ALLOWED_ORIGIN_PREFIXES)


class LocalOriginCORSMiddleware(BaseHTTPMiddleware):
    """
    CORS for local development front-ends.

    The Origin is echoed back only for localhost / 127.0.0.1 on any port.
    Every OPTIONS request is answered here with an empty 204.
    """

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")

        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            response = await call_next(request)

        if is_allowed_origin(origin):
            response.headers["Access-Control-Allow-Origin"] = origin
        response.headers.update(CORS_HEADERS)
        return response
