"""Fixed response headers, preflight handling and the last-resort error body.

Every response leaves with a JSON content type and permissive CORS headers.
OPTIONS requests are answered here with an empty body and never reach the
routes. Anything that escapes the routes becomes the generic server-error
body with status 200.
"""

import logging
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ..counter.service import VisitReport
from ..observability.logging import clear_log_context, set_log_context

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class ResponseHeadersMiddleware(BaseHTTPMiddleware):
    """Stamps the fixed headers on every response."""

    async def dispatch(self, request: Request, call_next):
        set_log_context(request_id=uuid.uuid4().hex[:12])
        try:
            if request.method == "OPTIONS":
                response = Response(status_code=200, media_type="application/json")
            else:
                try:
                    response = await call_next(request)
                except Exception:
                    logger.exception("Unhandled error serving %s %s", request.method, request.url.path)
                    response = JSONResponse(VisitReport.server_error().to_dict())
        finally:
            clear_log_context()

        response.headers["Content-Type"] = "application/json"
        response.headers.update(CORS_HEADERS)
        return response
