"""
Snippets API — Permissive CORS Middleware
==========================================

What:  Answers every OPTIONS request with an empty 200 and stamps the CORS
       headers onto every other response.
How:   Starlette BaseHTTPMiddleware, outermost in the chain so that
       preflights never reach routing and error responses still carry the
       headers.

Headers sent:
    Access-Control-Allow-Origin:  *
    Access-Control-Allow-Headers: settings.cors_allow_headers

Headers are sent whether or not the request carries an Origin header, and
the preflight body is empty.
"""

from typing import Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from snippets_api.config import settings


def cors_headers() -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Headers": ", ".join(settings.cors_allow_headers_list),
    }


class PermissiveCORSMiddleware(BaseHTTPMiddleware):
    """Short-circuits preflight requests and adds CORS headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=cors_headers())

        response = await call_next(request)
        response.headers.update(cors_headers())
        return response
