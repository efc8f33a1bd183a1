"""
Snippets API — Snippet Endpoint
================================

What:  The single endpoint family {API_BASE_PATH}/{API_NAME}[/{id}].
How:   One catch-all route receives every method under the base path, asks
       the Request Router which operation is meant, and hands the store
       handle and caller identity to the snippet service.
Who:   Called by the web client and any API consumer.

Request Flow:
    1. OPTIONS never gets here (CORS middleware answers it)
    2. resolve_route(method, path) → operation + snippet id, or 405
    3. Identity resolved once from the bearer token (dependency)
    4. Store handle built from this request's DB session (dependency)
    5. SnippetService runs the operation; errors become JSON via the global
       handlers
    6. Anything unexpected is logged and reported as a generic 500

Endpoints:
    GET    /snippets-api?user_id=&language=&tags=&search=   → 200 {data, count}
    GET    /snippets-api/{id}                               → 200 {data}
    POST   /snippets-api                                    → 201 {data, message}
    PUT    /snippets-api/{id}                               → 200 {data, message}
    DELETE /snippets-api/{id}                               → 200 {message}
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from snippets_api.config import settings
from snippets_api.exceptions import InternalServerError, SnippetsApiError
from snippets_api.routing import Operation, resolve_route
from snippets_api.schemas.snippet import ErrorResponse
from snippets_api.services.auth_service import Identity, get_identity
from snippets_api.services.query_filters import SnippetFilter
from snippets_api.services.snippet_service import snippet_service
from snippets_api.services.snippet_store import SnippetStore, get_snippet_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.api_base_path, tags=["Snippets"])

HANDLED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD"]


async def _dispatch(
    request: Request,
    store: SnippetStore,
    identity: Optional[Identity],
) -> JSONResponse:
    route = resolve_route(request.method, request.url.path, settings.api_name)
    logger.info("Request: %s %s → %s", request.method, request.url.path, route.operation.value)

    if route.operation is Operation.LIST:
        params = request.query_params
        filters = SnippetFilter.from_query(
            user_id=params.get("user_id"),
            language=params.get("language"),
            tags=params.get("tags"),
            search=params.get("search"),
        )
        result = await snippet_service.list_snippets(store, filters)
        return JSONResponse(status_code=200, content=result.model_dump(mode="json"))

    if route.operation is Operation.GET:
        result = await snippet_service.get_snippet(store, route.snippet_id, identity)
        return JSONResponse(status_code=200, content=result.model_dump(mode="json"))

    if route.operation is Operation.CREATE:
        result = await snippet_service.create_snippet(store, await request.body(), identity)
        return JSONResponse(status_code=201, content=result.model_dump(mode="json"))

    if route.operation is Operation.UPDATE:
        result = await snippet_service.update_snippet(
            store, route.snippet_id, await request.body(), identity
        )
        return JSONResponse(status_code=200, content=result.model_dump(mode="json"))

    result = await snippet_service.delete_snippet(store, route.snippet_id, identity)
    return JSONResponse(status_code=200, content=result.model_dump(mode="json"))


@router.api_route(
    "/{path:path}",
    methods=HANDLED_METHODS,
    responses={
        400: {"description": "Invalid input or store error", "model": ErrorResponse},
        401: {"description": "Authentication required", "model": ErrorResponse},
        404: {"description": "Snippet not found or not accessible", "model": ErrorResponse},
        405: {"description": "Method not allowed", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse},
    },
    summary="Snippets REST endpoint",
    description=(
        "List, read, create, update and delete code snippets. The final path "
        "segment selects a snippet unless it is the API name itself."
    ),
)
async def snippets_endpoint(
    path: str,
    request: Request,
    store: SnippetStore = Depends(get_snippet_store),
    identity: Optional[Identity] = Depends(get_identity),
) -> JSONResponse:
    try:
        return await _dispatch(request, store, identity)
    except SnippetsApiError:
        raise
    except Exception as exc:
        logger.error("Unexpected error: %s", exc, exc_info=True)
        raise InternalServerError(context={"error_type": type(exc).__name__}) from exc
