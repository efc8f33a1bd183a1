"""
Snippets API — Request Router
==============================

What:  Decides which snippet operation an HTTP request asks for.
How:   Pure function of (method, path): the final non-empty path segment is a
       snippet id unless it equals the API name, then the (method, shape)
       pair is looked up in a fixed table.

Routing Table:
    GET    + collection  → LIST
    GET    + id          → GET
    POST   + collection  → CREATE
    PUT    + id          → UPDATE
    DELETE + id          → DELETE
    anything else        → MethodNotAllowedError (405)

OPTIONS never reaches this module; the CORS middleware answers it first.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from snippets_api.exceptions import MethodNotAllowedError


class Operation(str, Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class Route:
    operation: Operation
    snippet_id: Optional[str] = None


_ROUTES = {
    ("GET", False): Operation.LIST,
    ("GET", True): Operation.GET,
    ("POST", False): Operation.CREATE,
    ("PUT", True): Operation.UPDATE,
    ("DELETE", True): Operation.DELETE,
}


def extract_snippet_id(path: str, api_name: str) -> Optional[str]:
    """Return the trailing snippet id of `path`, or None for a collection path."""
    segments = [part for part in path.split("/") if part]
    if not segments or segments[-1] == api_name:
        return None
    return segments[-1]


def resolve_route(method: str, path: str, api_name: str) -> Route:
    """
    Map an HTTP method and path onto a snippet operation.

    Args:
        method: HTTP method, any case.
        path: URL path of the request (query string excluded).
        api_name: Fixed name of the endpoint, e.g. "snippets-api".

    Raises:
        MethodNotAllowedError: The method/shape combination has no operation.
    """
    snippet_id = extract_snippet_id(path, api_name)
    operation = _ROUTES.get((method.upper(), snippet_id is not None))
    if operation is None:
        raise MethodNotAllowedError(method=method.upper(), path=path)
    return Route(operation=operation, snippet_id=snippet_id)
