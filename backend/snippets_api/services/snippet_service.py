"""
Snippets API — Snippet Service (Operations & Authorization)
============================================================

What:  The five snippet operations and the checks guarding them.
How:   Each operation receives the store handle and the caller's optional
       Identity as explicit arguments, applies the visibility/ownership
       rules, and returns a response schema. Failures are raised as
       application exceptions and turned into responses by the global
       handlers.
Who:   Called by the snippets route after the Request Router has picked the
       operation.

Authorization Rules:
    get     → private snippets are visible to their owner only; everyone
              else gets the same 404 as for an unknown id
    create  → identity required (401); owner forced to the caller
    update  → identity required (401); fresh owner lookup right before the
    delete    mutation; missing row or different owner → 404
              "Snippet not found or unauthorized"

The owner check and the mutation are two statements; a concurrent change
between them is not guarded against here. Row-level security in the
database remains the authoritative layer.
"""

import logging
from typing import Optional, Type, TypeVar

import pydantic

from snippets_api.error_messages import public_message
from snippets_api.exceptions import (
    OWNER_NOT_FOUND_MESSAGE,
    AuthenticationError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from snippets_api.schemas.snippet import (
    MessageResponse,
    SnippetCreate,
    SnippetDataResponse,
    SnippetListResponse,
    SnippetMutationResponse,
    SnippetResponse,
    SnippetUpdate,
)
from snippets_api.services.auth_service import Identity
from snippets_api.services.query_filters import SnippetFilter
from snippets_api.services.snippet_store import SnippetStore

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required fields: title, code, language"

BodyModel = TypeVar("BodyModel", bound=pydantic.BaseModel)


# ── Authorization Gate ────────────────────────────────────────────────────

def require_identity(identity: Optional[Identity]) -> Identity:
    if identity is None:
        raise AuthenticationError()
    return identity


def can_view(snippet: SnippetResponse, identity: Optional[Identity]) -> bool:
    """A snippet is visible if it is public or the caller owns it."""
    if snippet.is_public:
        return True
    return identity is not None and identity.user_id == snippet.user_id


async def require_owner(store: SnippetStore, snippet_id: str, identity: Identity) -> None:
    """
    Look up the current owner of `snippet_id` and insist it is the caller.

    Raises:
        NotFoundError: No such snippet, the lookup failed, or the caller is
            not the owner. All three are reported identically.
    """
    try:
        owner_id = await store.fetch_owner(snippet_id)
    except StoreError as exc:
        logger.error(
            "Ownership lookup for snippet %s failed: code=%s detail=%s",
            snippet_id,
            exc.code,
            exc.detail,
        )
        raise NotFoundError(message=OWNER_NOT_FOUND_MESSAGE, snippet_id=snippet_id) from exc

    if owner_id is None or owner_id != identity.user_id:
        logger.info("Caller %s may not modify snippet %s", identity.user_id, snippet_id)
        raise NotFoundError(message=OWNER_NOT_FOUND_MESSAGE, snippet_id=snippet_id)


def parse_body(model: Type[BodyModel], raw: bytes) -> BodyModel:
    """Decode and validate a JSON object body; any failure is a 400."""
    try:
        return model.model_validate_json(raw or b"")
    except pydantic.ValidationError as exc:
        raise ValidationError(
            message="Invalid request body",
            context={"errors": exc.error_count()},
        ) from exc


class SnippetService:
    """
    Business logic for snippet operations.

    Stateless: the store handle and identity come in with every call.
    """

    async def list_snippets(
        self, store: SnippetStore, filters: SnippetFilter
    ) -> SnippetListResponse:
        """List snippets matching `filters`. Store failures propagate as StoreError (400)."""
        snippets = await store.list(filters)
        return SnippetListResponse(data=snippets, count=len(snippets))

    async def get_snippet(
        self,
        store: SnippetStore,
        snippet_id: str,
        identity: Optional[Identity],
    ) -> SnippetDataResponse:
        """
        Fetch one snippet, hiding private snippets from everyone but the owner.

        Raises:
            NotFoundError: Unknown id, private snippet of someone else, or a
                failed lookup (then carrying the translated store message).
        """
        try:
            snippet = await store.fetch(snippet_id)
        except StoreError as exc:
            raise NotFoundError(message=public_message(exc), snippet_id=snippet_id) from exc

        if snippet is None or not can_view(snippet, identity):
            raise NotFoundError(snippet_id=snippet_id)

        return SnippetDataResponse(data=snippet)

    async def create_snippet(
        self,
        store: SnippetStore,
        raw_body: bytes,
        identity: Optional[Identity],
    ) -> SnippetMutationResponse:
        """
        Create a snippet owned by the caller.

        Workflow:
            1. Require an identity (401)
            2. Parse the body (400 on malformed JSON)
            3. Require non-empty title, code, language (400, nothing stored)
            4. Insert with defaults and user_id = caller
        """
        caller = require_identity(identity)
        body = parse_body(SnippetCreate, raw_body)

        if not body.title or not body.code or not body.language:
            raise ValidationError(message=MISSING_FIELDS_MESSAGE)

        snippet = await store.insert(
            {
                "title": body.title,
                "description": body.description or None,
                "code": body.code,
                "language": body.language,
                "tags": body.tags if body.tags is not None else [],
                "is_public": True if body.is_public is None else body.is_public,
                "user_id": caller.user_id,
            }
        )
        logger.info("Snippet %s created by %s", snippet.id, caller.user_id)
        return SnippetMutationResponse(data=snippet, message="Snippet created successfully")

    async def update_snippet(
        self,
        store: SnippetStore,
        snippet_id: str,
        raw_body: bytes,
        identity: Optional[Identity],
    ) -> SnippetMutationResponse:
        """Apply the fields present in the body to a snippet the caller owns."""
        caller = require_identity(identity)
        await require_owner(store, snippet_id, caller)

        changes = parse_body(SnippetUpdate, raw_body).model_dump(exclude_unset=True)
        snippet = await store.update(snippet_id, changes)
        logger.info("Snippet %s updated by %s (%s)", snippet_id, caller.user_id, sorted(changes))
        return SnippetMutationResponse(data=snippet, message="Snippet updated successfully")

    async def delete_snippet(
        self,
        store: SnippetStore,
        snippet_id: str,
        identity: Optional[Identity],
    ) -> MessageResponse:
        caller = require_identity(identity)
        await require_owner(store, snippet_id, caller)

        await store.delete(snippet_id)
        logger.info("Snippet %s deleted by %s", snippet_id, caller.user_id)
        return MessageResponse(message="Snippet deleted successfully")


snippet_service = SnippetService()
