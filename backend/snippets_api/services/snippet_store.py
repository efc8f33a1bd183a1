"""
Snippets API — Snippet Store
=============================

What:  The store handle every snippet operation receives. Wraps one
       AsyncSession and exposes the handful of reads and writes the API
       needs over snippets ⟕ profiles.
How:   Statements are built from the ORM models (listing statements come
       from `query_filters.build_list_statement`). Any SQLAlchemy failure is
       re-raised as a `StoreError` carrying the driver's SQLSTATE, or
       "PGRST116" when a single-row statement matched nothing.
Who:   Built per request by `get_snippet_store`; replaced by an in-memory
       fake in tests via FastAPI's dependency overrides.

insert, update and delete commit before returning: a commit failure surfaces
here as a StoreError instead of after the response has been sent.

Malformed identifiers (not a UUID) are treated as "no such row" on reads so
that they produce the same 404 as an unknown id.
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from fastapi import Depends
from sqlalchemy import delete, select, update
from sqlalchemy.exc import DBAPIError, NoResultFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from snippets_api.database import get_db_session
from snippets_api.error_messages import NO_ROWS_FOUND
from snippets_api.exceptions import StoreError
from snippets_api.models.snippet import Profile, Snippet
from snippets_api.schemas.snippet import ProfileSummary, SnippetResponse
from snippets_api.services.query_filters import (
    SnippetFilter,
    build_list_statement,
    joined_snippet_select,
)

logger = logging.getLogger(__name__)


def _sqlstate(exc: DBAPIError) -> Optional[str]:
    """Dig the SQLSTATE out of a wrapped driver exception, if it has one."""
    for candidate in (exc.orig, getattr(exc.orig, "__cause__", None)):
        if candidate is None:
            continue
        for attr in ("sqlstate", "pgcode"):
            code = getattr(candidate, attr, None)
            if code:
                return str(code)
    return None


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except NoResultFound as exc:
        raise StoreError(
            code=NO_ROWS_FOUND, detail=str(exc), context={"operation": operation}
        ) from exc
    except DBAPIError as exc:
        raise StoreError(
            code=_sqlstate(exc), detail=str(exc.orig), context={"operation": operation}
        ) from exc
    except SQLAlchemyError as exc:
        raise StoreError(detail=str(exc), context={"operation": operation}) from exc


def _parse_id(snippet_id: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(snippet_id))
    except ValueError:
        return None


def to_response(snippet: Snippet, profile: Optional[Profile]) -> SnippetResponse:
    """Serialize a joined (Snippet, Profile | None) row."""
    return SnippetResponse(
        id=snippet.id,
        title=snippet.title,
        description=snippet.description,
        code=snippet.code,
        language=snippet.language,
        tags=list(snippet.tags or []),
        is_public=snippet.is_public,
        user_id=snippet.user_id,
        created_at=snippet.created_at,
        profiles=(
            ProfileSummary(username=profile.username, avatar_url=profile.avatar_url)
            if profile is not None
            else None
        ),
    )


class SnippetStore:
    """Reads and writes against the snippets table for one request."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(self, filters: SnippetFilter) -> List[SnippetResponse]:
        """Return every snippet matching `filters`, newest first."""
        with _store_errors("list"):
            result = await self.session.execute(build_list_statement(filters))
            rows = result.all()
        return [to_response(snippet, profile) for snippet, profile in rows]

    async def fetch(self, snippet_id: str) -> Optional[SnippetResponse]:
        """Return one snippet with its profile, or None if there is no such row."""
        snippet_uuid = _parse_id(snippet_id)
        if snippet_uuid is None:
            return None
        with _store_errors("fetch"):
            result = await self.session.execute(
                joined_snippet_select().where(Snippet.id == snippet_uuid)
            )
            row = result.first()
        if row is None:
            return None
        return to_response(row[0], row[1])

    async def fetch_owner(self, snippet_id: str) -> Optional[uuid.UUID]:
        """Return the owner reference of a snippet, or None if there is no such row."""
        snippet_uuid = _parse_id(snippet_id)
        if snippet_uuid is None:
            return None
        with _store_errors("fetch_owner"):
            result = await self.session.execute(
                select(Snippet.user_id).where(Snippet.id == snippet_uuid)
            )
            return result.scalar_one_or_none()

    async def insert(self, values: Dict[str, Any]) -> SnippetResponse:
        """Insert a snippet and return it re-read with its profile."""
        with _store_errors("insert"):
            snippet = Snippet(**values)
            self.session.add(snippet)
            await self.session.flush()
            await self.session.commit()
        logger.info("Snippet %s inserted for owner %s", snippet.id, snippet.user_id)
        return await self._reload(snippet.id)

    async def update(self, snippet_id: str, values: Dict[str, Any]) -> SnippetResponse:
        """
        Apply a partial update and return the updated snippet.

        An empty `values` dict is a no-op that returns the current row.

        Raises:
            StoreError: PGRST116 if the row vanished, or the SQLSTATE of a
                constraint violation (e.g. 23502 for a null title).
        """
        snippet_uuid = _parse_id(snippet_id)
        if snippet_uuid is None:
            raise StoreError(code=NO_ROWS_FOUND, detail=f"invalid id {snippet_id!r}")
        if values:
            with _store_errors("update"):
                result = await self.session.execute(
                    update(Snippet)
                    .where(Snippet.id == snippet_uuid)
                    .values(**values)
                    .returning(Snippet.id)
                )
                result.scalar_one()
                await self.session.commit()
        return await self._reload(snippet_uuid)

    async def delete(self, snippet_id: str) -> None:
        snippet_uuid = _parse_id(snippet_id)
        if snippet_uuid is None:
            return
        with _store_errors("delete"):
            await self.session.execute(delete(Snippet).where(Snippet.id == snippet_uuid))
            await self.session.commit()

    async def _reload(self, snippet_uuid: uuid.UUID) -> SnippetResponse:
        with _store_errors("reload"):
            result = await self.session.execute(
                joined_snippet_select()
                .where(Snippet.id == snippet_uuid)
                .execution_options(populate_existing=True)
            )
            snippet, profile = result.one()
        return to_response(snippet, profile)


async def get_snippet_store(db: AsyncSession = Depends(get_db_session)) -> SnippetStore:
    """FastAPI dependency: a store handle bound to this request's session."""
    return SnippetStore(db)
