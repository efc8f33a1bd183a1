"""
Snippets API — Listing Filter Composition
==========================================

What:  Turns the optional list parameters (user_id, language, tags, search)
       into a validated `SnippetFilter` and translates that into one
       SQLAlchemy SELECT over snippets ⟕ profiles.
How:   `SnippetFilter.from_query()` parses raw query-string values,
       `build_list_statement()` is the single place that knows the SQL
       dialect, and `escape_like()` is the single escaping rule for ILIKE.

Filter Policy:
    user_id   → snippets of that owner (visibility not filtered)
    (absent)  → public snippets only
    language  → exact, case-sensitive equality
    tags      → csv, trimmed; snippet tags must contain ALL of them (@>)
    search    → case-insensitive substring of title OR description,
                wildcard characters matched literally
    ordering  → created_at DESC
"""

import uuid
from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy import Select, or_, select

from snippets_api.exceptions import ValidationError
from snippets_api.models.snippet import Profile, Snippet

LIKE_ESCAPE = "\\"


def escape_like(text: str) -> str:
    """
    Escape LIKE/ILIKE metacharacters so `text` matches literally.

    The escape character is doubled first, then `%` and `_` are prefixed
    with it. Use together with `escape=LIKE_ESCAPE`.
    """
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def parse_tags(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-separated tag list, trimming whitespace and dropping blanks."""
    if not raw:
        return ()
    return tuple(tag.strip() for tag in raw.split(",") if tag.strip())


@dataclass(frozen=True)
class SnippetFilter:
    """Structured, validated form of the list query parameters."""

    owner_id: Optional[uuid.UUID] = None
    language: Optional[str] = None
    tags: Tuple[str, ...] = ()
    search: Optional[str] = None

    @classmethod
    def from_query(
        cls,
        user_id: Optional[str] = None,
        language: Optional[str] = None,
        tags: Optional[str] = None,
        search: Optional[str] = None,
    ) -> "SnippetFilter":
        """
        Build a filter from raw query-string values.

        Empty strings count as absent.

        Raises:
            ValidationError: `user_id` is present but not a UUID.
        """
        owner_id = None
        if user_id:
            try:
                owner_id = uuid.UUID(user_id)
            except ValueError:
                raise ValidationError(message="Invalid user_id", field="user_id")

        return cls(
            owner_id=owner_id,
            language=language or None,
            tags=parse_tags(tags),
            search=search or None,
        )


def joined_snippet_select() -> Select:
    """SELECT (Snippet, Profile) with the owner's profile LEFT OUTER JOINed."""
    return select(Snippet, Profile).outerjoin(Profile, Profile.id == Snippet.user_id)


def build_list_statement(filters: SnippetFilter) -> Select:
    """
    Translate a SnippetFilter into a SELECT yielding (Snippet, Profile | None) rows.

    Snippets whose owner has no profile row are still returned, paired
    with None.
    """
    stmt = joined_snippet_select()

    if filters.owner_id is not None:
        stmt = stmt.where(Snippet.user_id == filters.owner_id)
    else:
        stmt = stmt.where(Snippet.is_public.is_(True))

    if filters.language:
        stmt = stmt.where(Snippet.language == filters.language)

    if filters.tags:
        stmt = stmt.where(Snippet.tags.contains(list(filters.tags)))

    if filters.search:
        pattern = f"%{escape_like(filters.search)}%"
        stmt = stmt.where(
            or_(
                Snippet.title.ilike(pattern, escape=LIKE_ESCAPE),
                Snippet.description.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )

    return stmt.order_by(Snippet.created_at.desc())
