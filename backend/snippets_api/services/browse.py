"""
In-memory filtering for the public browse view.

The browse page loads the public feed once and then narrows it as the user
types: a free-text query matched against title, description and tags, and a
language picker whose "all" entry disables the language filter.
"""

from typing import Iterable, List, Optional

from snippets_api.schemas.snippet import SnippetResponse

ALL_LANGUAGES = "all"


def _matches_query(snippet: SnippetResponse, needle: str) -> bool:
    if needle in snippet.title.lower():
        return True
    if snippet.description and needle in snippet.description.lower():
        return True
    return any(needle in tag.lower() for tag in snippet.tags)


def filter_for_display(
    snippets: Iterable[SnippetResponse],
    query: str = "",
    language: Optional[str] = ALL_LANGUAGES,
) -> List[SnippetResponse]:
    """Snippets matching both the search text and the selected language, order kept."""
    needle = (query or "").lower()
    wanted = language or ALL_LANGUAGES
    return [
        snippet
        for snippet in snippets
        if _matches_query(snippet, needle)
        and (wanted == ALL_LANGUAGES or snippet.language == wanted)
    ]


def language_options(snippets: Iterable[SnippetResponse]) -> List[str]:
    """Distinct languages in the order they first appear."""
    seen: List[str] = []
    for snippet in snippets:
        if snippet.language not in seen:
            seen.append(snippet.language)
    return seen
