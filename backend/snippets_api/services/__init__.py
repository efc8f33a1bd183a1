# Services package init
"""
Snippets API — Services Layer
==============================

Service Inventory:
    - auth_service:    bearer token → Optional[Identity]
    - query_filters:   list parameters → SnippetFilter → SQLAlchemy SELECT
    - snippet_store:   store handle over one AsyncSession (StoreError on failure)
    - snippet_service: the five operations and their authorization checks
    - browse:          in-memory search/language filtering of a loaded feed

The browse helpers have no server-side caller; they are exported here for
clients that load the public feed once and narrow it locally.
"""

from snippets_api.services.browse import ALL_LANGUAGES, filter_for_display, language_options

__all__ = ["ALL_LANGUAGES", "filter_for_display", "language_options"]
