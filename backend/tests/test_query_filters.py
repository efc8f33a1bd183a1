"""
Snippets API — Filter Composer Unit Tests
==========================================

What:  Tests for query-parameter parsing and the generated listing SELECT.
How:   Statements are compiled with the PostgreSQL dialect (no connection)
       and inspected as SQL text plus bound parameters.

What we test:
    ✅ LIKE escaping of %, _ and the escape character
    ✅ Tag list parsing (trim, drop blanks)
    ✅ SnippetFilter.from_query (empty values, invalid user_id)
    ✅ Public-only vs. owner listing, language, tags (@>), search (ILIKE)
    ✅ Newest-first ordering and the profile outer join
"""

import uuid

import pytest
from sqlalchemy.dialects import postgresql

from snippets_api.exceptions import ValidationError
from snippets_api.services.query_filters import (
    SnippetFilter,
    build_list_statement,
    escape_like,
    parse_tags,
)


def compile_statement(filters: SnippetFilter):
    compiled = build_list_statement(filters).compile(dialect=postgresql.dialect())
    return str(compiled), compiled.params


class TestEscapeLike:

    def test_plain_text_unchanged(self):
        assert escape_like("hello world") == "hello world"

    def test_percent_and_underscore(self):
        assert escape_like("100%_done") == "100\\%\\_done"

    def test_escape_character_is_doubled_first(self):
        assert escape_like("a\\%") == "a\\\\\\%"


class TestParseTags:

    def test_none_and_empty(self):
        assert parse_tags(None) == ()
        assert parse_tags("") == ()

    def test_trims_and_drops_blanks(self):
        assert parse_tags(" python, async ,,") == ("python", "async")

    def test_single_tag(self):
        assert parse_tags("react") == ("react",)


class TestSnippetFilterFromQuery:

    def test_all_absent(self):
        filters = SnippetFilter.from_query()
        assert filters == SnippetFilter()

    def test_empty_strings_count_as_absent(self):
        filters = SnippetFilter.from_query(user_id="", language="", tags="", search="")
        assert filters == SnippetFilter()

    def test_valid_user_id(self):
        owner = uuid.uuid4()
        assert SnippetFilter.from_query(user_id=str(owner)).owner_id == owner

    def test_invalid_user_id_rejected(self):
        with pytest.raises(ValidationError, match="Invalid user_id"):
            SnippetFilter.from_query(user_id="not-a-uuid")


class TestBuildListStatement:

    def test_default_lists_public_only(self):
        sql, _ = compile_statement(SnippetFilter())
        assert "snippets.is_public IS true" in sql
        assert "snippets.user_id =" not in sql

    def test_joins_profiles(self):
        sql, _ = compile_statement(SnippetFilter())
        assert "LEFT OUTER JOIN profiles ON profiles.id = snippets.user_id" in sql
        assert "profiles.username" in sql
        assert "profiles.avatar_url" in sql

    def test_newest_first(self):
        sql, _ = compile_statement(SnippetFilter())
        assert sql.rstrip().endswith("ORDER BY snippets.created_at DESC")

    def test_owner_listing_skips_public_filter(self):
        owner = uuid.uuid4()
        sql, params = compile_statement(SnippetFilter(owner_id=owner))
        assert "snippets.user_id =" in sql
        assert "IS true" not in sql
        assert owner in params.values()

    def test_language_equality(self):
        sql, params = compile_statement(SnippetFilter(language="python"))
        assert "snippets.language =" in sql
        assert "python" in params.values()

    def test_tags_require_all(self):
        sql, params = compile_statement(SnippetFilter(tags=("python", "async")))
        assert "snippets.tags @>" in sql
        assert ["python", "async"] in params.values()

    def test_search_title_or_description(self):
        sql, params = compile_statement(SnippetFilter(search="Hook"))
        assert "snippets.title ILIKE" in sql
        assert "snippets.description ILIKE" in sql
        assert " OR " in sql
        assert "ESCAPE" in sql
        assert "%Hook%" in params.values()

    def test_search_wildcards_matched_literally(self):
        _, params = compile_statement(SnippetFilter(search="100%"))
        assert "%100\\%%" in params.values()
        assert "%100%%" not in params.values()

    def test_all_filters_combined(self):
        owner = uuid.uuid4()
        sql, params = compile_statement(
            SnippetFilter(owner_id=owner, language="go", tags=("cli",), search="flag")
        )
        assert "snippets.user_id =" in sql
        assert "snippets.language =" in sql
        assert "@>" in sql
        assert "ILIKE" in sql
        assert {"go", "%flag%"} <= set(v for v in params.values() if isinstance(v, str))
