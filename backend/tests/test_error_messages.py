"""
Snippets API — Error Translator Unit Tests
===========================================

What we test:
    ✅ Each known store code maps to its fixed public message
    ✅ Unknown and missing codes fall back to the generic message
    ✅ Raw driver detail is logged, never returned
"""

import logging

import pytest

from snippets_api.error_messages import GENERIC_MESSAGE, public_message
from snippets_api.exceptions import StoreError


@pytest.mark.parametrize(
    "code,expected",
    [
        ("23505", "This item already exists"),
        ("23503", "Invalid reference"),
        ("23502", "Missing required field"),
        ("PGRST116", "Item not found"),
    ],
)
def test_known_codes(code, expected):
    assert public_message(StoreError(code=code, detail="raw")) == expected


@pytest.mark.parametrize("code", ["42P01", "08006", "", None])
def test_unknown_codes_fall_back_to_generic(code):
    assert public_message(StoreError(code=code)) == GENERIC_MESSAGE
    assert GENERIC_MESSAGE == "An error occurred. Please try again."


def test_detail_is_logged_not_returned(caplog):
    error = StoreError(
        code="23505",
        detail='duplicate key value violates unique constraint "snippets_pkey"',
    )

    with caplog.at_level(logging.ERROR, logger="snippets_api.error_messages"):
        message = public_message(error)

    assert "snippets_pkey" not in message
    assert "snippets_pkey" in caplog.text
    assert "23505" in caplog.text
