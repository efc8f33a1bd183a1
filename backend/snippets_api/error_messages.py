"""
Snippets API — Store Error Translation
=======================================

What:  Maps internal store error codes to the small public vocabulary.
How:   `public_message()` logs the full error server-side and returns one of
       five fixed strings. Raw driver text never leaves this module.
Who:   Used by the StoreError exception handler and by the snippet service
       when a get-one lookup fails.
"""

import logging

from snippets_api.exceptions import StoreError

logger = logging.getLogger(__name__)

# ── Internal codes ────────────────────────────────────────────────────────
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"
NO_ROWS_FOUND = "PGRST116"

GENERIC_MESSAGE = "An error occurred. Please try again."

PUBLIC_MESSAGES = {
    UNIQUE_VIOLATION: "This item already exists",
    FOREIGN_KEY_VIOLATION: "Invalid reference",
    NOT_NULL_VIOLATION: "Missing required field",
    NO_ROWS_FOUND: "Item not found",
}


def public_message(error: StoreError) -> str:
    """
    Translate a store failure into a client-safe message.

    Args:
        error: The StoreError raised by the store.

    Returns:
        The public message for the error's code, or the generic message for
        any code outside the vocabulary (including None).
    """
    logger.error(
        "Database operation error: code=%s detail=%s context=%s",
        error.code,
        error.detail,
        error.context,
    )
    return PUBLIC_MESSAGES.get(error.code, GENERIC_MESSAGE)
