"""
Client-safe error messages.

Backend errors can carry table names, constraint names, tokens or file paths.
Those never reach API clients; short user-facing 4xx messages pass through.
"""

from __future__ import annotations

import re

from corpsocial.observability.logging import get_logger

logger = get_logger(__name__)

MAX_PASSTHROUGH_LENGTH = 100

# (label, pattern); the label is logged, never the message itself
_SENSITIVE: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (label, re.compile(pattern, re.IGNORECASE))
    for label, pattern in (
        ("source_path", r"/\S+\.py\b"),
        ("windows_path", r"[a-z]:\\\S+"),
        ("traceback", r"Traceback \(most recent call last\)"),
        ("frame", r"File \"[^\"]*\""),
        ("sql_duplicate", r"duplicate key value"),
        ("sql_constraint", r"violates .* constraint"),
        ("sql_relation", r"relation \"[^\"]*\" does not exist"),
        ("sql_where", r"WHERE clause"),
        ("bearer_token", r"Bearer [\w.-]+"),
        ("opaque_secret", r"[\w-]{32,}"),
        ("module_path", r"corpsocial\.[a-z_.]+"),
    )
)

GENERIC_MESSAGES: dict[int, str] = {
    400: "The request was rejected. Check the submitted fields.",
    401: "Authentication required.",
    403: "Access denied.",
    404: "Resource not found.",
    422: "Invalid data format.",
    500: "Something went wrong on our side. Try again later.",
    502: "The backend service is unavailable. Try again later.",
}
DEFAULT_MESSAGE = "Request failed."


def sanitize_error_message(message: str, status_code: int = 500) -> str:
    """
    Return what a client may see for an error.

    Args:
        message: Raw error text (may come straight from the backend)
        status_code: HTTP status the error maps to

    Returns:
        The message itself for short single-line 4xx errors without sensitive
        content, otherwise the generic message for the status code.
    """
    fallback = GENERIC_MESSAGES.get(status_code, DEFAULT_MESSAGE)
    if not message:
        return fallback

    for label, pattern in _SENSITIVE:
        if pattern.search(message):
            logger.warning("Withheld error detail (%s) for status %d", label, status_code)
            return fallback

    is_client_error = 400 <= status_code < 500
    if is_client_error and len(message) < MAX_PASSTHROUGH_LENGTH and "\n" not in message:
        return message
    return fallback
