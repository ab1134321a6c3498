"""Search query construction and text formatting utilities."""

from __future__ import annotations

import re
from urllib.parse import quote

from rich.markup import escape as escape_markup

from arxiv_picker.models import FALLBACK_FILENAME, FILENAME_MAX_LEN, MAX_RESULTS

ARXIV_API_URL = "https://export.arxiv.org/api/query"

EMPTY_QUERY_MESSAGE = "Please enter keywords to start."

# Characters that are unsafe in filenames on at least one major platform
_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/*?:"<>|]')
_WHITESPACE_RUN = re.compile(r"\s+")


class SearchValidationError(ValueError):
    """Raised when keyword input cannot produce a search expression."""


# ============================================================================
# Query Builder
# ============================================================================


def build_search_query(keywords: str) -> str:
    """Turn free-text keywords into an arXiv ``all:`` conjunction.

    Each whitespace-separated token is percent-encoded and the tokens are
    joined with ``+AND+``, so the result never contains whitespace.

    Raises:
        SearchValidationError: If the input is empty after trimming.
    """
    tokens = keywords.split()
    if not tokens:
        raise SearchValidationError(EMPTY_QUERY_MESSAGE)
    return "all:" + "+AND+".join(quote(token, safe="") for token in tokens)


def clamp_max_results(value: int) -> int:
    """Clamp a requested result count into [1, MAX_RESULTS]."""
    return max(1, min(value, MAX_RESULTS))


def build_search_url(keywords: str, max_results: int = MAX_RESULTS) -> str:
    """Build the full search URL, newest submissions first."""
    search_query = build_search_query(keywords)
    return (
        f"{ARXIV_API_URL}?search_query={search_query}"
        f"&max_results={clamp_max_results(max_results)}"
        "&sortBy=submittedDate&sortOrder=descending"
    )


# ============================================================================
# Text Formatting Utilities
# ============================================================================


def normalize_whitespace(text: str) -> str:
    """Trim and collapse internal whitespace runs to single spaces."""
    return " ".join(text.split())


def truncate_text(text: str, max_len: int, suffix: str = "...") -> str:
    """Truncate text to max_len characters, adding suffix if truncated.

    Args:
        text: The text to truncate.
        max_len: Maximum length before truncation (not including suffix).
        suffix: String to append when truncated.

    Returns:
        Original text if within limit, otherwise truncated with suffix.
    """
    if len(text) <= max_len:
        return text
    return text[:max_len] + suffix


def escape_rich_text(text: str) -> str:
    """Escape text for safe Rich markup rendering."""
    return escape_markup(text) if text else ""


def sanitize_filename(title: str, max_len: int = FILENAME_MAX_LEN) -> str:
    """Derive a filesystem-safe base name from a paper title.

    >>> sanitize_filename('My/Paper: "Draft"?')
    'MyPaper_Draft'
    """
    cleaned = _UNSAFE_FILENAME_CHARS.sub("", title).strip()
    cleaned = _WHITESPACE_RUN.sub("_", cleaned)[:max_len]
    return cleaned or FALLBACK_FILENAME


__all__ = [
    "ARXIV_API_URL",
    "EMPTY_QUERY_MESSAGE",
    "SearchValidationError",
    "build_search_query",
    "build_search_url",
    "clamp_max_results",
    "escape_rich_text",
    "normalize_whitespace",
    "sanitize_filename",
    "truncate_text",
]
