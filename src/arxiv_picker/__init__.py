"""arXiv paper picker: keyword search, paged results, and PDF retrieval in a terminal UI."""

from arxiv_picker.models import MAX_RESULTS, PAGE_SIZE, AppState, PaperRecord, UserConfig
from arxiv_picker.pagination import PageView, build_page_view
from arxiv_picker.parsing import FeedParseError, parse_search_feed
from arxiv_picker.query import (
    SearchValidationError,
    build_search_query,
    build_search_url,
    sanitize_filename,
)

__version__ = "0.1.0"

__all__ = [
    "MAX_RESULTS",
    "PAGE_SIZE",
    "AppState",
    "FeedParseError",
    "PageView",
    "PaperRecord",
    "SearchValidationError",
    "UserConfig",
    "__version__",
    "build_page_view",
    "build_search_query",
    "build_search_url",
    "parse_search_feed",
    "sanitize_filename",
]
