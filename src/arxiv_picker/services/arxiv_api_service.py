"""Internal arXiv API service helpers for keyword searches."""

from __future__ import annotations

import httpx

from arxiv_picker.models import MAX_RESULTS, PaperRecord
from arxiv_picker.parsing import parse_search_feed
from arxiv_picker.query import build_search_url, clamp_max_results

ARXIV_API_USER_AGENT = "arxiv-picker/0.1"


class FetchError(Exception):
    """Raised when the search endpoint answers with a non-success status."""

    def __init__(self, status_code: int, status_text: str = "") -> None:
        self.status_code = status_code
        self.status_text = status_text
        detail = f" {status_text}" if status_text else ""
        super().__init__(f"arXiv API returned HTTP {status_code}{detail}")


async def search(
    *,
    client: httpx.AsyncClient | None,
    keywords: str,
    max_results: int = MAX_RESULTS,
    timeout_seconds: int,
    user_agent: str = ARXIV_API_USER_AGENT,
) -> list[PaperRecord]:
    """Run one keyword search and parse the response into records.

    Raises:
        SearchValidationError: Empty keywords; no request is made.
        FetchError: The endpoint answered with a non-2xx status.
        FeedParseError: The body was not well-formed XML.
        httpx.HTTPError: Transport failure.
    """
    max_results = clamp_max_results(max_results)
    url = build_search_url(keywords, max_results)
    headers = {"User-Agent": user_agent}

    if client is not None:
        response = await client.get(url, headers=headers, timeout=timeout_seconds)
    else:
        async with httpx.AsyncClient() as tmp_client:
            response = await tmp_client.get(url, headers=headers, timeout=timeout_seconds)

    if not response.is_success:
        raise FetchError(response.status_code, response.reason_phrase)
    return parse_search_feed(response.text)[:max_results]


__all__ = [
    "ARXIV_API_USER_AGENT",
    "FetchError",
    "search",
]
