"""Search action handlers for PaperPicker."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from arxiv_picker.action_messages import (
    STATUS_FETCH_FAILED,
    STATUS_NO_RESULTS,
    STATUS_SEARCHING,
    build_actionable_error,
    build_found_status,
)
from arxiv_picker.parsing import FeedParseError
from arxiv_picker.query import SearchValidationError, build_search_query
from arxiv_picker.services.arxiv_api_service import ARXIV_API_USER_AGENT, FetchError

if TYPE_CHECKING:
    from arxiv_picker.app import PaperPicker

logger = logging.getLogger(__name__)


def _fetch_error_message(status_code: int) -> str:
    if status_code == 429:
        return build_actionable_error(
            "run arXiv search",
            why="arXiv API rate limit reached (HTTP 429)",
            next_step="wait a few seconds and search again",
        )
    if status_code >= 500:
        return build_actionable_error(
            "run arXiv search",
            why=f"arXiv API is unavailable right now (HTTP {status_code})",
            next_step="retry in a minute",
        )
    return build_actionable_error(
        "run arXiv search",
        why=f"arXiv API rejected the request (HTTP {status_code})",
        next_step="change the keywords and search again",
    )


def action_submit_search(app: PaperPicker) -> None:
    """Start a search for the keyword box contents."""
    keywords = app._get_keywords_input().value
    app._track_task(run_search(app, keywords))


async def run_search(app: PaperPicker, keywords: str) -> None:
    """Validate, reset, fetch, and render one search.

    Invalid input leaves the current results untouched. Any search that gets
    past validation starts from a clean state, even if it later fails.
    """
    if app._search_inflight:
        app.notify("Search already in progress", title="arXiv Search")
        return

    try:
        build_search_query(keywords)
    except SearchValidationError as exc:
        app._set_status(str(exc), error=True)
        return

    app.state.reset()
    app._expanded_ids.clear()
    app._render_page(scroll_home=True)

    app._search_inflight = True
    app._set_search_busy(True)
    app._set_status(STATUS_SEARCHING)
    logger.debug("Searching arXiv for %r", keywords)

    try:
        papers = await app._get_services().arxiv_api.search(
            client=app._http_client,
            keywords=keywords,
            max_results=app._config.max_results,
            timeout_seconds=app._config.request_timeout,
            user_agent=ARXIV_API_USER_AGENT,
        )
    except FetchError as exc:
        logger.warning("arXiv search failed: %s", exc)
        app._set_status(STATUS_FETCH_FAILED, error=True)
        app.notify(
            _fetch_error_message(exc.status_code),
            title="arXiv Search",
            severity="error",
            timeout=8,
        )
        return
    except FeedParseError as exc:
        logger.warning("arXiv search response could not be parsed: %s", exc, exc_info=True)
        app._set_status(STATUS_FETCH_FAILED, error=True)
        return
    except (httpx.HTTPError, OSError) as exc:
        logger.warning("arXiv search failed: %s", exc, exc_info=True)
        app._set_status(STATUS_FETCH_FAILED, error=True)
        app.notify(
            build_actionable_error(
                "run arXiv search",
                why="a network or I/O error occurred",
                next_step="check connectivity and search again",
            ),
            title="arXiv Search",
            severity="error",
            timeout=8,
        )
        return
    finally:
        app._search_inflight = False
        app._set_search_busy(False)

    app.state.replace_results(papers)
    if papers:
        app._set_status(build_found_status(len(app.state.all_papers)))
    else:
        app._set_status(STATUS_NO_RESULTS)
    app._render_page(scroll_home=True)
    if papers:
        app._get_results_list().focus()


__all__ = [
    "action_submit_search",
    "run_search",
]
