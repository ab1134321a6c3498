"""CLI/bootstrap helpers for the arXiv paper picker."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import logging.handlers
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
from platformdirs import user_config_dir

from arxiv_picker.action_messages import (
    PDF_NOT_AVAILABLE,
    STATUS_FETCH_FAILED,
    STATUS_NO_RESULTS,
    build_actionable_error,
    build_found_status,
)
from arxiv_picker.config import CONFIG_APP_NAME, load_config
from arxiv_picker.models import MAX_RESULTS, PaperRecord, UserConfig
from arxiv_picker.pagination import build_page_view, page_bounds
from arxiv_picker.parsing import FeedParseError, parse_search_feed
from arxiv_picker.query import SearchValidationError, build_search_url, clamp_max_results
from arxiv_picker.services.arxiv_api_service import ARXIV_API_USER_AGENT, FetchError

logger = logging.getLogger(__name__)

FetchPapersFn = Callable[[str, UserConfig], list[PaperRecord]]


def _fetch_papers(keywords: str, config: UserConfig) -> list[PaperRecord]:
    """Run one blocking search for non-interactive output."""
    url = build_search_url(keywords, config.max_results)
    response = httpx.get(
        url,
        headers={"User-Agent": ARXIV_API_USER_AGENT},
        timeout=config.request_timeout,
    )
    if not response.is_success:
        raise FetchError(response.status_code, response.reason_phrase)
    return parse_search_feed(response.text)[: config.max_results]


def _format_record_lines(index: int, record: PaperRecord) -> list[str]:
    authors = ", ".join(record.authors) or "Unknown authors"
    return [
        f"{index:>3}. {record.title}",
        f"     {authors}",
        f"     {record.published}  {record.pdf_url or PDF_NOT_AVAILABLE}",
    ]


def _print_results(papers: list[PaperRecord], page: int, show_all: bool) -> None:
    """Print one page (or every result) as plain text."""
    print(build_found_status(len(papers)))
    if show_all:
        records = papers
        offset = 0
    else:
        view = build_page_view(papers, page, set())
        records = view.records
        offset, _ = page_bounds(view.page, len(papers))
        print(view.label)
    for i, record in enumerate(records, start=offset + 1):
        print("\n".join(_format_record_lines(i, record)))


def _run_print_mode(
    args: argparse.Namespace,
    config: UserConfig,
    fetch_papers_fn: FetchPapersFn,
) -> int:
    """Search once and print results without starting the TUI."""
    try:
        papers = fetch_papers_fn(args.query or "", config)
    except SearchValidationError as exc:
        print(
            build_actionable_error(
                "run arXiv search",
                why=str(exc),
                next_step="pass keywords with --query",
            ),
            file=sys.stderr,
        )
        return 1
    except FetchError as exc:
        status_code = exc.status_code
        if status_code == 429:
            why = "arXiv API rate limit reached (HTTP 429)"
            next_step = "wait a few seconds and retry"
        elif status_code >= 500:
            why = f"arXiv API is unavailable right now (HTTP {status_code})"
            next_step = "retry later"
        else:
            why = f"arXiv API rejected the request (HTTP {status_code})"
            next_step = "check --query and retry"
        print(
            build_actionable_error("run arXiv search", why=why, next_step=next_step),
            file=sys.stderr,
        )
        return 1
    except (FeedParseError, httpx.HTTPError, OSError) as exc:
        logger.warning("Search failed: %s", exc, exc_info=True)
        print(f"Error: {STATUS_FETCH_FAILED}", file=sys.stderr)
        return 1

    if not papers:
        print(STATUS_NO_RESULTS)
        return 0
    _print_results(papers, args.page, args.all)
    return 0


def _apply_overrides(args: argparse.Namespace, config: UserConfig) -> UserConfig:
    """Layer CLI flags over the loaded config without mutating it."""
    overrides: dict[str, Any] = {}
    if args.download_dir is not None:
        overrides["download_dir"] = str(args.download_dir)
    if args.relay is not None:
        overrides["use_relay"] = args.relay
    if args.max_results is not None:
        overrides["max_results"] = clamp_max_results(args.max_results)
    return dataclasses.replace(config, **overrides)


def _configure_logging(debug: bool) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level."""
    if not debug:
        # Default: suppress all logging (TUI captures stderr)
        logging.disable(logging.CRITICAL)
        return

    log_dir = Path(user_config_dir(CONFIG_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "debug.log"

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def _configure_color_mode(color_mode: str) -> None:
    """Configure environment hints for terminal color behavior."""
    if color_mode == "never":
        os.environ["NO_COLOR"] = "1"
        os.environ.pop("FORCE_COLOR", None)
        return
    if color_mode == "always":
        os.environ["FORCE_COLOR"] = "1"
        os.environ.pop("NO_COLOR", None)
        return
    os.environ.pop("FORCE_COLOR", None)


def _validate_interactive_tty() -> bool:
    """Return True when stdin/stdout are interactive terminals."""
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search arXiv, page through results, and download selected PDFs"
    )
    parser.add_argument(
        "-q",
        "--query",
        type=str,
        default=None,
        help="Keywords to search for on startup (all terms must match)",
    )
    parser.add_argument(
        "--download-dir",
        type=Path,
        default=None,
        help="Directory for downloaded PDFs (default: ~/arxiv-pdfs or config value)",
    )
    relay_group = parser.add_mutually_exclusive_group()
    relay_group.add_argument(
        "--relay",
        dest="relay",
        action="store_const",
        const=True,
        default=None,
        help="Fetch PDFs through the configured relay endpoint",
    )
    relay_group.add_argument(
        "--no-relay",
        dest="relay",
        action="store_const",
        const=False,
        help="Fetch PDFs directly from arXiv",
    )
    parser.add_argument(
        "--max-results",
        type=int,
        default=None,
        help=f"Maximum results per search (1-{MAX_RESULTS}; default: config value)",
    )
    parser.add_argument(
        "--print",
        dest="print_only",
        action="store_true",
        help="Print results for --query and exit instead of starting the UI",
    )
    parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="Result page to print with --print (default: 1)",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Print every result with --print instead of one page",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to file (~/.config/arxiv-picker/debug.log)",
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output mode for terminal UI (default: auto)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable terminal colors (equivalent to --color never)",
    )
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Use ASCII-only selection markers for limited terminals",
    )
    return parser


def main(
    argv: list[str] | None = None,
    *,
    load_config_fn: Callable[[], UserConfig] = load_config,
    fetch_papers_fn: FetchPapersFn = _fetch_papers,
    configure_logging_fn: Callable[[bool], None] = _configure_logging,
    configure_color_mode_fn: Callable[[str], None] = _configure_color_mode,
    validate_interactive_tty_fn: Callable[[], bool] = _validate_interactive_tty,
    app_factory: Callable[..., Any] | None = None,
) -> int:
    """Main entry point. Returns exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if (args.all or args.page != 1) and not args.print_only:
        print("Error: --page and --all require --print", file=sys.stderr)
        return 1

    color_mode = "never" if args.no_color else args.color
    configure_color_mode_fn(color_mode)
    configure_logging_fn(args.debug)
    logger.debug("arxiv-picker starting, cwd=%s", Path.cwd())

    config = _apply_overrides(args, load_config_fn())

    if args.print_only:
        return _run_print_mode(args, config, fetch_papers_fn)

    if not validate_interactive_tty_fn():
        print(
            "Error: arxiv-picker requires an interactive TTY for the full UI.",
            file=sys.stderr,
        )
        print("Next steps:", file=sys.stderr)
        print("  - Run arxiv-picker directly in a terminal session", file=sys.stderr)
        print('  - Use --print --query "..." for non-interactive output', file=sys.stderr)
        print("  - Use --help for command documentation", file=sys.stderr)
        return 2

    if app_factory is None:
        from arxiv_picker.app import PaperPicker as _PaperPicker

        app_factory = _PaperPicker

    app = app_factory(
        config,
        initial_query=args.query or "",
        ascii_icons=args.ascii,
    )
    app.run()
    return 0


__all__ = [
    "_apply_overrides",
    "_configure_color_mode",
    "_configure_logging",
    "_fetch_papers",
    "_print_results",
    "_run_print_mode",
    "_validate_interactive_tty",
    "main",
]
