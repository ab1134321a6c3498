"""PDF retrieval handlers: batch download and open-in-browser."""

from __future__ import annotations

import logging
import webbrowser
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from arxiv_picker.action_messages import (
    NO_SELECTION_MESSAGE,
    build_download_pdfs_confirmation_prompt,
    build_download_progress,
    build_download_summary,
    build_open_pdfs_confirmation_prompt,
    build_open_pdfs_summary,
    requires_batch_confirmation,
)
from arxiv_picker.config import get_download_dir
from arxiv_picker.modals import ConfirmModal
from arxiv_picker.models import PaperRecord
from arxiv_picker.parsing import secure_url
from arxiv_picker.query import truncate_text
from arxiv_picker.services.download_service import DownloadSummary, download_batch

if TYPE_CHECKING:
    from arxiv_picker.app import PaperPicker

logger = logging.getLogger(__name__)

BATCH_CONFIRM_THRESHOLD = 10
PROGRESS_TITLE_MAX_LEN = 60


def open_pdfs_in_browser(
    records: Sequence[PaperRecord],
    opener: Callable[[str], bool] | None = None,
) -> tuple[int, int]:
    """Open every available PDF link in a browser tab.

    Returns:
        Tuple of (opened, skipped). Records without a link, or whose open
        call reports failure, count as skipped.
    """
    open_url = opener or webbrowser.open
    opened = skipped = 0
    for record in records:
        if record.pdf_url is None:
            skipped += 1
            continue
        try:
            ok = open_url(secure_url(record.pdf_url))
        except webbrowser.Error as exc:
            logger.warning("Could not open %s in browser: %s", record.id, exc)
            ok = False
        if ok is False:
            skipped += 1
        else:
            opened += 1
    return opened, skipped


def action_download_selected(app: PaperPicker) -> None:
    """Download every selected PDF, asking first for large batches."""
    if app._download_inflight:
        app.notify("Download already in progress", title="Download", severity="warning")
        return

    records = app.state.selected_papers()
    if not records:
        app.notify(NO_SELECTION_MESSAGE, title="Download", severity="warning")
        return

    if requires_batch_confirmation(len(records), BATCH_CONFIRM_THRESHOLD):
        download_dir = get_download_dir(app._config)
        app.push_screen(
            ConfirmModal(build_download_pdfs_confirmation_prompt(len(records), str(download_dir))),
            lambda confirmed: start_downloads(app, records) if confirmed else None,
        )
    else:
        start_downloads(app, records)


def start_downloads(app: PaperPicker, records: list[PaperRecord]) -> None:
    """Mark a batch as running and schedule it on the event loop."""
    if app._download_inflight:
        app.notify("Download already in progress", title="Download", severity="warning")
        return
    app._download_inflight = True
    app._refresh_selection_controls()
    app._track_task(run_download_batch(app, records))


async def run_download_batch(app: PaperPicker, records: list[PaperRecord]) -> DownloadSummary:
    """Download records one at a time and report the outcome."""
    config = app._config
    download_dir = get_download_dir(config)
    relay_url = config.relay_url if config.use_relay else None
    services = app._get_services()

    async def _download_one(record: PaperRecord) -> bool:
        return await services.download.download_pdf(
            record=record,
            download_dir=download_dir,
            client=app._http_client,
            timeout_seconds=config.download_timeout,
            relay_url=relay_url,
        )

    def _on_progress(index: int, total: int, record: PaperRecord) -> None:
        title = truncate_text(record.title, PROGRESS_TITLE_MAX_LEN)
        app._set_status(build_download_progress(index, total, title))

    try:
        summary = await download_batch(
            records,
            download_one=_download_one,
            on_progress=_on_progress,
        )
    finally:
        app._download_inflight = False
        app._refresh_selection_controls()

    message = build_download_summary(summary.successes, summary.failures)
    app._set_status(message, error=summary.failures > 0)
    if summary.failures:
        logger.info("Failed downloads: %s", ", ".join(summary.failed_ids))
        app.notify(message, title="Download Complete", severity="warning")
    else:
        app.notify(f"{message}\nSaved to {download_dir}", title="Download Complete")
    return summary


def action_open_selected(app: PaperPicker) -> None:
    """Open selected PDFs in browser tabs after an explicit confirmation."""
    records = app.state.selected_papers()
    if not records:
        app.notify(NO_SELECTION_MESSAGE, title="Open PDFs", severity="warning")
        return

    def _on_confirm(confirmed: bool | None) -> None:
        if not confirmed:
            return
        opened, skipped = open_pdfs_in_browser(records)
        app.notify(
            build_open_pdfs_summary(opened, skipped),
            title="Open PDFs",
            severity="information" if opened else "warning",
        )

    app.push_screen(ConfirmModal(build_open_pdfs_confirmation_prompt(len(records))), _on_confirm)


__all__ = [
    "BATCH_CONFIRM_THRESHOLD",
    "action_download_selected",
    "action_open_selected",
    "open_pdfs_in_browser",
    "run_download_batch",
    "start_downloads",
]
