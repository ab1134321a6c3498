"""Internal PDF retrieval service helpers."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import quote

import httpx

from arxiv_picker.models import DEFAULT_RELAY_URL, PaperRecord
from arxiv_picker.parsing import secure_url
from arxiv_picker.query import sanitize_filename

logger = logging.getLogger(__name__)

DownloadOne = Callable[[PaperRecord], Awaitable[bool]]
ProgressCallback = Callable[[int, int, PaperRecord], None]


def build_relay_url(target: str, relay_base: str = DEFAULT_RELAY_URL) -> str:
    """Route ``target`` through a relay that takes the URL as its query."""
    return relay_base + quote(target, safe="")


def get_download_path(record: PaperRecord, download_dir: Path) -> Path:
    """Pick ``<sanitized title>.pdf`` in download_dir, avoiding existing files.

    Name clashes get a `` (1)``, `` (2)``... suffix before the extension.
    """
    stem = sanitize_filename(record.title)
    path = download_dir / f"{stem}.pdf"
    counter = 1
    while path.exists():
        path = download_dir / f"{stem} ({counter}).pdf"
        counter += 1
    return path


async def download_pdf(
    *,
    record: PaperRecord,
    download_dir: Path,
    client: httpx.AsyncClient | None,
    timeout_seconds: int,
    relay_url: str | None = None,
) -> bool:
    """Download a single PDF using atomic temp-file replacement.

    Returns False without touching the network when the record has no PDF
    link. Transport and filesystem errors are logged and reported as False.
    """
    if record.pdf_url is None:
        logger.info("No PDF link for %s, skipping", record.id)
        return False

    url = secure_url(record.pdf_url)
    if relay_url:
        url = build_relay_url(url, relay_url)
    tmp_path: str | None = None

    try:
        download_dir.mkdir(parents=True, exist_ok=True)
        path = get_download_path(record, download_dir)
        fd, tmp_path = tempfile.mkstemp(
            dir=download_dir,
            prefix=f".{path.stem}-",
            suffix=".tmp",
        )

        async def _stream_to_tmp(active_client: httpx.AsyncClient) -> None:
            with os.fdopen(fd, "wb") as tmp_file:
                async with active_client.stream(
                    "GET",
                    url,
                    timeout=timeout_seconds,
                    follow_redirects=True,
                ) as response:
                    response.raise_for_status()
                    async for chunk in response.aiter_bytes():
                        if chunk:
                            tmp_file.write(chunk)

        if client is not None:
            await _stream_to_tmp(client)
        else:
            async with httpx.AsyncClient() as tmp_client:
                await _stream_to_tmp(tmp_client)

        os.replace(tmp_path, path)
        tmp_path = None
        logger.debug("Saved %s to %s", record.id, path)
        return True
    except (httpx.HTTPError, OSError) as exc:
        logger.warning("PDF download failed for %s: %s", record.id, exc)
        return False
    finally:
        # Also reached on cancellation, which bypasses the except clause
        if tmp_path:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass


@dataclass(slots=True)
class DownloadSummary:
    """Outcome counts for one retrieval batch."""

    total: int = 0
    successes: int = 0
    failures: int = 0
    failed_ids: list[str] = field(default_factory=list)

    def record(self, paper_id: str, ok: bool) -> None:
        if ok:
            self.successes += 1
        else:
            self.failures += 1
            self.failed_ids.append(paper_id)


async def download_batch(
    records: Sequence[PaperRecord],
    *,
    download_one: DownloadOne,
    on_progress: ProgressCallback | None = None,
) -> DownloadSummary:
    """Retrieve records strictly one after another.

    A failed or raising item is counted and the batch moves on; nothing
    short of cancellation stops it early.
    """
    summary = DownloadSummary(total=len(records))
    for index, record in enumerate(records, start=1):
        if on_progress is not None:
            on_progress(index, summary.total, record)
        try:
            ok = await download_one(record)
        except (httpx.HTTPError, OSError, RuntimeError, ValueError) as exc:
            logger.warning("Download failed for %s: %s", record.id, exc, exc_info=True)
            ok = False
        except Exception as exc:
            logger.warning(
                "Unexpected download failure for %s: %s",
                record.id,
                exc,
                exc_info=True,
            )
            ok = False
        summary.record(record.id, ok)
    return summary


__all__ = [
    "DownloadOne",
    "DownloadSummary",
    "ProgressCallback",
    "build_relay_url",
    "download_batch",
    "download_pdf",
    "get_download_path",
]
