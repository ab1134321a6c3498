"""Service interfaces + default adapters for app-level dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

import httpx

from arxiv_picker.models import PaperRecord
from arxiv_picker.services import arxiv_api_service as _arxiv_api
from arxiv_picker.services import download_service as _download


@runtime_checkable
class ArxivApiService(Protocol):
    """Interface for arXiv API-related app operations."""

    async def search(
        self,
        *,
        client: httpx.AsyncClient | None,
        keywords: str,
        max_results: int,
        timeout_seconds: int,
        user_agent: str,
    ) -> list[PaperRecord]:
        """Run a keyword search and return parsed records."""
        ...


@runtime_checkable
class DownloadService(Protocol):
    """Interface for PDF download app operations."""

    async def download_pdf(
        self,
        *,
        record: PaperRecord,
        download_dir: Path,
        client: httpx.AsyncClient | None,
        timeout_seconds: int,
        relay_url: str | None,
    ) -> bool:
        """Download a paper PDF and return success."""
        ...


class DefaultArxivApiService:
    """Default adapter that delegates to function-based arXiv API services."""

    async def search(
        self,
        *,
        client: httpx.AsyncClient | None,
        keywords: str,
        max_results: int,
        timeout_seconds: int,
        user_agent: str,
    ) -> list[PaperRecord]:
        return await _arxiv_api.search(
            client=client,
            keywords=keywords,
            max_results=max_results,
            timeout_seconds=timeout_seconds,
            user_agent=user_agent,
        )


class DefaultDownloadService:
    """Default adapter that delegates to function-based download services."""

    async def download_pdf(
        self,
        *,
        record: PaperRecord,
        download_dir: Path,
        client: httpx.AsyncClient | None,
        timeout_seconds: int,
        relay_url: str | None,
    ) -> bool:
        return await _download.download_pdf(
            record=record,
            download_dir=download_dir,
            client=client,
            timeout_seconds=timeout_seconds,
            relay_url=relay_url,
        )


@dataclass(slots=True)
class AppServices:
    """Aggregated service interfaces consumed by the app layer."""

    arxiv_api: ArxivApiService
    download: DownloadService


def build_default_app_services() -> AppServices:
    """Build default app services backed by existing function-based modules."""
    return AppServices(
        arxiv_api=DefaultArxivApiService(),
        download=DefaultDownloadService(),
    )


__all__ = [
    "AppServices",
    "ArxivApiService",
    "DefaultArxivApiService",
    "DefaultDownloadService",
    "DownloadService",
    "build_default_app_services",
]
