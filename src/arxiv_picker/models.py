"""Data models and constants for the arXiv picker application."""

from __future__ import annotations

from dataclasses import dataclass, field

# Application identity, used for platformdirs config paths
CONFIG_APP_NAME = "arxiv-picker"

# Search limits
MAX_RESULTS = 100
PAGE_SIZE = 10

# Download naming
FILENAME_MAX_LEN = 100
FALLBACK_FILENAME = "paper"
DEFAULT_PDF_DOWNLOAD_DIR = "arxiv-pdfs"

# Optional relay endpoint; the target URL is appended percent-encoded
DEFAULT_RELAY_URL = "https://corsproxy.io/?"

# Network timeouts (seconds)
ARXIV_API_TIMEOUT = 30
PDF_DOWNLOAD_TIMEOUT = 60


@dataclass(slots=True)
class PaperRecord:
    """One parsed arXiv search result."""

    id: str
    title: str
    authors: tuple[str, ...]
    published: str
    summary: str
    pdf_url: str | None = None

    @property
    def arxiv_id(self) -> str:
        """Bare arXiv identifier without the version suffix."""
        # Deferred import: parsing depends on this module
        from arxiv_picker.parsing import normalize_arxiv_id

        return normalize_arxiv_id(self.id)

    @property
    def has_pdf(self) -> bool:
        return self.pdf_url is not None


@dataclass(slots=True)
class AppState:
    """Mutable state of one picker session.

    Created empty, reset at the start of every validated search and
    filled with the new result set on success. Nothing here is persisted.
    """

    all_papers: list[PaperRecord] = field(default_factory=list)
    selected_ids: set[str] = field(default_factory=set)
    current_page: int = 1

    def reset(self) -> None:
        """Drop results, selection, and page position."""
        self.all_papers = []
        self.selected_ids = set()
        self.current_page = 1

    def replace_results(self, papers: list[PaperRecord]) -> None:
        """Start over with a new result set (capped at MAX_RESULTS)."""
        self.reset()
        self.all_papers = list(papers[:MAX_RESULTS])

    def selected_papers(self) -> list[PaperRecord]:
        """Selected records in result-set order."""
        return [paper for paper in self.all_papers if paper.id in self.selected_ids]

    def find(self, paper_id: str) -> PaperRecord | None:
        for paper in self.all_papers:
            if paper.id == paper_id:
                return paper
        return None


@dataclass(slots=True)
class UserConfig:
    """User preferences read from config.json. Never written back by the app."""

    download_dir: str = ""  # Empty = use ~/arxiv-pdfs/
    use_relay: bool = False
    relay_url: str = DEFAULT_RELAY_URL
    max_results: int = MAX_RESULTS
    request_timeout: int = ARXIV_API_TIMEOUT
    download_timeout: int = PDF_DOWNLOAD_TIMEOUT
    theme_name: str = "monokai"
    version: int = 1


__all__ = [
    "ARXIV_API_TIMEOUT",
    "CONFIG_APP_NAME",
    "DEFAULT_PDF_DOWNLOAD_DIR",
    "DEFAULT_RELAY_URL",
    "FALLBACK_FILENAME",
    "FILENAME_MAX_LEN",
    "MAX_RESULTS",
    "PAGE_SIZE",
    "PDF_DOWNLOAD_TIMEOUT",
    "AppState",
    "PaperRecord",
    "UserConfig",
]
