"""Internal service layer for app orchestration."""

from arxiv_picker.services.arxiv_api_service import FetchError, search
from arxiv_picker.services.download_service import (
    DownloadSummary,
    build_relay_url,
    download_batch,
    download_pdf,
    get_download_path,
)

__all__ = [
    "DownloadSummary",
    "FetchError",
    "build_relay_url",
    "download_batch",
    "download_pdf",
    "get_download_path",
    "search",
]
