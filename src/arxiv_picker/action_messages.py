"""UI-facing copy builders for status lines, confirmations, and notifications."""

from __future__ import annotations

# Status area copy
STATUS_IDLE = "Enter keywords to begin your search."
STATUS_SEARCHING = "Searching for papers, please wait..."
STATUS_NO_RESULTS = "No papers found for those keywords."
STATUS_FETCH_FAILED = (
    "Failed to fetch data from arXiv. Please check your connection or try again later."
)
NO_SELECTION_MESSAGE = "No papers selected for download."
PDF_NOT_AVAILABLE = "PDF Not Available"


def _ensure_sentence(text: str) -> str:
    """Return text with terminal sentence punctuation."""
    cleaned = text.strip()
    if not cleaned:
        return ""
    if cleaned.endswith((".", "!", "?")):
        return cleaned
    return f"{cleaned}."


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"


def build_actionable_error(
    action: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    """Build a 2-3 line actionable error message."""
    lines = [f"Could not {action.strip()}."]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def build_next_step_hint(next_step: str) -> str:
    """Build a canonical next-step guidance line."""
    return f"Next step: {_ensure_sentence(next_step)}"


def build_found_status(count: int) -> str:
    return f"Found {count} unique paper{'s' if count != 1 else ''}."


def requires_batch_confirmation(item_count: int, threshold: int) -> bool:
    """Return whether an action should use a confirmation modal."""
    return item_count > threshold


def build_open_pdfs_confirmation_prompt(item_count: int) -> str:
    """Build confirmation prompt text for opening PDF URLs in the browser."""
    return (
        f"This will attempt to open {_plural(item_count, 'new tab')} in your browser.\n"
        "Some browsers may ask before opening many tabs at once."
    )


def build_download_pdfs_confirmation_prompt(item_count: int, download_dir: str) -> str:
    """Build confirmation prompt text for starting PDF downloads."""
    return f"Download {_plural(item_count, 'PDF')} to {download_dir}?"


def build_download_progress(index: int, total: int, title: str) -> str:
    return f"Downloading {index}/{total}: {title}"


def build_download_summary(successes: int, failures: int) -> str:
    """Final status line for a retrieval batch."""
    return f"Download complete: {successes} succeeded, {failures} failed."


def build_open_pdfs_summary(opened: int, skipped: int) -> str:
    """Notification after opening PDFs in the browser."""
    if opened == 0:
        return "No valid PDF links found for the selected papers."
    message = f"{_plural(opened, 'paper')} opened in new tabs."
    if skipped:
        message += f" {skipped} without a PDF link skipped."
    return message


__all__ = [
    "NO_SELECTION_MESSAGE",
    "PDF_NOT_AVAILABLE",
    "STATUS_FETCH_FAILED",
    "STATUS_IDLE",
    "STATUS_NO_RESULTS",
    "STATUS_SEARCHING",
    "build_actionable_error",
    "build_download_pdfs_confirmation_prompt",
    "build_download_progress",
    "build_download_summary",
    "build_found_status",
    "build_next_step_hint",
    "build_open_pdfs_confirmation_prompt",
    "build_open_pdfs_summary",
    "requires_batch_confirmation",
]
