"""List rendering helpers for search result entries."""

from __future__ import annotations

from arxiv_picker.action_messages import PDF_NOT_AVAILABLE
from arxiv_picker.models import PaperRecord
from arxiv_picker.query import escape_rich_text, truncate_text
from arxiv_picker.themes import THEME_COLORS

AUTHORS_MAX_LEN = 120  # Max author line length in list items

_ICON_SETS: dict[str, dict[str, str]] = {
    "unicode": {
        "selected": "☑",  # ballot box with check
        "unselected": "☐",  # ballot box
        "pdf": "⤓",  # downwards arrow to bar
    },
    "ascii": {
        "selected": "[x]",
        "unselected": "[ ]",
        "pdf": "PDF",
    },
}
_ACTIVE_ICON_SET = _ICON_SETS["unicode"]


def set_ascii_icons(enabled: bool) -> None:
    """Switch list indicators between Unicode and ASCII modes."""
    global _ACTIVE_ICON_SET
    _ACTIVE_ICON_SET = _ICON_SETS["ascii"] if enabled else _ICON_SETS["unicode"]


def selection_marker(selected: bool) -> str:
    """Checkbox marker for a row, escaped for Rich markup."""
    icon = _ACTIVE_ICON_SET["selected" if selected else "unselected"]
    return escape_rich_text(icon)


def _render_title_line(record: PaperRecord, selected: bool) -> str:
    color = THEME_COLORS["green"] if selected else THEME_COLORS["muted"]
    marker = f"[{color}]{selection_marker(selected)}[/]"
    title = escape_rich_text(record.title) or "[dim italic]Untitled[/]"
    return f"{marker} [bold]{title}[/]"


def _render_meta_line(record: PaperRecord) -> str:
    parts = [f"[{THEME_COLORS['accent_alt']}]{escape_rich_text(record.published)}[/]"]
    if record.arxiv_id:
        parts.append(f"[dim]{escape_rich_text(record.arxiv_id)}[/]")
    if record.has_pdf:
        parts.append(f"[{THEME_COLORS['green']}]{escape_rich_text(_ACTIVE_ICON_SET['pdf'])}[/]")
    else:
        parts.append(f"[{THEME_COLORS['orange']}]{PDF_NOT_AVAILABLE}[/]")
    return "  ".join(parts)


def render_record_option(
    record: PaperRecord,
    *,
    selected: bool,
    expanded: bool = False,
) -> str:
    """Render a single result as Rich markup for OptionList."""
    lines = [_render_title_line(record, selected)]
    authors = ", ".join(record.authors)
    if authors:
        safe_authors = escape_rich_text(truncate_text(authors, AUTHORS_MAX_LEN))
        lines.append(f"    [{THEME_COLORS['muted']}]{safe_authors}[/]")
    lines.append(f"    {_render_meta_line(record)}")
    if expanded:
        summary = escape_rich_text(record.summary) or "No abstract available"
        lines.append(f"    [italic]{summary}[/]")
    return "\n".join(lines)


__all__ = [
    "AUTHORS_MAX_LEN",
    "render_record_option",
    "selection_marker",
    "set_ascii_icons",
]
