"""Widget chrome for pagination controls and footer hints."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, Label, Static

from arxiv_picker.pagination import PageView
from arxiv_picker.query import escape_rich_text
from arxiv_picker.themes import THEME_COLORS

IDLE_FOOTER_BINDINGS: list[tuple[str, str]] = [
    ("Enter", "search"),
    ("?", "help"),
    ("q", "quit"),
]

RESULTS_FOOTER_BINDINGS: list[tuple[str, str]] = [
    ("Space", "select"),
    ("a", "select page"),
    ("e", "abstract"),
    ("[ ]", "page"),
    ("d", "download"),
    ("o", "open"),
    ("/", "search"),
    ("?", "help"),
]


class ContextFooter(Static):
    """Context-sensitive footer showing relevant keybindings."""

    DEFAULT_CSS = """
    ContextFooter {
        dock: bottom;
        height: 1;
        background: $th-background;
        color: $th-muted;
        padding: 0 1;
        border-top: solid $th-panel-alt;
    }
    """

    def render_bindings(self, bindings: list[tuple[str, str]]) -> None:
        """Update the footer with a list of (key, label) binding hints."""
        accent = THEME_COLORS["accent"]
        muted = THEME_COLORS["muted"]
        parts = [
            f"[bold {accent}]{escape_rich_text(key)}[/] [{muted}]{label}[/]"
            for key, label in bindings
        ]
        self.update("  ".join(parts))


class PaginationBar(Horizontal):
    """Previous/next buttons around a "Page X of Y" label."""

    DEFAULT_CSS = """
    PaginationBar {
        height: auto;
        align: center middle;
        padding: 0 1;
    }

    PaginationBar Button {
        min-width: 10;
    }

    PaginationBar #page-info {
        padding: 1 2 0 2;
        color: $th-text;
    }
    """

    def compose(self) -> ComposeResult:
        yield Button("< Prev", id="prev-page", disabled=True)
        yield Label("Page 1 of 1", id="page-info")
        yield Button("Next >", id="next-page", disabled=True)

    def update_view(self, view: PageView) -> None:
        """Reflect a PageView's label and boundary state."""
        self.query_one("#page-info", Label).update(view.label)
        self.query_one("#prev-page", Button).disabled = not view.has_previous
        self.query_one("#next-page", Button).disabled = not view.has_next


__all__ = [
    "IDLE_FOOTER_BINDINGS",
    "RESULTS_FOOTER_BINDINGS",
    "ContextFooter",
    "PaginationBar",
]
