"""General-purpose modal dialogs: the help overlay and the confirm prompt."""

from __future__ import annotations

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from arxiv_picker.query import escape_rich_text
from arxiv_picker.themes import THEME_COLORS

# ============================================================================
# Help Overlay
# ============================================================================


class HelpScreen(ModalScreen[None]):
    """Help overlay listing keyboard shortcuts by category."""

    _DEFAULT_SECTIONS: list[tuple[str, list[tuple[str, str]]]] = [
        (
            "Search",
            [
                ("/", "Focus the keyword box"),
                ("Enter", "Run the search (in the keyword box)"),
            ],
        ),
        (
            "Results",
            [
                ("Up / Down", "Move between results"),
                ("[ ] / Left Right", "Previous / next page"),
                ("e", "Show / hide abstract"),
            ],
        ),
        (
            "Selection",
            [
                ("Space", "Toggle selection"),
                ("a", "Select / deselect this page"),
                ("u", "Clear selection"),
            ],
        ),
        (
            "Actions",
            [
                ("d", "Download selected PDFs"),
                ("o", "Open selected PDFs in browser"),
                ("Ctrl+t", "Cycle theme"),
                ("?", "Help overlay"),
                ("q", "Quit"),
            ],
        ),
    ]

    BINDINGS = [
        Binding("question_mark", "dismiss", "Close", show=False),
        Binding("escape", "dismiss", "Close"),
        Binding("q", "dismiss", "Close", show=False),
    ]

    CSS = """
    HelpScreen {
        align: center middle;
    }

    #help-dialog {
        width: 70%;
        height: 80%;
        min-width: 50;
        min-height: 16;
        background: $th-background;
        border: tall $th-accent;
        padding: 0 2;
        overflow-y: auto;
    }

    #help-title {
        text-style: bold;
        color: $th-accent-alt;
        text-align: center;
        margin-bottom: 1;
    }

    .help-section-title {
        text-style: bold;
    }

    .help-keys {
        padding-left: 2;
        margin-bottom: 1;
        color: $th-text;
    }

    #help-footer {
        text-align: center;
        color: $th-muted;
    }
    """

    def __init__(
        self,
        sections: list[tuple[str, list[tuple[str, str]]]] | None = None,
        footer_note: str = "Close: ? / Esc / q",
    ) -> None:
        super().__init__()
        self._sections = sections or list(self._DEFAULT_SECTIONS)
        self._footer_note = footer_note

    @staticmethod
    def _render_section_lines(entries: list[tuple[str, str]]) -> str:
        green = THEME_COLORS["green"]
        return "\n".join(
            f"  [{green}]{escape_rich_text(key)}[/]  {description}" for key, description in entries
        )

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="help-dialog"):
            yield Label("Keyboard Shortcuts", id="help-title")
            for section_name, entries in self._sections:
                if not entries:
                    continue
                yield Label(
                    f"[{THEME_COLORS['accent']}]{section_name}[/]",
                    classes="help-section-title",
                )
                yield Static(self._render_section_lines(entries), classes="help-keys")
            yield Label(self._footer_note, id="help-footer")

    def action_dismiss(self) -> None:
        """Close the help screen."""
        self.dismiss(None)


# ============================================================================
# Confirm Modal
# ============================================================================


class ConfirmModal(ModalScreen[bool]):
    """Modal dialog for confirming batch operations."""

    BINDINGS = [
        Binding("y", "confirm", "Confirm"),
        Binding("n", "cancel", "Cancel"),
        Binding("escape", "cancel", "Cancel"),
    ]

    CSS = """
    ConfirmModal {
        align: center middle;
    }

    #confirm-dialog {
        width: 50%;
        min-width: 40;
        height: auto;
        background: $th-background;
        border: tall $th-orange;
        padding: 0 2;
    }

    #confirm-message {
        text-style: bold;
        color: $th-accent-alt;
        margin-bottom: 1;
    }

    #confirm-buttons {
        height: auto;
        align: right middle;
    }

    #confirm-buttons Button {
        margin-left: 1;
    }

    #confirm-footer {
        color: $th-muted;
        margin-top: 1;
    }
    """

    def __init__(self, message: str) -> None:
        super().__init__()
        self._message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Label(escape_rich_text(self._message), id="confirm-message")
            with Horizontal(id="confirm-buttons"):
                yield Button("Confirm (y)", variant="warning", id="confirm-yes")
                yield Button("Cancel (Esc)", variant="default", id="confirm-no")
            yield Static("Confirm: y  Cancel: n / Esc", id="confirm-footer")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)

    @on(Button.Pressed, "#confirm-yes")
    def on_yes(self) -> None:
        self.dismiss(True)

    @on(Button.Pressed, "#confirm-no")
    def on_no(self) -> None:
        self.dismiss(False)


__all__ = [
    "ConfirmModal",
    "HelpScreen",
]
