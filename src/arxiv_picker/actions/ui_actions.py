"""Theme and help overlay handlers for PaperPicker."""

from __future__ import annotations

from typing import TYPE_CHECKING

from arxiv_picker.modals import HelpScreen
from arxiv_picker.themes import next_theme_name

if TYPE_CHECKING:
    from arxiv_picker.app import PaperPicker


def action_cycle_theme(app: PaperPicker) -> None:
    """Cycle through the built-in color themes (not persisted)."""
    app._config.theme_name = next_theme_name(app._config.theme_name)
    app._apply_theme()
    app._render_page(scroll_home=False)
    app.notify(f"Theme: {app._config.theme_name}", title="Theme")


def action_show_help(app: PaperPicker) -> None:
    app.push_screen(HelpScreen())


__all__ = [
    "action_cycle_theme",
    "action_show_help",
]
