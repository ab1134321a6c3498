"""Internal UI constants for the PaperPicker app."""

from __future__ import annotations

from textual.binding import Binding, BindingType

APP_CSS = """
Screen {
    background: $th-background;
}

Header {
    background: $th-panel-alt;
    color: $th-text;
}

#search-bar {
    height: auto;
    padding: 0 1;
    background: $th-panel;
}

#keywords-input {
    width: 1fr;
    border: tall $th-accent;
    background: $th-background;
}

#keywords-input:focus {
    border: tall $th-accent-alt;
}

#search-button {
    margin-left: 1;
    min-width: 12;
}

#status-area {
    padding: 0 1;
    color: $th-muted;
}

#status-area.error {
    color: $th-orange;
}

#download-controls {
    height: auto;
    padding: 0 1;
    background: $th-panel;
}

#select-all {
    background: $th-panel;
}

#selection-count {
    width: 1fr;
    padding: 1 2 0 2;
    color: $th-green;
}

#download-controls Button {
    margin-left: 1;
}

#results-list {
    height: 1fr;
    border: tall $th-highlight;
    background: $th-panel;
    scrollbar-gutter: stable;
    scrollbar-background: $th-scrollbar-bg;
    scrollbar-color: $th-scrollbar-thumb;
    scrollbar-color-hover: $th-scrollbar-hover;
    scrollbar-color-active: $th-scrollbar-active;
}

#results-list:focus {
    border: tall $th-accent;
}

#results-list > .option-list--option-highlighted {
    background: $th-highlight;
}

#results-list:focus > .option-list--option-highlighted {
    background: $th-highlight-focus;
}

.hidden {
    display: none;
}
"""

APP_BINDINGS: list[BindingType] = [
    Binding("q", "quit", "Quit", show=False),
    Binding("slash", "focus_search", "Search", show=False),
    Binding("space", "toggle_select", "Select", show=False),
    Binding("a", "toggle_select_page", "Select Page", show=False),
    Binding("u", "clear_selection", "Clear Selection", show=False),
    Binding("e", "toggle_abstract", "Abstract", show=False),
    Binding("left_square_bracket,left", "prev_page", "Previous Page", show=False),
    Binding("right_square_bracket,right", "next_page", "Next Page", show=False),
    Binding("d", "download_selected", "Download", show=False),
    Binding("o", "open_selected", "Open in Browser", show=False),
    Binding("ctrl+t", "cycle_theme", "Theme", show=False),
    Binding("question_mark", "show_help", "Help (?)", show=False),
]

__all__ = [
    "APP_BINDINGS",
    "APP_CSS",
]
