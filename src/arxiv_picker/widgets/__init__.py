"""Reusable widgets and rendering helpers for the picker UI."""

from arxiv_picker.widgets.chrome import (
    IDLE_FOOTER_BINDINGS,
    RESULTS_FOOTER_BINDINGS,
    ContextFooter,
    PaginationBar,
)
from arxiv_picker.widgets.listing import (
    render_record_option,
    selection_marker,
    set_ascii_icons,
)

__all__ = [
    "IDLE_FOOTER_BINDINGS",
    "RESULTS_FOOTER_BINDINGS",
    "ContextFooter",
    "PaginationBar",
    "render_record_option",
    "selection_marker",
    "set_ascii_icons",
]
