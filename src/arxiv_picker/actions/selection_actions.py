"""Selection, abstract-toggle, and paging handlers for PaperPicker."""

from __future__ import annotations

from typing import TYPE_CHECKING

from arxiv_picker.pagination import step_page
from arxiv_picker.selection import apply_select_all, toggle_selected

if TYPE_CHECKING:
    from arxiv_picker.app import PaperPicker


def toggle_record(app: PaperPicker, paper_id: str) -> None:
    """Flip one record's selection and refresh its row and the controls."""
    if app.state.find(paper_id) is None:
        return
    toggle_selected(app.state.selected_ids, paper_id)
    app._refresh_option(paper_id)
    app._refresh_selection_controls()


def action_toggle_select(app: PaperPicker) -> None:
    """Toggle selection of the highlighted result."""
    paper_id = app._get_highlighted_id()
    if paper_id is not None:
        toggle_record(app, paper_id)


def set_page_selected(app: PaperPicker, checked: bool) -> None:
    """Select or deselect exactly the records on the current page."""
    view = app._current_view()
    apply_select_all(app.state.selected_ids, view.ids, checked)
    for paper_id in view.ids:
        app._refresh_option(paper_id)
    app._refresh_selection_controls()


def action_toggle_select_page(app: PaperPicker) -> None:
    """Select the whole page, or clear it if it is already fully selected."""
    view = app._current_view()
    if not view.records:
        return
    set_page_selected(app, not view.all_selected)


def action_clear_selection(app: PaperPicker) -> None:
    if not app.state.selected_ids:
        return
    app.state.selected_ids.clear()
    app._render_page(scroll_home=False)
    app.notify("Selection cleared", title="Selection")


def action_toggle_abstract(app: PaperPicker) -> None:
    """Show or hide the abstract of the highlighted result."""
    paper_id = app._get_highlighted_id()
    if paper_id is None:
        return
    if paper_id in app._expanded_ids:
        app._expanded_ids.discard(paper_id)
    else:
        app._expanded_ids.add(paper_id)
    app._refresh_option(paper_id)


def change_page(app: PaperPicker, direction: int) -> None:
    """Step one page back or forward; boundaries are no-ops."""
    state = app.state
    target = step_page(state.current_page, direction, len(state.all_papers))
    if target == state.current_page:
        return
    state.current_page = target
    app._render_page(scroll_home=True)


def action_prev_page(app: PaperPicker) -> None:
    change_page(app, -1)


def action_next_page(app: PaperPicker) -> None:
    change_page(app, 1)


__all__ = [
    "action_clear_selection",
    "action_next_page",
    "action_prev_page",
    "action_toggle_abstract",
    "action_toggle_select",
    "action_toggle_select_page",
    "change_page",
    "set_page_selected",
    "toggle_record",
]
