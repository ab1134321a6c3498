"""Textual application wiring for the arXiv paper picker."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
from textual import on
from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, Checkbox, Header, Input, Label, OptionList
from textual.widgets.option_list import Option, OptionDoesNotExist

from arxiv_picker.action_messages import STATUS_IDLE
from arxiv_picker.models import AppState, PaperRecord, UserConfig
from arxiv_picker.pagination import PageView, build_page_view
from arxiv_picker.query import clamp_max_results, escape_rich_text
from arxiv_picker.selection import selection_summary
from arxiv_picker.services.interfaces import AppServices, build_default_app_services
from arxiv_picker.themes import TEXTUAL_THEMES, activate_palette, resolve_theme_name
from arxiv_picker.ui_constants import APP_BINDINGS, APP_CSS
from arxiv_picker.widgets import (
    IDLE_FOOTER_BINDINGS,
    RESULTS_FOOTER_BINDINGS,
    ContextFooter,
    PaginationBar,
    render_record_option,
    set_ascii_icons,
)

logger = logging.getLogger(__name__)

EMPTY_LIST_MESSAGE = "[dim italic]No results to show[/]"


class PaperPicker(App):
    """A TUI application to search arXiv and fetch selected PDFs."""

    TITLE = "arXiv Paper Picker"

    CSS = APP_CSS

    BINDINGS = APP_BINDINGS

    def __init__(
        self,
        config: UserConfig | None = None,
        *,
        initial_query: str = "",
        ascii_icons: bool = False,
        services: AppServices | None = None,
    ) -> None:
        super().__init__()
        # Register all Textual themes so $th-* CSS variables resolve before compose()
        for textual_theme in TEXTUAL_THEMES.values():
            self.register_theme(textual_theme)
        self._config = config or UserConfig()
        self._config.max_results = clamp_max_results(self._config.max_results)
        self._config.theme_name = resolve_theme_name(self._config.theme_name)
        self._apply_theme()
        self._services: AppServices = services or build_default_app_services()
        self.state = AppState()
        self._expanded_ids: set[str] = set()
        self._initial_query = initial_query.strip()
        self._search_inflight = False
        self._download_inflight = False
        self._http_client: httpx.AsyncClient | None = None
        self._background_tasks: set[asyncio.Task[Any]] = set()
        set_ascii_icons(ascii_icons)

    def _get_services(self) -> AppServices:
        return self._services

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="search-bar"):
            yield Input(
                placeholder=" Keywords, e.g. graph neural network",
                id="keywords-input",
            )
            yield Button("Search", id="search-button", variant="primary")
        yield Label(STATUS_IDLE, id="status-area")
        with Horizontal(id="download-controls", classes="hidden"):
            yield Checkbox("Select all on page", id="select-all")
            yield Label(selection_summary(0), id="selection-count")
            yield Button(
                "Download Selected", id="download-button", variant="success", disabled=True
            )
            yield Button("Open in Browser", id="open-button", disabled=True)
        yield OptionList(id="results-list")
        yield PaginationBar(id="pagination", classes="hidden")
        yield ContextFooter()

    def on_mount(self) -> None:
        """Create the shared HTTP client and draw the empty state."""
        self._http_client = httpx.AsyncClient()
        self._render_page(scroll_home=True)
        keywords_input = self._get_keywords_input()
        keywords_input.focus()
        if self._initial_query:
            keywords_input.value = self._initial_query
            self.action_submit_search()

    async def on_unmount(self) -> None:
        """Cancel background work and close the shared HTTP client."""
        pending = [task for task in self._background_tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            _, still_pending = await asyncio.wait(pending, timeout=0.5)
            for task in still_pending:
                logger.debug("Background task did not cancel before shutdown: %r", task)
        self._background_tasks.clear()

        client = self._http_client
        self._http_client = None
        if client is not None:
            try:
                await client.aclose()
            except (httpx.HTTPError, OSError, RuntimeError) as e:
                logger.debug(
                    "Failed to close shared HTTP client during shutdown: %s", e, exc_info=True
                )

    # ========================================================================
    # Widget access and background tasks
    # ========================================================================

    def _get_keywords_input(self) -> Input:
        return self.query_one("#keywords-input", Input)

    def _get_results_list(self) -> OptionList:
        return self.query_one("#results-list", OptionList)

    def _get_status_widget(self) -> Label:
        return self.query_one("#status-area", Label)

    def _track_task(self, coro: Any) -> asyncio.Task[Any]:
        """Create an asyncio task and track it to prevent garbage collection."""
        task = asyncio.create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        task.add_done_callback(self._on_task_done)
        return task

    @staticmethod
    def _on_task_done(task: asyncio.Task[Any]) -> None:
        """Log unhandled exceptions from background tasks."""
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Unhandled exception in background task: %s", exc, exc_info=exc)

    def _apply_theme(self) -> None:
        """Activate the configured theme for both Rich markup and CSS variables."""
        name = resolve_theme_name(self._config.theme_name)
        self._config.theme_name = name
        activate_palette(name)
        self.theme = name

    # ========================================================================
    # Rendering
    # ========================================================================

    def _current_view(self) -> PageView:
        return build_page_view(
            self.state.all_papers,
            self.state.current_page,
            self.state.selected_ids,
        )

    def _render_option(self, record: PaperRecord) -> str:
        return render_record_option(
            record,
            selected=record.id in self.state.selected_ids,
            expanded=record.id in self._expanded_ids,
        )

    def _render_page(self, *, scroll_home: bool) -> None:
        """Rebuild the result list, paging bar, and selection controls."""
        view = self._current_view()
        self.state.current_page = view.page

        option_list = self._get_results_list()
        previous = option_list.highlighted
        option_list.clear_options()
        if view.records:
            option_list.add_options(
                [Option(self._render_option(record), id=record.id) for record in view.records]
            )
            if scroll_home or previous is None:
                option_list.highlighted = 0
            else:
                option_list.highlighted = min(previous, len(view.records) - 1)
        else:
            option_list.add_option(Option(EMPTY_LIST_MESSAGE, disabled=True))
        if scroll_home:
            option_list.scroll_home(animate=False)

        has_results = bool(self.state.all_papers)
        self.query_one("#download-controls").set_class(not has_results, "hidden")
        pagination = self.query_one(PaginationBar)
        pagination.set_class(not has_results, "hidden")
        pagination.update_view(view)

        self.sub_title = f"{len(self.state.all_papers)} results" if has_results else ""
        self._refresh_selection_controls(view)
        self._update_footer()

    def _refresh_option(self, paper_id: str) -> None:
        """Re-render one row if it is on the current page."""
        view = self._current_view()
        if paper_id not in view.ids:
            return
        index = view.ids.index(paper_id)
        markup = self._render_option(view.records[index])
        try:
            self._get_results_list().replace_option_prompt_at_index(index, markup)
        except OptionDoesNotExist:
            pass

    def _refresh_selection_controls(self, view: PageView | None = None) -> None:
        """Sync the select-all box, counter, and action buttons with the selection."""
        view = view or self._current_view()
        checkbox = self.query_one("#select-all", Checkbox)
        if checkbox.value != view.all_selected:
            with self.prevent(Checkbox.Changed):
                checkbox.value = view.all_selected
        checkbox.disabled = not view.records

        count = len(self.state.selected_ids)
        self.query_one("#selection-count", Label).update(selection_summary(count))
        download_button = self.query_one("#download-button", Button)
        download_button.disabled = count == 0 or self._download_inflight
        download_button.label = "Downloading..." if self._download_inflight else "Download Selected"
        self.query_one("#open-button", Button).disabled = count == 0

    def _set_status(self, text: str, *, error: bool = False) -> None:
        status = self._get_status_widget()
        status.update(escape_rich_text(text))
        status.set_class(error, "error")

    def _set_search_busy(self, busy: bool) -> None:
        button = self.query_one("#search-button", Button)
        button.disabled = busy
        button.label = "Searching..." if busy else "Search"

    def _update_footer(self) -> None:
        footer = self.query_one(ContextFooter)
        if self.state.all_papers:
            footer.render_bindings(RESULTS_FOOTER_BINDINGS)
        else:
            footer.render_bindings(IDLE_FOOTER_BINDINGS)

    def _get_highlighted_id(self) -> str | None:
        option_list = self._get_results_list()
        index = option_list.highlighted
        if index is None:
            return None
        try:
            return option_list.get_option_at_index(index).id
        except OptionDoesNotExist:
            return None

    # ========================================================================
    # Event handlers
    # ========================================================================

    @on(Input.Submitted, "#keywords-input")
    def on_keywords_submitted(self) -> None:
        self.action_submit_search()

    @on(Button.Pressed, "#search-button")
    def on_search_pressed(self) -> None:
        self.action_submit_search()

    @on(Button.Pressed, "#prev-page")
    def on_prev_page_pressed(self) -> None:
        self.action_prev_page()

    @on(Button.Pressed, "#next-page")
    def on_next_page_pressed(self) -> None:
        self.action_next_page()

    @on(Button.Pressed, "#download-button")
    def on_download_pressed(self) -> None:
        self.action_download_selected()

    @on(Button.Pressed, "#open-button")
    def on_open_pressed(self) -> None:
        self.action_open_selected()

    @on(Checkbox.Changed, "#select-all")
    def on_select_all_changed(self, event: Checkbox.Changed) -> None:
        from arxiv_picker.actions import selection_actions as _actions

        # Programmatic syncs carry the derived state and need no action
        if event.value == self._current_view().all_selected:
            return
        _actions.set_page_selected(self, event.value)

    @on(OptionList.OptionSelected, "#results-list")
    def on_result_selected(self, event: OptionList.OptionSelected) -> None:
        from arxiv_picker.actions import selection_actions as _actions

        if event.option.id is not None:
            _actions.toggle_record(self, event.option.id)

    # ========================================================================
    # Actions
    # ========================================================================

    def action_focus_search(self) -> None:
        self._get_keywords_input().focus()

    def action_submit_search(self) -> None:
        from arxiv_picker.actions import search_actions as _actions

        return _actions.action_submit_search(self)

    def action_toggle_select(self) -> None:
        from arxiv_picker.actions import selection_actions as _actions

        return _actions.action_toggle_select(self)

    def action_toggle_select_page(self) -> None:
        from arxiv_picker.actions import selection_actions as _actions

        return _actions.action_toggle_select_page(self)

    def action_clear_selection(self) -> None:
        from arxiv_picker.actions import selection_actions as _actions

        return _actions.action_clear_selection(self)

    def action_toggle_abstract(self) -> None:
        from arxiv_picker.actions import selection_actions as _actions

        return _actions.action_toggle_abstract(self)

    def action_prev_page(self) -> None:
        from arxiv_picker.actions import selection_actions as _actions

        return _actions.action_prev_page(self)

    def action_next_page(self) -> None:
        from arxiv_picker.actions import selection_actions as _actions

        return _actions.action_next_page(self)

    def action_download_selected(self) -> None:
        from arxiv_picker.actions import retrieval_actions as _actions

        return _actions.action_download_selected(self)

    def action_open_selected(self) -> None:
        from arxiv_picker.actions import retrieval_actions as _actions

        return _actions.action_open_selected(self)

    def action_cycle_theme(self) -> None:
        from arxiv_picker.actions import ui_actions as _actions

        return _actions.action_cycle_theme(self)

    def action_show_help(self) -> None:
        from arxiv_picker.actions import ui_actions as _actions

        return _actions.action_show_help(self)


__all__ = [
    "EMPTY_LIST_MESSAGE",
    "PaperPicker",
]
