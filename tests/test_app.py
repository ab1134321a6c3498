"""End-to-end tests for PaperPicker using Textual run_test() + pilot."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from textual.widgets import Button, Checkbox, Label, OptionList

from arxiv_picker.action_messages import STATUS_FETCH_FAILED
from arxiv_picker.actions import retrieval_actions, search_actions, selection_actions
from arxiv_picker.app import PaperPicker
from arxiv_picker.modals import ConfirmModal, HelpScreen
from arxiv_picker.models import UserConfig
from arxiv_picker.query import EMPTY_QUERY_MESSAGE
from arxiv_picker.services.arxiv_api_service import FetchError
from arxiv_picker.services.interfaces import AppServices


def _services(search_result=None, *, search_error=None) -> AppServices:
    async def _download_pdf(*, record, **_kwargs):
        return record.has_pdf

    search = AsyncMock(return_value=search_result or [], side_effect=search_error)
    return AppServices(
        arxiv_api=SimpleNamespace(search=search),
        download=SimpleNamespace(download_pdf=AsyncMock(side_effect=_download_pdf)),
    )


def _status(app: PaperPicker) -> str:
    return str(app.query_one("#status-area", Label).content)


def _page_label(app: PaperPicker) -> str:
    return str(app.query_one("#page-info", Label).content)


class TestSearchFlow:
    @pytest.mark.asyncio
    async def test_empty_state_on_mount(self):
        app = PaperPicker(services=_services())
        async with app.run_test():
            option_list = app.query_one("#results-list", OptionList)
            assert option_list.option_count == 1
            assert option_list.get_option_at_index(0).disabled is True
            assert app.query_one("#download-controls").has_class("hidden")
            assert app.query_one("#pagination").has_class("hidden")
            assert app.query_one("#download-button", Button).disabled is True

    @pytest.mark.asyncio
    async def test_search_renders_first_page(self, make_records):
        services = _services(make_records(25))
        app = PaperPicker(UserConfig(max_results=100), services=services)
        async with app.run_test() as pilot:
            await search_actions.run_search(app, "graph neural network")
            await pilot.pause()

            assert app.query_one("#results-list", OptionList).option_count == 10
            assert _status(app) == "Found 25 unique papers."
            assert _page_label(app) == "Page 1 of 3"
            assert not app.query_one("#download-controls").has_class("hidden")
            assert app.query_one("#prev-page", Button).disabled is True
            assert app.query_one("#next-page", Button).disabled is False
            kwargs = services.arxiv_api.search.await_args.kwargs
            assert kwargs["keywords"] == "graph neural network"
            assert kwargs["max_results"] == 100

    @pytest.mark.asyncio
    async def test_initial_query_searches_on_mount(self, make_records):
        services = _services(make_records(3))
        app = PaperPicker(initial_query="  diffusion ", services=services)
        async with app.run_test() as pilot:
            end = asyncio.get_running_loop().time() + 2.0
            while not app.state.all_papers and asyncio.get_running_loop().time() < end:
                await pilot.pause(0.05)

            assert len(app.state.all_papers) == 3
            assert services.arxiv_api.search.await_args.kwargs["keywords"] == "diffusion"

    @pytest.mark.asyncio
    async def test_empty_keywords_leave_state_untouched(self, make_records):
        services = _services(make_records(12))
        app = PaperPicker(services=services)
        async with app.run_test() as pilot:
            await search_actions.run_search(app, "transformers")
            selection_actions.toggle_record(app, app.state.all_papers[0].id)

            await search_actions.run_search(app, "   ")
            await pilot.pause()

            assert services.arxiv_api.search.await_count == 1
            assert len(app.state.all_papers) == 12
            assert len(app.state.selected_ids) == 1
            assert _status(app) == EMPTY_QUERY_MESSAGE
            assert app.query_one("#status-area").has_class("error")

    @pytest.mark.asyncio
    async def test_new_search_resets_selection_and_page(self, make_records):
        app = PaperPicker(services=_services(make_records(25)))
        async with app.run_test() as pilot:
            await search_actions.run_search(app, "first")
            selection_actions.toggle_record(app, app.state.all_papers[0].id)
            selection_actions.change_page(app, 1)

            await search_actions.run_search(app, "second")
            await pilot.pause()

            assert app.state.selected_ids == set()
            assert app.state.current_page == 1
            assert _page_label(app) == "Page 1 of 3"

    @pytest.mark.asyncio
    async def test_fetch_error_clears_results(self, make_records):
        services = _services(make_records(5))
        app = PaperPicker(services=services)
        async with app.run_test() as pilot:
            await search_actions.run_search(app, "ok")
            services.arxiv_api.search.side_effect = FetchError(503, "Service Unavailable")

            await search_actions.run_search(app, "broken")
            await pilot.pause()

            assert app.state.all_papers == []
            assert _status(app) == STATUS_FETCH_FAILED
            assert app._search_inflight is False
            assert app.query_one("#search-button", Button).disabled is False

    @pytest.mark.asyncio
    async def test_network_error_reports_failure(self):
        app = PaperPicker(services=_services(search_error=httpx.ConnectError("offline")))
        async with app.run_test() as pilot:
            await search_actions.run_search(app, "anything")
            await pilot.pause()
            assert _status(app) == STATUS_FETCH_FAILED

    @pytest.mark.asyncio
    async def test_no_results(self):
        app = PaperPicker(services=_services([]))
        async with app.run_test() as pilot:
            await search_actions.run_search(app, "nothing matches")
            await pilot.pause()
            assert _status(app) == "No papers found for those keywords."
            assert app.query_one("#download-controls").has_class("hidden")


class TestSelectionAndPaging:
    @pytest.mark.asyncio
    async def test_selection_persists_across_pages(self, make_records):
        app = PaperPicker(services=_services(make_records(25)))
        async with app.run_test() as pilot:
            await search_actions.run_search(app, "x")
            third = app.state.all_papers[2].id
            selection_actions.toggle_record(app, third)

            await pilot.press("right_square_bracket")
            await pilot.pause()
            assert app.state.current_page == 2
            await pilot.press("left_square_bracket")
            await pilot.pause()

            assert app.state.current_page == 1
            assert third in app.state.selected_ids
            assert app.query_one("#select-all", Checkbox).value is False
            assert "1 paper selected" in str(app.query_one("#selection-count", Label).content)

    @pytest.mark.asyncio
    async def test_paging_stops_at_boundaries(self, make_records):
        app = PaperPicker(services=_services(make_records(25)))
        async with app.run_test() as pilot:
            await search_actions.run_search(app, "x")
            selection_actions.change_page(app, -1)
            assert app.state.current_page == 1
            for _ in range(5):
                selection_actions.change_page(app, 1)
            await pilot.pause()
            assert app.state.current_page == 3
            assert app.query_one("#results-list", OptionList).option_count == 5
            assert app.query_one("#next-page", Button).disabled is True

    @pytest.mark.asyncio
    async def test_select_all_checkbox_affects_only_current_page(self, make_records):
        app = PaperPicker(services=_services(make_records(25)))
        async with app.run_test() as pilot:
            await search_actions.run_search(app, "x")
            checkbox = app.query_one("#select-all", Checkbox)

            checkbox.value = True
            await pilot.pause()
            assert app.state.selected_ids == {p.id for p in app.state.all_papers[:10]}

            selection_actions.change_page(app, 1)
            await pilot.pause()
            assert checkbox.value is False

            selection_actions.change_page(app, -1)
            await pilot.pause()
            assert checkbox.value is True

            checkbox.value = False
            await pilot.pause()
            assert app.state.selected_ids == set()

    @pytest.mark.asyncio
    async def test_deselecting_one_row_unchecks_select_all(self, make_records):
        app = PaperPicker(services=_services(make_records(4)))
        async with app.run_test() as pilot:
            await search_actions.run_search(app, "x")
            selection_actions.action_toggle_select_page(app)
            await pilot.pause()
            assert app.query_one("#select-all", Checkbox).value is True

            selection_actions.toggle_record(app, app.state.all_papers[1].id)
            await pilot.pause()
            assert app.query_one("#select-all", Checkbox).value is False
            assert len(app.state.selected_ids) == 3

    @pytest.mark.asyncio
    async def test_enter_on_row_toggles_it(self, make_records):
        app = PaperPicker(services=_services(make_records(3)))
        async with app.run_test() as pilot:
            await search_actions.run_search(app, "x")
            await pilot.pause()
            app.query_one("#results-list", OptionList).focus()
            await pilot.press("enter")
            await pilot.pause()
            assert app.state.selected_ids == {app.state.all_papers[0].id}

    @pytest.mark.asyncio
    async def test_clear_selection_and_abstract_toggle(self, make_records):
        app = PaperPicker(services=_services(make_records(3)))
        async with app.run_test() as pilot:
            await search_actions.run_search(app, "x")
            selection_actions.action_toggle_select_page(app)
            selection_actions.action_toggle_abstract(app)
            await pilot.pause()
            assert app._expanded_ids == {app.state.all_papers[0].id}

            selection_actions.action_clear_selection(app)
            await pilot.pause()
            assert app.state.selected_ids == set()
            assert app.query_one("#download-button", Button).disabled is True


class TestRetrieval:
    @pytest.mark.asyncio
    async def test_download_batch_reports_partial_failure(self, make_record, tmp_path):
        records = [
            make_record(arxiv_id="2401.00001", title="A"),
            make_record(arxiv_id="2401.00002", title="B", pdf_url=None),
            make_record(arxiv_id="2401.00003", title="C"),
        ]
        services = _services(records)
        app = PaperPicker(UserConfig(download_dir=str(tmp_path)), services=services)
        async with app.run_test() as pilot:
            await search_actions.run_search(app, "x")
            selection_actions.action_toggle_select_page(app)

            summary = await retrieval_actions.run_download_batch(app, app.state.selected_papers())
            await pilot.pause()

            assert (summary.successes, summary.failures) == (2, 1)
            assert summary.failed_ids == [records[1].id]
            assert _status(app) == "Download complete: 2 succeeded, 1 failed."
            assert app._download_inflight is False
            calls = services.download.download_pdf.await_args_list
            assert [c.kwargs["record"].title for c in calls] == ["A", "B", "C"]
            assert all(c.kwargs["download_dir"] == tmp_path for c in calls)
            assert all(c.kwargs["relay_url"] is None for c in calls)

    @pytest.mark.asyncio
    async def test_download_uses_relay_when_enabled(self, make_records, tmp_path):
        services = _services(make_records(1))
        config = UserConfig(
            download_dir=str(tmp_path), use_relay=True, relay_url="https://relay.example/?"
        )
        app = PaperPicker(config, services=services)
        async with app.run_test():
            await search_actions.run_search(app, "x")
            await retrieval_actions.run_download_batch(app, app.state.all_papers)
            kwargs = services.download.download_pdf.await_args.kwargs
            assert kwargs["relay_url"] == "https://relay.example/?"

    @pytest.mark.asyncio
    async def test_download_without_selection_notifies(self, make_records):
        services = _services(make_records(3))
        app = PaperPicker(services=services)
        async with app.run_test():
            await search_actions.run_search(app, "x")
            app.notify = MagicMock()

            retrieval_actions.action_download_selected(app)

            app.notify.assert_called_once()
            assert app.notify.call_args.args[0] == "No papers selected for download."
            services.download.download_pdf.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_large_download_asks_first(self, make_records, tmp_path):
        services = _services(make_records(25))
        app = PaperPicker(UserConfig(download_dir=str(tmp_path)), services=services)
        async with app.run_test() as pilot:
            await search_actions.run_search(app, "x")
            selection_actions.action_toggle_select_page(app)
            selection_actions.change_page(app, 1)
            selection_actions.toggle_record(app, app.state.all_papers[10].id)

            retrieval_actions.action_download_selected(app)
            await pilot.pause()
            assert isinstance(app.screen, ConfirmModal)

            await pilot.press("n")
            await pilot.pause()
            assert not isinstance(app.screen, ConfirmModal)
            services.download.download_pdf.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_open_selected_confirms_then_opens(self, make_record):
        records = [
            make_record(arxiv_id="2401.00001"),
            make_record(arxiv_id="2401.00002", pdf_url=None),
        ]
        app = PaperPicker(services=_services(records))
        async with app.run_test() as pilot:
            await search_actions.run_search(app, "x")
            selection_actions.action_toggle_select_page(app)
            app.notify = MagicMock()

            with patch("arxiv_picker.actions.retrieval_actions.webbrowser.open") as opener:
                retrieval_actions.action_open_selected(app)
                await pilot.pause()
                assert isinstance(app.screen, ConfirmModal)
                opener.assert_not_called()

                await pilot.press("y")
                await pilot.pause()

            opener.assert_called_once_with("https://arxiv.org/pdf/2401.00001v1")
            assert app.notify.call_args.args[0] == (
                "1 paper opened in new tabs. 1 without a PDF link skipped."
            )


def test_open_pdfs_in_browser_counts(make_record):
    records = [
        make_record(arxiv_id="2401.00001"),
        make_record(arxiv_id="2401.00002", pdf_url=None),
        make_record(arxiv_id="2401.00003", pdf_url="http://arxiv.org/pdf/2401.00003v1"),
    ]
    opened_urls: list[str] = []

    def _opener(url: str) -> bool:
        opened_urls.append(url)
        return not url.endswith("00003v1")

    assert retrieval_actions.open_pdfs_in_browser(records, opener=_opener) == (1, 2)
    assert opened_urls == [
        "https://arxiv.org/pdf/2401.00001v1",
        "https://arxiv.org/pdf/2401.00003v1",
    ]


class TestChrome:
    @pytest.mark.asyncio
    async def test_help_screen_opens_and_closes(self):
        app = PaperPicker(services=_services())
        async with app.run_test() as pilot:
            app.action_show_help()
            await pilot.pause()
            assert isinstance(app.screen, HelpScreen)
            await pilot.press("escape")
            await pilot.pause()
            assert not isinstance(app.screen, HelpScreen)

    @pytest.mark.asyncio
    async def test_cycle_theme(self):
        app = PaperPicker(UserConfig(theme_name="monokai"), services=_services())
        async with app.run_test() as pilot:
            app.action_cycle_theme()
            await pilot.pause()
            assert app._config.theme_name != "monokai"
            assert app.theme == app._config.theme_name

    @pytest.mark.asyncio
    async def test_unknown_theme_falls_back(self):
        app = PaperPicker(UserConfig(theme_name="no-such-theme"), services=_services())
        async with app.run_test():
            assert app.theme == "monokai"


class TestInFlightGuards:
    @pytest.mark.asyncio
    async def test_theme_is_active_before_mount(self):
        app = PaperPicker(UserConfig(theme_name="solarized-dark"), services=_services())
        assert app.theme == "solarized-dark"
        async with app.run_test():
            assert _status(app) == "Enter keywords to begin your search."

    @pytest.mark.asyncio
    async def test_search_in_flight_disables_button_and_ignores_resubmit(self, make_records):
        release = asyncio.Event()
        records = make_records(3)

        async def _gated_search(**_kwargs):
            await release.wait()
            return records

        services = _services()
        services.arxiv_api.search = AsyncMock(side_effect=_gated_search)
        app = PaperPicker(services=services)
        async with app.run_test() as pilot:
            first = asyncio.create_task(search_actions.run_search(app, "first"))
            await pilot.pause()
            search_button = app.query_one("#search-button", Button)
            assert search_button.disabled is True

            app.notify = MagicMock()
            await search_actions.run_search(app, "second")
            assert services.arxiv_api.search.await_count == 1
            app.notify.assert_called_once()

            release.set()
            await first
            await pilot.pause()
            assert search_button.disabled is False
            assert len(app.state.all_papers) == 3

    @pytest.mark.asyncio
    async def test_download_button_disabled_while_batch_runs(self, make_records, tmp_path):
        release = asyncio.Event()

        async def _gated_download(**_kwargs):
            await release.wait()
            return True

        services = _services(make_records(2))
        services.download.download_pdf = AsyncMock(side_effect=_gated_download)
        app = PaperPicker(UserConfig(download_dir=str(tmp_path)), services=services)
        async with app.run_test() as pilot:
            await search_actions.run_search(app, "x")
            selection_actions.action_toggle_select_page(app)
            download_button = app.query_one("#download-button", Button)
            assert download_button.disabled is False

            retrieval_actions.action_download_selected(app)
            await pilot.pause()
            assert app._download_inflight is True
            assert download_button.disabled is True
            assert str(download_button.label) == "Downloading..."

            release.set()
            end = asyncio.get_running_loop().time() + 2.0
            while app._download_inflight and asyncio.get_running_loop().time() < end:
                await pilot.pause(0.05)

            assert app._download_inflight is False
            assert download_button.disabled is False
            assert services.download.download_pdf.await_count == 2
            assert _status(app) == "Download complete: 2 succeeded, 0 failed."

    @pytest.mark.asyncio
    async def test_footer_switches_to_result_hints(self, make_records):
        from arxiv_picker.widgets import ContextFooter

        app = PaperPicker(services=_services(make_records(2)))
        async with app.run_test() as pilot:
            footer = app.query_one(ContextFooter)
            assert "search" in str(footer.content)
            assert "download" not in str(footer.content)

            await search_actions.run_search(app, "x")
            await pilot.pause()
            assert "download" in str(footer.content)
            assert "select page" in str(footer.content)
