"""Vulture whitelist for Textual framework false positives.

Textual uses string-based dispatch for action_* methods (via BINDINGS),
lifecycle hooks, event handlers (@on decorators), and compose() methods.
Vulture can't trace these, so we declare them here.
"""

# ── PaperPicker (App) ─────────────────────────────────────────────────
from arxiv_picker.app import PaperPicker

PaperPicker.TITLE
PaperPicker.CSS
PaperPicker.BINDINGS
PaperPicker.compose
PaperPicker.on_mount
PaperPicker.on_unmount
PaperPicker.on_keywords_submitted
PaperPicker.on_search_pressed
PaperPicker.on_prev_page_pressed
PaperPicker.on_next_page_pressed
PaperPicker.on_download_pressed
PaperPicker.on_open_pressed
PaperPicker.on_select_all_changed
PaperPicker.on_result_selected
PaperPicker.action_focus_search
PaperPicker.action_submit_search
PaperPicker.action_toggle_select
PaperPicker.action_toggle_select_page
PaperPicker.action_clear_selection
PaperPicker.action_toggle_abstract
PaperPicker.action_prev_page
PaperPicker.action_next_page
PaperPicker.action_download_selected
PaperPicker.action_open_selected
PaperPicker.action_cycle_theme
PaperPicker.action_show_help

# ── ContextFooter (Static) ──────────────────────────────────────────
from arxiv_picker.widgets.chrome import ContextFooter

ContextFooter.DEFAULT_CSS

# ── PaginationBar (Horizontal) ──────────────────────────────────────
from arxiv_picker.widgets.chrome import PaginationBar

PaginationBar.DEFAULT_CSS
PaginationBar.compose

# ── HelpScreen ──────────────────────────────────────────────────────
from arxiv_picker.modals.common import HelpScreen

HelpScreen.BINDINGS
HelpScreen.CSS
HelpScreen.compose
HelpScreen.action_dismiss

# ── ConfirmModal ────────────────────────────────────────────────────
from arxiv_picker.modals.common import ConfirmModal

ConfirmModal.BINDINGS
ConfirmModal.CSS
ConfirmModal.compose
ConfirmModal.action_confirm
ConfirmModal.action_cancel
ConfirmModal.on_yes
ConfirmModal.on_no
