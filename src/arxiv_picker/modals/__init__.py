"""Modal screens for the picker UI."""

from arxiv_picker.modals.common import ConfirmModal, HelpScreen

__all__ = [
    "ConfirmModal",
    "HelpScreen",
]
