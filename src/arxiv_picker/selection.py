"""Selection tracking over stable record ids."""

from __future__ import annotations

from collections.abc import Iterable, Sequence


def set_selected(selected: set[str], paper_id: str, checked: bool) -> None:
    """Add or remove one id."""
    if checked:
        selected.add(paper_id)
    else:
        selected.discard(paper_id)


def toggle_selected(selected: set[str], paper_id: str) -> bool:
    """Flip one id and return its new state."""
    checked = paper_id not in selected
    set_selected(selected, paper_id, checked)
    return checked


def is_page_fully_selected(selected: set[str], page_ids: Sequence[str]) -> bool:
    """True only for a non-empty page whose every id is selected."""
    return bool(page_ids) and all(paper_id in selected for paper_id in page_ids)


def apply_select_all(selected: set[str], page_ids: Iterable[str], checked: bool) -> None:
    """Add or remove exactly the visible ids; other pages are untouched."""
    for paper_id in page_ids:
        set_selected(selected, paper_id, checked)


def selection_summary(count: int) -> str:
    if count == 0:
        return "No papers selected"
    return f"{count} paper{'s' if count != 1 else ''} selected"


__all__ = [
    "apply_select_all",
    "is_page_fully_selected",
    "selection_summary",
    "set_selected",
    "toggle_selected",
]
