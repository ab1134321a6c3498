"""Shared test fixtures for arXiv picker tests."""

from __future__ import annotations

from typing import Any

import pytest

from arxiv_picker.models import PaperRecord, UserConfig
from arxiv_picker.themes import DEFAULT_THEME, THEME_COLORS
from arxiv_picker.widgets.listing import set_ascii_icons

# ── Module-level state isolation ─────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Restore THEME_COLORS and the list icon set after each test.

    PaperPicker.__init__ and theme cycling mutate these module-level values.
    """
    yield
    THEME_COLORS.clear()
    THEME_COLORS.update(DEFAULT_THEME)
    set_ascii_icons(False)


# ── Factories ────────────────────────────────────────────────────────────────


@pytest.fixture
def make_record():
    """Factory fixture for creating PaperRecord instances with sensible defaults."""

    def _make(
        arxiv_id: str = "2401.12345",
        title: str = "Test Paper",
        authors: tuple[str, ...] = ("Test Author",),
        published: str = "Mon, 15 Jan 2024",
        summary: str = "Test abstract content.",
        pdf_url: str | None = "",
        record_id: str | None = None,
    ) -> PaperRecord:
        if record_id is None:
            record_id = f"http://arxiv.org/abs/{arxiv_id}v1"
        if pdf_url == "":
            pdf_url = f"https://arxiv.org/pdf/{arxiv_id}v1"
        return PaperRecord(
            id=record_id,
            title=title,
            authors=authors,
            published=published,
            summary=summary,
            pdf_url=pdf_url,
        )

    return _make


@pytest.fixture
def make_records(make_record):
    """Build ``count`` distinct records with sequential ids."""

    def _make(count: int) -> list[PaperRecord]:
        return [
            make_record(arxiv_id=f"2401.{i:05d}", title=f"Paper {i}") for i in range(1, count + 1)
        ]

    return _make


@pytest.fixture
def sample_config():
    """Factory fixture for creating UserConfig with optional overrides."""

    def _make(**kwargs: Any) -> UserConfig:
        return UserConfig(**kwargs)

    return _make


_FEED_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<feed xmlns="http://www.w3.org/2005/Atom" '
    'xmlns:arxiv="http://arxiv.org/schemas/atom">\n'
    "  <title>ArXiv Query</title>\n"
)


def _entry_xml(entry: dict[str, Any]) -> str:
    authors = "".join(
        f"    <author><name>{name}</name></author>\n" for name in entry.get("authors", [])
    )
    links = f'    <link href="{entry["id"]}" rel="alternate" type="text/html"/>\n'
    if entry.get("pdf"):
        links += f'    <link title="pdf" href="{entry["pdf"]}" rel="related"/>\n'
    return (
        "  <entry>\n"
        f"    <id>{entry['id']}</id>\n"
        f"    <published>{entry.get('published', '2024-01-15T18:30:00Z')}</published>\n"
        f"    <title>{entry.get('title', 'Untitled')}</title>\n"
        f"    <summary>{entry.get('summary', '')}</summary>\n"
        f"{authors}{links}"
        "  </entry>\n"
    )


@pytest.fixture
def atom_feed():
    """Build an Atom feed string from a list of entry dicts.

    Keys: id (required), title, summary, published, authors (list), pdf.
    """

    def _make(entries: list[dict[str, Any]]) -> str:
        return _FEED_HEADER + "".join(_entry_xml(e) for e in entries) + "</feed>\n"

    return _make
