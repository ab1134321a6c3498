"""Atom feed parsing and arXiv identifier helpers."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from datetime import datetime, tzinfo

from arxiv_picker.models import PaperRecord
from arxiv_picker.query import normalize_whitespace

logger = logging.getLogger(__name__)

# Display format for published dates, e.g. "Mon, 15 Jan 2024"
PUBLISHED_DATE_FORMAT = "%a, %d %b %Y"

ATOM_NS = {"atom": "http://www.w3.org/2005/Atom", "arxiv": "http://arxiv.org/schemas/atom"}

_ARXIV_VERSION_SUFFIX = re.compile(r"v\d+$", re.IGNORECASE)


class FeedParseError(ValueError):
    """Raised when a search response body is not well-formed XML."""


def normalize_arxiv_id(raw: str) -> str:
    """Reduce an arXiv URL or identifier to its bare, version-less form.

    >>> normalize_arxiv_id("http://arxiv.org/abs/2401.12345v2")
    '2401.12345'
    """
    text = raw.strip()
    if not text:
        return ""

    if "arxiv.org" in text:
        for marker in ("/abs/", "/pdf/"):
            idx = text.find(marker)
            if idx >= 0:
                text = text[idx + len(marker) :]
                break

    text = text.split("?", 1)[0].split("#", 1)[0].strip().strip("/")
    text = text.removesuffix(".pdf")
    return _ARXIV_VERSION_SUFFIX.sub("", text)


def secure_url(url: str) -> str:
    """Rewrite a leading ``http://`` scheme to ``https://``."""
    if url.startswith("http://"):
        return "https://" + url[len("http://") :]
    return url


def format_published(raw_date: str, tz: tzinfo | None = None) -> str:
    """Convert an Atom timestamp to a local-time display date.

    ``tz=None`` means the machine's local timezone. Unparseable input is
    returned trimmed but otherwise unchanged.
    """
    cleaned = raw_date.strip()
    if not cleaned:
        return ""

    normalized = cleaned
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        return cleaned
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz)
    return parsed.strftime(PUBLISHED_DATE_FORMAT)


def _atom_text(node: ET.Element, path: str) -> str:
    """Extract normalized text from an Atom XML node path."""
    found = node.find(path, ATOM_NS)
    if found is None or found.text is None:
        return ""
    return normalize_whitespace(found.text)


def _pdf_link(entry: ET.Element) -> str | None:
    for link in entry.findall("atom:link", ATOM_NS):
        if link.get("title") == "pdf":
            href = (link.get("href") or "").strip()
            return secure_url(href) if href else None
    return None


def parse_search_feed(xml_text: str, *, tz: tzinfo | None = None) -> list[PaperRecord]:
    """Parse an arXiv Atom feed into PaperRecord objects.

    Entries keep feed order. Entries without an id are skipped and repeated
    ids keep only the first occurrence.

    Raises:
        FeedParseError: If the body is not well-formed XML.
    """
    if not xml_text.strip():
        return []

    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise FeedParseError("Invalid arXiv API XML response") from exc

    records: list[PaperRecord] = []
    seen_ids: set[str] = set()

    for entry in root.findall("atom:entry", ATOM_NS):
        paper_id = _atom_text(entry, "atom:id")
        if not paper_id:
            logger.debug("Skipping feed entry without an id")
            continue
        if paper_id in seen_ids:
            logger.debug("Dropping duplicate feed entry %s", paper_id)
            continue
        seen_ids.add(paper_id)

        authors = tuple(
            normalize_whitespace(author.text)
            for author in entry.findall("atom:author/atom:name", ATOM_NS)
            if author.text and author.text.strip()
        )
        records.append(
            PaperRecord(
                id=paper_id,
                title=_atom_text(entry, "atom:title"),
                authors=authors,
                published=format_published(_atom_text(entry, "atom:published"), tz),
                summary=_atom_text(entry, "atom:summary"),
                pdf_url=_pdf_link(entry),
            )
        )

    return records


__all__ = [
    "ATOM_NS",
    "PUBLISHED_DATE_FORMAT",
    "FeedParseError",
    "format_published",
    "normalize_arxiv_id",
    "parse_search_feed",
    "secure_url",
]
