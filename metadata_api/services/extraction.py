"""Selector-driven extraction of page metadata.

Each field is described by an ordered tuple of ``Source`` entries. Scalar
fields take the first source that yields a value; list fields collect every
value from every source. Keeping the priority order as data lets it be
tested on its own and keeps a single code path for every field.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from metadata_api.utils.urls import resolve_url

logger = logging.getLogger(__name__)

FAVICON_FALLBACK = "/favicon.ico"


class Source(NamedTuple):
    """A CSS selector plus the attribute to read (None means text content)."""

    selector: str
    attr: str | None = None


TITLE_SOURCES = (
    Source("title"),
    Source('meta[property="og:title"]', "content"),
)

DESCRIPTION_SOURCES = (
    Source('meta[name="description"]', "content"),
    Source('meta[property="og:description"]', "content"),
    Source('meta[name="twitter:description"]', "content"),
)

FAVICON_SOURCES = (
    Source('link[rel~="icon"]', "href"),
    Source('link[rel="shortcut icon"]', "href"),
)

ALL_FAVICON_SOURCES = FAVICON_SOURCES + (
    Source('link[rel="apple-touch-icon"]', "href"),
    Source('link[rel="apple-touch-icon-precomposed"]', "href"),
    Source('meta[name="msapplication-TileImage"]', "content"),
)

PREVIEW_IMAGE_SOURCES = (
    Source('meta[property="og:image"]', "content"),
    Source('meta[name="twitter:image"]', "content"),
)

ALL_PREVIEW_IMAGE_SOURCES = (
    Source('meta[property="og:image"]', "content"),
    Source('meta[property="og:image:url"]', "content"),
    Source('meta[property="og:image:secure_url"]', "content"),
    Source('meta[name="twitter:image"]', "content"),
    Source('meta[name="twitter:image:src"]', "content"),
)


def parse_document(html: str) -> BeautifulSoup:
    """Parse HTML leniently; malformed markup yields a best-effort tree."""
    return BeautifulSoup(html, "lxml")


def _select(document: BeautifulSoup, selector: str) -> list[Tag]:
    try:
        return document.select(selector)
    except SelectorSyntaxError as e:
        logger.debug(f"Invalid selector {selector!r}: {e}")
        return []


def _attr_value(element: Tag, attr: str) -> str | None:
    value = element.get(attr)
    if value is None:
        return None
    # multi-valued attributes such as rel/class come back as lists
    return value if isinstance(value, str) else " ".join(value)


def first_text(document: BeautifulSoup, selector: str) -> str | None:
    """Concatenated descendant text of the first element matching ``selector``."""
    elements = _select(document, selector)
    if not elements:
        return None
    return elements[0].get_text()


def first_attr(document: BeautifulSoup, selector: str, attr: str) -> str | None:
    """``attr`` of the first element matching ``selector``.

    Only the first match is consulted; later matches are not searched when
    it lacks the attribute.
    """
    elements = _select(document, selector)
    if not elements:
        return None
    return _attr_value(elements[0], attr)


def all_attrs(document: BeautifulSoup, selector: str, attr: str) -> list[str]:
    """``attr`` of every element matching ``selector``, in document order."""
    values = []
    for element in _select(document, selector):
        value = _attr_value(element, attr)
        if value is not None:
            values.append(value)
    return values


def first_match(document: BeautifulSoup, sources: tuple[Source, ...]) -> str | None:
    for source in sources:
        if source.attr is None:
            value = first_text(document, source.selector)
        else:
            value = first_attr(document, source.selector, source.attr)
        if value is not None:
            return value
    return None


def collect_all(document: BeautifulSoup, sources: tuple[Source, ...]) -> list[str]:
    values: list[str] = []
    for source in sources:
        if source.attr is None:
            text = first_text(document, source.selector)
            if text is not None:
                values.append(text)
        else:
            values.extend(all_attrs(document, source.selector, source.attr))
    return values


def resolve_all(base_url: str, references: list[str]) -> list[str]:
    """Resolve references against ``base_url``, dropping failures and duplicates.

    The result is sorted so repeated calls give identical output.
    """
    resolved = (resolve_url(base_url, ref) for ref in references)
    return sorted({url for url in resolved if url is not None})


def extract_title(document: BeautifulSoup) -> str | None:
    return first_match(document, TITLE_SOURCES)


def extract_description(document: BeautifulSoup) -> str | None:
    return first_match(document, DESCRIPTION_SOURCES)


def extract_favicon(document: BeautifulSoup, base_url: str) -> str | None:
    href = first_match(document, FAVICON_SOURCES)
    if href is None:
        href = FAVICON_FALLBACK
    return resolve_url(base_url, href)


def extract_favicons(document: BeautifulSoup, base_url: str) -> list[str]:
    favicons = resolve_all(base_url, collect_all(document, ALL_FAVICON_SOURCES))
    if not favicons:
        fallback = resolve_url(base_url, FAVICON_FALLBACK)
        if fallback is not None:
            favicons = [fallback]
    return favicons


def extract_preview_image(document: BeautifulSoup, base_url: str) -> str | None:
    src = first_match(document, PREVIEW_IMAGE_SOURCES)
    if src is None:
        return None
    return resolve_url(base_url, src)


def extract_preview_images(document: BeautifulSoup, base_url: str) -> list[str]:
    return resolve_all(base_url, collect_all(document, ALL_PREVIEW_IMAGE_SOURCES))
