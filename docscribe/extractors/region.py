"""Content-region selection for documentation pages.

Step 1: strip boilerplate (navigation, chrome, metadata widgets) tree-wide
Step 2: priority selector rules, first candidate with > 100 chars of text wins
Step 3: body fallback with a defensive second strip
Step 4: remove per-page metadata left inside the chosen region
"""

from __future__ import annotations

import contextlib
import copy
import logging
from collections.abc import Callable, Iterable
from typing import NamedTuple

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

# Candidate text must be strictly longer than this to be accepted
MIN_TEXT_LENGTH = 100

# Removed before any selector rule is evaluated
BOILERPLATE_SELECTORS: tuple[str, ...] = (
    # Navigation and page chrome
    "nav", "header", "footer", ".navbar", ".sidebar", ".breadcrumb", ".toc",
    ".advertisement", ".nav", ".navigation", ".menu", ".header", ".footer",
    ".ads", ".social", ".github-link",
    # Edit / last-updated metadata
    ".edit-page", ".page-meta", ".last-updated", ".edit-link", ".print-link",
    ".feedback", ".rating", ".survey", ".newsletter-signup",
    "script", "style", "noscript", "iframe",
    # Article metadata
    ".timestamp", ".author", ".tags", ".category", ".share-buttons",
    ".reading-time", ".word-count", ".estimated-reading-time",
    # Standalone tables of contents
    ".table-of-contents", ".toc-container", "#toc",
)

# Most specific documentation-site layouts first, generic containers last
CONTENT_SELECTORS: tuple[str, ...] = (
    "main article",
    "main .content",
    ".main-content article",
    ".documentation .content",
    ".doc-content",
    ".article-content",
    ".markdown-body",
    ".prose",
    "article",
    "main",
    ".content",
    ".main-content",
    ".documentation",
    ".container .row .col",
)

_FALLBACK_STRIP_SELECTORS: tuple[str, ...] = (
    "nav", "header", "footer", "aside", ".sidebar",
)

# Can sit inside a legitimate content container, so only swept in the region
_REGION_METADATA_SELECTORS: tuple[str, ...] = (
    ".edit-page", ".github-edit-link", ".improve-page",
    ".page-last-modified", ".page-contributors",
)

BODY_FALLBACK = "body_fallback"


class SelectorRule(NamedTuple):
    name: str
    find: Callable[[BeautifulSoup], Tag | None]


class ContentRegion(NamedTuple):
    """Owned copy of the chosen content subtree."""

    node: Tag
    method: str
    text_length: int

    @property
    def html(self) -> str:
        return self.node.decode_contents()


def css_rule(selector: str) -> SelectorRule:
    """Build a :class:`SelectorRule` returning the first match of *selector*."""

    def _find(soup: BeautifulSoup) -> Tag | None:
        try:
            el = soup.select_one(selector)
        except Exception as exc:
            logger.debug("CSS selector %r failed: %s", selector, exc)
            return None
        return el if isinstance(el, Tag) else None

    return SelectorRule(name=selector, find=_find)


SELECTOR_RULES: tuple[SelectorRule, ...] = tuple(css_rule(s) for s in CONTENT_SELECTORS)


def _text_length(tag: Tag) -> int:
    return len(tag.get_text().strip())


def _remove_all(root: Tag, selectors: Iterable[str]) -> None:
    for selector in selectors:
        with contextlib.suppress(Exception):
            for el in root.select(selector):
                if isinstance(el, Tag):
                    el.decompose()


def _to_soup(html: str | Tag) -> BeautifulSoup | Tag:
    # Parsed trees belong to the caller: work on a deep copy
    if isinstance(html, Tag):
        return copy.copy(html)
    return BeautifulSoup(html or "", "lxml")


def select_region(
    html: str | Tag,
    *,
    rules: Iterable[SelectorRule] = SELECTOR_RULES,
    extra_boilerplate: Iterable[str] = (),
    min_text_length: int = MIN_TEXT_LENGTH,
) -> ContentRegion:
    """Locate the main content region of *html*.

    *html* may be a raw HTML string or an already-parsed tree; the input is
    never modified.  Always returns a region: when no rule's candidate is
    long enough the (stripped) body is used.
    """
    try:
        soup = _to_soup(html)
    except Exception as exc:
        logger.debug("HTML parsing failed: %s", exc)
        soup = BeautifulSoup("", "lxml")

    _remove_all(soup, (*BOILERPLATE_SELECTORS, *extra_boilerplate))

    region: Tag | None = None
    method = BODY_FALLBACK
    for rule in rules:
        candidate = rule.find(soup)
        if candidate is None:
            continue
        length = _text_length(candidate)
        if length > min_text_length:
            logger.debug("selector %r accepted (%d chars)", rule.name, length)
            region, method = candidate, rule.name
            break
        logger.debug("selector %r too short (%d chars)", rule.name, length)

    if region is None:
        body = soup.find("body")
        region = body if isinstance(body, Tag) else soup
        _remove_all(region, _FALLBACK_STRIP_SELECTORS)
        logger.debug("no selector accepted; using body fallback")

    _remove_all(region, _REGION_METADATA_SELECTORS)

    owned = copy.copy(region)
    return ContentRegion(node=owned, method=method, text_length=_text_length(owned))


def extract_content_region(
    html: str | Tag,
    *,
    rules: Iterable[SelectorRule] = SELECTOR_RULES,
    extra_boilerplate: Iterable[str] = (),
) -> str:
    """Return the main content of *html* as an HTML fragment string."""
    return select_region(html, rules=rules, extra_boilerplate=extra_boilerplate).html
