"""docscribe.pipeline - HTML page to normalized Markdown.

Runs the three stages in order, with no network or file I/O::

    select_region -> html_to_markdown -> normalize_markdown

Usage::

    from docscribe import convert

    result = convert(html, url="https://docs.example.com/builds")
    if result.is_usable:
        print(result.title)
        print(result.markdown)

Pre-fetched Markdown (e.g. from a hosted scraping API) skips the first two
stages::

    result = convert_markdown(markdown)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docscribe.extractors.markdown import html_to_markdown
from docscribe.extractors.normalize import normalize_markdown
from docscribe.extractors.quality import (
    MIN_MARKDOWN_LENGTH,
    assess_markdown,
    extract_title,
    title_from_url,
)
from docscribe.extractors.region import (
    MIN_TEXT_LENGTH,
    SELECTOR_RULES,
    SelectorRule,
    css_rule,
    select_region,
)
from docscribe.items import ConversionResult, ExtractionProfile

if TYPE_CHECKING:
    from bs4 import Tag


logger = logging.getLogger(__name__)


def _rules_for(profile: ExtractionProfile | None) -> tuple[SelectorRule, ...]:
    if profile is None or not profile.content_selectors:
        return SELECTOR_RULES
    return (*(css_rule(s) for s in profile.content_selectors), *SELECTOR_RULES)


def _finish(
    markdown: str,
    *,
    url: str,
    method: str,
    region_text_length: int,
    min_length: int,
) -> ConversionResult:
    assessment = assess_markdown(markdown, min_length=min_length)
    if not assessment.is_usable:
        logger.warning(
            "no usable content (%s, %d chars) for %s",
            assessment.reason, assessment.length, url or "<input>",
        )
    title = extract_title(markdown) or (title_from_url(url) if url else None)
    return ConversionResult(
        markdown=markdown,
        title=title,
        method=method,
        region_text_length=region_text_length,
        is_usable=assessment.is_usable,
        reason=assessment.reason,
    )


def convert(
    html: str | Tag,
    *,
    url: str = "",
    profile: ExtractionProfile | None = None,
) -> ConversionResult:
    """Convert one HTML page to normalized Markdown.

    Never raises for malformed input.  A page whose Markdown is too short or
    looks like an error page comes back with ``is_usable=False`` and a
    ``reason``; the caller decides whether to keep it.

    Args:
        html:    Raw HTML string or an already-parsed tree (left untouched).
        url:     Source URL, used for logging and as a title fallback.
        profile: Optional per-site selector and threshold overrides.
    """
    region = select_region(
        html,
        rules=_rules_for(profile),
        extra_boilerplate=profile.boilerplate_selectors if profile else (),
        min_text_length=profile.min_text_length if profile else MIN_TEXT_LENGTH,
    )
    logger.debug(
        "region %s (%d chars) for %s", region.method, region.text_length, url or "<input>",
    )
    markdown = normalize_markdown(html_to_markdown(region.html))
    return _finish(
        markdown,
        url=url,
        method=region.method,
        region_text_length=region.text_length,
        min_length=profile.min_markdown_length if profile else MIN_MARKDOWN_LENGTH,
    )


def convert_markdown(
    markdown: str,
    *,
    url: str = "",
    min_length: int = MIN_MARKDOWN_LENGTH,
) -> ConversionResult:
    """Normalize pre-fetched Markdown and run the usable-content check."""
    return _finish(
        normalize_markdown(markdown),
        url=url,
        method="pre_fetched",
        region_text_length=0,
        min_length=min_length,
    )


class DocumentConverter:
    """Reusable converter bound to one extraction profile.

    Args:
        profile:    Per-site overrides; ``None`` uses the built-in rules.
        min_length: Minimum Markdown length, used only when no profile is given.
    """

    def __init__(
        self,
        profile: ExtractionProfile | None = None,
        min_length: int = MIN_MARKDOWN_LENGTH,
    ) -> None:
        self._profile = profile or ExtractionProfile(min_markdown_length=min_length)

    @property
    def profile(self) -> ExtractionProfile:
        return self._profile

    def convert(self, html: str | Tag, url: str = "") -> ConversionResult:
        return convert(html, url=url, profile=self._profile)

    def convert_markdown(self, markdown: str, url: str = "") -> ConversionResult:
        return convert_markdown(
            markdown, url=url, min_length=self._profile.min_markdown_length,
        )
