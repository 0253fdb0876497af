"""docscribe.extractors.quality — usable-content checks for converted pages.

Pure functions, no network calls.  Tells the caller whether a converted
page is worth persisting (long enough, not an error page) and derives a
title for it.

Usage::

    from docscribe.extractors.quality import assess_markdown

    assessment = assess_markdown(markdown)
    if not assessment.is_usable:
        print(assessment.reason, assessment.length)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlparse

# Markdown shorter than this (after stripping) is "no usable content"
MIN_MARKDOWN_LENGTH = 100

# Error-page bodies are short; long pages that merely mention 404 are kept
_ERROR_BODY_MAX_LENGTH = 500

_ERROR_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b404\b"),
    re.compile(r"page not found", re.IGNORECASE),
    re.compile(r"^not found$", re.IGNORECASE),
)

_H1_RE = re.compile(r"^#\s+(.+)$")


@dataclass
class ContentAssessment:
    """Result of a usable-content check."""

    is_usable: bool
    reason: str | None  # "empty" | "too_short" | "error_page"
    length: int


def _is_error_text(text: str) -> bool:
    return any(p.search(text) for p in _ERROR_PATTERNS)


def _first_heading(markdown: str) -> str | None:
    for line in markdown.split("\n"):
        match = _H1_RE.match(line.strip())
        if match:
            return match.group(1).strip()
    return None


def is_error_page(markdown: str) -> bool:
    """Return True if *markdown* looks like a "404 / page not found" page."""
    heading = _first_heading(markdown)
    if heading is not None and _is_error_text(heading):
        return True
    body = markdown.strip()
    return len(body) <= _ERROR_BODY_MAX_LENGTH and _is_error_text(body)


def assess_markdown(markdown: str, min_length: int = MIN_MARKDOWN_LENGTH) -> ContentAssessment:
    """Classify *markdown* as usable or not.

    Priority: empty, error page, too short.
    """
    length = len((markdown or "").strip())
    if length == 0:
        return ContentAssessment(is_usable=False, reason="empty", length=0)
    if is_error_page(markdown):
        return ContentAssessment(is_usable=False, reason="error_page", length=length)
    if length < min_length:
        return ContentAssessment(is_usable=False, reason="too_short", length=length)
    return ContentAssessment(is_usable=True, reason=None, length=length)


def extract_title(markdown: str) -> str | None:
    """Return the first level-1 heading that is not an error title."""
    for line in (markdown or "").split("\n"):
        match = _H1_RE.match(line.strip())
        if match and not _is_error_text(match.group(1)):
            return match.group(1).strip()
    return None


def title_from_url(url: str) -> str:
    """Derive a readable title from the last path segment of *url*.

    ``https://docs.example.com/en/build-logs.html`` -> ``Build logs``
    """
    path = urlparse(url).path.rstrip("/")
    segment = path.rsplit("/", 1)[-1] if path else ""
    if not segment:
        return urlparse(url).netloc
    segment = re.sub(r"\.html?$", "", segment).replace("-", " ").replace("_", " ")
    return segment[:1].upper() + segment[1:]
