"""Extraction sub-package: region selection, Markdown conversion, normalization."""

from .markdown import CONVERSION_RULES, html_to_markdown
from .normalize import NORMALIZATION_PASSES, normalize_markdown
from .quality import assess_markdown, extract_title, title_from_url
from .region import SELECTOR_RULES, ContentRegion, extract_content_region, select_region

__all__ = [
    "CONVERSION_RULES",
    "NORMALIZATION_PASSES",
    "SELECTOR_RULES",
    "ContentRegion",
    "assess_markdown",
    "extract_content_region",
    "extract_title",
    "html_to_markdown",
    "normalize_markdown",
    "select_region",
    "title_from_url",
]
