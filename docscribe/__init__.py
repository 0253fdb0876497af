"""docscribe - turn vendor documentation pages into clean Markdown references.

Single-page usage::

    from docscribe import convert

    result = convert(html, url="https://docs.example.com/workflows")
    if result.is_usable:
        print(result.markdown)

The two pipeline boundaries are usable on their own::

    from docscribe import extract_content_region, html_to_markdown, normalize_markdown

    fragment = extract_content_region(html)
    markdown = normalize_markdown(html_to_markdown(fragment))

Per-site overrides::

    from docscribe import DocumentConverter, load_profile

    converter = DocumentConverter(load_profile("profiles.yaml", url))
    result = converter.convert(html, url=url)
"""

from docscribe.extractors.markdown import html_to_markdown
from docscribe.extractors.normalize import normalize_markdown
from docscribe.extractors.region import extract_content_region, select_region
from docscribe.items import ConversionResult, ExtractionProfile, ReferencePage
from docscribe.pipeline import DocumentConverter, convert, convert_markdown
from docscribe.profiles import ProfileError, load_profile
from docscribe.reference import render_combined_reference, render_reference_page

__version__ = "0.1.0"
__all__ = [
    "ConversionResult",
    "DocumentConverter",
    "ExtractionProfile",
    "ProfileError",
    "ReferencePage",
    "convert",
    "convert_markdown",
    "extract_content_region",
    "html_to_markdown",
    "load_profile",
    "normalize_markdown",
    "render_combined_reference",
    "render_reference_page",
    "select_region",
]
