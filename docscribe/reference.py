"""Render converted pages as Markdown reference documents.

The pipeline itself returns bare Markdown; these helpers add the
provenance front-matter and the combined multi-page layout callers write
to disk.  No file I/O happens here.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

import yaml

from docscribe.items import ReferencePage


def render_front_matter(fields: Mapping[str, Any]) -> str:
    """Return a ``---``-delimited YAML front-matter block for *fields*."""
    body = yaml.safe_dump(
        dict(fields), sort_keys=False, allow_unicode=True, default_flow_style=False,
    )
    return f"---\n{body}---\n"


def render_reference_page(
    page: ReferencePage,
    *,
    provider: str = "",
    scraped_at: str | None = None,
) -> str:
    """Render one page with its ``title``/``source_url`` front-matter header."""
    fields: dict[str, Any] = {
        "title": f"{provider} - {page.title}" if provider else page.title,
        "source_url": page.url,
    }
    if provider:
        fields["provider"] = provider
    fields["scraped_at"] = scraped_at or datetime.now(UTC).isoformat()
    return f"{render_front_matter(fields)}\n{page.markdown.strip()}\n"


def render_combined_reference(
    name: str,
    pages: Iterable[ReferencePage],
    *,
    description: str = "",
    generated_at: str | None = None,
) -> str:
    """Combine *pages* into one reference document with a table of contents.

    Each page becomes a ``## N. Title {#section-N}`` section followed by a
    source line, and sections are separated by horizontal rules.
    """
    page_list = list(pages)
    fields: dict[str, Any] = {"title": f"{name} Complete Reference", "provider": name}
    if description:
        fields["description"] = description
    fields["generated_at"] = generated_at or datetime.now(UTC).isoformat()
    fields["pages_included"] = len(page_list)

    lines: list[str] = [render_front_matter(fields)]
    lines.append(f"# {name} Complete Reference")
    lines.append("")
    if description:
        lines.append(description)
        lines.append("")
    lines.append("## Table of Contents")
    lines.append("")
    for index, page in enumerate(page_list, start=1):
        lines.append(f"{index}. [{page.title or page.url}](#section-{index})")
    lines.append("")
    lines.append("---")

    for index, page in enumerate(page_list, start=1):
        lines.append("")
        lines.append(f"## {index}. {page.title or page.url} {{#section-{index}}}")
        lines.append("")
        lines.append(f"*Source: [{page.url}]({page.url})*")
        lines.append("")
        lines.append(page.markdown.strip())
        lines.append("")
        lines.append("---")

    return "\n".join(lines) + "\n"
