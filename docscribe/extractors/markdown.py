"""Convert an extracted HTML fragment to Markdown.

Built on markdownify.  Code blocks, lists and links are rendered by the
functions in :data:`CONVERSION_RULES`; every other element goes through
markdownify's own conversion (ATX headings, ``*`` emphasis, ``**`` strong).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from bs4 import BeautifulSoup, NavigableString, Tag
from markdownify import MarkdownConverter, chomp

logger = logging.getLogger(__name__)

_EXCESSIVE_BLANK_LINES_RE = re.compile(r"\n{3,}")
_TRAILING_WHITESPACE_RE = re.compile(r"[ \t]+$", re.MULTILINE)

_LANGUAGE_CLASS_RE = re.compile(r"language-(\w+)")
_ORDERED_MARKER_RE = re.compile(r"^\d+\\?\.\s*")
_BULLET_MARKER_RE = re.compile(r"^[*+-]\s*")
_NESTED_ITEM_RE = re.compile(r"^\s+(?:[*+-]|\d+\\?\.)\s")
_FENCE_LINE_RE = re.compile(r"^\s+```")

RuleFn = Callable[[Tag, str, set], str]


def _language_hint(el: Tag) -> str:
    """Return the ``language-<name>`` hint of *el* or its inner ``<code>``."""
    candidates = [el]
    code = el.find("code")
    if isinstance(code, Tag):
        candidates.insert(0, code)
    for tag in candidates:
        classes = tag.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        match = _LANGUAGE_CLASS_RE.search(" ".join(classes))
        if match:
            return match.group(1)
    return ""


def _render_items(text: str, marker_re: re.Pattern[str], ordered: bool) -> list[str]:
    """Rebuild list *text* as one line per item.

    Indented lines that start with a list marker belong to a nested list and
    indented fenced code blocks belong to the item above; both are kept as
    their own lines.  Any other indented line is folded into the line before
    it.
    """
    lines: list[str] = []
    count = 0
    in_fence = False
    for line in text.split("\n"):
        if in_fence:
            lines.append(line.rstrip())
            in_fence = not _FENCE_LINE_RE.match(line)
            continue
        if not line.strip():
            continue
        if lines and line[:1].isspace():
            if _FENCE_LINE_RE.match(line):
                lines.append(line.rstrip())
                in_fence = True
            elif _NESTED_ITEM_RE.match(line):
                lines.append(line.rstrip())
            else:
                lines[-1] = f"{lines[-1]} {line.strip()}"
            continue
        item = marker_re.sub("", line.strip(), count=1)
        if not item:
            continue
        count += 1
        marker = f"{count}." if ordered else "-"
        lines.append(f"{marker} {item}")
    return lines


def _wrap_list(lines: list[str], parent_tags: set) -> str:
    if not lines:
        return ""
    body = "\n".join(lines)
    if "li" in parent_tags:
        return "\n" + body
    return "\n\n" + body + "\n\n"


# ---------------------------------------------------------------------------
# Conversion rules
# ---------------------------------------------------------------------------

def render_code_block(el: Tag, text: str, parent_tags: set) -> str:
    code = text.strip("\n")
    if not code.strip():
        return ""
    return f"\n\n```{_language_hint(el)}\n{code}\n```\n\n"


def render_inline_code(el: Tag, text: str, parent_tags: set) -> str:
    # Inside <pre> the fence is added by render_code_block
    if "_noformat" in parent_tags:
        return text
    prefix, suffix, code = chomp(text)
    if not code:
        return ""
    return f"{prefix}`{code}`{suffix}"


def render_ordered_list(el: Tag, text: str, parent_tags: set) -> str:
    """Renumber items from 1, whatever the source ``start``/``value`` says."""
    return _wrap_list(_render_items(text, _ORDERED_MARKER_RE, ordered=True), parent_tags)


def render_unordered_list(el: Tag, text: str, parent_tags: set) -> str:
    return _wrap_list(_render_items(text, _BULLET_MARKER_RE, ordered=False), parent_tags)


def _sibling_text(el: Tag, previous: bool) -> str:
    sibling = el.previous_sibling if previous else el.next_sibling
    return str(sibling) if isinstance(sibling, NavigableString) else ""


def render_link(el: Tag, text: str, parent_tags: set) -> str:
    """Render ``[text](href)``, or bare text for empty/anchor-only links."""
    if "_noformat" in parent_tags:
        return text
    prefix, suffix, label = chomp(text)
    if not label:
        return text
    # Surrounding text already carries the separating space
    if _sibling_text(el, previous=True)[-1:].isspace():
        prefix = ""
    if _sibling_text(el, previous=False)[:1].isspace():
        suffix = ""
    href = str(el.get("href") or "").strip()
    if not href or href == "#":
        return f"{prefix}{label}{suffix}"
    return f"{prefix}[{label}]({href}){suffix}"


CONVERSION_RULES: dict[str, RuleFn] = {
    "pre": render_code_block,
    "code": render_inline_code,
    "ol": render_ordered_list,
    "ul": render_unordered_list,
    "a": render_link,
}


class DocsMarkdownConverter(MarkdownConverter):
    """markdownify converter that dispatches through :data:`CONVERSION_RULES`."""

    class Options(MarkdownConverter.DefaultOptions):
        heading_style = "ATX"
        bullets = "-"
        strong_em_symbol = "*"

    def get_conv_fn(self, tag_name: str) -> Callable | None:
        rule = CONVERSION_RULES.get(tag_name.lower())
        if rule is None:
            return super().get_conv_fn(tag_name)
        if not self.should_convert_tag(tag_name):
            return None
        return rule


_converter = DocsMarkdownConverter()


def html_to_markdown(html: str) -> str:
    """Convert the HTML fragment *html* to Markdown.

    Never raises: if conversion fails the plain text of the fragment is
    returned instead.
    """
    if not html or not html.strip():
        return ""

    try:
        md = _converter.convert(html)
    except Exception as exc:
        logger.warning("Markdown conversion failed, falling back to text: %s", exc)
        try:
            md = BeautifulSoup(html, "lxml").get_text(separator="\n")
        except Exception:
            return ""

    md = _TRAILING_WHITESPACE_RE.sub("", md)
    md = _EXCESSIVE_BLANK_LINES_RE.sub("\n\n", md)
    return md.strip()
