"""Multi-pass Markdown cleanup for converted documentation pages.

Each pass is a pure ``str -> str`` function.  :func:`normalize_markdown`
runs :data:`NORMALIZATION_PASSES` in order; the order matters:

- noise removal (blank-line collapse, escaped ordinals, navigation lines)
  runs before any structural repair
- list formatting is settled before the sentence-break heuristic
- fenced code blocks are repaired last, once no other pass moves text

The double-numbering repair deliberately appears twice.  Running the whole
sequence a second time leaves the output unchanged.

Passes that rewrite prose skip fenced code blocks.
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)

NormalizationPass = Callable[[str], str]

_FENCED_BLOCK_RE = re.compile(
    r"^[ \t]*```[^\n]*\n.*?^[ \t]*```[ \t]*$", re.MULTILINE | re.DOTALL,
)

_EXCESSIVE_BLANK_LINES_RE = re.compile(r"\n{3,}")
_LEADING_BLANK_LINES_RE = re.compile(r"\A(?:[ \t]*\n)+")
_ESCAPED_ORDINAL_RE = re.compile(r"(\d+)\\\.")

# Whole-line navigation / metadata noise (matched against the stripped line)
_NOISE_LINE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^\[\d+\s+(?:months?|days?|years?)\s+ago\]"),
    re.compile(r"^\d+\s+(?:months?|days?|years?)\s+ago$"),
    re.compile(r"^\d+\s+min\s+read$"),
    re.compile(r"^(?:Cloud|Self-hosted)$"),
    re.compile(r"^On This Page$"),
    re.compile(r"^In this article$"),
    re.compile(r"^Table of contents$"),
)
_MIN_LINE_LENGTH = 3
_SHORT_LINE_ALLOWED_RE = re.compile(r"^(?:#+|[-*+]|\d+\.)")

_DOUBLE_ORDINAL_RE = re.compile(r"^([ \t]*)(?:\d+\.[ \t]+)+(\d+\.[ \t]+)", re.MULTILINE)
_DEEP_HEADING_RE = re.compile(r"^[ \t]{0,3}#{6,}", re.MULTILINE)
_HEADING_LINE_RE = re.compile(r"^[ \t]{0,3}(#+[^\n]+)$", re.MULTILINE)
_ALT_BULLET_RE = re.compile(r"^([ \t]*)[*+][ \t]+", re.MULTILINE)
_EMPTY_LIST_ITEM_RE = re.compile(r"^[ \t]*[-*+][ \t]*$", re.MULTILINE)
_LIST_LINE_START_RE = re.compile(r"^(?=\d+\.[ \t]|-[ \t])", re.MULTILINE)

# Lines the sentence-break heuristic never touches
_STRUCTURAL_LINE_RE = re.compile(r"^\s*(?:#|[-*+]\s|\d+\.\s|\||>)")
# Two non-space characters before the stop keep split-off fragments >= 3 chars
_INLINE_SENTENCE_BREAK_RE = re.compile(r"(?<=\S\S)([.!?])[ \t]+(?=[A-Z][^.!?\n]+[.!?])")
_LINE_SENTENCE_BREAK_RE = re.compile(r"([.!?])[ \t]*\n(?=[A-Z][^.!?\n]+[.!?])")
_CODE_SPAN_RE = re.compile(r"`[^`\n]+`")

_DOUBLE_WRAPPED_FENCE_RE = re.compile(r"```(\w*)\n`([^`]+)`\n```")


def _outside_fences(fn: NormalizationPass) -> NormalizationPass:
    """Apply *fn* only to the text between fenced code blocks."""

    @functools.wraps(fn)
    def wrapper(markdown: str) -> str:
        parts: list[str] = []
        last = 0
        for match in _FENCED_BLOCK_RE.finditer(markdown):
            parts.append(fn(markdown[last:match.start()]))
            parts.append(match.group(0))
            last = match.end()
        parts.append(fn(markdown[last:]))
        return "".join(parts)

    return wrapper


# ---------------------------------------------------------------------------
# Passes
# ---------------------------------------------------------------------------

def collapse_blank_lines(markdown: str) -> str:
    return _EXCESSIVE_BLANK_LINES_RE.sub("\n\n", markdown)


@_outside_fences
def unescape_list_numbers(markdown: str) -> str:
    """``1\\.`` is a conversion artifact; restore the plain period."""
    return _ESCAPED_ORDINAL_RE.sub(r"\1.", markdown)


def _is_noise_line(stripped: str) -> bool:
    if any(p.search(stripped) for p in _NOISE_LINE_PATTERNS):
        return True
    return (
        0 < len(stripped) < _MIN_LINE_LENGTH
        and not _SHORT_LINE_ALLOWED_RE.match(stripped)
    )


def _next_line_is_heading(lines: list[str], index: int) -> bool:
    for line in lines[index + 1:]:
        if line.strip():
            return line.strip().startswith("#")
    # Nothing follows: treat like a heading and keep the line
    return True


@_outside_fences
def drop_noise_lines(markdown: str) -> str:
    """Drop navigation and metadata lines left over from page chrome.

    A standalone ``Note`` is kept when the next non-blank line is a heading,
    since it then introduces real content.  Non-blank lines shorter than
    three characters are dropped unless they start like a heading or a list
    item.
    """
    lines = markdown.split("\n")
    kept: list[str] = []
    for i, line in enumerate(lines):
        stripped = line.strip()
        if not stripped:
            kept.append("")
            continue
        if _is_noise_line(stripped):
            continue
        if stripped == "Note" and not _next_line_is_heading(lines, i):
            continue
        kept.append(line)
    return "\n".join(kept)


@_outside_fences
def repair_double_numbering(markdown: str) -> str:
    """``1. 2. text`` -> ``2. text``; the innermost ordinal is kept."""
    return _DOUBLE_ORDINAL_RE.sub(r"\1\2", markdown)


@_outside_fences
def demote_deep_headings(markdown: str) -> str:
    return _DEEP_HEADING_RE.sub("#####", markdown)


@_outside_fences
def space_headings(markdown: str) -> str:
    return _HEADING_LINE_RE.sub(r"\n\1\n", markdown)


@_outside_fences
def canonicalize_bullets(markdown: str) -> str:
    return _ALT_BULLET_RE.sub(r"\1- ", markdown)


@_outside_fences
def drop_empty_list_items(markdown: str) -> str:
    return _EMPTY_LIST_ITEM_RE.sub("", markdown)


def _split_sentences(line: str) -> str:
    code_spans = [m.span() for m in _CODE_SPAN_RE.finditer(line)]

    def _break(match: re.Match[str]) -> str:
        if any(start <= match.start() < end for start, end in code_spans):
            return match.group(0)
        return match.group(1) + "\n\n"

    return _INLINE_SENTENCE_BREAK_RE.sub(_break, line)


@_outside_fences
def split_run_on_sentences(markdown: str) -> str:
    """Insert a paragraph break between a sentence end and a capitalized sentence.

    Inline code spans are left intact.  Heuristic: abbreviations such as
    ``e.g. Python`` are split too.
    """
    lines = [
        line if _STRUCTURAL_LINE_RE.match(line) else _split_sentences(line)
        for line in markdown.split("\n")
    ]
    return _LINE_SENTENCE_BREAK_RE.sub(r"\1\n\n", "\n".join(lines))


def repair_code_fences(markdown: str) -> str:
    """Unwrap fenced blocks whose body was also wrapped in inline backticks."""
    return _DOUBLE_WRAPPED_FENCE_RE.sub(r"```\1\n\2\n```", markdown)


def final_whitespace(markdown: str) -> str:
    """Collapse blank lines and trim blank lines around the document.

    Indentation of the first line is significant (indented code, nested
    list lines) and is kept.
    """
    markdown = _LEADING_BLANK_LINES_RE.sub("", collapse_blank_lines(markdown))
    return markdown.rstrip()


NORMALIZATION_PASSES: tuple[NormalizationPass, ...] = (
    collapse_blank_lines,
    unescape_list_numbers,
    drop_noise_lines,
    repair_double_numbering,
    demote_deep_headings,
    space_headings,
    canonicalize_bullets,
    drop_empty_list_items,
    # Second run catches ordinals exposed by bullet and empty-item cleanup
    repair_double_numbering,
    isolate_list_items,
    split_run_on_sentences,
    repair_code_fences,
    final_whitespace,
)


def normalize_markdown(
    markdown: str,
    passes: Iterable[NormalizationPass] = NORMALIZATION_PASSES,
) -> str:
    """Run *passes* over *markdown* in order and return the cleaned text."""
    if not markdown:
        return ""
    for normalization_pass in passes:
        markdown = normalization_pass(markdown)
    logger.debug("normalized markdown to %d chars", len(markdown))
    return markdown
