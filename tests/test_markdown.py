"""Tests for docscribe.extractors.markdown (HTML -> Markdown conversion rules)."""

from __future__ import annotations

from bs4 import BeautifulSoup

from docscribe.extractors import markdown as markdown_module
from docscribe.extractors.markdown import (
    CONVERSION_RULES,
    html_to_markdown,
    render_ordered_list,
    render_unordered_list,
)


def _tag(html: str, name: str):
    return BeautifulSoup(html, "html.parser").find(name)


# ---------------------------------------------------------------------------
# Code
# ---------------------------------------------------------------------------

class TestCodeRule:
    def test_fenced_block_with_language(self):
        md = html_to_markdown('<pre><code class="language-swift">let x = 1</code></pre>')
        assert md == "```swift\nlet x = 1\n```"

    def test_fenced_block_without_language(self):
        md = html_to_markdown("<pre><code>echo hi</code></pre>")
        assert md == "```\necho hi\n```"

    def test_language_on_pre(self):
        md = html_to_markdown('<pre class="language-python">print(1)</pre>')
        assert md == "```python\nprint(1)\n```"

    def test_multiline_block_preserved(self):
        html = '<pre><code class="language-yaml">steps:\n  - script: {}\n  - deploy: {}</code></pre>'
        md = html_to_markdown(html)
        assert md == "```yaml\nsteps:\n  - script: {}\n  - deploy: {}\n```"

    def test_empty_block_dropped(self):
        assert html_to_markdown("<p>Before</p><pre><code></code></pre>") == "Before"

    def test_inline_code(self):
        md = html_to_markdown("<p>Run <code>make test</code> now</p>")
        assert md == "Run `make test` now"

    def test_inline_code_not_escaped(self):
        md = html_to_markdown("<p>Set <code>BUILD_NUMBER</code> first</p>")
        assert "`BUILD_NUMBER`" in md


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

class TestOrderedListRule:
    def test_renumbers_ignoring_value_attributes(self):
        md = html_to_markdown(
            '<ol><li value="7">A</li><li value="3">B</li><li>C</li></ol>',
        )
        assert md.splitlines() == ["1. A", "2. B", "3. C"]

    def test_renumbers_ignoring_start(self):
        md = html_to_markdown('<ol start="4"><li>A</li><li>B</li></ol>')
        assert md.splitlines() == ["1. A", "2. B"]

    def test_one_line_per_item(self):
        md = html_to_markdown(
            "<ol><li><p>First para</p><p>More text</p></li><li>Second</li></ol>",
        )
        assert md.splitlines() == ["1. First para More text", "2. Second"]

    def test_escaped_period_artifacts_stripped(self):
        el = _tag("<ol></ol>", "ol")
        out = render_ordered_list(el, "1\\. First\n\n2\\. Second\n", set())
        assert out == "\n\n1. First\n2. Second\n\n"

    def test_empty_list(self):
        el = _tag("<ol></ol>", "ol")
        assert render_ordered_list(el, "", set()) == ""


class TestUnorderedListRule:
    def test_dash_markers(self):
        md = html_to_markdown("<ul><li>One</li><li>Two</li></ul>")
        assert md.splitlines() == ["- One", "- Two"]

    def test_mixed_markers_canonicalized(self):
        el = _tag("<ul></ul>", "ul")
        out = render_unordered_list(el, "* a\n\n+ b\n- c\n", set())
        assert out == "\n\n- a\n- b\n- c\n\n"

    def test_nested_list_kept_on_own_lines(self):
        md = html_to_markdown(
            "<ul><li>Parent<ul><li>Child</li></ul></li><li>Sibling</li></ul>",
        )
        assert md.splitlines() == ["- Parent", "  - Child", "- Sibling"]

    def test_code_block_inside_item_kept_as_block(self):
        md = html_to_markdown("<ul><li>Install:<pre><code>npm i\nnpm t</code></pre></li></ul>")
        assert md.splitlines() == ["- Install:", "  ```", "  npm i", "  npm t", "  ```"]

    def test_code_block_inside_ordered_item_keeps_blank_lines(self):
        md = html_to_markdown(
            '<ol><li>Configure:<pre><code class="language-yaml">a: 1\n\nb: 2</code></pre></li>'
            "<li>Run it</li></ol>",
        )
        assert md.splitlines() == [
            "1. Configure:", "   ```yaml", "   a: 1", "", "   b: 2", "   ```", "2. Run it",
        ]

    def test_nested_rule_inside_item_has_no_blank_lines(self):
        el = _tag("<ul></ul>", "ul")
        assert render_unordered_list(el, "- x\n", {"li"}) == "\n- x"


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------

class TestLinkRule:
    def test_inline_link(self):
        md = html_to_markdown('<p>See <a href="/docs/steps">step reference</a>.</p>')
        assert md == "See [step reference](/docs/steps)."

    def test_padded_label_does_not_double_spaces(self):
        md = html_to_markdown('<p>and <a href="/x"> y </a> more</p>')
        assert md == "and [y](/x) more"

    def test_padded_label_without_surrounding_spaces(self):
        md = html_to_markdown('<p>and<a href="/x"> y </a>more</p>')
        assert md == "and [y](/x) more"

    def test_padded_anchor_only_link_does_not_double_spaces(self):
        assert html_to_markdown('<p>go to <a href="#"> top </a> now</p>') == "go to top now"

    def test_anchor_only_link_is_bare_text(self):
        assert html_to_markdown('<p>Back to <a href="#">the top</a></p>') == "Back to the top"

    def test_missing_href_is_bare_text(self):
        assert html_to_markdown("<p><a>Plain</a> words</p>") == "Plain words"

    def test_empty_text_link_dropped(self):
        md = html_to_markdown('<p>Icon <a href="/x"></a> here</p>')
        assert "[](" not in md
        assert "Icon" in md

    def test_link_inside_code_block_untouched(self):
        md = html_to_markdown('<pre><code><a href="/x">curl</a> -s</code></pre>')
        assert md == "```\ncurl -s\n```"


# ---------------------------------------------------------------------------
# Default rule
# ---------------------------------------------------------------------------

class TestDefaultRule:
    def test_atx_headings(self):
        md = html_to_markdown("<h1>Title</h1><h3>Sub</h3>")
        assert md == "# Title\n\n### Sub"

    def test_emphasis_markers(self):
        md = html_to_markdown("<p><em>soft</em> and <strong>loud</strong></p>")
        assert md == "*soft* and **loud**"

    def test_unknown_empty_element(self):
        assert html_to_markdown("<custom-widget></custom-widget>") == ""

    def test_comments_ignored(self):
        assert html_to_markdown("<p>Hello<!-- hidden --></p>") == "Hello"

    def test_empty_input(self):
        assert html_to_markdown("") == ""
        assert html_to_markdown("   \n ") == ""

    def test_rule_table_covers_special_elements(self):
        assert set(CONVERSION_RULES) == {"pre", "code", "ol", "ul", "a"}


class TestConversionFallback:
    def test_falls_back_to_text_on_converter_error(self, monkeypatch):
        def boom(html):
            raise RuntimeError("converter exploded")

        monkeypatch.setattr(markdown_module._converter, "convert", boom)
        md = html_to_markdown("<p>Still <b>readable</b></p>")
        assert "Still" in md
        assert "readable" in md
