"""Unit tests for the Markdown parser and extensions."""

from tagpress.core.parser import create_parser, render_markdown


# ============================================================
# Strikethrough extension
# ============================================================


class TestStrikethrough:
    def test_basic_strikethrough(self):
        html = render_markdown("~~deleted~~")
        assert "<del>deleted</del>" in html

    def test_strikethrough_in_paragraph(self):
        html = render_markdown("This is ~~removed~~ text.")
        assert "<del>removed</del>" in html
        assert "This is" in html
        assert "text." in html

    def test_strikethrough_multiple(self):
        html = render_markdown("~~one~~ and ~~two~~")
        assert html.count("<del>") == 2


# ============================================================
# Code fence language aliases
# ============================================================


class TestLanguageAliases:
    def test_sh_becomes_bash(self):
        html = render_markdown("```sh\nls -la\n```")
        assert 'class="language-bash"' in html

    def test_js_becomes_javascript(self):
        html = render_markdown("```js\nconsole.log(1)\n```")
        assert 'class="language-javascript"' in html

    def test_other_languages_untouched(self):
        html = render_markdown("```ruby\nputs 1\n```")
        assert 'class="language-ruby"' in html

    def test_tilde_fence(self):
        html = render_markdown("~~~sh\necho hi\n~~~")
        assert 'class="language-bash"' in html

    def test_custom_aliases(self):
        html = render_markdown("```rb\nputs 1\n```", aliases={"rb": "ruby"})
        assert 'class="language-ruby"' in html

    def test_code_left_for_browser_highlighting(self):
        html = render_markdown("```sh\necho hi\n```")
        assert '<pre class="codehilite"><code class="language-bash">' in html
        assert "<span" not in html

    def test_alias_not_applied_to_prose(self):
        html = render_markdown("sh is a shell")
        assert "sh is a shell" in html


# ============================================================
# Full parser (end-to-end)
# ============================================================


class TestRenderMarkdown:
    def test_markdown_headings(self):
        html = render_markdown("# Title\n\n## Subtitle")
        assert "<h1" in html
        assert "Title</h1>" in html
        assert "<h2" in html
        assert "Subtitle</h2>" in html

    def test_markdown_bold_italic(self):
        html = render_markdown("**bold** and *italic*")
        assert "<strong>bold</strong>" in html
        assert "<em>italic</em>" in html

    def test_code_block(self):
        html = render_markdown("```python\nprint('hi')\n```")
        assert "<code" in html
        assert "print" in html

    def test_task_list(self):
        html = render_markdown("- [ ] todo\n- [x] done")
        assert 'type="checkbox"' in html

    def test_table(self):
        md = "| A | B |\n|---|---|\n| 1 | 2 |"
        html = render_markdown(md)
        assert "<table>" in html
        assert "<td>1</td>" in html

    def test_heading_anchors(self):
        html = render_markdown("## Getting Started")
        assert 'id="getting-started"' in html


class TestCreateParser:
    def test_returns_markdown_instance(self):
        from markdown import Markdown

        parser = create_parser()
        assert isinstance(parser, Markdown)
