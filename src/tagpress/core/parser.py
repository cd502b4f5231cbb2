"""Markdown rendering for post bodies."""

import re

from markdown import Markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import SimpleTagInlineProcessor
from markdown.preprocessors import Preprocessor


# Pattern for strikethrough: ~~text~~
# Group 2 must contain the text (SimpleTagInlineProcessor expectation)
STRIKETHROUGH_PATTERN = r"(~~)(.*?)~~"

# Opening line of a fenced code block with a language: ```sh or ~~~ js
FENCE_PATTERN = re.compile(
    r"^(?P<fence>[ \t]*(?:`{3,}|~{3,})[ \t]*)(?P<lang>[\w+#-]+)(?P<rest>.*)$"
)

DEFAULT_LANGUAGE_ALIASES = {"sh": "bash", "js": "javascript"}


class StrikethroughExtension(Extension):
    """Markdown extension for ~~strikethrough~~ text."""

    def extendMarkdown(self, md: Markdown) -> None:
        """Add strikethrough pattern to markdown parser."""
        md.inlinePatterns.register(
            SimpleTagInlineProcessor(STRIKETHROUGH_PATTERN, "del"),
            "strikethrough",
            50,
        )


class LanguageAliasPreprocessor(Preprocessor):
    """Rewrites short language names on code fences to their full name."""

    def __init__(self, md: Markdown, aliases: dict[str, str]):
        super().__init__(md)
        self.aliases = aliases

    def run(self, lines: list[str]) -> list[str]:
        """Process lines, renaming fence languages found in the alias map."""
        result = []
        for line in lines:
            m = FENCE_PATTERN.match(line)
            if m and m.group("lang") in self.aliases:
                line = m.group("fence") + self.aliases[m.group("lang")] + m.group("rest")
            result.append(line)
        return result


class LanguageAliasExtension(Extension):
    """Markdown extension mapping code fence language aliases."""

    def __init__(self, aliases: dict[str, str] | None = None, **kwargs):
        self.aliases = DEFAULT_LANGUAGE_ALIASES if aliases is None else aliases
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:
        """Add the alias preprocessor ahead of fenced code handling."""
        md.preprocessors.register(
            LanguageAliasPreprocessor(md, self.aliases),
            "language_alias",
            28,
        )


def create_parser(aliases: dict[str, str] | None = None) -> Markdown:
    """Create a Markdown parser for post bodies.

    Args:
        aliases: Code fence language aliases; defaults to sh -> bash and
                 js -> javascript.

    Returns:
        Configured Markdown parser instance.
    """
    return Markdown(
        extensions=[
            # Core formatting
            "extra",  # Includes: abbreviations, attr_list, def_list, fenced_code, footnotes, md_in_html, tables
            "sane_lists",  # Better list handling
            "smarty",  # Smart quotes and dashes
            "toc",  # Heading anchors
            "codehilite",  # Prism-ready <pre><code class="language-..."> blocks
            # PyMdown extensions
            "pymdownx.tasklist",  # Task lists with checkboxes
            # Custom extensions
            StrikethroughExtension(),  # ~~strikethrough~~
            LanguageAliasExtension(aliases=aliases),  # ```sh -> ```bash
        ],
        extension_configs={
            # Highlighting and line numbers are done by Prism in the browser
            "codehilite": {"use_pygments": False, "guess_lang": False},
        },
    )


def render_markdown(content: str, aliases: dict[str, str] | None = None) -> str:
    """Render a post body to HTML."""
    parser = create_parser(aliases)
    return parser.convert(content)
