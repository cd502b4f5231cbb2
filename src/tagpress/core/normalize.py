"""Label normalization for URL paths."""

import re
import unicodedata

# Runs of letters or runs of digits; everything else separates words.
WORD_PATTERN = re.compile(r"[^\W\d_]+|\d+")

# camelCase and ACRONYMWord boundaries inside a run of letters
CAMEL_BOUNDARY_PATTERN = re.compile(r"(?<=[a-z])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")

APOSTROPHE_PATTERN = re.compile("['’]")


def deburr(label: str) -> str:
    """Strip diacritics: "Café" -> "Cafe"."""
    decomposed = unicodedata.normalize("NFKD", label)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def split_words(label: str) -> list[str]:
    """Split a free-text label into words.

    Diacritics are stripped and apostrophes dropped before splitting.

    Examples:
        "Ruby on Rails" -> ["Ruby", "on", "Rails"]
        "RubyOnRails"   -> ["Ruby", "On", "Rails"]
        "XMLHttp"       -> ["XML", "Http"]
        "html5"         -> ["html", "5"]
        "Don't"         -> ["Dont"]
    """
    label = APOSTROPHE_PATTERN.sub("", deburr(label))
    words: list[str] = []
    for run in WORD_PATTERN.findall(label):
        words.extend(part for part in CAMEL_BOUNDARY_PATTERN.split(run) if part)
    return words


def kebab_case(label: str) -> str:
    """Lowercase and hyphenate a label for use in a URL path."""
    return "-".join(word.lower() for word in split_words(label))
