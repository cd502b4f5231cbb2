"""Loading posts from Markdown files with YAML front matter."""

import logging
import math
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from tagpress.core.errors import (
    DocumentLoadError,
    DuplicateSlugError,
    FrontmatterError,
    InvalidFieldError,
    MissingFieldError,
)
from tagpress.core.models import Document, Frontmatter, ReadingTime

logger = logging.getLogger(__name__)

DEFAULT_WORDS_PER_MINUTE = 200

READING_TIME_SINGULAR = "{minutes} min read"
READING_TIME_PLURAL = "{minutes} min read"

FRONTMATTER_PATTERN = re.compile(
    r"^---[ \t]*\n(.*?)\n---[ \t]*(?:\n|\Z)",
    re.DOTALL,
)

# Validation error types that mean "the author left the field out".
_MISSING_ERROR_TYPES = {"missing", "string_too_short"}


def split_frontmatter(
    text: str, source: Path | str | None = None
) -> tuple[dict[str, Any], str]:
    """Split raw document text into (front matter mapping, body).

    Raises:
        FrontmatterError: No front matter block, malformed YAML, or the
            block is not a mapping.
    """
    text = text.removeprefix("\ufeff").replace("\r\n", "\n").replace("\r", "\n")
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        raise FrontmatterError("no front matter block", source)
    try:
        data = yaml.safe_load(match.group(1))
    except (yaml.YAMLError, ValueError) as e:
        # ValueError: YAML timestamps that are not real dates
        raise FrontmatterError(f"malformed YAML: {e}", source) from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"front matter must be a mapping, got {type(data).__name__}", source
        )
    body = text[match.end() :]
    return data, body


def format_reading_time(
    minutes: int,
    singular: str = READING_TIME_SINGULAR,
    plural: str = READING_TIME_PLURAL,
) -> str:
    """Format a reading time, switching template exactly at one minute."""
    template = singular if minutes == 1 else plural
    return template.format(minutes=minutes)


def compute_reading_time(
    body: str, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE
) -> ReadingTime:
    """Estimate reading time from the whitespace-delimited word count.

    Rounds up to whole minutes, never less than one.
    """
    if words_per_minute < 1:
        raise ValueError(f"words_per_minute must be positive, got {words_per_minute}")
    words = len(body.split())
    minutes = max(1, math.ceil(words / words_per_minute))
    return ReadingTime(minutes=minutes, text=format_reading_time(minutes))


def _validate_frontmatter(
    data: dict[str, Any], source: Path | str | None
) -> Frontmatter:
    try:
        return Frontmatter.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "front matter"
        if error["type"] in _MISSING_ERROR_TYPES or error.get("input") is None:
            raise MissingFieldError(field, source) from e
        raise InvalidFieldError(field, error["msg"], source) from e


def load_document(
    text: str,
    slug: str,
    source: Path | str | None = None,
    words_per_minute: int = DEFAULT_WORDS_PER_MINUTE,
) -> Document:
    """Turn raw document text into a Document.

    Args:
        text: Front matter followed by the Markdown body.
        slug: Identifier derived from the file location.
        source: Where the text came from, used in error messages.
        words_per_minute: Reading speed for the reading time estimate.

    Raises:
        DocumentLoadError: The front matter is unusable. No partial
            Document is ever returned.
    """
    data, body = split_frontmatter(text, source)
    frontmatter = _validate_frontmatter(data, source)
    return Document(
        slug=slug,
        path=frontmatter.path,
        title=frontmatter.title,
        date=frontmatter.date,
        tags=tuple(frontmatter.tags),
        body=body,
        reading_time=compute_reading_time(body, words_per_minute),
        description=frontmatter.description,
        source=Path(source) if source is not None else None,
    )


class ContentStore:
    """Reads every post below a content directory.

    File naming: any ``*.md`` file, at any depth. ``posts/hello.md`` and
    ``posts/hello/index.md`` both get the slug ``/posts/hello/``.
    """

    def __init__(
        self, base_path: Path, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE
    ):
        self.base_path = Path(base_path)
        self.words_per_minute = words_per_minute

    def slug_for(self, path: Path) -> str:
        """Derive the slug of a source file from its location."""
        parts = list(path.relative_to(self.base_path).with_suffix("").parts)
        if parts and parts[-1] == "index":
            parts.pop()
        if not parts:
            return "/"
        return "/" + "/".join(parts) + "/"

    def list_sources(self) -> list[Path]:
        """All Markdown sources, ordered by relative path."""
        if not self.base_path.is_dir():
            raise DocumentLoadError("content directory does not exist", self.base_path)
        return sorted(
            self.base_path.rglob("*.md"),
            key=lambda p: p.relative_to(self.base_path).as_posix(),
        )

    def read_source(self, path: Path) -> str:
        """Read a source file as UTF-8 text."""
        try:
            return path.read_bytes().decode("utf-8")
        except UnicodeDecodeError as e:
            raise DocumentLoadError(f"not valid UTF-8: {e}", path) from e
        except OSError as e:
            raise DocumentLoadError(f"unreadable: {e}", path) from e

    def load(self, path: Path) -> Document:
        """Load a single source file."""
        return load_document(
            self.read_source(path),
            slug=self.slug_for(path),
            source=path,
            words_per_minute=self.words_per_minute,
        )

    def load_all(self) -> list[Document]:
        """Load the complete corpus, or raise on the first bad document."""
        documents: list[Document] = []
        slugs: dict[str, Path] = {}
        paths: dict[str, str] = {}
        for path in self.list_sources():
            document = self.load(path)
            if document.slug in slugs:
                raise DuplicateSlugError(
                    f"slug {document.slug!r} already used by {slugs[document.slug]}",
                    path,
                )
            slugs[document.slug] = path
            if document.path in paths:
                logger.warning(
                    "Path %s of %s is also used by %s",
                    document.path,
                    document.slug,
                    paths[document.path],
                )
            else:
                paths[document.path] = document.slug
            logger.debug("Loaded %s (%s)", document.slug, document.reading_time.text)
            documents.append(document)
        logger.info("Loaded %d documents from %s", len(documents), self.base_path)
        return documents
