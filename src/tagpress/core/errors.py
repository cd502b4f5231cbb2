"""Exceptions raised while loading, indexing and rendering the site."""

from pathlib import Path


class TagpressError(Exception):
    """Base class for all tagpress errors."""


class DocumentLoadError(TagpressError):
    """A source document could not be turned into a Document.

    Any load error aborts the whole build.
    """

    def __init__(self, message: str, source: Path | str | None = None):
        self.source = source
        self.message = message
        super().__init__(f"{source}: {message}" if source else message)


class FrontmatterError(DocumentLoadError):
    """The front matter block is absent, malformed or not a mapping."""


class MissingFieldError(DocumentLoadError):
    """A required front matter field is absent or empty."""

    def __init__(self, field: str, source: Path | str | None = None):
        self.field = field
        super().__init__(f"missing required field {field!r}", source)


class InvalidFieldError(DocumentLoadError):
    """A front matter field is present but has an unusable value."""

    def __init__(self, field: str, detail: str, source: Path | str | None = None):
        self.field = field
        super().__init__(f"invalid field {field!r}: {detail}", source)


class DuplicateSlugError(DocumentLoadError):
    """Two source files map to the same slug."""


class RenderContractError(TagpressError):
    """Data handed to a renderer does not match its contract."""
