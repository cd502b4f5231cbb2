"""Data models for tagpress."""

from datetime import date, datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tagpress.core.normalize import kebab_case


class SiteMetadata(BaseModel):
    """Process-wide, read-only site configuration handed to renderers."""

    model_config = ConfigDict(frozen=True)

    title: str
    subtitle: str = ""
    description: str = ""
    author: str = ""
    site_url: str = ""


class Frontmatter(BaseModel):
    """Validated front matter of a post.

    Unknown keys are kept so templates can reach them, but only the
    fields declared here take part in indexing.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    title: str = Field(min_length=1)
    date: date
    path: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)
    description: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value):
        # datetime is a date subclass, check it first
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return date.fromisoformat(value.strip())
            except ValueError:
                pass
            try:
                return datetime.fromisoformat(value.strip()).date()
            except ValueError:
                raise ValueError(f"not a calendar date: {value!r}") from None
        raise ValueError(f"not a calendar date: {value!r}")

    @field_validator("tags", mode="before")
    @classmethod
    def _check_tags(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            raise ValueError("tags must be a list of strings, not a single string")
        return value

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value: list[str]) -> list[str]:
        tags: list[str] = []
        for tag in value:
            tag = tag.strip()
            if not kebab_case(tag):
                raise ValueError(f"tag {tag!r} has no URL-safe form")
            if tag not in tags:
                tags.append(tag)
        return tags


class ReadingTime(BaseModel):
    """Estimated reading time of a post."""

    model_config = ConfigDict(frozen=True)

    minutes: int = Field(ge=1)
    text: str


class Document(BaseModel):
    """A loaded post."""

    model_config = ConfigDict(frozen=True)

    slug: str
    path: str
    title: str
    date: date
    tags: tuple[str, ...] = ()
    body: str = ""
    reading_time: ReadingTime
    description: str | None = None
    source: Path | None = None

    @property
    def tag_values(self) -> tuple[str, ...]:
        """Normalized tags, deduplicated, in authored order."""
        return tuple(dict.fromkeys(kebab_case(tag) for tag in self.tags))

    def has_tag(self, tag_value: str) -> bool:
        """Exact membership of a normalized tag in this document's tag set."""
        return tag_value in self.tag_values


class TagIndexEntry(BaseModel):
    """One row of the global tag index."""

    model_config = ConfigDict(frozen=True)

    tag_value: str
    display: str
    total_count: int = Field(ge=1)

    @property
    def url(self) -> str:
        return f"/tags/{self.tag_value}/"


def tag_header(count: int, tag: str) -> str:
    """Header line of a tag page, e.g. '2 posts tagged with "ruby"'."""
    noun = "post" if count == 1 else "posts"
    return f'{count} {noun} tagged with "{tag}"'


class TagPage(BaseModel):
    """A planned listing page for one tag."""

    model_config = ConfigDict(frozen=True)

    tag_value: str
    tag: str
    documents: tuple[Document, ...]
    total_count: int = Field(ge=1)

    @property
    def header(self) -> str:
        return tag_header(self.total_count, self.tag)

    @property
    def url(self) -> str:
        return f"/tags/{self.tag_value}/"
