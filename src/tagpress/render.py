"""Page rendering.

Every renderer validates what it is handed against the model it expects
before touching a template, so a malformed hand-off fails loudly with
RenderContractError instead of producing a half-filled page.
"""

from collections.abc import Sequence
from datetime import date
from pathlib import Path
from typing import Any, TypeVar

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from pydantic import BaseModel, ValidationError

from tagpress.core.errors import RenderContractError
from tagpress.core.models import Document, SiteMetadata, TagIndexEntry, TagPage
from tagpress.core.normalize import kebab_case
from tagpress.core.parser import render_markdown

templates_path = Path(__file__).parent / "templates"
static_path = Path(__file__).parent / "static"

ModelT = TypeVar("ModelT", bound=BaseModel)


def long_date_filter(value: date) -> str:
    """Format a date like 'June 15, 2021'."""
    return value.strftime("%B %d, %Y")


def capitalize_filter(value: str) -> str:
    """Uppercase the first character only, leaving the rest as authored."""
    return value[:1].upper() + value[1:]


env = Environment(
    loader=FileSystemLoader(str(templates_path)),
    autoescape=select_autoescape(["html"]),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)
env.filters["kebab"] = kebab_case
env.filters["longdate"] = long_date_filter
env.filters["capfirst"] = capitalize_filter


def _checked(model: type[ModelT], data: Any) -> ModelT:
    """Validate hand-off data against a contract model."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data, from_attributes=True)
    except ValidationError as e:
        raise RenderContractError(f"{model.__name__} contract violated: {e}") from e


def _render(template: str, site: SiteMetadata, **context: Any) -> str:
    site = _checked(SiteMetadata, site)
    return env.get_template(template).render(site=site, **context)


def render_home(documents: Sequence[Document], site: SiteMetadata) -> str:
    """Landing page listing every post, newest first as given."""
    documents = [_checked(Document, d) for d in documents]
    return _render("home.html", site, title="Home", documents=documents)


def render_post(document: Document, site: SiteMetadata) -> str:
    """A single post with its rendered body."""
    document = _checked(Document, document)
    return _render(
        "post.html",
        site,
        title=document.title,
        document=document,
        html_content=render_markdown(document.body),
    )


def render_tag_index(entries: Sequence[TagIndexEntry], site: SiteMetadata) -> str:
    """The "All tags" page, entries in the order given."""
    entries = [_checked(TagIndexEntry, e) for e in entries]
    return _render("tags.html", site, title="All Tags", entries=entries)


def render_tag_page(page: TagPage, site: SiteMetadata) -> str:
    """The listing page of one tag."""
    page = _checked(TagPage, page)
    return _render(
        "tag.html",
        site,
        title=f"{capitalize_filter(page.tag)} Posts",
        page=page,
    )


def render_not_found(site: SiteMetadata) -> str:
    return _render("404.html", site, title="404: Not found")
