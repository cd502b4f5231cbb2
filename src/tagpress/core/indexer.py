"""Tag index and tag page planning.

Both stages are pure functions of the ordered document sequence: the
index is rebuilt from scratch on every build and there is no
incremental update path.

Tags are grouped by their normalized (kebab-case) value everywhere, in
the global index as well as in the per-tag pages, so the two views can
never disagree. A group is displayed with the first authored spelling
met in corpus order: "Ruby" and "ruby" merge into one entry shown as
whichever appears first.
"""

import logging
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from tagpress.core.models import Document, TagIndexEntry, TagPage, tag_header
from tagpress.core.normalize import kebab_case

logger = logging.getLogger(__name__)

__all__ = [
    "SiteIndex",
    "build_site_index",
    "build_tag_index",
    "documents_with_tag",
    "kebab_case",
    "plan_tag_pages",
    "recent_documents",
    "tag_header",
]


class SiteIndex(BaseModel):
    """Everything the renderers need, derived from one corpus."""

    model_config = ConfigDict(frozen=True)

    documents: tuple[Document, ...]
    tags: tuple[TagIndexEntry, ...]
    pages: tuple[TagPage, ...]

    def page_for(self, tag_value: str) -> TagPage | None:
        """Find the planned page of a normalized tag."""
        for page in self.pages:
            if page.tag_value == tag_value:
                return page
        return None

    def document_at(self, path: str) -> Document | None:
        """Find a document by its public path, ignoring surrounding slashes."""
        wanted = path.strip("/")
        for document in self.documents:
            if document.path.strip("/") == wanted:
                return document
        return None


def recent_documents(
    documents: Sequence[Document], limit: int | None = None
) -> list[Document]:
    """Documents newest first; equal dates keep corpus order."""
    ordered = sorted(documents, key=lambda d: d.date, reverse=True)
    return ordered if limit is None else ordered[:limit]


def documents_with_tag(
    documents: Sequence[Document], tag_value: str, limit: int | None = None
) -> list[Document]:
    """Documents carrying a normalized tag, newest first.

    Matching is exact membership in the document's normalized tag set,
    never a substring or prefix match.
    """
    return recent_documents([d for d in documents if d.has_tag(tag_value)], limit)


def build_tag_index(documents: Sequence[Document]) -> list[TagIndexEntry]:
    """Count documents per tag.

    Entries come out in order of first occurrence across the corpus.
    """
    counts: dict[str, int] = {}
    displays: dict[str, str] = {}
    for document in documents:
        seen: set[str] = set()
        for tag in document.tags:
            value = kebab_case(tag)
            if value in seen:
                continue
            seen.add(value)
            if value not in counts:
                counts[value] = 0
                displays[value] = tag
            elif displays[value] != tag:
                logger.debug(
                    "Tag %r in %s merged into %r", tag, document.slug, displays[value]
                )
            counts[value] += 1
    return [
        TagIndexEntry(tag_value=value, display=displays[value], total_count=count)
        for value, count in counts.items()
    ]


def plan_tag_pages(
    documents: Sequence[Document],
    limit: int | None = None,
    index: Sequence[TagIndexEntry] | None = None,
) -> list[TagPage]:
    """Plan one listing page per distinct tag, in index order.

    Args:
        documents: The full ordered corpus.
        limit: Maximum number of documents listed on a page. The page's
            total_count always reflects every matching document.
        index: A tag index already built from the same documents.
    """
    if index is None:
        index = build_tag_index(documents)
    pages = []
    for entry in index:
        matching = documents_with_tag(documents, entry.tag_value)
        pages.append(
            TagPage(
                tag_value=entry.tag_value,
                tag=entry.display,
                documents=tuple(matching if limit is None else matching[:limit]),
                total_count=len(matching),
            )
        )
    return pages


def build_site_index(
    documents: Sequence[Document], limit: int | None = None
) -> SiteIndex:
    """Run the whole indexing stage over a corpus."""
    tags = build_tag_index(documents)
    pages = plan_tag_pages(documents, limit=limit, index=tags)
    logger.info("Indexed %d documents under %d tags", len(documents), len(tags))
    return SiteIndex(documents=tuple(documents), tags=tuple(tags), pages=tuple(pages))
