"""One-shot static site build.

Loads the corpus, indexes it, renders every page into a staging
directory and only then swaps the staging directory into place. A
failure at any step leaves the previously published output untouched.
"""

import logging
import shutil
import tempfile
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, ConfigDict

from tagpress.config import Settings
from tagpress.core.errors import RenderContractError
from tagpress.core.indexer import SiteIndex, build_site_index, recent_documents
from tagpress.core.loader import ContentStore
from tagpress.core.models import SiteMetadata
from tagpress.render import (
    render_home,
    render_not_found,
    render_post,
    render_tag_index,
    render_tag_page,
    static_path,
)

logger = logging.getLogger(__name__)

# Output subdirectory holding the packaged assets
STATIC_DIR = "static"


class BuildReport(BaseModel):
    """Summary of a finished build."""

    model_config = ConfigDict(frozen=True)

    output_dir: Path
    documents: int
    tags: int
    files: tuple[str, ...]


def output_file_for(url_path: str) -> str:
    """Map a public URL path to a file path relative to the output root.

    "/2021/hello/" -> "2021/hello/index.html"; paths already ending in
    ".html" are kept as they are.
    """
    parts = PurePosixPath(url_path.strip("/")).parts
    if any(part in ("..", ".") for part in parts):
        raise RenderContractError(f"path {url_path!r} escapes the output directory")
    relative = "/".join(parts)
    if relative.endswith(".html"):
        return relative
    return f"{relative}/index.html" if relative else "index.html"


def render_site(index: SiteIndex, site: SiteMetadata) -> dict[str, str]:
    """Render every page of the site.

    Returns:
        Mapping of output-relative file path to HTML, in build order.
    """
    files: dict[str, str] = {
        "index.html": render_home(recent_documents(index.documents), site),
        "404.html": render_not_found(site),
        "tags/index.html": render_tag_index(index.tags, site),
    }
    for page in index.pages:
        files[output_file_for(page.url)] = render_tag_page(page, site)
    for document in index.documents:
        target = output_file_for(document.path)
        if target.split("/", 1)[0] == STATIC_DIR:
            raise RenderContractError(
                f"path {document.path!r} of {document.slug} is reserved for static assets"
            )
        if target in files:
            logger.warning(
                "Skipping %s: its path %s is already taken", document.slug, document.path
            )
            continue
        files[target] = render_post(document, site)
    return files


def publish(files: dict[str, str], output_dir: Path) -> None:
    """Write rendered files and static assets, replacing output_dir atomically."""
    output_dir = Path(output_dir)
    output_dir.parent.mkdir(parents=True, exist_ok=True)
    staging = Path(
        tempfile.mkdtemp(prefix=f".{output_dir.name}.staging-", dir=output_dir.parent)
    )
    try:
        for relative, html in files.items():
            target = staging / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(html, encoding="utf-8")
        shutil.copytree(static_path, staging / STATIC_DIR)
        if output_dir.exists():
            previous = Path(
                tempfile.mkdtemp(prefix=f".{output_dir.name}.old-", dir=output_dir.parent)
            )
            output_dir.replace(previous / output_dir.name)
            staging.replace(output_dir)
            shutil.rmtree(previous)
        else:
            staging.replace(output_dir)
    except BaseException:
        shutil.rmtree(staging, ignore_errors=True)
        raise


def build_site(
    settings: Settings,
    content_dir: Path | None = None,
    output_dir: Path | None = None,
) -> BuildReport:
    """Run the whole build.

    Args:
        settings: Application settings.
        content_dir: Overrides settings.content_dir.
        output_dir: Overrides settings.output_dir.

    Raises:
        TagpressError: Any load, index or render failure. Nothing is
            published in that case.
    """
    content_dir = Path(content_dir or settings.content_dir)
    output_dir = Path(output_dir or settings.output_dir)

    store = ContentStore(content_dir, words_per_minute=settings.words_per_minute)
    index = build_site_index(store.load_all(), limit=settings.query_limit)
    files = render_site(index, settings.site_metadata())
    publish(files, output_dir)

    logger.info("Wrote %d pages to %s", len(files), output_dir)
    return BuildReport(
        output_dir=output_dir,
        documents=len(index.documents),
        tags=len(index.tags),
        files=tuple(files),
    )
