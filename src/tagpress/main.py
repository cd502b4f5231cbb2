"""tagpress preview server.

Serves the same pages the static build writes, re-reading the content
directory on every request so edits show up on reload.
"""

import html
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from tagpress.config import settings
from tagpress.core.errors import TagpressError
from tagpress.core.indexer import SiteIndex, build_site_index, recent_documents
from tagpress.core.loader import ContentStore
from tagpress.render import (
    render_home,
    render_not_found,
    render_post,
    render_tag_index,
    render_tag_page,
    static_path,
)

logger = logging.getLogger(__name__)

# Initialize app
app = FastAPI(
    title=settings.site_title,
    debug=settings.debug,
)
app.mount("/static", StaticFiles(directory=str(static_path)), name="static")

# Initialize storage
store = ContentStore(settings.content_dir, words_per_minute=settings.words_per_minute)
site = settings.site_metadata()


def load_index() -> SiteIndex:
    """Load and index the whole corpus."""
    return build_site_index(store.load_all(), limit=settings.query_limit)


@app.exception_handler(TagpressError)
async def tagpress_error_handler(request: Request, exc: TagpressError):
    """Report a broken corpus instead of serving partial pages."""
    logger.error("Cannot render %s: %s", request.url.path, exc)
    return HTMLResponse(
        f"<h1>Build error</h1><p>{html.escape(str(exc))}</p>", status_code=500
    )


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Render the site's 404 page for unknown routes."""
    if exc.status_code == 404:
        return HTMLResponse(render_not_found(site), status_code=404)
    return HTMLResponse(str(exc.detail), status_code=exc.status_code)


@app.get("/", response_class=HTMLResponse)
async def home():
    """Home page - all posts, newest first."""
    index = load_index()
    return HTMLResponse(render_home(recent_documents(index.documents), site))


@app.get("/tags", response_class=HTMLResponse)
@app.get("/tags/", response_class=HTMLResponse)
async def tags_page():
    """Tag index page with counts."""
    index = load_index()
    return HTMLResponse(render_tag_index(index.tags, site))


@app.get("/tags/{tag_value}", response_class=HTMLResponse)
@app.get("/tags/{tag_value}/", response_class=HTMLResponse)
async def tag_page(tag_value: str):
    """Listing page of one tag."""
    page = load_index().page_for(tag_value)
    if page is None:
        raise HTTPException(status_code=404, detail="Tag not found")
    return HTMLResponse(render_tag_page(page, site))


@app.get("/{path:path}", response_class=HTMLResponse)
async def view_post(path: str):
    """A post, looked up by the path in its front matter."""
    document = load_index().document_at(path)
    if document is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return HTMLResponse(render_post(document, site))
