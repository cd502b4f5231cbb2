"""Unit tests for page rendering and hand-off contracts."""

from datetime import date

import pytest

from tagpress.core.errors import RenderContractError
from tagpress.core.indexer import build_site_index
from tagpress.core.loader import load_document
from tagpress.core.models import SiteMetadata
from tagpress.render import (
    capitalize_filter,
    long_date_filter,
    render_home,
    render_not_found,
    render_post,
    render_tag_index,
    render_tag_page,
)

POST = """---
title: Service objects in Rails
date: 2021-06-01
path: /service-objects
tags:
  - Ruby on Rails
  - dev
---

Some **bold** words.
"""


@pytest.fixture
def site():
    return SiteMetadata(title="Test Blog", subtitle="notes", description="Things I wrote")


@pytest.fixture
def document():
    return load_document(POST, slug="/service-objects/")


@pytest.fixture
def index(document):
    older = load_document(
        "---\ntitle: Older <post>\ndate: 2020-01-01\npath: /older\ntags: [dev]\n---\n",
        slug="/older/",
    )
    return build_site_index([older, document])


class TestFilters:
    def test_long_date(self):
        assert long_date_filter(date(2021, 6, 15)) == "June 15, 2021"

    def test_capitalize_keeps_rest(self):
        assert capitalize_filter("rails API") == "Rails API"
        assert capitalize_filter("") == ""


class TestRenderPost:
    def test_contains_body_and_meta(self, document, site):
        html = render_post(document, site)
        assert "<title>Service objects in Rails | Test Blog</title>" in html
        assert "<strong>bold</strong>" in html
        assert "June 01, 2021" in html
        assert "1 min read" in html

    def test_code_highlighting_assets(self, document, site):
        html = render_post(document, site)
        assert 'class="post-body line-numbers"' in html
        assert "prism-line-numbers.min.js" in html
        assert "prism-autoloader.min.js" in html

    def test_tag_links_use_normalized_path(self, document, site):
        html = render_post(document, site)
        assert 'href="/tags/ruby-on-rails/"' in html
        assert ">Ruby on Rails</a>" in html


class TestRenderTagIndex:
    def test_entries_with_counts(self, index, site):
        html = render_tag_index(index.tags, site)
        assert "All Tags" in html
        assert "dev (2)" in html
        assert 'href="/tags/ruby-on-rails/"' in html
        assert html.index("dev (2)") < html.index("Ruby on Rails (1)")

    def test_empty(self, site):
        assert "No tags yet." in render_tag_index([], site)

    def test_accepts_plain_mappings(self, site):
        html = render_tag_index([{"tag_value": "ruby", "display": "Ruby", "total_count": 3}], site)
        assert "Ruby (3)" in html

    def test_rejects_bad_entry(self, site):
        with pytest.raises(RenderContractError):
            render_tag_index([{"tag_value": "ruby"}], site)


class TestRenderTagPage:
    def test_header_and_order(self, index, site):
        html = render_tag_page(index.page_for("dev"), site)
        assert "2 posts tagged with &#34;dev&#34;" in html
        assert html.index("/service-objects") < html.index("/older")
        assert "<title>Dev Posts | Test Blog</title>" in html
        assert 'href="/tags/"' in html

    def test_titles_escaped(self, index, site):
        html = render_tag_page(index.page_for("dev"), site)
        assert "Older &lt;post&gt;" in html

    def test_singular_header(self, index, site):
        html = render_tag_page(index.page_for("ruby-on-rails"), site)
        assert "1 post tagged with &#34;Ruby on Rails&#34;" in html

    def test_rejects_zero_count(self, site):
        with pytest.raises(RenderContractError):
            render_tag_page({"tag_value": "x", "tag": "x", "documents": [], "total_count": 0}, site)


class TestRenderOther:
    def test_home_lists_posts(self, index, site):
        html = render_home(list(index.documents), site)
        assert "Things I wrote" in html
        assert "Service objects in Rails" in html

    def test_home_empty(self, site):
        assert "No posts yet." in render_home([], site)

    def test_not_found(self, site):
        html = render_not_found(site)
        assert "Not Found" in html
        assert "404: Not found | Test Blog" in html

    def test_rejects_bad_site(self, document):
        with pytest.raises(RenderContractError):
            render_post(document, {"subtitle": "no title"})
