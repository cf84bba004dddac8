"""Unit tests for JSON-LD and og:image extraction."""

from __future__ import annotations

import pytest

from recipe_ingest.services.scraping.jsonld import (
    extract_cover_image,
    extract_structured_recipe,
)


pytestmark = pytest.mark.unit


def _page(*blocks: str, head: str = "") -> str:
    scripts = "".join(
        f'<script type="application/ld+json">{block}</script>' for block in blocks
    )
    return f"<html><head>{head}{scripts}</head><body></body></html>"


class TestExtractStructuredRecipe:
    """Tests for extract_structured_recipe."""

    def test_single_recipe_object(self) -> None:
        """Should return a top-level Recipe object."""
        html = _page('{"@type": "Recipe", "name": "Tacos"}')

        assert extract_structured_recipe(html) == {"@type": "Recipe", "name": "Tacos"}

    def test_recipe_inside_graph(self) -> None:
        """Should unwrap an @graph array."""
        html = _page(
            '{"@context": "https://schema.org", "@graph": ['
            '{"@type": "WebPage"}, {"@type": "Recipe", "name": "Soup"}]}'
        )

        assert extract_structured_recipe(html)["name"] == "Soup"

    def test_recipe_in_top_level_array(self) -> None:
        """Should search a top-level array."""
        html = _page('[{"@type": "Person"}, {"@type": "Recipe", "name": "Pie"}]')

        assert extract_structured_recipe(html)["name"] == "Pie"

    def test_type_list(self) -> None:
        """Should accept @type given as a list containing Recipe."""
        html = _page('{"@type": ["Recipe", "NewsArticle"], "name": "Bread"}')

        assert extract_structured_recipe(html)["name"] == "Bread"

    def test_skips_malformed_block(self) -> None:
        """Should ignore invalid JSON and keep scanning."""
        html = _page("{not json", '{"@type": "Recipe", "name": "Rice"}')

        assert extract_structured_recipe(html)["name"] == "Rice"

    def test_first_recipe_wins(self) -> None:
        """Should return the first Recipe in document order."""
        html = _page(
            '{"@type": "Recipe", "name": "First"}',
            '{"@type": "Recipe", "name": "Second"}',
        )

        assert extract_structured_recipe(html)["name"] == "First"

    def test_single_quoted_type_attribute(self) -> None:
        """Should match script tags with single-quoted attributes."""
        html = (
            "<script type='application/ld+json'>"
            '{"@type": "Recipe", "name": "Salad"}</script>'
        )

        assert extract_structured_recipe(html)["name"] == "Salad"

    @pytest.mark.parametrize(
        "html",
        [
            "",
            "<html><body>No data</body></html>",
            _page('{"@type": "Article"}'),
            _page('"just a string"'),
        ],
    )
    def test_no_recipe(self, html: str) -> None:
        """Should return None when the page has no Recipe object."""
        assert extract_structured_recipe(html) is None


class TestExtractCoverImage:
    """Tests for extract_cover_image."""

    def test_property_before_content(self) -> None:
        """Should read og:image with property first."""
        html = '<meta property="og:image" content="https://a.test/x.jpg">'

        assert extract_cover_image(html) == "https://a.test/x.jpg"

    def test_content_before_property(self) -> None:
        """Should read og:image with content first."""
        html = '<meta content="https://a.test/y.jpg" property="og:image" />'

        assert extract_cover_image(html) == "https://a.test/y.jpg"

    def test_decodes_entities(self) -> None:
        """Should unescape HTML entities in the URL."""
        html = '<meta property="og:image" content="https://a.test/i.jpg?w=1&amp;h=2">'

        assert extract_cover_image(html) == "https://a.test/i.jpg?w=1&h=2"

    def test_missing(self) -> None:
        """Should return None without an og:image tag."""
        assert extract_cover_image('<meta property="og:title" content="x">') is None
