"""Tests for slug and whitespace helpers."""

import pytest

from folio.api.helpers.slugs import collapse_whitespace, search_words, slugify


class TestSlugify:
    """Tests for slugify."""

    def test_title_to_kebab_case(self) -> None:
        assert slugify("Nisi est sit_amet facilisis!") == "nisi-est-sit-amet-facilisis"

    def test_punctuation_runs_collapse(self) -> None:
        """Any run of non-word characters becomes a single hyphen."""
        assert slugify("  Hello,   World -- again  ") == "hello-world-again"

    def test_punctuation_only_title(self) -> None:
        """A title without word characters produces an empty slug."""
        assert slugify("!!! ???") == ""

    def test_slug_is_idempotent(self) -> None:
        slug = slugify("Python 3.12: What's New")
        assert slug == "python-3-12-what-s-new"
        assert slugify(slug) == slug


class TestCollapseWhitespace:
    """Tests for collapse_whitespace."""

    def test_trims_and_squeezes(self) -> None:
        assert collapse_whitespace("  a \t b\n\n c  ") == "a b c"

    def test_empty(self) -> None:
        assert collapse_whitespace("   ") == ""


class TestSearchWords:
    """Tests for search_words."""

    def test_underscores_and_punctuation(self) -> None:
        assert search_words("foo_bar, baz!") == ["foo", "bar", "baz"]

    def test_no_words(self) -> None:
        assert search_words(" -- ") == []


class TestSlugExamples:
    """Known title to slug pairs."""

    @pytest.mark.parametrize(
        ("title", "slug"),
        [
            ("Quisque egestas cursus.", "quisque-egestas-cursus"),
            ("Nisi est sit_amet facilisis!", "nisi-est-sit-amet-facilisis"),
        ],
    )
    def test_examples(self, title: str, slug: str) -> None:
        assert slugify(title) == slug
        assert all(c.islower() or c.isdigit() or c == "-" for c in slug)
