"""Tests for sprout.routing.trie — pattern parsing and trie matching."""

import pytest

from sprout.errors import ConfigurationError
from sprout.routing.trie import Trie, format_pattern, parse_pattern


class TestParsePattern:
    def test_static(self) -> None:
        segments = parse_pattern("/about")
        assert len(segments) == 1
        assert segments[0].value == "about"
        assert segments[0].is_param is False

    def test_root(self) -> None:
        assert parse_pattern("/") == []

    def test_colon_param(self) -> None:
        segments = parse_pattern("/blog/:base")
        assert [s.value for s in segments] == ["blog", ":base"]
        assert segments[1].is_param is True
        assert segments[1].param_name == "base"
        assert segments[1].param_type == "str"

    def test_braced_param(self) -> None:
        segments = parse_pattern("/blog/{base}")
        assert segments[1].param_name == "base"
        assert segments[1].param_type == "str"

    def test_typed_param(self) -> None:
        segments = parse_pattern("/archive/{year:int}")
        assert segments[1].param_name == "year"
        assert segments[1].param_type == "int"

    def test_catch_all(self) -> None:
        assert parse_pattern("/docs/*rest")[1].param_type == "path"
        assert parse_pattern("/docs/*")[1].param_name == "path"
        assert parse_pattern("/docs/{base:path}")[1].param_type == "path"

    def test_rejects_angle_bracket_param(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_pattern("/blog/<base>")
        assert "<param>" in str(exc_info.value)
        assert "/blog/<base>" in str(exc_info.value)

    def test_rejects_unknown_converter(self) -> None:
        with pytest.raises(ConfigurationError, match="unknown converter"):
            parse_pattern("/x/{id:uuid}")

    def test_rejects_unnamed_param(self) -> None:
        with pytest.raises(ConfigurationError, match="unnamed"):
            parse_pattern("/x/:")

    def test_catch_all_must_be_last(self) -> None:
        with pytest.raises(ConfigurationError, match="last segment"):
            parse_pattern("/docs/*rest/edit")


class TestFormatPattern:
    def test_fills_params(self) -> None:
        assert format_pattern("/blog/:base", {"base": "hello"}) == "/blog/hello"

    def test_root(self) -> None:
        assert format_pattern("/", {}) == "/"

    def test_missing_param(self) -> None:
        assert format_pattern("/:lang/blog/:base", {"base": "hello"}) is None


class TestTrieMatching:
    def test_static(self) -> None:
        trie: Trie[str] = Trie()
        trie.define("/about", "about")
        found = trie.match("/about")
        assert found is not None
        assert found.data == "about"
        assert found.params == {}

    def test_root(self) -> None:
        trie: Trie[str] = Trie()
        trie.define("/", "home")
        assert trie.match("/").data == "home"
        assert trie.match("").data == "home"

    def test_param_capture(self) -> None:
        trie: Trie[str] = Trie()
        trie.define("/blog/:base", "post")
        found = trie.match("/blog/hello")
        assert found.data == "post"
        assert found.params == {"base": "hello"}

    def test_trailing_slash_and_query_ignored(self) -> None:
        trie: Trie[str] = Trie()
        trie.define("/blog/:base", "post")
        assert trie.match("/blog/hello/").params == {"base": "hello"}
        assert trie.match("/blog/hello?ref=feed").params == {"base": "hello"}

    def test_no_match(self) -> None:
        trie: Trie[str] = Trie()
        trie.define("/blog/:base", "post")
        assert trie.match("/nonexistent") is None
        assert trie.match("/blog") is None
        assert trie.match("/blog/a/b") is None

    def test_static_beats_param(self) -> None:
        trie: Trie[str] = Trie()
        trie.define("/blog/:base", "post")
        trie.define("/blog/archive", "archive")
        assert trie.match("/blog/archive").data == "archive"
        assert trie.match("/blog/other").data == "post"

    def test_param_beats_catch_all(self) -> None:
        trie: Trie[str] = Trie()
        trie.define("/docs/*rest", "docs")
        trie.define("/docs/:base", "page")
        assert trie.match("/docs/intro").data == "page"
        found = trie.match("/docs/guide/install")
        assert found.data == "docs"
        assert found.params == {"rest": "guide/install"}

    def test_typed_param_filters(self) -> None:
        trie: Trie[str] = Trie()
        trie.define("/archive/{year:int}", "year")
        assert trie.match("/archive/2024").params == {"year": "2024"}
        assert trie.match("/archive/latest") is None

    def test_sibling_params_with_different_names(self) -> None:
        trie: Trie[str] = Trie()
        trie.define("/blog/:base", "post")
        trie.define("/blog/:slug/comments", "comments")
        assert trie.match("/blog/hello").params == {"base": "hello"}
        assert trie.match("/blog/hello/comments").params == {"slug": "hello"}

    def test_backtracks_out_of_static_branch(self) -> None:
        trie: Trie[str] = Trie()
        trie.define("/blog/archive/index", "index")
        trie.define("/blog/:base/:page", "paged")
        found = trie.match("/blog/archive/2")
        assert found.data == "paged"
        assert found.params == {"base": "archive", "page": "2"}

    def test_duplicate_pattern_rejected(self) -> None:
        trie: Trie[str] = Trie()
        trie.define("/about", "a")
        with pytest.raises(ConfigurationError, match="more than once"):
            trie.define("/about/", "b")

    def test_conflicting_catch_all_rejected(self) -> None:
        trie: Trie[str] = Trie()
        trie.define("/docs/*rest", "a")
        with pytest.raises(ConfigurationError, match="conflicts"):
            trie.define("/docs/*other", "b")

    def test_patterns_in_definition_order(self) -> None:
        trie: Trie[str] = Trie()
        for pattern in ("/", "/blog/:base", "/about"):
            trie.define(pattern, pattern)
        assert trie.patterns == ["/", "/blog/:base", "/about"]
