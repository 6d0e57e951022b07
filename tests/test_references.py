"""Tests for sprout.documents.references — reference tags and YAML loading."""

import pytest

from sprout.documents import Document, StaticAsset, Url, load_fields
from sprout.errors import MalformedReferenceError, ParseError


class TestUrl:
    def test_str_is_path(self) -> None:
        assert str(Url("/content/a.yaml")) == "/content/a.yaml"

    def test_equality_by_path(self) -> None:
        assert Url("/a") == Url("/a")


class TestStaticAsset:
    def test_url_stringifies_to_path(self) -> None:
        asset = StaticAsset("/static/img/logo.png")
        assert asset.path == "/static/img/logo.png"
        assert str(asset.url) == "/static/img/logo.png"

    def test_frozen(self) -> None:
        asset = StaticAsset("/static/a.css")
        with pytest.raises(AttributeError):
            asset.path = "/static/b.css"  # type: ignore[misc]


class TestLoadFields:
    def test_plain_mapping(self, make_context) -> None:
        ctx = make_context({})
        fields = load_fields("title: Hello\ntags: [a, b]\n", ctx, "/a.yaml")
        assert fields == {"title": "Hello", "tags": ["a", "b"]}

    def test_empty_document(self, make_context) -> None:
        ctx = make_context({})
        assert load_fields("", ctx, "/a.yaml") == {}

    def test_doc_tag_builds_canonical_unresolved_document(self, make_context) -> None:
        ctx = make_context({})
        fields = load_fields("hero: !g.doc /content/hero.yaml\n", ctx, "/a.yaml")

        hero = fields["hero"]
        assert isinstance(hero, Document)
        assert hero is ctx.get("/content/hero.yaml")
        assert hero.resolved is False
        assert hero.fields is None

    def test_static_tag_builds_asset(self, make_context) -> None:
        ctx = make_context({})
        fields = load_fields("logo: !g.static /static/img/logo.png\n", ctx, "/a.yaml")
        assert fields["logo"] == StaticAsset("/static/img/logo.png")
        assert str(fields["logo"].url) == "/static/img/logo.png"

    def test_static_assets_are_not_shared(self, make_context) -> None:
        ctx = make_context({})
        fields = load_fields(
            "a: !g.static /static/x.png\nb: !g.static /static/x.png\n", ctx, "/a.yaml"
        )
        assert fields["a"] == fields["b"]
        assert fields["a"] is not fields["b"]

    def test_references_inside_sequences(self, make_context) -> None:
        ctx = make_context({})
        fields = load_fields(
            "posts:\n- !g.doc /blog/one.yaml\n- !g.doc /blog/two.yaml\n", ctx, "/a.yaml"
        )
        assert [p.path for p in fields["posts"]] == ["/blog/one.yaml", "/blog/two.yaml"]

    def test_unknown_tag(self, make_context) -> None:
        ctx = make_context({})
        with pytest.raises(MalformedReferenceError) as exc_info:
            load_fields("x: !g.url /somewhere\n", ctx, "/a.yaml")
        assert "!g.url" in str(exc_info.value)
        assert exc_info.value.path == "/a.yaml"

    def test_unknown_tag_is_parse_error(self, make_context) -> None:
        ctx = make_context({})
        with pytest.raises(ParseError):
            load_fields("x: !custom 1\n", ctx, "/a.yaml")

    def test_reference_on_mapping_node(self, make_context) -> None:
        ctx = make_context({})
        with pytest.raises(MalformedReferenceError, match="expects a path scalar"):
            load_fields("x: !g.doc {path: /b.yaml}\n", ctx, "/a.yaml")

    def test_relative_reference_path(self, make_context) -> None:
        ctx = make_context({})
        with pytest.raises(MalformedReferenceError, match="must be absolute"):
            load_fields("x: !g.doc content/b.yaml\n", ctx, "/a.yaml")

    def test_empty_reference_path(self, make_context) -> None:
        ctx = make_context({})
        with pytest.raises(MalformedReferenceError):
            load_fields("x: !g.static ''\n", ctx, "/a.yaml")

    def test_malformed_yaml(self, make_context) -> None:
        ctx = make_context({})
        with pytest.raises(ParseError) as exc_info:
            load_fields("title: [unclosed\n", ctx, "/broken.yaml")
        assert not isinstance(exc_info.value, MalformedReferenceError)
        assert "/broken.yaml" in str(exc_info.value)

    def test_top_level_must_be_mapping(self, make_context) -> None:
        ctx = make_context({})
        with pytest.raises(ParseError, match="expected a mapping"):
            load_fields("- a\n- b\n", ctx, "/list.yaml")
