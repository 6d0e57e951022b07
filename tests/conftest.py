"""Shared fixtures: in-memory pods, fetch counting, and an on-disk pod."""

from collections import Counter
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from sprout.config import PodConfig
from sprout.documents import ResolutionContext
from sprout.sources import MemorySource


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class CountingSource(MemorySource):
    """MemorySource that records how often each path is fetched."""

    def __init__(self, files: Mapping[str, str]) -> None:
        super().__init__(files)
        self.calls: Counter[str] = Counter()

    async def fetch(self, path: str) -> str:
        self.calls[path] += 1
        return await super().fetch(path)


@pytest.fixture
def make_context() -> Callable[..., ResolutionContext]:
    """Build a context over an in-memory pod: ``make_context({path: yaml}, **config)``."""

    def _make(files: Mapping[str, str], **config: object) -> ResolutionContext:
        return ResolutionContext(CountingSource(files), config=PodConfig(**config))

    return _make


BLOG_ROUTES = """\
routes:
- pattern: /
  doc: !g.doc /content/pages/home.yaml
- pattern: /about
  doc: /content/pages/about.yaml
- pattern: /blog/:base
  collection: /content/blog/
"""


@pytest.fixture
def pod_dir(tmp_path: Path) -> Path:
    """A small pod on disk: routes, pages, a blog collection, and views."""
    (tmp_path / "routes.yaml").write_text(BLOG_ROUTES)

    pages = tmp_path / "content" / "pages"
    pages.mkdir(parents=True)
    (pages / "home.yaml").write_text(
        "$title: Home\n"
        "$view: /views/home.html\n"
        "hero: !g.doc /content/partials/hero.yaml\n"
        "logo: !g.static /static/img/logo.png\n"
    )
    (pages / "about.yaml").write_text("$title: About\nbody: About us\n")

    partials = tmp_path / "content" / "partials"
    partials.mkdir(parents=True)
    (partials / "hero.yaml").write_text("headline: Welcome\n")

    blog = tmp_path / "content" / "blog"
    blog.mkdir(parents=True)
    (blog / "hello.yaml").write_text("$title: Hello\nbody: First post\n")

    views = tmp_path / "views"
    views.mkdir()
    (views / "base.html").write_text("<h1>{{ doc.title }}</h1><p>{{ doc.body }}</p>")
    (views / "home.html").write_text(
        '<h1>{{ doc.title }}</h1><h2>{{ doc.hero.headline }}</h2><img src="{{ doc.logo.url }}">'
    )
    return tmp_path
