"""Pod — the render pipeline for one site.

Sequence for a request path::

    resolve routes manifest -> match path -> resolve document
        -> render the document's view -> write to the sink

Every failure propagates; a page either renders completely or not at all.
"""

from __future__ import annotations

import logging
import time
from typing import TextIO

from kida import Environment

from sprout.config import PodConfig
from sprout.documents import Document, ResolutionContext
from sprout.routing import RouteTable
from sprout.sources import ContentSource, source_for
from sprout.templating import create_environment, render_document

logger = logging.getLogger("sprout.pod")


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class Pod:
    """A site: its content source, documents, routes, and templates.

    Usage::

        pod = Pod(PodConfig(root="site"))
        html = await pod.render("/blog/hello")
    """

    __slots__ = ("_env", "config", "context", "routes")

    def __init__(
        self,
        config: PodConfig | None = None,
        *,
        source: ContentSource | None = None,
    ) -> None:
        self.config = config or PodConfig()
        self.context = ResolutionContext(source or source_for(self.config), config=self.config)
        self.routes = RouteTable(
            self.context,
            self.config.routes_path,
            document_suffix=self.config.document_suffix,
        )
        self._env: Environment | None = None

    @property
    def env(self) -> Environment:
        """The kida environment, created on first use."""
        if self._env is None:
            self._env = create_environment(self.config, self.context)
        return self._env

    def get(self, path: str) -> Document:
        return self.context.get(path)

    async def resolve(self, request_path: str) -> Document:
        """Return the fully-resolved document for *request_path*."""
        start = time.perf_counter()
        await self.routes.resolve()
        doc = self.routes.match(request_path)
        await doc.resolve()
        logger.info("Loaded %s in %d ms", request_path, _elapsed_ms(start))
        return doc

    async def render(self, request_path: str) -> str:
        """Render the page for *request_path* to HTML."""
        doc = await self.resolve(request_path)
        start = time.perf_counter()
        html = await render_document(self.env, doc)
        logger.info("Rendered %s with %s in %d ms", request_path, doc.get_view(), _elapsed_ms(start))
        return html

    async def write(self, request_path: str, sink: TextIO) -> None:
        """Render *request_path* and write the HTML to *sink*.

        Nothing is written unless rendering succeeds.
        """
        html = await self.render(request_path)
        sink.write(html)
        sink.flush()

    async def aclose(self) -> None:
        """Release the content source's connections, if it holds any."""
        aclose = getattr(self.context.source, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> Pod:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
