"""Route table backed by the pod's routes manifest.

The manifest is itself a document (``/routes.yaml`` by default)::

    routes:
    - pattern: /
      doc: !g.doc /content/pages/home.yaml
    - pattern: /blog/:base
      collection: /content/blog/

Resolving the table resolves the manifest and registers each entry in a
``Trie`` in manifest order. Matching returns the document to render
without resolving it.
"""

import logging

from sprout.documents import Document, ResolutionContext
from sprout.errors import ConfigurationError, NoRouteMatchError
from sprout.routing.route import COLLECTION_PARAM, RouteEntry
from sprout.routing.trie import Trie, format_pattern

logger = logging.getLogger("sprout.routing")


class RouteTable:
    """Maps request paths to documents through the routes manifest.

    Usage::

        routes = RouteTable(context, "/routes.yaml")
        await routes.resolve()
        doc = routes.match("/blog/hello")  # /content/blog/hello.yaml
        await doc.resolve()
    """

    __slots__ = ("_context", "_document", "_entries", "_resolved", "_suffix", "_trie")

    def __init__(
        self,
        context: ResolutionContext,
        path: str = "/routes.yaml",
        *,
        document_suffix: str = ".yaml",
    ) -> None:
        self._context = context
        self._document = context.get(path)
        self._suffix = document_suffix
        self._trie: Trie[RouteEntry] = Trie()
        self._entries: list[RouteEntry] = []
        self._resolved = False

    @property
    def context(self) -> ResolutionContext:
        return self._context

    @property
    def document(self) -> Document:
        """The routes manifest document."""
        return self._document

    @property
    def path(self) -> str:
        return self._document.path

    @property
    def document_suffix(self) -> str:
        return self._suffix

    @property
    def routes(self) -> list[RouteEntry]:
        """Registered entries, in manifest order."""
        return list(self._entries)

    async def resolve(self) -> None:
        """Resolve the manifest and register its routes. Idempotent."""
        if self._resolved:
            return
        await self._document.resolve()

        raw = self._document.fields.get("routes")
        if not isinstance(raw, list):
            msg = f"{self.path} must define a 'routes' list"
            raise ConfigurationError(msg)

        # Build aside so a bad entry leaves the table empty, not half-built.
        trie: Trie[RouteEntry] = Trie()
        entries: list[RouteEntry] = []
        for item in raw:
            entry = RouteEntry.from_mapping(item, self._context)
            trie.define(entry.pattern, entry)
            entries.append(entry)
        self._trie, self._entries = trie, entries
        self._resolved = True
        logger.debug("Registered %d route(s) from %s", len(self._entries), self.path)

    def match(self, request_path: str) -> Document:
        """Return the document that renders *request_path*.

        Raises ``NoRouteMatchError`` if no pattern matches. The returned
        document is canonical but not necessarily resolved.
        """
        if not self._resolved:
            msg = "RouteTable.resolve() must complete before match()."
            raise RuntimeError(msg)

        found = self._trie.match(request_path)
        if found is None:
            raise NoRouteMatchError(request_path, self.path)

        entry = found.data
        if entry.doc is not None:
            return entry.doc
        target = entry.collection + found.params[COLLECTION_PARAM] + self._suffix
        logger.debug("%s -> %s (collection %s)", request_path, target, entry.collection)
        return self._context.get(target)

    def reverse(self, doc: Document) -> str | None:
        """Return the URL path that renders *doc*, or ``None`` if unrouted.

        Direct routes are found by identity. For collection routes the
        ``base`` parameter is recovered from the document path; a
        candidate URL only counts if it matches back to the same route.
        """
        for entry in self._entries:
            if entry.doc is not None:
                if entry.doc is doc:
                    return format_pattern(entry.pattern, {})
                continue

            prefix, suffix = entry.collection, self._suffix
            if not doc.path.startswith(prefix) or not doc.path.endswith(suffix):
                continue
            base = doc.path[len(prefix) : len(doc.path) - len(suffix)]
            if not base:
                continue
            url = format_pattern(entry.pattern, {COLLECTION_PARAM: base})
            if url is None:
                continue
            found = self._trie.match(url)
            if found is not None and found.data is entry:
                return url
        return None
