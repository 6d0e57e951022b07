"""Resolution context — registry, content cache, and the resolve algorithm.

One context per pod render. It owns:

- the document registry (one canonical ``Document`` per path)
- the raw-content cache (one fetch per path)
- the content source those fetches go through
- the per-path record of loads in flight

Resolving a document fetches and parses it, then resolves every document
it references, in traversal order, one at a time. Each document moves
through ``UNRESOLVED → LOADING → LOADED → RESOLVED`` (or ``FAILED``).

Cycles: a document that is already being walked further up the current
resolution chain is skipped when met again, because its fields are
loaded and the ancestor will finish the walk. With ``strict_cycles``
the cycle raises ``CyclicReferenceError`` instead.

Concurrency: only one fetch+parse is ever in flight per path; concurrent
resolvers of the same document wait for that load and then walk the
fields themselves. Waiting never depends on another document's walk,
so two resolution chains entering a cycle from opposite ends cannot
deadlock.
"""

import logging
from contextvars import ContextVar
from dataclasses import dataclass, field

import anyio

from sprout.cache import KeyedCache
from sprout.config import PodConfig
from sprout.documents.document import Document, DocumentState
from sprout.documents.references import StaticAsset, load_fields
from sprout.documents.walk import Reference, deep_resolve
from sprout.errors import CyclicReferenceError
from sprout.sources import ContentSource

logger = logging.getLogger("sprout.documents")

# Paths of the documents whose walks enclose the current task.
_chain: ContextVar[tuple[str, ...]] = ContextVar("sprout_resolution_chain", default=())


@dataclass(slots=True)
class _Load:
    """A fetch+parse in flight for one path."""

    done: anyio.Event = field(default_factory=anyio.Event)
    error: Exception | None = None


class ResolutionContext:
    """Owns every document and fetched file for one pod.

    Usage::

        context = ResolutionContext(FileSystemSource("site"))
        doc = context.get("/content/pages/home.yaml")
        await doc.resolve()
    """

    __slots__ = ("_loads", "config", "contents", "documents", "source")

    def __init__(self, source: ContentSource, *, config: PodConfig | None = None) -> None:
        self.source = source
        self.config = config or PodConfig()
        self.documents: KeyedCache[Document] = KeyedCache()
        self.contents: KeyedCache[str] = KeyedCache()
        self._loads: dict[str, _Load] = {}

    def get(self, path: str) -> Document:
        """Return the canonical document for *path*, creating it if needed.

        Never resolves.
        """
        return self.documents.get_or_create(path, self._create)

    def static(self, path: str) -> StaticAsset:
        return StaticAsset(path)

    def _create(self, path: str) -> Document:
        return Document(path, self)

    async def fetch(self, path: str) -> str:
        """Return the raw text at *path*, fetching it on the first request only."""
        if self.contents.has(path):
            return self.contents.get(path)
        text = await self.source.fetch(path)
        self.contents.set(path, text)
        return text

    async def resolve(self, doc: Document) -> None:
        """Resolve *doc* and, transitively, every document it references.

        Raises ``FetchError`` or ``ParseError`` if this or any nested
        document cannot be loaded; on a load failure the failing document
        is left with ``fields is None`` and ``resolved is False``.
        """
        if doc.state is DocumentState.RESOLVED:
            return

        chain = _chain.get()
        if doc.path in chain:
            cycle = (*chain[chain.index(doc.path) :], doc.path)
            if self.config.strict_cycles:
                raise CyclicReferenceError(cycle)
            logger.debug("Reference cycle %s; already resolving", " -> ".join(cycle))
            return

        await self._load(doc)

        token = _chain.set((*chain, doc.path))
        try:
            await deep_resolve(doc.fields, self._visit)
        finally:
            _chain.reset(token)
        doc.state = DocumentState.RESOLVED

    async def _visit(self, ref: Reference) -> None:
        match ref:
            case Document():
                await self.resolve(ref)
            case StaticAsset():
                # Fully specified by its path.
                pass

    async def _load(self, doc: Document) -> None:
        """Fetch and parse *doc* unless its fields are already populated."""
        if doc.fields is not None:
            return

        pending = self._loads.get(doc.path)
        if pending is not None:
            await pending.done.wait()
            if pending.error is not None:
                raise pending.error
            # Loaded, or cancelled before loading; check again.
            return await self._load(doc)

        pending = self._loads[doc.path] = _Load()
        doc.state = DocumentState.LOADING
        logger.debug("Resolving %s", doc.path)
        try:
            text = await self.fetch(doc.path)
            fields = load_fields(text, self, doc.path)
        except Exception as exc:
            doc._fail()
            pending.error = exc
            raise
        else:
            doc._populate(fields)
        finally:
            if doc.state is DocumentState.LOADING:
                # Cancelled mid-load; the next resolve starts over.
                doc.state = DocumentState.UNRESOLVED
            del self._loads[doc.path]
            pending.done.set()
