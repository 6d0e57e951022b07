"""Document — one YAML file in the pod, resolved on demand."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from sprout.documents.references import Url
from sprout.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sprout.documents.context import ResolutionContext

# Leading character marking framework-reserved fields ("$view").
BUILTIN_SIGIL = "$"

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class DocumentState(Enum):
    """Resolution lifecycle of a document."""

    UNRESOLVED = "unresolved"
    LOADING = "loading"  # fetch + parse in flight
    LOADED = "loaded"  # fields populated, nested references being resolved
    RESOLVED = "resolved"
    FAILED = "failed"


class Document:
    """A resolvable unit of page content backed by one YAML file.

    Documents are canonical per path within a resolution context: get
    them with ``context.get(path)`` (or ``Document.get``), never by
    calling the constructor directly.

    ``fields`` holds the parsed mapping with its original keys. ``data``
    is the same mapping with the ``$`` sigil stripped from reserved keys,
    and attribute or item access falls through to it, so a template can
    write ``doc.title`` or ``doc["view"]``.
    """

    __slots__ = ("_context", "_data", "fields", "path", "state", "url")

    def __init__(self, path: str, context: ResolutionContext) -> None:
        self.path = path
        self.url = Url(path)
        self.fields: dict[str, Any] | None = None
        self.state = DocumentState.UNRESOLVED
        self._data: Mapping[str, Any] = _EMPTY
        self._context = context

    @classmethod
    def get(cls, path: str, context: ResolutionContext) -> Document:
        """Return the canonical document for *path*. Never resolves."""
        return context.get(path)

    @property
    def resolved(self) -> bool:
        return self.state is DocumentState.RESOLVED

    @property
    def data(self) -> Mapping[str, Any]:
        return self._data

    @property
    def view(self) -> str | None:
        """The ``$view`` reserved field, if the document sets one."""
        if self.fields is None:
            return None
        return self.fields.get(f"{BUILTIN_SIGIL}view")

    async def resolve(self) -> None:
        """Load this document and every document it references.

        A no-op once resolved. See ``ResolutionContext.resolve``.
        """
        await self._context.resolve(self)

    def get_view(self) -> str:
        """Return the template name that renders this document.

        Uses ``$view`` or the configured default, with the document-side
        views prefix (``/views``) swapped for the template namespace
        (``views``). Raises ``ConfigurationError`` if ``$view`` is not a
        string.
        """
        config = self._context.config
        view = self.view or config.default_view
        if not isinstance(view, str):
            msg = f"{self.path}: $view must be a string, got {type(view).__name__}"
            raise ConfigurationError(msg)
        if view.startswith(config.views_prefix):
            return config.template_prefix + view[len(config.views_prefix) :]
        return view.lstrip("/")

    def _populate(self, fields: dict[str, Any]) -> None:
        self.fields = fields
        self._data = MappingProxyType(
            {key.removeprefix(BUILTIN_SIGIL): value for key, value in fields.items()}
        )
        self.state = DocumentState.LOADED

    def _fail(self) -> None:
        self.fields = None
        self._data = _EMPTY
        self.state = DocumentState.FAILED

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal attribute lookup fails.
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            msg = f"{self!r} has no field {name!r}"
            raise AttributeError(msg) from None

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        # Star marks a document whose references are not all resolved yet.
        if self.resolved:
            return f"<Document [path={self.path}]>"
        return f"<Document* [path={self.path}]>"

    __str__ = __repr__
