"""Route entries parsed from the routes manifest."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sprout.documents import Document
from sprout.errors import ConfigurationError
from sprout.routing.trie import parse_pattern

if TYPE_CHECKING:
    from sprout.documents import ResolutionContext

# Path parameter a collection route uses to pick the member document.
COLLECTION_PARAM = "base"


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """One entry of the routes manifest.

    Either ``doc`` names the document to render directly, or
    ``collection`` is a path prefix that the matched ``base`` parameter
    completes into a document path.
    """

    pattern: str
    doc: Document | None = None
    collection: str | None = None

    @classmethod
    def from_mapping(cls, data: Any, context: ResolutionContext) -> RouteEntry:
        """Build an entry from one item of the manifest's ``routes`` list.

        ``doc`` may be a ``!g.doc`` reference or a plain path string.
        """
        if not isinstance(data, Mapping):
            msg = f"Route entries must be mappings, got {type(data).__name__}: {data!r}"
            raise ConfigurationError(msg)

        pattern = data.get("pattern")
        if not isinstance(pattern, str):
            msg = f"Route entry is missing a 'pattern' string: {dict(data)!r}"
            raise ConfigurationError(msg)

        doc = data.get("doc")
        collection = data.get("collection")
        if (doc is None) == (collection is None):
            msg = f"Route {pattern!r} needs exactly one of 'doc' or 'collection'"
            raise ConfigurationError(msg)

        if isinstance(doc, str):
            doc = context.get(doc)
        elif doc is not None and not isinstance(doc, Document):
            msg = f"Route {pattern!r}: 'doc' must be a path or !g.doc reference"
            raise ConfigurationError(msg)

        if collection is not None:
            if not isinstance(collection, str):
                msg = f"Route {pattern!r}: 'collection' must be a path prefix string"
                raise ConfigurationError(msg)
            names = {seg.param_name for seg in parse_pattern(pattern) if seg.is_param}
            if COLLECTION_PARAM not in names:
                msg = (
                    f"Collection route {pattern!r} must capture a "
                    f"'{COLLECTION_PARAM}' parameter (e.g. /blog/:{COLLECTION_PARAM})"
                )
                raise ConfigurationError(msg)

        return cls(pattern=pattern, doc=doc, collection=collection)
