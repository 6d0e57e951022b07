"""Built-in sprout template filters and globals.

Registered on every pod's kida Environment. ``resolve`` and the ``g``
accessors let a view pull in documents the page itself does not
reference.
"""

import json
from datetime import date
from types import SimpleNamespace
from typing import Any

import anyio.from_thread

from sprout.documents import Document, ResolutionContext, StaticAsset, Url


def gettext(content: str) -> str:
    """Translation hook. Pods are not localized, so this is the identity."""
    return content


def localize(value: Any) -> Any:
    """No-op localization filter."""
    return value


def resolve(value: Any) -> Any:
    """Resolve a document from inside a template and return it.

    Templates render on a worker thread, so the resolve is handed back
    to the event loop and awaited there. Values that are not documents
    pass through unchanged.

    Example:
        {% set nav = g.doc("/content/partials/nav.yaml") | resolve %}
    """
    if isinstance(value, Document) and not value.resolved:
        anyio.from_thread.run(value.resolve)
    return value


def _json_default(value: Any) -> Any:
    match value:
        case Document() | StaticAsset():
            return value.path
        case Url():
            return str(value)
        case date():
            # YAML timestamps load as date or datetime (a date subclass).
            return value.isoformat()
        case set() | frozenset() | tuple():
            return list(value)
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def to_json(value: Any) -> str:
    """Serialize *value* as JSON; documents and assets become their paths,
    dates and datetimes their ISO 8601 strings.

    Example:
        <script>const page = {{ doc.fields | json }};</script>
    """
    return json.dumps(value, default=_json_default, ensure_ascii=False)


def pod_globals(context: ResolutionContext) -> dict[str, Any]:
    """Globals bound to one pod: ``_`` and the ``g.doc`` / ``g.static`` accessors."""
    return {
        "_": gettext,
        "g": SimpleNamespace(doc=context.get, static=context.static),
    }


# All built-in sprout filters, registered automatically on every env.
BUILTIN_FILTERS: dict[str, Any] = {
    "json": to_json,
    "localize": localize,
    "resolve": resolve,
}
