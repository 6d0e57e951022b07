"""Deep walk over parsed document fields.

Parsed YAML is a tree of dicts, lists and scalars whose leaves may be
references (``Document`` or ``StaticAsset``). The walk finds every
reference so the resolver can resolve them; it never descends into a
referenced document's own fields, since that document's resolve covers
them.
"""

from collections.abc import Awaitable, Callable, Iterator, Mapping
from typing import Any

from sprout.documents.document import Document
from sprout.documents.references import StaticAsset

type Reference = Document | StaticAsset


def iter_references(value: Any) -> Iterator[Reference]:
    """Yield every reference reachable from *value*, depth first.

    Follows insertion order of mappings and sequences. ``None`` and
    scalars yield nothing. Containers shared through YAML aliases are
    visited once, which also stops self-referencing aliases from looping.
    """
    yield from _walk(value, set())


def _walk(value: Any, seen: set[int]) -> Iterator[Reference]:
    match value:
        case Document() | StaticAsset():
            yield value
        case Mapping() | list() | tuple() | set() | frozenset():
            if id(value) in seen:
                return
            seen.add(id(value))
            items = value.values() if isinstance(value, Mapping) else value
            for item in items:
                yield from _walk(item, seen)


async def deep_resolve(value: Any, visit: Callable[[Reference], Awaitable[None]]) -> None:
    """Await ``visit(ref)`` for every reference under *value*, one at a time."""
    for ref in iter_references(value):
        await visit(ref)
