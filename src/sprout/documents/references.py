"""YAML reference tags and the reference-aware loader.

Two scalar tags let one document point at another file in the pod::

    hero: !g.doc /content/partials/hero.yaml
    logo: !g.static /static/img/logo.png

``!g.doc`` becomes the canonical ``Document`` for that path (constructed,
not resolved). ``!g.static`` becomes a fresh ``StaticAsset``. Any other
explicit ``!tag`` fails the parse.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import yaml

from sprout.errors import MalformedReferenceError, ParseError

if TYPE_CHECKING:
    from sprout.documents.context import ResolutionContext

DOC_TAG = "!g.doc"
STATIC_TAG = "!g.static"


@dataclass(frozen=True, slots=True)
class Url:
    """A pod URL. Stringifies to its path."""

    path: str

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True, slots=True)
class StaticAsset:
    """A static file referenced by path.

    Fully specified by its path, so there is nothing to fetch or resolve.
    Not cached: every reference constructs a new value.
    """

    path: str
    url: Url = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "url", Url(self.path))


class ReferenceLoader(yaml.SafeLoader):
    """SafeLoader that understands sprout's reference tags.

    Bound to one resolution context (where ``!g.doc`` documents are
    registered) and one source path (for error messages).
    """

    def __init__(self, stream: str, context: ResolutionContext, source_path: str) -> None:
        super().__init__(stream)
        self.context = context
        self.source_path = source_path

    def reference_path(self, node: yaml.Node) -> str:
        """Return the path named by a reference node, or raise."""
        if not isinstance(node, yaml.ScalarNode):
            raise MalformedReferenceError(
                self.source_path,
                f"{node.tag} expects a path scalar{_where(node)}",
            )
        path = self.construct_scalar(node).strip()
        if not path.startswith("/") or path == "/":
            raise MalformedReferenceError(
                self.source_path,
                f"{node.tag} path must be absolute, got {path!r}{_where(node)}",
            )
        return path


def _where(node: yaml.Node) -> str:
    mark = node.start_mark
    if mark is None:
        return ""
    return f" (line {mark.line + 1}, column {mark.column + 1})"


def _construct_doc(loader: ReferenceLoader, node: yaml.Node) -> Any:
    return loader.context.get(loader.reference_path(node))


def _construct_static(loader: ReferenceLoader, node: yaml.Node) -> Any:
    return StaticAsset(loader.reference_path(node))


def _construct_unknown(loader: ReferenceLoader, node: yaml.Node) -> Any:
    raise MalformedReferenceError(
        loader.source_path,
        f"unknown tag {node.tag!r}{_where(node)}",
    )


ReferenceLoader.add_constructor(DOC_TAG, _construct_doc)
ReferenceLoader.add_constructor(STATIC_TAG, _construct_static)
ReferenceLoader.add_constructor(None, _construct_unknown)


def load_fields(text: str, context: ResolutionContext, path: str) -> dict[str, Any]:
    """Parse a document body into its field mapping.

    An empty document yields ``{}``. Anything but a mapping at the top
    level is a ``ParseError``.
    """
    loader = ReferenceLoader(text, context, path)
    try:
        data = loader.get_single_data()
    except yaml.YAMLError as exc:
        raise ParseError(path, str(exc)) from exc
    finally:
        loader.dispose()

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ParseError(path, f"expected a mapping, got {type(data).__name__}")
    return data
