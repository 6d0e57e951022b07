"""Pattern trie with O(path-depth) matching.

Patterns are registered once when the routes manifest resolves. Each
registered pattern carries arbitrary data (a ``RouteEntry``) that a
successful match hands back along with the captured parameters.
"""

import re
from dataclasses import dataclass, field

from sprout.errors import ConfigurationError
from sprout.routing.params import CONVERTERS, DEFAULT_CATCH_ALL


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Static:    ``/blog``        (is_param=False)
    Param:     ``/:base``       (is_param=True, param_name="base")
    Braced:    ``/{base}``      (is_param=True, param_name="base")
    Typed:     ``/{id:int}``    (is_param=True, param_name="id", param_type="int")
    Catch-all: ``/*rest``       (is_param=True, param_name="rest", param_type="path")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class TrieMatch[T]:
    """Result of a successful trie lookup."""

    data: T
    params: dict[str, str]


def parse_pattern(pattern: str) -> list[PathSegment]:
    """Parse a route pattern string into segments.

    Examples::

        "/blog"              -> [PathSegment("blog")]
        "/blog/:base"        -> [PathSegment("blog"), PathSegment(":base", is_param=True, ...)]
        "/blog/{base}"       -> same parameter, braced spelling
        "/items/{id:int}"    -> [..., PathSegment("{id:int}", is_param=True, param_type="int")]
        "/docs/*rest"        -> [..., PathSegment("*rest", is_param=True, param_type="path")]
    """
    segments: list[PathSegment] = []
    parts = [part for part in pattern.strip("/").split("/") if part]
    for index, part in enumerate(parts):
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route pattern {pattern!r} uses <param> syntax. "
                "Use :param or {param} instead."
            )
            raise ConfigurationError(msg)

        if part.startswith(":"):
            name, param_type = part[1:], "str"
        elif part.startswith("*"):
            name, param_type = part[1:] or DEFAULT_CATCH_ALL, "path"
        elif part.startswith("{") and part.endswith("}"):
            name, _, param_type = part[1:-1].partition(":")
            param_type = param_type or "str"
        else:
            segments.append(PathSegment(value=part))
            continue

        if not name:
            msg = f"Route pattern {pattern!r} has an unnamed parameter {part!r}"
            raise ConfigurationError(msg)
        if param_type not in CONVERTERS:
            msg = f"Route pattern {pattern!r} uses unknown converter {param_type!r}"
            raise ConfigurationError(msg)
        if param_type == "path" and index != len(parts) - 1:
            msg = f"Route pattern {pattern!r}: catch-all {part!r} must be the last segment"
            raise ConfigurationError(msg)
        segments.append(
            PathSegment(value=part, is_param=True, param_name=name, param_type=param_type)
        )
    return segments


def format_pattern(pattern: str, params: dict[str, str]) -> str | None:
    """Fill a pattern's parameters from *params*.

    Returns ``None`` when a parameter has no value.
    """
    parts: list[str] = []
    for seg in parse_pattern(pattern):
        if not seg.is_param:
            parts.append(seg.value)
        elif seg.param_name in params:
            parts.append(params[seg.param_name])
        else:
            return None
    return "/" + "/".join(parts)


class _TrieNode[T]:
    """A node in the pattern trie."""

    __slots__ = ("catch_all", "children", "data", "has_data", "param_children")

    def __init__(self) -> None:
        # Static segment children: "blog" -> node
        self.children: dict[str, _TrieNode[T]] = {}
        # Parameter children keyed by (name, type), tried in definition order
        self.param_children: dict[tuple[str, str], _ParamEdge[T]] = {}
        # Catch-all edge (path converter)
        self.catch_all: _CatchAllEdge[T] | None = None
        self.data: T | None = None
        self.has_data = False


@dataclass(slots=True)
class _ParamEdge[T]:
    """A parameter edge in the trie."""

    param_name: str
    regex: re.Pattern[str]
    node: _TrieNode[T] = field(default_factory=_TrieNode)


@dataclass(slots=True)
class _CatchAllEdge[T]:
    """A catch-all edge — consumes the remaining path."""

    param_name: str
    pattern: str
    data: T


class Trie[T]:
    """Maps request paths to the most specific registered pattern.

    At each segment a static child beats a parameter, and a parameter
    beats a catch-all.

    Usage::

        trie = Trie()
        trie.define("/blog/:base", entry)
        found = trie.match("/blog/hello")
        found.data, found.params  # entry, {"base": "hello"}
    """

    __slots__ = ("_patterns", "_root")

    def __init__(self) -> None:
        self._root: _TrieNode[T] = _TrieNode()
        self._patterns: list[str] = []

    @property
    def patterns(self) -> list[str]:
        """Registered patterns, in definition order."""
        return list(self._patterns)

    def define(self, pattern: str, data: T) -> None:
        """Register *pattern*, attaching *data* to its terminal node."""
        node = self._root
        for seg in parse_pattern(pattern):
            name = seg.param_name or ""
            if seg.param_type == "path" and seg.is_param:
                if node.catch_all is not None:
                    msg = (
                        f"Route pattern {pattern!r} conflicts with "
                        f"{node.catch_all.pattern!r}"
                    )
                    raise ConfigurationError(msg)
                node.catch_all = _CatchAllEdge(param_name=name, pattern=pattern, data=data)
                self._patterns.append(pattern)
                return

            if seg.is_param:
                key = (name, seg.param_type)
                if key not in node.param_children:
                    node.param_children[key] = _ParamEdge(
                        param_name=name,
                        regex=re.compile(f"^{CONVERTERS[seg.param_type]}$"),
                    )
                node = node.param_children[key].node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        if node.has_data:
            msg = f"Route pattern {pattern!r} is defined more than once"
            raise ConfigurationError(msg)
        node.data = data
        node.has_data = True
        self._patterns.append(pattern)

    def match(self, path: str) -> TrieMatch[T] | None:
        """Look up *path*. Returns ``None`` if no pattern matches."""
        parts = [p for p in path.split("?", 1)[0].strip("/").split("/") if p]
        return self._match_node(self._root, parts, 0, {})

    def _match_node(
        self,
        node: _TrieNode[T],
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> TrieMatch[T] | None:
        """Recursively match path parts against the trie."""
        # All parts consumed — match if a pattern ends here
        if index == len(parts):
            if node.has_data:
                return TrieMatch(data=node.data, params=params)
            return None

        part = parts[index]

        # 1. Static child (exact match)
        if part in node.children:
            result = self._match_node(node.children[part], parts, index + 1, params)
            if result is not None:
                return result

        # 2. Parameter children
        for edge in node.param_children.values():
            if edge.regex.match(part):
                result = self._match_node(
                    edge.node, parts, index + 1, {**params, edge.param_name: part}
                )
                if result is not None:
                    return result

        # 3. Catch-all
        if node.catch_all is not None:
            remaining = "/".join(parts[index:])
            return TrieMatch(
                data=node.catch_all.data,
                params={**params, node.catch_all.param_name: remaining},
            )

        return None
