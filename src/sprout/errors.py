"""Sprout exception hierarchy.

Shared across sources, documents, routing, and the render pipeline so
every module raises and catches the same types. Nothing in the core
retries or falls back: a failure at any nested reference aborts the
whole page render.
"""


class SproutError(Exception):
    """Base for all sprout-specific errors."""


class ConfigurationError(SproutError):
    """Raised when pod configuration or the routes manifest is invalid."""


class FetchError(SproutError):
    """Raw content for a path could not be fetched."""

    def __init__(self, path: str, detail: str = "") -> None:
        self.path = path
        self.detail = detail
        message = f"Cannot fetch {path!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ParseError(SproutError):
    """A document's YAML could not be parsed."""

    def __init__(self, path: str, detail: str = "") -> None:
        self.path = path
        self.detail = detail
        message = f"Cannot parse {path!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MalformedReferenceError(ParseError):
    """A reference tag is unknown, misplaced, or names an invalid path."""


class CyclicReferenceError(SproutError):
    """A document references itself through a chain of documents.

    Only raised when the pod is configured with ``strict_cycles=True``.
    """

    def __init__(self, chain: tuple[str, ...]) -> None:
        self.chain = chain
        super().__init__("Cyclic document reference: " + " -> ".join(chain))


class NoRouteMatchError(SproutError):
    """No pattern in the routes manifest matches a request path."""

    def __init__(self, path: str, manifest: str = "/routes.yaml") -> None:
        self.path = path
        self.manifest = manifest
        super().__init__(f"No pattern in {manifest} matches -> {path}")
