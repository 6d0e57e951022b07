"""Sprout — render static-site pages from YAML documents.

A pod is a directory of YAML documents, views, and a routes manifest.
Documents reference each other with ``!g.doc`` and static files with
``!g.static``; sprout resolves the whole reference graph before handing
the page document to its view.

Basic usage::

    import anyio
    from sprout import Pod, PodConfig

    pod = Pod(PodConfig(root="site"))
    html = anyio.run(pod.render, "/blog/hello")
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "CyclicReferenceError",
    "Document",
    "FetchError",
    "MalformedReferenceError",
    "NoRouteMatchError",
    "ParseError",
    "Pod",
    "PodConfig",
    "ResolutionContext",
    "RouteTable",
    "SproutError",
    "StaticAsset",
    "load_config",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import sprout`` fast while providing a clean top-level API.
    """
    if name == "Pod":
        from sprout.pod import Pod

        return Pod

    if name in ("PodConfig", "load_config"):
        from sprout import config as _config

        return getattr(_config, name)

    if name in ("Document", "ResolutionContext", "StaticAsset"):
        from sprout import documents as _documents

        return getattr(_documents, name)

    if name == "RouteTable":
        from sprout.routing import RouteTable

        return RouteTable

    if name in (
        "ConfigurationError",
        "CyclicReferenceError",
        "FetchError",
        "MalformedReferenceError",
        "NoRouteMatchError",
        "ParseError",
        "SproutError",
    ):
        from sprout import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
