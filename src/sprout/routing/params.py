"""Path parameter parsing for route patterns.

Built-in converters for pattern segments like ``{id:int}``. Captured
values stay strings; a converter only decides which segments match.
"""

# regex_pattern for each supported converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}

# Parameter name used by a bare ``*`` catch-all.
DEFAULT_CATCH_ALL = "path"
