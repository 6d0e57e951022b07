"""Routing — the routes manifest compiled into a pattern trie.

Routes are registered once, when the manifest document resolves, and
looked up per request path in O(path-depth).
"""

from sprout.routing.route import COLLECTION_PARAM, RouteEntry
from sprout.routing.table import RouteTable
from sprout.routing.trie import PathSegment, Trie, TrieMatch, format_pattern, parse_pattern

__all__ = [
    "COLLECTION_PARAM",
    "PathSegment",
    "RouteEntry",
    "RouteTable",
    "Trie",
    "TrieMatch",
    "format_pattern",
    "parse_pattern",
]
