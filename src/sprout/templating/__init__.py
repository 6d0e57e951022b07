"""Templating — kida environment, filters, and document rendering."""

from sprout.templating.filters import BUILTIN_FILTERS, gettext, localize, resolve, to_json
from sprout.templating.integration import (
    create_environment,
    render_bindings,
    render_document,
    source_loader,
)

__all__ = [
    "BUILTIN_FILTERS",
    "create_environment",
    "gettext",
    "localize",
    "render_bindings",
    "render_document",
    "resolve",
    "source_loader",
    "to_json",
]
