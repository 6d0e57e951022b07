"""Documents — YAML-backed page content and recursive reference resolution."""

from sprout.documents.context import ResolutionContext
from sprout.documents.document import BUILTIN_SIGIL, Document, DocumentState
from sprout.documents.references import DOC_TAG, STATIC_TAG, StaticAsset, Url, load_fields
from sprout.documents.walk import deep_resolve, iter_references

__all__ = [
    "BUILTIN_SIGIL",
    "DOC_TAG",
    "STATIC_TAG",
    "Document",
    "DocumentState",
    "ResolutionContext",
    "StaticAsset",
    "Url",
    "deep_resolve",
    "iter_references",
    "load_fields",
]
