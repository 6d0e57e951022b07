"""Kida environment setup and pod binding.

Creates a kida Environment whose template names are pod paths without
the leading slash, so a document's view (``views/base.html``) names the
pod file ``/views/base.html``. A pod on disk loads views with a
``FileSystemLoader`` at its root; a pod served over HTTP loads them
through the same content source as its documents. The environment is
created once per pod and reused for every render.
"""

from collections.abc import Callable
from typing import Any

import anyio.from_thread
import anyio.to_thread
from kida import Environment, FileSystemLoader, FunctionLoader

from sprout.config import PodConfig
from sprout.documents import Document, ResolutionContext
from sprout.errors import FetchError
from sprout.templating.filters import BUILTIN_FILTERS, pod_globals


def source_loader(context: ResolutionContext) -> FunctionLoader:
    """Load views through *context*'s content source and cache.

    Templates load on the render worker thread, so each fetch is handed
    back to the event loop. An unfetchable view is reported by kida as
    ``TemplateNotFoundError``.
    """

    def load(name: str) -> tuple[str, str] | None:
        path = "/" + name.lstrip("/")
        try:
            return anyio.from_thread.run(context.fetch, path), path
        except FetchError:
            return None

    return FunctionLoader(load)


def create_environment(
    config: PodConfig,
    context: ResolutionContext,
    *,
    filters: dict[str, Callable[..., Any]] | None = None,
    globals_: dict[str, Any] | None = None,
) -> Environment:
    """Create a kida Environment for a pod.

    User-supplied *filters* and *globals_* may override the built-ins.
    """
    if config.base_url:
        loader = source_loader(context)
    else:
        loader = FileSystemLoader(str(config.root))
    env = Environment(loader=loader, autoescape=config.autoescape)

    env.update_filters(BUILTIN_FILTERS)
    if filters:
        env.update_filters(filters)

    for name, value in pod_globals(context).items():
        env.add_global(name, value)
    for name, value in (globals_ or {}).items():
        env.add_global(name, value)

    return env


def render_bindings(doc: Document) -> dict[str, Any]:
    """Per-render context: the page document."""
    return {"doc": doc}


def _render(env: Environment, doc: Document) -> str:
    template = env.get_template(doc.get_view())
    return template.render(render_bindings(doc))


async def render_document(env: Environment, doc: Document) -> str:
    """Load *doc*'s view and render it on a worker thread.

    Running off the event loop lets the ``resolve`` filter and the
    source-backed view loader hand work back to the loop while the
    template waits.
    """
    return await anyio.to_thread.run_sync(_render, env, doc)
