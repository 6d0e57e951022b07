"""Content sources — where a document's raw YAML comes from.

A *source* turns a pod path (``/content/pages/home.yaml``) into text.
The document layer only sees the ``ContentSource`` protocol and never
assumes which backend it is talking to:

- ``FileSystemSource``: a pod checked out on disk (CLI, tests)
- ``HttpSource``: a pod served over HTTP
- ``MemorySource``: an in-memory pod (embedding, tests)

Every backend reports failure as ``FetchError``.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

import anyio
import httpx

from sprout.config import PodConfig
from sprout.errors import FetchError

logger = logging.getLogger("sprout.sources")


@runtime_checkable
class ContentSource(Protocol):
    """A source that can produce the raw text stored at a pod path."""

    async def fetch(self, path: str) -> str: ...


class FileSystemSource:
    """Read pod files from a directory.

    Security: resolves symlinks and verifies the final path is within
    the pod root to prevent path traversal.
    """

    __slots__ = ("_root",)

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    async def fetch(self, path: str) -> str:
        file_path = (self._root / path.lstrip("/")).resolve()
        if not file_path.is_relative_to(self._root):
            raise FetchError(path, "outside the pod root")
        logger.debug("Reading %s", file_path)
        try:
            return await anyio.Path(file_path).read_text(encoding="utf-8")
        except OSError as exc:
            raise FetchError(path, exc.strerror or str(exc)) from exc


class HttpSource:
    """Fetch pod files over HTTP, relative to *base_url*.

    Pass *client* to share a connection pool (or a mock transport in
    tests); otherwise the source owns its client and ``aclose()`` closes it.
    """

    __slots__ = ("_base_url", "_client", "_owns_client")

    def __init__(self, base_url: str, *, client: httpx.AsyncClient | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=30.0)

    async def fetch(self, path: str) -> str:
        url = f"{self._base_url}/{path.lstrip('/')}"
        logger.debug("GET %s", url)
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(path, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise FetchError(path, str(exc) or type(exc).__name__) from exc
        return response.text

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class MemorySource:
    """Serve pod files from an in-memory ``{path: text}`` mapping."""

    __slots__ = ("_files",)

    def __init__(self, files: Mapping[str, str]) -> None:
        self._files = dict(files)

    async def fetch(self, path: str) -> str:
        try:
            return self._files[path]
        except KeyError:
            raise FetchError(path, "no such file") from None


def source_for(config: PodConfig) -> ContentSource:
    """Pick the backend a pod config asks for."""
    if config.base_url:
        return HttpSource(config.base_url)
    return FileSystemSource(config.root)
