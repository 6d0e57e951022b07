"""``sprout routes`` — list the routes manifest.

Resolves the manifest and prints a table of PATTERN and TARGET, where a
collection target shows where the ``base`` parameter lands.
"""

import argparse

import anyio

from sprout.cli._resolve import fail, load_pod
from sprout.errors import SproutError
from sprout.pod import Pod
from sprout.routing import COLLECTION_PARAM, RouteEntry


async def _load_routes(pod: Pod) -> list[RouteEntry]:
    async with pod:
        await pod.routes.resolve()
        return pod.routes.routes


def run_routes(args: argparse.Namespace) -> None:
    """Print the routes registered by the pod's manifest."""
    pod = load_pod(args)
    try:
        routes = anyio.run(_load_routes, pod)
    except SproutError as exc:
        fail(str(exc))

    if not routes:
        print("No routes registered.")
        return

    suffix = pod.routes.document_suffix
    rows: list[tuple[str, str]] = []
    for entry in routes:
        if entry.doc is not None:
            target = entry.doc.path
        else:
            target = f"{entry.collection}<{COLLECTION_PARAM}>{suffix}"
        rows.append((entry.pattern, target))

    max_pattern = max(max(len(r[0]) for r in rows), 7)  # "PATTERN" header
    fmt = f"{{:<{max_pattern}}}  {{}}"
    print(fmt.format("PATTERN", "TARGET"))
    sep_len = max_pattern + 2 + max(len(r[1]) for r in rows)
    print("-" * min(sep_len, 80))
    for pattern, target in rows:
        print(fmt.format(pattern, target))
