"""``sprout render`` — render one page.

Resolves the request path through the pod's routes manifest and writes
the rendered HTML to stdout or ``--out``. On any failure nothing is
written and the command exits 1.
"""

import argparse
import sys
from pathlib import Path

import anyio
from kida import TemplateError

from sprout.cli._resolve import fail, load_pod
from sprout.errors import SproutError
from sprout.pod import Pod


async def _render(pod: Pod, path: str) -> str:
    async with pod:
        return await pod.render(path)


def run_render(args: argparse.Namespace) -> None:
    """Render ``args.path`` and write it out."""
    pod = load_pod(args, strict_cycles=args.strict_cycles)
    try:
        html = anyio.run(_render, pod, args.path)
    except (SproutError, TemplateError) as exc:
        fail(str(exc))

    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(html, encoding="utf-8")
        print(f"{args.path} -> {out}", file=sys.stderr)
    else:
        sys.stdout.write(html)
