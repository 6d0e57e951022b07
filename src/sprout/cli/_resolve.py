"""Pod construction from CLI arguments.

Shared by ``sprout render`` and ``sprout routes``: loads ``podspec.yaml``
from ``--root``, applies flag overrides, and configures logging.
"""

import argparse
import logging
import sys
from typing import NoReturn

from sprout.config import PodConfig, load_config
from sprout.errors import SproutError
from sprout.pod import Pod


def fail(message: str) -> NoReturn:
    """Print a user-friendly error to stderr and exit 1."""
    print(f"Error: {message}", file=sys.stderr)
    raise SystemExit(1)


def load_pod(args: argparse.Namespace, **overrides: object) -> Pod:
    """Build a Pod for the command's ``--root`` / ``--base-url`` flags."""
    try:
        config = load_config(
            args.root,
            base_url=args.base_url,
            log_level=args.log_level,
            **overrides,
        )
    except SproutError as exc:
        fail(str(exc))
    configure_logging(config)
    return Pod(config)


def configure_logging(config: PodConfig) -> None:
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
