"""Pod configuration.

PodConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups. ``load_config()`` layers ``podspec.yaml`` and
explicit overrides on top of the defaults.
"""

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from sprout.errors import ConfigurationError

PODSPEC_FILE = "podspec.yaml"
PODSPEC_SECTION = "sprout"
LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass(frozen=True, slots=True)
class PodConfig:
    """Pod configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = PodConfig(root="site", strict_cycles=True)
    """

    # Content
    root: str | Path = "."
    routes_path: str = "/routes.yaml"
    base_url: str | None = None  # Fetch over HTTP instead of the filesystem
    document_suffix: str = ".yaml"  # Appended to collection route targets

    # Views
    default_view: str = "/views/base.html"
    views_prefix: str = "/views"  # Document-side namespace for views
    template_prefix: str = "views"  # Template loader namespace it maps to
    autoescape: bool = True

    # Resolution
    strict_cycles: bool = False  # Raise CyclicReferenceError instead of short-circuiting

    # Logging
    log_level: str = "warning"


def load_config(root: str | Path = ".", **overrides: Any) -> PodConfig:
    """Load PodConfig from ``<root>/podspec.yaml``, then non-None overrides.

    Only the top-level ``sprout:`` mapping of the podspec is read; the rest
    of the file belongs to other tools, and it may not set ``root``.
    ``log_level`` must be one of ``LOG_LEVELS`` (any case).
    """
    data: dict[str, Any] = {}
    podspec = Path(root) / PODSPEC_FILE
    if podspec.exists():
        try:
            raw = yaml.safe_load(podspec.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            msg = f"Invalid {PODSPEC_FILE}: {exc}"
            raise ConfigurationError(msg) from exc
        if not isinstance(raw, dict):
            msg = f"Invalid {PODSPEC_FILE}: expected a mapping, got {type(raw).__name__}"
            raise ConfigurationError(msg)
        section = raw.get(PODSPEC_SECTION) or {}
        if not isinstance(section, dict):
            msg = f"Invalid {PODSPEC_FILE}: '{PODSPEC_SECTION}' must be a mapping"
            raise ConfigurationError(msg)
        if "root" in section:
            # The podspec lives in the root, so it cannot relocate it.
            msg = f"Invalid {PODSPEC_FILE}: 'root' cannot be set in the podspec"
            raise ConfigurationError(msg)
        data.update(section)

    data.update({k: v for k, v in overrides.items() if v is not None})
    data.setdefault("root", root)

    known = {f.name for f in dataclasses.fields(PodConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        msg = f"Unknown config option(s): {', '.join(unknown)}"
        raise ConfigurationError(msg)

    if "log_level" in data:
        level = data["log_level"]
        if not isinstance(level, str) or level.lower() not in LOG_LEVELS:
            msg = f"Invalid log_level {level!r}: expected one of {', '.join(LOG_LEVELS)}"
            raise ConfigurationError(msg)
        data["log_level"] = level.lower()
    return PodConfig(**data)
