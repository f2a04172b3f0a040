"""Filesystem helpers shared by the registry and the CLI."""

from __future__ import annotations

import logging
import os

from .config import DEFAULT_LAYOUT, RegistryLayout
from .errors import PlatformEnumerationError

logger = logging.getLogger(__name__)


def list_platforms(project_root: str | os.PathLike[str], layout: RegistryLayout = DEFAULT_LAYOUT) -> list[str]:
    """Return the platforms installed under ``<project_root>/platforms``.

    Every non-hidden subdirectory counts as a platform, so the manifest file
    itself is never listed. Names are sorted for a stable order.
    """
    platforms_dir = layout.platforms_path(project_root)
    try:
        entries = list(os.scandir(platforms_dir))
    except FileNotFoundError:
        raise PlatformEnumerationError(platforms_dir, "directory does not exist") from None
    except OSError as exc:
        raise PlatformEnumerationError(platforms_dir, exc.strerror or str(exc)) from exc

    names = sorted(e.name for e in entries if e.is_dir() and not e.name.startswith("."))
    logger.debug("Found %d platform(s) in %s: %s", len(names), platforms_dir, names)
    return names
