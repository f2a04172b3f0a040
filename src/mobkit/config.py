"""Project layout conventions and their optional YAML configuration file."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

_USER_CONFIG = Path.home() / ".config" / "mobkit" / "config.yaml"
_LOCAL_CONFIG_NAME = "mobkit.yaml"


class RegistryLayout(BaseModel):
    """Where a project keeps its platforms, manifest and version scripts."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    platforms_dir: str = "platforms"
    manifest_name: str = "platforms.json"
    # Relative to each platform directory.
    version_script: tuple[str, ...] = ("cordova", "version")
    indent: int = Field(default=4, ge=0)
    max_workers: int = Field(default=4, ge=1)
    # Seconds; None waits for the script indefinitely.
    script_timeout: float | None = Field(default=None, gt=0)

    def platforms_path(self, project_root: str | os.PathLike[str]) -> Path:
        return Path(project_root) / self.platforms_dir

    def manifest_path(self, project_root: str | os.PathLike[str]) -> Path:
        return self.platforms_path(project_root) / self.manifest_name

    def version_script_path(self, project_root: str | os.PathLike[str], platform: str) -> Path:
        return self.platforms_path(project_root).joinpath(platform, *self.version_script)


DEFAULT_LAYOUT = RegistryLayout()


def _layout_from_yaml(path: Path) -> RegistryLayout:
    with open(path, encoding="utf-8") as f:
        raw: Any = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"expected a YAML mapping, got {type(raw).__name__}")
    section = raw.get("layout", raw)
    return RegistryLayout.model_validate(section)


def load_layout(explicit_path: str | os.PathLike[str] | None = None) -> RegistryLayout:
    """Locate and load a layout config YAML. Falls back to the built-in defaults.

    Candidates, in order: *explicit_path*, ``./mobkit.yaml`` and
    ``~/.config/mobkit/config.yaml``. The settings may sit at the top level or
    under a ``layout:`` key.
    """
    candidates: list[Path] = []
    if explicit_path:
        candidates.append(Path(explicit_path))
    candidates += [Path(_LOCAL_CONFIG_NAME), _USER_CONFIG]
    for path in candidates:
        if not path.is_file():
            continue
        try:
            layout = _layout_from_yaml(path)
        except Exception as exc:
            logger.warning("Failed to load layout config %s: %s", path, exc)
            continue
        logger.info("Loaded layout config from %s", path)
        return layout
    return DEFAULT_LAYOUT
