"""Platform bookkeeping and environment detection for mobile-app tooling."""

from mobkit.config import DEFAULT_LAYOUT, RegistryLayout, load_layout
from mobkit.environment import (
    check_android,
    check_ios,
    detect_project_platforms,
    host_platform,
    is_on_linux,
    is_on_mac,
    is_on_windows,
)
from mobkit.errors import (
    ManifestParseError,
    ManifestWriteError,
    MobkitError,
    PlatformEnumerationError,
    ScriptExecutionError,
)
from mobkit.models.platforms import PlatformEntry, PlatformManifest
from mobkit.registry import get_platform_versions, remove, save
from mobkit.tools import list_platforms

__all__ = [
    "DEFAULT_LAYOUT",
    "ManifestParseError",
    "ManifestWriteError",
    "MobkitError",
    "PlatformEntry",
    "PlatformEnumerationError",
    "PlatformManifest",
    "RegistryLayout",
    "ScriptExecutionError",
    "check_android",
    "check_ios",
    "detect_project_platforms",
    "get_platform_versions",
    "host_platform",
    "is_on_linux",
    "is_on_mac",
    "is_on_windows",
    "list_platforms",
    "load_layout",
    "remove",
    "save",
]
