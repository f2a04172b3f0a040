"""Environment detection: native project folders and the host operating system."""

from __future__ import annotations

import os
import sys

_GRADLE_WRAPPER = ("android", "bin", "gradlew")
_IOS_DIR = "ios"


def _exists(path: str) -> bool:
    # os.path.exists() reports False for any OSError, permission denied included.
    return os.path.exists(path)


def check_android(root: str | os.PathLike[str]) -> bool:
    """Return ``True`` when *root* holds an Android project (``android/bin/gradlew``)."""
    return _exists(os.path.join(root, *_GRADLE_WRAPPER))


def check_ios(root: str | os.PathLike[str]) -> bool:
    """Return ``True`` when *root* has an ``ios`` folder."""
    return _exists(os.path.join(root, _IOS_DIR))


def is_on_windows() -> bool:
    return sys.platform.startswith("win")


def is_on_mac() -> bool:
    return sys.platform == "darwin"


def is_on_linux() -> bool:
    return sys.platform == "linux"


def host_platform() -> str | None:
    """Return ``"windows"``, ``"mac"`` or ``"linux"``; ``None`` for any other host."""
    if is_on_windows():
        return "windows"
    if is_on_mac():
        return "mac"
    if is_on_linux():
        return "linux"
    return None


def detect_project_platforms(root: str | os.PathLike[str]) -> list[str]:
    """Native project folders found under *root*, as ``["android", "ios"]`` or a subset."""
    found = []
    if check_android(root):
        found.append("android")
    if check_ios(root):
        found.append("ios")
    return found
