"""Exception hierarchy for mobkit."""

from __future__ import annotations

from pathlib import Path


class MobkitError(Exception):
    """Base class for all errors raised by mobkit."""


class ManifestParseError(MobkitError):
    """The manifest file is missing, unreadable or not a name -> version object."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read platforms manifest {path}: {reason}")


class ManifestWriteError(MobkitError):
    """The manifest file could not be written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write platforms manifest {path}: {reason}")


class PlatformEnumerationError(MobkitError):
    """The installed platform directories could not be listed."""

    def __init__(self, platforms_dir: Path, reason: str) -> None:
        self.platforms_dir = platforms_dir
        self.reason = reason
        super().__init__(f"Cannot list platforms in {platforms_dir}: {reason}")


class ScriptExecutionError(MobkitError):
    """A platform version script failed to run or exited non-zero."""

    def __init__(
        self,
        platform: str,
        script: Path,
        reason: str,
        *,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.platform = platform
        self.script = script
        self.reason = reason
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Version script for '{platform}' ({script}) failed: {reason}")
