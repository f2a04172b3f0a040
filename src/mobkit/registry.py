"""Bookkeeping of the platforms installed into a project.

The record lives in ``<project_root>/platforms/platforms.json`` as a JSON
object mapping platform name to version, where the version may be a release
number (``"3.4.0"``), a local path or a git URL. Projects created before the
manifest existed are handled by asking each installed platform for its
version through its ``cordova/version`` script.

Every call re-reads the file; nothing is cached in memory.
"""

from __future__ import annotations

import json
import logging
import os
import re
import subprocess
import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from .config import DEFAULT_LAYOUT, RegistryLayout
from .errors import ManifestParseError, ManifestWriteError, ScriptExecutionError
from .models.platforms import PlatformEntry, PlatformManifest
from .tools import list_platforms

logger = logging.getLogger(__name__)

_LINE_BREAKS = re.compile(r"\r?\n|\r")


# ---------------------------------------------------------------------------
# Manifest I/O
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ManifestRead:
    """Outcome of reading a manifest: exactly one of *manifest* / *error* is set."""

    path: Path
    manifest: PlatformManifest | None = None
    error: ManifestParseError | None = None

    @property
    def ok(self) -> bool:
        return self.manifest is not None

    def unwrap(self) -> PlatformManifest:
        """Return the manifest or raise the error that prevented reading it."""
        if self.manifest is None:
            raise self.error or ManifestParseError(self.path, "no manifest read")
        return self.manifest


def read_manifest(path: str | os.PathLike[str]) -> ManifestRead:
    """Read *path* without raising; failures are returned in ``error``."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ManifestRead(path, error=ManifestParseError(path, "file does not exist"))
    except (OSError, UnicodeDecodeError) as exc:
        return ManifestRead(path, error=ManifestParseError(path, str(exc)))

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        return ManifestRead(path, error=ManifestParseError(path, f"invalid JSON ({exc})"))

    try:
        manifest = PlatformManifest.model_validate(data)
    except ValidationError as exc:
        reason = f"expected an object of platform -> version strings ({exc.error_count()} error(s))"
        return ManifestRead(path, error=ManifestParseError(path, reason))
    return ManifestRead(path, manifest=manifest)


def load_manifest(path: str | os.PathLike[str]) -> PlatformManifest:
    """Return the manifest at *path*, raising :class:`ManifestParseError` on failure."""
    return read_manifest(path).unwrap()


def write_manifest(path: str | os.PathLike[str], manifest: PlatformManifest, indent: int = 4) -> None:
    path = Path(path)
    payload = json.dumps(manifest.root, indent=indent, ensure_ascii=False)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise ManifestWriteError(path, exc.strerror or str(exc)) from exc
    logger.debug("Wrote %d platform(s) to %s", len(manifest), path)


# ---------------------------------------------------------------------------
# Version scripts
# ---------------------------------------------------------------------------


def clean_version(raw: str) -> str:
    """Strip every line break from a version script's output.

    The scripts report through ``console.log``-style printing, which appends
    newlines that are not part of the version.
    """
    return _LINE_BREAKS.sub("", raw)


def run_version_script(platform: str, script: Path, timeout: float | None = None) -> str:
    """Run *script* with no arguments and return its cleaned stdout."""
    try:
        result = subprocess.run(
            [str(script)],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        raise ScriptExecutionError(platform, script, f"timed out after {timeout}s") from None
    except OSError as exc:
        raise ScriptExecutionError(platform, script, exc.strerror or str(exc)) from exc
    except ValueError as exc:
        # UnicodeDecodeError included: stdout must decode in the locale encoding.
        raise ScriptExecutionError(platform, script, f"undecodable output ({exc})") from exc

    if result.returncode != 0:
        raise ScriptExecutionError(
            platform,
            script,
            f"exited with status {result.returncode}",
            returncode=result.returncode,
            stderr=result.stderr.strip(),
        )
    version = clean_version(result.stdout)
    logger.debug("Version script for %s reported %r", platform, version)
    return version


def versions_from_filesystem(
    project_root: str | os.PathLike[str], layout: RegistryLayout = DEFAULT_LAYOUT
) -> list[PlatformEntry]:
    """Ask every installed platform for its version.

    Only versions are known this way, not the source (folder, git URL) a
    platform was added from. All scripts must succeed; once one fails no
    further script is started, the ones already running finish, and the
    failure is raised.
    """
    platforms = list_platforms(project_root, layout)
    if not platforms:
        return []

    failed = threading.Event()

    def _run(platform: str, script: Path, timeout: float | None) -> str | None:
        if failed.is_set():
            logger.debug("Skipping version script for %s after an earlier failure", platform)
            return None
        try:
            return run_version_script(platform, script, timeout)
        except Exception:
            failed.set()
            raise

    with ThreadPoolExecutor(max_workers=min(len(platforms), layout.max_workers)) as pool:
        futures = [
            pool.submit(
                _run,
                platform,
                layout.version_script_path(project_root, platform),
                layout.script_timeout,
            )
            for platform in platforms
        ]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        for future in pending:
            future.cancel()
        for future in futures:
            exc = future.exception() if future in done else None
            if exc is not None:
                raise exc

    return [PlatformEntry(platform=p, version=f.result() or "") for p, f in zip(platforms, futures)]


# ---------------------------------------------------------------------------
# Public operations
# ---------------------------------------------------------------------------


def get_platform_versions(
    project_root: str | os.PathLike[str], layout: RegistryLayout = DEFAULT_LAYOUT
) -> list[PlatformEntry]:
    """Return the installed platforms and their versions.

    Reads the manifest when there is a valid one, otherwise derives the list
    from the platform directories and their version scripts.
    """
    result = read_manifest(layout.manifest_path(project_root))
    if result.manifest is not None:
        return result.manifest.entries()

    logger.info("%s; falling back to installed platform directories", result.error)
    return versions_from_filesystem(project_root, layout)


def _load_or_empty(path: Path) -> PlatformManifest:
    result = read_manifest(path)
    if result.manifest is None and not path.exists():
        return PlatformManifest()
    # Existing but broken manifests are reported, not overwritten.
    return result.unwrap()


def save(
    project_root: str | os.PathLike[str],
    platform: str,
    version: str,
    layout: RegistryLayout = DEFAULT_LAYOUT,
) -> None:
    """Record ``platform@version`` in the manifest, creating it if needed."""
    # Read-modify-write with no lock: concurrent writers on one project can
    # lose updates (last writer wins).
    path = layout.manifest_path(project_root)
    manifest = _load_or_empty(path)
    manifest.set(platform, version)
    write_manifest(path, manifest, indent=layout.indent)
    logger.info("Saved %s@%s to %s", platform, version, path)


def remove(project_root: str | os.PathLike[str], platform: str, layout: RegistryLayout = DEFAULT_LAYOUT) -> None:
    """Drop *platform* from the manifest. A missing manifest is left missing."""
    # Same unlocked read-modify-write hazard as save().
    path = layout.manifest_path(project_root)
    if not path.exists():
        return
    manifest = load_manifest(path)
    if not manifest.discard(platform):
        return
    write_manifest(path, manifest, indent=layout.indent)
    logger.info("Removed %s from %s", platform, path)
