"""Pydantic models for the installed-platforms manifest."""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field, RootModel


class PlatformEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    platform: str
    # A semver ("3.4.0"), a local path or a git URL; never validated.
    version: str

    @property
    def spec(self) -> str:
        """Return the ``platform@version`` descriptor."""
        return f"{self.platform}@{self.version}"


class PlatformManifest(RootModel[dict[str, str]]):
    """Contents of ``platforms/platforms.json``: platform name -> version."""

    root: dict[str, str] = Field(default_factory=dict)

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __contains__(self, platform: object) -> bool:
        return platform in self.root

    def entries(self) -> list[PlatformEntry]:
        """Entries in the manifest's key order."""
        return [PlatformEntry(platform=name, version=version) for name, version in self.root.items()]

    def set(self, platform: str, version: str) -> None:
        self.root[platform] = version

    def discard(self, platform: str) -> bool:
        """Drop *platform*; return whether it was present."""
        return self.root.pop(platform, None) is not None
