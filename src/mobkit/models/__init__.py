from .platforms import PlatformEntry, PlatformManifest

__all__ = ["PlatformEntry", "PlatformManifest"]
