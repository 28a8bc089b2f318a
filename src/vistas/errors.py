from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when scene or component parameters are unusable."""


class AssetLoadError(RuntimeError):
    """Raised by the asset handoff when a loader fails."""

    def __init__(self, url: str, cause: BaseException | None = None) -> None:
        self.url = url
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to load asset {url}{detail}")


__all__ = ["ConfigurationError", "AssetLoadError"]
