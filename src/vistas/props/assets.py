from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future
from enum import Enum
from typing import Any

from vistas.errors import AssetLoadError

logger = logging.getLogger(__name__)

AssetLoader = Callable[[str], Any]


class SlotStatus(str, Enum):
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


class AssetSlot:
    """One-shot handoff between an asset loader and the frame loop.

    The loader side calls :meth:`publish` or :meth:`fail` once; the frame loop
    polls :meth:`current` every frame and never blocks.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        self._lock = threading.Lock()
        self._asset: Any = None
        self._status = SlotStatus.PENDING
        self._error: AssetLoadError | None = None

    @property
    def status(self) -> SlotStatus:
        return self._status

    @property
    def error(self) -> AssetLoadError | None:
        return self._error

    def current(self) -> Any:
        return self._asset

    def publish(self, asset: Any) -> None:
        if asset is None:
            msg = "cannot publish a missing asset; use fail() instead"
            raise ValueError(msg)
        with self._lock:
            if self._status is not SlotStatus.PENDING:
                msg = f"asset slot for {self.url} already resolved ({self._status.value})"
                raise RuntimeError(msg)
            self._asset = asset
            self._status = SlotStatus.READY
        logger.info(f"Asset ready: {self.url}")

    def fail(self, error: BaseException) -> None:
        wrapped = error if isinstance(error, AssetLoadError) else AssetLoadError(self.url, error)
        with self._lock:
            if self._status is not SlotStatus.PENDING:
                msg = f"asset slot for {self.url} already resolved ({self._status.value})"
                raise RuntimeError(msg)
            self._error = wrapped
            self._status = SlotStatus.FAILED
        logger.warning(f"{wrapped}; continuing without it")


def _resolve(slot: AssetSlot, loader: AssetLoader) -> None:
    logger.info(f"Loading asset: {slot.url}")
    try:
        asset = loader(slot.url)
        if asset is None:
            raise AssetLoadError(slot.url)
    except Exception as exc:
        slot.fail(exc)
        return
    slot.publish(asset)


def load_asset(loader: AssetLoader, url: str, slot: AssetSlot | None = None) -> AssetSlot:
    """Load synchronously; failures are recorded on the slot, not raised."""
    slot = slot or AssetSlot(url)
    _resolve(slot, loader)
    return slot


def load_asset_async(
    loader: AssetLoader,
    url: str,
    executor: Executor,
    slot: AssetSlot | None = None,
) -> tuple[AssetSlot, Future]:
    slot = slot or AssetSlot(url)
    future = executor.submit(_resolve, slot, loader)
    return slot, future


__all__ = [
    "AssetLoader",
    "AssetSlot",
    "SlotStatus",
    "load_asset",
    "load_asset_async",
]
