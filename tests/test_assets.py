from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from vistas.errors import AssetLoadError
from vistas.props import AssetSlot, SlotStatus, load_asset, load_asset_async


def test_slot_starts_absent() -> None:
    slot = AssetSlot("models/planet.glb")
    assert slot.status is SlotStatus.PENDING
    assert slot.current() is None
    assert slot.error is None


def test_publish_is_visible_and_only_once() -> None:
    slot = AssetSlot("models/planet.glb")
    mesh = object()

    slot.publish(mesh)

    assert slot.current() is mesh
    assert slot.status is SlotStatus.READY
    with pytest.raises(RuntimeError):
        slot.publish(object())
    with pytest.raises(RuntimeError):
        slot.fail(OSError("late"))


def test_publishing_none_is_rejected() -> None:
    with pytest.raises(ValueError):
        AssetSlot("x.glb").publish(None)


def test_load_failure_is_recorded_and_logged(caplog: pytest.LogCaptureFixture) -> None:
    def broken_loader(url: str) -> object:
        raise OSError(f"no such file: {url}")

    with caplog.at_level(logging.WARNING, logger="vistas"):
        slot = load_asset(broken_loader, "models/missing.glb")

    assert slot.status is SlotStatus.FAILED
    assert slot.current() is None
    assert isinstance(slot.error, AssetLoadError)
    assert isinstance(slot.error.cause, OSError)
    assert "models/missing.glb" in caplog.text
    assert "continuing without it" in caplog.text


def test_loader_returning_none_counts_as_failure() -> None:
    slot = load_asset(lambda url: None, "models/empty.glb")
    assert slot.status is SlotStatus.FAILED


def test_async_load_publishes_without_blocking_caller() -> None:
    release = threading.Event()

    def slow_loader(url: str) -> dict[str, str]:
        release.wait(timeout=5.0)
        return {"url": url}

    with ThreadPoolExecutor(max_workers=1) as executor:
        slot, future = load_asset_async(slow_loader, "models/cactus.glb", executor)
        assert slot.current() is None
        release.set()
        future.result(timeout=5.0)

    assert slot.current() == {"url": "models/cactus.glb"}
    assert slot.status is SlotStatus.READY
