from vistas.driver.clock import FixedStepClock, FrameClock, FrameTime
from vistas.driver.context import PropSlot, SceneContext
from vistas.driver.loop import FrameSnapshot, SceneDriver
from vistas.driver.viewport import Viewport

__all__ = [
    "FixedStepClock",
    "FrameClock",
    "FrameTime",
    "PropSlot",
    "SceneContext",
    "FrameSnapshot",
    "SceneDriver",
    "Viewport",
]
