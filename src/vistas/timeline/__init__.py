from vistas.timeline.recorder import build_visual_frame, run_timeline, snapshot_row

__all__ = ["build_visual_frame", "run_timeline", "snapshot_row"]
