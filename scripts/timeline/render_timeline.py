from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from vistas.logging_config import setup_logging
from vistas.scenes.config import SceneConfig, load_scene_config
from vistas.scenes.presets import PRESETS, get_preset
from vistas.timeline.recorder import run_timeline

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_OUTPUT_DIR = PROJECT_ROOT / "data" / "timelines"

logger = logging.getLogger("vistas.scripts.render_timeline")


def _resolve_config(preset: str | None, config_path: str | None) -> SceneConfig:
    if config_path is not None:
        return load_scene_config(config_path)
    return get_preset(preset or "crystal_cave")


def render_timeline(
    *,
    preset: str | None,
    config_path: str | None,
    seconds: float,
    fps: int,
    seed: int | None,
    output: str | None,
) -> Path:
    config = _resolve_config(preset, config_path)
    df = run_timeline(config, seconds=seconds, fps=fps, seed=seed)

    if output is None:
        DEFAULT_OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        path = DEFAULT_OUTPUT_DIR / f"{config.name}_{fps}fps_{seconds:g}s.csv"
    else:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)

    if path.suffix == ".json":
        payload = {
            "scene": config.name,
            "fps": fps,
            "seconds": seconds,
            "frames": json.loads(df.to_json(orient="records")),
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    else:
        df.to_csv(path, index=False)

    logger.info(f"Wrote {len(df)} frames for '{config.name}' to: {path}")
    return path


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a scene on a fixed-step clock and write a per-frame timeline."
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--preset",
        type=str,
        choices=sorted(PRESETS),
        default=None,
        help="Built-in scene preset (default: crystal_cave).",
    )
    source.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a scene config JSON file.",
    )
    parser.add_argument(
        "--seconds",
        type=float,
        default=10.0,
        help="Length of the run in seconds.",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=60,
        help="Frames per second for the fixed-step clock.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Seed for particle spawning.",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output path (.csv or .json). Defaults to data/timelines/.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)
    render_timeline(
        preset=args.preset,
        config_path=args.config,
        seconds=args.seconds,
        fps=args.fps,
        seed=args.seed,
        output=args.output,
    )


if __name__ == "__main__":
    main()
