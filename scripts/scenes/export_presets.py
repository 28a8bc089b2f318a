from __future__ import annotations

import argparse
import logging
from pathlib import Path

from vistas.logging_config import setup_logging
from vistas.scenes.config import save_scene_config
from vistas.scenes.presets import PRESETS

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_OUTPUT_DIR = PROJECT_ROOT / "data" / "scenes"

logger = logging.getLogger("vistas.scripts.export_presets")


def export_presets(output_dir: str | Path = DEFAULT_OUTPUT_DIR) -> list[Path]:
    written: list[Path] = []
    for name, config in sorted(PRESETS.items()):
        path = save_scene_config(config, Path(output_dir) / f"{name}.json")
        logger.info(f"Saved preset '{name}' to: {path}")
        written.append(path)
    return written


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Write every built-in scene preset as an editable JSON config."
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=str(DEFAULT_OUTPUT_DIR),
        help="Directory for the exported JSON files.",
    )
    return parser


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()
    setup_logging()
    export_presets(args.output_dir)


if __name__ == "__main__":
    main()
