"""
settings.py

Environment-backed configuration for the command-line tools. Values are read
after ``load_dotenv()`` so a local ``.env`` file can supply them.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

LOG_LEVEL_ENV = "WIDGETS_LOG_LEVEL"
OUTPUT_DIR_ENV = "WIDGETS_OUTPUT_DIR"


@dataclass(frozen=True)
class ToolSettings:
    log_level: str
    output_dir: Path

    def resolve_output(self, name: str | Path) -> Path:
        path = Path(name)
        return path if path.is_absolute() else self.output_dir / path


def load_settings() -> ToolSettings:
    load_dotenv()
    level = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{LOG_LEVEL_ENV}={level!r} is not a logging level")
    return ToolSettings(
        log_level=level,
        output_dir=Path(os.getenv(OUTPUT_DIR_ENV, ".")),
    )


def configure_logging(settings: ToolSettings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
