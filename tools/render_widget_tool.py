"""
render_widget_tool.py

Renders widget descriptors from a JSON file. The file holds one descriptor
object or a list of them; each descriptor carries its ``type`` tag next to
the props.

Usage:
    python -m tools.render_widget_tool bar.json --out bar.svg
    python -m tools.render_widget_tool batch.json --out rendered/widget.svg
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from core.errors import WidgetError
from generators import generate_many
from tools.settings import configure_logging, load_settings

logger = logging.getLogger(__name__)


def load_descriptors(path: Path) -> List[Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    return data if isinstance(data, list) else [data]


def _numbered(path: Path, index: int) -> Path:
    return path.with_name(f"{path.stem}-{index}{path.suffix}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Render widget descriptors to SVG/HTML.")
    parser.add_argument("descriptor", type=Path, help="JSON file with one descriptor or a list")
    parser.add_argument("--out", default=None,
                        help="output file (numbered per descriptor for lists); stdout when omitted")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings)
    descriptors = load_descriptors(args.descriptor)
    results = generate_many(descriptors)

    failures = 0
    for index, result in enumerate(results):
        if isinstance(result, WidgetError):
            failures += 1
            logger.error("descriptor %d failed: %s", index, result)
            continue
        if args.out is None:
            print(result)
            continue
        target = settings.resolve_output(args.out)
        if len(results) > 1:
            target = _numbered(target, index)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(result, encoding="utf-8")
        logger.info("wrote %s", target)
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
