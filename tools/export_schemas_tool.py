"""
export_schemas_tool.py

Writes the JSON-Schema of every registered widget as one JSON document keyed
by widget type. Structured-output callers feed these schemas to the model
that produces widget descriptors.

Usage:
    python -m tools.export_schemas_tool --out widget-schemas.json
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from generators import export_json_schemas
from tools.settings import configure_logging, load_settings

logger = logging.getLogger(__name__)


def export_schemas(output_path: Path) -> Path:
    schemas = export_json_schemas()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(schemas, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.info("wrote %d widget schemas to %s", len(schemas), output_path)
    return output_path


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Export widget JSON-Schemas.")
    parser.add_argument("--out", default="widget-schemas.json",
                        help="output file; relative paths land in WIDGETS_OUTPUT_DIR")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings)
    output = export_schemas(settings.resolve_output(args.out))
    print(f"Wrote {output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
