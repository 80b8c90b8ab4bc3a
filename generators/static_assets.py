"""
static_assets.py

Reference images shipped with the package. The asset is inlined as a
base64 ``data:`` URI so the fragment is self-contained; nothing is fetched
over the network.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from pathlib import Path

from core.errors import GeneratorInternalError
from formatting.labels import display_text, escape_text, format_number
from generators.registry import WidgetType, register_widget
from schemas.assets import PeriodicTableProps

logger = logging.getLogger(__name__)

ASSET_DIR = Path(__file__).resolve().parent / "assets"
PERIODIC_TABLE_SVG = ASSET_DIR / "periodic-table.svg"


def _read_asset(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        logger.error("cannot read packaged asset %s: %s", path, exc)
        raise GeneratorInternalError(f"missing packaged asset {path.name}") from exc


def svg_data_uri(payload: bytes) -> str:
    return "data:image/svg+xml;base64," + base64.b64encode(payload).decode("ascii")


@register_widget(WidgetType.PERIODIC_TABLE, PeriodicTableProps)
async def generate_periodic_table(props: PeriodicTableProps) -> str:
    payload = await asyncio.to_thread(_read_asset, PERIODIC_TABLE_SVG)
    img = (
        f'<img src="{svg_data_uri(payload)}" alt="{escape_text(props.alt)}"'
        f' width="{format_number(props.width)}" height="{format_number(props.height)}"/>'
    )
    caption = f"<figcaption>{display_text(props.caption)}</figcaption>" if props.caption else ""
    return f"<figure>{img}{caption}</figure>"
