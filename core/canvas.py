"""
canvas.py

SVG canvas builder and the ``Frame`` rectangle used for plot-area layout.

A ``Canvas`` is created by one generator call, receives drawing calls in
order (later calls paint over earlier ones) and is consumed by ``finalize``.
It must not be shared between widgets or reused after finalizing.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from core.errors import GeneratorInternalError, InvalidDimensionsError
from core.text_layout import title_band_height, wrap_text, wrap_title
from core.theme import (
    COLORS,
    FONT,
    LABEL_AVG_CHAR_WIDTH_PX,
    LINE_HEIGHT_EM,
    PADDING,
    STROKE,
    TITLE_TOP_PADDING_PX,
)
from formatting.labels import display_text, escape_text, format_number

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


# =============================================================================
# FRAME
# =============================================================================

@dataclass(frozen=True)
class Frame:
    """Pixel rectangle reserved for plottable content."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2

    @property
    def center_y(self) -> float:
        return self.top + self.height / 2

    @classmethod
    def inset(
        cls,
        canvas_width: float,
        canvas_height: float,
        *,
        top: float,
        right: float,
        bottom: float,
        left: float,
        title_band: float = 0.0,
    ) -> "Frame":
        """
        Derive the plot frame from the declared canvas size.

        The title band sits above ``top`` padding; the frame begins below it.
        """
        width = canvas_width - left - right
        height = canvas_height - top - bottom - title_band
        if width <= 0 or height <= 0:
            logger.error(
                "frame collapsed: canvas=%sx%s padding=(%s,%s,%s,%s) title_band=%s",
                canvas_width, canvas_height, top, right, bottom, left, title_band,
            )
            raise InvalidDimensionsError(
                f"canvas {canvas_width}x{canvas_height} leaves no room for the plot area"
            )
        return cls(left=left, top=top + title_band, width=width, height=height)


# =============================================================================
# CANVAS
# =============================================================================

def _attrs(**attributes: Any) -> str:
    """Render keyword attributes in call order, skipping ``None`` values."""
    parts = []
    for key, value in attributes.items():
        if value is None:
            continue
        name = "class" if key == "css_class" else key.rstrip("_").replace("_", "-")
        if isinstance(value, bool):
            raise GeneratorInternalError(f"boolean attribute value for {name}")
        if isinstance(value, (int, float)):
            rendered = format_number(value)
        else:
            rendered = escape_text(str(value))
        parts.append(f' {name}="{rendered}"')
    return "".join(parts)


def points_attr(points: Sequence[Point]) -> str:
    return " ".join(f"{format_number(x)},{format_number(y)}" for x, y in points)


def polar(cx: float, cy: float, r: float, degrees: float) -> Point:
    """Point at ``degrees`` clockwise from the +x axis (SVG y grows downward)."""
    radians = math.radians(degrees)
    return cx + r * math.cos(radians), cy + r * math.sin(radians)


def sector_path(cx: float, cy: float, r: float, start_deg: float, end_deg: float) -> str:
    """
    Path data for a pie sector swept clockwise from ``start_deg`` to
    ``end_deg``. A full turn is drawn as two half arcs.
    """
    sweep = end_deg - start_deg
    if sweep >= 360:
        top_x, top_y = polar(cx, cy, r, start_deg)
        bottom_x, bottom_y = polar(cx, cy, r, start_deg + 180)
        return (
            f"M {format_number(top_x)} {format_number(top_y)} "
            f"A {format_number(r)} {format_number(r)} 0 1 1 {format_number(bottom_x)} {format_number(bottom_y)} "
            f"A {format_number(r)} {format_number(r)} 0 1 1 {format_number(top_x)} {format_number(top_y)} Z"
        )
    x1, y1 = polar(cx, cy, r, start_deg)
    x2, y2 = polar(cx, cy, r, end_deg)
    large_arc = 1 if sweep > 180 else 0
    return (
        f"M {format_number(cx)} {format_number(cy)} L {format_number(x1)} {format_number(y1)} "
        f"A {format_number(r)} {format_number(r)} 0 {large_arc} 1 {format_number(x2)} {format_number(y2)} Z"
    )


class Canvas:
    """
    Ordered accumulator of SVG elements.

    Usage:
        canvas = Canvas(400, 300, id_prefix="barChart")
        canvas.draw_line(0, 0, 10, 10, stroke="#000")
        svg = canvas.finalize()
    """

    def __init__(self, width: float, height: float, *, id_prefix: str,
                 font_size: float = FONT["size_small"]):
        self.width = width
        self.height = height
        self.id_prefix = id_prefix
        self.font_size = font_size
        self._defs: List[str] = []
        self._body: List[str] = []
        self._open_groups = 0
        self._clip_count = 0
        self._finalized = False

    # ------------------------------------------------------------------ #
    # Bookkeeping
    # ------------------------------------------------------------------ #

    def _append(self, fragment: str) -> None:
        if self._finalized:
            raise GeneratorInternalError("canvas used after finalize()")
        self._body.append(fragment)

    def add_def(self, fragment: str) -> None:
        if self._finalized:
            raise GeneratorInternalError("canvas used after finalize()")
        self._defs.append(fragment)

    def add_arrow_marker(self, name: str, color: str, size: float = 6) -> str:
        """Define an arrowhead marker and return its ``url(#...)`` reference."""
        marker_id = f"{self.id_prefix}-{name}"
        self.add_def(
            f'<marker id="{escape_text(marker_id)}" viewBox="0 0 10 10" refX="8" refY="5"'
            f' markerWidth="{format_number(size)}" markerHeight="{format_number(size)}"'
            f' orient="auto-start-reverse"><path d="M 0 0 L 10 5 L 0 10 z"'
            f' fill="{escape_text(color)}"/></marker>'
        )
        return f"url(#{marker_id})"

    def add_clip_rect(self, frame: Frame) -> str:
        self._clip_count += 1
        clip_id = f"{self.id_prefix}-clip-{self._clip_count}"
        self.add_def(
            f'<clipPath id="{escape_text(clip_id)}"><rect'
            f"{_attrs(x=frame.left, y=frame.top, width=frame.width, height=frame.height)}"
            "/></clipPath>"
        )
        return clip_id

    def begin_group(self, *, css_class: Optional[str] = None, clip_id: Optional[str] = None,
                    transform: Optional[str] = None) -> None:
        clip = f"url(#{clip_id})" if clip_id else None
        self._append(f"<g{_attrs(css_class=css_class, clip_path=clip, transform=transform)}>")
        self._open_groups += 1

    def end_group(self) -> None:
        if self._open_groups == 0:
            raise GeneratorInternalError("end_group() without matching begin_group()")
        self._open_groups -= 1
        self._append("</g>")

    # ------------------------------------------------------------------ #
    # Shapes
    # ------------------------------------------------------------------ #

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, *,
                  stroke: str = COLORS["axis"], stroke_width: float = STROKE["thin"],
                  dash: Optional[str] = None, marker_start: Optional[str] = None,
                  marker_end: Optional[str] = None, css_class: Optional[str] = None) -> None:
        self._append(
            "<line"
            + _attrs(x1=x1, y1=y1, x2=x2, y2=y2, stroke=stroke, stroke_width=stroke_width,
                     stroke_dasharray=dash, marker_start=marker_start, marker_end=marker_end,
                     css_class=css_class)
            + "/>"
        )

    def draw_rect(self, x: float, y: float, width: float, height: float, *,
                  fill: str = "none", stroke: Optional[str] = None,
                  stroke_width: Optional[float] = None, dash: Optional[str] = None,
                  fill_opacity: Optional[float] = None, css_class: Optional[str] = None) -> None:
        self._append(
            "<rect"
            + _attrs(x=x, y=y, width=width, height=height, fill=fill, fill_opacity=fill_opacity,
                     stroke=stroke, stroke_width=stroke_width, stroke_dasharray=dash,
                     css_class=css_class)
            + "/>"
        )

    def draw_circle(self, cx: float, cy: float, r: float, *, fill: str = "none",
                    stroke: Optional[str] = None, stroke_width: Optional[float] = None,
                    fill_opacity: Optional[float] = None, css_class: Optional[str] = None) -> None:
        self._append(
            "<circle"
            + _attrs(cx=cx, cy=cy, r=r, fill=fill, fill_opacity=fill_opacity, stroke=stroke,
                     stroke_width=stroke_width, css_class=css_class)
            + "/>"
        )

    def draw_polygon(self, points: Sequence[Point], *, fill: str = "none",
                     stroke: Optional[str] = None, stroke_width: Optional[float] = None,
                     fill_opacity: Optional[float] = None, dash: Optional[str] = None,
                     css_class: Optional[str] = None) -> None:
        self._append(
            f'<polygon points="{points_attr(points)}"'
            + _attrs(fill=fill, fill_opacity=fill_opacity, stroke=stroke,
                     stroke_width=stroke_width, stroke_dasharray=dash, css_class=css_class)
            + "/>"
        )

    def draw_polyline(self, points: Sequence[Point], *, stroke: str,
                      stroke_width: float = STROKE["thick"], dash: Optional[str] = None,
                      css_class: Optional[str] = None) -> None:
        self._append(
            f'<polyline points="{points_attr(points)}"'
            + _attrs(fill="none", stroke=stroke, stroke_width=stroke_width,
                     stroke_dasharray=dash, stroke_linejoin="round", stroke_linecap="round",
                     css_class=css_class)
            + "/>"
        )

    def draw_path(self, d: str, *, fill: str = "none", stroke: Optional[str] = None,
                  stroke_width: Optional[float] = None, dash: Optional[str] = None,
                  fill_opacity: Optional[float] = None, css_class: Optional[str] = None) -> None:
        self._append(
            f'<path d="{d}"'
            + _attrs(fill=fill, fill_opacity=fill_opacity, stroke=stroke,
                     stroke_width=stroke_width, stroke_dasharray=dash, css_class=css_class)
            + "/>"
        )

    # ------------------------------------------------------------------ #
    # Text
    # ------------------------------------------------------------------ #

    def draw_text(self, x: float, y: float, text: str, *, anchor: str = "middle",
                  fill: str = COLORS["text"], font_size: Optional[float] = None,
                  font_weight: Optional[str] = None, baseline: Optional[str] = None,
                  rotate: Optional[float] = None, css_class: Optional[str] = None) -> None:
        transform = None
        if rotate is not None:
            transform = f"rotate({format_number(rotate)}, {format_number(x)}, {format_number(y)})"
        self._append(
            "<text"
            + _attrs(x=x, y=y, fill=fill, text_anchor=anchor, font_size=font_size,
                     font_weight=font_weight, dominant_baseline=baseline, transform=transform,
                     css_class=css_class)
            + f">{display_text(text)}</text>"
        )

    def draw_text_lines(self, x: float, y: float, lines: Sequence[str], *,
                        anchor: str = "middle", fill: str = COLORS["text"],
                        font_size: Optional[float] = None, font_weight: Optional[str] = None,
                        css_class: Optional[str] = None) -> None:
        """Draw pre-split lines as one ``<text>`` with stacked ``<tspan>`` rows."""
        spans = []
        for index, line in enumerate(lines):
            dy = "0" if index == 0 else f"{format_number(LINE_HEIGHT_EM)}em"
            spans.append(f'<tspan x="{format_number(x)}" dy="{dy}">{display_text(line)}</tspan>')
        self._append(
            "<text"
            + _attrs(x=x, y=y, fill=fill, text_anchor=anchor, font_size=font_size,
                     font_weight=font_weight, css_class=css_class)
            + ">" + "".join(spans) + "</text>"
        )

    def draw_wrapped_text(self, x: float, y: float, text: str, max_width_px: float, *,
                          avg_char_width_px: float = LABEL_AVG_CHAR_WIDTH_PX,
                          anchor: str = "middle", fill: str = COLORS["text"],
                          font_size: Optional[float] = None, font_weight: Optional[str] = None,
                          css_class: Optional[str] = None) -> List[str]:
        lines = wrap_text(text, max_width_px, avg_char_width_px)
        self.draw_text_lines(x, y, lines, anchor=anchor, fill=fill, font_size=font_size,
                             font_weight=font_weight, css_class=css_class)
        return lines

    def draw_title(self, title: Optional[str]) -> float:
        """
        Draw a wrapped, centred chart title and return the height of the band
        it occupies (``title_band_height`` for the same title).
        """
        if not title:
            return 0.0
        max_width = self.width - 2 * PADDING
        lines = wrap_title(title, max_width)
        self.draw_text_lines(self.width / 2, TITLE_TOP_PADDING_PX + FONT["size_title"], lines,
                             font_size=FONT["size_title"], font_weight=FONT["weight_bold"],
                             css_class="title")
        return title_band_height(title, max_width)

    # ------------------------------------------------------------------ #
    # Output
    # ------------------------------------------------------------------ #

    def finalize(self) -> str:
        if self._finalized:
            raise GeneratorInternalError("canvas finalized twice")
        if self._open_groups:
            raise GeneratorInternalError(f"{self._open_groups} unclosed group(s) at finalize()")
        self._finalized = True
        header = (
            '<svg xmlns="http://www.w3.org/2000/svg"'
            + _attrs(width=self.width, height=self.height)
            + f' viewBox="0 0 {format_number(self.width)} {format_number(self.height)}"'
            + _attrs(font_family=FONT["family"], font_size=self.font_size)
            + ">"
        )
        defs = f"<defs>{''.join(self._defs)}</defs>" if self._defs else ""
        svg = header + defs + "".join(self._body) + "</svg>"
        self._defs = []
        self._body = []
        return svg
