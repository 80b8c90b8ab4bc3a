"""
theme.py

Shared style tokens for every widget. These values are read-only and are part
of the output contract: changing one changes the rendered bytes of every
widget that uses it.
"""

from __future__ import annotations


# =============================================================================
# COLORS
# =============================================================================

COLORS = {
    "primary": "#2563eb",      # Blue
    "secondary": "#7c3aed",    # Purple
    "accent": "#f59e0b",       # Amber
    "success": "#10b981",      # Green
    "shape_fill": "#dbeafe",   # Light blue
    "shape_stroke": "#1e40af", # Dark blue
    "grid": "#e5e7eb",         # Light gray
    "grid_minor": "#f3f4f6",
    "axis": "#374151",         # Dark gray
    "axis_label": "#1f2937",
    "text": "#1f2937",         # Near black
    "muted_text": "#6b7280",
    "highlight": "#fef3c7",    # Light yellow
    "background": "#ffffff",
    "black": "#000000",
    "white": "#ffffff",
    "hub_fill": "#f5f5f5",
    "pointer": "#4a4a4a",
    "table_border": "#9ca3af",
    "table_header": "#f3f4f6",
}


# =============================================================================
# TYPOGRAPHY
# =============================================================================

FONT = {
    "family": "sans-serif",
    "size_small": 12,
    "size_base": 14,
    "size_title": 16,
    "size_symbol": 48,
    "weight_bold": "bold",
}

# Frozen text measurement heuristic (see core.text_layout).
LABEL_AVG_CHAR_WIDTH_PX = 7
TITLE_AVG_CHAR_WIDTH_PX = 8
LINE_HEIGHT_EM = 1.2

# Titles of the form "<main> (<parenthetical>)" longer than this always wrap.
PARENTHETICAL_WRAP_MIN_CHARS = 36


# =============================================================================
# STROKES
# =============================================================================

STROKE = {
    "thin": 1,
    "base": 1.5,
    "thick": 2,
    "xthick": 2.5,
    "xxthick": 3,
}

DASH = {
    "dashed": "5 3",
    "distance": "4 3",
    "long": "8 4",
    "dotted": "2 6",
    "legend": "8 6",
}


# =============================================================================
# SPACING
# =============================================================================

PADDING = 20
AXIS_PADDING = {"top": 20, "right": 20, "bottom": 50, "left": 60}
NUMBER_LINE_PADDING = 40
TITLE_TOP_PADDING_PX = 10
TICK_LENGTH = 5
MINOR_TICK_LENGTH = 3
TICK_LABEL_OFFSET = 18
AXIS_TITLE_OFFSET = 40
POINT_RADIUS = 4
LEGEND_LINE_LENGTH = 30
LEGEND_GAP = 8
LEGEND_ITEM_HEIGHT = 18

# Upper bound on generated ticks per axis.
MAX_TICKS = 1000

# Numeric bounds applied to every descriptor field.
MAX_ABS_VALUE = 1_000_000
MAX_CANVAS_PX = 4000
