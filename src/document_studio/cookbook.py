"""
Placement Cookbook

Turns a rendered item (Fragment tree) into explicit positioned boxes on a
fixed canvas. The deck and snapshot exporters both draw from the same
recipe so text placement, sizes and colors match between them.

All recipe dimensions are in canvas pixels (96 dpi).
1 px = 9525 EMUs, 1 pt = 12700 EMUs, 1 inch = 914400 EMUs.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from PIL import ImageColor

from .fragments import TEXT_ROLES, Fragment, FragmentRole

EMU_PER_PX = 9525
PT_PER_PX = 0.75

LINE_HEIGHT = 1.3
AVG_CHAR_WIDTH = 0.55  # of the font size
BLOCK_GAP = 0.4  # of the font size
DEFAULT_FONT_PX = 16.0

ALIGNMENTS = {"left": "l", "center": "ctr", "right": "r", "justify": "l"}

_COLOR_TOKEN = re.compile(r"#[0-9a-fA-F]{3,8}\b|rgba?\([^)]*\)|hsla?\([^)]*\)")
_NUMBER = re.compile(r"-?\d+(\.\d+)?")


# ============================================================
# VALUE HELPERS
# ============================================================

def parse_color(value: Any, default: str = "000000") -> str:
    """Parse a CSS color into RRGGBB hex; gradients yield their first stop."""
    if not isinstance(value, str) or not value.strip():
        return default
    candidates = [value.strip()]
    candidates.extend(match.group(0) for match in _COLOR_TOKEN.finditer(value))
    for candidate in candidates:
        try:
            rgb = ImageColor.getrgb(candidate)
        except ValueError:
            continue
        return "%02X%02X%02X" % rgb[:3]
    return default


def parse_px(value: Any, default: float) -> float:
    """Read a numeric CSS length ("24px", "24", 24) as pixels."""
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = _NUMBER.search(value)
        if match:
            return float(match.group(0))
    return default


def estimate_lines(text: str, font_px: float, box_width: float) -> int:
    """Rough wrapped line count for ``text`` in a box ``box_width`` wide."""
    chars_per_line = max(1, int(box_width / (font_px * AVG_CHAR_WIDTH)))
    return sum(max(1, math.ceil(len(line) / chars_per_line)) for line in text.split("\n"))


# ============================================================
# DATA CLASSES
# ============================================================

@dataclass
class BoxPosition:
    """Position and size in canvas pixels."""
    x: int
    y: int
    cx: int
    cy: int

    def to_emu(self) -> Tuple[int, int, int, int]:
        return (self.x * EMU_PER_PX, self.y * EMU_PER_PX, self.cx * EMU_PER_PX, self.cy * EMU_PER_PX)

    @property
    def rect(self) -> Tuple[int, int, int, int]:
        """(left, top, right, bottom) for raster drawing."""
        return (self.x, self.y, self.x + self.cx, self.y + self.cy)


@dataclass
class TextBoxSpec:
    """A text box to be placed on a page."""
    name: str
    role: FragmentRole
    text: str
    position: BoxPosition
    font_size_px: float = 16
    bold: bool = False
    alignment: str = "l"  # l, ctr, r
    font_color: str = "000000"
    fill_color: Optional[str] = None
    font_family: Optional[str] = None

    @property
    def font_size_pt(self) -> float:
        return round(self.font_size_px * PT_PER_PX, 1)


@dataclass
class BackgroundSpec:
    """Page background. Gradients are approximated by their first color."""
    color: str = "FFFFFF"
    image: Optional[str] = None
    gradient: Optional[str] = None


@dataclass
class LayoutRecipe:
    """Complete placement of one rendered item on a fixed canvas."""
    name: str
    width: int
    height: int
    background: BackgroundSpec = field(default_factory=BackgroundSpec)
    text_boxes: List[TextBoxSpec] = field(default_factory=list)
    swatches: List[Tuple[BoxPosition, str]] = field(default_factory=list)


# ============================================================
# RECIPE BUILDING
# ============================================================

def _background_for(fragment: Fragment) -> BackgroundSpec:
    base = parse_color(fragment.style.get("background"), "FFFFFF")
    spec = BackgroundSpec(color=base)
    for layer in fragment.find_all(FragmentRole.background):
        kind = layer.attrs.get("kind")
        css = layer.style.get("background", "")
        if kind == "image":
            spec.image = layer.attrs.get("src")
        elif kind == "gradient":
            spec.gradient = css
            spec.color = parse_color(css, base)
        elif kind == "color":
            spec.color = parse_color(css, base)
    return spec


def _text_box(node: Fragment, text: str, width: float, name: Optional[str] = None) -> Tuple[TextBoxSpec, float]:
    font_px = parse_px(node.style.get("fontSize"), DEFAULT_FONT_PX)
    if font_px <= 0:
        font_px = DEFAULT_FONT_PX
    fill = node.style.get("background")
    spec = TextBoxSpec(
        name=name or node.slot_id or node.role.value,
        role=node.role,
        text=text,
        position=BoxPosition(0, 0, int(width), 0),
        font_size_px=font_px,
        bold=node.style.get("fontWeight") == "bold",
        alignment=ALIGNMENTS.get(str(node.style.get("textAlign", "left")), "l"),
        font_color=parse_color(node.style.get("color"), "000000"),
        fill_color=parse_color(fill, "3B82F6") if fill else None,
        font_family=node.style.get("fontFamily"),
    )
    height = estimate_lines(text, font_px, width) * font_px * LINE_HEIGHT
    if spec.fill_color:
        height += font_px
    return spec, height


def plan_item(fragment: Fragment, width: int, height: int) -> LayoutRecipe:
    """Lay out a rendered item top to bottom inside the page padding.

    Consecutive metrics share one row. Content that overflows the page is
    scaled down; short content is vertically centered when the layout asks
    for ``justify: center``.
    """
    recipe = LayoutRecipe(
        name=fragment.attrs.get("layout-id", "item"),
        width=width,
        height=height,
        background=_background_for(fragment),
    )

    padding = parse_px(fragment.style.get("padding"), round(width * 0.06))
    inner_width = max(1.0, width - 2 * padding)
    inner_height = max(1.0, height - 2 * padding)

    # Each row: list of (cell boxes, cell height); swatch rows carry a color.
    rows: List[Tuple[List[TextBoxSpec], float, Optional[str]]] = []
    pending_metrics: List[Fragment] = []

    def flush_metrics():
        if not pending_metrics:
            return
        cell_width = inner_width / len(pending_metrics)
        boxes: List[TextBoxSpec] = []
        row_height = 0.0
        for column, metric in enumerate(pending_metrics):
            offset = 0.0
            for part in metric.children:
                box, box_height = _text_box(part, part.text or "", cell_width, name=f"{metric.slot_id}-{part.role.value}")
                box.alignment = "ctr"
                box.position.x = int(column * cell_width)
                box.position.y = int(offset)
                box.position.cy = int(box_height)
                boxes.append(box)
                offset += box_height
            row_height = max(row_height, offset)
        rows.append((boxes, row_height, None))
        pending_metrics.clear()

    for node in fragment.children:
        if node.role == FragmentRole.background:
            continue
        if node.role == FragmentRole.metric:
            pending_metrics.append(node)
            continue
        flush_metrics()
        if node.role in TEXT_ROLES or node.role == FragmentRole.diagram:
            box, box_height = _text_box(node, node.text or "", inner_width)
            box.position.cy = int(box_height)
            rows.append(([box], box_height, None))
        elif node.role == FragmentRole.swatch:
            box, box_height = _text_box(node, node.text or "", inner_width)
            box.font_color = parse_color(node.style.get("color"), "000000")
            box.fill_color = None
            swatch_size = box_height * 2
            box.position.x = int(swatch_size + padding / 4)
            box.position.cx = int(inner_width - box.position.x)
            box.position.cy = int(swatch_size)
            rows.append(([box], swatch_size, parse_color(node.style.get("background"), "FFFFFF")))
    flush_metrics()

    gaps = [max(box.font_size_px for box in boxes) * BLOCK_GAP if boxes else 0 for boxes, _, _ in rows]
    total = sum(row_height for _, row_height, _ in rows) + sum(gaps[:-1])
    scale = min(1.0, inner_height / total) if total else 1.0
    top = padding
    if str(fragment.style.get("justify", "")) == "center" and total * scale < inner_height:
        top += (inner_height - total * scale) / 2

    cursor = top
    for (boxes, row_height, swatch), gap in zip(rows, gaps):
        for box in boxes:
            # Overflow shrinks vertically only; columns keep their width.
            box.position.x = int(padding + box.position.x)
            box.position.y = int(cursor + box.position.y * scale)
            box.position.cy = max(1, int(box.position.cy * scale))
            if scale < 1:
                box.font_size_px = max(8.0, box.font_size_px * scale)
            recipe.text_boxes.append(box)
        if swatch is not None:
            size = int(row_height * scale)
            recipe.swatches.append((BoxPosition(int(padding), int(cursor), size, size), swatch))
        cursor += (row_height + gap) * scale
    return recipe
