"""
Snapshot Export

Rasterizes the focused item to a PNG at the content-type canvas size using
Pillow, drawing the same placement recipe the deck exporter uses.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

from PIL import Image, ImageColor, ImageDraw, ImageFont, ImageOps

from ..catalog.registry import LayoutRegistry
from ..content_types import get_content_type_spec
from ..cookbook import LINE_HEIGHT, LayoutRecipe, TextBoxSpec, parse_color, plan_item
from ..document import Project
from ..errors import ExportFailed
from ..fragments import Fragment
from ..renderer import render_project_item
from .base import ExportReport, item_guard

logger = logging.getLogger(__name__)

_STOP = re.compile(r"#[0-9a-fA-F]{3,8}\b|rgba?\([^)]*\)|hsla?\([^)]*\)|\b[a-z]+\b")
_HORIZONTAL = ("to right", "to left", "90deg", "270deg")


def _hex(color: str) -> str:
    return f"#{color}"


def gradient_stops(css: str) -> List[Tuple[int, int, int]]:
    """Colors of a CSS gradient in order; unparseable tokens are skipped."""
    stops = []
    body = css.split("(", 1)[1] if "(" in css else css
    for match in _STOP.finditer(body):
        try:
            stops.append(ImageColor.getrgb(match.group(0))[:3])
        except ValueError:
            continue
    return stops


def _draw_gradient(image: Image.Image, css: str) -> None:
    stops = gradient_stops(css)
    if len(stops) < 2:
        return
    horizontal = any(token in css for token in _HORIZONTAL)
    length = image.width if horizontal else image.height
    draw = ImageDraw.Draw(image)
    segments = len(stops) - 1
    for i in range(length):
        position = i / max(1, length - 1) * segments
        seg = min(int(position), segments - 1)
        t = position - seg
        start, end = stops[seg], stops[seg + 1]
        color = tuple(int(start[c] + (end[c] - start[c]) * t) for c in range(3))
        if horizontal:
            draw.line([(i, 0), (i, image.height)], fill=color)
        else:
            draw.line([(0, i), (image.width, i)], fill=color)


def _wrap_text(text: str, font, max_width: float) -> List[str]:
    """Greedy word wrap by rendered width."""
    lines: List[str] = []
    for paragraph in text.split("\n"):
        current: List[str] = []
        for word in paragraph.split():
            candidate = " ".join(current + [word])
            if current and font.getlength(candidate) > max_width:
                lines.append(" ".join(current))
                current = [word]
            else:
                current.append(word)
        lines.append(" ".join(current))
    return lines


def _draw_text_box(draw: ImageDraw.ImageDraw, spec: TextBoxSpec) -> None:
    font = ImageFont.load_default(size=max(1, int(spec.font_size_px)))
    left, top, right, bottom = spec.position.rect
    if spec.fill_color:
        draw.rounded_rectangle([left, top, right, bottom], radius=8, fill=_hex(spec.fill_color))

    line_height = spec.font_size_px * LINE_HEIGHT
    y = top + (spec.font_size_px / 2 if spec.fill_color else 0)
    for line in _wrap_text(spec.text, font, spec.position.cx):
        if y > bottom:
            break
        width = font.getlength(line)
        if spec.alignment == "ctr":
            x = left + (spec.position.cx - width) / 2
        elif spec.alignment == "r":
            x = right - width
        else:
            x = left
        draw.text((x, y), line, font=font, fill=_hex(spec.font_color))
        y += line_height


def rasterize(recipe: LayoutRecipe) -> Image.Image:
    """Draw a placement recipe onto a new RGB image."""
    image = Image.new("RGB", (recipe.width, recipe.height), _hex(recipe.background.color))
    if recipe.background.gradient:
        _draw_gradient(image, recipe.background.gradient)
    if recipe.background.image and Path(recipe.background.image).is_file():
        with Image.open(recipe.background.image) as source:
            image.paste(ImageOps.fit(source.convert("RGB"), image.size))

    draw = ImageDraw.Draw(image)
    for position, color in recipe.swatches:
        draw.rounded_rectangle(list(position.rect), radius=6, fill=_hex(color))
    for spec in recipe.text_boxes:
        _draw_text_box(draw, spec)
    return image


def render_snapshot(project: Project, registry: LayoutRegistry,
                    fragment: Optional[Fragment] = None) -> Image.Image:
    """Raster of the focused item (or ``fragment``); a blank themed page when empty."""
    spec = get_content_type_spec(project.content_type)
    width, height = spec.width, spec.canvas_height
    if fragment is None and project.current_item is not None:
        fragment = render_project_item(project, registry, project.current_item)
    if fragment is None:
        theme = registry.resolve_theme(project.theme)
        background = parse_color(theme.color_palette.background, "FFFFFF")
        return Image.new("RGB", (width, height), _hex(background))
    return rasterize(plan_item(fragment, width, height))


def export_snapshot(
    project: Project,
    registry: LayoutRegistry,
    path: Union[str, Path],
    strict: bool = False,
) -> ExportReport:
    """Write the focused item as a PNG."""
    report = ExportReport(export_format="png", path=str(path))
    item = project.current_item
    image = None
    if item is None:
        image = render_snapshot(project, registry)
    else:
        with item_guard(report, item, project.current_index, strict):
            image = render_snapshot(project, registry)
            report.item_count = 1
    if image is None:
        raise ExportFailed("png", message=f"item {item.id} could not be rasterized")

    try:
        image.save(str(path), "PNG")
    except OSError as exc:
        raise ExportFailed("png", exc) from exc
    logger.info("Wrote snapshot of %s to %s", item.id if item else "empty project", path)
    return report
