"""
Slide Deck Export

One slide per exported item, sized to the content-type canvas. Text boxes
come from the placement cookbook, so the deck matches the PNG snapshot.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_SHAPE
from pptx.enum.text import PP_ALIGN
from pptx.util import Emu, Pt

from ..catalog.registry import LayoutRegistry
from ..content_types import get_content_type_spec
from ..cookbook import EMU_PER_PX, LayoutRecipe, TextBoxSpec, plan_item
from ..document import Project
from ..errors import ExportFailed
from .base import ExportReport, item_guard, items_for_export, render_for_export

logger = logging.getLogger(__name__)

MONOSPACE_FONT = "Courier New"
GENERIC_FAMILIES = ("sans-serif", "serif", "system-ui")

ALIGNMENT = {
    "l": PP_ALIGN.LEFT,
    "ctr": PP_ALIGN.CENTER,
    "r": PP_ALIGN.RIGHT,
}


def primary_family(family: Optional[str]) -> Optional[str]:
    """First family name of a CSS font stack."""
    if not family:
        return None
    name = str(family).split(",")[0].strip().strip("'\"")
    if name == "monospace":
        return MONOSPACE_FONT
    return None if name in GENERIC_FAMILIES else name


def _add_text_box(slide, spec: TextBoxSpec) -> None:
    x, y, cx, cy = spec.position.to_emu()
    shape = slide.shapes.add_textbox(Emu(x), Emu(y), Emu(cx), Emu(cy))
    shape.name = spec.name
    if spec.fill_color:
        shape.fill.solid()
        shape.fill.fore_color.rgb = RGBColor.from_string(spec.fill_color)

    frame = shape.text_frame
    frame.word_wrap = True
    frame.clear()

    family = primary_family(spec.font_family)
    for index, line in enumerate(spec.text.split("\n")):
        para = frame.paragraphs[0] if index == 0 else frame.add_paragraph()
        para.text = line
        para.alignment = ALIGNMENT.get(spec.alignment, PP_ALIGN.LEFT)
        para.font.size = Pt(spec.font_size_pt)
        para.font.bold = spec.bold
        para.font.color.rgb = RGBColor.from_string(spec.font_color)
        if family:
            para.font.name = family


def fill_slide(slide, recipe: LayoutRecipe) -> None:
    """Draw a placement recipe onto a blank slide."""
    fill = slide.background.fill
    fill.solid()
    fill.fore_color.rgb = RGBColor.from_string(recipe.background.color)

    image = recipe.background.image
    if image and Path(image).is_file():
        slide.shapes.add_picture(image, 0, 0, Emu(recipe.width * EMU_PER_PX), Emu(recipe.height * EMU_PER_PX))

    for position, color in recipe.swatches:
        x, y, cx, cy = position.to_emu()
        swatch = slide.shapes.add_shape(MSO_SHAPE.RECTANGLE, Emu(x), Emu(y), Emu(cx), Emu(cy))
        swatch.fill.solid()
        swatch.fill.fore_color.rgb = RGBColor.from_string(color)

    for spec in recipe.text_boxes:
        _add_text_box(slide, spec)


def export_pptx(
    project: Project,
    registry: LayoutRegistry,
    path: Union[str, Path],
    strict: bool = False,
) -> ExportReport:
    """Write the project as a .pptx deck.

    An unwritable path raises ExportFailed; individual items that fail are
    listed in the report (or abort the export when ``strict``).
    """
    report = ExportReport(export_format="pptx", path=str(path))
    spec = get_content_type_spec(project.content_type)
    width, height = spec.width, spec.canvas_height

    prs = Presentation()
    prs.slide_width = Emu(width * EMU_PER_PX)
    prs.slide_height = Emu(height * EMU_PER_PX)
    blank_layout = prs.slide_layouts[6]

    items = items_for_export(project)
    indexes = {item.id: index for index, item in items}
    for item, fragment in render_for_export(project, registry, report, strict, items=items):
        with item_guard(report, item, indexes[item.id], strict):
            recipe = plan_item(fragment, width, height)
            fill_slide(prs.slides.add_slide(blank_layout), recipe)
            report.item_count += 1

    try:
        prs.save(str(path))
    except OSError as exc:
        raise ExportFailed("pptx", exc) from exc
    logger.info("Wrote %d slide(s) to %s", report.item_count, path)
    return report
