"""
HTML Export

Materializes rendered items as a self-contained HTML document, built as an
lxml tree so every text node and attribute value is escaped on
serialization. User-controlled values never reach the <style> element;
they appear only in sanitized inline ``style`` attributes.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from lxml import etree

from ..catalog.registry import LayoutRegistry
from ..content_types import DocumentShape, get_content_type_spec
from ..document import Project
from ..errors import ExportFailed, ItemNotFound
from ..fragments import Fragment, FragmentRole
from ..renderer import RenderOptions, render_project_item
from .base import ExportReport, item_guard, items_for_export, render_for_export

logger = logging.getLogger(__name__)

# Fragment style key -> CSS property. Unlisted keys are not emitted.
CSS_PROPERTIES = {
    "background": "background",
    "color": "color",
    "textColor": "color",
    "fontSize": "font-size",
    "fontWeight": "font-weight",
    "fontFamily": "font-family",
    "textAlign": "text-align",
    "whiteSpace": "white-space",
    "padding": "padding",
    "justify": "justify-content",
}

ROLE_TAGS = {
    FragmentRole.heading: "h1",
    FragmentRole.body: "p",
    FragmentRole.caption: "p",
    FragmentRole.action: "span",
    FragmentRole.background: "div",
    FragmentRole.metric: "div",
    FragmentRole.metric_value: "strong",
    FragmentRole.metric_label: "span",
    FragmentRole.metric_trend: "span",
    FragmentRole.diagram: "pre",
    FragmentRole.swatch: "div",
    FragmentRole.missing_layout: "div",
}

_UNSAFE_CSS = re.compile(r"[;{}<>\\]")
# Characters XML 1.0 cannot carry; lxml refuses them in text and attributes.
_XML_ILLEGAL = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

BASE_CSS = """
* { box-sizing: border-box; }
body { margin: 0; font-family: Inter, sans-serif; background: #e5e7eb; }
.ds-item { position: relative; overflow: hidden; display: flex; flex-direction: column; gap: 16px; }
.ds-background { position: absolute; inset: 0; z-index: 0; }
.ds-item > :not(.ds-background) { position: relative; z-index: 1; margin: 0; }
.ds-action { display: inline-block; align-self: flex-start; padding: 12px 28px; border-radius: 8px; }
.ds-metric { display: inline-flex; flex-direction: column; padding: 12px; }
.ds-swatch { min-height: 48px; padding: 12px; border-radius: 8px; }
.ds-missing-layout { padding: 24px; border: 2px dashed currentColor; }
"""

PAGE_CSS = """
.ds-item {{ width: {width}px; height: {height}px; margin: 24px auto; padding: 60px; }}
@media print {{
  body {{ background: none; }}
  .ds-item {{ margin: 0; page-break-after: always; break-after: page; }}
}}
"""

SCROLL_CSS = """
.ds-item {{ width: 100%; max-width: {width}px; min-height: 320px; margin: 0 auto; padding: 48px; }}
"""

SINGLE_CSS = """
.ds-item {{ width: {width}px; height: {height}px; margin: 24px auto; padding: 48px; }}
"""

SHAPE_CSS = {
    DocumentShape.paginated: PAGE_CSS,
    DocumentShape.scroll: SCROLL_CSS,
    DocumentShape.single: SINGLE_CSS,
}


def xml_text(value: Any) -> str:
    """Drop characters an XML tree cannot hold (NUL, most C0 controls)."""
    return _XML_ILLEGAL.sub("", str(value))


def sanitize_css_value(value: Any) -> str:
    """Strip characters that could terminate a declaration or leave the attribute."""
    return _UNSAFE_CSS.sub("", xml_text(value)).strip()


def css_declarations(style: Dict[str, Any]) -> str:
    declarations: List[str] = []
    for key, value in style.items():
        prop = CSS_PROPERTIES.get(key)
        if prop is None or value is None or value == "":
            continue
        if key == "fontSize" and isinstance(value, (int, float)):
            value = f"{value}px"
        cleaned = sanitize_css_value(value)
        if cleaned:
            declarations.append(f"{prop}: {cleaned}")
    return "; ".join(declarations)


def fragment_element(fragment: Fragment) -> etree._Element:
    """Build the element for one non-item fragment (recursively)."""
    elem = etree.Element(ROLE_TAGS.get(fragment.role, "div"))
    elem.set("class", f"ds-{fragment.role.value}")
    css = css_declarations(fragment.style)
    if css:
        elem.set("style", css)
    if fragment.slot_id:
        elem.set("data-slot", xml_text(fragment.slot_id))
    if fragment.role == FragmentRole.diagram:
        elem.set("class", "ds-diagram mermaid")
        elem.set("data-language", xml_text(fragment.attrs.get("language", "mermaid")))
    if fragment.role == FragmentRole.background:
        elem.set("aria-hidden", "true")
    if fragment.attrs.get("editable") == "true":
        elem.set("contenteditable", "true")
        elem.set("spellcheck", "false")
    if fragment.text is not None and fragment.role != FragmentRole.swatch:
        elem.text = xml_text(fragment.text)
    elif fragment.role == FragmentRole.swatch:
        etree.SubElement(elem, "code").text = xml_text(fragment.text or "")
    for child in fragment.children:
        elem.append(fragment_element(child))
    return elem


def item_element(fragment: Fragment) -> etree._Element:
    """Build the <section> for a rendered item."""
    section = etree.Element("section")
    section.set("class", "ds-item")
    section.set("data-item-id", xml_text(fragment.attrs.get("item-id", "")))
    section.set("data-layout-id", xml_text(fragment.attrs.get("layout-id", "")))
    section.set("data-index", xml_text(fragment.attrs.get("index", "0")))
    animation = fragment.attrs.get("animation", "none")
    if animation != "none":
        section.set("data-animation", xml_text(animation))
    style = dict(fragment.style)
    if style.get("justify"):
        style["justify"] = "center" if style["justify"] == "center" else "flex-start"
    css = css_declarations(style)
    if css:
        section.set("style", css)
    for child in fragment.children:
        section.append(fragment_element(child))
    return section


def _serialize(elem: etree._Element) -> str:
    return etree.tostring(elem, method="html", encoding="unicode")


# ============================================================
# PUBLIC API
# ============================================================

def render_item_html(
    project: Project,
    registry: LayoutRegistry,
    item_id: Optional[str] = None,
    editable: bool = True,
) -> str:
    """Markup for one item (the focused item by default), for live preview."""
    item = project.current_item if item_id is None else project.get_item(item_id)
    if item is None:
        raise ItemNotFound(item_id if item_id is not None else "current")
    fragment = render_project_item(project, registry, item, RenderOptions(editable=editable))
    return _serialize(item_element(fragment))


def render_document_html(
    project: Project,
    registry: LayoutRegistry,
    report: Optional[ExportReport] = None,
    strict: bool = False,
) -> str:
    """Assemble a standalone HTML document for the project."""
    report = report if report is not None else ExportReport(export_format="html")
    spec = get_content_type_spec(project.content_type)

    html = etree.Element("html", lang="en")
    head = etree.SubElement(html, "head")
    etree.SubElement(head, "meta", charset="utf-8")
    etree.SubElement(head, "meta", name="viewport", content="width=device-width, initial-scale=1")
    etree.SubElement(head, "title").text = xml_text(project.name)
    # Only fixed numbers are interpolated into the stylesheet.
    etree.SubElement(head, "style").text = BASE_CSS + SHAPE_CSS[spec.shape].format(
        width=int(spec.width), height=int(spec.canvas_height),
    )

    body = etree.SubElement(html, "body")
    body.set("class", f"ds-{spec.shape.value} ds-{spec.key.value}")
    main = etree.SubElement(body, "main")

    exported = items_for_export(project)
    positions = {item.id: index for index, item in exported}
    count = 0
    for item, fragment in render_for_export(project, registry, report, strict, items=exported):
        with item_guard(report, item, positions[item.id], strict):
            main.append(item_element(fragment))
            count += 1
    report.item_count = count

    return etree.tostring(html, method="html", encoding="unicode", doctype="<!DOCTYPE html>")


def export_html(
    project: Project,
    registry: LayoutRegistry,
    path: Union[str, Path],
    strict: bool = False,
) -> ExportReport:
    """Write the project as a standalone HTML file."""
    report = ExportReport(export_format="html", path=str(path))
    document = render_document_html(project, registry, report, strict)
    try:
        Path(path).write_text(document, encoding="utf-8")
    except OSError as exc:
        raise ExportFailed("html", exc) from exc
    logger.info("Wrote %d item(s) to %s", report.item_count, path)
    return report
