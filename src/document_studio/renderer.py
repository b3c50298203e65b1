"""
Content Slot Renderer

Pure mapping from (layout, item content, resolved style, options) to a
Fragment tree. Dispatch is keyed on the slot content type; text slots pick
their role from an explicit ``role`` or, failing that, from the slot id.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .catalog.registry import LayoutRegistry
from .catalog.schema import LayoutDefinition, SlotContentType, SlotDefinition, SlotRole, ThemeDefinition
from .document import Item, Project
from .fragments import Fragment, FragmentRole
from .styles import resolve_styles

HEADING_NAMES = frozenset({"title", "heading", "headline"})
BODY_NAMES = frozenset({"body", "subtitle", "subheadline", "description"})

# Per-role typography; ``<role>FontSize`` in the resolved style overrides the size.
ROLE_TYPOGRAPHY: Dict[FragmentRole, Dict[str, Any]] = {
    FragmentRole.heading: {"fontSize": 44, "fontWeight": "bold"},
    FragmentRole.body: {"fontSize": 22},
    FragmentRole.caption: {"fontSize": 16},
    FragmentRole.action: {"fontSize": 18, "fontWeight": "bold"},
    FragmentRole.metric_value: {"fontSize": 40, "fontWeight": "bold"},
    FragmentRole.metric_label: {"fontSize": 16},
    FragmentRole.metric_trend: {"fontSize": 14},
    FragmentRole.diagram: {"fontSize": 14, "fontFamily": "monospace"},
    FragmentRole.missing_layout: {"fontSize": 24},
}

# Which resolved color each role is drawn in.
ROLE_COLORS: Dict[FragmentRole, str] = {
    FragmentRole.heading: "primaryColor",
    FragmentRole.body: "textColor",
    FragmentRole.caption: "secondaryColor",
    FragmentRole.metric_value: "primaryColor",
    FragmentRole.metric_label: "textColor",
    FragmentRole.metric_trend: "accentColor",
    FragmentRole.diagram: "textColor",
    FragmentRole.missing_layout: "textColor",
}

_TOKEN_SPLIT = re.compile(r"[-_\s]+|(?<=[a-z0-9])(?=[A-Z])")


@dataclass
class RenderOptions:
    """Knobs for the renderer.

    editable: mark text nodes as editable (live preview).
    """
    editable: bool = False


def slot_tokens(slot_id: str) -> List[str]:
    return [token.lower() for token in _TOKEN_SPLIT.split(slot_id) if token]


def infer_role(slot: SlotDefinition) -> SlotRole:
    """Role of a text slot: explicit role first, else the slot-id convention."""
    if slot.role is not None:
        return slot.role
    tokens = slot_tokens(slot.id)
    if not tokens:
        return SlotRole.caption
    if tokens[0] == "cta":
        return SlotRole.action
    if tokens[-1] in HEADING_NAMES:
        return SlotRole.heading
    if tokens[-1] in BODY_NAMES:
        return SlotRole.body
    return SlotRole.caption


def slot_value(item: Item, slot: SlotDefinition) -> Any:
    """Item content for a slot, falling back to the placeholder when missing or empty."""
    value = item.content.get(slot.id)
    if value is None or value == "" or value == {}:
        return slot.placeholder
    return value


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, dict):
        return str(value.get("text", ""))
    return str(value)


def role_style(role: FragmentRole, resolved: Dict[str, Any]) -> Dict[str, Any]:
    """Node style for a role, derived from the item's resolved style."""
    style = dict(ROLE_TYPOGRAPHY.get(role, {}))
    size_key = f"{role.value.replace('-', '')}FontSize"
    if resolved.get(size_key) is not None:
        style["fontSize"] = resolved[size_key]

    if role == FragmentRole.action:
        style["color"] = "#ffffff"
        style["background"] = resolved.get("primaryColor")
    elif role in ROLE_COLORS:
        style["color"] = resolved.get(ROLE_COLORS[role])

    if "fontFamily" not in style:
        family_key = "headingFont" if role == FragmentRole.heading else "fontFamily"
        if resolved.get(family_key):
            style["fontFamily"] = resolved[family_key]
    if resolved.get("textAlign"):
        style["textAlign"] = resolved["textAlign"]
    return style


# ============================================================
# SLOT RENDERERS
# ============================================================

def background_css(value: Any, fallback: Optional[str]) -> Dict[str, str]:
    """Decode a backgroundFill value into a CSS background and its kind.

    Encodings: ``gradient:<css>``, ``image:<url>``, a literal color or
    gradient string, or empty (use the resolved background).
    """
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        return {"kind": "inherit", "css": fallback or ""}
    if text.startswith("gradient:"):
        return {"kind": "gradient", "css": text[len("gradient:"):].strip()}
    if text.startswith("image:"):
        url = text[len("image:"):].strip()
        return {"kind": "image", "css": f'url("{url}") center/cover no-repeat', "src": url}
    kind = "gradient" if "gradient(" in text else "color"
    return {"kind": kind, "css": text}


def _render_text(slot, value, resolved, options) -> Fragment:
    role = FragmentRole(infer_role(slot).value)
    node = Fragment(role=role, text=_as_text(value), style=role_style(role, resolved))
    if slot.content_type == SlotContentType.longText:
        node.style["whiteSpace"] = "pre-wrap"
    return node


def _render_background(slot, value, resolved, options) -> Fragment:
    decoded = background_css(value, resolved.get("background"))
    attrs = {"kind": decoded["kind"]}
    if "src" in decoded:
        attrs["src"] = decoded["src"]
    return Fragment(role=FragmentRole.background, style={"background": decoded["css"]}, attrs=attrs)


def _render_metric(slot, value, resolved, options) -> Fragment:
    if isinstance(value, dict):
        fields = {
            "value": value.get("value"),
            "label": value.get("label"),
            "trend": value.get("trend"),
        }
    else:
        fields = {"value": value, "label": None, "trend": None}

    node = Fragment(role=FragmentRole.metric, style={"textAlign": resolved.get("textAlign", "center")})
    for name, role in (("value", FragmentRole.metric_value),
                       ("label", FragmentRole.metric_label),
                       ("trend", FragmentRole.metric_trend)):
        if fields[name] not in (None, ""):
            node.children.append(Fragment(role=role, text=str(fields[name]), style=role_style(role, resolved)))
    return node


def _render_diagram(slot, value, resolved, options) -> Fragment:
    # Source is passed through untouched for the external diagram renderer.
    return Fragment(
        role=FragmentRole.diagram,
        text=_as_text(value),
        style=role_style(FragmentRole.diagram, resolved),
        attrs={"language": "mermaid"},
    )


def _render_swatch(slot, value, resolved, options) -> Fragment:
    color = _as_text(value)
    return Fragment(
        role=FragmentRole.swatch,
        text=color,
        style={"background": color, "color": resolved.get("textColor")},
    )


SLOT_RENDERERS = {
    SlotContentType.text: _render_text,
    SlotContentType.longText: _render_text,
    SlotContentType.backgroundFill: _render_background,
    SlotContentType.dataMetric: _render_metric,
    SlotContentType.diagramSource: _render_diagram,
    SlotContentType.colorSwatch: _render_swatch,
}


def render_slot(slot: SlotDefinition, item: Item, resolved: Dict[str, Any],
                options: Optional[RenderOptions] = None) -> Fragment:
    options = options or RenderOptions()
    node = SLOT_RENDERERS[slot.content_type](slot, slot_value(item, slot), resolved, options)
    node.attrs["slot"] = slot.id
    node.attrs["content-type"] = slot.content_type.value
    if options.editable and node.role not in (FragmentRole.background, FragmentRole.diagram):
        node.attrs["editable"] = "true"
    return node


# ============================================================
# PUBLIC API
# ============================================================

def render_item(
    item: Item,
    layout: Optional[LayoutDefinition],
    theme: Optional[ThemeDefinition],
    options: Optional[RenderOptions] = None,
    index: int = 0,
) -> Fragment:
    """Render one item. A missing layout yields a "layout not found" fragment."""
    resolved = resolve_styles(layout, theme, item.style_overrides)
    root = Fragment(
        role=FragmentRole.item,
        style=resolved,
        attrs={
            "item-id": item.id,
            "layout-id": item.layout_id,
            "animation": item.animation or "none",
            "index": str(index),
        },
    )

    if layout is None:
        root.children.append(Fragment(
            role=FragmentRole.missing_layout,
            text=f'Layout "{item.layout_id}" not found',
            style=role_style(FragmentRole.missing_layout, resolved),
        ))
        return root

    root.attrs["layout-name"] = layout.name
    nodes = [render_slot(slot, item, resolved, options) for slot in layout.slots]
    # Full-bleed layers sit beneath the visible slots.
    root.children.extend(n for n in nodes if n.role == FragmentRole.background)
    root.children.extend(n for n in nodes if n.role != FragmentRole.background)
    return root


def render_project_item(project: Project, registry: LayoutRegistry, item: Item,
                        options: Optional[RenderOptions] = None) -> Fragment:
    """Render an item of ``project`` against the registry and the project's theme."""
    index = project.index_of(item.id)
    return render_item(
        item,
        registry.get_layout(item.layout_id),
        registry.resolve_theme(project.theme),
        options,
        index=index if index is not None else 0,
    )


def render_project(project: Project, registry: LayoutRegistry,
                   options: Optional[RenderOptions] = None) -> List[Fragment]:
    """Render every item in order."""
    theme = registry.resolve_theme(project.theme)
    return [
        render_item(item, registry.get_layout(item.layout_id), theme, options, index=i)
        for i, item in enumerate(project.items)
    ]
