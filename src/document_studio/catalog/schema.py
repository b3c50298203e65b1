"""
Catalog Schema

Pydantic v2 models for the layout/theme catalog. Layouts and their slots are
data discovered at runtime; the models normalize the several configuration
spellings (``type``/``contentType``, ``maxChars``/``maxLength``, ``colors``/
``colorPalette``, ...) into one immutable shape.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SlotValue = Union[str, Dict[str, Any]]


class SlotContentType(str, Enum):
    """Closed set of slot content types dispatched by the renderer."""
    text = "text"
    longText = "longText"
    colorSwatch = "colorSwatch"
    backgroundFill = "backgroundFill"
    dataMetric = "dataMetric"
    diagramSource = "diagramSource"


class SlotRole(str, Enum):
    """Presentational role of a text slot."""
    heading = "heading"
    body = "body"
    caption = "caption"
    action = "action"


# Spellings found in editor configs, mapped onto SlotContentType values.
CONTENT_TYPE_ALIASES: Dict[str, str] = {
    "text": "text",
    "string": "text",
    "textarea": "longText",
    "longtext": "longText",
    "long_text": "longText",
    "color": "colorSwatch",
    "colorswatch": "colorSwatch",
    "swatch": "colorSwatch",
    "background": "backgroundFill",
    "backgroundfill": "backgroundFill",
    "data": "dataMetric",
    "stat": "dataMetric",
    "metric": "dataMetric",
    "datametric": "dataMetric",
    "diagram": "diagramSource",
    "mermaid": "diagramSource",
    "diagramsource": "diagramSource",
}

DEFAULT_PLACEHOLDERS: Dict[str, str] = {
    "title": "Your Title Here",
    "subtitle": "Subtitle or description",
    "heading": "Section Heading",
    "body": "Your content goes here...",
    "cta": "Click Here",
    "ctaPrimary": "Get Started",
    "ctaSecondary": "Learn More",
    "contact": "email@example.com",
    "headline": "Your Headline",
    "subheadline": "Your subheadline text here",
    "footer": "Footer content",
}


def _normalize_content_type(raw: Any) -> Any:
    if isinstance(raw, SlotContentType) or not isinstance(raw, str):
        return raw
    return CONTENT_TYPE_ALIASES.get(raw.strip().lower(), raw)


def default_placeholder(slot_id: str, content_type: str) -> SlotValue:
    """Placeholder used when a slot definition does not declare one."""
    if content_type == SlotContentType.dataMetric.value:
        return {"value": "0", "label": "Label"}
    if content_type in (SlotContentType.backgroundFill.value, SlotContentType.diagramSource.value):
        return ""
    return DEFAULT_PLACEHOLDERS.get(slot_id, f"[{slot_id}]")


class SlotDefinition(BaseModel):
    """A single named, typed content field within a layout."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    content_type: SlotContentType = Field(SlotContentType.text, alias="contentType")
    placeholder: SlotValue = ""
    max_length: Optional[int] = Field(None, alias="maxLength", ge=0)
    required: bool = False
    role: Optional[SlotRole] = None

    @model_validator(mode="before")
    @classmethod
    def normalize_spellings(cls, data: Any) -> Any:
        if isinstance(data, str):
            data = {"id": data}
        if not isinstance(data, dict):
            return data
        data = dict(data)

        raw_type = data.pop("type", None)
        if "contentType" not in data and "content_type" not in data:
            if raw_type is None:
                raw_type = "background" if data.get("id") == "background" else "text"
            data["contentType"] = raw_type
        key = "contentType" if "contentType" in data else "content_type"
        data[key] = _normalize_content_type(data[key])

        if "maxChars" in data and "maxLength" not in data and "max_length" not in data:
            data["maxLength"] = data.pop("maxChars")
        if data.get("placeholder") is None:
            data["placeholder"] = default_placeholder(str(data.get("id", "")), str(getattr(data[key], "value", data[key])))
        return data


class LayoutDefinition(BaseModel):
    """Named schema of content slots plus default styling."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    name: str = ""
    category: str = "presentation"
    subcategory: Optional[str] = None
    icon: str = ""
    slots: List[SlotDefinition] = Field(default_factory=list)
    style_defaults: Dict[str, Any] = Field(default_factory=dict, alias="styleDefaults")
    editable_style_properties: List[str] = Field(default_factory=list, alias="editableStyleProperties")
    animation_options: List[str] = Field(default_factory=list, alias="animationOptions")

    @model_validator(mode="before")
    @classmethod
    def normalize_spellings(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)

        if "styleDefaults" not in data and "style_defaults" not in data:
            css = data.pop("css", None)
            if "style" in data:
                data["styleDefaults"] = data.pop("style")
            elif isinstance(css, dict):
                data["styleDefaults"] = css.get("default", {})
        if "editableProperties" in data and "editableStyleProperties" not in data:
            data["editableStyleProperties"] = data.pop("editableProperties")
        if "animations" in data and "animationOptions" not in data:
            data["animationOptions"] = data.pop("animations")
        if not data.get("name"):
            data["name"] = data.get("id", "")

        slots = data.get("slots") or []
        constraints = data.pop("constraints", None) or {}
        if isinstance(slots, dict):
            slots = [{**(spec or {}), "id": slot_id} for slot_id, spec in slots.items()]
        normalized = []
        for slot in slots:
            if isinstance(slot, str):
                slot = {"id": slot}
            if isinstance(slot, dict) and slot.get("id") in constraints:
                slot = {**constraints[slot["id"]], **slot}
            normalized.append(slot)
        data["slots"] = normalized
        return data

    @field_validator("slots")
    @classmethod
    def slot_ids_unique(cls, slots: List[SlotDefinition]) -> List[SlotDefinition]:
        seen = set()
        for slot in slots:
            if slot.id in seen:
                raise ValueError(f"duplicate slot id '{slot.id}'")
            seen.add(slot.id)
        return slots

    @property
    def slot_ids(self) -> List[str]:
        return [slot.id for slot in self.slots]

    def get_slot(self, slot_id: str) -> Optional[SlotDefinition]:
        for slot in self.slots:
            if slot.id == slot_id:
                return slot
        return None

    def placeholder_content(self) -> Dict[str, SlotValue]:
        """Fresh content map seeded with every slot's placeholder."""
        return {slot.id: copy.deepcopy(slot.placeholder) for slot in self.slots}


class ColorPalette(BaseModel):
    """Theme colors. background, text, primary and secondary are mandatory."""
    model_config = ConfigDict(frozen=True, extra="allow")

    background: str
    text: str
    primary: str
    secondary: str
    accent: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def accept_bg(cls, data: Any) -> Any:
        if isinstance(data, dict) and "background" not in data and "bg" in data:
            data = dict(data)
            data["background"] = data.pop("bg")
        return data


class FontTokens(BaseModel):
    model_config = ConfigDict(frozen=True)

    heading: Optional[str] = None
    body: Optional[str] = None


class ThemeDefinition(BaseModel):
    """Named color/font palette applied as a style layer."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    name: str = ""
    color_palette: ColorPalette = Field(alias="colorPalette")
    fonts: FontTokens = Field(default_factory=FontTokens)

    @model_validator(mode="before")
    @classmethod
    def accept_colors(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "colorPalette" not in data and "color_palette" not in data and "colors" in data:
            data["colorPalette"] = data.pop("colors")
        if not data.get("name"):
            data["name"] = data.get("id", "")
        return data


@dataclass
class Catalog:
    """Flat, indexed layout/theme catalog."""
    layouts: Dict[str, LayoutDefinition] = field(default_factory=dict)
    themes: Dict[str, ThemeDefinition] = field(default_factory=dict)
    source: str = "builtin"
    fallback: bool = False
    load_error: Optional[str] = None
