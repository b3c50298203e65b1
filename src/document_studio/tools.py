"""
Tool-Call Surface

Structured operations exposed to an external generation agent. Every call
returns a plain dict with a ``success`` flag; nothing raises across this
boundary.
"""

import logging
import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .catalog.schema import LayoutDefinition
from .content_types import ContentType
from .editor import ProjectEditor
from .errors import LayoutNotFound, Outcome, StudioError
from .validation import content_length, validate_content

logger = logging.getLogger(__name__)

TOOL_DESCRIPTIONS: List[Dict[str, Any]] = [
    {
        "name": "list_available_layouts",
        "description": "List layouts (optionally filtered by category or content type) and themes",
        "parameters": {
            "type": "object",
            "properties": {
                "filter": {"type": "string", "description": "Category or content type, e.g. presentation, social, website"},
            },
        },
    },
    {
        "name": "describe_layout",
        "description": "Full slot schema, constraints and style defaults of one layout",
        "parameters": {
            "type": "object",
            "properties": {"layout_id": {"type": "string"}},
            "required": ["layout_id"],
        },
    },
    {
        "name": "create_item",
        "description": "Append an item using a layout, filling slots from a content object",
        "parameters": {
            "type": "object",
            "properties": {
                "layout_id": {"type": "string"},
                "content": {"type": "object", "description": "Slot id -> value"},
            },
            "required": ["layout_id"],
        },
    },
    {
        "name": "update_item_content",
        "description": "Set one slot of an existing item",
        "parameters": {
            "type": "object",
            "properties": {
                "item_id": {"type": "string"},
                "slot": {"type": "string"},
                "value": {"description": "New slot value"},
            },
            "required": ["item_id", "slot", "value"],
        },
    },
    {
        "name": "get_project_summary",
        "description": "Project metadata and the ordered list of items",
        "parameters": {"type": "object", "properties": {}},
    },
    {
        "name": "apply_theme",
        "description": "Bind a theme and re-apply its palette to every item",
        "parameters": {
            "type": "object",
            "properties": {"theme_id": {"type": "string"}},
            "required": ["theme_id"],
        },
    },
    {
        "name": "validate_content",
        "description": "Check a content object against a layout's required/maxLength constraints",
        "parameters": {
            "type": "object",
            "properties": {
                "layout_id": {"type": "string"},
                "content": {"type": "object"},
            },
            "required": ["layout_id", "content"],
        },
    },
]

_CAMEL = re.compile(r"(?<=[a-z0-9])([A-Z])")


def _snake(name: str) -> str:
    return _CAMEL.sub(r"_\1", name).lower()


def _failure(error: Union[StudioError, Exception, str]) -> Dict[str, Any]:
    result: Dict[str, Any] = {"success": False, "error": str(error)}
    code = getattr(error, "code", None)
    if code:
        result["code"] = code
    return result


def _unwrap_value(value: Any) -> Any:
    """Agents may send ``{"text": ...}`` wrappers for plain text slots."""
    if isinstance(value, Mapping) and set(value) <= {"text", "constraints", "metadata"} and "text" in value:
        return value["text"]
    return value


def _slot_values(content: Any) -> Optional[Dict[str, Any]]:
    """Unwrapped slot values, or None when ``content`` is not an object."""
    if content is None:
        return {}
    if not isinstance(content, Mapping):
        return None
    return {slot: _unwrap_value(value) for slot, value in content.items()}


def layout_summary(layout: LayoutDefinition) -> Dict[str, Any]:
    return {
        "id": layout.id,
        "name": layout.name,
        "category": layout.category,
        "subcategory": layout.subcategory,
        "slots": [
            {
                "id": slot.id,
                "contentType": slot.content_type.value,
                "required": slot.required,
                "maxLength": slot.max_length,
            }
            for slot in layout.slots
        ],
        "editableStyleProperties": list(layout.editable_style_properties),
        "animationOptions": list(layout.animation_options),
    }


class ToolSurface:
    """Dict-in, dict-out wrapper around a ProjectEditor."""

    def __init__(self, editor: ProjectEditor):
        self.editor = editor
        self._tools: Dict[str, Callable[..., Dict[str, Any]]] = {
            "list_available_layouts": self.list_available_layouts,
            "describe_layout": self.describe_layout,
            "create_item": self.create_item,
            "update_item_content": self.update_item_content,
            "get_project_summary": self.get_project_summary,
            "apply_theme": self.apply_theme,
            "validate_content": self.validate_content,
        }

    @property
    def registry(self):
        return self.editor.registry

    # ============================================================
    # TOOLS
    # ============================================================

    def list_available_layouts(self, filter: Optional[str] = None) -> Dict[str, Any]:
        if filter is None:
            layouts = self.registry.list_layouts()
        elif filter in {c.value for c in ContentType}:
            layouts = self.registry.layouts_for_content_type(filter)
        else:
            layouts = self.registry.get_layouts_by_category(filter)

        themes = [
            {
                "id": theme.id,
                "name": theme.name,
                "colors": theme.color_palette.model_dump(exclude_none=True),
            }
            for theme in self.registry.list_themes()
        ]
        return {
            "success": True,
            "layouts": [layout_summary(layout) for layout in layouts],
            "themes": themes,
            "totalLayouts": len(layouts),
        }

    def describe_layout(self, layout_id: str) -> Dict[str, Any]:
        layout = self.registry.get_layout(layout_id)
        if layout is None:
            return _failure(LayoutNotFound(layout_id))
        return {"success": True, "layout": layout.model_dump(mode="json", by_alias=True)}

    def create_item(self, layout_id: str, content: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        values = _slot_values(content)
        if values is None:
            return _failure(f"content must be an object, got {type(content).__name__}")
        outcome = self.editor.add_item(layout_id, values)
        if not outcome:
            return _failure(outcome.error)

        item = outcome.value
        layout = self.registry.get_layout(layout_id)
        return {
            "success": True,
            "itemId": item.id,
            "layoutId": layout_id,
            "totalItems": len(self.editor.items),
            "validation": validate_content(layout, item.content).to_dict(),
            "message": f'Item created using layout "{layout.name}"',
        }

    def update_item_content(self, item_id: str, slot: str, value: Any) -> Dict[str, Any]:
        value = _unwrap_value(value)
        outcome = self.editor.update_content(item_id, slot, value)
        if not outcome:
            return _failure(outcome.error)

        result = {
            "success": True,
            "itemId": item_id,
            "slot": slot,
            "newLength": content_length(value),
        }
        layout = self.registry.get_layout(outcome.value.layout_id)
        if layout is not None and layout.get_slot(slot) is not None:
            result["validation"] = validate_content(layout, {slot: value}).to_dict()["slotStatus"][slot]
        return result

    def get_project_summary(self) -> Dict[str, Any]:
        project = self.editor.project
        return {
            "success": True,
            "project": {
                "id": project.id,
                "name": project.name,
                "contentType": project.content_type.value,
                "theme": project.theme,
                "totalItems": len(project.items),
                "currentIndex": project.current_index,
                "items": [
                    {
                        "id": item.id,
                        "layoutId": item.layout_id,
                        "index": index,
                        "contentCount": len(item.content),
                        "animation": item.animation,
                    }
                    for index, item in enumerate(project.items)
                ],
                "createdAt": project.created_at,
                "updatedAt": project.updated_at,
            },
        }

    def apply_theme(self, theme_id: str) -> Dict[str, Any]:
        outcome: Outcome = self.editor.set_theme(theme_id)
        if not outcome:
            return _failure(outcome.error)
        return {"success": True, "themeId": theme_id, "themeName": outcome.value.name}

    def validate_content(self, layout_id: str, content: Mapping[str, Any]) -> Dict[str, Any]:
        layout = self.registry.get_layout(layout_id)
        if layout is None:
            return _failure(LayoutNotFound(layout_id))
        values = _slot_values(content)
        if values is None:
            return _failure(f"content must be an object, got {type(content).__name__}")
        return {"success": True, "validation": validate_content(layout, values).to_dict()}

    # ============================================================
    # DISPATCH
    # ============================================================

    def get_tool_descriptions(self) -> List[Dict[str, Any]]:
        return [dict(tool) for tool in TOOL_DESCRIPTIONS]

    def call_tool(self, name: str, args: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Invoke a tool by name. Accepts snake_case or camelCase names and argument keys."""
        tool = self._tools.get(_snake(name or ""))
        if tool is None:
            return _failure(f"Unknown tool: {name}")

        kwargs = {_snake(key): value for key, value in (args or {}).items()}
        try:
            return tool(**kwargs)
        except TypeError as exc:
            return _failure(f"Invalid arguments for {name}: {exc}")
        except Exception as exc:
            logger.exception("Tool %s failed", name)
            return _failure(exc)
