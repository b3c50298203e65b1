"""
Project Document Models

Pydantic v2 models for the persisted project state: the ordered item
sequence, cursor, theme binding, zoom and timestamps. Mirrors the JSON Schema
in schemas/project.schema.json. Unknown fields are kept on the model and
written back on save.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .content_types import ContentType

logger = logging.getLogger(__name__)

# Legacy per-page color keys -> style override properties
_LEGACY_COLOR_KEYS = {
    "bg": "background",
    "background": "background",
    "text": "textColor",
    "primary": "primaryColor",
    "secondary": "secondaryColor",
    "accent": "accentColor",
}


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_item_id() -> str:
    return f"item_{uuid.uuid4().hex[:12]}"


def new_project_id() -> str:
    return f"proj_{uuid.uuid4().hex[:12]}"


class Item(BaseModel):
    """One layout instance inside a project."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(default_factory=new_item_id)
    layout_id: str = Field(alias="layoutId")
    content: Dict[str, Any] = Field(default_factory=dict)
    style_overrides: Dict[str, Any] = Field(default_factory=dict, alias="styleOverrides")
    animation: str = "none"

    @model_validator(mode="before")
    @classmethod
    def upgrade_legacy_fields(cls, data: Any) -> Any:
        """Accept the older page shape (``layout``, ``colors``, ``animations``)."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "layoutId" not in data and "layout_id" not in data and "layout" in data:
            data["layoutId"] = data.pop("layout")
        if "styleOverrides" not in data and "style_overrides" not in data and isinstance(data.get("colors"), dict):
            colors = data.pop("colors")
            data["styleOverrides"] = {
                _LEGACY_COLOR_KEYS.get(key, key): value for key, value in colors.items()
            }
        if "animation" not in data and isinstance(data.get("animations"), list):
            animations = data.pop("animations")
            data["animation"] = animations[0] if animations else "none"
        data.pop("order", None)
        return data


class Project(BaseModel):
    """A document: an ordered sequence of items plus view state."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(default_factory=new_project_id)
    name: str = "Untitled Project"
    content_type: ContentType = Field(ContentType.presentation, alias="contentType")
    items: List[Item] = Field(default_factory=list)
    current_index: int = Field(0, alias="currentIndex")
    theme: Optional[str] = None
    zoom_level: float = Field(1.0, alias="zoomLevel", gt=0)
    created_at: str = Field(default_factory=utc_now, alias="createdAt")
    updated_at: str = Field(default_factory=utc_now, alias="updatedAt")

    @model_validator(mode="before")
    @classmethod
    def upgrade_legacy_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "items" not in data and "pages" in data:
            data["items"] = data.pop("pages")
        if "zoomLevel" not in data and "zoom_level" not in data and "zoom" in data:
            data["zoomLevel"] = data.pop("zoom")
        return data

    @model_validator(mode="after")
    def clamp_cursor(self) -> "Project":
        """Keep currentIndex inside [0, len-1], or 0 when empty."""
        if not self.items:
            self.current_index = 0
        else:
            self.current_index = min(max(self.current_index, 0), len(self.items) - 1)
        return self

    def index_of(self, item_id: str) -> Optional[int]:
        for index, item in enumerate(self.items):
            if item.id == item_id:
                return index
        return None

    def get_item(self, item_id: str) -> Optional[Item]:
        index = self.index_of(item_id)
        return None if index is None else self.items[index]

    @property
    def current_item(self) -> Optional[Item]:
        if not self.items:
            return None
        return self.items[self.current_index]

    def touch(self) -> None:
        self.updated_at = utc_now()


def new_project(
    name: str = "New Project",
    content_type: Union[ContentType, str] = ContentType.presentation,
    theme: Optional[str] = None,
) -> Project:
    """Create an empty project."""
    return Project(name=name, content_type=ContentType(content_type), theme=theme)


# ============================================================
# SERIALIZATION
# ============================================================

def project_to_dict(project: Project) -> Dict[str, Any]:
    """JSON-ready mapping with camelCase keys (extra fields included)."""
    return project.model_dump(mode="json", by_alias=True)


def project_from_dict(data: Dict[str, Any]) -> Project:
    return Project.model_validate(data)


def save_project(project: Project, path: Union[str, Path]) -> None:
    """Save a Project to a JSON file."""
    path = Path(path)
    data = project_to_dict(project)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def load_project(path: Union[str, Path]) -> Project:
    """Load a Project from a JSON file.

    A missing, unreadable or corrupt file degrades to a new empty project
    rather than raising.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("project document must be a JSON object")
        return project_from_dict(data)
    except (OSError, ValueError, ValidationError) as exc:
        logger.warning("Could not load project from %s (%s); starting a new project", path, exc)
        return new_project()


# ============================================================
# VALIDATION
# ============================================================

def validate_project_json(path: Union[str, Path]) -> List[str]:
    """Validate a project JSON file against the project schema.

    Returns a list of error strings; empty when the document is valid.
    """
    import jsonschema
    from .schemas import get_project_schema_path

    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        return [f"Invalid JSON: {exc}"]
    except FileNotFoundError:
        return [f"File not found: {path}"]

    with open(get_project_schema_path(), "r", encoding="utf-8") as f:
        schema = json.load(f)

    errors: List[str] = []
    validator = jsonschema.Draft202012Validator(schema)
    for error in validator.iter_errors(data):
        json_path = " -> ".join(str(p) for p in error.absolute_path) if error.absolute_path else "(root)"
        errors.append(f"{json_path}: {error.message}")
    return errors
