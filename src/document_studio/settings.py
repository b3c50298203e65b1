"""
Editor Settings

Tunables for the editor (history depth, zoom range, catalog location),
loaded from an optional YAML/JSON file with ``DOCSTUDIO_*`` environment
variables applied on top.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from .catalog.loader import read_config_file
from .content_types import ContentType

logger = logging.getLogger(__name__)

ENV_OVERRIDES = {
    "DOCSTUDIO_CATALOG": "catalog_path",
    "DOCSTUDIO_HISTORY_DEPTH": "history_depth",
    "DOCSTUDIO_ZOOM_MIN": "zoom_min",
    "DOCSTUDIO_ZOOM_MAX": "zoom_max",
    "DOCSTUDIO_ZOOM_STEP": "zoom_step",
    "DOCSTUDIO_CONTENT_TYPE": "default_content_type",
}


class EditorSettings(BaseModel):
    """Editor configuration."""
    catalog_path: Optional[str] = None
    history_depth: int = Field(50, ge=1)
    zoom_min: float = Field(0.3, gt=0)
    zoom_max: float = Field(2.0, gt=0)
    zoom_step: float = Field(0.1, gt=0)
    default_content_type: ContentType = ContentType.presentation
    default_theme: Optional[str] = None

    @model_validator(mode="after")
    def zoom_range_ordered(self) -> "EditorSettings":
        if self.zoom_min > self.zoom_max:
            raise ValueError(f"zoom_min ({self.zoom_min}) exceeds zoom_max ({self.zoom_max})")
        return self

    def clamp_zoom(self, level: float) -> float:
        return round(min(self.zoom_max, max(self.zoom_min, level)), 4)


def _env_values(environ: Dict[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for env_name, field_name in ENV_OVERRIDES.items():
        if environ.get(env_name):
            values[field_name] = environ[env_name]
    return values


def load_settings(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Dict[str, str]] = None,
) -> EditorSettings:
    """Load settings from a file (if given) and environment overrides.

    An unreadable or invalid settings file is logged and ignored; invalid
    environment values are logged and the file/default values kept.
    """
    environ = dict(os.environ) if environ is None else environ

    data: Dict[str, Any] = {}
    if path is not None:
        try:
            data = read_config_file(path)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            logger.warning("Failed to read settings from %s: %s, using defaults", path, exc)

    try:
        settings = EditorSettings(**data)
    except ValidationError as exc:
        logger.warning("Invalid settings in %s: %s, using defaults", path, exc)
        settings = EditorSettings()

    overrides = _env_values(environ)
    if overrides:
        try:
            settings = EditorSettings(**{**settings.model_dump(), **overrides})
        except ValidationError as exc:
            logger.warning("Ignoring invalid DOCSTUDIO_* environment overrides: %s", exc)
    return settings
