"""
Catalog Loader

Reads a layout/theme catalog from YAML or JSON (or an in-memory mapping),
flattens the nested category structures into an indexed ``Catalog``, and
falls back to the built-in catalog when the source is missing or malformed.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from ..errors import ConfigLoadFailed
from .defaults import DEFAULT_CATALOG
from .schema import Catalog, LayoutDefinition, ThemeDefinition

logger = logging.getLogger(__name__)

CatalogSource = Union[str, Path, Mapping[str, Any], None]


# ============================================================
# FILE READING
# ============================================================

def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML or JSON configuration document into a dict."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"expected a mapping at the top level, got {type(data).__name__}")
    return data


# ============================================================
# NORMALIZATION
# ============================================================

def _looks_like_layout(value: Any) -> bool:
    return isinstance(value, dict) and ("slots" in value or "id" in value)


def _flatten_layouts(raw: Any) -> List[Dict[str, Any]]:
    """Normalize flat lists, id-keyed mappings and category trees to a flat list."""
    if raw is None:
        return []
    if isinstance(raw, list):
        return [dict(layout) for layout in raw]
    if not isinstance(raw, dict):
        raise ValueError(f"'layouts' must be a list or mapping, got {type(raw).__name__}")

    flat: List[Dict[str, Any]] = []
    for key, value in raw.items():
        if _looks_like_layout(value):
            layout = dict(value)
            layout.setdefault("id", key)
            flat.append(layout)
        elif isinstance(value, list):
            for layout in value:
                layout = dict(layout)
                layout.setdefault("category", key)
                flat.append(layout)
        elif isinstance(value, dict):
            for subcategory, layouts in value.items():
                if not isinstance(layouts, list):
                    raise ValueError(f"layouts under '{key}/{subcategory}' must be a list")
                for layout in layouts:
                    layout = dict(layout)
                    layout.setdefault("category", key)
                    layout.setdefault("subcategory", subcategory)
                    flat.append(layout)
        else:
            raise ValueError(f"unrecognized layout entry under '{key}'")
    return flat


def _theme_entries(raw: Any) -> Iterable[Dict[str, Any]]:
    if raw is None:
        return []
    if isinstance(raw, list):
        return [dict(theme) for theme in raw]
    if isinstance(raw, dict):
        return [{**theme, "id": theme.get("id", key)} for key, theme in raw.items()]
    raise ValueError(f"'themes' must be a list or mapping, got {type(raw).__name__}")


def parse_catalog(data: Mapping[str, Any], source: str = "inline") -> Catalog:
    """Build a Catalog from a configuration mapping.

    Accepts the manifest shape (``{"components": {"layouts": ..., "themes": ...}}``)
    as well as top-level ``layouts``/``themes``.

    Raises:
        ConfigLoadFailed: if the mapping is malformed or defines no layouts.
    """
    try:
        if "layouts" not in data and isinstance(data.get("components"), dict):
            data = data["components"]

        catalog = Catalog(source=source)
        for raw_layout in _flatten_layouts(data.get("layouts")):
            layout = LayoutDefinition.model_validate(raw_layout)
            if layout.id in catalog.layouts:
                logger.warning("Duplicate layout id '%s' in %s; keeping the first", layout.id, source)
                continue
            catalog.layouts[layout.id] = layout

        for raw_theme in _theme_entries(data.get("themes")):
            theme = ThemeDefinition.model_validate(raw_theme)
            catalog.themes.setdefault(theme.id, theme)
    except (ValidationError, ValueError, TypeError, AttributeError) as exc:
        raise ConfigLoadFailed(source, exc) from exc

    if not catalog.layouts:
        raise ConfigLoadFailed(source, ValueError("catalog defines no layouts"))
    return catalog


def builtin_catalog() -> Catalog:
    """The embedded default catalog."""
    return parse_catalog(DEFAULT_CATALOG, source="builtin")


# ============================================================
# PUBLIC API
# ============================================================

def load_catalog(source: CatalogSource = None) -> Catalog:
    """Load a catalog, absorbing every failure into the built-in fallback.

    Args:
        source: Path to a YAML/JSON file, a configuration mapping, or None
            for the built-in catalog.

    Returns:
        The parsed catalog, or the built-in one with ``fallback=True`` and
        ``load_error`` set when the source could not be used.
    """
    if source is None:
        return builtin_catalog()

    label = "inline" if isinstance(source, Mapping) else str(source)
    try:
        if isinstance(source, Mapping):
            data = source
        else:
            try:
                data = read_config_file(source)
            except (OSError, ValueError, yaml.YAMLError) as exc:
                raise ConfigLoadFailed(label, exc) from exc
        catalog = parse_catalog(data, source=label)
    except ConfigLoadFailed as exc:
        logger.warning("%s; using built-in catalog", exc)
        catalog = builtin_catalog()
        catalog.fallback = True
        catalog.load_error = str(exc)
        return catalog

    logger.info("Loaded %d layouts and %d themes from %s",
                len(catalog.layouts), len(catalog.themes), label)
    return catalog


async def load_catalog_async(source: CatalogSource = None) -> Catalog:
    """Awaitable ``load_catalog`` for callers on an event loop."""
    return await asyncio.to_thread(load_catalog, source)
