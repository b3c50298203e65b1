"""
Style Resolution

Three-layer style composition shared by the live preview and every exporter.
Lowest to highest precedence:

    1. layout style defaults
    2. theme palette and font tokens
    3. item style overrides

and a fixed system fallback beneath all of them for the core properties.
"""

from typing import Any, Dict, Mapping, Optional

from .catalog.schema import LayoutDefinition, ThemeDefinition

# Style property -> ("palette" | "fonts", attribute on the theme)
THEME_STYLE_MAP: Dict[str, tuple] = {
    "background": ("palette", "background"),
    "textColor": ("palette", "text"),
    "primaryColor": ("palette", "primary"),
    "secondaryColor": ("palette", "secondary"),
    "accentColor": ("palette", "accent"),
    "fontFamily": ("fonts", "body"),
    "headingFont": ("fonts", "heading"),
}

# Keys copied from a theme into item overrides at creation / theme re-apply.
PALETTE_STYLE_KEYS = ("background", "textColor", "primaryColor", "secondaryColor", "accentColor")

SYSTEM_FALLBACKS: Dict[str, str] = {
    "background": "#ffffff",
    "textColor": "#000000",
    "primaryColor": "#3b82f6",
    "secondaryColor": "#64748b",
    "fontFamily": "Inter, sans-serif",
}

# Fallbacks that defer to another resolved property.
_DERIVED_FALLBACKS = {
    "accentColor": "primaryColor",
    "headingFont": "fontFamily",
}


def _theme_value(theme: Optional[ThemeDefinition], prop: str) -> Optional[Any]:
    if theme is None or prop not in THEME_STYLE_MAP:
        return None
    group, attr = THEME_STYLE_MAP[prop]
    source = theme.color_palette if group == "palette" else theme.fonts
    return getattr(source, attr, None)


def resolve_style(
    prop: str,
    layout: Optional[LayoutDefinition],
    theme: Optional[ThemeDefinition],
    overrides: Optional[Mapping[str, Any]] = None,
) -> Optional[Any]:
    """Resolve one style property through overrides, theme, layout, fallback."""
    if overrides and overrides.get(prop) not in (None, ""):
        return overrides[prop]

    value = _theme_value(theme, prop)
    if value is not None:
        return value

    if layout is not None and layout.style_defaults.get(prop) is not None:
        return layout.style_defaults[prop]

    if prop in SYSTEM_FALLBACKS:
        return SYSTEM_FALLBACKS[prop]
    if prop in _DERIVED_FALLBACKS:
        return resolve_style(_DERIVED_FALLBACKS[prop], layout, theme, overrides)
    return None


def resolve_styles(
    layout: Optional[LayoutDefinition],
    theme: Optional[ThemeDefinition],
    overrides: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Resolve every known property into a flat style mapping.

    The key set is the union of the theme-mapped properties, the layout's
    style defaults and the item's overrides.
    """
    keys = list(THEME_STYLE_MAP)
    if layout is not None:
        keys.extend(k for k in layout.style_defaults if k not in keys)
    if overrides:
        keys.extend(k for k in overrides if k not in keys)

    resolved: Dict[str, Any] = {}
    for key in keys:
        value = resolve_style(key, layout, theme, overrides)
        if value is not None:
            resolved[key] = value
    return resolved


def palette_snapshot(theme: Optional[ThemeDefinition]) -> Dict[str, str]:
    """Palette-derived override values copied into an item (a copy, not a reference)."""
    snapshot: Dict[str, str] = {}
    for key in PALETTE_STYLE_KEYS:
        value = _theme_value(theme, key)
        if value is not None:
            snapshot[key] = value
    return snapshot
