"""Layout/theme catalog: schema, loader, built-in defaults and registry."""

from .schema import (
    Catalog,
    ColorPalette,
    FontTokens,
    LayoutDefinition,
    SlotContentType,
    SlotDefinition,
    SlotRole,
    SlotValue,
    ThemeDefinition,
)
from .defaults import DEFAULT_CATALOG, FALLBACK_THEME_ID
from .loader import (
    builtin_catalog,
    load_catalog,
    load_catalog_async,
    parse_catalog,
    read_config_file,
)
from .registry import LayoutRegistry, fallback_theme

__all__ = [
    'Catalog',
    'ColorPalette',
    'FontTokens',
    'LayoutDefinition',
    'SlotContentType',
    'SlotDefinition',
    'SlotRole',
    'SlotValue',
    'ThemeDefinition',
    'DEFAULT_CATALOG',
    'FALLBACK_THEME_ID',
    'builtin_catalog',
    'load_catalog',
    'load_catalog_async',
    'parse_catalog',
    'read_config_file',
    'LayoutRegistry',
    'fallback_theme',
]
