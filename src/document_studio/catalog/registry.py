"""
Layout Registry

Read-only lookups over a loaded catalog. Safe for concurrent reads once
constructed; nothing mutates the catalog after load.
"""

from functools import lru_cache
from typing import List, Optional, Set, Union

from ..content_types import ContentType, get_content_type_spec
from .defaults import FALLBACK_THEME_ID
from .loader import CatalogSource, builtin_catalog, load_catalog, load_catalog_async
from .schema import Catalog, LayoutDefinition, ThemeDefinition


@lru_cache(maxsize=1)
def fallback_theme() -> ThemeDefinition:
    """The documented built-in theme used when a theme id cannot be resolved."""
    return builtin_catalog().themes[FALLBACK_THEME_ID]


class LayoutRegistry:
    """Indexes layouts and themes and answers schema queries."""

    def __init__(self, catalog: Optional[Catalog] = None):
        self._catalog = catalog if catalog is not None else builtin_catalog()

    @classmethod
    def load(cls, source: CatalogSource = None) -> "LayoutRegistry":
        return cls(load_catalog(source))

    @classmethod
    async def load_async(cls, source: CatalogSource = None) -> "LayoutRegistry":
        return cls(await load_catalog_async(source))

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    # Layouts

    def get_layout(self, layout_id: str) -> Optional[LayoutDefinition]:
        return self._catalog.layouts.get(layout_id)

    def has_layout(self, layout_id: str) -> bool:
        return layout_id in self._catalog.layouts

    def list_layouts(self) -> List[LayoutDefinition]:
        return list(self._catalog.layouts.values())

    def get_layouts_by_category(self, category: str) -> List[LayoutDefinition]:
        return [layout for layout in self._catalog.layouts.values() if layout.category == category]

    def list_categories(self) -> Set[str]:
        return {layout.category for layout in self._catalog.layouts.values()}

    def layouts_for_content_type(self, content_type: Union[ContentType, str]) -> List[LayoutDefinition]:
        """Layouts offered for a content type (by its layout categories)."""
        categories = get_content_type_spec(content_type).categories
        return [layout for layout in self._catalog.layouts.values() if layout.category in categories]

    # Themes

    def get_theme(self, theme_id: Optional[str]) -> Optional[ThemeDefinition]:
        if theme_id is None:
            return None
        return self._catalog.themes.get(theme_id)

    def list_themes(self) -> List[ThemeDefinition]:
        return list(self._catalog.themes.values())

    def resolve_theme(self, theme_id: Optional[str]) -> ThemeDefinition:
        """Return the theme, or the built-in fallback theme if it is unknown."""
        theme = self.get_theme(theme_id)
        if theme is not None:
            return theme
        return self._catalog.themes.get(FALLBACK_THEME_ID) or fallback_theme()

    @property
    def default_theme_id(self) -> str:
        """First theme in the catalog, else the fallback theme id."""
        for theme_id in self._catalog.themes:
            return theme_id
        return fallback_theme().id
