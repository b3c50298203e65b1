"""
Project Editor

The single authority for mutating a Project. Every mutation validates its
references first, records an undo snapshot, then applies the change in full;
foreseeable failures (unknown layout/theme/item) come back as a failed
``Outcome`` and leave the project untouched.
"""

import copy
import logging
from typing import Any, Dict, List, Optional, Union

from .catalog.registry import LayoutRegistry
from .catalog.schema import ThemeDefinition
from .content_types import ContentType
from .document import Item, Project, new_item_id, new_project
from .errors import ItemNotFound, LayoutNotFound, Outcome, ThemeNotFound
from .history import History
from .settings import EditorSettings
from .styles import PALETTE_STYLE_KEYS, palette_snapshot

logger = logging.getLogger(__name__)


class ProjectEditor:
    """Owns a Project and applies all model operations to it."""

    def __init__(
        self,
        registry: LayoutRegistry,
        project: Optional[Project] = None,
        settings: Optional[EditorSettings] = None,
    ):
        self.registry = registry
        self.settings = settings or EditorSettings()
        if project is None:
            project = new_project(
                content_type=self.settings.default_content_type,
                theme=self.settings.default_theme,
            )
        if project.theme is None:
            project.theme = registry.default_theme_id
        project.zoom_level = self.settings.clamp_zoom(project.zoom_level)
        self.project = project
        self.history = History(self.settings.history_depth)

    # ============================================================
    # QUERIES
    # ============================================================

    @property
    def items(self) -> List[Item]:
        return self.project.items

    @property
    def is_empty(self) -> bool:
        return not self.project.items

    @property
    def current_item(self) -> Optional[Item]:
        return self.project.current_item

    @property
    def theme(self) -> ThemeDefinition:
        """The bound theme, or the built-in fallback if the id is unknown."""
        return self.registry.resolve_theme(self.project.theme)

    def get_item(self, item_id: str) -> Optional[Item]:
        return self.project.get_item(item_id)

    # ============================================================
    # INTERNALS
    # ============================================================

    def _record(self) -> None:
        self.history.record(self.project)

    def _require_item(self, item_id: str) -> Union[Item, ItemNotFound]:
        item = self.project.get_item(item_id)
        return item if item is not None else ItemNotFound(item_id)

    # ============================================================
    # ITEM LIFECYCLE
    # ============================================================

    def add_item(self, layout_id: str, content: Optional[Dict[str, Any]] = None) -> Outcome[Item]:
        """Append a new item seeded from the layout's placeholders.

        ``content`` values, when given, replace the seeded placeholders.
        The current theme's palette is copied into the item's style overrides.
        """
        layout = self.registry.get_layout(layout_id)
        if layout is None:
            return Outcome.failure(LayoutNotFound(layout_id))

        seeded = layout.placeholder_content()
        for slot_id, value in (content or {}).items():
            seeded[slot_id] = copy.deepcopy(value)

        item = Item(
            layout_id=layout_id,
            content=seeded,
            style_overrides=palette_snapshot(self.theme),
        )

        self._record()
        self.project.items.append(item)
        self.project.current_index = len(self.project.items) - 1
        self.project.touch()
        logger.debug("Added item %s (%s) at %d", item.id, layout_id, self.project.current_index)
        return Outcome.success(item)

    def remove_item(self, item_id: str) -> Outcome[Item]:
        """Remove an item; unknown ids are a successful no-op."""
        index = self.project.index_of(item_id)
        if index is None:
            return Outcome.success(None)

        self._record()
        removed = self.project.items.pop(index)
        if index < self.project.current_index:
            self.project.current_index -= 1
        self.project.current_index = max(0, min(self.project.current_index, len(self.project.items) - 1))
        self.project.touch()
        return Outcome.success(removed)

    def duplicate_item(self, item_id: str) -> Outcome[Item]:
        """Deep-copy an item under a fresh id, directly after the original."""
        index = self.project.index_of(item_id)
        if index is None:
            return Outcome.failure(ItemNotFound(item_id))

        duplicate = self.project.items[index].model_copy(deep=True, update={"id": new_item_id()})

        self._record()
        self.project.items.insert(index + 1, duplicate)
        self.project.current_index = index + 1
        self.project.touch()
        return Outcome.success(duplicate)

    def move_item(self, from_index: int, to_index: int) -> Outcome[Item]:
        """Reorder with list-splice semantics, keeping the cursor on its item."""
        count = len(self.project.items)
        for index in (from_index, to_index):
            if not 0 <= index < count:
                return Outcome.failure(ItemNotFound(f"index {index}"))
        if from_index == to_index:
            return Outcome.success(self.project.items[from_index])

        self._record()
        moved = self.project.items.pop(from_index)
        self.project.items.insert(to_index, moved)

        current = self.project.current_index
        if current == from_index:
            current = to_index
        elif from_index < current <= to_index:
            current -= 1
        elif to_index <= current < from_index:
            current += 1
        self.project.current_index = current
        self.project.touch()
        return Outcome.success(moved)

    # ============================================================
    # ITEM CONTENT AND STYLE
    # ============================================================

    def update_content(self, item_id: str, slot_id: str, value: Any) -> Outcome[Item]:
        """Set one slot's content. Length limits are advisory and never enforced here."""
        item = self._require_item(item_id)
        if isinstance(item, ItemNotFound):
            return Outcome.failure(item)

        self._record()
        item.content[slot_id] = value
        self.project.touch()
        return Outcome.success(item)

    def update_style_override(self, item_id: str, prop: str, value: Any) -> Outcome[Item]:
        item = self._require_item(item_id)
        if isinstance(item, ItemNotFound):
            return Outcome.failure(item)

        self._record()
        item.style_overrides[prop] = value
        self.project.touch()
        return Outcome.success(item)

    def clear_style_override(self, item_id: str, prop: str) -> Outcome[Item]:
        """Drop an override so the theme/layout value shows through again."""
        item = self._require_item(item_id)
        if isinstance(item, ItemNotFound):
            return Outcome.failure(item)
        if prop not in item.style_overrides:
            return Outcome.success(item)

        self._record()
        del item.style_overrides[prop]
        self.project.touch()
        return Outcome.success(item)

    def change_layout(self, item_id: str, new_layout_id: str) -> Outcome[Item]:
        """Rebind an item's layout. Content is reset to the new placeholders (lossy)."""
        layout = self.registry.get_layout(new_layout_id)
        if layout is None:
            return Outcome.failure(LayoutNotFound(new_layout_id))
        item = self._require_item(item_id)
        if isinstance(item, ItemNotFound):
            return Outcome.failure(item)

        self._record()
        item.layout_id = new_layout_id
        item.content = layout.placeholder_content()
        self.project.touch()
        return Outcome.success(item)

    def set_animation(self, item_id: str, animation: str) -> Outcome[Item]:
        item = self._require_item(item_id)
        if isinstance(item, ItemNotFound):
            return Outcome.failure(item)

        self._record()
        item.animation = animation or "none"
        self.project.touch()
        return Outcome.success(item)

    # ============================================================
    # PROJECT-LEVEL
    # ============================================================

    def set_theme(self, theme_id: str) -> Outcome[ThemeDefinition]:
        """Bind a theme and re-apply its palette to every item.

        Palette-derived override keys are overwritten on all items (manual
        per-item palette edits are discarded); other overrides are kept.
        """
        theme = self.registry.get_theme(theme_id)
        if theme is None:
            return Outcome.failure(ThemeNotFound(theme_id))

        snapshot = palette_snapshot(theme)

        self._record()
        self.project.theme = theme_id
        for item in self.project.items:
            for key in PALETTE_STYLE_KEYS:
                item.style_overrides.pop(key, None)
            item.style_overrides.update(snapshot)
        self.project.touch()
        return Outcome.success(theme)

    def set_content_type(self, content_type: Union[ContentType, str]) -> Outcome[ContentType]:
        value = ContentType(content_type)
        self._record()
        self.project.content_type = value
        self.project.touch()
        return Outcome.success(value)

    def rename(self, name: str) -> Outcome[str]:
        self._record()
        self.project.name = name
        self.project.touch()
        return Outcome.success(name)

    # ============================================================
    # VIEW STATE (not recorded in history)
    # ============================================================

    def set_cursor(self, index: int) -> Outcome[Item]:
        """Focus an item by index, clamped into range. No-op when empty."""
        if self.is_empty:
            return Outcome.success(None)
        self.project.current_index = max(0, min(index, len(self.project.items) - 1))
        return Outcome.success(self.current_item)

    def next_item(self) -> Outcome[Item]:
        return self.set_cursor(self.project.current_index + 1)

    def previous_item(self) -> Outcome[Item]:
        return self.set_cursor(self.project.current_index - 1)

    def set_zoom(self, level: float) -> float:
        self.project.zoom_level = self.settings.clamp_zoom(level)
        return self.project.zoom_level

    def zoom_in(self) -> float:
        return self.set_zoom(self.project.zoom_level + self.settings.zoom_step)

    def zoom_out(self) -> float:
        return self.set_zoom(self.project.zoom_level - self.settings.zoom_step)

    # ============================================================
    # UNDO / REDO
    # ============================================================

    def undo(self) -> bool:
        previous = self.history.undo(self.project)
        if previous is None:
            return False
        self.project = previous
        return True

    def redo(self) -> bool:
        following = self.history.redo(self.project)
        if following is None:
            return False
        self.project = following
        return True
