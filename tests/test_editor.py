"""Tests for ProjectEditor mutations, cursor rules and undo/redo."""

import pytest

from document_studio.catalog import LayoutRegistry
from document_studio.document import Project, project_to_dict
from document_studio.errors import ItemNotFound, LayoutNotFound, ThemeNotFound
from document_studio.editor import ProjectEditor
from document_studio.settings import EditorSettings


def _editor(**settings) -> ProjectEditor:
    return ProjectEditor(LayoutRegistry(), settings=EditorSettings(**settings))


def _editor_with(*layout_ids, **settings) -> ProjectEditor:
    editor = _editor(**settings)
    for layout_id in layout_ids:
        editor.add_item(layout_id).unwrap()
    return editor


# ============================================================
# ADD / REMOVE / DUPLICATE TESTS
# ============================================================

def test_new_editor_binds_default_theme():
    editor = _editor()
    assert editor.project.theme == "clean-white"
    assert editor.is_empty


def test_add_item_seeds_placeholders_and_palette():
    editor = _editor()
    item = editor.add_item("title-slide").unwrap()
    assert item.content == {"title": "Your Title", "subtitle": "Subtitle"}
    assert item.style_overrides["background"] == "#ffffff"
    assert item.style_overrides["primaryColor"] == "#3b82f6"
    assert editor.project.current_index == 0


def test_add_item_with_content():
    editor = _editor()
    item = editor.add_item("title-slide", {"title": "Q3 Results"}).unwrap()
    assert item.content["title"] == "Q3 Results"
    assert item.content["subtitle"] == "Subtitle"


def test_add_item_unknown_layout_fails_without_change():
    editor = _editor_with("title-slide")
    before = editor.project.model_copy(deep=True)

    outcome = editor.add_item("nope")

    assert not outcome
    assert isinstance(outcome.error, LayoutNotFound)
    assert str(outcome.error) == 'Layout "nope" not found'
    assert editor.project == before
    with pytest.raises(LayoutNotFound):
        outcome.unwrap()


def test_add_item_moves_cursor_to_new_item():
    editor = _editor_with("title-slide", "content-slide")
    assert editor.project.current_index == 1


def test_palette_snapshot_is_independent_of_theme():
    editor = _editor_with("title-slide")
    editor.items[0].style_overrides["background"] = "#000000"
    second = editor.add_item("content-slide").unwrap()
    assert second.style_overrides["background"] == "#ffffff"


def test_remove_item_clamps_cursor():
    editor = _editor_with("title-slide", "content-slide", "quote-slide")
    last = editor.items[2]
    assert editor.remove_item(last.id).ok
    assert len(editor.items) == 2
    assert editor.project.current_index == 1


def test_remove_item_before_cursor_shifts_cursor():
    editor = _editor_with("title-slide", "content-slide", "quote-slide")
    editor.set_cursor(2)
    current = editor.current_item
    editor.remove_item(editor.items[0].id)
    assert editor.current_item is current
    assert editor.project.current_index == 1


def test_remove_last_item_leaves_empty_project():
    editor = _editor_with("title-slide")
    editor.remove_item(editor.items[0].id)
    assert editor.is_empty
    assert editor.project.current_index == 0
    assert editor.current_item is None


def test_remove_unknown_item_is_noop():
    editor = _editor_with("title-slide")
    outcome = editor.remove_item("missing")
    assert outcome.ok
    assert outcome.value is None
    assert len(editor.items) == 1
    assert len(editor.history) == 1


def test_duplicate_inserts_after_with_new_id():
    editor = _editor_with("title-slide", "content-slide")
    original = editor.items[0]
    duplicate = editor.duplicate_item(original.id).unwrap()
    assert editor.items[1] is duplicate
    assert duplicate.id != original.id
    assert duplicate.content == original.content
    assert duplicate.content is not original.content
    assert editor.project.current_index == 1


def test_duplicate_unknown_item_fails():
    outcome = _editor().duplicate_item("missing")
    assert isinstance(outcome.error, ItemNotFound)


# ============================================================
# MOVE TESTS
# ============================================================

def _labels(editor):
    return [item.content["label"] for item in editor.items]


def _abcd_editor() -> ProjectEditor:
    editor = _editor()
    for label in "ABCD":
        editor.add_item("content-slide", {"label": label}).unwrap()
    return editor


def test_move_forward_shifts_cursor_back():
    editor = _abcd_editor()
    editor.set_cursor(2)
    editor.move_item(0, 3).unwrap()
    assert _labels(editor) == ["B", "C", "D", "A"]
    assert editor.project.current_index == 1
    assert editor.current_item.content["label"] == "C"


def test_move_backward_shifts_cursor_forward():
    editor = _abcd_editor()
    editor.set_cursor(1)
    editor.move_item(3, 0).unwrap()
    assert _labels(editor) == ["D", "A", "B", "C"]
    assert editor.current_item.content["label"] == "B"


def test_move_current_item_follows():
    editor = _abcd_editor()
    editor.set_cursor(0)
    editor.move_item(0, 2).unwrap()
    assert _labels(editor) == ["B", "C", "A", "D"]
    assert editor.project.current_index == 2


def test_move_outside_range_leaves_cursor():
    editor = _abcd_editor()
    editor.set_cursor(3)
    editor.move_item(0, 1).unwrap()
    assert editor.project.current_index == 3


def test_move_out_of_range_fails():
    editor = _abcd_editor()
    outcome = editor.move_item(0, 9)
    assert isinstance(outcome.error, ItemNotFound)
    assert _labels(editor) == ["A", "B", "C", "D"]


# ============================================================
# CONTENT / STYLE / LAYOUT TESTS
# ============================================================

def test_update_content_is_not_length_checked():
    editor = _editor_with("title-slide")
    item = editor.items[0]
    long_title = "x" * 500
    editor.update_content(item.id, "title", long_title).unwrap()
    assert item.content["title"] == long_title


def test_update_content_unknown_item():
    outcome = _editor().update_content("missing", "title", "x")
    assert isinstance(outcome.error, ItemNotFound)


def test_style_override_set_and_clear():
    editor = _editor_with("title-slide")
    item = editor.items[0]
    editor.update_style_override(item.id, "textAlign", "left").unwrap()
    assert item.style_overrides["textAlign"] == "left"
    editor.clear_style_override(item.id, "textAlign").unwrap()
    assert "textAlign" not in item.style_overrides


def test_change_layout_resets_content():
    editor = _editor_with("title-slide")
    item = editor.items[0]
    editor.update_content(item.id, "title", "Kept?")
    editor.change_layout(item.id, "quote-slide").unwrap()
    assert item.layout_id == "quote-slide"
    assert "title" not in item.content
    assert set(item.content) == set(editor.registry.get_layout("quote-slide").slot_ids)


def test_change_layout_unknown_layout():
    editor = _editor_with("title-slide")
    outcome = editor.change_layout(editor.items[0].id, "nope")
    assert isinstance(outcome.error, LayoutNotFound)
    assert editor.items[0].layout_id == "title-slide"


def test_set_animation_defaults_to_none():
    editor = _editor_with("title-slide")
    item = editor.items[0]
    editor.set_animation(item.id, "fadeIn")
    assert item.animation == "fadeIn"
    editor.set_animation(item.id, "")
    assert item.animation == "none"


# ============================================================
# PROJECT-LEVEL TESTS
# ============================================================

def test_set_theme_overwrites_palette_keys_only():
    editor = _editor_with("title-slide", "content-slide")
    first = editor.items[0]
    editor.update_style_override(first.id, "background", "#123456")
    editor.update_style_override(first.id, "textAlign", "left")

    editor.set_theme("dark-mode").unwrap()

    assert editor.project.theme == "dark-mode"
    for item in editor.items:
        assert item.style_overrides["background"] == "#1a1a2e"
    assert first.style_overrides["textAlign"] == "left"


def test_set_theme_unknown():
    editor = _editor()
    outcome = editor.set_theme("nope")
    assert isinstance(outcome.error, ThemeNotFound)
    assert editor.project.theme == "clean-white"


def test_set_content_type_and_rename():
    editor = _editor()
    editor.set_content_type("post").unwrap()
    editor.rename("Launch").unwrap()
    assert editor.project.content_type.value == "post"
    assert editor.project.name == "Launch"


# ============================================================
# CURSOR / ZOOM TESTS
# ============================================================

def test_set_cursor_clamps():
    editor = _editor_with("title-slide", "content-slide")
    editor.set_cursor(10)
    assert editor.project.current_index == 1
    editor.set_cursor(-4)
    assert editor.project.current_index == 0


def test_set_cursor_on_empty_is_noop():
    editor = _editor()
    outcome = editor.set_cursor(3)
    assert outcome.ok
    assert editor.project.current_index == 0


def test_next_and_previous_stop_at_ends():
    editor = _editor_with("title-slide", "content-slide")
    editor.next_item()
    assert editor.project.current_index == 1
    editor.set_cursor(0)
    editor.previous_item()
    assert editor.project.current_index == 0


def test_zoom_clamped():
    editor = _editor()
    assert editor.set_zoom(5.0) == 2.0
    assert editor.set_zoom(0.01) == 0.3
    editor.set_zoom(1.0)
    assert editor.zoom_in() == 1.1
    assert editor.zoom_out() == 1.0


def test_loaded_zoom_clamped_to_settings():
    project = Project.model_validate({"zoomLevel": 50})
    editor = ProjectEditor(LayoutRegistry(), project=project, settings=EditorSettings())
    assert editor.project.zoom_level == 2.0
    assert project_to_dict(editor.project)["zoomLevel"] == 2.0

    small = ProjectEditor(LayoutRegistry(), project=Project(zoom_level=0.05))
    assert small.project.zoom_level == 0.3


def test_view_state_not_recorded():
    editor = _editor_with("title-slide", "content-slide")
    depth = len(editor.history)
    editor.set_cursor(0)
    editor.set_zoom(1.5)
    assert len(editor.history) == depth


# ============================================================
# UNDO / REDO TESTS
# ============================================================

def test_undo_redo_add():
    editor = _editor()
    editor.add_item("title-slide")
    assert editor.undo() is True
    assert editor.is_empty
    assert editor.redo() is True
    assert len(editor.items) == 1


def test_undo_with_empty_history():
    editor = _editor()
    assert editor.undo() is False
    assert editor.redo() is False


def test_mutation_after_undo_truncates_redo():
    editor = _editor_with("title-slide", "content-slide")
    editor.undo()
    editor.add_item("quote-slide")
    assert editor.redo() is False
    assert [item.layout_id for item in editor.items] == ["title-slide", "quote-slide"]


def test_history_depth_evicts_oldest():
    editor = _editor(history_depth=2)
    for layout_id in ("title-slide", "content-slide", "quote-slide"):
        editor.add_item(layout_id)
    assert editor.undo()
    assert editor.undo()
    assert editor.undo() is False
    assert [item.layout_id for item in editor.items] == ["title-slide"]


def test_failed_mutation_not_recorded():
    editor = _editor()
    editor.add_item("nope")
    assert not editor.history.can_undo
