"""Tests for catalog normalization, loading and the layout registry."""

import asyncio
import json
import tempfile
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from document_studio.catalog import (
    FALLBACK_THEME_ID,
    LayoutDefinition,
    LayoutRegistry,
    SlotContentType,
    SlotRole,
    load_catalog,
    parse_catalog,
)
from document_studio.errors import ConfigLoadFailed


def _write(suffix: str, text: str) -> Path:
    tmp = tempfile.NamedTemporaryFile("w", suffix=suffix, delete=False, encoding="utf-8")
    tmp.write(text)
    tmp.close()
    return Path(tmp.name)


# ============================================================
# SLOT / LAYOUT NORMALIZATION TESTS
# ============================================================

def test_slot_type_aliases_normalized():
    registry = LayoutRegistry()
    assert registry.get_layout("content-slide").get_slot("body").content_type == SlotContentType.longText
    assert registry.get_layout("stat-slide").get_slot("stat1").content_type == SlotContentType.dataMetric
    assert registry.get_layout("layout-flowchart").get_slot("visual").content_type == SlotContentType.diagramSource
    assert registry.get_layout("resume-skills").get_slot("accent").content_type == SlotContentType.colorSwatch
    assert registry.get_layout("instagram-square").get_slot("background").content_type == SlotContentType.backgroundFill


def test_max_chars_and_required_read():
    title = LayoutRegistry().get_layout("title-slide").get_slot("title")
    assert title.max_length == 60
    assert title.required is True
    assert title.placeholder == "Your Title"


def test_layout_style_spellings():
    layout = LayoutRegistry().get_layout("title-slide")
    assert layout.style_defaults["textAlign"] == "center"
    assert "background" in layout.editable_style_properties
    assert "fadeIn" in layout.animation_options


def test_css_default_spelling():
    layout = LayoutDefinition.model_validate({
        "id": "x",
        "css": {"default": {"padding": "40px"}},
        "slots": ["title"],
    })
    assert layout.style_defaults == {"padding": "40px"}
    assert layout.name == "x"


def test_slot_mapping_form():
    layout = LayoutDefinition.model_validate({
        "id": "x",
        "slots": {
            "title": {"type": "text", "placeholder": "T"},
            "body": {"contentType": "longText"},
        },
    })
    assert layout.slot_ids == ["title", "body"]
    assert layout.get_slot("body").content_type == SlotContentType.longText
    assert layout.get_slot("body").placeholder == "Your content goes here..."


def test_slot_names_with_constraints():
    layout = LayoutDefinition.model_validate({
        "id": "x",
        "slots": ["title", "background"],
        "constraints": {"title": {"maxChars": 40, "required": True}},
    })
    title = layout.get_slot("title")
    assert title.max_length == 40
    assert title.required is True
    assert layout.get_slot("background").content_type == SlotContentType.backgroundFill


def test_explicit_role_kept():
    layout = LayoutDefinition.model_validate({
        "id": "x",
        "slots": [{"id": "hook", "type": "text", "role": "heading"}],
    })
    assert layout.get_slot("hook").role == SlotRole.heading


def test_duplicate_slot_ids_rejected():
    with pytest.raises(ValidationError):
        LayoutDefinition.model_validate({"id": "x", "slots": ["title", "title"]})


def test_layout_is_immutable():
    layout = LayoutRegistry().get_layout("title-slide")
    with pytest.raises(ValidationError):
        layout.name = "changed"


def test_placeholder_content_is_a_copy():
    layout = LayoutRegistry().get_layout("stat-slide")
    content = layout.placeholder_content()
    content["stat1"]["value"] = "99"
    assert layout.placeholder_content()["stat1"]["value"] == "0"


def test_theme_accepts_colors_and_bg():
    theme = LayoutRegistry().get_theme("clean-white")
    assert theme.color_palette.background == "#ffffff"
    assert theme.color_palette.primary == "#3b82f6"
    assert theme.fonts.heading == "Poppins, sans-serif"


# ============================================================
# CATALOG PARSING TESTS
# ============================================================

def test_parse_flat_layout_list():
    catalog = parse_catalog({
        "layouts": [{"id": "a", "category": "website", "slots": ["heading"]}],
        "themes": [],
    })
    assert list(catalog.layouts) == ["a"]
    assert catalog.layouts["a"].category == "website"


def test_parse_id_keyed_layouts():
    catalog = parse_catalog({"layouts": {"hero": {"slots": ["headline"], "category": "website"}}})
    assert catalog.layouts["hero"].id == "hero"


def test_parse_nested_categories():
    catalog = parse_catalog({
        "layouts": {
            "presentation": [{"id": "p1", "slots": ["title"]}],
            "website": {"hero": [{"id": "w1", "slots": ["headline"]}]},
        },
        "themes": {"mono": {"colors": {"bg": "#fff", "text": "#000", "primary": "#111", "secondary": "#222"}}},
    })
    assert catalog.layouts["p1"].category == "presentation"
    assert catalog.layouts["w1"].category == "website"
    assert catalog.layouts["w1"].subcategory == "hero"
    assert catalog.themes["mono"].color_palette.background == "#fff"


def test_parse_components_manifest():
    catalog = parse_catalog({"components": {"layouts": [{"id": "a", "slots": ["title"]}]}})
    assert "a" in catalog.layouts


def test_parse_duplicate_layout_keeps_first():
    catalog = parse_catalog({"layouts": [
        {"id": "a", "name": "First", "slots": ["title"]},
        {"id": "a", "name": "Second", "slots": ["title"]},
    ]})
    assert catalog.layouts["a"].name == "First"


def test_parse_empty_catalog_raises():
    with pytest.raises(ConfigLoadFailed):
        parse_catalog({"layouts": []})


def test_parse_malformed_layout_raises():
    with pytest.raises(ConfigLoadFailed):
        parse_catalog({"layouts": [{"name": "no id", "slots": []}]})


# ============================================================
# LOADING TESTS
# ============================================================

def test_load_none_is_builtin():
    catalog = load_catalog(None)
    assert catalog.source == "builtin"
    assert catalog.fallback is False
    assert "title-slide" in catalog.layouts


def test_load_missing_file_falls_back():
    catalog = load_catalog("/nonexistent/catalog.yaml")
    assert catalog.fallback is True
    assert catalog.load_error
    assert "title-slide" in catalog.layouts


def test_load_malformed_yaml_falls_back():
    path = _write(".yaml", "layouts: [unclosed\n")
    try:
        catalog = load_catalog(path)
        assert catalog.fallback is True
    finally:
        path.unlink()


def test_load_non_mapping_falls_back():
    path = _write(".json", json.dumps(["not", "a", "mapping"]))
    try:
        assert load_catalog(path).fallback is True
    finally:
        path.unlink()


def test_load_yaml_file():
    data = {"layouts": {"website": [{"id": "hero", "slots": ["headline"]}]}}
    path = _write(".yaml", yaml.safe_dump(data))
    try:
        catalog = load_catalog(path)
        assert catalog.fallback is False
        assert catalog.source == str(path)
        assert list(catalog.layouts) == ["hero"]
    finally:
        path.unlink()


def test_load_json_file():
    data = {"layouts": [{"id": "only", "slots": ["title"]}]}
    path = _write(".json", json.dumps(data))
    try:
        assert list(load_catalog(path).layouts) == ["only"]
    finally:
        path.unlink()


def test_load_async():
    registry = asyncio.run(LayoutRegistry.load_async(None))
    assert registry.has_layout("title-slide")


# ============================================================
# REGISTRY TESTS
# ============================================================

def test_builtin_categories():
    assert LayoutRegistry().list_categories() == {"presentation", "social", "resume", "website"}


def test_unknown_layout_is_none():
    registry = LayoutRegistry()
    assert registry.get_layout("nope") is None
    assert registry.has_layout("nope") is False


def test_layouts_by_category_in_declaration_order():
    ids = [layout.id for layout in LayoutRegistry().get_layouts_by_category("presentation")]
    assert ids[:3] == ["title-slide", "content-slide", "two-column"]


def test_layouts_for_content_type():
    ids = {layout.id for layout in LayoutRegistry().layouts_for_content_type("post")}
    assert ids == {"instagram-square", "linkedin-post", "twitter-post"}


def test_resolve_unknown_theme_uses_fallback():
    theme = LayoutRegistry().resolve_theme("does-not-exist")
    assert theme.id == FALLBACK_THEME_ID


def test_resolve_theme_without_fallback_in_catalog():
    registry = LayoutRegistry(parse_catalog({"layouts": [{"id": "a", "slots": ["title"]}]}))
    assert registry.resolve_theme(None).id == FALLBACK_THEME_ID
    assert registry.default_theme_id == FALLBACK_THEME_ID


def test_default_theme_is_first_declared():
    assert LayoutRegistry().default_theme_id == "clean-white"
