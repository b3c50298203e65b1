"""Tests for three-layer style resolution."""

from document_studio.catalog import LayoutDefinition, LayoutRegistry, ThemeDefinition
from document_studio.styles import (
    PALETTE_STYLE_KEYS,
    SYSTEM_FALLBACKS,
    palette_snapshot,
    resolve_style,
    resolve_styles,
)


def _layout(**style):
    return LayoutDefinition.model_validate({"id": "x", "slots": ["title"], "style": style})


def _theme(**colors):
    palette = {"bg": "#111111", "text": "#eeeeee", "primary": "#ff0000", "secondary": "#00ff00"}
    palette.update(colors)
    return ThemeDefinition.model_validate({"id": "t", "colors": palette})


# ============================================================
# PRECEDENCE TESTS
# ============================================================

def test_override_beats_theme_and_layout():
    layout = _layout(background="#abcdef")
    theme = _theme()
    assert resolve_style("background", layout, theme, {"background": "#000000"}) == "#000000"


def test_theme_beats_layout_default():
    layout = _layout(background="#abcdef")
    assert resolve_style("background", layout, _theme()) == "#111111"


def test_layout_default_used_without_theme():
    layout = _layout(background="#abcdef")
    assert resolve_style("background", layout, None) == "#abcdef"


def test_system_fallback_without_anything():
    assert resolve_style("background", None, None) == "#ffffff"
    assert resolve_style("textColor", None, None) == "#000000"


def test_removing_theme_binding_yields_white_background():
    layout = _layout()
    assert resolve_style("background", layout, _theme()) == "#111111"
    assert resolve_style("background", layout, None) == SYSTEM_FALLBACKS["background"]


def test_none_override_does_not_mask_theme():
    assert resolve_style("primaryColor", None, _theme(), {"primaryColor": None}) == "#ff0000"


def test_empty_override_does_not_mask_theme_or_layout():
    assert resolve_style("primaryColor", None, _theme(), {"primaryColor": ""}) == "#ff0000"
    layout = _layout(textAlign="center")
    assert resolve_style("textAlign", layout, None, {"textAlign": ""}) == "center"


def test_unmapped_property_comes_from_layout_or_override():
    layout = _layout(textAlign="center")
    assert resolve_style("textAlign", layout, _theme()) == "center"
    assert resolve_style("textAlign", layout, _theme(), {"textAlign": "left"}) == "left"
    assert resolve_style("textAlign", None, None) is None


def test_accent_falls_back_to_primary():
    theme = _theme()
    assert theme.color_palette.accent is None
    assert resolve_style("accentColor", None, theme) == "#ff0000"


def test_heading_font_falls_back_to_body_font():
    assert resolve_style("headingFont", None, None) == SYSTEM_FALLBACKS["fontFamily"]


def test_resolution_is_deterministic():
    layout = LayoutRegistry().get_layout("title-slide")
    theme = LayoutRegistry().get_theme("dark-mode")
    overrides = {"primaryColor": "#123456"}
    assert resolve_styles(layout, theme, overrides) == resolve_styles(layout, theme, overrides)


# ============================================================
# resolve_styles / palette_snapshot TESTS
# ============================================================

def test_resolve_styles_merges_all_layers():
    layout = _layout(textAlign="center", padding="40px")
    styles = resolve_styles(layout, _theme(), {"letterSpacing": "1px"})
    assert styles["background"] == "#111111"
    assert styles["textAlign"] == "center"
    assert styles["padding"] == "40px"
    assert styles["letterSpacing"] == "1px"


def test_palette_snapshot_copies_palette_keys():
    snapshot = palette_snapshot(LayoutRegistry().get_theme("dark-mode"))
    assert set(snapshot) == set(PALETTE_STYLE_KEYS)
    assert snapshot["background"] == "#1a1a2e"
    assert snapshot["textColor"] == "#ffffff"


def test_palette_snapshot_without_theme_is_empty():
    assert palette_snapshot(None) == {}
