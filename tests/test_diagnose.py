"""Tests for the catalog and project diagnostics."""

import io

from document_studio.catalog import LayoutRegistry, load_catalog, parse_catalog
from document_studio.diagnose import (
    DiagnosticReport,
    Severity,
    diagnose_catalog,
    diagnose_project,
)
from document_studio.document import Item, Project


def _registry(data) -> LayoutRegistry:
    return LayoutRegistry(parse_catalog(data))


def _codes(report: DiagnosticReport):
    return [issue.code for issue in report.issues]


_MINIMAL_THEME = {"id": "clean-white", "colors": {"bg": "#fff", "text": "#000", "primary": "#00f", "secondary": "#888"}}


# ============================================================
# DiagnosticReport TESTS
# ============================================================

def test_report_empty():
    report = DiagnosticReport()
    assert report.errors == []
    assert report.warnings == []
    assert not report.has_blocking_issues


def test_report_severity_buckets():
    report = DiagnosticReport()
    report.add("A", Severity.error, "bad")
    report.add("B", Severity.warning, "meh")
    report.add("C", Severity.info, "fyi")
    assert len(report.errors) == 1
    assert len(report.warnings) == 1
    assert report.has_blocking_issues


def test_report_to_dict():
    report = DiagnosticReport(layout_count=3)
    report.add("PRJ-001", Severity.warning, "missing", item_index=2, category="item")
    data = report.to_dict()
    assert data["layout_count"] == 3
    assert data["warning_count"] == 1
    assert data["issues"][0]["severity"] == "warning"
    assert data["issues"][0]["item_index"] == 2


def test_print_report():
    report = DiagnosticReport(item_count=2)
    report.add("PRJ-001", Severity.warning, "Layout 'x' not found", item_index=0)
    out = io.StringIO()
    report.print_report(file=out)
    text = out.getvalue()
    assert "DIAGNOSTIC REPORT" in text
    assert "PRJ-001 [item 1]" in text
    assert "RESULT: Warnings found" in text


# ============================================================
# CATALOG CHECK TESTS
# ============================================================

def test_builtin_catalog_is_clean():
    report = diagnose_catalog(LayoutRegistry())
    assert report.warnings == []
    assert report.errors == []
    assert report.layout_count == len(LayoutRegistry().list_layouts())


def test_fallback_catalog_reported():
    registry = LayoutRegistry(load_catalog("/nonexistent/catalog.json"))
    assert "CAT-001" in _codes(diagnose_catalog(registry))


def test_layout_without_slots():
    registry = _registry({"layouts": [{"id": "empty", "slots": []}], "themes": [_MINIMAL_THEME]})
    assert "CAT-010" in _codes(diagnose_catalog(registry))


def test_layout_in_unoffered_category():
    registry = _registry({"layouts": [{"id": "x", "category": "email", "slots": ["title"]}],
                          "themes": [_MINIMAL_THEME]})
    assert "CAT-011" in _codes(diagnose_catalog(registry))


def test_placeholder_exceeds_limit():
    registry = _registry({
        "layouts": [{"id": "x", "slots": [{"id": "title", "placeholder": "Too long", "maxChars": 3}]}],
        "themes": [_MINIMAL_THEME],
    })
    report = diagnose_catalog(registry)
    issue = next(i for i in report.issues if i.code == "CAT-012")
    assert issue.detail == "8 > 3 characters"


def test_unknown_editable_property():
    registry = _registry({
        "layouts": [{"id": "x", "slots": ["title"], "editableProperties": ["background", "sparkle"]}],
        "themes": [_MINIMAL_THEME],
    })
    issue = next(i for i in diagnose_catalog(registry).issues if i.code == "CAT-013")
    assert issue.detail == "sparkle"


def test_bad_theme_color():
    registry = _registry({
        "layouts": [{"id": "x", "slots": ["title"]}],
        "themes": [{"id": "odd", "colors": {"bg": "nope", "text": "#000", "primary": "#00f", "secondary": "#888"}}],
    })
    codes = _codes(diagnose_catalog(registry))
    assert "CAT-020" in codes
    assert "CAT-021" in codes


def test_content_type_without_layouts():
    registry = _registry({"layouts": [{"id": "x", "category": "presentation", "slots": ["title"]}],
                          "themes": [_MINIMAL_THEME]})
    missing = [i.message for i in diagnose_catalog(registry).issues if i.code == "CAT-030"]
    assert len(missing) == 3
    assert any("'website'" in message for message in missing)


# ============================================================
# PROJECT CHECK TESTS
# ============================================================

def test_dangling_layout_reported():
    project = Project(items=[Item(layout_id="title-slide", content={"title": "T"}), Item(layout_id="gone")])
    report = diagnose_project(project, LayoutRegistry())
    issue = next(i for i in report.issues if i.code == "PRJ-001")
    assert issue.item_index == 1
    assert report.item_count == 2
    assert not report.has_blocking_issues


def test_unknown_theme_reported():
    project = Project(theme="neon")
    assert "PRJ-002" in _codes(diagnose_project(project, LayoutRegistry()))


def test_content_violations_are_info():
    project = Project(items=[Item(layout_id="twitter-post", content={"content": "x" * 300})])
    report = diagnose_project(project, LayoutRegistry())
    issue = next(i for i in report.issues if i.code == "PRJ-010")
    assert issue.severity == Severity.info
    assert "exceeds max 280" in issue.message


def test_clean_project():
    project = Project(theme="clean-white", items=[Item(layout_id="title-slide", content={"title": "T"})])
    assert diagnose_project(project, LayoutRegistry()).issues == []
