"""
Catalog and Project Diagnostics

Pre-flight checks that catch catalog and document problems before editing
or export: a catalog that fell back to the built-ins, layouts no content
type can offer, placeholders that break their own limits, unparseable
theme colors, items bound to layouts that no longer exist.
"""

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from PIL import ImageColor

from .catalog.defaults import FALLBACK_THEME_ID
from .catalog.registry import LayoutRegistry
from .catalog.schema import LayoutDefinition, SlotContentType, ThemeDefinition
from .content_types import CATEGORY_CONTENT_TYPES, CONTENT_TYPES
from .document import Project
from .styles import THEME_STYLE_MAP
from .validation import content_length, validate_content

# Style knobs the renderer and exporters understand besides the theme-mapped ones.
KNOWN_STYLE_PROPERTIES = frozenset(THEME_STYLE_MAP) | {
    "textAlign", "justify", "padding",
    "headingFontSize", "bodyFontSize", "captionFontSize", "actionFontSize",
}


class Severity(str, Enum):
    """Severity of a diagnostic issue."""
    error = "error"
    warning = "warning"
    info = "info"


@dataclass
class DiagnosticIssue:
    """A single diagnostic finding."""
    code: str
    severity: Severity
    message: str
    item_index: Optional[int] = None
    category: str = ""
    detail: str = ""


@dataclass
class DiagnosticReport:
    """Aggregated diagnostic results."""
    issues: List[DiagnosticIssue] = field(default_factory=list)
    layout_count: int = 0
    theme_count: int = 0
    item_count: int = 0

    @property
    def errors(self) -> List[DiagnosticIssue]:
        return [i for i in self.issues if i.severity == Severity.error]

    @property
    def warnings(self) -> List[DiagnosticIssue]:
        return [i for i in self.issues if i.severity == Severity.warning]

    @property
    def has_blocking_issues(self) -> bool:
        return len(self.errors) > 0

    def add(self, code: str, severity: Severity, message: str, **kwargs) -> None:
        self.issues.append(DiagnosticIssue(code=code, severity=severity, message=message, **kwargs))

    def print_report(self, file=None) -> None:
        """Print a human-readable diagnostic report."""
        out = file or sys.stdout

        print("=" * 60, file=out)
        print("DIAGNOSTIC REPORT", file=out)
        print("=" * 60, file=out)
        print(f"Layouts: {self.layout_count}  |  Themes: {self.theme_count}  |  Items: {self.item_count}", file=out)
        print(f"Issues: {len(self.errors)} errors, {len(self.warnings)} warnings, "
              f"{len(self.issues) - len(self.errors) - len(self.warnings)} info", file=out)
        print("-" * 60, file=out)

        for issue in self.issues:
            prefix = {
                Severity.error: "ERROR  ",
                Severity.warning: "WARN   ",
                Severity.info: "INFO   ",
            }[issue.severity]

            item_str = f" [item {issue.item_index + 1}]" if issue.item_index is not None else ""
            print(f"  {prefix} {issue.code}{item_str}: {issue.message}", file=out)
            if issue.detail:
                print(f"         {issue.detail}", file=out)

        print("-" * 60, file=out)
        if self.has_blocking_issues:
            print("RESULT: BLOCKING errors found.", file=out)
        elif self.warnings:
            print("RESULT: Warnings found. Editing and export will proceed.", file=out)
        else:
            print("RESULT: Looks good!", file=out)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "layout_count": self.layout_count,
            "theme_count": self.theme_count,
            "item_count": self.item_count,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "has_blocking_issues": self.has_blocking_issues,
            "issues": [
                {
                    "code": i.code,
                    "severity": i.severity.value,
                    "message": i.message,
                    "item_index": i.item_index,
                    "category": i.category,
                    "detail": i.detail,
                }
                for i in self.issues
            ],
        }


# ============================================================
# CATALOG CHECKS
# ============================================================

def _check_catalog_source(registry: LayoutRegistry, report: DiagnosticReport) -> None:
    """CAT-001: The configured catalog could not be loaded."""
    catalog = registry.catalog
    if catalog.fallback:
        report.add(
            "CAT-001", Severity.warning,
            "Catalog could not be loaded; using built-in layouts and themes",
            category="catalog",
            detail=str(catalog.load_error or catalog.source),
        )


def _check_layout(layout: LayoutDefinition, report: DiagnosticReport) -> None:
    """CAT-010..014: Per-layout structure checks."""
    if not layout.slots:
        report.add("CAT-010", Severity.warning, f"Layout '{layout.id}' has no slots", category="layout")

    if layout.category not in CATEGORY_CONTENT_TYPES:
        report.add(
            "CAT-011", Severity.info,
            f"Layout '{layout.id}' category '{layout.category}' is not offered by any content type",
            category="layout",
        )

    for slot in layout.slots:
        if slot.content_type in (SlotContentType.backgroundFill, SlotContentType.dataMetric):
            continue
        length = content_length(slot.placeholder)
        if slot.max_length is not None and length > slot.max_length:
            report.add(
                "CAT-012", Severity.warning,
                f"Placeholder of '{layout.id}.{slot.id}' exceeds its own limit",
                category="slot",
                detail=f"{length} > {slot.max_length} characters",
            )

    unknown = [p for p in layout.editable_style_properties
               if p not in KNOWN_STYLE_PROPERTIES and p not in layout.style_defaults]
    if unknown:
        report.add(
            "CAT-013", Severity.info,
            f"Layout '{layout.id}' lists editable properties no renderer reads",
            category="layout",
            detail=", ".join(unknown),
        )


def _check_theme(theme: ThemeDefinition, report: DiagnosticReport) -> None:
    """CAT-020: Theme colors must be parseable."""
    palette = theme.color_palette.model_dump(exclude_none=True)
    for name, value in palette.items():
        try:
            ImageColor.getrgb(str(value))
        except ValueError:
            report.add(
                "CAT-020", Severity.warning,
                f"Theme '{theme.id}' color '{name}' is not a recognized color",
                category="theme",
                detail=str(value),
            )


def _check_fallback_theme(registry: LayoutRegistry, report: DiagnosticReport) -> None:
    """CAT-021: Catalog lacks the fallback theme; the built-in copy is used."""
    if registry.get_theme(FALLBACK_THEME_ID) is None:
        report.add(
            "CAT-021", Severity.info,
            f"Catalog has no '{FALLBACK_THEME_ID}' theme; the built-in one is used as fallback",
            category="theme",
        )


def _check_content_type_coverage(registry: LayoutRegistry, report: DiagnosticReport) -> None:
    """CAT-030: Every content type should offer at least one layout."""
    for content_type in CONTENT_TYPES:
        if not registry.layouts_for_content_type(content_type):
            report.add(
                "CAT-030", Severity.warning,
                f"No layouts available for content type '{content_type.value}'",
                category="catalog",
            )


# ============================================================
# PROJECT CHECKS
# ============================================================

def _check_project(project: Project, registry: LayoutRegistry, report: DiagnosticReport) -> None:
    """PRJ-001..010: Dangling references and slot constraint violations."""
    if project.theme and registry.get_theme(project.theme) is None:
        report.add(
            "PRJ-002", Severity.warning,
            f"Theme '{project.theme}' not found; rendering with the fallback theme",
            category="project",
        )

    for index, item in enumerate(project.items):
        layout = registry.get_layout(item.layout_id)
        if layout is None:
            report.add(
                "PRJ-001", Severity.warning,
                f"Layout '{item.layout_id}' not found; item renders as a placeholder",
                item_index=index,
                category="item",
            )
            continue

        validation = validate_content(layout, item.content)
        for error in validation.errors:
            report.add("PRJ-010", Severity.info, error, item_index=index, category="content")


# ============================================================
# PUBLIC API
# ============================================================

def diagnose_catalog(registry: LayoutRegistry) -> DiagnosticReport:
    """Run all catalog checks and return a report."""
    report = DiagnosticReport(
        layout_count=len(registry.list_layouts()),
        theme_count=len(registry.list_themes()),
    )

    _check_catalog_source(registry, report)
    for layout in registry.list_layouts():
        _check_layout(layout, report)
    for theme in registry.list_themes():
        _check_theme(theme, report)
    _check_fallback_theme(registry, report)
    _check_content_type_coverage(registry, report)
    return report


def diagnose_project(project: Project, registry: LayoutRegistry) -> DiagnosticReport:
    """Check a project against the registry it will be rendered with."""
    report = DiagnosticReport(
        layout_count=len(registry.list_layouts()),
        theme_count=len(registry.list_themes()),
        item_count=len(project.items),
    )
    _check_project(project, registry, report)
    return report
