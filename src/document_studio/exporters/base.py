"""
Export Reports

Shared bookkeeping for exporters: which items a content type exports, the
per-item failure report, and the guard that turns a single item's failure
into a report entry (or, in strict mode, into an ExportFailed).
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..catalog.registry import LayoutRegistry
from ..content_types import DocumentShape, get_content_type_spec
from ..document import Item, Project
from ..errors import ExportFailed
from ..fragments import Fragment
from ..renderer import RenderOptions, render_item

logger = logging.getLogger(__name__)


@dataclass
class ItemFailure:
    """An item that could not be exported."""
    item_id: str
    index: int
    error: str


@dataclass
class ExportReport:
    """Result of one export run."""
    export_format: str
    path: Optional[str] = None
    item_count: int = 0
    failures: List[ItemFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def add_failure(self, item_id: str, index: int, error: BaseException) -> None:
        self.failures.append(ItemFailure(item_id=item_id, index=index, error=str(error)))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "format": self.export_format,
            "path": self.path,
            "item_count": self.item_count,
            "ok": self.ok,
            "failures": [
                {"item_id": f.item_id, "index": f.index, "error": f.error}
                for f in self.failures
            ],
        }

    def print_report(self) -> None:
        print(f"Format: {self.export_format}")
        print(f"Output: {self.path}")
        print(f"Items exported: {self.item_count}")
        if self.failures:
            print(f"\nFailed items ({len(self.failures)}):")
            for failure in self.failures:
                print(f"  [{failure.index + 1}] {failure.item_id}: {failure.error}")


@contextmanager
def item_guard(report: ExportReport, item: Item, index: int, strict: bool) -> Iterator[None]:
    """Record a failing item and carry on, or abort the export when ``strict``."""
    try:
        yield
    except Exception as exc:
        if strict:
            raise ExportFailed(report.export_format, exc, f"item {index + 1} ({item.id}) failed") from exc
        logger.warning("Skipping item %s in %s export: %s", item.id, report.export_format, exc)
        report.add_failure(item.id, index, exc)


def items_for_export(project: Project) -> List[Tuple[int, Item]]:
    """(index, item) pairs an export covers: single-item content types export the focused item only."""
    spec = get_content_type_spec(project.content_type)
    if spec.shape == DocumentShape.single:
        current = project.current_item
        return [(project.current_index, current)] if current is not None else []
    return list(enumerate(project.items))


def render_for_export(
    project: Project,
    registry: LayoutRegistry,
    report: ExportReport,
    strict: bool = False,
    options: Optional[RenderOptions] = None,
    items: Optional[List[Tuple[int, Item]]] = None,
) -> List[Tuple[Item, Fragment]]:
    """Render the exported items, reporting the ones that fail."""
    theme = registry.resolve_theme(project.theme)
    rendered: List[Tuple[Item, Fragment]] = []
    for index, item in items if items is not None else items_for_export(project):
        with item_guard(report, item, index, strict):
            fragment = render_item(item, registry.get_layout(item.layout_id), theme, options, index=index)
            rendered.append((item, fragment))
    return rendered
