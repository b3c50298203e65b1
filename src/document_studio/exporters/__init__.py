"""
Document Exporters

Dispatch from a format name to the writer for it. Every writer consumes
the slot renderer's fragments; none re-derives style on its own.
"""

import asyncio
import logging
from pathlib import Path
from typing import Callable, Dict, Union

from ..catalog.registry import LayoutRegistry
from ..content_types import get_content_type_spec
from ..document import Project
from ..errors import ExportFailed
from .base import ExportReport, ItemFailure, item_guard, items_for_export, render_for_export
from .html import export_html, render_document_html, render_item_html
from .snapshot import export_snapshot, render_snapshot

logger = logging.getLogger(__name__)

FORMAT_ALIASES = {
    "htm": "html",
    "ppt": "pptx",
    "deck": "pptx",
    "image": "png",
    "snapshot": "png",
}

ExportWriter = Callable[..., ExportReport]


def _export_pptx(project, registry, path, strict=False) -> ExportReport:
    # python-pptx is only needed for deck exports.
    try:
        from .deck import export_pptx
    except ImportError as exc:
        raise ExportFailed("pptx", exc, "slide deck writer is unavailable") from exc
    return export_pptx(project, registry, path, strict)


EXPORTERS: Dict[str, ExportWriter] = {
    "html": export_html,
    "pptx": _export_pptx,
    "png": export_snapshot,
}


def normalize_format(export_format: str) -> str:
    key = export_format.lower().lstrip(".")
    return FORMAT_ALIASES.get(key, key)


def export_project(
    project: Project,
    registry: LayoutRegistry,
    export_format: str,
    path: Union[str, Path],
    strict: bool = False,
) -> ExportReport:
    """Export ``project`` to ``path`` in the given format.

    Raises ExportFailed for an unknown format, a format the project's
    content type does not offer, a missing writer dependency, or an I/O
    error. Items that fail to render are listed in the returned report
    unless ``strict`` is set, in which case the first one aborts the export.
    """
    fmt = normalize_format(export_format)
    writer = EXPORTERS.get(fmt)
    if writer is None:
        raise ExportFailed(fmt, message=f"Unknown export format: {export_format}")

    spec = get_content_type_spec(project.content_type)
    if fmt not in spec.export_formats:
        raise ExportFailed(fmt, message=f"{fmt} export is not available for {spec.name} documents")

    logger.debug("Exporting %s (%d items) as %s to %s", project.id, len(project.items), fmt, path)
    report = writer(project, registry, path, strict=strict)
    if report.failures:
        logger.warning("%s export finished with %d failed item(s)", fmt, len(report.failures))
    return report


async def export_async(
    project: Project,
    registry: LayoutRegistry,
    export_format: str,
    path: Union[str, Path],
    strict: bool = False,
) -> ExportReport:
    """Run ``export_project`` in a worker thread.

    The export works on a snapshot of the project, so editing may continue
    while it runs. Cancelling the awaiting task abandons the result.
    """
    snapshot = project.model_copy(deep=True)
    return await asyncio.to_thread(export_project, snapshot, registry, export_format, path, strict)


__all__ = [
    "EXPORTERS",
    "ExportReport",
    "ItemFailure",
    "export_async",
    "export_html",
    "export_project",
    "export_snapshot",
    "item_guard",
    "items_for_export",
    "normalize_format",
    "render_document_html",
    "render_for_export",
    "render_item_html",
    "render_snapshot",
]
