"""
Document Studio

Editor core for composable multi-format documents (presentations, social
posts, resumes, websites): a runtime-loaded layout catalog, a project model
with undoable mutations, a pure slot renderer, and HTML/PPTX/PNG exporters
that all draw from the same rendered output.
"""

__version__ = "0.1.0"

from .catalog import (
    LayoutRegistry,
    LayoutDefinition,
    SlotDefinition,
    SlotContentType,
    ThemeDefinition,
    load_catalog,
)

from .content_types import (
    ContentType,
    CONTENT_TYPES,
    get_content_type_spec,
)

from .styles import (
    resolve_style,
    resolve_styles,
)

from .document import (
    Item,
    Project,
    new_project,
    load_project,
    save_project,
    validate_project_json,
)

from .editor import ProjectEditor

from .errors import (
    StudioError,
    LayoutNotFound,
    ThemeNotFound,
    ItemNotFound,
    ConfigLoadFailed,
    ExportFailed,
    ValidationFailed,
    Outcome,
)

from .renderer import (
    RenderOptions,
    render_item,
    render_project,
)

from .exporters import (
    ExportReport,
    export_project,
    export_async,
)

from .validation import (
    ValidationReport,
    validate_content,
)

from .diagnose import (
    diagnose_catalog,
    diagnose_project,
    DiagnosticReport,
)

from .settings import EditorSettings, load_settings
from .tools import ToolSurface

__all__ = [
    # Catalog
    'LayoutRegistry',
    'LayoutDefinition',
    'SlotDefinition',
    'SlotContentType',
    'ThemeDefinition',
    'load_catalog',
    # Content types
    'ContentType',
    'CONTENT_TYPES',
    'get_content_type_spec',
    # Styles
    'resolve_style',
    'resolve_styles',
    # Document model
    'Item',
    'Project',
    'new_project',
    'load_project',
    'save_project',
    'validate_project_json',
    'ProjectEditor',
    # Errors
    'StudioError',
    'LayoutNotFound',
    'ThemeNotFound',
    'ItemNotFound',
    'ConfigLoadFailed',
    'ExportFailed',
    'ValidationFailed',
    'Outcome',
    # Rendering and export
    'RenderOptions',
    'render_item',
    'render_project',
    'ExportReport',
    'export_project',
    'export_async',
    # Validation and diagnostics
    'ValidationReport',
    'validate_content',
    'diagnose_catalog',
    'diagnose_project',
    'DiagnosticReport',
    # Settings and tools
    'EditorSettings',
    'load_settings',
    'ToolSurface',
]
