"""
Error Kinds

Exception hierarchy shared by the editor, renderer and exporters, plus the
``Outcome`` value returned by model mutations. Mutations report foreseeable
failures (unknown ids) through an ``Outcome`` instead of raising; the
exceptions are raised only at load/export boundaries or by ``unwrap()``.
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class StudioError(Exception):
    """Base class for all document studio errors."""
    code = "STUDIO_ERROR"


class LayoutNotFound(StudioError):
    code = "LAYOUT_NOT_FOUND"

    def __init__(self, layout_id: str):
        super().__init__(f'Layout "{layout_id}" not found')
        self.layout_id = layout_id


class ThemeNotFound(StudioError):
    code = "THEME_NOT_FOUND"

    def __init__(self, theme_id: str):
        super().__init__(f'Theme "{theme_id}" not found')
        self.theme_id = theme_id


class ItemNotFound(StudioError):
    code = "ITEM_NOT_FOUND"

    def __init__(self, item_ref: Any):
        super().__init__(f'Item "{item_ref}" not found')
        self.item_ref = item_ref


class ConfigLoadFailed(StudioError):
    """Catalog source could not be read or parsed. Recovered via the built-in catalog."""
    code = "CONFIG_LOAD_FAILED"

    def __init__(self, source: str, cause: Optional[BaseException] = None):
        message = f"Failed to load catalog from {source}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
        self.source = source
        self.cause = cause


class ExportFailed(StudioError):
    """An exporter could not produce its output."""
    code = "EXPORT_FAILED"

    def __init__(self, export_format: str, cause: Optional[BaseException] = None, message: str = ""):
        text = message or f"{export_format} export failed"
        if cause is not None:
            text += f": {cause}"
        super().__init__(text)
        self.export_format = export_format
        self.cause = cause


class ValidationFailed(StudioError):
    """Advisory: content does not satisfy its layout's slot constraints."""
    code = "VALIDATION_FAILED"

    def __init__(self, report: Any):
        super().__init__("Content failed validation")
        self.report = report


@dataclass
class Outcome(Generic[T]):
    """Result of a model mutation: either applied (``ok``) or rejected with an error."""
    ok: bool
    value: Optional[T] = None
    error: Optional[StudioError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Outcome[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: StudioError) -> "Outcome[T]":
        return cls(ok=False, error=error)

    def unwrap(self) -> Optional[T]:
        """Return the value, raising the carried error if the operation failed."""
        if not self.ok and self.error is not None:
            raise self.error
        return self.value

    def __bool__(self) -> bool:
        return self.ok
