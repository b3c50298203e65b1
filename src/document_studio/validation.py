"""
Content Validation

Advisory checks of a content map against a layout's slot constraints
(``required`` and ``maxLength``). Never blocks a write; callers decide what
to do with the report.
"""

import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .catalog.schema import LayoutDefinition, SlotDefinition
from .errors import ValidationFailed


def content_length(value: Any) -> int:
    """Character count of a slot value; structured values count their text parts."""
    if value is None:
        return 0
    if isinstance(value, dict):
        if "text" in value:
            return len(str(value["text"]))
        return sum(len(str(v)) for v in value.values() if v is not None)
    return len(str(value))


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, dict):
        return all(is_blank(v) for v in value.values())
    return str(value).strip() == ""


@dataclass
class SlotStatus:
    """Validation result for one slot."""
    slot_id: str
    valid: bool
    length: int
    max_length: Optional[int] = None
    required: bool = False
    errors: List[str] = field(default_factory=list)


@dataclass
class ValidationReport:
    """Per-slot validation results for one layout."""
    layout_id: str
    slots: Dict[str, SlotStatus] = field(default_factory=dict)
    unknown_slots: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return all(status.valid for status in self.slots.values())

    @property
    def errors(self) -> List[str]:
        return [error for status in self.slots.values() for error in status.errors]

    @property
    def warnings(self) -> List[str]:
        return [f"{slot_id} is not a slot of {self.layout_id} and will be ignored" for slot_id in self.unknown_slots]

    def raise_if_invalid(self) -> None:
        """For callers that want exception-style handling."""
        if not self.valid:
            raise ValidationFailed(self)

    def print_report(self, file=None) -> None:
        out = file or sys.stdout
        print(f"Layout: {self.layout_id}  |  {'valid' if self.valid else 'INVALID'}", file=out)
        for status in self.slots.values():
            limit = f"/{status.max_length}" if status.max_length is not None else ""
            mark = "ok  " if status.valid else "FAIL"
            print(f"  {mark} {status.slot_id} ({status.length}{limit})", file=out)
            for error in status.errors:
                print(f"       {error}", file=out)
        for warning in self.warnings:
            print(f"  WARN {warning}", file=out)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "layoutId": self.layout_id,
            "valid": self.valid,
            "errors": self.errors,
            "warnings": self.warnings,
            "slotStatus": {
                slot_id: {
                    "valid": status.valid,
                    "currentLength": status.length,
                    "maxChars": status.max_length,
                    "required": status.required,
                    "errors": list(status.errors),
                }
                for slot_id, status in self.slots.items()
            },
        }


def validate_slot(slot: SlotDefinition, value: Any) -> SlotStatus:
    length = content_length(value)
    errors: List[str] = []
    if slot.required and is_blank(value):
        errors.append(f"{slot.id} is required")
    if slot.max_length is not None and length > slot.max_length:
        errors.append(f"{slot.id} exceeds max {slot.max_length} characters (current: {length})")
    return SlotStatus(
        slot_id=slot.id,
        valid=not errors,
        length=length,
        max_length=slot.max_length,
        required=slot.required,
        errors=errors,
    )


def validate_content(layout: LayoutDefinition, content: Mapping[str, Any]) -> ValidationReport:
    """Check every slot of ``layout`` against ``content``.

    Missing keys count as empty. Keys that are not slots of the layout are
    reported as warnings only.
    """
    report = ValidationReport(layout_id=layout.id)
    for slot in layout.slots:
        report.slots[slot.id] = validate_slot(slot, content.get(slot.id))
    report.unknown_slots = [key for key in content if layout.get_slot(key) is None]
    return report
