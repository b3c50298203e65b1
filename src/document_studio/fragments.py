"""
Render Fragments

The abstract output of the slot renderer: a tree of role-tagged nodes with
raw (unescaped) text and resolved style. Exporters materialize this tree;
none of them look at layouts or themes directly.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional


class FragmentRole(str, Enum):
    item = "item"
    heading = "heading"
    body = "body"
    caption = "caption"
    action = "action"
    background = "background"
    metric = "metric"
    metric_value = "metric-value"
    metric_label = "metric-label"
    metric_trend = "metric-trend"
    diagram = "diagram"
    swatch = "swatch"
    missing_layout = "missing-layout"


# Roles whose text is laid out as a text block by the deck/snapshot exporters.
TEXT_ROLES = (
    FragmentRole.heading,
    FragmentRole.body,
    FragmentRole.caption,
    FragmentRole.action,
    FragmentRole.missing_layout,
)


@dataclass
class Fragment:
    """One node of the rendered tree."""
    role: FragmentRole
    text: Optional[str] = None
    style: Dict[str, Any] = field(default_factory=dict)
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List["Fragment"] = field(default_factory=list)

    def walk(self) -> Iterator["Fragment"]:
        """Depth-first traversal including this node."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find_all(self, role: FragmentRole) -> List["Fragment"]:
        return [node for node in self.walk() if node.role == role]

    def texts(self) -> List[str]:
        """All non-empty text in document order."""
        return [node.text for node in self.walk() if node.text]

    @property
    def slot_id(self) -> Optional[str]:
        return self.attrs.get("slot")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "role": self.role.value,
            "text": self.text,
            "style": dict(self.style),
            "attrs": dict(self.attrs),
            "children": [child.to_dict() for child in self.children],
        }
