"""
Undo/Redo History

Bounded stacks of whole-project snapshots. Each snapshot is a deep copy of
the Project taken before a mutation; the oldest entry is evicted when the
depth is exceeded.
"""

from collections import deque
from typing import Deque, Optional

from .document import Project


class History:
    """Whole-model snapshot history with a fixed depth."""

    def __init__(self, depth: int = 50):
        if depth < 1:
            raise ValueError("history depth must be at least 1")
        self.depth = depth
        self._undo: Deque[Project] = deque(maxlen=depth)
        self._redo: Deque[Project] = deque(maxlen=depth)

    def record(self, project: Project) -> None:
        """Capture the state before a mutation. Invalidates the redo stack."""
        self._undo.append(project.model_copy(deep=True))
        self._redo.clear()

    def undo(self, current: Project) -> Optional[Project]:
        """Return the previous state, stashing ``current`` for redo."""
        if not self._undo:
            return None
        self._redo.append(current.model_copy(deep=True))
        return self._undo.pop()

    def redo(self, current: Project) -> Optional[Project]:
        if not self._redo:
            return None
        self._undo.append(current.model_copy(deep=True))
        return self._redo.pop()

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def __len__(self) -> int:
        return len(self._undo)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
