"""Boundary editing state machine.

- polygon_state: vertex sequence, validation and snapping on append,
  undo-stack removal
- lifecycle: Draft/Locked transitions around save and two-phase unlock
"""

from paddy_boundary.editing.lifecycle import BoundaryLifecycleManager, LifecycleState
from paddy_boundary.editing.polygon_state import BoundaryShape, PolygonState, VertexStack

__all__ = [
    "BoundaryLifecycleManager",
    "BoundaryShape",
    "LifecycleState",
    "PolygonState",
    "VertexStack",
]
