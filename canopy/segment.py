"""
Segment class - one node along a branch's centerline.

Segments closer to a branch tip are born with smaller final widths, which is
what makes branches taper as they get longer.
"""

from typing import List, Optional, TYPE_CHECKING

from .vector import Vector2D

if TYPE_CHECKING:
    from .branch import Branch


class Segment:
    __slots__ = ('position', 'final_width', 'width', 'growth_increment',
                 'is_tip', 'branch', 'index', '_assigned')

    def __init__(
        self,
        position: Vector2D,
        final_width: float,
        initial_width: float,
        growth_increment: float,
        branch: Optional['Branch'] = None,
        index: int = 0
    ):
        self.position = position
        self.final_width = float(final_width)
        self.width = min(float(initial_width), self.final_width)
        self.growth_increment = float(growth_increment)
        self.is_tip = True
        self.branch = branch
        self.index = index
        self._assigned: List[int] = []  # attraction point indices, this step only

    def update(self):
        if self.width < self.final_width:
            self.width = min(self.width + self.growth_increment, self.final_width)

    @property
    def assigned_points(self) -> List[int]:
        return self._assigned

    def clear_assigned_points(self):
        self._assigned.clear()

    def assign(self, point_index: int):
        self._assigned.append(point_index)

    def __repr__(self) -> str:
        tip = ", tip" if self.is_tip else ""
        return f"Segment({self.position}, width={self.width:.4f}/{self.final_width:.4f}{tip})"
