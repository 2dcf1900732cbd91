"""
Branch class - an ordered run of segments grown from a single base.

Each branch grows at most once per simulation step. The trunk meanders
upward on its own until it gets too thin; lateral branches only grow when
attraction points pull their tip.
"""

import math
from typing import Optional, Tuple

from .config import TreeConfig
from .vector import Vector2D
from .segment import Segment

UNIT_RIGHT = Vector2D(1.0, 0.0)


class Branch:
    __slots__ = ('id', 'config', 'base_angle', 'base_width', 'current_width', 'min_width',
                 'is_trunk', 'level', 'parent', 'parent_segment_index',
                 'meander_phase', 'grew_this_step', '_segments')

    def __init__(
        self,
        branch_id: int,
        position: Vector2D,
        base_angle: float,
        base_width: float,
        config: TreeConfig,
        is_trunk: bool = False,
        level: int = 1,
        parent: Optional['Branch'] = None,
        parent_segment_index: Optional[int] = None
    ):
        self.id = branch_id
        self.config = config
        self.base_angle = base_angle
        self.base_width = base_width
        self.current_width = base_width
        self.min_width = config.min_branch_width_ratio * base_width
        self.is_trunk = is_trunk
        self.level = level
        self.parent = parent
        self.parent_segment_index = parent_segment_index

        self.meander_phase = 0.0
        self.grew_this_step = False

        # segment 0 coincides with the parent's spawning segment (or the root)
        self._segments = []
        self._segments.append(self._make_segment(position, base_width))

    def _make_segment(self, position: Vector2D, final_width: float) -> Segment:
        return Segment(
            position,
            final_width,
            initial_width=self.config.segment_initial_width,
            growth_increment=self.config.width_increment(final_width),
            branch=self,
            index=len(self._segments)
        )

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return tuple(self._segments)

    @property
    def tip(self) -> Segment:
        return self._segments[-1]

    def __len__(self) -> int:
        return len(self._segments)

    def meander_angle(self) -> float:
        """Offset from base_angle: fundamental plus first octave at reduced amplitude."""
        amplitude = self.config.meander_amplitude_radians
        angle = math.sin(self.meander_phase) * amplitude
        angle += math.sin(2 * self.meander_phase) * self.config.meander_overtone_ratio * amplitude
        return angle

    def grow(self, angle: Optional[float] = None):
        """
        Append one segment past the tip.

        angle: absolute direction in radians. None means meander around base_angle.
        """
        tip = self._segments[-1]

        if angle is None:
            segment_angle = self.base_angle + self.meander_angle()
            self.meander_phase += self.config.meander_frequency
        else:
            segment_angle = angle
            if not self.config.freeze_meander_when_attracted:
                self.meander_phase += self.config.meander_frequency

        offset = UNIT_RIGHT.rotate(segment_angle) * self.config.step_length

        tip.is_tip = False
        self._segments.append(self._make_segment(tip.position + offset, self.current_width))

        self.current_width *= self.config.width_decay_ratio
        self.grew_this_step = True

    def update(self, angle: Optional[float] = None) -> bool:
        """Advance segment widths and grow if the policy allows. Returns True on growth."""
        if self.grew_this_step:
            return False

        for segment in self._segments:
            segment.update()

        # past the initial phase the trunk only keeps growing if attracted
        trunk_too_thin = self.is_trunk and self.current_width < self.min_width and angle is None
        # laterals have no autonomous growth
        lateral_unattracted = not self.is_trunk and angle is None
        if trunk_too_thin or lateral_unattracted:
            return False

        self.grow(angle)
        return True

    def clear_growth_marker(self) -> bool:
        grew = self.grew_this_step
        self.grew_this_step = False
        return grew

    def __repr__(self) -> str:
        kind = "trunk" if self.is_trunk else f"level {self.level}"
        return f"Branch(#{self.id}, {kind}, {len(self._segments)} segments)"
