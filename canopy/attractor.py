"""
AttractionPoint class - stimulus sources that pull nearby branch segments toward them.
"""

from .vector import Vector2D


class AttractionPoint:
    __slots__ = ('position', 'influence_radius', 'kill_radius', 'alive')

    def __init__(self, position: Vector2D, influence_radius: float, kill_radius: float):
        self.position = position
        self.influence_radius = float(influence_radius)
        self.kill_radius = float(kill_radius)
        self.alive = True

    def kill(self):
        self.alive = False

    def __repr__(self) -> str:
        status = "alive" if self.alive else "dead"
        return (f"AttractionPoint({self.position}, influence={self.influence_radius:.3f}, "
                f"kill={self.kill_radius:.3f}, {status})")
