"""
Simple 2D Vector class for tree growth.

Binary operators return new vectors. In-place operators mutate the receiver,
so a single instance can be reused as an accumulator together with
save()/restore().
"""

import math
import numpy as np
from typing import Union


class Vector2D:
    __slots__ = ('x', 'y', '_saved')

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = float(x)
        self.y = float(y)
        self._saved = (self.x, self.y)

    def __add__(self, other: Union['Vector2D', float]) -> 'Vector2D':
        if isinstance(other, Vector2D):
            return Vector2D(self.x + other.x, self.y + other.y)
        return Vector2D(self.x + other, self.y + other)

    def __sub__(self, other: Union['Vector2D', float]) -> 'Vector2D':
        if isinstance(other, Vector2D):
            return Vector2D(self.x - other.x, self.y - other.y)
        return Vector2D(self.x - other, self.y - other)

    def __mul__(self, scalar: float) -> 'Vector2D':
        return Vector2D(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> 'Vector2D':
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> 'Vector2D':
        return Vector2D(self.x / scalar, self.y / scalar)

    def __iadd__(self, other: Union['Vector2D', float]) -> 'Vector2D':
        if isinstance(other, Vector2D):
            self.x += other.x
            self.y += other.y
        else:
            self.x += other
            self.y += other
        return self

    def __isub__(self, other: Union['Vector2D', float]) -> 'Vector2D':
        if isinstance(other, Vector2D):
            self.x -= other.x
            self.y -= other.y
        else:
            self.x -= other
            self.y -= other
        return self

    def __imul__(self, scalar: float) -> 'Vector2D':
        self.x *= scalar
        self.y *= scalar
        return self

    def __itruediv__(self, scalar: float) -> 'Vector2D':
        self.x /= scalar
        self.y /= scalar
        return self

    def __neg__(self) -> 'Vector2D':
        return Vector2D(-self.x, -self.y)

    def __repr__(self) -> str:
        return f"Vector2D({self.x:.4f}, {self.y:.4f})"

    def __eq__(self, other: 'Vector2D') -> bool:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return bool(np.isclose(self.x, other.x) and np.isclose(self.y, other.y))

    __hash__ = None

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def magnitude_squared(self) -> float:
        return self.x ** 2 + self.y ** 2

    @property
    def angle(self) -> float:
        """Polar angle in radians, measured counter-clockwise from +x."""
        return math.atan2(self.y, self.x)

    def normalize(self) -> 'Vector2D':
        mag = self.magnitude
        if mag < 1e-10:
            return Vector2D(0, 0)
        return self / mag

    def rotate(self, radians: float) -> 'Vector2D':
        cos = math.cos(radians)
        sin = math.sin(radians)
        return Vector2D(cos * self.x - sin * self.y, sin * self.x + cos * self.y)

    def dot(self, other: 'Vector2D') -> float:
        return self.x * other.x + self.y * other.y

    def distance_to(self, other: 'Vector2D') -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def distance_squared_to(self, other: 'Vector2D') -> float:
        return (self.x - other.x) ** 2 + (self.y - other.y) ** 2

    def save(self) -> 'Vector2D':
        self._saved = (self.x, self.y)
        return self

    def restore(self) -> 'Vector2D':
        self.x, self.y = self._saved
        return self

    def to_tuple(self) -> tuple:
        return (self.x, self.y)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y])

    @classmethod
    def from_tuple(cls, t: tuple) -> 'Vector2D':
        return cls(t[0], t[1])

    @classmethod
    def from_array(cls, arr: np.ndarray) -> 'Vector2D':
        return cls(arr[0], arr[1])

    def copy(self) -> 'Vector2D':
        return Vector2D(self.x, self.y)
