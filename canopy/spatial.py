"""
Spatial queries between attraction points and branch segments.

Nearest-segment assignment is a brute-force distance matrix so that ties are
resolved strictly by scan order. The kill query only needs "is anything
close enough", which scipy's KDTree answers in O(log n).
"""

import numpy as np
from scipy.spatial import cKDTree
from scipy.spatial.distance import cdist
from typing import List, Optional, Sequence

from .segment import Segment
from .profiling import profiled

CHUNK_SIZE = 512


class SegmentSpatialIndex:
    """Segment positions of a whole tree, rebuilt once per step."""

    def __init__(self):
        self._searchable: List[Segment] = []
        self._search_positions: np.ndarray = np.empty((0, 2))
        self._all_positions: np.ndarray = np.empty((0, 2))
        self._tree: Optional[cKDTree] = None
        self.profiler = None

    @profiled('index.rebuild')
    def rebuild(self, branches: Sequence, search_step: int = 1):
        """
        Searchable segments are listed branch by branch, each branch from its
        tip back toward (but excluding) segment 0, which coincides with the
        parent's surface.
        """
        searchable = []
        all_positions = []
        for branch in branches:
            segments = branch.segments
            for si in range(len(segments) - 1, 0, -search_step):
                searchable.append(segments[si])
            all_positions.extend((s.position.x, s.position.y) for s in segments)

        self._searchable = searchable
        if searchable:
            self._search_positions = np.array([(s.position.x, s.position.y) for s in searchable])
        else:
            self._search_positions = np.empty((0, 2))

        if all_positions:
            self._all_positions = np.array(all_positions)
            self._tree = cKDTree(self._all_positions)
        else:
            self._all_positions = np.empty((0, 2))
            self._tree = None

    @property
    def searchable(self) -> List[Segment]:
        return self._searchable

    @profiled('index.nearest_within')
    def nearest_within(self, points: np.ndarray, radii: np.ndarray, tie_break: str = 'first') -> np.ndarray:
        """
        For every point, index into `searchable` of the nearest segment closer
        than that point's radius, or -1 when none is.

        tie_break: 'first' keeps the earliest segment in scan order among equal
        distances, 'last' the latest.
        """
        n = len(points)
        result = np.full(n, -1, dtype=int)
        m = len(self._search_positions)
        if n == 0 or m == 0:
            return result

        for start in range(0, n, CHUNK_SIZE):
            stop = min(start + CHUNK_SIZE, n)
            distances = cdist(points[start:stop], self._search_positions)
            distances[distances >= radii[start:stop, None]] = np.inf

            if tie_break == 'last':
                nearest = m - 1 - np.argmin(distances[:, ::-1], axis=1)
            else:
                nearest = np.argmin(distances, axis=1)

            rows = np.arange(stop - start)
            found = np.isfinite(distances[rows, nearest])
            result[start:stop] = np.where(found, nearest, -1)

        return result

    @profiled('index.within_radius')
    def within_radius(self, points: np.ndarray, radii: np.ndarray) -> np.ndarray:
        """Boolean mask of points that have any segment strictly closer than their radius."""
        if self._tree is None or len(points) == 0:
            return np.zeros(len(points), dtype=bool)
        distances, _ = self._tree.query(points)
        return distances < radii
