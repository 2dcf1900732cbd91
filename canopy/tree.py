"""
Tree class - runs the space colonization growth loop.

Every step, each attraction point claims its nearest in-range segment. A
claimed tip extends its branch toward the claiming points; a claimed interior
segment may spawn a new lateral branch. Points reached by any segment are
consumed, and the tree is fully grown once a whole step passes without any
branch growing.
"""

import itertools
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

import numpy as np

from .config import TreeConfig
from .vector import Vector2D
from .attractor import AttractionPoint
from .segment import Segment
from .branch import Branch
from .spatial import SegmentSpatialIndex
from .crown import sample_crown_points
from .profiling import PhaseProfiler, profiled, profile_block

PointLike = Union[Vector2D, Tuple[float, float]]


class Tree:
    def __init__(self, config: Optional[TreeConfig] = None,
                 attraction_points: Optional[Iterable[PointLike]] = None):
        """
        Args:
            config: growth parameters, defaults to TreeConfig()
            attraction_points: explicit point positions; when None they are
                sampled from the configured crown
        """
        self.config = config or TreeConfig()
        self.rng = np.random.default_rng(self.config.random_seed)
        self.profiler = PhaseProfiler(enabled=self.config.profile)
        self.spatial_index = SegmentSpatialIndex()
        self.spatial_index.profiler = self.profiler

        self._branches: List[Branch] = []
        self._attraction_points: List[AttractionPoint] = []
        self._attracted_segments: List[Segment] = []
        self._branch_ids = itertools.count(1)
        self._accumulator = Vector2D().save()

        self.fully_grown = False
        self.iteration = 0

        self._initialize(attraction_points)

    def _initialize(self, attraction_points: Optional[Iterable[PointLike]]):
        config = self.config
        trunk = Branch(
            next(self._branch_ids),
            Vector2D(*config.root_pos),
            config.trunk_angle_radians,
            config.trunk_width,
            config,
            is_trunk=True,
            level=1
        )
        self._branches.append(trunk)

        if attraction_points is None:
            with profile_block(self.profiler, 'tree.sample_crown'):
                sampled = sample_crown_points(config, self.rng)
            self._attraction_points = [
                AttractionPoint(position, influence, kill) for position, influence, kill in sampled
            ]
        else:
            self.add_attraction_points(attraction_points)

        if config.verbose:
            print(f"Initialized Tree:")
            print(f"  Crown: {config.crown_shape}")
            print(f"  Attraction points: {len(self._attraction_points)}")
            print(f"  Root position: {trunk.tip.position}")

    # ==================== READ ACCESSORS ====================
    @property
    def branches(self) -> Tuple[Branch, ...]:
        return tuple(self._branches)

    @property
    def attraction_points(self) -> Tuple[AttractionPoint, ...]:
        return tuple(self._attraction_points)

    @property
    def trunk(self) -> Branch:
        return self._branches[0]

    @property
    def segment_count(self) -> int:
        return sum(len(b) for b in self._branches)

    @property
    def branch_tips(self) -> List[Segment]:
        return [b.tip for b in self._branches]

    def metrics(self) -> Dict[str, Union[int, bool]]:
        return {
            'iteration': self.iteration,
            'branches': len(self._branches),
            'segments': self.segment_count,
            'attraction_points': len(self._attraction_points),
            'fully_grown': self.fully_grown,
        }

    # ==================== ATTRACTION POINTS ====================
    def add_attraction_points(self, positions: Iterable[PointLike],
                              influence_radius: Optional[float] = None,
                              kill_radius: Optional[float] = None) -> int:
        """
        Inject a batch of attraction points. Returns the number added.

        A fully grown tree stays fully grown; use update(force=True) to let it
        react to the new points.
        """
        influence = self.config.influence_radius if influence_radius is None else influence_radius
        kill = self.config.kill_radius if kill_radius is None else kill_radius

        added = 0
        for position in positions:
            if not isinstance(position, Vector2D):
                position = Vector2D.from_tuple(position)
            self._attraction_points.append(AttractionPoint(position, influence, kill))
            added += 1
        return added

    def _point_arrays(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        points = self._attraction_points
        positions = np.array([(p.position.x, p.position.y) for p in points]).reshape(-1, 2)
        influence = np.array([p.influence_radius for p in points])
        kill = np.array([p.kill_radius for p in points])
        return positions, influence, kill

    # ==================== STEP PHASES ====================
    def _clear_assignments(self):
        for branch in self._branches:
            for segment in branch.segments:
                segment.clear_assigned_points()
        self._attracted_segments = []

    @profiled('tree.obtain_attracted_segments')
    def _obtain_attracted_segments(self) -> List[Segment]:
        """
        Assign every point to its nearest in-range segment.
        Segments are returned in the order they were first claimed.
        """
        if not self._attraction_points:
            return []

        self.spatial_index.rebuild(self._branches, self.config.segment_search_step)
        positions, influence, _ = self._point_arrays()
        nearest = self.spatial_index.nearest_within(positions, influence, self.config.tie_break)

        searchable = self.spatial_index.searchable
        attracted: Dict[Segment, None] = {}
        for point_index, segment_index in enumerate(nearest):
            if segment_index < 0:
                continue
            segment = searchable[segment_index]
            segment.assign(point_index)
            attracted[segment] = None

        return list(attracted)

    def _growth_direction(self, segment: Segment) -> Optional[Vector2D]:
        """Normalized sum of unit vectors toward the segment's points, None if degenerate."""
        acc = self._accumulator.restore()
        for point_index in segment.assigned_points:
            point = self._attraction_points[point_index]
            acc += (point.position - segment.position).normalize()

        if acc.magnitude < 1e-10:
            return None
        return acc.normalize()

    def _try_spawn(self, segment: Segment, direction: Vector2D, pending: int) -> Optional[Branch]:
        config = self.config
        if len(self._branches) + pending >= config.max_branches:
            return None

        parent = segment.branch
        if config.spawn_reference == 'base':
            reference = parent.segments[0]
        else:
            reference = parent.segments[segment.index - 1]

        incoming = (segment.position - reference.position).normalize()
        if incoming.magnitude_squared == 0:
            return None

        dot = direction.dot(incoming)
        if config.min_branching_angle > 0 and dot > config.max_branching_dot:
            return None  # too close to the parent's own direction
        if config.max_branching_angle < 180 and dot < config.min_branching_dot:
            return None  # turns back on the parent

        source = segment.final_width if config.spawn_width_source == 'final' else segment.width
        angle = direction.angle
        branch = Branch(
            next(self._branch_ids),
            segment.position.copy(),
            angle,
            source * config.spawn_width_ratio,
            config,
            is_trunk=False,
            level=parent.level + 1,
            parent=parent,
            parent_segment_index=segment.index
        )
        branch.update(angle)
        return branch

    @profiled('tree.attract_and_grow')
    def _calculate_attractions_and_grow_attracted_segments(self):
        config = self.config
        new_branches: List[Branch] = []

        self._attracted_segments = self._obtain_attracted_segments()
        for segment in self._attracted_segments:
            direction = self._growth_direction(segment)
            if direction is None:
                continue
            if direction.y < config.min_vertical_growth:
                continue  # downward growth does not look natural

            branch = segment.branch
            if segment.is_tip:
                if branch.is_trunk and not config.trunk_attraction:
                    continue
                branch.update(direction.angle)
            else:
                spawned = self._try_spawn(segment, direction, len(new_branches))
                if spawned is not None:
                    new_branches.append(spawned)

        # appended only now so new branches are not processed again this pass
        self._branches.extend(new_branches)

    @profiled('tree.remove_dead_attraction_points')
    def _remove_dead_attraction_points(self) -> int:
        if not self._attraction_points:
            return 0

        self.spatial_index.rebuild(self._branches, self.config.segment_search_step)
        positions, _, kill = self._point_arrays()
        dead = self.spatial_index.within_radius(positions, kill)
        if not dead.any():
            return 0

        for point, is_dead in zip(self._attraction_points, dead):
            if is_dead:
                point.kill()

        # compact the arena and keep this step's assignments pointing at live points
        new_index = np.cumsum(~dead) - 1
        for segment in self._attracted_segments:
            remapped = [int(new_index[i]) for i in segment.assigned_points if not dead[i]]
            segment.clear_assigned_points()
            for i in remapped:
                segment.assign(i)

        self._attraction_points = [p for p in self._attraction_points if p.alive]
        return int(dead.sum())

    @profiled('tree.advance_branches')
    def _advance_branches(self) -> bool:
        # branches grown by attraction above are no-ops here
        for branch in self._branches:
            branch.update()

        grew = False
        for branch in self._branches:
            if branch.clear_growth_marker():
                grew = True
        return grew

    # ==================== DRIVER ====================
    @profiled('tree.update')
    def update(self, force: bool = False) -> bool:
        """
        Advance the simulation by one step. Returns True if any branch grew.

        A fully grown tree is left untouched unless force is set.
        """
        if self.fully_grown and not force:
            return False

        self._clear_assignments()
        self._calculate_attractions_and_grow_attracted_segments()
        self._remove_dead_attraction_points()
        grew = self._advance_branches()

        self.fully_grown = not grew
        self.iteration += 1
        return grew

    step = update

    def grow(self, max_steps: Optional[int] = None,
             callback: Optional[Callable[['Tree', int], None]] = None) -> int:
        """
        Run the growth loop until fully grown or max_steps is reached.
        Optional callback is called after each step with (tree, iteration).
        Returns the number of steps run.
        """
        config = self.config
        if max_steps is None:
            max_steps = config.max_steps

        if config.verbose:
            print(f"Starting growth with {len(self._attraction_points)} attraction points...")

        steps = 0
        while not self.fully_grown and steps < max_steps:
            self.update()
            steps += 1

            if callback:
                callback(self, self.iteration)

            if config.verbose and self.iteration % config.log_interval == 0:
                print(f"  Step {self.iteration}: {len(self._branches)} branches, "
                      f"{self.segment_count} segments, "
                      f"{len(self._attraction_points)} attraction points remaining")

        if config.verbose:
            if self.fully_grown:
                print(f"Fully grown after {self.iteration} steps")
            else:
                print(f"Stopped after {max_steps} steps without reaching full growth")
            print(f"  Final branches: {len(self._branches)}")
            print(f"  Remaining attraction points: {len(self._attraction_points)}")

        return steps
