"""
Configuration for tree growth.

Model space: the root sits at (0, 0), the ground is the line y = 0 and the
default crown fills x in [-1, 1], y in [0.15, 1].
"""

import json
import math
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Tuple, Optional, Literal

CrownShape = Literal['rectangle', 'ellipse', 'mask']
WidthGrowthMode = Literal['fixed', 'proportional']
TieBreak = Literal['first', 'last']
SpawnWidthSource = Literal['final', 'current']
SpawnReference = Literal['predecessor', 'base']


@dataclass
class TreeConfig:
    # ==================== CROWN ====================
    num_attraction_points: int = 300
    crown_shape: CrownShape = 'rectangle'
    crown_base_height: float = 0.15
    crown_top: float = 1.0
    crown_half_width: float = 1.0
    mask_image_path: Optional[str] = None
    radius_jitter: float = 0.0        # 0.2 = radii vary by +-20% per point

    # ==================== COLONIZATION ====================
    influence_radius: float = 0.4
    kill_radius: float = 0.15
    segment_search_step: int = 1      # larger = bigger gaps between spawns

    # Angles in degrees. 0 disables the minimum check, 180 disables the maximum.
    min_branching_angle: float = 8.0
    max_branching_angle: float = 172.0

    # Normalized y below which attracted growth is discarded. -1 disables.
    min_vertical_growth: float = -0.4
    max_branches: int = 1000
    trunk_attraction: bool = True

    # ==================== GROWTH ====================
    root_pos: Tuple[float, float] = (0.0, 0.0)
    trunk_angle: float = 90.0
    trunk_width: float = 0.2
    min_branch_width_ratio: float = 0.2
    width_decay_ratio: float = 0.986
    spawn_width_ratio: float = 0.986
    step_length: float = 0.0056
    segment_initial_width: float = 0.03
    width_growth_mode: WidthGrowthMode = 'fixed'
    width_growth_speed: float = 0.0016
    width_growth_fraction: float = 0.05

    meander_amplitude: float = 15.0             # degrees
    meander_frequency: float = math.pi / 24     # radians of phase per step
    meander_overtone_ratio: float = 0.8

    # ==================== VARIANT POLICIES ====================
    freeze_meander_when_attracted: bool = True
    tie_break: TieBreak = 'first'
    spawn_width_source: SpawnWidthSource = 'final'
    spawn_reference: SpawnReference = 'predecessor'

    # ==================== RUN ====================
    max_steps: int = 5000
    random_seed: Optional[int] = None
    verbose: bool = False
    log_interval: int = 50
    profile: bool = False

    show_attractors: bool = True
    animate: bool = False
    output_dir: str = 'outputs'

    def __post_init__(self):
        self.root_pos = tuple(self.root_pos)
        self._validate()

    def _validate(self):
        if self.num_attraction_points < 0:
            raise ValueError(f"num_attraction_points must be >= 0, got {self.num_attraction_points}")
        if self.crown_shape not in ('rectangle', 'ellipse', 'mask'):
            raise ValueError(f"Unknown crown_shape: {self.crown_shape}")
        if self.crown_top <= self.crown_base_height:
            raise ValueError("crown_top must be above crown_base_height")
        if self.crown_half_width <= 0:
            raise ValueError("crown_half_width must be positive")
        if not 0.0 <= self.radius_jitter < 1.0:
            raise ValueError(f"radius_jitter must be in [0, 1), got {self.radius_jitter}")
        if self.influence_radius <= 0 or self.kill_radius < 0:
            raise ValueError("influence_radius must be positive and kill_radius non-negative")
        if self.segment_search_step < 1:
            raise ValueError("segment_search_step must be >= 1")
        if not 0.0 <= self.min_branching_angle <= self.max_branching_angle <= 180.0:
            raise ValueError("Branching angles must satisfy 0 <= min <= max <= 180")
        if not -1.0 <= self.min_vertical_growth <= 1.0:
            raise ValueError("min_vertical_growth must be in [-1, 1]")
        if self.max_branches < 1:
            raise ValueError("max_branches must be >= 1")
        if self.trunk_width <= 0 or self.step_length <= 0:
            raise ValueError("trunk_width and step_length must be positive")
        for name in ('width_decay_ratio', 'spawn_width_ratio', 'min_branch_width_ratio'):
            value = getattr(self, name)
            if not 0.0 < value <= 1.0:
                raise ValueError(f"{name} must be in (0, 1], got {value}")
        if self.width_growth_mode not in ('fixed', 'proportional'):
            raise ValueError(f"Unknown width_growth_mode: {self.width_growth_mode}")
        if self.tie_break not in ('first', 'last'):
            raise ValueError(f"Unknown tie_break: {self.tie_break}")
        if self.spawn_width_source not in ('final', 'current'):
            raise ValueError(f"Unknown spawn_width_source: {self.spawn_width_source}")
        if self.spawn_reference not in ('predecessor', 'base'):
            raise ValueError(f"Unknown spawn_reference: {self.spawn_reference}")
        if self.log_interval < 1:
            raise ValueError("log_interval must be >= 1")

    # ==================== DERIVED VALUES ====================
    @property
    def trunk_angle_radians(self) -> float:
        return math.radians(self.trunk_angle)

    @property
    def meander_amplitude_radians(self) -> float:
        return math.radians(self.meander_amplitude)

    @property
    def max_branching_dot(self) -> float:
        """Dot products above this mean the new branch is too close to its parent."""
        return math.cos(math.radians(self.min_branching_angle))

    @property
    def min_branching_dot(self) -> float:
        """Dot products below this mean the new branch turns back too far."""
        return math.cos(math.radians(self.max_branching_angle))

    def width_increment(self, final_width: float) -> float:
        if self.width_growth_mode == 'proportional':
            return self.width_growth_fraction * final_width
        return self.width_growth_speed


def load_config(path: str = 'config/tree.json') -> TreeConfig:
    """Load config from JSON file, with defaults for missing fields."""
    config_path = Path(path)
    if not config_path.exists():
        return TreeConfig()

    with open(config_path, 'r') as f:
        data = json.load(f)

    if 'root_pos' in data:
        data['root_pos'] = tuple(data['root_pos'])

    return TreeConfig(**data)


def save_config(config: TreeConfig, path: str = 'config/tree.json'):
    """Save config to JSON file."""
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = asdict(config)
    data['root_pos'] = list(config.root_pos)

    with open(config_path, 'w') as f:
        json.dump(data, f, indent=2)

    print(f"Saved config to {config_path}")
