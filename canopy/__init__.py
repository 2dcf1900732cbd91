"""
Space colonization growth of 2D trees.

Based on: "Modeling Trees with a Space Colonization Algorithm"
by Runions, Lane, and Prusinkiewicz (2007).
"""

from .vector import Vector2D
from .attractor import AttractionPoint
from .segment import Segment
from .branch import Branch
from .tree import Tree
from .config import TreeConfig, load_config, save_config
from .visualization import visualize_tree, animate_growth, plot_growth_statistics

__all__ = [
    'Vector2D',
    'AttractionPoint',
    'Segment',
    'Branch',
    'Tree',
    'TreeConfig',
    'load_config',
    'save_config',
    'visualize_tree',
    'animate_growth',
    'plot_growth_statistics'
]
