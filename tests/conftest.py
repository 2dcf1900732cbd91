import matplotlib
matplotlib.use('Agg')

import pytest

from canopy import TreeConfig, Tree


@pytest.fixture
def config():
    """Default parameters with a fixed seed."""
    return TreeConfig(random_seed=42)


@pytest.fixture
def straight_config():
    """No meander, so the trunk grows in a straight vertical line."""
    return TreeConfig(num_attraction_points=0, meander_amplitude=0.0, random_seed=0)


@pytest.fixture
def empty_tree(config):
    return Tree(config, attraction_points=[])

