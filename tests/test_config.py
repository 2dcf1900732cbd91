"""
Unit tests for TreeConfig validation and JSON loading.
"""

import json
import math

import pytest

from canopy import TreeConfig, load_config, save_config


class TestValidation:

    @pytest.mark.parametrize('overrides', [
        {'num_attraction_points': -1},
        {'crown_shape': 'cone'},
        {'crown_top': 0.1},
        {'influence_radius': 0.0},
        {'segment_search_step': 0},
        {'min_branching_angle': 30.0, 'max_branching_angle': 20.0},
        {'max_branching_angle': 190.0},
        {'min_vertical_growth': -1.5},
        {'max_branches': 0},
        {'width_decay_ratio': 1.2},
        {'tie_break': 'random'},
        {'spawn_width_source': 'average'},
        {'radius_jitter': 1.0},
    ])
    def test_invalid_values_raise(self, overrides):
        with pytest.raises(ValueError):
            TreeConfig(**overrides)

    def test_defaults_are_valid(self):
        config = TreeConfig()
        assert config.num_attraction_points == 300
        assert config.root_pos == (0.0, 0.0)


class TestDerivedValues:

    def test_branching_dot_thresholds(self):
        config = TreeConfig(min_branching_angle=8.0, max_branching_angle=172.0)
        assert config.max_branching_dot == pytest.approx(math.cos(math.radians(8)))
        assert config.min_branching_dot == pytest.approx(-math.cos(math.radians(8)))

    def test_angles_in_radians(self):
        config = TreeConfig()
        assert config.trunk_angle_radians == pytest.approx(math.pi / 2)
        assert config.meander_amplitude_radians == pytest.approx(math.radians(15))


class TestLoadSave:

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(str(tmp_path / 'nope.json')) == TreeConfig()

    def test_partial_file_overrides_defaults(self, tmp_path):
        path = tmp_path / 'tree.json'
        path.write_text(json.dumps({'num_attraction_points': 50, 'root_pos': [0.5, 0.0]}))
        config = load_config(str(path))
        assert config.num_attraction_points == 50
        assert config.root_pos == (0.5, 0.0)
        assert config.kill_radius == TreeConfig().kill_radius

    def test_saved_config_loads_back(self, tmp_path, capsys):
        path = tmp_path / 'nested' / 'tree.json'
        config = TreeConfig(crown_shape='ellipse', tie_break='last', random_seed=5)
        save_config(config, str(path))
        assert load_config(str(path)) == config
        assert "Saved config" in capsys.readouterr().out

    def test_unknown_key_raises(self, tmp_path):
        path = tmp_path / 'tree.json'
        path.write_text(json.dumps({'leaf_color': 'green'}))
        with pytest.raises(TypeError):
            load_config(str(path))
