"""配置模型与加载器测试"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from autopath.common.exceptions import AutopathError, ConfigurationError
from autopath.config import Grid3DConfig, PlannerConfig, load_config

DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "config" / "planner.yaml"


def test_defaults():
    config = PlannerConfig()
    assert config.default_margin == 15
    assert config.grid_2d.cell_size == 20
    assert config.grid_2d.max_iterations == 5000
    assert config.grid_2d.goal_tolerance == 1.5
    assert config.grid_3d.vertical_cell_size == 20
    assert config.grid_3d.max_iterations == 8000
    assert config.grid_3d.goal_tolerance == 2.0
    assert config.sampling.min_samples == 10
    assert config.obstacle_defaults.radius == 50
    assert config.fallback.cruise_clearance == 50
    assert config.entity.margin_buffer == 20
    assert config.entity.cell_size == 15


def test_shipped_config_matches_defaults():
    assert load_config(DEFAULT_CONFIG) == PlannerConfig()


def test_partial_override(tmp_path):
    path = tmp_path / "planner.yaml"
    path.write_text("default_margin: 5\ngrid_2d:\n  cell_size: 10\n", encoding="utf-8")
    config = load_config(str(path))
    assert config.default_margin == 5
    assert config.grid_2d.cell_size == 10
    assert config.grid_2d.max_iterations == 5000


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize("content", [
    "",
    "grid_2d: [1, 2\n",
    "- 1\n- 2\n",
    "grid_2d:\n  cell_size: -1\n",
    "default_margin: -3\n",
    "grid_3d:\n  vertical_cell_size: 0\n",
])
def test_bad_config_raises(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_configuration_error_is_autopath_error():
    assert issubclass(ConfigurationError, AutopathError)


def test_model_validation():
    with pytest.raises(ValidationError):
        Grid3DConfig(max_iterations=0)
