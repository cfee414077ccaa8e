"""演示脚本冒烟测试"""

from loguru import logger

from autopath.core.path_planner import PathPlanner
from autopath.demo import main, render_ascii, run_scenario, scenario_obstacles


def test_ring_scenario_falls_back():
    result = run_scenario("ring", PathPlanner())
    assert result.is_fallback


def test_render_marks_endpoints():
    result = run_scenario("rectangle", PathPlanner())
    art = render_ascii(result, scenario_obstacles("rectangle"))
    assert "S" in art and "G" in art and "#" in art


def test_main_runs(capsys):
    try:
        assert main(["--scenario", "flyover", "--log-level", "WARNING"]) == 0
    finally:
        logger.remove()
    out = capsys.readouterr().out
    assert "ASCII" in out
