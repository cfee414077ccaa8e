"""
autopath 测试公共夹具

提供：
- 默认配置的规划器（带事件记录）
- 常用障碍物场景
- 路径无碰撞断言
"""

import pytest
from loguru import logger

from autopath.core.geometry import ObstacleField, as_coord
from autopath.core.interfaces import RecordingTracer
from autopath.core.path_planner import PathPlanner
from autopath.core.types import Obstacle


@pytest.fixture
def tracer():
    return RecordingTracer()


@pytest.fixture
def planner(tracer):
    """默认配置的规划器，事件写入 tracer"""
    return PathPlanner(tracer=tracer)


@pytest.fixture
def blocking_box():
    """Scenario B：挡在 (0,0)->(100,0) 中间的矩形"""
    return [Obstacle.rectangle(50, 0, 20, 20)]


@pytest.fixture
def enclosed_goal_ring():
    """Scenario C：一圈圆形障碍把 (100, 0) 完全围住"""
    import math
    return [
        Obstacle.circle(100 + 45 * math.cos(2 * math.pi * k / 12),
                        45 * math.sin(2 * math.pi * k / 12), 18.0)
        for k in range(12)
    ]


@pytest.fixture
def assert_path_clear():
    """断言路径每一段都不穿过按 margin 膨胀后的障碍"""
    def _check(path, obstacles, margin):
        field = ObstacleField(obstacles, margin)
        for a, b in zip(path, path[1:]):
            assert not field.blocks_segment(as_coord(a), as_coord(b)), f"线段穿过障碍: {a} -> {b}"
    return _check


@pytest.fixture
def log_records():
    """捕获 loguru 日志记录"""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
