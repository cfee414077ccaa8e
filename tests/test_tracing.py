"""诊断事件与日志测试"""

import pytest
from loguru import logger

from autopath.core.interfaces import FALLBACK, SEARCH_SUCCESS, LoguruTracer, RecordingTracer
from autopath.utils.logger import setup_logger


def test_recording_tracer_forwards():
    inner = RecordingTracer()
    outer = RecordingTracer(forward=inner)
    outer(SEARCH_SUCCESS, iterations=3)
    assert outer.names == inner.names == [SEARCH_SUCCESS]
    assert outer.last(SEARCH_SUCCESS) == {"iterations": 3}
    with pytest.raises(KeyError):
        outer.last(FALLBACK)
    outer.clear()
    assert outer.events == []


def test_loguru_tracer_binds_event(log_records):
    LoguruTracer()(FALLBACK, strategy="direct")
    record = log_records[-1]
    assert record["extra"]["event"] == FALLBACK
    assert record["extra"]["strategy"] == "direct"
    assert record["level"].name == "WARNING"


def test_planner_logs_through_loguru_by_default(log_records):
    from autopath.core.path_planner import PathPlanner
    from autopath.core.types import Point2D

    PathPlanner().plan_2d(Point2D(0, 0), Point2D(10, 0), [])
    assert any(r["extra"].get("event") == "shortcut" for r in log_records)


def test_setup_logger_creates_log_file(tmp_path):
    try:
        configured = setup_logger(log_dir=tmp_path / "logs", level="DEBUG")
        configured.info("hello")
        assert list((tmp_path / "logs").glob("autopath_*.log"))
    finally:
        logger.remove()
