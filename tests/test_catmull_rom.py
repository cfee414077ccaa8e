"""Catmull-Rom 平滑测试"""

import pytest

from autopath.core.catmull_rom import create_smooth_path
from autopath.core.types import Point2D, Point3D


def test_short_input_returned_unchanged():
    assert create_smooth_path([]) == []
    two = [Point2D(0, 0), Point2D(10, 0)]
    assert create_smooth_path(two) == two


def test_control_points_are_kept():
    points = [Point2D(0, 0), Point2D(10, 10), Point2D(20, 0)]
    smooth = create_smooth_path(points, segments_per_point=10)
    assert len(smooth) == 21
    assert smooth[0] is points[0]
    assert smooth[10] is points[1]
    assert smooth[20] is points[2]


def test_collinear_points_stay_on_line():
    points = [Point2D(0, 0), Point2D(10, 0), Point2D(20, 0)]
    smooth = create_smooth_path(points, segments_per_point=4)
    xs = [p.x for p in smooth]
    assert all(p.y == pytest.approx(0.0) for p in smooth)
    assert xs == sorted(xs)


def test_single_segment_per_point_returns_originals():
    points = [Point2D(0, 0), Point2D(10, 10), Point2D(20, 0)]
    assert create_smooth_path(points, segments_per_point=1) == points


def test_invalid_segment_count():
    with pytest.raises(ValueError):
        create_smooth_path([Point2D(0, 0), Point2D(1, 1), Point2D(2, 0)], segments_per_point=0)


def test_3d_points():
    points = [Point3D(0, 0, 0), Point3D(10, 0, 10), Point3D(20, 0, 0)]
    smooth = create_smooth_path(points, segments_per_point=5)
    assert all(isinstance(p, Point3D) for p in smooth)
    assert len(smooth) == 11
