"""路径插值测试"""

import pytest

from autopath.core.path_interpolation import (
    calculate_path_length,
    get_point_at_distance,
    heading_at_distance,
    interpolate_along_path,
)
from autopath.core.types import Point2D, Point3D

L_PATH = [Point2D(0, 0), Point2D(3, 4), Point2D(3, 10)]


def test_path_length():
    assert calculate_path_length(L_PATH) == pytest.approx(11.0)
    assert calculate_path_length([Point2D(1, 1)]) == 0.0
    assert calculate_path_length([]) == 0.0


@pytest.mark.parametrize("distance, expected", [
    (0, Point2D(0, 0)),
    (5, Point2D(3, 4)),
    (8, Point2D(3, 7)),
    (100, Point2D(3, 10)),
])
def test_point_at_distance(distance, expected):
    point = get_point_at_distance(L_PATH, distance)
    assert point.x == pytest.approx(expected.x)
    assert point.y == pytest.approx(expected.y)


def test_point_at_distance_edge_cases():
    assert get_point_at_distance([], 5) == Point2D(0, 0)
    assert get_point_at_distance([Point2D(7, 7)], 5) == Point2D(7, 7)


def test_heading():
    assert heading_at_distance(L_PATH, 8) == pytest.approx(90.0)
    assert heading_at_distance([Point2D(0, 0), Point2D(-1, 0)], 0.5) == pytest.approx(180.0)
    # 超出末端时取最后一段
    assert heading_at_distance(L_PATH, 50) == pytest.approx(90.0)


def test_interpolate_along_path():
    point, heading = interpolate_along_path([Point2D(0, 0), Point2D(10, 0)], 0.5)
    assert point == Point2D(5, 0)
    assert heading == pytest.approx(0.0)


def test_interpolate_empty_and_single():
    assert interpolate_along_path([], 0.5) == (Point2D(0, 0), 0.0)
    assert interpolate_along_path([Point2D(2, 3)], 0.5) == (Point2D(2, 3), 0.0)


def test_interpolate_3d_keeps_altitude():
    path = [Point3D(0, 0, 0), Point3D(0, 0, 100), Point3D(100, 0, 100)]
    point, heading = interpolate_along_path(path, 0.75)
    assert isinstance(point, Point3D)
    assert point.x == pytest.approx(50)
    assert point.z == pytest.approx(100)
    assert heading == pytest.approx(0.0)
