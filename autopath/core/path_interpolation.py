#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径插值模块：按弧长在路径上取点

动画层用 progress (0-1) 驱动实体沿路径移动：
位置取在 progress × 总长度 处，朝向取所在线段的方向。
"""

import math
from typing import Sequence, Tuple

import numpy as np

from .types import Point, Point2D, Point3D


def _coords(points: Sequence[Point]) -> np.ndarray:
    if isinstance(points[0], Point3D):
        return np.array([(p.x, p.y, p.z) for p in points], dtype=float)
    return np.array([(p.x, p.y) for p in points], dtype=float)


def _make_point(template: Point, values: np.ndarray) -> Point:
    if isinstance(template, Point3D):
        return Point3D(float(values[0]), float(values[1]), float(values[2]))
    return Point2D(float(values[0]), float(values[1]))


def _segment_lengths(points: Sequence[Point]) -> np.ndarray:
    return np.linalg.norm(np.diff(_coords(points), axis=0), axis=1)


def calculate_path_length(points: Sequence[Point]) -> float:
    """
    计算路径总长度

    Args:
        points: 路径点列表

    Returns:
        各段长度之和，少于两个点时为 0
    """
    if not points or len(points) < 2:
        return 0.0
    return float(_segment_lengths(points).sum())


def get_point_at_distance(points: Sequence[Point], target_distance: float) -> Point:
    """
    取路径上距起点 target_distance（弧长）处的点

    超出总长度时返回最后一个点；空路径返回原点。
    """
    if not points:
        return Point2D(0.0, 0.0)
    if len(points) == 1:
        return points[0]

    coords = _coords(points)
    lengths = np.linalg.norm(np.diff(coords, axis=0), axis=1)
    travelled = 0.0
    for i, seg_len in enumerate(lengths):
        if travelled + seg_len >= target_distance:
            if seg_len == 0:
                return points[i]
            t = (target_distance - travelled) / seg_len
            return _make_point(points[i], coords[i] + (coords[i + 1] - coords[i]) * t)
        travelled += seg_len
    return points[-1]


def heading_at_distance(points: Sequence[Point], target_distance: float) -> float:
    """所在线段的水平朝向（度，atan2(dy, dx)）；超出末端时取最后一段"""
    if not points or len(points) < 2:
        return 0.0

    lengths = _segment_lengths(points)
    travelled = 0.0
    last = len(points) - 2
    for i, seg_len in enumerate(lengths):
        if travelled + seg_len >= target_distance or i == last:
            dx = points[i + 1].x - points[i].x
            dy = points[i + 1].y - points[i].y
            return math.degrees(math.atan2(dy, dx))
        travelled += seg_len
    return 0.0


def interpolate_along_path(points: Sequence[Point], progress: float) -> Tuple[Point, float]:
    """
    按进度（0-1）在路径上插值

    Args:
        points: 路径点列表
        progress: 进度，0 为起点，1 为终点

    Returns:
        (位置, 朝向角度)
    """
    if not points:
        return Point2D(0.0, 0.0), 0.0
    if len(points) == 1:
        return points[0], 0.0

    target = calculate_path_length(points) * progress
    return get_point_at_distance(points, target), heading_at_distance(points, target)
