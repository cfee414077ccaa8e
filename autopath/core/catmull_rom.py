#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Catmull-Rom Spline实现：生成用于显示的平滑曲线

独立工具，规划器不会调用；平滑后的曲线不保证绕开障碍。
"""

from typing import List, Sequence

import numpy as np

from .types import Point, Point2D, Point3D


def _basis(t: np.ndarray) -> np.ndarray:
    """标准（均匀）Catmull-Rom基函数系数，形状 (len(t), 4)"""
    t2 = t * t
    t3 = t2 * t
    return 0.5 * np.stack([
        -t3 + 2 * t2 - t,
        3 * t3 - 5 * t2 + 2,
        -3 * t3 + 4 * t2 + t,
        t3 - t2,
    ], axis=1)


def create_smooth_path(points: Sequence[Point], segments_per_point: int = 10) -> List[Point]:
    """
    生成经过所有控制点的Catmull-Rom曲线

    首尾段使用重复端点作为虚拟控制点；所有原始点都保留在结果中。

    Args:
        points: 控制点列表
        segments_per_point: 每段曲线的细分数

    Returns:
        插值后的密集点列表；少于3个点时原样返回
    """
    if not points or len(points) <= 2:
        return list(points or [])
    if segments_per_point < 1:
        raise ValueError(f"segments_per_point必须大于0: {segments_per_point}")

    is_3d = isinstance(points[0], Point3D)
    if is_3d:
        ctrl = np.array([(p.x, p.y, p.z) for p in points], dtype=float)
    else:
        ctrl = np.array([(p.x, p.y) for p in points], dtype=float)

    # 段内插值参数（不含两端，两端直接使用控制点）
    t = np.arange(1, segments_per_point) / segments_per_point
    weights = _basis(t)

    result: List[Point] = [points[0]]
    n = len(points)
    for i in range(n - 1):
        quad = ctrl[[max(0, i - 1), i, i + 1, min(n - 1, i + 2)]]
        for row in weights @ quad:
            result.append(Point3D(*map(float, row)) if is_3d else Point2D(*map(float, row)))
        result.append(points[i + 1])
    return result
