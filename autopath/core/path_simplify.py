#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径简化模块：基于视线（line-of-sight）去除A*路径中的多余点

从当前点出发，从路径尾部往回找第一个（即最远的）可直连点，
跳到该点后继续，直到到达终点。最坏 O(n²) 次线段检测。
"""

from typing import List

from loguru import logger

from .geometry import ObstacleField, as_coord
from .types import Path


def simplify_path(path: Path, field: ObstacleField) -> Path:
    """
    贪心最远可见点简化

    相邻点之间的线段假定已可通行（A* 输出满足这一点），
    找不到更远的可见点时退回下一个点，因此结果的每一段都不穿过障碍。

    Args:
        path: 原始路径（首尾为精确的起点/终点，相邻段均可通行）
        field: 与规划时相同边距的障碍物集合

    Returns:
        简化后的路径，首尾点保持原样
    """
    if len(path) <= 2:
        return path

    coords = [as_coord(p) for p in path]
    simplified: List = [path[0]]
    current = 0
    n = len(path)

    while current < n - 1:
        farthest = current + 1
        # 从尾部往回找最远可直连点
        for i in range(n - 1, current + 1, -1):
            if not field.blocks_segment(coords[current], coords[i]):
                farthest = i
                break
        simplified.append(path[farthest])
        current = farthest

    logger.debug(f"LOS简化: 原始路径长度={len(path)}, 简化后={len(simplified)}")
    return simplified
