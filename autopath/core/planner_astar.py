#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
隐式栅格上的A*路径规划器

功能：
- 坐标按 cell_size 量化为栅格节点，不需要预先构建地图
- 2D: 8邻接；3D: 水平8方向 × 垂直(-1, 0, +1) 再加竖直上下，共26邻接
- 欧氏距离启发函数（3D 为三维欧氏距离）
- 开放集使用二叉堆，按 (f, g, 插入序号) 排序，同 f 时优先较小的 g，再按插入顺序
- 节点与终点距离小于 goal_tolerance × cell_size 且可直连终点时结束
- 输出路径的每一段（含精确起点到第一个栅格点）都经过线段检测
"""

import heapq
import itertools
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from loguru import logger

from ..common import constants as C
from .geometry import ObstacleField, as_coord
from .types import GridKey, Path, Point2D, Point3D

Coord = Tuple[float, ...]

# 2D 八方向
OFFSETS_2D: List[GridKey] = list(C.DIRECTIONS_8WAY)

# 3D：水平八方向与三种垂直偏移组合，外加竖直上/下
OFFSETS_3D: List[GridKey] = [
    (dx, dy, dz) for dz in C.VERTICAL_OFFSETS for dx, dy in C.DIRECTIONS_8WAY
] + [(0, 0, 1), (0, 0, -1)]


@dataclass
class SearchOutcome:
    """一次搜索的结果；path 为 None 表示搜索失败（开放集耗尽或达到迭代上限）"""
    path: Optional[Path]
    iterations: int
    expanded: int

    @property
    def found(self) -> bool:
        return self.path is not None


def quantize(value: float, cell: float) -> int:
    """坐标量化为栅格索引（四舍五入，.5 向上）"""
    return int(math.floor(value / cell + 0.5))


def grid_key(coord: Sequence[float], cells: Sequence[float]) -> GridKey:
    return tuple(quantize(v, c) for v, c in zip(coord, cells))


def key_to_coord(key: GridKey, cells: Sequence[float]) -> Coord:
    return tuple(k * c for k, c in zip(key, cells))


def _astar(
    start: Coord,
    goal: Coord,
    field: ObstacleField,
    cells: Tuple[float, ...],
    offsets: Sequence[GridKey],
    max_iterations: int,
    goal_radius: float,
) -> Tuple[Optional[List[Coord]], int, int]:
    """
    A* 核心实现（与维度无关）

    Args:
        start: 起点坐标（未量化）
        goal: 终点坐标（未量化）
        field: 本次调用的障碍物集合
        cells: 每个维度的栅格尺寸
        offsets: 邻居偏移（栅格单位）
        max_iterations: 最大迭代次数
        goal_radius: 到达判定半径（世界单位）

    Returns:
        (中间节点坐标列表或None, 迭代次数, 扩展节点数)
    """
    is_3d = len(cells) > 2
    start_key = grid_key(start, cells)
    start_node = key_to_coord(start_key, cells)

    counter = itertools.count()
    open_heap: List[Tuple[float, float, int, GridKey]] = []
    heapq.heappush(open_heap, (math.dist(start_node, goal), 0.0, next(counter), start_key))
    g_score: Dict[GridKey, float] = {start_key: 0.0}
    came_from: Dict[GridKey, GridKey] = {}
    closed: Set[GridKey] = set()

    iterations = 0
    while open_heap and iterations < max_iterations:
        _, current_g, _, current = heapq.heappop(open_heap)
        # 堆中的过期条目（已关闭或已有更优 g）直接丢弃
        if current in closed or current_g > g_score[current]:
            continue
        iterations += 1

        node = key_to_coord(current, cells)
        if math.dist(node, goal) < goal_radius and not field.blocks_segment(node, goal):
            waypoints: List[Coord] = []
            key = current
            while key in came_from:
                waypoints.append(key_to_coord(key, cells))
                key = came_from[key]
            waypoints.reverse()
            # 精确起点不在栅格上：起点到第一个输出点的线段必须可通行，
            # 否则经由量化起点节点过渡；两者都被阻挡时按搜索失败处理
            first = waypoints[0] if waypoints else goal
            if field.blocks_segment(start, first):
                if field.blocks_segment(start, start_node):
                    logger.debug(f"[A*] 起点无法连接到栅格: start={start}, node={start_node}")
                    return None, iterations, len(closed)
                waypoints.insert(0, start_node)
            return waypoints, iterations, len(closed)

        closed.add(current)

        for offset in offsets:
            neighbor = tuple(k + d for k, d in zip(current, offset))
            if neighbor in closed:
                continue
            # 高度不能为负
            if is_3d and neighbor[2] < 0:
                continue

            n_coord = key_to_coord(neighbor, cells)
            if field.blocks_point(*n_coord):
                continue
            if field.blocks_segment(node, n_coord):
                continue

            tentative_g = current_g + math.dist(node, n_coord)
            if tentative_g < g_score.get(neighbor, math.inf):
                came_from[neighbor] = current
                g_score[neighbor] = tentative_g
                f_score = tentative_g + math.dist(n_coord, goal)
                heapq.heappush(open_heap, (f_score, tentative_g, next(counter), neighbor))

    return None, iterations, len(closed)


def _assemble(start, goal, waypoints: List[Coord], make_point: Callable[..., object]) -> Path:
    """首尾使用调用方传入的原始点（不做量化），中间为栅格节点"""
    return [start] + [make_point(*c) for c in waypoints] + [goal]


def astar_search_2d(
    start: Point2D,
    goal: Point2D,
    field: ObstacleField,
    cell_size: float = C.DEFAULT_CELL_SIZE_2D,
    max_iterations: int = C.DEFAULT_MAX_ITERATIONS_2D,
    goal_tolerance: float = C.GOAL_TOLERANCE_2D,
) -> SearchOutcome:
    """
    2D 栅格 A* 搜索

    Args:
        start: 起点
        goal: 终点
        field: 已按边距准备好的障碍物集合
        cell_size: 栅格尺寸
        max_iterations: 最大迭代次数
        goal_tolerance: 到达判定半径（栅格倍数）

    Returns:
        SearchOutcome，成功时 path 为 [start, 栅格节点..., goal]
    """
    logger.debug(
        f"[A*] 2D 搜索开始: start=({start.x}, {start.y}), goal=({goal.x}, {goal.y}), "
        f"cell_size={cell_size}, obstacles={len(field)}"
    )
    waypoints, iterations, expanded = _astar(
        as_coord(start), as_coord(goal), field,
        (cell_size, cell_size), OFFSETS_2D,
        max_iterations, goal_tolerance * cell_size,
    )
    if waypoints is None:
        logger.debug(f"[A*] 2D 搜索失败: 迭代次数={iterations}, 扩展节点数={expanded}")
        return SearchOutcome(None, iterations, expanded)

    path = _assemble(start, goal, waypoints, Point2D)
    logger.debug(f"[A*] 2D 搜索成功: 路径长度={len(path)}, 迭代次数={iterations}")
    return SearchOutcome(path, iterations, expanded)


def astar_search_3d(
    start: Point3D,
    goal: Point3D,
    field: ObstacleField,
    cell_size: float = C.DEFAULT_CELL_SIZE_3D,
    vertical_cell_size: float = C.DEFAULT_VERTICAL_CELL_SIZE,
    max_iterations: int = C.DEFAULT_MAX_ITERATIONS_3D,
    goal_tolerance: float = C.GOAL_TOLERANCE_3D,
) -> SearchOutcome:
    """
    3D 栅格 A* 搜索

    高度下限为0（负高度的邻居直接丢弃），上限不设；
    到达判定半径以水平栅格尺寸计算。
    """
    logger.debug(
        f"[A*] 3D 搜索开始: start=({start.x}, {start.y}, {start.z}), "
        f"goal=({goal.x}, {goal.y}, {goal.z}), cell_size={cell_size}, "
        f"vertical_cell_size={vertical_cell_size}, obstacles={len(field)}"
    )
    waypoints, iterations, expanded = _astar(
        as_coord(start), as_coord(goal), field,
        (cell_size, cell_size, vertical_cell_size), OFFSETS_3D,
        max_iterations, goal_tolerance * cell_size,
    )
    if waypoints is None:
        logger.debug(f"[A*] 3D 搜索失败: 迭代次数={iterations}, 扩展节点数={expanded}")
        return SearchOutcome(None, iterations, expanded)

    path = _assemble(start, goal, waypoints, Point3D)
    logger.debug(f"[A*] 3D 搜索成功: 路径长度={len(path)}, 迭代次数={iterations}")
    return SearchOutcome(path, iterations, expanded)
