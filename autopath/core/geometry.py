#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
几何判定模块：点/线段与（按安全边距膨胀后的）障碍物的相交检测

功能：
- 椭圆/圆、轴对齐矩形、任意简单多边形（射线法）三类障碍
- 3D 情况下考虑障碍物的底部高度和高度，允许从障碍上方飞越
- 线段检测采用等距采样近似：max(10, ceil(长度/10)) 步，包含两个端点

多边形边距的处理方式：每个缩放后的顶点沿自身坐标符号方向外推 margin。
这不是真正的 Minkowski 偏移，对凸且大致以中心对称的多边形足够保守，
对细长或严重偏心的多边形可能偏小。
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from ..common import constants as C
from ..config.models import ObstacleDefaultsConfig, SamplingConfig
from .types import Obstacle, ObstacleKind, Point2D, Point3D

Coord = Tuple[float, ...]  # (x, y) 或 (x, y, z)


def as_coord(point) -> Coord:
    """把 Point2D/Point3D/元组统一转成坐标元组"""
    if isinstance(point, Point3D):
        return (point.x, point.y, point.z)
    if isinstance(point, Point2D):
        return (point.x, point.y)
    return tuple(float(v) for v in point)


@dataclass
class PreparedObstacle:
    """准备好的障碍物：缺省值已替换，边距已并入形状参数"""
    kind: ObstacleKind
    cx: float
    cy: float
    # 外接框（世界坐标，已含边距），用于快速排除
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    # 垂直范围（已含边距）
    z_low: float
    z_high: float
    top: float
    rx: float = 0.0
    ry: float = 0.0
    hw: float = 0.0
    hh: float = 0.0
    poly_x: Optional[np.ndarray] = None
    poly_y: Optional[np.ndarray] = None

    def contains_xy(self, x: float, y: float) -> bool:
        if x < self.min_x or x > self.max_x or y < self.min_y or y > self.max_y:
            return False
        dx = x - self.cx
        dy = y - self.cy
        if self.kind is ObstacleKind.CIRCLE:
            if self.rx <= 0 or self.ry <= 0:
                return False
            return (dx * dx) / (self.rx * self.rx) + (dy * dy) / (self.ry * self.ry) <= 1
        if self.kind is ObstacleKind.RECTANGLE:
            # 外接框即矩形本身
            return True
        return _ray_cast(dx, dy, self.poly_x, self.poly_y)

    def contains(self, x: float, y: float, z: Optional[float] = None) -> bool:
        if z is not None and (z > self.z_high or z < self.z_low):
            return False
        return self.contains_xy(x, y)


def _ray_cast(px: float, py: float, xs: np.ndarray, ys: np.ndarray) -> bool:
    """
    射线法（crossing number）判断点是否在多边形内

    Args:
        px, py: 相对多边形中心的点坐标
        xs, ys: 顶点坐标数组（同一坐标系）

    Returns:
        True: 点在多边形内部
    """
    xj = np.roll(xs, 1)
    yj = np.roll(ys, 1)
    straddle = (ys > py) != (yj > py)
    # 不跨越的边可能出现 yj == ys，结果会被 straddle 屏蔽
    with np.errstate(divide="ignore", invalid="ignore"):
        x_cross = (xj - xs) * (py - ys) / (yj - ys) + xs
    hits = straddle & (px < x_cross)
    return bool(np.count_nonzero(hits) % 2)


def prepare_obstacle(
    obstacle: Obstacle,
    margin: float,
    defaults: Optional[ObstacleDefaultsConfig] = None,
) -> PreparedObstacle:
    """
    把障碍物快照转换为带边距的判定结构

    形状数据不完整时替换为缺省值（保证规划器总能给出结果）：
    - 圆形缺半径 -> defaults.radius，缺 radius_y -> radius_x
    - 矩形缺半宽/半高 -> defaults.half_extent
    - 多边形顶点少于3个 -> 按矩形处理（优先使用自带半宽/半高）
    - 缺高度 -> defaults.height

    Args:
        obstacle: 障碍物快照（不会被修改）
        margin: 安全边距
        defaults: 缺省尺寸配置

    Returns:
        PreparedObstacle
    """
    defaults = defaults or ObstacleDefaultsConfig()
    cx, cy = obstacle.center.x, obstacle.center.y

    height = obstacle.height
    if height is None:
        height = defaults.height
    top = obstacle.base_altitude + height
    z_low = obstacle.base_altitude - margin
    z_high = top + margin

    kind = obstacle.kind
    if kind is ObstacleKind.CIRCLE:
        rx = obstacle.radius_x
        if rx is None:
            logger.debug(f"[Geometry] 圆形障碍缺少半径，使用缺省值 {defaults.radius}")
            rx = defaults.radius
        ry = obstacle.radius_y if obstacle.radius_y is not None else rx
        erx, ery = rx + margin, ry + margin
        return PreparedObstacle(
            kind=kind, cx=cx, cy=cy,
            min_x=cx - erx, max_x=cx + erx, min_y=cy - ery, max_y=cy + ery,
            z_low=z_low, z_high=z_high, top=top,
            rx=erx, ry=ery,
        )

    if kind is ObstacleKind.POLYGON and len(obstacle.local_vertices) >= 3:
        xs = np.array([v.x for v in obstacle.local_vertices], dtype=float) * obstacle.scale_x
        ys = np.array([v.y for v in obstacle.local_vertices], dtype=float) * obstacle.scale_y
        xs = xs + np.sign(xs) * margin
        ys = ys + np.sign(ys) * margin
        return PreparedObstacle(
            kind=kind, cx=cx, cy=cy,
            min_x=cx + float(xs.min()), max_x=cx + float(xs.max()),
            min_y=cy + float(ys.min()), max_y=cy + float(ys.max()),
            z_low=z_low, z_high=z_high, top=top,
            poly_x=xs, poly_y=ys,
        )

    if kind is ObstacleKind.POLYGON:
        logger.debug(
            f"[Geometry] 多边形障碍顶点不足({len(obstacle.local_vertices)})，按矩形外接框处理"
        )

    hw = obstacle.half_width
    hh = obstacle.half_height
    if hw is None or hh is None:
        logger.debug(f"[Geometry] 矩形障碍缺少尺寸，使用缺省半宽/半高 {defaults.half_extent}")
    hw = (hw if hw is not None else defaults.half_extent) + margin
    hh = (hh if hh is not None else defaults.half_extent) + margin
    return PreparedObstacle(
        kind=ObstacleKind.RECTANGLE, cx=cx, cy=cy,
        min_x=cx - hw, max_x=cx + hw, min_y=cy - hh, max_y=cy + hh,
        z_low=z_low, z_high=z_high, top=top,
        hw=hw, hh=hh,
    )


def segment_samples(length: float, sampling: Optional[SamplingConfig] = None) -> int:
    """线段采样步数：max(min_samples, ceil(长度 / 间距))"""
    if sampling is None:
        return max(C.MIN_SEGMENT_SAMPLES, math.ceil(length / C.SEGMENT_SAMPLE_SPACING))
    return max(sampling.min_samples, math.ceil(length / sampling.sample_spacing))


class ObstacleField:
    """
    一次规划调用内使用的障碍物集合

    在构造时按固定边距准备所有障碍，之后只做只读查询，
    因此多个规划调用之间互不影响。
    """

    def __init__(
        self,
        obstacles: Iterable[Obstacle],
        margin: float,
        defaults: Optional[ObstacleDefaultsConfig] = None,
        sampling: Optional[SamplingConfig] = None,
    ) -> None:
        self.margin = margin
        self.sampling_ = sampling
        self.obstacles_: List[Obstacle] = list(obstacles)
        self.prepared_: List[PreparedObstacle] = [
            prepare_obstacle(o, margin, defaults) for o in self.obstacles_
        ]

    def __len__(self) -> int:
        return len(self.prepared_)

    def blocks_point(self, x: float, y: float, z: Optional[float] = None) -> bool:
        """点是否落在任一膨胀后的障碍内"""
        for prep in self.prepared_:
            if prep.contains(x, y, z):
                return True
        return False

    def blocks_segment(self, a: Sequence[float], b: Sequence[float]) -> bool:
        """
        线段是否穿过任一膨胀后的障碍（等距采样近似）

        Args:
            a: 起点坐标 (x, y) 或 (x, y, z)
            b: 终点坐标，维度与 a 相同
        """
        if not self.prepared_:
            return False

        # 只检查外接框与线段外接框重叠的障碍
        lo_x, hi_x = min(a[0], b[0]), max(a[0], b[0])
        lo_y, hi_y = min(a[1], b[1]), max(a[1], b[1])
        is_3d = len(a) > 2
        if is_3d:
            lo_z, hi_z = min(a[2], b[2]), max(a[2], b[2])
        candidates = [
            p for p in self.prepared_
            if not (hi_x < p.min_x or lo_x > p.max_x or hi_y < p.min_y or lo_y > p.max_y)
            and not (is_3d and (lo_z > p.z_high or hi_z < p.z_low))
        ]
        if not candidates:
            return False

        dx = b[0] - a[0]
        dy = b[1] - a[1]
        dz = (b[2] - a[2]) if is_3d else 0.0
        length = math.sqrt(dx * dx + dy * dy + dz * dz)
        steps = segment_samples(length, self.sampling_)

        for i in range(steps + 1):
            t = i / steps
            x = a[0] + dx * t
            y = a[1] + dy * t
            z = (a[2] + dz * t) if is_3d else None
            for prep in candidates:
                if prep.contains(x, y, z):
                    return True
        return False

    def max_top(self) -> float:
        """所有障碍中最高的顶部高度（无障碍时为 0）"""
        if not self.prepared_:
            return 0.0
        return max(p.top for p in self.prepared_)


def point_in_obstacle(point, obstacle: Obstacle, margin: float = C.DEFAULT_MARGIN) -> bool:
    """
    判断点是否位于按 margin 膨胀后的障碍物内

    Args:
        point: Point2D / Point3D（3D 点会考虑障碍的垂直范围）
        obstacle: 障碍物快照
        margin: 安全边距

    Returns:
        True: 点被障碍阻挡
    """
    c = as_coord(point)
    prep = prepare_obstacle(obstacle, margin)
    return prep.contains(c[0], c[1], c[2] if len(c) > 2 else None)


def segment_intersects_obstacle(p1, p2, obstacle: Obstacle, margin: float = C.DEFAULT_MARGIN) -> bool:
    """
    判断线段是否穿过按 margin 膨胀后的障碍物

    采样近似：可能漏掉极薄障碍在两个采样点之间的穿越。

    Args:
        p1: 线段起点
        p2: 线段终点
        obstacle: 障碍物快照
        margin: 安全边距

    Returns:
        True: 线段上至少一个采样点在障碍内
    """
    return ObstacleField([obstacle], margin).blocks_segment(as_coord(p1), as_coord(p2))
