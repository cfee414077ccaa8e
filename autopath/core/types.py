#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径规划数据模型

- Point2D / Point3D: 世界坐标点（不做单位换算）
- Obstacle: 某个状态快照下的只读障碍物视图
- PlanResult: 带状态标签的规划结果，区分“保证无碰撞”和“尽力而为”
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from ..common.exceptions import ObstacleDataError


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float


@dataclass(frozen=True)
class Point3D:
    x: float
    y: float
    z: float


Point = Union[Point2D, Point3D]
Path = List[Point]
GridKey = Tuple[int, ...]  # (ix, iy) 或 (ix, iy, iz)


class ObstacleKind(str, Enum):
    """障碍物形状类型"""
    CIRCLE = "circle"
    RECTANGLE = "rectangle"
    POLYGON = "polygon"

    @classmethod
    def parse(cls, value: Union[str, "ObstacleKind"]) -> "ObstacleKind":
        """
        解析形状类型字符串

        编辑器中的自定义多边形类型名为 "custom"，这里统一映射为 POLYGON。

        Raises:
            ObstacleDataError: 未知类型
        """
        if isinstance(value, ObstacleKind):
            return value
        name = str(value).strip().lower()
        if name == "custom":
            return cls.POLYGON
        try:
            return cls(name)
        except ValueError as e:
            raise ObstacleDataError(f"未知的障碍物类型: {value}") from e


@dataclass(frozen=True)
class Obstacle:
    """
    障碍物快照（只读）

    形状参数缺失时保持 None，由 ObstacleField 在准备阶段替换为缺省值。
    多边形顶点是相对于 center 的局部坐标，scale_x/scale_y 表示源图形的非等比缩放。
    """
    kind: ObstacleKind
    center: Point2D
    radius_x: Optional[float] = None
    radius_y: Optional[float] = None
    half_width: Optional[float] = None
    half_height: Optional[float] = None
    local_vertices: Tuple[Point2D, ...] = ()
    scale_x: float = 1.0
    scale_y: float = 1.0
    base_altitude: float = 0.0
    height: Optional[float] = None

    @classmethod
    def circle(cls, x: float, y: float, radius: float, radius_y: Optional[float] = None, **kwargs) -> "Obstacle":
        return cls(ObstacleKind.CIRCLE, Point2D(x, y), radius_x=radius, radius_y=radius_y, **kwargs)

    @classmethod
    def rectangle(cls, x: float, y: float, half_width: float, half_height: float, **kwargs) -> "Obstacle":
        return cls(ObstacleKind.RECTANGLE, Point2D(x, y), half_width=half_width, half_height=half_height, **kwargs)

    @classmethod
    def polygon(cls, x: float, y: float, vertices, scale_x: float = 1.0, scale_y: float = 1.0, **kwargs) -> "Obstacle":
        verts = tuple(v if isinstance(v, Point2D) else Point2D(float(v[0]), float(v[1])) for v in vertices)
        return cls(ObstacleKind.POLYGON, Point2D(x, y), local_vertices=verts,
                   scale_x=scale_x, scale_y=scale_y, **kwargs)


class PlanStatus(str, Enum):
    """规划结果状态"""
    PLANNED = "planned"    # 直连或搜索成功，路径保证不进入膨胀后的障碍
    FALLBACK = "fallback"  # 搜索失败后的回退路径，可能穿越障碍


@dataclass
class PlanResult:
    status: PlanStatus
    path: Path
    method: str                # "direct" / "astar" / "direct_fallback" / "cruise_fallback"
    iterations: int = 0
    reason: str = ""
    raw_path: Optional[Path] = field(default=None, repr=False)  # 简化前的 A* 路径

    @property
    def ok(self) -> bool:
        return self.status is PlanStatus.PLANNED

    @property
    def is_fallback(self) -> bool:
        return self.status is PlanStatus.FALLBACK

    @property
    def start(self) -> Point:
        return self.path[0]

    @property
    def goal(self) -> Point:
        return self.path[-1]
