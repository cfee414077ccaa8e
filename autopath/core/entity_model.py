#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
实体模型适配：把编辑器中的实体记录转换为规划器使用的障碍物

编辑器实体按状态快照记录位置（statePositions），并通过 activeStates 标记
在哪些快照中存在。状态快照 ID 作为显式参数传入，不修改实体记录。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from loguru import logger

from ..common import constants as C
from ..common.exceptions import ObstacleDataError
from ..config.models import ObstacleDefaultsConfig
from .types import Obstacle, ObstacleKind, Point2D


@dataclass(frozen=True)
class SnapshotPosition:
    """实体在某个状态快照下的位置"""
    x: float
    y: float
    z: Optional[float] = None
    rotation: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SnapshotPosition":
        z = data.get('z')
        rotation = data.get('rotation')
        return cls(
            x=float(data.get('x', 0.0)),
            y=float(data.get('y', 0.0)),
            z=float(z) if z is not None else None,
            rotation=float(rotation) if rotation is not None else None,
        )


@dataclass
class Entity:
    """
    编辑器实体（只读使用）

    kind: "circle" / "rectangle" / "custom" / "drone" 等
    w, h: 当前宽高；radius: 圆形实体的半径（w 缺失时使用）
    custom_path: 自定义多边形的局部顶点（相对中心）
    """
    id: str
    kind: str
    snapshot_positions: Dict[str, SnapshotPosition] = field(default_factory=dict)
    active_snapshots: FrozenSet[str] = frozenset()
    w: Optional[float] = None
    h: Optional[float] = None
    radius: Optional[float] = None
    custom_path: Tuple[Point2D, ...] = ()
    height: Optional[float] = None
    base_altitude: float = 0.0

    @property
    def is_agent(self) -> bool:
        return self.kind in C.AGENT_KINDS

    @property
    def shape(self) -> Optional[ObstacleKind]:
        """实体对应的障碍形状；飞行器或未知类型为 None"""
        if self.is_agent:
            return None
        try:
            return ObstacleKind.parse(self.kind)
        except ObstacleDataError:
            return None

    def position_at(self, snapshot_id: str) -> Optional[SnapshotPosition]:
        return self.snapshot_positions.get(snapshot_id)

    def is_active_at(self, snapshot_id: str) -> bool:
        return snapshot_id in self.active_snapshots

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Entity":
        """
        从编辑器记录构建实体

        Args:
            data: 形如 {"id", "type", "statePositions", "activeStates", "w", "h",
                  "radius", "customPath", "height", "baseAltitude"} 的字典

        Returns:
            Entity
        """
        positions = {
            str(sid): SnapshotPosition.from_dict(pos)
            for sid, pos in (data.get('statePositions') or {}).items()
            if pos is not None
        }
        custom_path = tuple(
            Point2D(float(p['x']), float(p['y'])) for p in (data.get('customPath') or [])
        )

        def _opt(key: str) -> Optional[float]:
            value = data.get(key)
            return float(value) if value is not None else None

        return cls(
            id=str(data.get('id', '')),
            kind=str(data.get('type', '')),
            snapshot_positions=positions,
            active_snapshots=frozenset(str(s) for s in (data.get('activeStates') or [])),
            w=_opt('w'),
            h=_opt('h'),
            radius=_opt('radius'),
            custom_path=custom_path,
            height=_opt('height'),
            base_altitude=float(data.get('baseAltitude') or 0.0),
        )


def entity_footprint(entity: Entity) -> float:
    """
    实体自身尺寸（最大外形的一半），用于换算安全边距

    缺失尺寸时使用与编辑器一致的缺省值。
    """
    shape = entity.shape
    if shape is ObstacleKind.CIRCLE:
        if entity.w:
            return entity.w / 2
        return entity.radius or C.DEFAULT_OBSTACLE_RADIUS
    if shape is ObstacleKind.RECTANGLE:
        return max(entity.w or C.DEFAULT_ENTITY_SIZE, entity.h or C.DEFAULT_ENTITY_SIZE) / 2
    if shape is ObstacleKind.POLYGON:
        return max(entity.w or C.DEFAULT_CUSTOM_ENTITY_SIZE, entity.h or C.DEFAULT_CUSTOM_ENTITY_SIZE) / 2
    return 0.0


def _polygon_scale(vertices: Tuple[Point2D, ...], w: Optional[float], h: Optional[float]) -> Tuple[float, float]:
    """根据当前宽高与顶点外接框计算非等比缩放系数"""
    if not vertices:
        return 1.0, 1.0
    xs = [v.x for v in vertices]
    ys = [v.y for v in vertices]
    orig_w = (max(xs) - min(xs)) or 1.0
    orig_h = (max(ys) - min(ys)) or 1.0
    return (w or orig_w) / orig_w, (h or orig_h) / orig_h


def obstacle_from_entity(
    entity: Entity,
    snapshot_id: str,
    defaults: Optional[ObstacleDefaultsConfig] = None,
) -> Optional[Obstacle]:
    """
    把实体在指定快照下的状态转换为障碍物

    Args:
        entity: 编辑器实体
        snapshot_id: 状态快照 ID
        defaults: 缺省尺寸配置

    Returns:
        Obstacle；飞行器或未知类型返回 None
    """
    defaults = defaults or ObstacleDefaultsConfig()
    shape = entity.shape
    if shape is None:
        if not entity.is_agent:
            logger.debug(f"[EntityModel] 忽略未知类型实体: id={entity.id}, kind={entity.kind}")
        return None

    pos = entity.position_at(snapshot_id)
    if pos is None:
        logger.warning(f"[EntityModel] 实体 {entity.id} 在快照 {snapshot_id} 中没有位置，按原点处理")
        pos = SnapshotPosition(0.0, 0.0)

    common = dict(base_altitude=entity.base_altitude, height=entity.height)
    if shape is ObstacleKind.CIRCLE:
        rx = entity.w / 2 if entity.w else (entity.radius or defaults.radius)
        ry = entity.h / 2 if entity.h else rx
        return Obstacle.circle(pos.x, pos.y, rx, ry, **common)

    if shape is ObstacleKind.RECTANGLE:
        hw = (entity.w or defaults.half_extent * 2) / 2
        hh = (entity.h or defaults.half_extent * 2) / 2
        return Obstacle.rectangle(pos.x, pos.y, hw, hh, **common)

    scale_x, scale_y = _polygon_scale(entity.custom_path, entity.w, entity.h)
    # 半宽/半高只在顶点不足时作为外接框使用
    return Obstacle(
        ObstacleKind.POLYGON,
        Point2D(pos.x, pos.y),
        half_width=(entity.w or defaults.half_extent * 2) / 2,
        half_height=(entity.h or defaults.half_extent * 2) / 2,
        local_vertices=entity.custom_path,
        scale_x=scale_x,
        scale_y=scale_y,
        **common,
    )


def obstacles_for_snapshot(
    moving: Entity,
    snapshot_id: str,
    all_entities: Iterable[Entity],
    defaults: Optional[ObstacleDefaultsConfig] = None,
) -> List[Obstacle]:
    """
    收集快照中对 moving 构成阻挡的障碍物：
    除 moving 自身和飞行器以外、在该快照中处于激活状态的所有实体
    """
    obstacles: List[Obstacle] = []
    for other in all_entities:
        if other.id == moving.id or other.is_agent or not other.is_active_at(snapshot_id):
            continue
        obstacle = obstacle_from_entity(other, snapshot_id, defaults)
        if obstacle is not None:
            obstacles.append(obstacle)
    return obstacles
