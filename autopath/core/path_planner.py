#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
PathPlanner

门面层：
- 准备障碍物（替换缺省尺寸、并入安全边距）
- 直连检测：起点到终点无阻挡时直接返回 [start, end]
- 调用 2D / 3D 栅格 A*，成功后做视线简化
- 搜索失败时给出带 FALLBACK 标签的回退路径（2D 直连，3D 升高-平飞-下降）

规划器本身无状态，每次调用的搜索数据都是局部变量，可以安全地并发调用。
"""

from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from loguru import logger

from ..config.models import PlannerConfig
from .entity_model import Entity, entity_footprint, obstacles_for_snapshot
from .geometry import ObstacleField, as_coord
from .interfaces import (
    FALLBACK,
    SEARCH_FAILED,
    SEARCH_START,
    SEARCH_SUCCESS,
    SHORTCUT,
    LoguruTracer,
    PlannerTracer,
)
from .path_simplify import simplify_path
from .planner_astar import SearchOutcome, astar_search_2d, astar_search_3d
from .types import Obstacle, Path, PlanResult, PlanStatus, Point2D, Point3D

EntityLike = Union[Entity, Mapping[str, Any]]


def _to_point2d(p) -> Point2D:
    if isinstance(p, Point2D):
        return p
    if isinstance(p, Point3D):
        return Point2D(p.x, p.y)
    return Point2D(float(p[0]), float(p[1]))


def _to_point3d(p) -> Point3D:
    if isinstance(p, Point3D):
        return p
    return Point3D(float(p[0]), float(p[1]), float(p[2]))


def _to_entity(e: EntityLike) -> Entity:
    return e if isinstance(e, Entity) else Entity.from_dict(e)


class PathPlanner:
    """
    障碍物规避路径规划器

    示例:
        ```python
        planner = PathPlanner()
        result = planner.plan_2d(Point2D(0, 0), Point2D(100, 0), [Obstacle.rectangle(50, 0, 20, 20)])
        if result.is_fallback:
            ...  # 路径可能穿越障碍
        ```
    """

    def __init__(self, config: Optional[PlannerConfig] = None, tracer: Optional[PlannerTracer] = None) -> None:
        """
        Args:
            config: 规划配置，None 时使用默认配置
            tracer: 诊断事件回调，None 时输出到 loguru
        """
        self.config_ = config or PlannerConfig()
        self.tracer_ = tracer or LoguruTracer()

    @property
    def config(self) -> PlannerConfig:
        return self.config_

    # ------------------------------------------------------------------
    # 参数处理
    # ------------------------------------------------------------------
    def _resolve_margin(self, margin: Optional[float]) -> float:
        if margin is None:
            return self.config_.default_margin
        if margin < 0:
            raise ValueError(f"margin不能为负数: {margin}")
        return float(margin)

    @staticmethod
    def _positive(name: str, value, default):
        value = default if value is None else value
        if value <= 0:
            raise ValueError(f"{name}必须大于0: {value}")
        return value

    def _prepare(self, obstacles: Iterable[Obstacle], margin: float) -> ObstacleField:
        return ObstacleField(
            obstacles,
            margin,
            defaults=self.config_.obstacle_defaults,
            sampling=self.config_.sampling,
        )

    def _search_or_none(self, search, *args, **kwargs) -> SearchOutcome:
        """搜索过程中的意外异常也按搜索失败处理，保证规划器总能返回路径"""
        try:
            return search(*args, **kwargs)
        except Exception as e:
            logger.exception(f"[PathPlanner] 搜索异常，按搜索失败处理: {e}")
            return SearchOutcome(None, 0, 0)

    # ------------------------------------------------------------------
    # 2D
    # ------------------------------------------------------------------
    def plan_2d(
        self,
        start,
        end,
        obstacles: Sequence[Obstacle],
        margin: Optional[float] = None,
        cell_size: Optional[float] = None,
        max_iterations: Optional[int] = None,
    ) -> PlanResult:
        """
        2D 路径规划

        Args:
            start: 起点（Point2D 或 (x, y)）
            end: 终点
            obstacles: 当前快照下的障碍物
            margin: 安全边距，None 时使用配置的 default_margin
            cell_size: 栅格尺寸，None 时使用配置
            max_iterations: 最大迭代次数，None 时使用配置

        Returns:
            PlanResult，path 首尾与 start/end 完全一致

        Raises:
            ValueError: 参数无效（负边距、非正的栅格尺寸或迭代次数）
        """
        grid_cfg = self.config_.grid_2d
        start, end = _to_point2d(start), _to_point2d(end)
        margin = self._resolve_margin(margin)
        cell_size = self._positive("cell_size", cell_size, grid_cfg.cell_size)
        max_iterations = self._positive("max_iterations", max_iterations, grid_cfg.max_iterations)

        field = self._prepare(obstacles, margin)

        if not field.blocks_segment(as_coord(start), as_coord(end)):
            self.tracer_(SHORTCUT, dims=2, obstacles=len(field))
            return PlanResult(PlanStatus.PLANNED, [start, end], "direct", reason="直连无阻挡")

        self.tracer_(
            SEARCH_START, dims=2, obstacles=len(field), margin=margin,
            cell_size=cell_size, max_iterations=max_iterations,
        )
        outcome = self._search_or_none(
            astar_search_2d, start, end, field,
            cell_size=cell_size,
            max_iterations=max_iterations,
            goal_tolerance=grid_cfg.goal_tolerance,
        )

        if outcome.found:
            path = simplify_path(outcome.path, field)
            self.tracer_(
                SEARCH_SUCCESS, dims=2, iterations=outcome.iterations,
                raw_length=len(outcome.path), length=len(path),
            )
            return PlanResult(
                PlanStatus.PLANNED, path, "astar",
                iterations=outcome.iterations, reason="ok", raw_path=outcome.path,
            )

        self.tracer_(SEARCH_FAILED, dims=2, iterations=outcome.iterations, expanded=outcome.expanded)
        self.tracer_(FALLBACK, dims=2, strategy="direct")
        return PlanResult(
            PlanStatus.FALLBACK, [start, end], "direct_fallback",
            iterations=outcome.iterations,
            reason=f"搜索在{outcome.iterations}次迭代后失败，使用直连路径（可能穿越障碍）",
        )

    # ------------------------------------------------------------------
    # 3D
    # ------------------------------------------------------------------
    def plan_3d(
        self,
        start,
        end,
        obstacles: Sequence[Obstacle],
        margin: Optional[float] = None,
        cell_size: Optional[float] = None,
        vertical_cell_size: Optional[float] = None,
        max_iterations: Optional[int] = None,
    ) -> PlanResult:
        """
        3D 路径规划（飞行器可从障碍上方飞越）

        搜索失败时回退为“升高-平飞-下降”四点路径，巡航高度为
        最高障碍顶部 + fallback.cruise_clearance。

        Args:
            start: 起点（Point3D 或 (x, y, z)）
            end: 终点
            obstacles: 当前快照下的障碍物（base_altitude + height 决定垂直范围）
            margin: 安全边距
            cell_size: 水平栅格尺寸
            vertical_cell_size: 垂直栅格尺寸
            max_iterations: 最大迭代次数

        Returns:
            PlanResult
        """
        grid_cfg = self.config_.grid_3d
        start, end = _to_point3d(start), _to_point3d(end)
        margin = self._resolve_margin(margin)
        cell_size = self._positive("cell_size", cell_size, grid_cfg.cell_size)
        vertical_cell_size = self._positive("vertical_cell_size", vertical_cell_size, grid_cfg.vertical_cell_size)
        max_iterations = self._positive("max_iterations", max_iterations, grid_cfg.max_iterations)

        field = self._prepare(obstacles, margin)

        if not field.blocks_segment(as_coord(start), as_coord(end)):
            self.tracer_(SHORTCUT, dims=3, obstacles=len(field))
            return PlanResult(PlanStatus.PLANNED, [start, end], "direct", reason="直连无阻挡")

        self.tracer_(
            SEARCH_START, dims=3, obstacles=len(field), margin=margin,
            cell_size=cell_size, vertical_cell_size=vertical_cell_size,
            max_iterations=max_iterations,
        )
        outcome = self._search_or_none(
            astar_search_3d, start, end, field,
            cell_size=cell_size,
            vertical_cell_size=vertical_cell_size,
            max_iterations=max_iterations,
            goal_tolerance=grid_cfg.goal_tolerance,
        )

        if outcome.found:
            path = simplify_path(outcome.path, field)
            self.tracer_(
                SEARCH_SUCCESS, dims=3, iterations=outcome.iterations,
                raw_length=len(outcome.path), length=len(path),
            )
            return PlanResult(
                PlanStatus.PLANNED, path, "astar",
                iterations=outcome.iterations, reason="ok", raw_path=outcome.path,
            )

        cruise = field.max_top() + self.config_.fallback.cruise_clearance
        self.tracer_(SEARCH_FAILED, dims=3, iterations=outcome.iterations, expanded=outcome.expanded)
        self.tracer_(FALLBACK, dims=3, strategy="cruise", cruise_altitude=cruise)
        path: Path = [
            start,
            Point3D(start.x, start.y, cruise),
            Point3D(end.x, end.y, cruise),
            end,
        ]
        return PlanResult(
            PlanStatus.FALLBACK, path, "cruise_fallback",
            iterations=outcome.iterations,
            reason=f"搜索在{outcome.iterations}次迭代后失败，升高到{cruise:.1f}后平飞",
        )

    # ------------------------------------------------------------------
    # 实体状态切换
    # ------------------------------------------------------------------
    def plan_for_entity_transition(
        self,
        entity: EntityLike,
        from_snapshot_id: str,
        to_snapshot_id: str,
        all_entities: Iterable[EntityLike],
    ) -> Optional[PlanResult]:
        """
        为实体在两个状态快照之间的移动生成路径

        障碍为 from 快照中激活的其他非飞行器实体；安全边距为实体最大外形的一半
        加上 entity.margin_buffer。

        Args:
            entity: 移动的实体（Entity 或编辑器字典记录）
            from_snapshot_id: 起始快照 ID
            to_snapshot_id: 目标快照 ID
            all_entities: 场景中的所有实体

        Returns:
            PlanResult；实体在任一快照中没有位置时返回 None
        """
        moving = _to_entity(entity)
        start_pos = moving.position_at(from_snapshot_id)
        end_pos = moving.position_at(to_snapshot_id)
        if start_pos is None or end_pos is None:
            logger.warning(
                f"[PathPlanner] 实体 {moving.id} 缺少起点或终点位置: "
                f"from={from_snapshot_id}, to={to_snapshot_id}"
            )
            return None

        entity_cfg = self.config_.entity
        obstacles = obstacles_for_snapshot(
            moving,
            from_snapshot_id,
            (_to_entity(e) for e in all_entities),
            self.config_.obstacle_defaults,
        )
        margin = entity_footprint(moving) + entity_cfg.margin_buffer
        logger.debug(
            f"[PathPlanner] 实体 {moving.id}: {from_snapshot_id} -> {to_snapshot_id}, "
            f"障碍数={len(obstacles)}, margin={margin}"
        )
        return self.plan_2d(
            Point2D(start_pos.x, start_pos.y),
            Point2D(end_pos.x, end_pos.y),
            obstacles,
            margin=margin,
            cell_size=entity_cfg.cell_size,
        )


def plan_2d(start, end, obstacles: Sequence[Obstacle], margin: Optional[float] = None,
            cell_size: Optional[float] = None) -> Path:
    """使用默认配置做 2D 规划，只返回路径"""
    return PathPlanner().plan_2d(start, end, obstacles, margin=margin, cell_size=cell_size).path


def plan_3d(start, end, obstacles: Sequence[Obstacle], margin: Optional[float] = None,
            cell_size: Optional[float] = None, vertical_cell_size: Optional[float] = None) -> Path:
    """使用默认配置做 3D 规划，只返回路径"""
    return PathPlanner().plan_3d(
        start, end, obstacles, margin=margin,
        cell_size=cell_size, vertical_cell_size=vertical_cell_size,
    ).path
