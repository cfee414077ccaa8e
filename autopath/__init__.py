#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
autopath：带障碍物规避的路径规划库

对外导出：
- PathPlanner: 路径规划门面（2D / 3D / 实体状态切换）
- plan_2d / plan_3d: 使用默认配置的便捷函数，仅返回路径
"""

from .core.types import (
    Point2D,
    Point3D,
    Obstacle,
    ObstacleKind,
    PlanStatus,
    PlanResult,
)
from .core.path_planner import PathPlanner, plan_2d, plan_3d
from .config import PlannerConfig, load_config

__version__ = "0.3.0"

__all__ = [
    'Point2D',
    'Point3D',
    'Obstacle',
    'ObstacleKind',
    'PlanStatus',
    'PlanResult',
    'PathPlanner',
    'plan_2d',
    'plan_3d',
    'PlannerConfig',
    'load_config',
]
