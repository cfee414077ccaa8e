#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径规划核心模块
"""

from .types import Point2D, Point3D, Obstacle, ObstacleKind, PlanStatus, PlanResult
from .geometry import ObstacleField, point_in_obstacle, segment_intersects_obstacle
from .planner_astar import SearchOutcome, astar_search_2d, astar_search_3d
from .path_simplify import simplify_path
from .path_planner import PathPlanner, plan_2d, plan_3d
from .interfaces import PlannerTracer, LoguruTracer, RecordingTracer
from .entity_model import Entity, SnapshotPosition

__all__ = [
    'Point2D',
    'Point3D',
    'Obstacle',
    'ObstacleKind',
    'PlanStatus',
    'PlanResult',
    'ObstacleField',
    'point_in_obstacle',
    'segment_intersects_obstacle',
    'SearchOutcome',
    'astar_search_2d',
    'astar_search_3d',
    'simplify_path',
    'PathPlanner',
    'plan_2d',
    'plan_3d',
    'PlannerTracer',
    'LoguruTracer',
    'RecordingTracer',
    'Entity',
    'SnapshotPosition',
]
