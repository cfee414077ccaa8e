#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径规划配置模块

提供类型安全的配置管理和验证。
"""

from .models import (
    PlannerConfig,
    Grid2DConfig,
    Grid3DConfig,
    SamplingConfig,
    ObstacleDefaultsConfig,
    FallbackConfig,
    EntityPlanningConfig,
)
from .loader import load_config

__all__ = [
    'PlannerConfig',
    'Grid2DConfig',
    'Grid3DConfig',
    'SamplingConfig',
    'ObstacleDefaultsConfig',
    'FallbackConfig',
    'EntityPlanningConfig',
    'load_config'
]
