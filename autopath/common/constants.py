#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
常量定义：集中管理路径规划相关的默认值
"""

# =============================
# 障碍物默认尺寸
# =============================

# 圆形障碍缺省半径
DEFAULT_OBSTACLE_RADIUS: float = 50.0

# 矩形障碍缺省半宽/半高（即宽高 100）
DEFAULT_OBSTACLE_HALF_EXTENT: float = 50.0

# 3D 障碍缺省高度
DEFAULT_OBSTACLE_HEIGHT: float = 20.0

# =============================
# 搜索相关常量
# =============================

# 默认安全边距
DEFAULT_MARGIN: float = 15.0

# 2D 栅格默认参数
DEFAULT_CELL_SIZE_2D: float = 20.0
DEFAULT_MAX_ITERATIONS_2D: int = 5000
GOAL_TOLERANCE_2D: float = 1.5  # 单位：栅格

# 3D 栅格默认参数
DEFAULT_CELL_SIZE_3D: float = 20.0
DEFAULT_VERTICAL_CELL_SIZE: float = 20.0
DEFAULT_MAX_ITERATIONS_3D: int = 8000
GOAL_TOLERANCE_3D: float = 2.0  # 单位：栅格

# 线段采样：步数 = max(MIN_SEGMENT_SAMPLES, ceil(长度 / SEGMENT_SAMPLE_SPACING))
MIN_SEGMENT_SAMPLES: int = 10
SEGMENT_SAMPLE_SPACING: float = 10.0

# 3D 回退：巡航高度 = 最高障碍顶部 + CRUISE_CLEARANCE
CRUISE_CLEARANCE: float = 50.0

# A* 移动方向（八方向）
DIRECTIONS_8WAY = [
    (1, 0), (-1, 0), (0, 1), (0, -1),
    (1, 1), (-1, 1), (1, -1), (-1, -1),
]

# 3D 垂直偏移
VERTICAL_OFFSETS = (-1, 0, 1)

# =============================
# 实体相关常量
# =============================

# 不作为障碍物的实体类型（被规划的飞行器）
AGENT_KINDS = frozenset({"drone"})

# 实体尺寸换算边距时的额外缓冲
ENTITY_MARGIN_BUFFER: float = 20.0

# 实体状态切换规划使用的栅格尺寸
ENTITY_CELL_SIZE: float = 15.0

# 实体缺省尺寸（用于计算边距）
DEFAULT_ENTITY_SIZE: float = 100.0
DEFAULT_CUSTOM_ENTITY_SIZE: float = 50.0
