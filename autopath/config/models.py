#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径规划配置模型

使用Pydantic定义类型安全的配置模型，所有字段都有与原规划器一致的默认值，
YAML 中只需要写需要覆盖的部分。
"""

from pydantic import BaseModel, Field, field_validator

from ..common import constants as C


class Grid2DConfig(BaseModel):
    """2D 栅格搜索配置"""
    cell_size: float = Field(C.DEFAULT_CELL_SIZE_2D, description="栅格尺寸（世界单位）")
    max_iterations: int = Field(C.DEFAULT_MAX_ITERATIONS_2D, description="A* 最大迭代次数")
    goal_tolerance: float = Field(C.GOAL_TOLERANCE_2D, description="到达终点判定半径（栅格倍数）")

    @field_validator('cell_size', 'goal_tolerance')
    @classmethod
    def validate_positive_float(cls, v: float) -> float:
        """验证正浮点数"""
        if v <= 0:
            raise ValueError(f"值必须大于0: {v}")
        return v

    @field_validator('max_iterations')
    @classmethod
    def validate_max_iterations(cls, v: int) -> int:
        """验证迭代上限"""
        if v <= 0:
            raise ValueError(f"最大迭代次数必须大于0: {v}")
        return v


class Grid3DConfig(Grid2DConfig):
    """3D 栅格搜索配置"""
    cell_size: float = Field(C.DEFAULT_CELL_SIZE_3D, description="水平栅格尺寸（世界单位）")
    vertical_cell_size: float = Field(C.DEFAULT_VERTICAL_CELL_SIZE, description="垂直栅格尺寸（世界单位）")
    max_iterations: int = Field(C.DEFAULT_MAX_ITERATIONS_3D, description="A* 最大迭代次数")
    goal_tolerance: float = Field(C.GOAL_TOLERANCE_3D, description="到达终点判定半径（栅格倍数）")

    @field_validator('vertical_cell_size')
    @classmethod
    def validate_vertical_cell_size(cls, v: float) -> float:
        """验证垂直栅格尺寸"""
        if v <= 0:
            raise ValueError(f"垂直栅格尺寸必须大于0: {v}")
        return v


class SamplingConfig(BaseModel):
    """线段采样配置"""
    min_samples: int = Field(C.MIN_SEGMENT_SAMPLES, description="线段最少采样步数")
    sample_spacing: float = Field(C.SEGMENT_SAMPLE_SPACING, description="采样间距（世界单位）")

    @field_validator('min_samples')
    @classmethod
    def validate_min_samples(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"最少采样步数必须大于等于1: {v}")
        return v

    @field_validator('sample_spacing')
    @classmethod
    def validate_sample_spacing(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"采样间距必须大于0: {v}")
        return v


class ObstacleDefaultsConfig(BaseModel):
    """障碍物缺省尺寸（数据不完整时替换使用）"""
    radius: float = Field(C.DEFAULT_OBSTACLE_RADIUS, description="圆形障碍缺省半径")
    half_extent: float = Field(C.DEFAULT_OBSTACLE_HALF_EXTENT, description="矩形障碍缺省半宽/半高")
    height: float = Field(C.DEFAULT_OBSTACLE_HEIGHT, description="3D 障碍缺省高度")

    @field_validator('radius', 'half_extent', 'height')
    @classmethod
    def validate_positive_float(cls, v: float) -> float:
        """验证正浮点数"""
        if v <= 0:
            raise ValueError(f"值必须大于0: {v}")
        return v


class FallbackConfig(BaseModel):
    """回退策略配置"""
    cruise_clearance: float = Field(C.CRUISE_CLEARANCE, description="3D 回退巡航高度高出最高障碍的距离")

    @field_validator('cruise_clearance')
    @classmethod
    def validate_cruise_clearance(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"巡航余量不能为负数: {v}")
        return v


class EntityPlanningConfig(BaseModel):
    """实体状态切换规划配置"""
    margin_buffer: float = Field(C.ENTITY_MARGIN_BUFFER, description="实体尺寸之外的额外边距")
    cell_size: float = Field(C.ENTITY_CELL_SIZE, description="实体规划使用的栅格尺寸")

    @field_validator('margin_buffer')
    @classmethod
    def validate_margin_buffer(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"边距缓冲不能为负数: {v}")
        return v

    @field_validator('cell_size')
    @classmethod
    def validate_cell_size(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"栅格尺寸必须大于0: {v}")
        return v


class PlannerConfig(BaseModel):
    """路径规划主配置"""
    default_margin: float = Field(C.DEFAULT_MARGIN, description="未指定时使用的安全边距")
    grid_2d: Grid2DConfig = Field(default_factory=Grid2DConfig, description="2D 栅格配置")
    grid_3d: Grid3DConfig = Field(default_factory=Grid3DConfig, description="3D 栅格配置")
    sampling: SamplingConfig = Field(default_factory=SamplingConfig, description="线段采样配置")
    obstacle_defaults: ObstacleDefaultsConfig = Field(
        default_factory=ObstacleDefaultsConfig,
        description="障碍物缺省尺寸"
    )
    fallback: FallbackConfig = Field(default_factory=FallbackConfig, description="回退策略配置")
    entity: EntityPlanningConfig = Field(default_factory=EntityPlanningConfig, description="实体规划配置")

    @field_validator('default_margin')
    @classmethod
    def validate_default_margin(cls, v: float) -> float:
        """验证安全边距"""
        if v < 0:
            raise ValueError(f"安全边距不能为负数: {v}")
        return v
