#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
规划演示：在内置场景上运行规划器并用 ASCII 打印结果

用法:
    python -m autopath.demo --scenario rectangle
    python -m autopath.demo --scenario ring --config config/planner.yaml
"""

import argparse
import math
from typing import List, Optional, Sequence

from loguru import logger

from .config import PlannerConfig, load_config
from .core.geometry import ObstacleField
from .core.path_planner import PathPlanner
from .core.types import Obstacle, PlanResult, Point2D, Point3D
from .utils.logger import setup_logger

SCENARIOS = ("rectangle", "ring", "polygon", "flyover")


def _ring_obstacles(cx: float, cy: float, radius: float, count: int = 12) -> List[Obstacle]:
    """在 (cx, cy) 周围摆一圈圆形障碍"""
    return [
        Obstacle.circle(cx + radius * math.cos(2 * math.pi * k / count),
                        cy + radius * math.sin(2 * math.pi * k / count), 18.0)
        for k in range(count)
    ]


def scenario_obstacles(name: str) -> List[Obstacle]:
    """内置场景的障碍物"""
    if name == "rectangle":
        return [Obstacle.rectangle(50, 0, 20, 20)]
    if name == "ring":
        return _ring_obstacles(100, 0, 45)
    if name == "polygon":
        return [Obstacle.polygon(80, 0, [(-30, -30), (30, -30), (0, 30)], scale_x=1.5, scale_y=1.5)]
    if name == "flyover":
        return [Obstacle.rectangle(100, 0, 30, 30, height=60)]
    raise ValueError(f"未知场景: {name}")


def run_scenario(name: str, planner: PathPlanner) -> PlanResult:
    """运行一个内置场景"""
    obstacles = scenario_obstacles(name)
    if name == "rectangle":
        return planner.plan_2d(Point2D(0, 0), Point2D(100, 0), obstacles)
    if name == "ring":
        # 终点被一圈障碍包围，预期回退
        return planner.plan_2d(Point2D(-150, 0), Point2D(100, 0), obstacles, max_iterations=400)
    if name == "polygon":
        return planner.plan_2d(Point2D(0, 0), Point2D(160, 0), obstacles)
    return planner.plan_3d(Point3D(0, 0, 10), Point3D(200, 0, 10), obstacles)


def render_ascii(result: PlanResult, obstacles: Sequence[Obstacle], cell: float = 10.0) -> str:
    """
    ASCII 可视化（俯视）：
        '#' = 障碍, '.' = 空地, '*' = 路径, 'S' = 起点, 'G' = 终点
    """
    field = ObstacleField(obstacles, margin=0.0)
    xs = [p.x for p in result.path]
    ys = [p.y for p in result.path]
    for prep in field.prepared_:
        xs += [prep.min_x, prep.max_x]
        ys += [prep.min_y, prep.max_y]
    min_x, max_x = min(xs) - cell, max(xs) + cell
    min_y, max_y = min(ys) - cell, max(ys) + cell
    cols = int((max_x - min_x) / cell) + 1
    rows = int((max_y - min_y) / cell) + 1

    vis = [['.'] * cols for _ in range(rows)]
    for r in range(rows):
        for c in range(cols):
            if field.blocks_point(min_x + c * cell, min_y + r * cell):
                vis[r][c] = '#'

    def mark(x: float, y: float, ch: str) -> None:
        c = int(round((x - min_x) / cell))
        r = int(round((y - min_y) / cell))
        if 0 <= r < rows and 0 <= c < cols:
            vis[r][c] = ch

    for a, b in zip(result.path, result.path[1:]):
        steps = max(1, int(math.hypot(b.x - a.x, b.y - a.y) / (cell / 2)))
        for i in range(steps + 1):
            t = i / steps
            mark(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t, '*')
    mark(result.start.x, result.start.y, 'S')
    mark(result.goal.x, result.goal.y, 'G')
    return "\n".join("".join(row) for row in vis)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="autopath 规划演示")
    parser.add_argument("--scenario", choices=SCENARIOS, default="rectangle", help="内置场景")
    parser.add_argument("--config", default=None, help="YAML 配置文件路径")
    parser.add_argument("--log-level", default="INFO", help="日志级别")
    args = parser.parse_args(argv)

    setup_logger(level=args.log_level)
    config = load_config(args.config) if args.config else PlannerConfig()
    planner = PathPlanner(config)

    result = run_scenario(args.scenario, planner)
    logger.info(f"场景={args.scenario}, 状态={result.status.value}, 方法={result.method}, "
                f"路径点数={len(result.path)}, 迭代次数={result.iterations}")
    for p in result.path:
        print(f"  {p}")

    print("\nASCII 地图：")
    print(render_ascii(result, scenario_obstacles(args.scenario)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
