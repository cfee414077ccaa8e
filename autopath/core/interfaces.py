#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
核心接口定义：规划过程的诊断事件回调

规划器在固定的节点发出事件：
- search_start: 直连被阻挡，开始栅格搜索
- shortcut: 起点到终点直连无障碍，跳过搜索
- search_success / search_failed: 搜索结束
- fallback: 启用回退路径
"""

from typing import Any, Dict, List, Optional, Protocol, Tuple

from loguru import logger

SEARCH_START = "search_start"
SHORTCUT = "shortcut"
SEARCH_SUCCESS = "search_success"
SEARCH_FAILED = "search_failed"
FALLBACK = "fallback"

_EVENT_LEVELS = {
    SEARCH_START: "DEBUG",
    SHORTCUT: "DEBUG",
    SEARCH_SUCCESS: "INFO",
    SEARCH_FAILED: "WARNING",
    FALLBACK: "WARNING",
}


class PlannerTracer(Protocol):
    """规划事件回调协议"""
    def __call__(self, event: str, **fields: Any) -> None:
        """接收一个诊断事件及其结构化字段"""
        ...


class LoguruTracer:
    """默认实现：通过 loguru 输出结构化日志（字段放在 record['extra'] 中）"""

    def __init__(self, component: str = "PathPlanner") -> None:
        self.component_ = component

    def __call__(self, event: str, **fields: Any) -> None:
        level = _EVENT_LEVELS.get(event, "DEBUG")
        detail = ", ".join(f"{k}={v}" for k, v in fields.items())
        logger.bind(component=self.component_, event=event, **fields).log(
            level, f"[{self.component_}] {event}: {detail}"
        )


class RecordingTracer:
    """记录所有事件，便于测试断言；可选转发给另一个 tracer"""

    def __init__(self, forward: Optional[PlannerTracer] = None) -> None:
        self.events: List[Tuple[str, Dict[str, Any]]] = []
        self.forward_ = forward

    def __call__(self, event: str, **fields: Any) -> None:
        self.events.append((event, dict(fields)))
        if self.forward_ is not None:
            self.forward_(event, **fields)

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self.events]

    def last(self, event: str) -> Dict[str, Any]:
        """返回最近一次指定事件的字段，不存在时抛 KeyError"""
        for name, fields in reversed(self.events):
            if name == event:
                return fields
        raise KeyError(event)

    def clear(self) -> None:
        self.events.clear()
