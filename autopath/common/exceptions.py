#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
自定义异常类：定义路径规划模块的专用异常

注意：规划过程本身不抛异常（搜索失败会降级为回退路径），
这里的异常只用于配置加载和输入数据解析。
"""


class AutopathError(Exception):
    """路径规划模块基础异常类"""
    pass


class ConfigurationError(AutopathError):
    """配置错误异常"""
    pass


class ObstacleDataError(AutopathError):
    """障碍物数据无法解析异常"""
    pass
