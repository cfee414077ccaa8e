#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
配置加载器

从YAML文件加载配置并使用Pydantic验证。
"""

from pathlib import Path
from typing import Union

import yaml
from loguru import logger
from pydantic import ValidationError

from ..common.exceptions import ConfigurationError
from .models import PlannerConfig


def load_config(config_path: Union[str, Path]) -> PlannerConfig:
    """
    从YAML文件加载配置

    Args:
        config_path: 配置文件路径

    Returns:
        验证后的PlannerConfig对象

    Raises:
        ConfigurationError: 文件不存在、YAML格式错误、内容为空或验证失败
    """
    config_path = Path(config_path)

    if not config_path.exists():
        error_msg = f"配置文件不存在: {config_path}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        error_msg = f"YAML格式错误: {e}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg) from e
    except OSError as e:
        error_msg = f"读取配置文件失败: {e}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg) from e

    if raw_config is None:
        error_msg = "配置文件为空"
        logger.error(error_msg)
        raise ConfigurationError(error_msg)

    if not isinstance(raw_config, dict):
        error_msg = f"配置文件顶层必须是映射: {type(raw_config).__name__}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg)

    try:
        config = PlannerConfig(**raw_config)
    except ValidationError as e:
        logger.error(f"配置验证失败:\n{e}")
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error['loc'])
            logger.error(f"  {field_path}: {error['msg']}")
        raise ConfigurationError(f"配置验证失败: {config_path}") from e

    logger.info(f"配置加载成功: {config_path}")
    return config
