"""
配置管理模块
Configuration Module

作者: lx
日期: 2025-06-18
描述: 配置资源的加载和类型化校验
"""

from .base_config import BaseConfig, Configuration, ContainerSettings
from .config_loader import ConfigLoader, parse_properties

__all__ = [
    'BaseConfig',
    'Configuration',
    'ContainerSettings',
    'ConfigLoader',
    'parse_properties',
]
