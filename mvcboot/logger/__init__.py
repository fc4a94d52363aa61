"""
日志模块
Logger Module

作者: lx
日期: 2025-06-18
描述: 统一日志输出格式，供命令行和应用入口调用
"""

import logging
import sys
from typing import Optional, TextIO, Union

from .formatters import ColoredFormatter, JSONFormatter, SimpleFormatter

ROOT_LOGGER_NAME = "mvcboot"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    json_format: bool = False,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    配置框架日志

    Args:
        level: 日志级别
        json_format: 是否输出JSON格式
        stream: 输出流，默认stderr

    Returns:
        框架根日志器
    """
    stream = stream or sys.stderr
    handler = logging.StreamHandler(stream)
    if json_format:
        handler.setFormatter(JSONFormatter())
    elif getattr(stream, "isatty", lambda: False)():
        handler.setFormatter(ColoredFormatter())
    else:
        handler.setFormatter(SimpleFormatter())

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False
    return logger


__all__ = [
    'setup_logging',
    'JSONFormatter',
    'SimpleFormatter',
    'ColoredFormatter',
]
