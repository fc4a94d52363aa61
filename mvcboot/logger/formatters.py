"""
日志格式化器
Logger Formatters

作者: lx
日期: 2025-06-18
描述: 启动日志的JSON、文本和彩色控制台格式
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional

# LogRecord自带的属性，其余视为extra字段
RESERVED_ATTRS = frozenset({
    "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
    "module", "lineno", "funcName", "created", "msecs", "relativeCreated",
    "thread", "threadName", "processName", "process", "exc_info",
    "exc_text", "stack_info", "taskName", "asctime", "message"
})


def extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """提取记录中的extra字段"""
    return {
        key: value for key, value in record.__dict__.items()
        if key not in RESERVED_ATTRS
    }


class JSONFormatter(logging.Formatter):
    """JSON格式日志格式化器"""

    def __init__(self, timestamp_format: str = "%Y-%m-%d %H:%M:%S.%f", ensure_ascii: bool = False):
        super().__init__()
        self.timestamp_format = timestamp_format
        self.ensure_ascii = ensure_ascii

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).strftime(self.timestamp_format),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = extra_fields(record)
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, ensure_ascii=self.ensure_ascii, default=str)


class SimpleFormatter(logging.Formatter):
    """简单文本格式化器"""

    DEFAULT_FORMAT = "[{asctime}] {levelname:8} [{name}] {message}"

    def __init__(
        self,
        format_string: Optional[str] = None,
        date_format: Optional[str] = None,
        include_extra: bool = True
    ):
        super().__init__(format_string or self.DEFAULT_FORMAT, date_format, style="{")
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.include_extra:
            extra = extra_fields(record)
            if extra:
                formatted += " | " + " ".join(f"{key}={value}" for key, value in extra.items())

        return formatted


class ColoredFormatter(SimpleFormatter):
    """彩色控制台格式化器"""

    # ANSI颜色代码
    COLORS = {
        'DEBUG': '\033[36m',      # 青色
        'INFO': '\033[32m',       # 绿色
        'WARNING': '\033[33m',    # 黄色
        'ERROR': '\033[31m',      # 红色
        'CRITICAL': '\033[35m',   # 紫色
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        color = self.COLORS.get(record.levelname, '')
        if color:
            # 只给级别名称添加颜色
            formatted = formatted.replace(
                f"{record.levelname:8}",
                f"{color}{record.levelname:8}{self.RESET}",
                1
            )

        return formatted
