"""
配置加载器模块
Configuration Loader Module

作者: lx
日期: 2025-06-18
描述: 启动时读取key=value格式的配置资源，支持文件路径和包内资源
"""

import logging
from importlib import resources
from pathlib import Path
from typing import BinaryIO, Dict, Optional, Union

from .base_config import Configuration
from ..exceptions import ConfigLoadError

# 设置日志
logger = logging.getLogger(__name__)

# 包内资源的分隔符，例如 "app.conf:application.properties"
RESOURCE_SEPARATOR = ":"
COMMENT_PREFIXES = ("#", "!")


def parse_properties(text: str) -> Dict[str, str]:
    """解析key=value文本

    Args:
        text: 配置文本

    Returns:
        按出现顺序排列的键值字典
    """
    entries: Dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        entries[key.strip()] = value.strip()
    return entries


class ConfigLoader:
    """配置加载器"""

    def __init__(self, base_dir: Optional[Union[str, Path]] = None):
        """初始化配置加载器

        Args:
            base_dir: 相对路径的解析目录，默认当前工作目录
        """
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

    def load(self, location: str) -> Configuration:
        """加载配置资源

        Args:
            location: 文件路径或 "包名:资源名"

        Returns:
            只读配置
        """
        if not location or not location.strip():
            logger.error("配置资源名为空")
            raise ConfigLoadError(str(location), "empty resource name")

        try:
            with self._open(location) as stream:
                text = stream.read().decode("utf-8")
            entries = parse_properties(text)
        except ConfigLoadError:
            raise
        except (OSError, ImportError, TypeError, UnicodeDecodeError) as e:
            logger.error(f"加载配置文件 {location} 失败: {e}")
            raise ConfigLoadError(location, str(e)) from e

        logger.info(f"配置加载完成: {location} ({len(entries)} 项)")
        return Configuration(entries, location=location)

    def _open(self, location: str) -> BinaryIO:
        """打开配置资源的字节流"""
        path = Path(location)
        if not path.is_absolute():
            path = self.base_dir / path

        if RESOURCE_SEPARATOR in location and not path.exists():
            package, _, name = location.partition(RESOURCE_SEPARATOR)
            if package and name:
                logger.debug(f"从包资源读取配置: {package} -> {name}")
                return resources.files(package).joinpath(name).open("rb")

        logger.debug(f"从文件读取配置: {path}")
        return open(path, "rb")
