"""
配置基类模块
Configuration Base Classes Module

作者: lx
日期: 2025-06-18
描述: 只读的键值配置以及启动流程使用的类型化配置模型
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import ConfigLoadError


class Configuration(Mapping):
    """
    只读配置

    保留资源中键的出现顺序，加载后不可修改
    """

    def __init__(self, entries: Optional[Dict[str, str]] = None, location: str = "<memory>"):
        self._entries = MappingProxyType(dict(entries or {}))
        self.location = location

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get_property(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """获取配置项，不存在时返回默认值"""
        return self._entries.get(key, default)

    def __repr__(self) -> str:
        return f"Configuration(location={self.location!r}, keys={list(self._entries)})"


class BaseConfig(BaseModel):
    """配置基类"""

    model_config = ConfigDict(
        # 其余键留给其他组件使用
        extra="ignore",
        # 加载后只读
        frozen=True,
        # 同时接受字段名和资源中的键名
        populate_by_name=True
    )


class ContainerSettings(BaseConfig):
    """启动流程配置"""
    scan_package: str = Field(alias="scanPackage", min_length=1, description="扫描的基础包")
    scan_root: str = Field(default=".", alias="scanRoot", description="包路径的根目录")
    scan_suffixes: Tuple[str, ...] = Field(
        default=(".py",), alias="scanSuffixes", description="被视为模块的文件后缀"
    )
    fail_on_unlistable: bool = Field(
        default=False, alias="scanner.failOnUnlistable", description="子目录无法列出时终止扫描"
    )
    fail_on_missing_dependency: bool = Field(
        default=False, alias="autowire.failOnMissing", description="注入目标缺失时终止启动"
    )
    fail_on_duplicate_route: bool = Field(
        default=False, alias="mapping.failOnDuplicate", description="路径冲突时终止启动"
    )

    @field_validator("scan_package")
    @classmethod
    def _strip_package(cls, value: str) -> str:
        value = value.strip().strip(".")
        if not value:
            raise ValueError("scanPackage must not be blank")
        return value

    @field_validator("scan_suffixes", mode="before")
    @classmethod
    def _split_suffixes(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [part.strip() for part in value.split(",") if part.strip()]
        if isinstance(value, (list, tuple)):
            return tuple(part if part.startswith(".") else f".{part}" for part in value)
        return value

    @classmethod
    def from_configuration(cls, configuration: Mapping) -> "ContainerSettings":
        """
        从键值配置构建类型化配置

        Args:
            configuration: 已加载的配置

        Returns:
            校验后的配置对象
        """
        location = getattr(configuration, "location", "<memory>")
        try:
            return cls.model_validate(dict(configuration))
        except ValidationError as e:
            raise ConfigLoadError(location, f"invalid settings: {e}") from e
