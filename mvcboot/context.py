"""
应用上下文
Application Context

作者: mrkingu
日期: 2025-06-20
描述: 按顺序执行 加载配置 -> 扫描 -> 实例化 -> 注入 -> 路由映射，
      结果保存在一个上下文对象中，由调用方持有和传递
"""

import importlib
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from .config import Configuration, ConfigLoader, ContainerSettings
from .exceptions import BootstrapError
from .ioc.autowirer import Autowirer
from .ioc.component_scanner import ComponentScanner
from .ioc.container import ServiceContainer
from .web.route_mapper import HandlerEntry, HandlerMapping, RouteMapper

logger = logging.getLogger(__name__)


@dataclass
class ApplicationContext:
    """启动流程的产物"""
    configuration: Configuration
    container: ServiceContainer
    handler_mapping: HandlerMapping
    settings: Optional[ContainerSettings] = None
    type_names: List[str] = field(default_factory=list)
    errors: List[BootstrapError] = field(default_factory=list)

    @classmethod
    def start(
        cls,
        config_location: str,
        base_dir: Optional[Union[str, Path]] = None
    ) -> "ApplicationContext":
        """
        从配置资源启动

        Args:
            config_location: 配置文件路径或 "包名:资源名"
            base_dir: 相对路径的解析目录，默认当前工作目录

        Returns:
            应用上下文
        """
        loader = ConfigLoader(base_dir)
        configuration = loader.load(config_location)
        settings = ContainerSettings.from_configuration(configuration)
        return cls.from_settings(settings, configuration, base_dir=loader.base_dir)

    @classmethod
    def from_settings(
        cls,
        settings: ContainerSettings,
        configuration: Optional[Configuration] = None,
        base_dir: Optional[Union[str, Path]] = None
    ) -> "ApplicationContext":
        """按类型化配置执行扫描、注册、注入和路由映射"""
        root = Path(settings.scan_root)
        if not root.is_absolute():
            root = Path(base_dir) / root if base_dir is not None else Path.cwd() / root
        _ensure_importable(root.resolve())

        scanner = ComponentScanner(
            root,
            suffixes=settings.scan_suffixes,
            fail_on_unlistable=settings.fail_on_unlistable
        )
        type_names = scanner.scan(settings.scan_package)

        container = ServiceContainer()
        container.register_all(type_names)

        context = cls._wire(
            container,
            configuration if configuration is not None else Configuration(),
            fail_on_missing_dependency=settings.fail_on_missing_dependency,
            fail_on_duplicate_route=settings.fail_on_duplicate_route,
        )
        context.settings = settings
        context.type_names = type_names
        context.errors = list(scanner.errors) + context.errors
        return context

    @classmethod
    def from_components(
        cls,
        classes: Iterable[type],
        configuration: Optional[Configuration] = None,
        fail_on_missing_dependency: bool = False,
        fail_on_duplicate_route: bool = False
    ) -> "ApplicationContext":
        """不扫描，直接注册给定的组件类"""
        container = ServiceContainer()
        for component_class in classes:
            container.register_class(component_class)
        return cls._wire(
            container,
            configuration if configuration is not None else Configuration(),
            fail_on_missing_dependency=fail_on_missing_dependency,
            fail_on_duplicate_route=fail_on_duplicate_route,
        )

    @classmethod
    def _wire(
        cls,
        container: ServiceContainer,
        configuration: Configuration,
        fail_on_missing_dependency: bool,
        fail_on_duplicate_route: bool
    ) -> "ApplicationContext":
        autowirer = Autowirer(container, fail_on_missing=fail_on_missing_dependency)
        autowirer.autowire()

        handler_mapping = RouteMapper(container, fail_on_duplicate=fail_on_duplicate_route).build()

        logger.info(
            f"Application context started: {len(container)} bean names, "
            f"{len(handler_mapping)} routes"
        )
        return cls(
            configuration=configuration,
            container=container,
            handler_mapping=handler_mapping,
            errors=list(container.errors) + list(autowirer.errors),
        )

    def get_bean(self, name: str) -> Any:
        return self.container.get_bean(name)

    def get_handler(self, path: str) -> Optional[HandlerEntry]:
        return self.handler_mapping.get_handler(path)


def _ensure_importable(root: Path) -> None:
    """把扫描根目录加入模块搜索路径"""
    root_str = str(root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)
        logger.debug(f"Added {root_str} to sys.path")
    importlib.invalidate_caches()
