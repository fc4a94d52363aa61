"""
mvcboot
组件扫描、依赖注入和路由表构建

作者: mrkingu
日期: 2025-06-20
描述: 启动时扫描基础包，实例化@controller/@service组件，注入autowired字段，
      并根据@request_mapping构建路径到处理方法的映射
"""

from .config import Configuration, ConfigLoader, ContainerSettings
from .context import ApplicationContext
from .exceptions import (
    BeanNotFoundError, BootstrapError, ConfigLoadError, ContainerNotInitializedError,
    DuplicateBeanError, DuplicateBindingError, DuplicateRouteError, InjectionAccessError,
    InstantiationError, ScanError, TypeResolutionError, UnresolvedDependencyError
)
from .ioc import (
    Autowirer, ComponentScanner, ServiceContainer, autowired, controller,
    request_mapping, service, to_lower_first_case
)
from .web import HandlerEntry, HandlerMapping, RouteMapper, normalize_path
from .web.dispatcher import Dispatcher

__version__ = "1.0.0"

__all__ = [
    # 装饰器
    'controller',
    'service',
    'autowired',
    'request_mapping',

    # 启动流程
    'ApplicationContext',
    'Dispatcher',
    'ConfigLoader',
    'Configuration',
    'ContainerSettings',
    'ComponentScanner',
    'ServiceContainer',
    'Autowirer',
    'RouteMapper',
    'HandlerMapping',
    'HandlerEntry',
    'normalize_path',
    'to_lower_first_case',

    # 异常
    'BootstrapError',
    'ConfigLoadError',
    'ScanError',
    'TypeResolutionError',
    'InstantiationError',
    'DuplicateBeanError',
    'DuplicateBindingError',
    'InjectionAccessError',
    'UnresolvedDependencyError',
    'DuplicateRouteError',
    'BeanNotFoundError',
    'ContainerNotInitializedError',
]
