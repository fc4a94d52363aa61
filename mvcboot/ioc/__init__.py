"""
IoC容器框架
IoC Container Framework

作者: mrkingu
日期: 2025-06-20
描述: 提供组件扫描、实例注册和字段注入功能，类似Spring的IoC容器机制
"""

from .decorators import (
    CONTROLLER, SERVICE, Autowired, autowired, controller, request_mapping, service
)
from .descriptor import (
    ComponentDescriptor, InjectionPoint, RouteDefinition, describe, to_lower_first_case
)
from .component_scanner import ComponentScanner
from .container import ServiceContainer
from .autowirer import Autowirer

__all__ = [
    # 装饰器
    'controller',
    'service',
    'autowired',
    'request_mapping',
    'Autowired',
    'CONTROLLER',
    'SERVICE',

    # 描述符
    'ComponentDescriptor',
    'InjectionPoint',
    'RouteDefinition',
    'describe',
    'to_lower_first_case',

    # 核心类
    'ComponentScanner',
    'ServiceContainer',
    'Autowirer',
]
