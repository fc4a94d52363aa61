"""
组件描述符
Component Descriptor

作者: mrkingu
日期: 2025-06-20
描述: 把装饰器标记整理成显式的注册描述(名称、接口、构造器、注入点、路由)，
      容器只依赖描述符完成实例化、注入和路由映射
"""

import inspect
import logging
import sys
from abc import ABC, ABCMeta
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from .decorators import (
    CONTROLLER, Autowired, ComponentMarker, get_component_marker, get_mapping
)

logger = logging.getLogger(__name__)


def to_lower_first_case(simple_name: str) -> str:
    """
    将类名首字母转小写

    只处理A-Z，其余字符保持不变
    """
    if simple_name and "A" <= simple_name[0] <= "Z":
        return chr(ord(simple_name[0]) + 32) + simple_name[1:]
    return simple_name


def qualified_name(cls: Any) -> str:
    """类的全限定名，字符串形式的注解原样返回"""
    if isinstance(cls, str):
        return cls
    module = getattr(cls, "__module__", None)
    name = getattr(cls, "__qualname__", None) or getattr(cls, "__name__", None)
    if name is None:
        return repr(cls)
    if not module or module == "builtins":
        return name
    return f"{module}.{name}"


def default_capabilities(cls: type) -> Tuple[type, ...]:
    """直接继承的接口：抽象基类或Protocol"""
    capabilities = []
    for base in cls.__bases__:
        if base in (object, ABC):
            continue
        if getattr(base, "_is_protocol", False) or isinstance(base, ABCMeta):
            capabilities.append(base)
    return tuple(capabilities)


@dataclass(frozen=True)
class InjectionPoint:
    """注入点"""
    field_name: str
    label: str = ""
    declared_type: Any = None

    @property
    def target_name(self) -> str:
        """显式名称优先，否则为声明类型的全限定名"""
        if self.label:
            return self.label
        if self.declared_type is None:
            return ""
        return qualified_name(self.declared_type)


@dataclass(frozen=True)
class RouteDefinition:
    """方法级路由"""
    method_name: str
    fragment: str = ""


@dataclass(frozen=True)
class ComponentDescriptor:
    """
    组件描述符

    存储组件的注册信息
    """
    component_class: type
    kind: str
    name: str
    capabilities: Tuple[type, ...] = ()
    factory: Optional[Callable[[], Any]] = None
    injection_points: Tuple[InjectionPoint, ...] = ()
    base_path: str = ""
    routes: Tuple[RouteDefinition, ...] = field(default=())

    @property
    def type_name(self) -> str:
        return qualified_name(self.component_class)

    @property
    def simple_name(self) -> str:
        return self.component_class.__name__

    @property
    def is_controller(self) -> bool:
        return self.kind == CONTROLLER

    def create_instance(self) -> Any:
        """通过零参数构造器创建实例"""
        factory = self.factory or self.component_class
        return factory()

    def __str__(self) -> str:
        return f"ComponentDescriptor(name={self.name}, kind={self.kind}, type={self.type_name})"


def _field_annotations(cls: type) -> Dict[str, Any]:
    """类自身声明的字段注解，逐个解析，无法解析的前向引用保留字符串"""
    annotations = dict(inspect.get_annotations(cls))
    module = sys.modules.get(cls.__module__)
    module_globals = vars(module) if module is not None else {}
    class_locals = dict(vars(cls))

    for attr_name, annotation in annotations.items():
        if not isinstance(annotation, str):
            continue
        try:
            annotations[attr_name] = eval(annotation, module_globals, class_locals)
        except Exception as e:
            logger.warning(f"Cannot evaluate annotation of {cls.__qualname__}.{attr_name}: {e}")
    return annotations


def _collect_injection_points(cls: type) -> Tuple[InjectionPoint, ...]:
    annotations = _field_annotations(cls)
    points = []
    for attr_name, attr in vars(cls).items():
        if isinstance(attr, Autowired):
            points.append(InjectionPoint(
                field_name=attr_name,
                label=attr.name,
                declared_type=annotations.get(attr_name)
            ))
    return tuple(points)


def _collect_routes(cls: type) -> Tuple[RouteDefinition, ...]:
    # 子类覆盖的方法若未标记路由，则移除父类的路由
    fragments: Dict[str, str] = {}
    for klass in reversed(cls.__mro__):
        for attr_name, attr in vars(klass).items():
            if not inspect.isfunction(attr):
                continue
            fragment = get_mapping(attr)
            if fragment is None:
                fragments.pop(attr_name, None)
            else:
                fragments[attr_name] = fragment
    return tuple(RouteDefinition(name, fragment) for name, fragment in fragments.items())


def describe(cls: type, marker: Optional[ComponentMarker] = None) -> Optional[ComponentDescriptor]:
    """
    根据类上的标记构建描述符

    Args:
        cls: 组件类
        marker: 组件标记，默认读取类自身的标记

    Returns:
        描述符，未标记的类返回None
    """
    marker = marker or get_component_marker(cls)
    if marker is None:
        return None

    if marker.kind == CONTROLLER:
        name = to_lower_first_case(cls.__name__)
        capabilities: Tuple[type, ...] = ()
    else:
        name = marker.label.strip() or to_lower_first_case(cls.__name__)
        if marker.capabilities is not None:
            capabilities = marker.capabilities
        else:
            capabilities = default_capabilities(cls)

    return ComponentDescriptor(
        component_class=cls,
        kind=marker.kind,
        name=name,
        capabilities=capabilities,
        factory=cls,
        injection_points=_collect_injection_points(cls),
        base_path=get_mapping(cls) or "",
        routes=_collect_routes(cls),
    )
