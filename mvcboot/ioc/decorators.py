"""
IoC装饰器实现
IoC Decorators Implementation

作者: mrkingu
日期: 2025-06-20
描述: 提供@controller, @service, @request_mapping装饰器和autowired字段标记
"""

import logging
from typing import Any, Callable, Optional, Sequence, Type, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")

# 组件类型
CONTROLLER = "controller"
SERVICE = "service"

# 标记属性名
COMPONENT_ATTR = "__mvc_component__"
MAPPING_ATTR = "__request_mapping__"


class ComponentMarker:
    """组件标记，记录组件类型、显式名称和显式接口"""

    __slots__ = ("kind", "label", "capabilities")

    def __init__(self, kind: str, label: str = "", capabilities: Optional[Sequence[type]] = None):
        self.kind = kind
        self.label = label or ""
        self.capabilities = tuple(capabilities) if capabilities is not None else None

    def __repr__(self) -> str:
        return f"ComponentMarker(kind={self.kind!r}, label={self.label!r})"


def controller(cls: Optional[Type[T]] = None) -> Union[Type[T], Callable[[Type[T]], Type[T]]]:
    """
    控制器装饰器 - 标记对外暴露路由的类

    Bean名称总是类名首字母小写

    使用示例:
        @controller
        @request_mapping("/user")
        class UserController:
            pass
    """
    def decorator(klass: Type[T]) -> Type[T]:
        setattr(klass, COMPONENT_ATTR, ComponentMarker(CONTROLLER))
        logger.debug(f"Marked controller: {klass.__qualname__}")
        return klass

    if cls is not None:
        return decorator(cls)
    return decorator


def service(name: Optional[Union[str, Type[T]]] = None, capabilities: Optional[Sequence[type]] = None):
    """
    服务装饰器 - 标记可注入的业务组件

    Args:
        name: Bean名称，为空时使用类名首字母小写
        capabilities: 显式指定绑定的接口，默认取直接继承的抽象基类

    使用示例:
        @service("userService")
        class UserServiceImpl(UserService):
            pass
    """
    def decorator(klass: Type[T]) -> Type[T]:
        setattr(klass, COMPONENT_ATTR, ComponentMarker(SERVICE, label, capabilities))
        logger.debug(f"Marked service: {klass.__qualname__} ({label or 'default name'})")
        return klass

    # 支持不带括号的 @service
    if isinstance(name, type):
        label = ""
        return decorator(name)

    label = (name or "").strip()
    return decorator


def request_mapping(path: str = ""):
    """
    路由装饰器 - 可用于类和方法

    类上的值作为基础路径，方法上的值作为路径片段

    使用示例:
        @request_mapping("list")
        def list(self):
            pass
    """
    def decorator(obj: T) -> T:
        setattr(obj, MAPPING_ATTR, path or "")
        return obj

    return decorator


class Autowired:
    """
    自动注入字段标记

    作为类属性声明，容器启动时把依赖写入实例属性；
    未注入时读取实例属性得到None
    """

    def __init__(self, name: str = ""):
        self.name = (name or "").strip()
        self.field_name: Optional[str] = None

    def __set_name__(self, owner: type, field_name: str) -> None:
        self.field_name = field_name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        # 注入后实例字典中的值会覆盖此描述符
        return None

    def __repr__(self) -> str:
        return f"Autowired(name={self.name!r}, field={self.field_name!r})"


def autowired(name: str = "") -> Any:
    """
    自动注入声明

    Args:
        name: 依赖的Bean名称，为空时使用字段声明类型的全限定名

    使用示例:
        @controller
        class UserController:
            user_service: UserService = autowired("userService")
    """
    return Autowired(name)


def get_component_marker(cls: type) -> Optional[ComponentMarker]:
    """获取类自身声明的组件标记（不含继承）"""
    marker = vars(cls).get(COMPONENT_ATTR)
    if isinstance(marker, ComponentMarker):
        return marker
    return None


def get_mapping(obj: Any) -> Optional[str]:
    """获取路由标记，未标记时返回None"""
    if isinstance(obj, type):
        value = vars(obj).get(MAPPING_ATTR)
    else:
        value = getattr(obj, MAPPING_ATTR, None)
    return value if isinstance(value, str) else None
