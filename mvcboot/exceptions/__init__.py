"""
统一的异常定义
Unified Exception Definitions

作者: mrkingu
日期: 2025-06-20
描述: 启动流程(配置加载、扫描、实例化、注入、路由映射)的统一异常体系
"""
from typing import Any, Optional


class BootstrapError(Exception):
    """启动异常基类"""

    def __init__(self, code: int, message: str, data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(message)

    def to_dict(self) -> dict:
        """转换为字典格式"""
        result = {
            "code": self.code,
            "message": self.message,
        }
        if self.data is not None:
            result["data"] = self.data
        return result


class ConfigLoadError(BootstrapError):
    """配置资源无法打开或读取"""

    def __init__(self, location: str, reason: str = ""):
        message = f"Failed to load configuration '{location}'"
        if reason:
            message += f": {reason}"
        super().__init__(
            code=ErrorCode.CONFIG_LOAD,
            message=message,
            data={"location": location}
        )
        self.location = location


class ScanError(BootstrapError):
    """包目录不存在或无法列出"""

    def __init__(self, path: str, reason: str = ""):
        message = f"Cannot scan directory '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(code=ErrorCode.SCAN, message=message, data={"path": path})
        self.path = path


class TypeResolutionError(BootstrapError):
    """类型名无法解析"""

    def __init__(self, type_name: str, reason: str = ""):
        message = f"Cannot resolve type '{type_name}'"
        if reason:
            message += f": {reason}"
        super().__init__(
            code=ErrorCode.TYPE_RESOLUTION,
            message=message,
            data={"type_name": type_name}
        )
        self.type_name = type_name


class InstantiationError(BootstrapError):
    """组件实例化失败"""

    def __init__(self, type_name: str, reason: str = ""):
        message = f"Failed to instantiate '{type_name}'"
        if reason:
            message += f": {reason}"
        super().__init__(
            code=ErrorCode.INSTANTIATION,
            message=message,
            data={"type_name": type_name}
        )
        self.type_name = type_name


class DuplicateBeanError(BootstrapError):
    """同名Bean重复注册"""

    def __init__(self, bean_name: str, existing: str, incoming: str):
        super().__init__(
            code=ErrorCode.DUPLICATE_BEAN,
            message=f"Bean name '{bean_name}' is already bound to {existing}, cannot bind {incoming}",
            data={"bean_name": bean_name, "existing": existing, "incoming": incoming}
        )
        self.bean_name = bean_name


class DuplicateBindingError(BootstrapError):
    """同一接口存在多个实现"""

    def __init__(self, capability: str, existing: str, incoming: str):
        super().__init__(
            code=ErrorCode.DUPLICATE_BINDING,
            message=(
                f"ambiguous implementation: more than one service satisfies capability "
                f"{capability} ({existing}, {incoming})"
            ),
            data={"capability": capability, "existing": existing, "incoming": incoming}
        )
        self.capability = capability


class InjectionAccessError(BootstrapError):
    """字段注入失败"""

    def __init__(self, bean_name: str, field_name: str, reason: str = ""):
        message = f"Cannot inject field '{field_name}' of bean '{bean_name}'"
        if reason:
            message += f": {reason}"
        super().__init__(
            code=ErrorCode.INJECTION_ACCESS,
            message=message,
            data={"bean_name": bean_name, "field_name": field_name}
        )
        self.bean_name = bean_name
        self.field_name = field_name


class UnresolvedDependencyError(BootstrapError):
    """注入目标在容器中不存在"""

    def __init__(self, bean_name: str, field_name: str, target: str):
        super().__init__(
            code=ErrorCode.UNRESOLVED_DEPENDENCY,
            message=f"No bean '{target}' for field '{field_name}' of bean '{bean_name}'",
            data={"bean_name": bean_name, "field_name": field_name, "target": target}
        )
        self.target = target


class DuplicateRouteError(BootstrapError):
    """同一路径映射到多个处理方法"""

    def __init__(self, path: str, existing: str, incoming: str):
        super().__init__(
            code=ErrorCode.DUPLICATE_ROUTE,
            message=f"Route '{path}' is mapped to both {existing} and {incoming}",
            data={"path": path, "existing": existing, "incoming": incoming}
        )
        self.path = path


class BeanNotFoundError(BootstrapError):
    """Bean不存在"""

    def __init__(self, bean_name: str):
        super().__init__(
            code=ErrorCode.BEAN_NOT_FOUND,
            message=f"Bean not found: {bean_name}",
            data={"bean_name": bean_name}
        )
        self.bean_name = bean_name


class ContainerNotInitializedError(BootstrapError):
    """容器尚未初始化"""

    def __init__(self, message: str = "Container not initialized"):
        super().__init__(code=ErrorCode.NOT_INITIALIZED, message=message)


# 错误码定义
class ErrorCode:
    """统一错误码"""

    CONFIG_LOAD = 1001
    SCAN = 1002
    TYPE_RESOLUTION = 1003
    INSTANTIATION = 1004
    DUPLICATE_BEAN = 1005
    DUPLICATE_BINDING = 1006
    INJECTION_ACCESS = 1007
    UNRESOLVED_DEPENDENCY = 1008
    DUPLICATE_ROUTE = 1009
    BEAN_NOT_FOUND = 1010
    NOT_INITIALIZED = 1011


__all__ = [
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
    'ErrorCode',
]
