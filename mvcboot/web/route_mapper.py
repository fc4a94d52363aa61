"""
路由映射
Route Mapper

作者: lx
日期: 2025-06-20
描述: 根据控制器类和方法上的路由标记构建 路径 -> 处理方法 映射表
"""

import logging
import re
import weakref
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterator, List, Optional

from ..exceptions import BeanNotFoundError, DuplicateRouteError
from ..ioc.container import ServiceContainer

logger = logging.getLogger(__name__)

_SEPARATOR_RUN = re.compile(r"/+")


def normalize_path(path: str) -> str:
    """
    规范化路径

    //demo//queryUser/ -> /demo/queryUser
    """
    path = _SEPARATOR_RUN.sub("/", "/" + (path or ""))
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]
    return path


def join_route(base_path: str, fragment: str) -> str:
    """拼接类级和方法级路由片段"""
    return normalize_path(f"/{base_path or ''}/{fragment or ''}")


class HandlerEntry:
    """
    路由表项

    只弱引用所属Bean，Bean由容器持有
    """

    __slots__ = ("path", "bean_name", "method_name", "owner", "_ref")

    def __init__(self, path: str, bean_name: str, bean: Any, method_name: str):
        self.path = path
        self.bean_name = bean_name
        self.method_name = method_name
        self.owner = type(bean)
        method = getattr(bean, method_name)
        try:
            self._ref: Callable[[], Optional[Callable]] = weakref.WeakMethod(method)
        except TypeError:
            # 不支持弱引用的实例(例如 __slots__ 类)
            self._ref = lambda: method

    @property
    def handler(self) -> Optional[Callable]:
        """绑定到Bean的处理方法，Bean被回收后为None"""
        return self._ref()

    @property
    def handler_name(self) -> str:
        return f"{self.owner.__name__}.{self.method_name}"

    def __call__(self, *args, **kwargs) -> Any:
        handler = self.handler
        if handler is None:
            raise BeanNotFoundError(self.bean_name)
        return handler(*args, **kwargs)

    def __repr__(self) -> str:
        return f"HandlerEntry(path={self.path!r}, handler={self.handler_name})"


class HandlerMapping(Mapping):
    """只读路由表"""

    def __init__(self, entries: Optional[Dict[str, HandlerEntry]] = None):
        self._entries: Dict[str, HandlerEntry] = dict(entries or {})

    def __getitem__(self, path: str) -> HandlerEntry:
        return self._entries[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get_handler(self, path: str) -> Optional[HandlerEntry]:
        """按请求路径查找处理方法，路径先规范化"""
        return self._entries.get(normalize_path(path))

    def paths(self) -> List[str]:
        return list(self._entries)


class RouteMapper:
    """路由映射器"""

    def __init__(self, container: ServiceContainer, fail_on_duplicate: bool = False):
        """
        Args:
            container: 已完成注入的容器
            fail_on_duplicate: 路径冲突时是否终止，默认后注册的覆盖先注册的
        """
        self.container = container
        self.fail_on_duplicate = fail_on_duplicate

    def build(self) -> HandlerMapping:
        """
        构建路由表

        Returns:
            路由表
        """
        entries: Dict[str, HandlerEntry] = {}

        for bean_name, instance, descriptor in self.container.beans():
            if not descriptor.is_controller:
                continue

            for route in descriptor.routes:
                path = join_route(descriptor.base_path, route.fragment)
                entry = HandlerEntry(path, bean_name, instance, route.method_name)

                existing = entries.get(path)
                if existing is not None:
                    if self.fail_on_duplicate:
                        logger.error(f"Duplicate route {path}: {existing.handler_name}, {entry.handler_name}")
                        raise DuplicateRouteError(path, existing.handler_name, entry.handler_name)
                    logger.warning(f"Route {path} remapped from {existing.handler_name} to {entry.handler_name}")

                entries[path] = entry
                logger.debug(f"Mapped {path} -> {entry.handler_name}")

        logger.info(f"Handler mapping initialized with {len(entries)} routes")
        return HandlerMapping(entries)
