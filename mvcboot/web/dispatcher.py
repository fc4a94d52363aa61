"""
请求分发入口
Dispatcher

作者: lx
日期: 2025-06-20
描述: 对应Servlet的入口对象，init时启动应用上下文，请求时按路径查找处理方法
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..context import ApplicationContext
from ..exceptions import ContainerNotInitializedError
from .route_mapper import HandlerEntry

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    分发入口

    只负责启动和查找，调用处理方法不在此处
    """

    def __init__(self, config_location: str, base_dir: Optional[Union[str, Path]] = None):
        self.config_location = config_location
        self.base_dir = base_dir
        self._context: Optional[ApplicationContext] = None

    def init(self) -> ApplicationContext:
        """启动应用上下文，重复调用直接返回已有上下文"""
        if self._context is not None:
            return self._context

        self._context = ApplicationContext.start(self.config_location, self.base_dir)
        logger.info("mvcboot framework is init.")
        return self._context

    @property
    def context(self) -> ApplicationContext:
        if self._context is None:
            raise ContainerNotInitializedError("Dispatcher.init() has not been called")
        return self._context

    @property
    def initialized(self) -> bool:
        return self._context is not None

    def do_get(self, path: str) -> Optional[HandlerEntry]:
        return self.do_post(path)

    def do_post(self, path: str) -> Optional[HandlerEntry]:
        """查找路径对应的处理方法"""
        entry = self.context.get_handler(path)
        if entry is None:
            logger.info(f"doDispatch() {path} -> no handler")
        else:
            logger.info(f"doDispatch() {path} -> {entry.handler_name}")
        return entry
