"""
自动注入
Autowirer

作者: mrkingu
日期: 2025-06-20
描述: 遍历容器中的Bean，把autowired字段解析为容器中的实例并写入
"""

import logging
from typing import List

from .container import ServiceContainer
from .descriptor import InjectionPoint
from ..exceptions import BootstrapError, InjectionAccessError, UnresolvedDependencyError

logger = logging.getLogger(__name__)


class Autowirer:
    """
    字段注入器

    单个字段失败只记录日志，不影响其他字段
    """

    def __init__(self, container: ServiceContainer, fail_on_missing: bool = False):
        """
        Args:
            container: 已完成注册的容器
            fail_on_missing: 注入目标不存在时是否终止
        """
        self.container = container
        self.fail_on_missing = fail_on_missing
        self.errors: List[BootstrapError] = []

    def autowire(self) -> int:
        """
        完成依赖注入

        Returns:
            成功注入的字段数量
        """
        if not len(self.container):
            return 0

        injected = 0
        for bean_name, instance, descriptor in self.container.beans():
            for point in descriptor.injection_points:
                if self._inject(bean_name, instance, point):
                    injected += 1

        logger.info(f"Autowiring completed: {injected} fields injected, {len(self.errors)} skipped")
        return injected

    def _inject(self, bean_name: str, instance: object, point: InjectionPoint) -> bool:
        target = point.target_name
        dependency = self.container.lookup(target) if target else None

        if dependency is None:
            error = UnresolvedDependencyError(bean_name, point.field_name, target or "<untyped>")
            if self.fail_on_missing:
                logger.error(str(error))
                raise error
            logger.warning(f"Optional dependency {target or '<untyped>'} not available for {bean_name}.{point.field_name}")
            self.errors.append(error)
            return False

        try:
            # 绕过类自定义的 __setattr__
            object.__setattr__(instance, point.field_name, dependency)
        except (AttributeError, TypeError) as e:
            error = InjectionAccessError(bean_name, point.field_name, str(e))
            logger.error(str(error))
            self.errors.append(error)
            return False

        logger.debug(f"Injected dependency {target} into {bean_name}.{point.field_name}")
        return True
