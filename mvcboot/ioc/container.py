"""
IoC服务容器
IoC Service Container

作者: mrkingu
日期: 2025-06-20
描述: IoC容器核心实现，负责解析扫描到的类型、实例化组件并按名称和接口注册Bean
"""

import importlib
import inspect
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .decorators import get_component_marker
from .descriptor import ComponentDescriptor, describe, qualified_name, to_lower_first_case
from ..exceptions import (
    BeanNotFoundError, BootstrapError, DuplicateBeanError, DuplicateBindingError,
    InstantiationError, TypeResolutionError
)

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    IoC服务容器

    持有所有Bean实例，键默认是类名首字母小写，值是对应的实例
    """

    def __init__(self):
        self.instances: Dict[str, Any] = {}
        self.descriptors: Dict[str, ComponentDescriptor] = {}
        self.errors: List[BootstrapError] = []
        # 主名称 -> 描述符，按注册顺序
        self._primary: Dict[str, ComponentDescriptor] = {}
        # 接口全限定名 -> Bean名称
        self._capability_bindings: Dict[str, str] = {}
        # 类型全限定名(实现类和接口) -> Bean名称
        self._type_index: Dict[str, str] = {}

    def register_all(self, type_names: Iterable[str]) -> int:
        """
        按顺序注册扫描到的类型

        Args:
            type_names: 模块或类的全限定名

        Returns:
            成功注册的组件数量
        """
        type_names = list(type_names)
        if not type_names:
            logger.info("No types to register")
            return 0

        registered = 0
        for type_name in type_names:
            try:
                classes = self.resolve_type(type_name)
            except TypeResolutionError as e:
                logger.warning(f"Skipping {type_name}: {e}")
                self.errors.append(e)
                continue

            for cls in classes:
                if self.register_class(cls) is not None:
                    registered += 1

        logger.info(f"Registered {registered} components, {len(self.instances)} bean names")
        return registered

    def resolve_type(self, type_name: str) -> List[type]:
        """
        解析类型名

        模块名返回模块中定义的带组件标记的类，类名返回该类

        Args:
            type_name: 全限定名

        Returns:
            带组件标记的类列表
        """
        try:
            module = importlib.import_module(type_name)
        except ImportError as e:
            cls = self._resolve_class(type_name)
            if cls is None:
                raise TypeResolutionError(type_name, str(e)) from e
            return [cls] if get_component_marker(cls) is not None else []
        except Exception as e:
            raise TypeResolutionError(type_name, f"{type(e).__name__}: {e}") from e

        return [
            obj for obj in vars(module).values()
            if inspect.isclass(obj)
            and obj.__module__ == module.__name__
            and get_component_marker(obj) is not None
        ]

    def _resolve_class(self, type_name: str) -> Optional[type]:
        module_name, _, attr_name = type_name.rpartition(".")
        if not module_name:
            return None
        try:
            module = importlib.import_module(module_name)
        except Exception as e:
            logger.debug(f"Could not import module {module_name}: {e}")
            return None
        obj = getattr(module, attr_name, None)
        return obj if inspect.isclass(obj) else None

    def register_class(self, cls: type) -> Optional[Any]:
        """
        注册带组件标记的类

        Returns:
            创建的实例，未标记或实例化失败时返回None
        """
        descriptor = describe(cls)
        if descriptor is None:
            logger.debug(f"Ignoring unmarked class: {qualified_name(cls)}")
            return None
        return self.register(descriptor)

    def register(self, descriptor: ComponentDescriptor) -> Optional[Any]:
        """
        按描述符注册组件

        Args:
            descriptor: 组件描述符

        Returns:
            创建的实例，实例化失败时返回None
        """
        self._check_name(descriptor.name, descriptor)
        capability_names = self._check_capabilities(descriptor)

        try:
            instance = descriptor.create_instance()
        except Exception as e:
            error = InstantiationError(descriptor.type_name, f"{type(e).__name__}: {e}")
            logger.error(f"Failed to create bean {descriptor.name}: {error}")
            self.errors.append(error)
            return None

        self._bind(descriptor.name, instance, descriptor)
        self._primary[descriptor.name] = descriptor
        self._type_index.setdefault(descriptor.type_name, descriptor.name)

        for capability, alias in capability_names:
            if alias != descriptor.name:
                self._bind(alias, instance, descriptor)
            self._capability_bindings[capability] = descriptor.name
            self._type_index[capability] = descriptor.name
            logger.debug(f"Bound capability {capability} as {alias} -> {descriptor.name}")

        logger.debug(f"Registered {descriptor.kind} bean: {descriptor.name} ({descriptor.type_name})")
        return instance

    def _check_name(self, name: str, descriptor: ComponentDescriptor) -> None:
        if name in self.instances:
            existing = self.descriptors[name].type_name
            logger.error(f"Bean name conflict: {name} ({existing} vs {descriptor.type_name})")
            raise DuplicateBeanError(name, existing, descriptor.type_name)

    def _check_capabilities(self, descriptor: ComponentDescriptor) -> List[Tuple[str, str]]:
        """校验接口绑定，返回 (接口全限定名, 绑定名称) 列表"""
        bindings = []
        for capability in descriptor.capabilities:
            capability_name = qualified_name(capability)
            if capability_name in self._capability_bindings or capability_name in self.instances:
                existing = self._capability_bindings.get(capability_name, capability_name)
                existing_type = self.descriptors[existing].type_name if existing in self.descriptors else existing
                logger.error(f"Ambiguous implementation of {capability_name}: {existing_type}, {descriptor.type_name}")
                raise DuplicateBindingError(capability_name, existing_type, descriptor.type_name)

            alias = to_lower_first_case(capability.__name__)
            if alias in (a for _, a in bindings):
                raise DuplicateBeanError(alias, descriptor.type_name, descriptor.type_name)
            # 显式名称与接口默认名相同时，同一实例已绑定在该名称下
            if alias != descriptor.name:
                self._check_name(alias, descriptor)
            bindings.append((capability_name, alias))
        return bindings

    def _bind(self, name: str, instance: Any, descriptor: ComponentDescriptor) -> None:
        self.instances[name] = instance
        self.descriptors[name] = descriptor

    def get_bean(self, name: str) -> Any:
        """
        获取Bean实例

        Args:
            name: Bean名称或类型全限定名

        Returns:
            Bean实例
        """
        if name in self.instances:
            return self.instances[name]
        bean_name = self._type_index.get(name)
        if bean_name is not None:
            return self.instances[bean_name]
        raise BeanNotFoundError(name)

    def lookup(self, name: str) -> Optional[Any]:
        """获取Bean实例，不存在时返回None"""
        try:
            return self.get_bean(name)
        except BeanNotFoundError:
            return None

    def has_bean(self, name: str) -> bool:
        return name in self.instances or name in self._type_index

    def get_bean_names(self) -> List[str]:
        return list(self.instances)

    def get_descriptor(self, name: str) -> ComponentDescriptor:
        if name in self.descriptors:
            return self.descriptors[name]
        bean_name = self._type_index.get(name)
        if bean_name is None:
            raise BeanNotFoundError(name)
        return self.descriptors[bean_name]

    def beans(self) -> Iterator[Tuple[str, Any, ComponentDescriptor]]:
        """按注册顺序遍历组件，每个实例只出现一次"""
        for name, descriptor in self._primary.items():
            yield name, self.instances[name], descriptor

    def get_beans_by_kind(self, kind: str) -> Dict[str, Any]:
        """
        按组件类型获取Bean

        Args:
            kind: "controller" 或 "service"

        Returns:
            主名称到实例的字典
        """
        return {
            name: instance
            for name, instance, descriptor in self.beans()
            if descriptor.kind == kind
        }

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_bean(name)

    def __len__(self) -> int:
        return len(self.instances)

    def get_container_info(self) -> dict:
        """
        获取容器信息

        Returns:
            容器状态信息
        """
        return {
            'total_components': len(self._primary),
            'bean_names': len(self.instances),
            'errors': [error.to_dict() for error in self.errors],
            'beans': {
                name: {
                    'type': descriptor.type_name,
                    'kind': descriptor.kind,
                    'primary': self._primary.get(name) is descriptor,
                }
                for name, descriptor in self.descriptors.items()
            }
        }
