"""
组件扫描器
Component Scanner

作者: mrkingu
日期: 2025-06-20
描述: 递归扫描基础包目录，收集所有模块的全限定名
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence, Set, Union

from ..exceptions import ScanError

logger = logging.getLogger(__name__)

# 包初始化模块不作为独立的扫描单元
SKIPPED_STEMS = {"__init__", "__main__"}


class ComponentScanner:
    """
    组件扫描器

    负责把点分包名转换为目录并递归列出其中的模块文件
    """

    def __init__(
        self,
        root: Union[str, Path] = ".",
        suffixes: Sequence[str] = (".py",),
        fail_on_unlistable: bool = False
    ):
        """
        Args:
            root: 包路径的根目录
            suffixes: 被视为模块的文件后缀
            fail_on_unlistable: 子目录无法列出时是否终止扫描
        """
        self.root = Path(root)
        self.suffixes = tuple(suffixes)
        self.fail_on_unlistable = fail_on_unlistable
        self.type_names: List[str] = []
        self.errors: List[ScanError] = []
        self._seen: Set[str] = set()

    def scan(self, package: str) -> List[str]:
        """
        扫描指定包

        Args:
            package: 点分包名，例如 "app.web"

        Returns:
            模块全限定名列表
        """
        package = package.strip().strip(".")
        if not package:
            raise ScanError(str(self.root), "empty package name")

        self.clear()

        base_dir = self.package_dir(package)
        logger.info(f"Starting component scan on package: {package} ({base_dir})")

        if not base_dir.is_dir():
            logger.error(f"Scan path does not exist or is not a directory: {base_dir}")
            raise ScanError(str(base_dir), "not a directory")

        entries = self._list_directory(base_dir)
        if entries is None:
            raise ScanError(str(base_dir), "directory is not listable")

        self._scan_entries(package, entries)

        logger.info(f"Component scan completed. Found {len(self.type_names)} modules")
        return list(self.type_names)

    def package_dir(self, package: str) -> Path:
        """点分包名对应的目录"""
        return self.root.joinpath(*package.split("."))

    def _scan_directory(self, package: str, directory: Path) -> None:
        """递归扫描子目录"""
        logger.debug(f"Scanning directory: {directory}")
        entries = self._list_directory(directory)
        if entries is None:
            error = ScanError(str(directory), "directory is not listable")
            if self.fail_on_unlistable:
                raise error
            logger.warning(f"Skipping unlistable directory {directory}")
            self.errors.append(error)
            return
        self._scan_entries(package, entries)

    def _scan_entries(self, package: str, entries: List[Path]) -> None:
        for item in entries:
            if item.is_dir():
                if item.name.startswith(".") or item.name.startswith("__"):
                    continue
                self._scan_directory(f"{package}.{item.name}", item)
            elif item.is_file() and item.suffix in self.suffixes:
                if item.stem in SKIPPED_STEMS or "." in item.stem:
                    continue
                self._add(f"{package}.{item.stem}")

    def _list_directory(self, directory: Path) -> Optional[List[Path]]:
        try:
            return sorted(directory.iterdir())
        except OSError as e:
            logger.error(f"Error listing directory {directory}: {e}")
            return None

    def _add(self, type_name: str) -> None:
        if type_name in self._seen:
            return
        self._seen.add(type_name)
        self.type_names.append(type_name)
        logger.debug(f"Found module: {type_name}")

    def clear(self) -> None:
        """清空扫描结果"""
        self.type_names.clear()
        self.errors.clear()
        self._seen.clear()


def scan_package(package: str, root: Union[str, Path] = os.curdir, **kwargs) -> List[str]:
    """扫描便捷函数"""
    return ComponentScanner(root, **kwargs).scan(package)
