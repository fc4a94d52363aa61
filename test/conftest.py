"""
测试配置文件
Test Configuration File

作者: lx
日期: 2025-06-20
描述: pytest fixtures，生成临时应用包并在测试结束后清理导入状态
"""

import importlib
import logging
import os
import sys
import textwrap
from pathlib import Path
from typing import Callable, Dict

import pytest

# 添加项目根目录到路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


@pytest.fixture(autouse=True)
def isolated_imports(monkeypatch):
    """每个测试结束后恢复 sys.path 并移除测试期间导入的应用模块"""
    monkeypatch.setattr(sys, "path", list(sys.path))
    before = set(sys.modules)
    yield
    for name in set(sys.modules) - before:
        if not name.startswith(("mvcboot", "_pytest", "pytest")):
            sys.modules.pop(name, None)
    importlib.invalidate_caches()

    # 命令行入口会配置框架日志器，这里恢复默认
    framework_logger = logging.getLogger("mvcboot")
    for handler in list(framework_logger.handlers):
        framework_logger.removeHandler(handler)
    framework_logger.propagate = True
    framework_logger.setLevel(logging.NOTSET)


@pytest.fixture
def write_app(tmp_path) -> Callable[[Dict[str, str]], Path]:
    """
    在临时目录下生成应用源码

    参数为 相对路径 -> 源码 的字典，返回根目录
    """
    def _write(files: Dict[str, str]) -> Path:
        for relative, source in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(source), encoding="utf-8")
        return tmp_path

    return _write


USER_APP = {
    "application.properties": """
        # demo application
        scanPackage=app
        greeting = hello world
    """,
    "app/__init__.py": "",
    "app/user_service.py": """
        from abc import ABC, abstractmethod

        from mvcboot import service


        class UserService(ABC):
            @abstractmethod
            def list_users(self):
                pass


        @service
        class UserServiceImpl(UserService):
            def list_users(self):
                return ["alice", "bob"]
    """,
    "app/user_controller.py": """
        from mvcboot import autowired, controller, request_mapping

        from app.user_service import UserService


        @controller
        @request_mapping("/user")
        class UserController:
            user_service: UserService = autowired("userService")

            @request_mapping("list")
            def list(self):
                return self.user_service.list_users()

            def helper(self):
                return "not mapped"
    """,
}


@pytest.fixture
def user_app_files() -> Dict[str, str]:
    """示例应用源码的副本，测试可以在其中增加文件"""
    return dict(USER_APP)


@pytest.fixture
def user_app(write_app, user_app_files) -> Path:
    """包含一个控制器和一个服务的示例应用"""
    return write_app(user_app_files)
