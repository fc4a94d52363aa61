"""
启动流程集成测试
Bootstrap Integration Tests

作者: mrkingu
日期: 2025-06-20
描述: 从配置文件开始完整执行 扫描 -> 实例化 -> 注入 -> 路由映射
"""

from pathlib import Path

import pytest

from mvcboot import ApplicationContext, Dispatcher
from mvcboot.config import ContainerSettings
from mvcboot.exceptions import (
    ConfigLoadError, ContainerNotInitializedError, DuplicateBindingError, ScanError,
    TypeResolutionError, UnresolvedDependencyError
)
from mvcboot.launcher import main

EXAMPLE_APP = Path(__file__).resolve().parents[2] / "examples" / "user_app"


class TestApplicationContext:
    """应用上下文测试"""

    def test_end_to_end(self, user_app):
        context = ApplicationContext.start("application.properties", base_dir=user_app)

        assert sorted(context.type_names) == ["app.user_controller", "app.user_service"]
        assert set(context.container.get_bean_names()) == {
            "userController", "userServiceImpl", "userService"
        }
        assert context.get_bean("userService") is context.get_bean("userServiceImpl")

        assert context.handler_mapping.paths() == ["/user/list"]
        entry = context.get_handler("/user/list")
        assert entry.handler_name == "UserController.list"
        assert entry.handler.__self__ is context.get_bean("userController")
        assert entry() == ["alice", "bob"]

        assert context.configuration["greeting"] == "hello world"
        assert context.settings.scan_package == "app"
        assert context.errors == []

    def test_example_application(self):
        context = ApplicationContext.start("application.properties", base_dir=EXAMPLE_APP)

        assert sorted(context.handler_mapping.paths()) == [
            "/demo/queryUser", "/user/list", "/user/query"
        ]
        assert context.get_handler("/demo/queryUser")("bob") == {"name": "bob", "age": 20}
        assert context.get_handler("/user/query")("alice") == {"name": "alice", "age": 18}
        assert context.configuration["app.title"] == "User Demo"

    def test_broken_module_does_not_stop_startup(self, write_app, user_app_files):
        files = user_app_files
        files["app/broken.py"] = "import does_not_exist_anywhere\n"
        root = write_app(files)

        context = ApplicationContext.start("application.properties", base_dir=root)

        assert "userController" in context.container
        assert any(isinstance(error, TypeResolutionError) for error in context.errors)

    def test_ambiguous_capability_aborts_startup(self, write_app, user_app_files):
        files = user_app_files
        files["app/user_service_copy.py"] = """
            from mvcboot import service

            from app.user_service import UserService


            @service("otherUserService")
            class OtherUserServiceImpl(UserService):
                def list_users(self):
                    return []
        """
        root = write_app(files)

        with pytest.raises(DuplicateBindingError):
            ApplicationContext.start("application.properties", base_dir=root)

    def test_missing_dependency_policy(self, write_app, user_app_files):
        files = user_app_files
        files["app/orphan.py"] = """
            from mvcboot import autowired, controller


            @controller
            class OrphanController:
                missing: object = autowired("nobody")
        """
        root = write_app(files)

        context = ApplicationContext.start("application.properties", base_dir=root)
        assert context.get_bean("orphanController").missing is None
        assert any(isinstance(error, UnresolvedDependencyError) for error in context.errors)

        strict = ContainerSettings(scan_package="app", fail_on_missing_dependency=True)
        with pytest.raises(UnresolvedDependencyError):
            ApplicationContext.from_settings(strict, base_dir=root)

    def test_scan_root_from_configuration(self, write_app):
        root = write_app({
            "conf/app.properties": "scanPackage=nested_pkg\nscanRoot=src\n",
            "src/nested_pkg/thing.py": """
                from mvcboot import controller, request_mapping


                @controller
                class ThingController:
                    @request_mapping("thing")
                    def thing(self):
                        return "thing"
            """,
        })

        context = ApplicationContext.start("conf/app.properties", base_dir=root)

        assert context.get_handler("/thing")() == "thing"

    def test_missing_config_aborts_startup(self, tmp_path):
        with pytest.raises(ConfigLoadError):
            ApplicationContext.start("missing.properties", base_dir=tmp_path)

    def test_missing_package_aborts_startup(self, write_app):
        root = write_app({"application.properties": "scanPackage=nowhere\n"})

        with pytest.raises(ScanError):
            ApplicationContext.start("application.properties", base_dir=root)

    def test_from_components(self):
        from mvcboot import controller, request_mapping

        @controller
        class PingController:
            @request_mapping("/ping")
            def ping(self):
                return "pong"

        context = ApplicationContext.from_components([PingController])

        assert context.get_handler("/ping")() == "pong"
        assert context.settings is None


class TestDispatcher:
    """分发入口测试"""

    def test_dispatch_before_init_raises(self, user_app):
        dispatcher = Dispatcher("application.properties", base_dir=user_app)

        assert dispatcher.initialized is False
        with pytest.raises(ContainerNotInitializedError):
            dispatcher.do_get("/user/list")

    def test_init_runs_once(self, user_app):
        dispatcher = Dispatcher("application.properties", base_dir=user_app)

        context = dispatcher.init()

        assert dispatcher.init() is context
        assert dispatcher.context is context

    def test_do_get_resolves_handler(self, user_app):
        dispatcher = Dispatcher("application.properties", base_dir=user_app)
        dispatcher.init()

        entry = dispatcher.do_get("/user/list/")

        assert entry.handler_name == "UserController.list"
        assert dispatcher.do_post("/nothing") is None


class TestLauncher:
    """命令行入口测试"""

    def test_routes_command(self, user_app, capsys):
        code = main(["routes", "--config", "application.properties", "--base-dir", str(user_app)])

        assert code == 0
        assert capsys.readouterr().out.strip() == "/user/list -> UserController.list"

    def test_beans_command(self, user_app, capsys):
        code = main(["beans", "--base-dir", str(user_app)])

        out = capsys.readouterr().out
        assert code == 0
        assert "userService -> app.user_service.UserServiceImpl" in out
        assert "userController -> app.user_controller.UserController" in out

    def test_startup_failure_exit_code(self, tmp_path, capsys):
        code = main(["routes", "--config", "missing.properties", "--base-dir", str(tmp_path)])

        assert code == 1
        assert "missing.properties" in capsys.readouterr().err
