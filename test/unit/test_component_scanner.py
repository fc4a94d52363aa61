"""
组件扫描测试
作者: mrkingu
日期: 2025-06-20
"""
from pathlib import Path

import pytest

from mvcboot.exceptions import ScanError
from mvcboot.ioc import ComponentScanner


def _touch(root: Path, *relative: str) -> None:
    for item in relative:
        path = root / item
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")


class TestComponentScanner:
    """组件扫描器测试"""

    def test_scans_nested_packages(self, tmp_path):
        _touch(
            tmp_path,
            "app/__init__.py",
            "app/a.py",
            "app/web/__init__.py",
            "app/web/b.py",
            "app/web/deep/er/c.py",
            "app/README.md",
        )

        names = ComponentScanner(tmp_path).scan("app")

        assert sorted(names) == ["app.a", "app.web.b", "app.web.deep.er.c"]
        assert len(names) == len(set(names))

    def test_dotted_package_resolves_to_subdirectory(self, tmp_path):
        _touch(tmp_path, "app/web/b.py", "app/other.py")

        names = ComponentScanner(tmp_path).scan("app.web")

        assert names == ["app.web.b"]

    def test_skips_cache_and_hidden_directories(self, tmp_path):
        _touch(
            tmp_path,
            "app/a.py",
            "app/__pycache__/a.cpython-312.py",
            "app/.hidden/x.py",
        )

        assert ComponentScanner(tmp_path).scan("app") == ["app.a"]

    def test_custom_suffixes(self, tmp_path):
        _touch(tmp_path, "app/a.py", "app/b.pyc")

        names = ComponentScanner(tmp_path, suffixes=(".pyc",)).scan("app")

        assert names == ["app.b"]

    def test_order_is_deterministic(self, tmp_path):
        _touch(tmp_path, "app/z.py", "app/m/x.py", "app/a.py")

        first = ComponentScanner(tmp_path).scan("app")
        second = ComponentScanner(tmp_path).scan("app")

        assert first == second

    def test_rescan_returns_only_new_package(self, tmp_path):
        _touch(tmp_path, "a/x.py", "b/y.py")
        scanner = ComponentScanner(tmp_path)

        assert scanner.scan("a") == ["a.x"]
        assert scanner.scan("b") == ["b.y"]
        assert scanner.type_names == ["b.y"]

    def test_rescan_same_package(self, tmp_path):
        _touch(tmp_path, "app/a.py")
        scanner = ComponentScanner(tmp_path)

        scanner.scan("app")
        assert scanner.scan("app") == ["app.a"]

    def test_rescan_resets_errors(self, tmp_path, monkeypatch):
        _touch(tmp_path, "app/broken/b.py", "other/c.py")
        scanner = ComponentScanner(tmp_path)
        original = scanner._list_directory

        def fake_list(directory):
            if directory.name == "broken":
                return None
            return original(directory)

        monkeypatch.setattr(scanner, "_list_directory", fake_list)

        scanner.scan("app")
        assert len(scanner.errors) == 1

        assert scanner.scan("other") == ["other.c"]
        assert scanner.errors == []

    def test_missing_base_directory_raises(self, tmp_path):
        with pytest.raises(ScanError):
            ComponentScanner(tmp_path).scan("does.not.exist")

    def test_base_path_that_is_a_file_raises(self, tmp_path):
        _touch(tmp_path, "app")
        with pytest.raises(ScanError):
            ComponentScanner(tmp_path).scan("app")

    def test_empty_package_name_raises(self, tmp_path):
        with pytest.raises(ScanError):
            ComponentScanner(tmp_path).scan(" . ")

    def test_unlistable_subdirectory_is_skipped(self, tmp_path, monkeypatch):
        _touch(tmp_path, "app/a.py", "app/broken/b.py", "app/ok/c.py")
        scanner = ComponentScanner(tmp_path)
        original = scanner._list_directory

        def fake_list(directory):
            if directory.name == "broken":
                return None
            return original(directory)

        monkeypatch.setattr(scanner, "_list_directory", fake_list)

        names = scanner.scan("app")

        assert sorted(names) == ["app.a", "app.ok.c"]
        assert len(scanner.errors) == 1
        assert "broken" in scanner.errors[0].path

    def test_unlistable_subdirectory_fails_when_strict(self, tmp_path, monkeypatch):
        _touch(tmp_path, "app/a.py", "app/broken/b.py")
        scanner = ComponentScanner(tmp_path, fail_on_unlistable=True)
        original = scanner._list_directory
        monkeypatch.setattr(
            scanner, "_list_directory",
            lambda directory: None if directory.name == "broken" else original(directory)
        )

        with pytest.raises(ScanError):
            scanner.scan("app")

    def test_unlistable_base_directory_raises(self, tmp_path, monkeypatch):
        _touch(tmp_path, "app/a.py")
        scanner = ComponentScanner(tmp_path)
        monkeypatch.setattr(scanner, "_list_directory", lambda directory: None)

        with pytest.raises(ScanError):
            scanner.scan("app")
