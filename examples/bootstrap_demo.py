#!/usr/bin/env python3
"""
启动流程示例
Bootstrap Demo

作者: lx
日期: 2025-06-20
描述: 启动示例应用并按路径调用处理方法
"""

import logging
from pathlib import Path

from mvcboot import Dispatcher
from mvcboot.logger import setup_logging

APP_DIR = Path(__file__).parent / "user_app"


def main() -> None:
    setup_logging(logging.INFO)

    dispatcher = Dispatcher("application.properties", base_dir=APP_DIR)
    context = dispatcher.init()

    print("Beans:")
    for name in context.container.get_bean_names():
        print(f"  {name}")

    print("Routes:")
    for path in context.handler_mapping.paths():
        print(f"  {path}")

    entry = dispatcher.do_get("/demo/queryUser")
    if entry is not None:
        print(f"/demo/queryUser -> {entry('bob')}")


if __name__ == "__main__":
    main()
