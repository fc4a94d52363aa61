#!/usr/bin/env python3
"""
命令行入口
Command Line Launcher

作者: lx
日期: 2025-06-20
描述: 启动应用上下文并输出Bean列表或路由表
"""

import argparse
import sys
from typing import List, Optional

from .context import ApplicationContext
from .exceptions import BootstrapError
from .logger import setup_logging


def print_beans(context: ApplicationContext) -> None:
    for name in context.container.get_bean_names():
        descriptor = context.container.get_descriptor(name)
        print(f"{name} -> {descriptor.type_name}")


def print_routes(context: ApplicationContext) -> None:
    for path, entry in context.handler_mapping.items():
        print(f"{path} -> {entry.handler_name}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    主入口函数
    Main entry function
    """
    parser = argparse.ArgumentParser(description="mvcboot 组件扫描与路由表工具")
    parser.add_argument(
        "command",
        choices=["beans", "routes"],
        help="要输出的内容"
    )
    parser.add_argument(
        "--config",
        default="application.properties",
        help="配置文件路径 (默认: application.properties)"
    )
    parser.add_argument(
        "--base-dir",
        default=None,
        help="相对路径的解析目录 (默认: 当前目录)"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="日志级别 (默认: WARNING)"
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="以JSON格式输出日志"
    )

    args = parser.parse_args(argv)
    setup_logging(args.log_level, json_format=args.json_logs)

    try:
        context = ApplicationContext.start(args.config, args.base_dir)
    except BootstrapError as e:
        print(f"启动失败: {e.message}", file=sys.stderr)
        return 1

    if args.command == "beans":
        print_beans(context)
    else:
        print_routes(context)
    return 0


if __name__ == "__main__":
    sys.exit(main())
