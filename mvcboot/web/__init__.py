"""
Web层
Web Layer

作者: lx
日期: 2025-06-20
描述: 路由映射和请求分发入口
"""

from .route_mapper import HandlerEntry, HandlerMapping, RouteMapper, join_route, normalize_path

__all__ = [
    'HandlerEntry',
    'HandlerMapping',
    'RouteMapper',
    'join_route',
    'normalize_path',
]
