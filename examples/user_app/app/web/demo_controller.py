"""
演示控制器
作者: lx
日期: 2025-06-20
"""
from mvcboot import autowired, controller, request_mapping

from app.service.user_service import UserService


@controller
@request_mapping("/demo/")
class DemoController:
    # 按声明类型的全限定名注入
    user_service: UserService = autowired()

    @request_mapping("/queryUser")
    def query_user(self, name: str = "alice"):
        return self.user_service.query_user(name)
