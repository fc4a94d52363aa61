"""
用户控制器
作者: lx
日期: 2025-06-20
"""
from mvcboot import autowired, controller, request_mapping

from app.service.user_service import UserService


@controller
@request_mapping("/user")
class UserController:
    user_service: UserService = autowired("userService")

    @request_mapping("list")
    def list(self):
        return self.user_service.list_users()

    @request_mapping("/query/")
    def query(self, name: str):
        return self.user_service.query_user(name)
