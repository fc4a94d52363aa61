"""
用户服务
作者: lx
日期: 2025-06-20
"""
from abc import ABC, abstractmethod
from typing import List

from mvcboot import service


class UserService(ABC):
    """用户服务接口"""

    @abstractmethod
    def list_users(self) -> List[str]:
        pass

    @abstractmethod
    def query_user(self, name: str) -> dict:
        pass


@service
class UserServiceImpl(UserService):
    """内存中的用户服务"""

    def __init__(self):
        self._users = {"alice": 18, "bob": 20}

    def list_users(self) -> List[str]:
        return sorted(self._users)

    def query_user(self, name: str) -> dict:
        return {"name": name, "age": self._users.get(name)}
