#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
企业微信客户端

组合令牌提供者、请求引擎和各业务 API，对外提供一个入口。
客户端构造后不再修改，可在多个线程间共享。
"""

from typing import Any, Dict, Iterable, Optional, Tuple, Union

from .auth import WeComAuth
from .base import HttpTransport, RequestEngine
from .config import ClientConfig, ConfigManager, Credentials
from .directory import DirectoryAPI
from .envelope import classify
from .message import MessageAPI
from .models import (
    AgentResponse,
    DepartmentListResponse,
    MessageResponse,
    UserListResponse,
    UserResponse,
)


class WeComClient:
    """企业微信客户端"""

    def __init__(
        self,
        credentials: Credentials,
        config: Optional[ClientConfig] = None,
        transport: Optional[HttpTransport] = None,
    ):
        """
        初始化客户端

        Args:
            credentials: 应用凭据（corp_id、corp_secret、agent_id）
            config: 客户端配置，默认使用官方地址和 10 分钟超时
            transport: 传输适配器，测试时可替换
        """
        self.credentials = credentials
        self.config = config or ClientConfig()
        self.engine = RequestEngine(self.config, transport)
        self.auth = WeComAuth.from_config(credentials, self.config, self.engine)
        self.directory = DirectoryAPI(self.auth)
        self.message = MessageAPI(self.auth)

    @classmethod
    def from_config_file(
        cls, config_file: str, transport: Optional[HttpTransport] = None
    ) -> "WeComClient":
        """从YAML配置文件创建客户端"""
        credentials, config = ConfigManager.from_file(config_file)
        return cls(credentials, config, transport)

    def get_api(self, path: str) -> str:
        return self.engine.get_api(path)

    def parse_response(self, raw: Union[bytes, str]) -> Tuple[Optional[Dict[str, Any]], bool]:
        """通用响应分类，用于诊断或手动检查"""
        return classify(raw)

    def access_token(self) -> str:
        return self.auth.get_access_token()

    def get_user_id(self, code: str) -> str:
        return self.directory.get_user_id(code)

    def list_departments(self) -> DepartmentListResponse:
        return self.directory.list_departments()

    def list_users(
        self, department_id: Union[str, int], fetch_child: bool = False
    ) -> UserListResponse:
        return self.directory.list_users(department_id, fetch_child)

    def get_agent(self) -> AgentResponse:
        return self.directory.get_agent()

    def get_user(self, userid: str) -> UserResponse:
        return self.directory.get_user(userid)

    def send_message(self, to_user: Union[str, Iterable[str]], content: str) -> MessageResponse:
        return self.message.send_text(to_user, content)
