#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
通讯录 API 模块

模块概述：
    此模块封装了企业微信通讯录相关的只读接口：网页授权换取成员 ID、
    部门列表、部门成员、应用可见范围以及成员详情。

API 端点（基础路径：https://qyapi.weixin.qq.com/cgi-bin）：
    GET user/getuserinfo  - 通过网页授权 code 获取成员 ID
    GET department/list   - 获取应用可见范围内的部门列表
    GET user/simplelist   - 获取部门成员，可递归子部门
    GET agent/get         - 获取应用可见范围
    GET user/get          - 读取成员

每个方法都会：
    1. 通过 WeComAuth 获取访问令牌
    2. 调用 RequestEngine 发送请求
    3. 解析为类型化响应，errcode 非 0 时抛出 WeComAPIError

使用示例：
    >>> api = DirectoryAPI(auth)
    >>> for department in api.list_departments().departments:
    ...     users = api.list_users(str(department.id), fetch_child=True)
"""

import logging
from typing import Optional, Union

from .auth import WeComAuth
from .base import RequestEngine
from .models import (
    AgentResponse,
    DepartmentListResponse,
    UserInfoResponse,
    UserListResponse,
    UserResponse,
)
from .validators import validate_credential


class DirectoryAPI:
    """企业微信通讯录API客户端"""

    def __init__(self, auth: WeComAuth, engine: Optional[RequestEngine] = None):
        """
        初始化通讯录API客户端

        Args:
            auth: 令牌提供者
            engine: 请求引擎实例，默认与 auth 共用
        """
        self.auth = auth
        self.engine = engine or auth.engine
        self.logger = logging.getLogger("wecom.directory")

    def get_user_id(self, code: str) -> str:
        """
        通过网页授权 code 获取成员ID

        Args:
            code: 网页授权回调中的 code

        Returns:
            成员 UserId
        """
        code = validate_credential(code, "code")
        response = self.auth.call(
            "user/getuserinfo", "GET", UserInfoResponse, "获取成员ID",
            params={"code": code}, engine=self.engine,
        )
        return response.user_id

    def list_departments(self) -> DepartmentListResponse:
        """获取应用可见范围内的部门列表"""
        response = self.auth.call(
            "department/list", "GET", DepartmentListResponse, "获取部门列表", engine=self.engine
        )
        self.logger.debug(f"获取到 {len(response.departments)} 个部门")
        return response

    def list_users(
        self, department_id: Union[str, int], fetch_child: bool = False
    ) -> UserListResponse:
        """
        获取部门成员

        Args:
            department_id: 部门ID
            fetch_child: 是否递归获取子部门成员

        Returns:
            成员列表响应
        """
        params = {
            "department_id": validate_credential(str(department_id), "department_id"),
            "fetch_child": "1" if fetch_child else "0",
        }
        response = self.auth.call(
            "user/simplelist", "GET", UserListResponse, "获取部门成员",
            params=params, engine=self.engine,
        )
        self.logger.debug(f"部门 {department_id} 下获取到 {len(response.users)} 个成员")
        return response

    def get_agent(self, agent_id: Optional[str] = None) -> AgentResponse:
        """获取应用可见范围，默认使用凭据中的 agent_id"""
        agent_id = agent_id or self.auth.credentials.agent_id
        params = {
            "agentid": validate_credential(str(agent_id), "agent_id"),
        }
        return self.auth.call(
            "agent/get", "GET", AgentResponse, "获取应用", params=params, engine=self.engine
        )

    def get_user(self, userid: str) -> UserResponse:
        """读取成员"""
        params = {
            "userid": validate_credential(userid, "userid"),
        }
        return self.auth.call(
            "user/get", "GET", UserResponse, "读取成员", params=params, engine=self.engine
        )
