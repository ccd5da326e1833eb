#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
企业微信 API 模块包

模块概述：
    此包封装了企业微信（WeCom）服务端 API 的调用，提供统一的令牌获取、
    请求构造、响应分类，以及通讯录查询和应用消息发送接口。

包结构：
    wecom/
    ├── __init__.py     - 包初始化，导出公共接口
    ├── auth.py         - 令牌提供者（WeComAuth, TokenCache）
    ├── base.py         - 传输适配器和请求引擎（HttpTransport, RequestEngine）
    ├── client.py       - 客户端入口（WeComClient）
    ├── config.py       - 凭据、客户端配置和日志设置
    ├── directory.py    - 通讯录 API（DirectoryAPI）
    ├── envelope.py     - 响应分类（normalize_errcode, classify, Envelope）
    ├── exceptions.py   - 异常定义
    ├── message.py      - 应用消息 API（MessageAPI）
    ├── models.py       - 类型化响应模型
    └── validators.py   - 输入验证

API 调用流程：
    1. WeComAuth 通过 gettoken 获取 access_token
    2. RequestEngine 拼接地址、注入参数、发送请求并检查 HTTP 状态
    3. 响应解析为类型化模型，errcode 统一归一化后判断成功与否
    4. DirectoryAPI/MessageAPI 封装具体业务操作

使用示例：
    >>> from wecom import Credentials, WeComClient
    >>>
    >>> client = WeComClient(Credentials("ww_corp_id", "corp_secret", "1000002"))
    >>> for department in client.list_departments().departments:
    ...     print(department)
    >>> client.send_message("alice|bob", "hello")

设计原则：
    - 无重试、默认无令牌缓存：每次业务调用都是一次独立的往返
    - 所有错误都直接抛给调用方
    - 基础地址和超时作为不可变配置在构造时传入
"""

from .auth import TokenCache, WeComAuth
from .base import HttpTransport, RequestEngine, TransportResponse
from .client import WeComClient
from .config import (
    ClientConfig,
    ConfigManager,
    Credentials,
    create_sample_config,
    setup_logging,
)
from .directory import DirectoryAPI
from .envelope import Envelope, classify, is_success, normalize_errcode
from .exceptions import (
    ConfigError,
    ValidationError,
    WeComAPIError,
    WeComDecodeError,
    WeComError,
    WeComHTTPError,
)
from .message import MessageAPI
from .models import (
    AccessTokenResponse,
    AgentResponse,
    Department,
    DepartmentListResponse,
    MessageResponse,
    User,
    UserInfoResponse,
    UserListResponse,
    UserResponse,
)

__version__ = "0.1.0"

__all__ = [
    "WeComClient",
    "WeComAuth",
    "TokenCache",
    "HttpTransport",
    "RequestEngine",
    "TransportResponse",
    "DirectoryAPI",
    "MessageAPI",
    "Credentials",
    "ClientConfig",
    "ConfigManager",
    "create_sample_config",
    "setup_logging",
    "Envelope",
    "classify",
    "is_success",
    "normalize_errcode",
    "WeComError",
    "WeComHTTPError",
    "WeComDecodeError",
    "WeComAPIError",
    "ConfigError",
    "ValidationError",
    "AccessTokenResponse",
    "UserInfoResponse",
    "User",
    "Department",
    "DepartmentListResponse",
    "UserListResponse",
    "AgentResponse",
    "UserResponse",
    "MessageResponse",
]
