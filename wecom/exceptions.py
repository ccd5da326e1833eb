#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
企业微信客户端异常定义

异常层次：
    WeComError
    ├── WeComHTTPError     - HTTP 状态码不在 2xx 范围
    ├── WeComDecodeError   - 响应 JSON 解析失败
    ├── WeComAPIError      - 响应中的 errcode 非 0
    ├── ConfigError        - 配置缺失或格式错误
    └── ValidationError    - 调用方输入不合法

网络层异常（requests.exceptions.RequestException）不做包装，原样抛出。
"""

from typing import Any, Optional


class WeComError(Exception):
    """企业微信客户端所有异常的基类"""
    pass


class WeComHTTPError(WeComError):
    """
    HTTP 层错误

    Attributes:
        status_code: HTTP 状态码
        body: 原始响应内容
    """

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"请求失败: HTTP状态码 {status_code}, 响应内容: {body}")


class WeComDecodeError(WeComError):
    """响应解析失败，原始解析异常保存在 __cause__ 中"""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation}失败")


class WeComAPIError(WeComError):
    """
    业务错误：响应解析成功但 errcode 非 0

    Attributes:
        errcode: 归一化后的错误码，无法识别时为 None
        errmsg: 错误信息
        operation: 出错的操作名称
        response: 已解析的类型化响应对象
    """

    def __init__(
        self,
        errcode: Optional[int],
        errmsg: str,
        operation: str,
        response: Any = None,
    ):
        self.errcode = errcode
        self.errmsg = errmsg
        self.operation = operation
        self.response = response
        super().__init__(f"{operation}失败: 错误码 {errcode}, 错误信息: {errmsg}")


class ConfigError(WeComError):
    """配置错误"""
    pass


class ValidationError(WeComError, ValueError):
    """输入验证错误"""
    pass
