#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
基础网络层模块
提供HTTP传输适配器和统一的请求引擎
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type, TypeVar, Union

import requests

from .config import ClientConfig, mask_secret
from .envelope import Envelope
from .exceptions import WeComAPIError, WeComDecodeError, WeComHTTPError
from .validators import validate_path

E = TypeVar("E", bound=Envelope)

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Connection": "close",
    "Accept": "*/*",
}


@dataclass(frozen=True)
class TransportResponse:
    """一次HTTP调用的结果：状态码和原始响应内容"""
    status_code: int
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class HttpTransport:
    """基于 requests 的传输适配器，每次调用使用独立连接"""

    def send(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, str]] = None,
        data: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        """
        发送一次HTTP请求

        网络层异常（DNS、连接被拒绝、超时等）原样抛出。
        """
        # 注意: requests 的 timeout 分别限制建立连接和两次读取之间的间隔，
        # 不限制整个请求的总耗时，持续慢速返回数据的远端可能超过该上限
        response = requests.request(
            method,
            url,
            params=params,
            data=data,
            headers=headers,
            timeout=timeout,
        )
        return TransportResponse(status_code=response.status_code, content=response.content)


class RequestEngine:
    """请求引擎：拼接地址、序列化请求体、调用传输层并检查HTTP状态"""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[HttpTransport] = None,
    ):
        """
        初始化请求引擎

        Args:
            config: 客户端配置（基础地址、超时上限）
            transport: 传输适配器实例
        """
        self.config = config or ClientConfig()
        self.transport = transport or HttpTransport()
        self.logger = logging.getLogger("wecom.base")

    def get_api(self, path: str) -> str:
        """拼接完整接口地址，基础地址和路径之间只保留一个分隔符"""
        return self.config.base_url.strip().rstrip("/") + "/" + validate_path(path)

    def execute(
        self,
        path: str,
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> bytes:
        """
        执行一次请求

        Args:
            path: 相对基础地址的接口路径
            method: HTTP方法
            params: 查询参数
            json_body: JSON请求体，为 None 时不发送请求体

        Returns:
            2xx 响应的原始内容（未经修改）

        Raises:
            WeComHTTPError: 状态码不在 2xx 范围时
            requests.exceptions.RequestException: 网络层错误
        """
        url = self.get_api(path)
        query = {str(k): str(v) for k, v in (params or {}).items()}

        data = None
        if json_body is not None:
            data = json.dumps(json_body, ensure_ascii=False).encode("utf-8")

        self.logger.debug(f"{method.upper()} {url} 参数: {self._loggable(query)}")

        response = self.transport.send(
            method.upper(),
            url,
            params=query,
            data=data,
            headers=dict(DEFAULT_HEADERS),
            timeout=self.config.timeout,
        )

        if response.status_code // 100 != 2:
            self.logger.debug(f"{method.upper()} {url} 返回HTTP状态码 {response.status_code}")
            raise WeComHTTPError(response.status_code, response.text)

        return response.content

    def call(
        self,
        path: str,
        method: str,
        response_cls: Type[E],
        operation: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> E:
        """
        执行请求并解析为类型化响应

        Raises:
            WeComDecodeError: 响应无法解析时
            WeComAPIError: errcode 非 0 时，已解析的响应挂在 response 属性上
        """
        raw = self.execute(path, method, params=params, json_body=json_body)
        response = decode_response(raw, response_cls, operation)
        if not response.ok:
            raise WeComAPIError(response.errcode, response.errmsg, operation, response)
        return response

    @staticmethod
    def _loggable(params: Dict[str, str]) -> Dict[str, str]:
        secret_keys = {"access_token", "corpsecret"}
        return {k: mask_secret(v) if k in secret_keys else v for k, v in params.items()}


def decode_response(raw: Union[bytes, str], response_cls: Type[E], operation: str) -> E:
    """将原始响应解析为类型化响应，解析失败时抛出 WeComDecodeError"""
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise TypeError(f"响应顶层必须是对象, 实际为 {type(data).__name__}")
        return response_cls.from_dict(data)
    except (TypeError, ValueError, AttributeError) as e:
        raise WeComDecodeError(operation) from e
