#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
企业微信认证模块

模块概述：
    此模块负责获取企业微信的访问令牌（access_token）。除 gettoken
    本身以外，所有接口都需要在查询参数中携带 access_token。

主要功能：
    1. 使用 corpid 和 corpsecret 获取访问令牌
    2. 可选的令牌缓存（默认关闭）

核心类：
    WeComAuth:
        令牌提供者。默认不缓存，每次业务调用都会重新请求 gettoken，
        因此 N 次业务调用对应 N 次 gettoken 请求。
    TokenCache:
        显式开启的令牌缓存，按 (corp_id, corp_secret) 分键，
        由一把锁保证同一时刻只有一个调用方刷新令牌。

令牌管理策略（开启缓存时）：
    - 首次调用时获取新令牌
    - 有效期内直接返回缓存的令牌
    - 距过期不足 token_refresh_margin 秒（默认 5 分钟）时重新获取
    - expires_in 小于刷新余量时不缓存

API 端点：
    获取令牌：GET https://qyapi.weixin.qq.com/cgi-bin/gettoken?corpid=ID&corpsecret=SECRET

使用示例：
    >>> auth = WeComAuth(Credentials("ww_xxx", "secret", "1000002"))
    >>> token = auth.get_access_token()

错误处理：
    - 网络层错误原样抛出
    - 响应解析失败抛出 WeComDecodeError
    - errcode 非 0 抛出 WeComAPIError，常见错误码：
        - 40013: 不合法的 corpid
        - 40001: 不合法的 secret
        - 40014: 不合法的 access_token
        - 42001: access_token 已过期

安全注意事项：
    1. corp_secret 是敏感信息，不要提交到代码仓库
    2. 日志中只输出令牌前几位
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar

from .base import RequestEngine
from .config import ClientConfig, Credentials, mask_secret
from .exceptions import WeComAPIError
from .envelope import Envelope
from .models import AccessTokenResponse
from .validators import validate_credential

TOKEN_PATH = "gettoken"

# 令牌不合法或已过期，需要丢弃缓存
INVALID_TOKEN_CODES = frozenset({40014, 42001})

E = TypeVar("E", bound=Envelope)


class TokenCache:
    """线程安全的令牌缓存"""

    def __init__(
        self,
        refresh_margin: int = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        初始化令牌缓存

        Args:
            refresh_margin: 提前刷新的秒数
            clock: 单调时钟，便于测试替换
        """
        self.refresh_margin = max(refresh_margin, 0)
        self.clock = clock
        self._entries: Dict[Tuple[str, str], Tuple[str, float]] = {}
        self._lock = threading.Lock()

    def get_or_fetch(
        self, key: Tuple[str, str], fetch: Callable[[], AccessTokenResponse]
    ) -> str:
        """返回有效的缓存令牌，否则在锁内调用 fetch 刷新"""
        with self._lock:
            entry = self._entries.get(key)
            if entry and self.clock() < entry[1]:
                return entry[0]

            response = fetch()
            ttl = response.expires_in - self.refresh_margin
            if ttl > 0:
                self._entries[key] = (response.access_token, self.clock() + ttl)
            else:
                self._entries.pop(key, None)
            return response.access_token

    def invalidate(self, key: Optional[Tuple[str, str]] = None):
        """清除指定键或全部缓存"""
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)


class WeComAuth:
    """企业微信令牌提供者"""

    OPERATION = "获取access_token"

    def __init__(
        self,
        credentials: Credentials,
        engine: Optional[RequestEngine] = None,
        cache: Optional[TokenCache] = None,
    ):
        """
        初始化令牌提供者

        Args:
            credentials: 应用凭据
            engine: 请求引擎实例
            cache: 令牌缓存，为 None 时每次都重新获取
        """
        self.credentials = credentials
        self.engine = engine or RequestEngine()
        self.cache = cache
        self.logger = logging.getLogger("wecom.auth")

    @classmethod
    def from_config(
        cls,
        credentials: Credentials,
        config: ClientConfig,
        engine: Optional[RequestEngine] = None,
    ) -> "WeComAuth":
        """按客户端配置决定是否启用令牌缓存"""
        cache = TokenCache(config.token_refresh_margin) if config.cache_token else None
        return cls(credentials, engine or RequestEngine(config), cache)

    @property
    def cache_key(self) -> Tuple[str, str]:
        return (self.credentials.corp_id, self.credentials.corp_secret)

    def fetch_token_response(self) -> AccessTokenResponse:
        """
        请求 gettoken 接口

        Returns:
            令牌响应

        Raises:
            ValidationError: corp_id 或 corp_secret 为空时
            WeComDecodeError: 响应解析失败时
            WeComAPIError: errcode 非 0 或令牌为空时
        """
        params = {
            "corpid": validate_credential(self.credentials.corp_id, "corp_id"),
            "corpsecret": validate_credential(self.credentials.corp_secret, "corp_secret"),
        }
        response = self.engine.call(
            TOKEN_PATH, "GET", AccessTokenResponse, self.OPERATION, params=params
        )

        if not response.access_token:
            raise WeComAPIError(
                response.errcode, "响应中缺少 access_token", self.OPERATION, response
            )

        self.logger.info(
            f"成功获取访问令牌 {mask_secret(response.access_token)}, 有效期 {response.expires_in} 秒"
        )
        return response

    def fetch_token(self) -> str:
        """获取一个新的访问令牌，不经过缓存"""
        return self.fetch_token_response().access_token

    def get_access_token(self) -> str:
        """业务接口使用的令牌入口，启用缓存时优先返回缓存"""
        if self.cache is None:
            return self.fetch_token()
        return self.cache.get_or_fetch(self.cache_key, self.fetch_token_response)

    def invalidate(self):
        """令牌失效时清除缓存"""
        if self.cache is not None:
            self.cache.invalidate(self.cache_key)

    def call(
        self,
        path: str,
        method: str,
        response_cls: Type[E],
        operation: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        engine: Optional[RequestEngine] = None,
    ) -> E:
        """
        携带 access_token 调用业务接口

        返回令牌不合法或已过期的错误码时清除缓存，下一次调用会重新获取令牌。

        Raises:
            WeComAPIError: errcode 非 0 时
        """
        query = dict(params or {})
        query["access_token"] = self.get_access_token()
        try:
            return (engine or self.engine).call(
                path, method, response_cls, operation, params=query, json_body=json_body
            )
        except WeComAPIError as e:
            if e.errcode in INVALID_TOKEN_CODES and self.cache is not None:
                self.logger.warning(f"访问令牌已失效（错误码 {e.errcode}），清除缓存")
                self.invalidate()
            raise
