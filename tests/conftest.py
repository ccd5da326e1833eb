#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
测试配置文件

模块概述：
    此模块提供 pytest 测试框架的共享 fixtures。

Fixtures 分类：
    配置 Fixtures：
        - credentials: 测试用应用凭据
        - client_config: 测试用客户端配置
        - sample_config_dict: 配置字典
        - temp_config_file: 临时 YAML 配置文件

    传输 Fixtures：
        - fake_transport: 按接口路径返回预设响应并记录每次调用的假传输层
        - engine: 使用假传输层的请求引擎
        - auth: 使用假传输层的令牌提供者
        - client: 使用假传输层的客户端

使用示例：
    def test_something(client, fake_transport):
        fake_transport.add("department/list", {"errcode": 0, "department": []})
        client.list_departments()
        assert len(fake_transport.calls_to("gettoken")) == 1
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pytest
import yaml

from wecom import (
    ClientConfig,
    Credentials,
    RequestEngine,
    TransportResponse,
    WeComAuth,
    WeComClient,
)

TOKEN_OK = {"errcode": 0, "errmsg": "ok", "access_token": "TOK", "expires_in": 7200}


@dataclass
class RecordedCall:
    """一次被记录的传输层调用"""
    method: str
    url: str
    path: str
    params: Dict[str, str]
    data: Optional[bytes]
    headers: Dict[str, str]
    timeout: Optional[float]

    @property
    def json(self) -> Any:
        return json.loads(self.data) if self.data is not None else None


class FakeTransport:
    """按接口路径返回预设响应的假传输层"""

    def __init__(self, base_url: str = "https://qyapi.weixin.qq.com/cgi-bin"):
        self.base_url = base_url.rstrip("/") + "/"
        self.routes: Dict[str, List[TransportResponse]] = {}
        self.calls: List[RecordedCall] = []

    def add(self, path: str, body: Union[Dict[str, Any], bytes, str], status_code: int = 200):
        """为路径追加一个响应，最后一个响应会被重复使用"""
        if isinstance(body, dict):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.routes.setdefault(path, []).append(TransportResponse(status_code, body))

    def send(self, method, url, params=None, data=None, headers=None, timeout=None):
        assert url.startswith(self.base_url), url
        path = url[len(self.base_url):]
        self.calls.append(
            RecordedCall(method, url, path, dict(params or {}), data, dict(headers or {}), timeout)
        )
        responses = self.routes.get(path)
        if not responses:
            return TransportResponse(404, b"not found")
        if len(responses) > 1:
            return responses.pop(0)
        return responses[0]

    def calls_to(self, path: str) -> List[RecordedCall]:
        return [c for c in self.calls if c.path == path]


@pytest.fixture
def credentials() -> Credentials:
    """返回测试用应用凭据"""
    return Credentials(corp_id="C", corp_secret="S", agent_id="1000002")


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig()


@pytest.fixture
def fake_transport() -> FakeTransport:
    """gettoken 默认返回成功的假传输层"""
    transport = FakeTransport()
    transport.add("gettoken", TOKEN_OK)
    return transport


@pytest.fixture
def engine(client_config, fake_transport) -> RequestEngine:
    return RequestEngine(client_config, fake_transport)


@pytest.fixture
def auth(credentials, engine) -> WeComAuth:
    return WeComAuth(credentials, engine)


@pytest.fixture
def client(credentials, client_config, fake_transport) -> WeComClient:
    return WeComClient(credentials, client_config, fake_transport)


@pytest.fixture
def sample_config_dict() -> Dict[str, Any]:
    """返回测试用的配置字典"""
    return {
        "corp_id": "ww_test_corp",
        "corp_secret": "test_corp_secret",
        "agent_id": 1000002,
        "timeout": 30,
        "cache_token": True,
        "token_refresh_margin": 60,
    }


@pytest.fixture
def temp_config_file(tmp_path, sample_config_dict) -> Path:
    """创建临时配置文件用于测试"""
    file_path = tmp_path / "wecom.yaml"
    with open(file_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config_dict, f, allow_unicode=True)
    return file_path
