#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
应用消息模块
向企业微信成员发送文本消息
"""

import logging
from typing import Any, Dict, Iterable, Optional, Union

from .auth import WeComAuth
from .base import RequestEngine
from .models import MessageResponse
from .validators import format_to_user, validate_credential


class MessageAPI:
    """企业微信应用消息API客户端"""

    def __init__(self, auth: WeComAuth, engine: Optional[RequestEngine] = None):
        self.auth = auth
        self.engine = engine or auth.engine
        self.logger = logging.getLogger("wecom.message")

    def build_text_message(
        self, to_user: Union[str, Iterable[str]], content: str
    ) -> Dict[str, Any]:
        """构造文本消息请求体"""
        return {
            "touser": format_to_user(to_user),
            "msgtype": "text",
            "agentid": validate_credential(self.auth.credentials.agent_id, "agent_id"),
            "text": {"content": content},
        }

    def send_text(
        self, to_user: Union[str, Iterable[str]], content: str
    ) -> MessageResponse:
        """
        发送文本消息

        Args:
            to_user: 接收者，"a|b" 字符串或成员 ID 序列
            content: 消息内容

        Returns:
            发送结果；部分接收者无效时 errcode 仍为 0，无效 ID 见 invaliduser
        """
        body = self.build_text_message(to_user, content)
        response = self.auth.call(
            "message/send", "POST", MessageResponse, "发送消息",
            json_body=body, engine=self.engine,
        )

        if response.invaliduser:
            self.logger.warning(f"消息部分接收者无效: {response.invaliduser}")
        return response
