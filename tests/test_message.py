#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
应用消息 API 测试
"""

import pytest

from wecom import Credentials, MessageAPI, ValidationError, WeComAPIError, WeComAuth


@pytest.fixture
def message_api(auth) -> MessageAPI:
    return MessageAPI(auth)


class TestBuildTextMessage:
    """消息体构造测试"""

    def test_body_structure(self, message_api):
        assert message_api.build_text_message("alice|bob", "hello") == {
            "touser": "alice|bob",
            "msgtype": "text",
            "agentid": "1000002",
            "text": {"content": "hello"},
        }

    def test_sequence_recipients(self, message_api):
        body = message_api.build_text_message(["alice", "bob"], "hello")
        assert body["touser"] == "alice|bob"

    def test_empty_recipient_rejected(self, message_api):
        with pytest.raises(ValidationError):
            message_api.build_text_message("alice||bob", "hello")

    def test_empty_agent_id_rejected(self, engine):
        api = MessageAPI(WeComAuth(Credentials("C", "S", ""), engine))
        with pytest.raises(ValidationError):
            api.build_text_message("alice", "hello")


class TestSendText:
    """发送消息测试"""

    def test_sends_post_with_json_body(self, message_api, fake_transport):
        fake_transport.add("message/send", {"errcode": 0, "errmsg": "ok", "msgid": "m1"})

        response = message_api.send_text("alice|bob", "hello")

        assert response.ok
        assert response.msgid == "m1"
        call = fake_transport.calls_to("message/send")[0]
        assert call.method == "POST"
        assert call.params == {"access_token": "TOK"}
        assert call.json == {
            "touser": "alice|bob",
            "msgtype": "text",
            "agentid": "1000002",
            "text": {"content": "hello"},
        }

    def test_invalid_user_reported(self, message_api, fake_transport):
        fake_transport.add("message/send", {"errcode": 0, "errmsg": "ok", "invaliduser": "bob"})

        response = message_api.send_text("alice|bob", "hello")

        assert response.invaliduser == "bob"

    def test_application_error_raises(self, message_api, fake_transport):
        fake_transport.add("message/send", {"errcode": 81013, "errmsg": "user & party & tag all invalid"})

        with pytest.raises(WeComAPIError) as exc_info:
            message_api.send_text("nobody", "hello")

        assert exc_info.value.errcode == 81013
        assert "发送消息失败" in str(exc_info.value)

    def test_validation_before_network(self, message_api, fake_transport):
        with pytest.raises(ValidationError):
            message_api.send_text([], "hello")
        assert fake_transport.calls == []
