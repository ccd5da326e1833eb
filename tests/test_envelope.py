#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
响应分类测试
测试 wecom/envelope.py 中错误码归一化和通用分类
"""

import json

import pytest

from wecom.envelope import Envelope, classify, is_success, normalize_errcode
from wecom.models import UserResponse


class TestNormalizeErrcode:
    """错误码归一化测试"""

    @pytest.mark.parametrize("value, expected", [
        (0, 0),
        (0.0, 0),
        ("0", 0),
        (40014, 40014),
        (40014.0, 40014),
        ("40014", 40014),
        ("0040014", 40014),
        (-1, -1),
        ("-1", -1),
    ])
    def test_recognized_encodings(self, value, expected):
        assert normalize_errcode(value) == expected

    @pytest.mark.parametrize("value", [None, True, False, 0.5, "0.0", "", "abc", " 42001 ", "4\u0660", [0], {"code": 0}])
    def test_unrecognized_encodings(self, value):
        assert normalize_errcode(value) is None


class TestIsSuccess:
    """成功判定测试"""

    @pytest.mark.parametrize("value", [0, 0.0, "0"])
    def test_zero_encodings_are_success(self, value):
        assert is_success(value) is True

    @pytest.mark.parametrize("value", [1, "1", -1, 1.0, None, False, "0.0", "ok"])
    def test_other_values_are_failure(self, value):
        assert is_success(value) is False

    @pytest.mark.parametrize("value", ["00", " 0", "0 ", "0\n", "-0", "+0", "\u0660", "\uff10"])
    def test_only_literal_zero_string_is_success(self, value):
        """测试只有字面量 "0" 被视为成功"""
        assert normalize_errcode(value) is None
        assert is_success(value) is False
        assert classify(json.dumps({"errcode": value})) == ({"errcode": value}, False)


class TestClassify:
    """通用分类测试"""

    @pytest.mark.parametrize("raw", [
        b'{"errcode": 0, "errmsg": "ok"}',
        b'{"errcode": 0.0, "errmsg": "ok"}',
        b'{"errcode": "0", "errmsg": "ok"}',
    ])
    def test_success(self, raw):
        data, ok = classify(raw)
        assert ok is True
        assert data["errmsg"] == "ok"

    @pytest.mark.parametrize("raw", [
        b'{"errcode": 1}',
        b'{"errcode": "1"}',
        b'{"errcode": -1}',
        b'{"errcode": 40014, "errmsg": "invalid access_token"}',
    ])
    def test_failure(self, raw):
        data, ok = classify(raw)
        assert ok is False
        assert data is not None

    def test_malformed_json(self):
        assert classify(b"{oops") == (None, False)

    def test_non_object_json(self):
        assert classify(b"[0]") == (None, False)

    def test_missing_errcode(self):
        data, ok = classify(b'{"errmsg": "ok"}')
        assert data == {"errmsg": "ok"}
        assert ok is False

    def test_accepts_str(self):
        assert classify('{"errcode": 0}') == ({"errcode": 0}, True)


class TestEnvelope:
    """类型化外壳测试"""

    @pytest.mark.parametrize("raw_code, ok", [(0, True), (0.0, True), ("0", True), ("1", False), (-1, False)])
    def test_typed_and_generic_paths_agree(self, raw_code, ok):
        data = {"errcode": raw_code, "errmsg": "msg"}
        assert Envelope.from_dict(data).ok is ok
        assert is_success(raw_code) is ok

    def test_missing_errcode_is_not_ok(self):
        envelope = Envelope.from_dict({})
        assert envelope.errcode is None
        assert envelope.errmsg == ""
        assert envelope.ok is False

    def test_subclass_keeps_envelope_fields(self):
        response = UserResponse.from_dict(
            {"errcode": "0", "errmsg": "ok", "userid": "u1", "name": "张三"}
        )
        assert response.ok
        assert response.errcode == 0
        assert str(response) == "User Id: u1, Name: 张三"
