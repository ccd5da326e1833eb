#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
响应分类模块

模块概述：
    企业微信所有接口都返回统一的响应外壳（errcode + errmsg），其中
    errcode 在线上可能被序列化为整数、浮点数或数字字符串。此模块负责
    把三种编码归一化为一个整数，再统一判断成功与否。

主要功能：
    1. normalize_errcode: 在边界处把 errcode 解码为 Optional[int]
    2. is_success: 归一化后的 errcode 是否为 0
    3. classify: 通用分类，返回解析后的字典和是否成功
    4. Envelope: 类型化响应的基类，与 classify 共用同一套归一化逻辑

判定规则：
    - 0、0.0、"0" 视为成功
    - 1、"1"、-1 等非零值视为失败
    - "00"、"-0"、" 0" 及非 ASCII 数字等其他字符串写法视为失败
    - 缺少 errcode、布尔值、"0.0"、非整数浮点数等无法识别的编码视为失败

使用示例：
    >>> normalize_errcode("40014")
    40014
    >>> is_success(0.0)
    True
    >>> classify(b'{"errcode": "0", "errmsg": "ok"}')
    ({'errcode': '0', 'errmsg': 'ok'}, True)
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

ERRCODE_FIELD = "errcode"
ERRMSG_FIELD = "errmsg"

# 整数形式的错误码字符串，只接受 ASCII 数字，不允许空白
_ERRCODE_STRING = re.compile(r"-?[0-9]+")


def normalize_errcode(value: Any) -> Optional[int]:
    """
    将错误码归一化为整数

    Args:
        value: 响应中的 errcode 原始值

    Returns:
        归一化后的整数，无法识别时返回 None
    """
    # bool 是 int 的子类，JSON 中的 true/false 不是合法错误码
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        return None
    if isinstance(value, str) and _ERRCODE_STRING.fullmatch(value):
        # 零只认字面量 "0"，"00"、"-0" 不是合法的成功码
        if value == "0":
            return 0
        code = int(value)
        return code if code != 0 else None
    return None


def is_success(value: Any) -> bool:
    """错误码是否表示成功"""
    return normalize_errcode(value) == 0


def classify(raw: Union[bytes, str]) -> Tuple[Optional[Dict[str, Any]], bool]:
    """
    通用响应分类

    Args:
        raw: 原始响应内容

    Returns:
        (解析后的字典, 是否成功)；解析失败时字典为 None
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return None, False

    if not isinstance(data, dict):
        return None, False

    if ERRCODE_FIELD not in data:
        return data, False

    return data, is_success(data[ERRCODE_FIELD])


@dataclass
class Envelope:
    """统一响应外壳"""

    errcode: Optional[int] = None
    errmsg: str = ""

    @property
    def ok(self) -> bool:
        return self.errcode == 0

    @classmethod
    def envelope_fields(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """从响应字典中提取外壳字段，供子类的 from_dict 复用"""
        errmsg = data.get(ERRMSG_FIELD)
        return {
            "errcode": normalize_errcode(data.get(ERRCODE_FIELD)),
            "errmsg": "" if errmsg is None else str(errmsg),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Envelope":
        return cls(**cls.envelope_fields(data))
