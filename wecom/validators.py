#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
输入验证模块

模块概述：
    此模块对调用方传入的参数做最基本的检查，避免把明显错误的请求
    发送到企业微信，包括：
    - 凭据非空检查
    - 接口路径检查（防止路径遍历改写请求地址）
    - 消息接收者格式化

安全考虑：
    - 接口路径只允许字母、数字、下划线、短横线和单级分隔符
    - 接收者列表中不允许出现空 ID
"""

import re
from typing import Iterable, Union

from .exceptions import ValidationError

# 接口路径：若干段由 / 分隔的字母、数字、下划线和短横线
PATH_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+(/[a-zA-Z0-9_-]+)*$')

TO_USER_SEPARATOR = "|"


def validate_credential(value: str, name: str = "credential") -> str:
    """
    验证凭据字段

    Args:
        value: 要验证的值
        name: 字段名称（用于错误消息）

    Returns:
        str: 去除首尾空白后的值

    Raises:
        ValidationError: 当值不是字符串或为空时
    """
    if not isinstance(value, str):
        raise ValidationError(f"无效的 {name}: 必须是字符串类型")

    value = value.strip()
    if not value:
        raise ValidationError(f"无效的 {name}: 不能为空")

    return value


def validate_path(path: str) -> str:
    """
    验证接口路径

    Examples:
        >>> validate_path(" user/get ")
        'user/get'
        >>> validate_path("../gettoken")  # 抛出 ValidationError
    """
    if not isinstance(path, str):
        raise ValidationError("无效的接口路径: 必须是字符串类型")

    path = path.strip().strip("/")
    if not path:
        raise ValidationError("无效的接口路径: 不能为空")

    lowered = path.lower()
    for pattern in ('..', '\\', '%2e', '%2f', '%5c', '?', '#'):
        if pattern in lowered:
            raise ValidationError(f"无效的接口路径: 包含非法字符序列 '{pattern}'")

    if not PATH_PATTERN.match(path):
        raise ValidationError(
            f"无效的接口路径: {path}，只能包含字母、数字、下划线、短横线和 /"
        )

    return path


def format_to_user(to_user: Union[str, Iterable[str]]) -> str:
    """
    将接收者格式化为 "a|b" 形式

    Args:
        to_user: "a|b" 字符串或成员 ID 序列

    Raises:
        ValidationError: 接收者为空或包含空 ID 时
    """
    if isinstance(to_user, str):
        user_ids = to_user.split(TO_USER_SEPARATOR)
    else:
        user_ids = list(to_user)

    if not user_ids:
        raise ValidationError("无效的接收者: 不能为空")

    cleaned = []
    for user_id in user_ids:
        if not isinstance(user_id, str) or not user_id.strip():
            raise ValidationError(f"无效的接收者: 包含空的成员ID ({to_user!r})")
        cleaned.append(user_id.strip())

    return TO_USER_SEPARATOR.join(cleaned)
