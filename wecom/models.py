#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
类型化响应模型
每个接口的响应都是 Envelope 加上接口特有字段
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .envelope import Envelope


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"期望列表类型, 实际为 {type(value).__name__}")
    return value


def _as_dict(value: Any) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"期望对象类型, 实际为 {type(value).__name__}")
    return value


@dataclass
class AccessTokenResponse(Envelope):
    """gettoken 响应"""

    access_token: str = ""
    expires_in: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccessTokenResponse":
        return cls(
            access_token=str(data.get("access_token") or ""),
            expires_in=int(data.get("expires_in") or 0),
            **cls.envelope_fields(data),
        )


@dataclass
class UserInfoResponse(Envelope):
    """user/getuserinfo 响应"""

    user_id: str = ""
    device_id: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserInfoResponse":
        return cls(
            user_id=str(data.get("UserId") or ""),
            device_id=str(data.get("DeviceId") or ""),
            **cls.envelope_fields(data),
        )


@dataclass
class User:
    """成员"""

    userid: str = ""
    name: str = ""

    def __str__(self) -> str:
        return f"User Id: {self.userid}, Name: {self.name}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        data = _as_dict(data)
        return cls(userid=str(data.get("userid") or ""), name=str(data.get("name") or ""))


@dataclass
class Department:
    """部门"""

    id: int = 0
    name: str = ""
    parentid: int = 0
    order: int = 0

    def __str__(self) -> str:
        return (
            f"Department Id: {self.id}, Name: {self.name}, "
            f"ParentId: {self.parentid}, Order: {self.order}"
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Department":
        data = _as_dict(data)
        return cls(
            id=int(data.get("id") or 0),
            name=str(data.get("name") or ""),
            parentid=int(data.get("parentid") or 0),
            order=int(data.get("order") or 0),
        )


@dataclass
class DepartmentListResponse(Envelope):
    """department/list 响应"""

    departments: List[Department] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DepartmentListResponse":
        return cls(
            departments=[Department.from_dict(d) for d in _as_list(data.get("department"))],
            **cls.envelope_fields(data),
        )


@dataclass
class UserListResponse(Envelope):
    """user/simplelist 响应"""

    users: List[User] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserListResponse":
        return cls(
            users=[User.from_dict(u) for u in _as_list(data.get("userlist"))],
            **cls.envelope_fields(data),
        )


@dataclass
class AgentResponse(Envelope):
    """
    agent/get 响应

    allow_users 保留原始结构（每项至少包含 userid），
    allow_party_ids 为可见部门 ID 列表。
    """

    allow_users: List[Dict[str, str]] = field(default_factory=list)
    allow_party_ids: List[int] = field(default_factory=list)

    @property
    def allow_user_ids(self) -> List[str]:
        return [item["userid"] for item in self.allow_users if item.get("userid")]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AgentResponse":
        users = _as_dict(data.get("allow_userinfos")).get("user")
        parties = _as_dict(data.get("allow_partys")).get("partyid")
        return cls(
            allow_users=[
                {str(k): str(v) for k, v in _as_dict(item).items()}
                for item in _as_list(users)
            ],
            allow_party_ids=[int(p) for p in _as_list(parties)],
            **cls.envelope_fields(data),
        )


@dataclass
class UserResponse(Envelope):
    """user/get 响应"""

    userid: str = ""
    name: str = ""

    @property
    def user(self) -> User:
        return User(userid=self.userid, name=self.name)

    def __str__(self) -> str:
        return str(self.user)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserResponse":
        return cls(
            userid=str(data.get("userid") or ""),
            name=str(data.get("name") or ""),
            **cls.envelope_fields(data),
        )


@dataclass
class MessageResponse(Envelope):
    """message/send 响应，invaliduser 等字段为 | 分隔的无效接收者"""

    invaliduser: str = ""
    invalidparty: str = ""
    msgid: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MessageResponse":
        return cls(
            invaliduser=str(data.get("invaliduser") or ""),
            invalidparty=str(data.get("invalidparty") or ""),
            msgid=str(data.get("msgid") or ""),
            **cls.envelope_fields(data),
        )
