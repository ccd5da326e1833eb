#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
配置管理模块
提供凭据、客户端配置、YAML 配置文件读写以及日志设置
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .exceptions import ConfigError

DEFAULT_BASE_URL = "https://qyapi.weixin.qq.com/cgi-bin"
DEFAULT_TIMEOUT = 10 * 60  # 防止远端挂起的超时上限（秒）
DEFAULT_TOKEN_REFRESH_MARGIN = 5 * 60

logger = logging.getLogger("wecom.config")


@dataclass(frozen=True)
class Credentials:
    """企业微信应用凭据"""
    corp_id: str
    corp_secret: str
    agent_id: str

    def __post_init__(self):
        # YAML 中的 agent_id 常被解析为整数
        if not isinstance(self.agent_id, str):
            object.__setattr__(self, "agent_id", str(self.agent_id))

    def __repr__(self) -> str:
        return (
            f"Credentials(corp_id={self.corp_id!r}, corp_secret='***', "
            f"agent_id={self.agent_id!r})"
        )


@dataclass(frozen=True)
class ClientConfig:
    """客户端配置，构造后不可变"""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    # 令牌缓存：默认关闭，每次业务调用都重新获取令牌
    cache_token: bool = False
    token_refresh_margin: int = DEFAULT_TOKEN_REFRESH_MARGIN

    def __post_init__(self):
        if not self.base_url or not self.base_url.strip():
            raise ConfigError("base_url 不能为空")
        if self.timeout <= 0:
            raise ConfigError(f"timeout 必须大于 0: {self.timeout}")
        if self.token_refresh_margin < 0:
            raise ConfigError(f"token_refresh_margin 不能为负数: {self.token_refresh_margin}")


class ConfigManager:
    """配置管理器"""

    REQUIRED_FIELDS = ("corp_id", "corp_secret", "agent_id")
    CLIENT_FIELDS = ("base_url", "timeout", "cache_token", "token_refresh_margin")

    @staticmethod
    def load_from_file(config_file: str) -> Optional[Dict[str, Any]]:
        """从YAML文件加载配置"""
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f)
        except FileNotFoundError:
            logger.error(f"配置文件不存在: {config_file}")
            return None
        except yaml.YAMLError as e:
            logger.error(f"YAML配置文件格式错误: {e}")
            return None

    @staticmethod
    def save_to_file(config: Dict[str, Any], config_file: str):
        """保存配置到YAML文件"""
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.dump(config, f, default_flow_style=False, allow_unicode=True, indent=2)

    @classmethod
    def from_dict(cls, config_data: Dict[str, Any]) -> Tuple[Credentials, ClientConfig]:
        """
        从字典创建凭据和客户端配置

        Raises:
            ConfigError: 缺少必需参数或参数非法时
        """
        missing_fields = [f for f in cls.REQUIRED_FIELDS if not config_data.get(f)]
        if missing_fields:
            raise ConfigError(f"缺少必需参数: {', '.join(missing_fields)}")

        unknown = set(config_data) - set(cls.REQUIRED_FIELDS) - set(cls.CLIENT_FIELDS)
        if unknown:
            logger.warning(f"忽略未知配置项: {', '.join(sorted(unknown))}")

        credentials = Credentials(
            corp_id=str(config_data["corp_id"]),
            corp_secret=str(config_data["corp_secret"]),
            agent_id=config_data["agent_id"],
        )
        client_kwargs = {k: config_data[k] for k in cls.CLIENT_FIELDS if k in config_data}
        return credentials, ClientConfig(**client_kwargs)

    @classmethod
    def from_file(cls, config_file: str) -> Tuple[Credentials, ClientConfig]:
        """从YAML文件创建凭据和客户端配置"""
        config_data = cls.load_from_file(config_file)
        if not config_data:
            raise ConfigError(f"配置文件 {config_file} 加载失败")
        if not isinstance(config_data, dict):
            raise ConfigError(f"配置文件 {config_file} 顶层必须是映射")
        return cls.from_dict(config_data)


def create_sample_config(config_file: str = "wecom.yaml") -> bool:
    """创建示例配置文件，文件已存在时返回 False"""
    sample_config = {
        "corp_id": "your_corp_id",
        "corp_secret": "your_corp_secret",
        "agent_id": "1000002",
        "base_url": DEFAULT_BASE_URL,
        "timeout": DEFAULT_TIMEOUT,
        "cache_token": False,
        "token_refresh_margin": DEFAULT_TOKEN_REFRESH_MARGIN,
    }

    if Path(config_file).exists():
        logger.warning(f"配置文件 {config_file} 已存在")
        return False

    ConfigManager.save_to_file(sample_config, config_file)
    logger.info(f"已创建示例配置文件: {config_file}")
    return True


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """设置日志"""
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    # 清除已有的处理器
    logging.getLogger().handlers.clear()

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )


def mask_secret(value: Optional[str], visible: int = 4) -> str:
    """日志中只输出令牌或密钥的前几位"""
    if not value:
        return ""
    if len(value) <= visible:
        return "***"
    return f"{value[:visible]}***"
