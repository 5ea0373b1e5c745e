"""统一配置管理模块。

提供客户端的全局默认配置，包括 API 地址、传输层默认值和环境变量支持。
"""

import os
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ClientDefaults:
    """客户端相关的默认配置"""

    # 接口地址
    ENDPOINT_URI: str = "https://app.octosqueeze.com/api/v1"

    # 认证，仅 MCP 服务器等外层入口使用
    API_KEY: str = ""

    # 传输层设置
    TIMEOUT: float = 30
    FOLLOW_REDIRECTS: bool = True

    def transport_defaults(self) -> dict[str, Any]:
        """传给 httpx.Client 的基础参数，调用方配置会覆盖同名键"""
        return {
            "timeout": self.TIMEOUT,
            "follow_redirects": self.FOLLOW_REDIRECTS,
        }


@dataclass(frozen=True)
class LoggingDefaults:
    """日志相关的默认配置"""

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig:
    """应用程序配置管理器

    支持环境变量覆盖默认配置
    """

    API_KEY_ENV = "OCTOSQUEEZE_API_KEY"

    def __init__(self):
        self.client = ClientDefaults()
        self.logging = LoggingDefaults()

        self._load_from_env()

    def _load_from_env(self):
        """从环境变量加载配置"""
        if endpoint := os.getenv("OCTOSQUEEZE_ENDPOINT"):
            object.__setattr__(self.client, "ENDPOINT_URI", endpoint.rstrip("/"))

        if api_key := os.getenv(self.API_KEY_ENV):
            object.__setattr__(self.client, "API_KEY", api_key)

        if timeout := os.getenv("OCTOSQUEEZE_TIMEOUT"):
            object.__setattr__(self.client, "TIMEOUT", float(timeout))

        if log_level := os.getenv("OCTOSQUEEZE_LOG_LEVEL"):
            object.__setattr__(self.logging, "LOG_LEVEL", log_level.upper())


# 全局配置实例
config = AppConfig()


def get_config() -> AppConfig:
    """获取全局配置实例"""
    return config


def reset_config():
    """重置配置（主要用于测试）"""
    global config
    config = AppConfig()
