"""OctoSqueeze 图像压缩 API 的 Python 客户端。

基于 httpx 的同步客户端，统一返回成功或失败结果对象。
"""

__version__ = "0.1.0"
__author__ = "OctoSqueeze"
__description__ = "OctoSqueeze 图像压缩 API 客户端"

# 核心功能导出
from .client import OctoSqueeze, client
from .exceptions import OctoSqueezeError, TransportError
from .models import (
    BatchResult,
    BatchSuccess,
    CompressionItem,
    DataResult,
    DataSuccess,
    Failure,
)


__all__ = [
    "BatchResult",
    "BatchSuccess",
    "CompressionItem",
    "DataResult",
    "DataSuccess",
    "Failure",
    "OctoSqueeze",
    "OctoSqueezeError",
    "TransportError",
    "client",
    "get_version",
]


def get_version() -> str:
    """获取版本号。"""
    return __version__
