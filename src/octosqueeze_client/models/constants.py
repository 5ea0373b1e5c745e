"""OctoSqueeze API 相关常量定义。

集中管理接口路径、请求头和内容类型，避免在客户端中硬编码重复。
"""

from typing import Final

from PIL import Image


class ApiPaths:
    """相对于 API 根地址的接口路径"""

    COMPRESS_BATCH: Final[str] = "compress-batch"
    COMPRESS: Final[str] = "compress"
    STATUS: Final[str] = "status"
    USAGE: Final[str] = "usage"

    @classmethod
    def status(cls, job_id: str) -> str:
        """任务状态查询路径"""
        return f"{cls.STATUS}/{job_id}"


class Headers:
    """请求头名称"""

    AUTHORIZATION: Final[str] = "Authorization"
    ACCEPT: Final[str] = "Accept"
    CONTENT_TYPE: Final[str] = "Content-Type"


class ContentTypes:
    """内容类型"""

    JSON: Final[str] = "application/json"
    OCTET_STREAM: Final[str] = "application/octet-stream"

    # Pillow 未提供的特殊 MIME 类型
    SPECIAL_MIME_TYPES: Final[dict[str, str]] = {
        "ICO": "image/x-icon",
        "PPM": "image/x-portable-pixmap",
        "PGM": "image/x-portable-graymap",
        "PBM": "image/x-portable-bitmap",
    }


class MultipartFields:
    """上传接口的表单字段名"""

    FILE: Final[str] = "file"
    MODE: Final[str] = "mode"
    FORMAT: Final[str] = "format"


def bearer(api_key: str) -> str:
    """构建 Bearer 认证头的值"""
    return f"Bearer {api_key}"


def get_mime_type(format_name: str) -> str:
    """根据 Pillow 格式名获取 MIME 类型"""
    format_upper = format_name.upper()

    if format_upper in ContentTypes.SPECIAL_MIME_TYPES:
        return ContentTypes.SPECIAL_MIME_TYPES[format_upper]

    return Image.MIME.get(format_upper) or f"image/{format_upper.lower()}"
