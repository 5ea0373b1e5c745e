"""请求构建与响应解析工具模块。

提供 URL 拼接、选项合并、响应体解析等纯工具函数，不包含网络调用。
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import httpx
from PIL import Image

from ..models.constants import ContentTypes, get_mime_type
from .logging_helpers import get_logger
from .message_formatter import MessageFormatter


logger = get_logger(__name__)


def join_url(endpoint: str, path: str) -> str:
    """拼接 API 根地址与相对路径，保证两者之间恰好一个斜杠。

    Args:
        endpoint: API 根地址，如 https://app.octosqueeze.com/api/v1/
        path: 相对路径，如 /status/42

    Returns:
        str: 完整 URL
    """
    return f"{endpoint.rstrip('/')}/{path.lstrip('/')}"


def merge_options(
    defaults: Mapping[str, Any] | None, overrides: Mapping[str, Any] | None
) -> dict[str, Any]:
    """浅合并两组选项，键冲突时 overrides 优先。

    实例级默认选项与调用方传入的选项统一通过此函数合并。
    """
    return {**(defaults or {}), **(overrides or {})}


def decode_body(response: httpx.Response) -> dict[str, Any]:
    """解析 JSON 响应体，格式错误或非对象时返回空字典，从不抛出异常"""
    try:
        body = json.loads(response.content or b"null")
    except ValueError as e:
        logger.debug(f"响应体不是合法 JSON，按空响应处理: {e}")
        return {}

    return body if isinstance(body, dict) else {}


def extract_data(body: Mapping[str, Any], key: str | None = None, default: Any = None) -> Any:
    """从 {"data": {...}} 信封中取值。

    Args:
        body: 已解析的响应体
        key: data 下的字段名，None 表示取整个 data
        default: 字段缺失或为空时的默认值

    Returns:
        Any: 提取到的值或默认值
    """
    data = body.get("data")
    if key is not None:
        data = data.get(key) if isinstance(data, dict) else None

    return default if data is None else data


def guess_upload_mime_type(file_path: str | Path) -> str:
    """获取上传文件的 MIME 类型

    优先使用 Pillow 识别图片格式，无法识别时回退为 application/octet-stream

    Args:
        file_path: 本地文件路径

    Returns:
        str: MIME 类型，如 'image/jpeg'
    """
    try:
        with Image.open(file_path) as img:
            if img.format:
                return get_mime_type(img.format)
    except Exception as e:
        logger.debug(MessageFormatter.operation_failed("获取 MIME 类型", file_path, e))

    return ContentTypes.OCTET_STREAM
