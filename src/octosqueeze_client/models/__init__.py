"""数据模型包。

定义接口调用相关的数据结构和常量。
"""

from .api_result import (
    BatchResult,
    BatchSuccess,
    DataResult,
    DataSuccess,
    Failure,
)
from .compression_item import CompressionItem, serialize_items
from .constants import (
    ApiPaths,
    ContentTypes,
    Headers,
    MultipartFields,
    bearer,
    get_mime_type,
)


__all__ = [
    "ApiPaths",
    "BatchResult",
    "BatchSuccess",
    "CompressionItem",
    "ContentTypes",
    "DataResult",
    "DataSuccess",
    "Failure",
    "Headers",
    "MultipartFields",
    "bearer",
    "get_mime_type",
    "serialize_items",
]
