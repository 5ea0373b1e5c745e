"""压缩条目模型。

定义按 URL 批量压缩时单个条目的数据结构。
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CompressionItem(BaseModel):
    """批量压缩中的单个图片条目

    未声明的字段会原样转发给服务端。
    """

    model_config = ConfigDict(extra="allow")

    url: str = Field(description="图片 URL")
    image_id: Any = Field(None, description="调用方系统中的标识")
    hash: str | None = Field(None, description="内容哈希，用于跳过重复压缩")
    name: str | None = Field(None, description="文件名")
    options: dict[str, Any] | None = Field(None, description="单图压缩选项")

    def to_payload(self) -> dict[str, Any]:
        """转换为请求体中的条目，省略未设置的字段"""
        return self.model_dump(exclude_none=True)


def serialize_items(
    items: list[CompressionItem | Mapping[str, Any]],
) -> list[dict[str, Any]]:
    """将条目列表转换为请求体，普通映射不做校验直接转发"""
    return [
        item.to_payload() if isinstance(item, CompressionItem) else dict(item)
        for item in items
    ]
