"""接口调用结果模型。

每个公开操作返回成功或失败两种变体之一，统一以 state 字段区分。
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


class BaseApiResult(BaseModel):
    """结果基类"""

    state: bool = Field(description="是否成功")

    def is_successful(self) -> bool:
        """检查是否成功"""
        return self.state

    def to_dict(self) -> dict[str, Any]:
        """转换为普通字典，省略值为 None 的顶层字段"""
        return {k: v for k, v in self.model_dump().items() if v is not None}


class Failure(BaseApiResult):
    """失败结果

    本地校验失败时 code 为 None；传输失败时为 HTTP 状态码或传输层错误码。
    """

    state: Literal[False] = False
    error: str = Field(description="错误信息")
    code: int | None = Field(None, description="错误码")


class BatchSuccess(BaseApiResult):
    """批量 URL 压缩成功结果"""

    state: Literal[True] = True
    items: Any = Field(default_factory=list, description="各条目的压缩结果")
    usage: Any = Field(None, description="账户用量信息")


class DataSuccess(BaseApiResult):
    """返回 data 信封内容的成功结果（文件压缩、任务状态、用量查询）"""

    state: Literal[True] = True
    data: Any = Field(default_factory=dict, description="响应 data 字段")


BatchResult = BatchSuccess | Failure
DataResult = DataSuccess | Failure
