"""接口异常处理模块。

定义统一的异常类，以及把传输层异常转换为失败结果的处理器和装饰器。
"""

from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import TypeVar

import httpx

from .models.api_result import Failure
from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter, format_transport_error


logger = get_logger(__name__)
T = TypeVar("T")


class OctoSqueezeError(Exception):
    """客户端错误基类"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(OctoSqueezeError):
    """携带错误码的传输错误，可由自定义 httpx transport 抛出"""

    def __init__(self, message: str, code: int = 0):
        super().__init__(message)
        self.code = code


def transport_error_code(error: Exception) -> int:
    """提取传输异常的错误码

    HTTP 状态错误取响应状态码，其余异常取其 code 属性，缺省为 0。
    """
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code

    code = getattr(error, "code", 0)
    return code if isinstance(code, int) else 0


class ErrorHandler:
    """统一错误处理器

    提供标准化的错误日志记录和失败结果构建。
    """

    @staticmethod
    def from_transport_error(
        error: Exception, operation: str, target: str = ""
    ) -> Failure:
        """把传输异常转换为失败结果

        Args:
            error: httpx 异常或 TransportError
            operation: 操作名称，用于日志记录
            target: 请求目标（URL 或路径），用于日志记录

        Returns:
            Failure: 携带异常消息和错误码的失败结果
        """
        code = transport_error_code(error)
        logger.error(f"{format_transport_error(operation, target, error)} (code={code})")
        return Failure(error=str(error), code=code)

    @staticmethod
    def file_not_found(file_path: str) -> Failure:
        """本地文件不存在，不携带错误码"""
        message = MessageFormatter.file_not_found(file_path)
        logger.warning(message)
        return Failure(error=message)

    @staticmethod
    def local_file_error(file_path: str | Path, error: OSError) -> Failure:
        """本地文件无法读取，不携带错误码"""
        message = MessageFormatter.operation_failed("读取文件", file_path, error)
        logger.warning(message)
        return Failure(error=message)


def handle_api_errors(operation_name: str = "接口调用"):
    """统一的接口调用异常处理装饰器

    被装饰的方法中抛出的 httpx.HTTPError、httpx.InvalidURL 与 TransportError
    会被转换为 Failure 返回，不会越过公开接口边界。

    Args:
        operation_name: 操作名称，用于日志记录
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T | Failure]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T | Failure:
            try:
                return func(*args, **kwargs)
            except (httpx.HTTPError, httpx.InvalidURL, TransportError) as e:
                target = str(e.request.url) if _has_request(e) else ""
                return ErrorHandler.from_transport_error(e, operation_name, target)

        return wrapper

    return decorator


def _has_request(error: Exception) -> bool:
    """httpx 异常在未绑定请求时访问 request 会抛出 RuntimeError"""
    if not isinstance(error, httpx.HTTPError):
        return False
    try:
        error.request
    except RuntimeError:
        return False
    return True
