"""消息格式化工具模块。

提供统一的错误消息、日志消息格式化功能。
"""

from pathlib import Path

from humanize import naturalsize


class MessageFormatter:
    """统一的消息格式化器"""

    @staticmethod
    def file_not_found(file_path: str | Path) -> str:
        """文件不存在错误消息（返回给调用方，保持 API 约定的英文格式）"""
        return f"File not found: {file_path}"

    @staticmethod
    def missing_api_key(env_var: str) -> str:
        """缺少 API 密钥错误消息"""
        return f"未配置 API 密钥，请设置环境变量 {env_var}"

    @staticmethod
    def operation_failed(
        operation: str, target: str | Path, error: Exception | None = None
    ) -> str:
        """操作失败消息"""
        msg = f"{operation}失败: {target}"
        if error:
            msg += f" - {error}"
        return msg

    @staticmethod
    def request_sent(method: str, url: str) -> str:
        """请求发送日志消息"""
        return f"发送请求 {method} {url}"

    @staticmethod
    def downloaded(url: str, size_bytes: int) -> str:
        """下载完成日志消息"""
        return f"下载完成 [{url}]: {naturalsize(size_bytes, binary=True)}"

    @staticmethod
    def format_error(operation: str, target: str | Path, error: Exception) -> str:
        """格式化通用错误消息"""
        return f"{operation}失败 [{target}]: {error}"


def format_transport_error(operation: str, url: str, error: Exception) -> str:
    """格式化传输错误消息"""
    return MessageFormatter.format_error(operation, url, error)
