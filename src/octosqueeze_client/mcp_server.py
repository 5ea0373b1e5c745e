"""OctoSqueeze MCP 服务器。

把客户端的各个接口操作暴露为 MCP 工具，API 密钥从环境变量读取。
"""

from pathlib import Path
from typing import Any

from fastmcp import FastMCP
from humanize import naturalsize

from .client import OctoSqueeze
from .config import AppConfig, get_config
from .utils.logging_helpers import configure_logging, get_logger
from .utils.message_formatter import MessageFormatter


# MCP 服务器响应类型定义
MCPResponse = dict[str, Any]


class MCPResponseBuilder:
    """MCP 服务器响应构建器，错误响应与客户端失败结果保持同一形状。"""

    @staticmethod
    def error(
        message: str,
        error_type: str = "general",
        details: dict[str, Any] | None = None,
    ) -> MCPResponse:
        """构建错误结果。

        Args:
            message: 错误消息
            error_type: 错误类型
            details: 额外的错误详情

        Returns:
            dict: 标准化的错误响应
        """
        result: MCPResponse = {
            "state": False,
            "error": message,
            "error_type": error_type,
        }

        if details:
            result["details"] = details

        return result

    @staticmethod
    def config_error(message: str) -> MCPResponse:
        """构建配置错误结果"""
        return MCPResponseBuilder.error(message=message, error_type="config")

    @staticmethod
    def file_error(message: str, file_path: str | None = None) -> MCPResponse:
        """构建文件相关错误结果"""
        details = {"file_path": file_path} if file_path else None
        return MCPResponseBuilder.error(
            message=message,
            error_type="file",
            details=details,
        )


logger = get_logger(__name__)

# 创建MCP应用
mcp: FastMCP[Any] = FastMCP("OctoSqueeze 图像压缩服务")

# 全局客户端实例，首次调用工具时创建
_client: OctoSqueeze | None = None


def get_client() -> OctoSqueeze | None:
    """获取全局客户端，未配置 API 密钥时返回 None"""
    global _client
    if _client is None:
        api_key = get_config().client.API_KEY
        if not api_key:
            return None
        _client = OctoSqueeze(api_key)

    return _client


def set_client(client: OctoSqueeze | None) -> None:
    """替换全局客户端（主要用于测试）"""
    global _client
    _client = client


def _missing_key_response() -> MCPResponse:
    return MCPResponseBuilder.config_error(
        MessageFormatter.missing_api_key(AppConfig.API_KEY_ENV)
    )


def _build_options(mode: str | None, formats: list[str] | None) -> dict[str, Any]:
    options: dict[str, Any] = {}
    if mode:
        options["mode"] = mode
    if formats:
        options["formats"] = formats
    return options


# ============================================================================
# 压缩工具
# ============================================================================


@mcp.tool()
def compress_url(
    url: str,
    mode: str | None = None,
    formats: list[str] | None = None,
) -> MCPResponse:
    """压缩远程 URL 图片。

    Args:
        url: 图片 URL
        mode: 压缩模式（可选）
        formats: 输出格式列表，如 ["webp", "avif"]（可选）

    Returns:
        dict: 包含 state、items、usage 或 error、code
    """
    client = get_client()
    if client is None:
        return _missing_key_response()

    return client.compress_url(url, _build_options(mode, formats)).to_dict()


@mcp.tool()
def compress_file(
    file_path: str,
    mode: str | None = None,
    formats: list[str] | None = None,
) -> MCPResponse:
    """上传并压缩本地图片文件。

    Args:
        file_path: 本地图片路径
        mode: 压缩模式（可选）
        formats: 输出格式列表，只使用第一个（可选）

    Returns:
        dict: 包含 state、data 或 error、code
    """
    client = get_client()
    if client is None:
        return _missing_key_response()

    return client.compress_file(file_path, _build_options(mode, formats)).to_dict()


# ============================================================================
# 查询与下载工具
# ============================================================================


@mcp.tool()
def get_status(job_id: str) -> MCPResponse:
    """查询压缩任务状态"""
    client = get_client()
    if client is None:
        return _missing_key_response()

    return client.get_status(job_id).to_dict()


@mcp.tool()
def get_usage() -> MCPResponse:
    """查询账户用量统计"""
    client = get_client()
    if client is None:
        return _missing_key_response()

    return client.get_usage().to_dict()


@mcp.tool()
def download(download_url: str, output_path: str) -> MCPResponse:
    """下载压缩后的图片并保存到本地。

    Args:
        download_url: 压缩结果中返回的下载地址
        output_path: 本地保存路径

    Returns:
        dict: 包含 state、output_path、size、size_human 或 error
    """
    client = get_client()
    if client is None:
        return _missing_key_response()

    content = client.download(download_url)
    if content is None:
        return MCPResponseBuilder.error(
            MessageFormatter.operation_failed("下载", download_url), "download"
        )

    target = Path(output_path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
    except OSError as e:
        logger.error(MessageFormatter.operation_failed("保存文件", target, e))
        return MCPResponseBuilder.file_error(str(e), output_path)

    return {
        "state": True,
        "output_path": str(target),
        "size": len(content),
        "size_human": naturalsize(len(content), binary=True),
    }


# ============================================================================
# 应用入口
# ============================================================================


def main() -> None:
    """启动 MCP 服务器"""
    settings = get_config().logging
    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    logger.info("启动 OctoSqueeze MCP 服务器")
    mcp.run()


if __name__ == "__main__":
    main()
