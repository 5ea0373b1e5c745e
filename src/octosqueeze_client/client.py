"""OctoSqueeze API 客户端。

把高层的压缩请求转换为对版本化 REST 接口的 HTTP 调用，
并把每个响应和传输失败统一归一化为结果对象。
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import httpx

from .config import get_config
from .exceptions import ErrorHandler, TransportError, handle_api_errors
from .models import (
    ApiPaths,
    BatchResult,
    BatchSuccess,
    CompressionItem,
    ContentTypes,
    DataResult,
    DataSuccess,
    Headers,
    MultipartFields,
    bearer,
    serialize_items,
)
from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter
from .utils.request_helpers import (
    decode_body,
    extract_data,
    guess_upload_mime_type,
    join_url,
    merge_options,
)


logger = get_logger(__name__)


class OctoSqueeze:
    """OctoSqueeze 图像压缩 API 客户端。

    持有 API 密钥、接口地址、传输层配置和默认请求选项。
    每个公开方法只发起一次 HTTP 请求，并返回成功或失败结果，从不抛出传输异常。

    Examples:
        >>> client = OctoSqueeze.client("sk-...").set_options({"mode": "balanced"})
        >>> result = client.compress_url("https://example.com/photo.jpg")
        >>> if result.state:
        ...     print(result.items)
    """

    def __init__(self, api_key: str):
        """初始化客户端。

        Args:
            api_key: API 密钥，构造后不可修改
        """
        self._api_key = api_key
        self._endpoint_uri = get_config().client.ENDPOINT_URI.rstrip("/")
        self._http_client_config: dict[str, Any] = {}
        self._options: dict[str, Any] = {}
        self._http_client: httpx.Client | None = None

    @classmethod
    def client(cls, api_key: str) -> "OctoSqueeze":
        """创建客户端实例"""
        return cls(api_key)

    def __enter__(self) -> "OctoSqueeze":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # 配置
    # ------------------------------------------------------------------

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def endpoint_uri(self) -> str:
        return self._endpoint_uri

    @property
    def http_client_config(self) -> dict[str, Any]:
        return dict(self._http_client_config)

    @property
    def options(self) -> dict[str, Any]:
        return dict(self._options)

    def set_endpoint_uri(self, uri: str) -> "OctoSqueeze":
        """设置接口地址，下一次请求时使用新地址重建传输句柄"""
        self._endpoint_uri = uri.rstrip("/")
        self._reset_http_client()
        return self

    def set_http_client_config(self, config: Mapping[str, Any]) -> "OctoSqueeze":
        """替换传输层配置（原样传给 httpx.Client，如 timeout、proxy、transport）"""
        self._http_client_config = dict(config)
        self._reset_http_client()
        return self

    def set_options(self, options: Mapping[str, Any]) -> "OctoSqueeze":
        """把选项浅合并到实例默认选项中，同名键以新值为准"""
        self._options = merge_options(self._options, options)
        return self

    def close(self) -> None:
        """关闭缓存的传输句柄"""
        self._reset_http_client()

    def _reset_http_client(self) -> None:
        if self._http_client is not None:
            self._http_client.close()
            self._http_client = None

    def _get_http_client(self) -> httpx.Client:
        """获取传输句柄，首次使用时按基础配置与调用方配置创建"""
        if self._http_client is None:
            transport_config = merge_options(
                get_config().client.transport_defaults(), self._http_client_config
            )
            logger.debug(f"创建 HTTP 传输句柄: {self._endpoint_uri}")
            try:
                self._http_client = httpx.Client(**transport_config)
            except TypeError as e:
                raise TransportError(f"传输层配置无效: {e}") from e

        return self._http_client

    def _url(self, path: str) -> str:
        return join_url(self._endpoint_uri, path)

    def _auth_headers(self) -> dict[str, str]:
        return {Headers.AUTHORIZATION: bearer(self._api_key)}

    def _json_headers(self) -> dict[str, str]:
        return {
            **self._auth_headers(),
            Headers.ACCEPT: ContentTypes.JSON,
            Headers.CONTENT_TYPE: ContentTypes.JSON,
        }

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """发起请求，非 2xx 响应转换为 httpx.HTTPStatusError"""
        logger.debug(MessageFormatter.request_sent(method, url))
        response = self._get_http_client().request(method, url, **kwargs)
        response.raise_for_status()
        return response

    # ------------------------------------------------------------------
    # 接口操作
    # ------------------------------------------------------------------

    def compress_url(
        self, url: str, options: Mapping[str, Any] | None = None
    ) -> BatchResult:
        """压缩单个 URL 图片。

        Args:
            url: 图片 URL
            options: 本次调用的压缩选项，与实例默认选项合并且优先

        Returns:
            BatchResult: 批量压缩结果（只含一个条目）
        """
        item = CompressionItem(url=url, options=merge_options(self._options, options))
        return self.squeeze_url([item])

    @handle_api_errors("批量压缩")
    def squeeze_url(self, items: list[CompressionItem | Mapping[str, Any]]) -> BatchResult:
        """批量压缩 URL 图片。

        Args:
            items: 条目列表，每个条目包含：
                - url: 图片 URL
                - image_id: 调用方系统中的标识（可选）
                - hash: 内容哈希，用于跳过重复压缩（可选）
                - name: 文件名（可选）
                - options: 单图压缩选项（可选）

        Returns:
            BatchResult: 成功时包含 items 和 usage，失败时包含 error 和 code
        """
        response = self._request(
            "POST",
            self._url(ApiPaths.COMPRESS_BATCH),
            headers=self._json_headers(),
            json={"items": serialize_items(items), "options": self._options},
        )
        body = decode_body(response)

        return BatchSuccess(
            items=extract_data(body, "items", []),
            usage=extract_data(body, "usage"),
        )

    def compress_file(
        self, file_path: str | Path, options: Mapping[str, Any] | None = None
    ) -> DataResult:
        """上传并压缩本地文件。

        文件不存在时直接返回失败结果，不发起网络请求。

        Args:
            file_path: 本地文件路径
            options: 本次调用的压缩选项，识别 mode 和 formats（只发送第一个格式）

        Returns:
            DataResult: 成功时包含响应 data，失败时包含 error 和 code
        """
        path = Path(file_path)
        if not path.is_file():
            return ErrorHandler.file_not_found(str(file_path))

        return self._upload_file(path, merge_options(self._options, options))

    @handle_api_errors("文件压缩")
    def _upload_file(self, path: Path, merged: dict[str, Any]) -> DataResult:
        fields: dict[str, str] = {}
        if merged.get("mode"):
            fields[MultipartFields.MODE] = str(merged["mode"])
        if formats := merged.get("formats"):
            first = formats if isinstance(formats, str) else formats[0]
            fields[MultipartFields.FORMAT] = str(first)

        try:
            fh = path.open("rb")
        except OSError as e:
            return ErrorHandler.local_file_error(path, e)

        with fh:
            response = self._request(
                "POST",
                self._url(ApiPaths.COMPRESS),
                headers={**self._auth_headers(), Headers.ACCEPT: ContentTypes.JSON},
                files={
                    MultipartFields.FILE: (path.name, fh, guess_upload_mime_type(path))
                },
                data=fields,
            )

        return DataSuccess(data=extract_data(decode_body(response), default={}))

    @handle_api_errors("查询任务状态")
    def get_status(self, job_id: str) -> DataResult:
        """查询压缩任务状态"""
        response = self._request(
            "GET", self._url(ApiPaths.status(job_id)), headers=self._json_headers()
        )
        return DataSuccess(data=extract_data(decode_body(response), default={}))

    @handle_api_errors("查询用量")
    def get_usage(self) -> DataResult:
        """查询账户用量统计"""
        response = self._request(
            "GET", self._url(ApiPaths.USAGE), headers=self._json_headers()
        )
        return DataSuccess(data=extract_data(decode_body(response), default={}))

    def download(self, download_url: str) -> bytes | None:
        """下载压缩后的图片。

        download_url 视为绝对地址，不与接口地址拼接；只携带认证头。
        任何失败都返回 None，不提供错误信息。

        Args:
            download_url: 压缩结果中返回的下载地址

        Returns:
            bytes | None: 图片内容，失败时为 None
        """
        try:
            response = self._request(
                "GET", download_url, headers=self._auth_headers()
            )
        except (httpx.HTTPError, httpx.InvalidURL, TransportError) as e:
            logger.debug(MessageFormatter.operation_failed("下载", download_url, e))
            return None

        logger.debug(MessageFormatter.downloaded(download_url, len(response.content)))
        return response.content


def client(api_key: str) -> OctoSqueeze:
    """创建 OctoSqueeze 客户端实例"""
    return OctoSqueeze(api_key)
