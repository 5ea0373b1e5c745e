"""工具模块包。

提供纯工具函数，不包含网络调用和业务逻辑。
"""

from .logging_helpers import configure_logging, get_logger
from .message_formatter import MessageFormatter, format_transport_error
from .request_helpers import (
    decode_body,
    extract_data,
    guess_upload_mime_type,
    join_url,
    merge_options,
)


__all__ = [
    "MessageFormatter",
    "configure_logging",
    "decode_body",
    "extract_data",
    "format_transport_error",
    "get_logger",
    "guess_upload_mime_type",
    "join_url",
    "merge_options",
]
