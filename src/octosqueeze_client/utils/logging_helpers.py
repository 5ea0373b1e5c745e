"""日志工具模块。

统一以模块名创建日志记录器，外层入口负责配置输出格式。
"""

import logging


PACKAGE_LOGGER = "octosqueeze_client"


def get_logger(name: str) -> logging.Logger:
    """获取模块日志记录器，包外名称挂到包日志记录器之下"""
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str, fmt: str) -> None:
    """按给定级别和格式配置根日志记录器"""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=fmt)
