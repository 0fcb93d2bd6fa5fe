"""iog 的诊断日志工具模块。

提供基于 loguru 的 logger，特性包括：
- 彩色控制台输出（stderr）
- 可选的日志文件轮转、压缩与保留策略
- 异步 sink（enqueue）
- 可选的标准库 logging 拦截
"""

from .logger import logger, configure_logger, get_logger

__all__ = ["logger", "configure_logger", "get_logger"]
