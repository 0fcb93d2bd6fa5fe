"""iog.core 包。

围绕 `Logger` 提供上下文日志的全部组成部分：记录格式化、文件路径解析、
控制台输出、按日期轮转与过期清理。
"""

from .console import CONSOLE_LEVELS, ConsoleSink
from .errors import (
    AppendError,
    CallbackError,
    ConfigError,
    IogError,
    LogIOError,
    SerializationError,
)
from .formatter import (
    error_message,
    format_record,
    format_timestamp,
    make_record,
    render_body,
    serialize,
)
from .logger import Logger
from .paths import is_rotated_name, resolve_path
from .registry import LoggerRegistry, close_all, get_logger
from .sweeper import RetentionSweeper
from .types import DAY_SECONDS, SEPARATOR, LoggerConfig, LogRecord

__all__ = [
    "CONSOLE_LEVELS",
    "ConsoleSink",
    "AppendError",
    "CallbackError",
    "ConfigError",
    "IogError",
    "LogIOError",
    "SerializationError",
    "error_message",
    "format_record",
    "format_timestamp",
    "make_record",
    "render_body",
    "serialize",
    "Logger",
    "is_rotated_name",
    "resolve_path",
    "LoggerRegistry",
    "close_all",
    "get_logger",
    "RetentionSweeper",
    "DAY_SECONDS",
    "SEPARATOR",
    "LoggerConfig",
    "LogRecord",
]
