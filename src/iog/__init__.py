"""iog：带上下文标签的文件/控制台日志库。"""

from iog.config.settings import Settings, get_settings
from iog.core import (
    SEPARATOR,
    AppendError,
    CallbackError,
    ConfigError,
    IogError,
    LogIOError,
    Logger,
    LoggerConfig,
    LoggerRegistry,
    LogRecord,
    SerializationError,
    close_all,
    get_logger,
)

__all__ = [
    "SEPARATOR",
    "AppendError",
    "CallbackError",
    "ConfigError",
    "IogError",
    "LogIOError",
    "Logger",
    "LoggerConfig",
    "LoggerRegistry",
    "LogRecord",
    "SerializationError",
    "Settings",
    "close_all",
    "get_logger",
    "get_settings",
]
