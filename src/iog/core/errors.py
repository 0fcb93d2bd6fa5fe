from __future__ import annotations


class IogError(Exception):
    """iog 通用错误类型。"""


class ConfigError(IogError, ValueError):
    """构造 Logger 时上下文名称缺失或选项非法。"""


class LogIOError(IogError, OSError):
    """日志目录无法创建等文件系统错误。"""


class AppendError(LogIOError):
    """异步追加日志文件失败。

    失败不会被静默丢弃：`write` 返回的 Future 持有该异常，并且 Logger 会在下一次
    `write` / `flush` / `close` 时同步抛出它。
    """

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"failed to append to {path}: {cause}")
        self.path = path
        self.cause = cause


class CallbackError(IogError):
    """`on_log` 回调抛出异常。

    与 `AppendError` 走同一故障通道：Future 持有该异常，下一次 `write` / `flush` /
    `close` 同步抛出。
    """

    def __init__(self, context: str, cause: BaseException) -> None:
        super().__init__(f"on_log callback of {context!r} failed: {cause}")
        self.context = context
        self.cause = cause


class SerializationError(IogError, TypeError):
    """消息无法序列化（例如循环引用或不支持的对象类型）。"""


__all__ = [
    "IogError",
    "ConfigError",
    "LogIOError",
    "AppendError",
    "CallbackError",
    "SerializationError",
]
