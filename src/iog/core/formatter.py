"""日志记录格式化。

纯函数集合，不产生任何副作用：
- 时间戳/日期格式化
- 判断“类错误”值并取出其消息文本
- 序列化结构化消息（基于 pydantic_core 的 JSON 序列化）
- 把 `LogRecord` 渲染为标准（多行块）或精简（单行 JSON）文本
"""

from __future__ import annotations

import hashlib
from datetime import datetime
from typing import Any, Optional

from pydantic_core import to_json

from .errors import SerializationError
from .types import SEPARATOR, LogRecord

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"


def format_timestamp(now: datetime) -> str:
    """按 `yyyy-mm-dd HH:MM:ss:l` 格式化，毫秒固定三位。"""
    return f"{now.strftime(TIMESTAMP_FORMAT)}:{now.microsecond // 1000:03d}"


def format_date(now: datetime) -> str:
    return now.strftime(DATE_FORMAT)


def error_message(value: Any) -> Optional[str]:
    """如果 value 是“类错误”值，返回其消息文本，否则返回 None。

    判断基于能力而不是类型：异常对象取 `str(exc)`（为空时退回类名），
    其他对象只要暴露字符串类型的 `message` 属性即视为类错误值。
    """

    if isinstance(value, BaseException):
        return str(value) or type(value).__name__
    if isinstance(value, (str, bytes, dict, list, tuple)):
        return None
    message = getattr(value, "message", None)
    if isinstance(message, str):
        return message
    return None


def serialize(value: Any, *, indent: Optional[int] = None) -> str:
    """把任意结构化值序列化为 JSON 文本。

    支持 dict/list/tuple/set、pydantic 模型、dataclass、datetime 等 pydantic_core
    能识别的类型；循环引用或无法识别的对象抛出 `SerializationError`。
    """

    try:
        return to_json(value, indent=indent).decode("utf-8")
    except (ValueError, TypeError) as exc:
        raise SerializationError(
            f"cannot serialize {type(value).__name__}: {exc}"
        ) from exc


def render_body(message: Any) -> str:
    """计算消息在标准模式下的展示文本。"""
    if isinstance(message, str):
        return message
    text = error_message(message)
    if text is not None:
        return text
    return serialize(message, indent=2)


def hash_body(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def make_record(
    context: str,
    now: datetime,
    type_: str,
    message: Any,
    *,
    slim: bool = False,
    with_hash: bool = False,
) -> LogRecord:
    """根据一次 write 调用的参数构建 `LogRecord`。

    精简模式下 body 保留原始值（类错误值除外），由 `format_record` 整体序列化；
    标准模式下 body 为已经渲染好的文本。
    """

    body: Any
    if slim:
        err = error_message(message)
        body = err if err is not None else message
    else:
        body = render_body(message)

    digest = None
    if with_hash:
        digest = hash_body(body if isinstance(body, str) else render_body(message))

    return LogRecord(
        context=context,
        timestamp=format_timestamp(now),
        type=type_,
        body=body,
        hash=digest,
    )


def format_record(
    record: LogRecord, *, slim: bool = False, separator: str = SEPARATOR
) -> str:
    if slim:
        data: dict[str, Any] = {
            "CONTEXT": record.context,
            "DATE": record.timestamp,
            "TYPE": record.type,
            "BODY": record.body,
        }
        if record.hash is not None:
            data["HASH"] = record.hash
        return serialize(data) + "\n"

    hash_line = f"HASH: {record.hash}\n" if record.hash is not None else ""
    return (
        f"CONTEXT: {record.context}\n"
        f"DATE: {record.timestamp}\n"
        f"TYPE: {record.type}\n"
        f"{hash_line}"
        f"BODY:\n\n{record.body}{separator}"
    )


__all__ = [
    "TIMESTAMP_FORMAT",
    "DATE_FORMAT",
    "format_timestamp",
    "format_date",
    "error_message",
    "serialize",
    "render_body",
    "hash_body",
    "make_record",
    "format_record",
]
