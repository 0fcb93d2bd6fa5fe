from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path

from .formatter import format_date
from .types import LoggerConfig

_ROTATED_STEM_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def resolve_path(config: LoggerConfig, context_name: str, now: datetime) -> Path:
    """计算当前应写入的日志文件路径。

    未开启轮转时为 `<directory>/<context><ext>`；开启轮转时每天一个文件
    `<directory>/<yyyy-mm-dd><ext>`（此时 directory 已经限定到上下文子目录）。
    每次写入都应重新调用，日期可能在两次写入之间跨天。
    """

    if config.rotation:
        file_name = format_date(now)
    else:
        file_name = context_name
    return Path(config.directory) / f"{file_name}{config.file_extension}"


def is_rotated_name(name: str, extension: str) -> bool:
    """判断文件名是否为轮转生成的 `yyyy-mm-dd<ext>`。"""
    if not name.endswith(extension):
        return False
    stem = name[: len(name) - len(extension)]
    return _ROTATED_STEM_RE.fullmatch(stem) is not None


__all__ = ["resolve_path", "is_rotated_name"]
