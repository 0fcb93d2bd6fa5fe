from __future__ import annotations

from typing import Any, Callable, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

#: 标准模式下相邻两条记录之间的分隔文本
SEPARATOR = "\n\n" + "-" * 87 + "\n\n"

#: 一天的秒数，用于保留期计算与清理周期
DAY_SECONDS = 86400


class LoggerConfig(BaseModel):
    """单个 Logger 的不可变配置。

    字段名为 Python 风格，同时接受公开的选项别名（`path`, `logExt`, `deleteAge`,
    `onLog` 等），方便从字典或关键字参数直接构建：

        >>> LoggerConfig(path="var/log", logExt=".txt", rotation=True, deleteAge=7)
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    # 日志根目录；为空字符串时不创建目录
    directory: str = Field(
        default="logs", validation_alias=AliasChoices("directory", "path")
    )
    file_extension: str = Field(
        default=".log",
        validation_alias=AliasChoices("file_extension", "log_ext", "logExt"),
    )
    separator: str = SEPARATOR
    console: bool = True
    # 按日期轮转：每天一个文件，目录为 directory/<context>
    rotation: bool = False
    # 保留天数，0 表示不清理；仅在 rotation 为 True 时生效
    delete_age: float = Field(
        default=0, ge=0, validation_alias=AliasChoices("delete_age", "deleteAge")
    )
    slim: bool = Field(default=False, validation_alias=AliasChoices("slim", "compact"))
    hash: bool = False
    on_log: Optional[Callable[[str, str], Any]] = Field(
        default=None, validation_alias=AliasChoices("on_log", "onLog")
    )

    @property
    def retention_seconds(self) -> float:
        return self.delete_age * DAY_SECONDS

    @property
    def sweeping(self) -> bool:
        """是否需要启动保留期清理任务。"""
        return self.rotation and self.delete_age > 0


class LogRecord(BaseModel):
    """一次 write 调用生成的日志记录，格式化后即丢弃。"""

    context: str
    timestamp: str
    type: str
    # 标准模式为渲染后的文本，精简模式为原始值
    body: Any
    hash: Optional[str] = None


__all__ = ["SEPARATOR", "DAY_SECONDS", "LoggerConfig", "LogRecord"]
