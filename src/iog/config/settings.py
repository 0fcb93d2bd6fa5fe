"""应用配置（基于 pydantic-settings）。

包含两类配置（环境变量优先）：
- Logger 的默认选项（目录、扩展名、轮转、保留天数等），供 `Logger.from_settings` 使用；
- iog 自身诊断日志（loguru）的配置，供 `iog.config.log` 使用。
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from iog.core.types import SEPARATOR


class Settings(BaseSettings):
    """应用配置模型（可通过环境变量注入）。

    环境变量前缀：IOG_
    例如 IOG_ROTATION=true IOG_DELETE_AGE=7
    """

    # Logger 默认选项
    path: str = "logs"
    log_ext: str = ".log"
    separator: str = SEPARATOR
    console: bool = True
    rotation: bool = False
    delete_age: float = Field(default=0, ge=0)
    slim: bool = False
    hash: bool = False

    # iog 自身诊断日志
    log_name: str = "iog"
    log_console_level: str = "WARNING"
    log_file_level: str = "DEBUG"
    log_dir: Optional[str] = None
    log_rotation: str = "10 MB"
    log_retention: str = "14 days"
    log_compression: str = "zip"
    log_backtrace: bool = True
    log_diagnose: bool = False
    log_serialize: bool = False
    # 为 True 时接管整个进程的 logging.root，仅宿主应用应开启
    log_intercept_stdlib: bool = False

    model_config = SettingsConfigDict(env_prefix="IOG_")


# module-level cached settings
_SETTINGS: Optional[Settings] = None


def get_settings(force_reload: bool = False) -> Settings:
    """返回全局 Settings 单例（按需从环境加载）。

    如果 force_reload=True，会从环境/来源重新创建实例。
    """

    global _SETTINGS
    if _SETTINGS is None or force_reload:
        _SETTINGS = Settings()
    return _SETTINGS


__all__ = ["Settings", "get_settings"]
