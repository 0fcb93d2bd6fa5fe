"""日志配置适配器。

本模块负责把 `Settings` 中的字段映射为两类参数：
- `map_settings_to_logger_kwargs`：传给 `iog.utils.log.configure_logger` 的诊断日志参数；
- `map_settings_to_logger_options`：构建 `LoggerConfig` 的默认选项。

并提供 `apply_logging_from_settings` 做一次性或幂等的诊断日志配置调用。
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from iog.config.settings import Settings, get_settings


def map_settings_to_logger_kwargs(settings: Settings) -> Dict[str, Any]:
    """把 Settings 映射为传给 configure_logger 的关键字参数字典。"""
    return {
        "name": settings.log_name,
        "console_level": settings.log_console_level,
        "file_level": settings.log_file_level,
        "log_dir": settings.log_dir,
        "rotation": settings.log_rotation,
        "retention": settings.log_retention,
        "compression": settings.log_compression,
        "backtrace": settings.log_backtrace,
        "diagnose": settings.log_diagnose,
        "serialize": settings.log_serialize,
        "intercept_stdlib": settings.log_intercept_stdlib,
    }


def map_settings_to_logger_options(settings: Settings) -> Dict[str, Any]:
    """把 Settings 映射为 `LoggerConfig` 的字段字典。"""
    return {
        "directory": settings.path,
        "file_extension": settings.log_ext,
        "separator": settings.separator,
        "console": settings.console,
        "rotation": settings.rotation,
        "delete_age": settings.delete_age,
        "slim": settings.slim,
        "hash": settings.hash,
    }


def apply_logging_from_settings(settings: Optional[Settings] = None) -> None:
    """从 settings 加载并应用诊断日志配置。

    如果未传入 settings，会使用 `get_settings()` 获取单例。
    """
    if settings is None:
        settings = get_settings()

    kwargs = map_settings_to_logger_kwargs(settings)

    # 延迟导入日志模块以避免循环依赖
    from iog.utils.log import configure_logger

    configure_logger(**kwargs)


__all__ = [
    "map_settings_to_logger_kwargs",
    "map_settings_to_logger_options",
    "apply_logging_from_settings",
]
