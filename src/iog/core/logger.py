"""带上下文标签的文件/控制台 Logger。

一次 `write` 调用的流程：
1. 已暂停则直接返回；
2. 构建并渲染记录（标准多行块或精简单行 JSON）；
3. 按需输出到控制台；
4. 把记录交给单线程执行器异步追加到日志文件，返回对应的 Future；
5. 追加成功后调用可选的 `on_log(text, type)` 回调。

追加失败或回调异常都不会被静默丢弃：Future 中保存 `AppendError` / `CallbackError`，
同时 Logger 进入故障状态，下一次 `write` / `flush` / `close` 会同步抛出该错误。
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import ValidationError

from iog.utils.log import logger

from .console import ConsoleSink
from .errors import AppendError, CallbackError, ConfigError, IogError, LogIOError
from .formatter import format_record, make_record
from .paths import resolve_path
from .sweeper import RetentionSweeper
from .types import LoggerConfig


def _build_config(
    config: Union[LoggerConfig, Mapping[str, Any], None], options: Mapping[str, Any]
) -> LoggerConfig:
    # 以 config（或默认值）为底，只覆盖 options 中显式给出的字段
    try:
        if config is None:
            base = LoggerConfig()
        elif isinstance(config, LoggerConfig):
            base = config
        else:
            base = LoggerConfig.model_validate(dict(config))
        if not options:
            return base
        partial = LoggerConfig.model_validate(dict(options))
    except ValidationError as exc:
        raise ConfigError(f"invalid logger options: {exc}") from exc
    overrides = {name: getattr(partial, name) for name in partial.model_fields_set}
    return base.model_copy(update=overrides)


class Logger:
    """按上下文名称区分的日志写入器。

    Examples:
        >>> log = Logger("billing", rotation=True, deleteAge=7)
        >>> log.info("service started")
        >>> log.write({"order": 42}, "audit", show=False)
        >>> log.close()
    """

    def __init__(
        self,
        context_name: str,
        config: Union[LoggerConfig, Mapping[str, Any], None] = None,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        sink: Optional[ConsoleSink] = None,
        **options: Any,
    ) -> None:
        if not isinstance(context_name, str) or not context_name.strip():
            raise ConfigError("context name is required")

        self._context_name = context_name
        resolved = _build_config(config, options)
        if resolved.rotation:
            directory = Path(resolved.directory) / context_name
            resolved = resolved.model_copy(update={"directory": str(directory)})
        self._config = resolved

        if resolved.directory:
            try:
                Path(resolved.directory).mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise LogIOError(
                    f"cannot create log directory {resolved.directory}: {exc}"
                ) from exc

        self._clock = clock or datetime.now
        self._console = sink or ConsoleSink()
        self._paused = False
        self._closed = False
        self._fault: Optional[IogError] = None
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=f"iog-{context_name}"
        )

        self._sweeper: Optional[RetentionSweeper] = None
        if resolved.sweeping:
            self._sweeper = RetentionSweeper(
                resolved.directory,
                resolved.file_extension,
                resolved.delete_age,
                clock=lambda: self._clock().timestamp(),
                protect=lambda: self.file_path,
            ).start()

        logger.debug("logger {!r} writing under {!r}", context_name, resolved.directory)

    @classmethod
    def from_settings(
        cls, context_name: str, settings: Any = None, **options: Any
    ) -> "Logger":
        """以环境变量驱动的 Settings 作为默认选项构建 Logger。"""

        # 延迟导入以避免 config 与 core 之间的循环依赖
        from iog.config.log import map_settings_to_logger_options
        from iog.config.settings import get_settings

        if settings is None:
            settings = get_settings()
        base = map_settings_to_logger_options(settings)
        return cls(context_name, base, **options)

    @property
    def context_name(self) -> str:
        return self._context_name

    @property
    def config(self) -> LoggerConfig:
        return self._config

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def sweeper(self) -> Optional[RetentionSweeper]:
        return self._sweeper

    @property
    def file_path(self) -> Path:
        """当前时刻应写入的文件路径（开启轮转时随日期变化）。"""
        return resolve_path(self._config, self._context_name, self._clock())

    def pause(self) -> "Logger":
        self._paused = True
        return self

    def resume(self) -> "Logger":
        self._paused = False
        return self

    def _set_fault(self, error: IogError) -> None:
        # 只保留第一个未被观察到的故障
        with self._lock:
            if self._fault is None:
                self._fault = error

    def _raise_fault(self) -> None:
        with self._lock:
            fault, self._fault = self._fault, None
        if fault is not None:
            raise fault

    def _append(self, path: Path, text: str, type: str) -> None:
        try:
            with open(path, "a", encoding="utf-8") as fh:
                fh.write(text)
        except OSError as exc:
            error = AppendError(str(path), exc)
            self._set_fault(error)
            logger.opt(exception=exc).critical(
                "logger {!r} failed to append to {}", self._context_name, path
            )
            raise error from exc

        on_log = self._config.on_log
        if on_log is not None:
            try:
                on_log(text, type)
            except Exception as exc:
                error = CallbackError(self._context_name, exc)
                self._set_fault(error)
                logger.opt(exception=exc).error(
                    "on_log callback of {!r} failed", self._context_name
                )
                raise error from exc

    def write(
        self, message: Any = "", type: str = "log", show: bool = True
    ) -> Optional[Future]:
        """写入一条日志。

        message 可以是字符串、异常（取其消息文本）或任意可序列化的结构化值。
        type 可以是 log/info/warn/error/trace/debug，也可以是自定义类型（控制台按 log 输出）。
        show=False 时本次不输出到控制台。

        返回追加任务的 Future；暂停状态下返回 None。
        """

        if self._paused:
            return None
        self._raise_fault()
        if self._closed:
            raise IogError(f"logger {self._context_name!r} is closed")

        now = self._clock()
        config = self._config
        record = make_record(
            self._context_name,
            now,
            type,
            message,
            slim=config.slim,
            with_hash=config.hash,
        )
        text = format_record(record, slim=config.slim, separator=config.separator)

        if config.console and show:
            self._console.emit(type, text)

        path = resolve_path(config, self._context_name, now)
        return self._executor.submit(self._append, path, text, type)

    def error(self, message: Any = "") -> Optional[Future]:
        return self.write(message, "error")

    def warn(self, message: Any = "") -> Optional[Future]:
        return self.write(message, "warn")

    def info(self, message: Any = "") -> Optional[Future]:
        return self.write(message, "info")

    def trace(self, message: Any = "") -> Optional[Future]:
        return self.write(message, "trace")

    def debug(self, message: Any = "") -> Optional[Future]:
        return self.write(message, "debug")

    def flush(self, timeout: Optional[float] = None) -> None:
        """等待此前提交的所有追加任务完成，并抛出其间发生的追加或回调错误。"""
        if not self._closed:
            # 执行器只有一个工作线程，按提交顺序执行
            self._executor.submit(lambda: None).result(timeout)
        self._raise_fault()

    def close(self) -> None:
        """停止清理任务并等待剩余追加完成。可重复调用。"""
        if not self._closed:
            self._closed = True
            if self._sweeper is not None:
                self._sweeper.stop()
            self._executor.shutdown(wait=True)
            logger.debug("logger {!r} closed", self._context_name)
        self._raise_fault()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"Logger(context_name={self._context_name!r}, "
            f"directory={self._config.directory!r}, "
            f"rotation={self._config.rotation}, paused={self._paused})"
        )


__all__ = ["Logger"]
