"""基于 loguru 的 iog 诊断日志。

iog 本身就是日志库，这里的 logger 只用于记录库内部事件（目录创建、过期文件清理、
追加失败等）。导入时不会修改 loguru 的处理器，宿主程序可通过
`configure_logger` 或 `iog.config.log.apply_logging_from_settings` 显式启用输出。
"""

from __future__ import annotations

from typing import Optional, Any
import sys
import os

from loguru import logger as _logger


def _ensure_log_dir(path: str) -> None:
    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        # 尽力创建日志目录，失败时交给 loguru 在添加 sink 时报错
        pass


def configure_logger(
    *,
    name: str = "iog",
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    log_dir: str | None = None,
    rotation: str = "10 MB",
    retention: str = "14 days",
    compression: str = "zip",
    backtrace: bool = True,
    diagnose: bool = False,
    serialize: bool = False,
    intercept_stdlib: bool = False,
) -> Any:
    """配置并返回 iog 诊断用的 loguru logger 实例。

    注意：loguru 的处理器是进程全局的，此函数会移除宿主程序已添加的 sink；
    intercept_stdlib=True 时还会替换整个进程的 `logging.root` 处理器，
    只应由宿主应用在启动时调用，库代码不应开启。
    """

    # 移除已存在的处理器以避免重复输出
    _logger.remove()
    _logger.enable("iog")

    # 控制台 sink：写到 stderr，避免与 iog 自身写往 stdout 的日志正文混在一起
    _logger.add(
        sys.stderr,
        colorize=True,
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=console_level,
        enqueue=True,
        backtrace=backtrace,
        diagnose=diagnose,
    )

    if log_dir:
        _ensure_log_dir(log_dir)
        file_path = os.path.join(log_dir, f"{name}.log")
        _logger.add(
            file_path,
            rotation=rotation,
            retention=retention,
            compression=compression,
            level=file_level,
            serialize=serialize,
            enqueue=True,
            backtrace=backtrace,
            diagnose=diagnose,
        )

    if intercept_stdlib:
        import logging

        class InterceptHandler(logging.Handler):
            def emit(
                self, record: logging.LogRecord
            ) -> None:  # pragma: no cover - 简单透传
                try:
                    level = _logger.level(record.levelname).name
                except ValueError:
                    level = record.levelno
                frame, depth = logging.currentframe(), 2
                # 跳过 logging 内部帧以定位调用者
                while frame and frame.f_code.co_filename == logging.__file__:
                    frame = frame.f_back
                    depth += 1
                _logger.opt(depth=depth, exception=record.exc_info).log(
                    level, record.getMessage()
                )

        logging.root.handlers = [InterceptHandler()]
        logging.root.setLevel(0)

    return logger


# 作为库默认静默，调用 configure_logger 后才输出
_logger.disable("iog")
logger = _logger.bind(name="iog")


def get_logger(name: Optional[str] = None):
    """返回带有指定名称绑定（name）的子 logger。"""
    if name:
        return _logger.bind(name=name)
    return logger
