"""过期日志清理任务。

`RetentionSweeper` 在启动时同步清理一次，随后在后台守护线程中按固定周期（默认 24 小时）
重复执行，直到 `stop()` 被调用。周期等待基于 `threading.Event`，因此停止是确定性的。
"""

from __future__ import annotations

import threading
import time
from pathlib import Path
from typing import Callable, Optional, Union

from iog.utils.log import logger

from .paths import is_rotated_name
from .types import DAY_SECONDS

PathLike = Union[str, Path]


class RetentionSweeper:
    """删除目录中超过保留期的日志文件。

    - 只处理目录下第一层、名为 `yyyy-mm-dd<ext>` 的普通文件，其他文件一律保留
      （扩展名为空时同样按日期文件名匹配）；
    - 文件年龄按修改时间计算，超过 `max_age_days * 86400` 秒即删除；
    - 单个文件删除失败只记录警告，不影响其余文件；
    - 目录不存在时什么也不做；
    - `protect` 返回的路径（Logger 当前写入的文件）永远不会被删除，
      即使系统时钟或文件时间戳发生偏移。
    """

    def __init__(
        self,
        directory: PathLike,
        extension: str,
        max_age_days: float,
        *,
        interval: float = DAY_SECONDS,
        clock: Optional[Callable[[], float]] = None,
        protect: Optional[Callable[[], PathLike]] = None,
    ) -> None:
        self.directory = Path(directory)
        self.extension = extension
        self.max_age_seconds = max_age_days * DAY_SECONDS
        self.interval = interval
        self._clock = clock or time.time
        self._protect = protect
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _protected_path(self) -> Optional[Path]:
        if self._protect is None:
            return None
        return Path(self._protect()).resolve()

    def sweep(self) -> list[Path]:
        """执行一次清理，返回被删除的文件列表。"""

        if not self.directory.is_dir():
            return []

        cutoff = self._clock() - self.max_age_seconds
        protected = self._protected_path()
        removed: list[Path] = []

        try:
            entries = list(self.directory.iterdir())
        except OSError as exc:
            logger.warning("cannot scan {}: {}", self.directory, exc)
            return removed

        for entry in entries:
            if not is_rotated_name(entry.name, self.extension):
                continue
            try:
                if not entry.is_file():
                    continue
                if protected is not None and entry.resolve() == protected:
                    continue
                if entry.stat().st_mtime >= cutoff:
                    continue
                entry.unlink()
            except FileNotFoundError:
                # 已被其他进程删除
                continue
            except OSError as exc:
                logger.warning("failed to remove expired log {}: {}", entry, exc)
                continue
            logger.info("removed expired log {}", entry)
            removed.append(entry)

        return removed

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            try:
                self.sweep()
            except Exception:
                logger.exception("retention sweep of {} failed", self.directory)

    def start(self) -> "RetentionSweeper":
        """同步清理一次，然后启动后台周期任务。重复调用无副作用。"""
        if self.running:
            return self
        self.sweep()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            name=f"iog-sweeper:{self.directory.name}",
            daemon=True,
        )
        self._thread.start()
        logger.debug(
            "retention sweeper started for {} (max age {}s, every {}s)",
            self.directory,
            self.max_age_seconds,
            self.interval,
        )
        return self

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        thread, self._thread = self._thread, None
        if thread is not None:
            thread.join(timeout)
            logger.debug("retention sweeper stopped for {}", self.directory)


__all__ = ["RetentionSweeper"]
