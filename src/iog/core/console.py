from __future__ import annotations

import sys
from typing import Optional, TextIO

#: 控制台可识别的级别，及其对应的输出流（stdout/stderr）
CONSOLE_LEVELS: dict[str, str] = {
    "log": "stdout",
    "info": "stdout",
    "debug": "stdout",
    "warn": "stderr",
    "error": "stderr",
    "trace": "stderr",
}


class ConsoleSink:
    """把渲染好的日志文本输出到控制台。

    未识别的级别退回到 `log`。未显式传入流时，在输出时才读取 `sys.stdout` /
    `sys.stderr`，以便测试或宿主程序重定向。
    """

    def __init__(
        self, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None
    ) -> None:
        self._stdout = stdout
        self._stderr = stderr

    @staticmethod
    def level_for(type_: str) -> str:
        return type_ if type_ in CONSOLE_LEVELS else "log"

    def stream_for(self, level: str) -> TextIO:
        if CONSOLE_LEVELS[self.level_for(level)] == "stderr":
            return self._stderr or sys.stderr
        return self._stdout or sys.stdout

    def emit(self, level: str, text: str) -> None:
        stream = self.stream_for(level)
        stream.write(text + "\n")
        stream.flush()


__all__ = ["CONSOLE_LEVELS", "ConsoleSink"]
