from __future__ import annotations

import threading
from typing import Any, Optional

from .logger import Logger


class LoggerRegistry:
    """按上下文名称缓存 Logger 实例的查找表。

    约定每个上下文在进程内只有一个 Logger，但并不强制；直接构造 `Logger`
    仍然可以得到独立实例。
    """

    def __init__(self) -> None:
        self._registry: dict[str, Logger] = {}
        self._lock = threading.Lock()

    def register(self, instance: Logger) -> None:
        # 注册时确保传入的是 Logger，避免意外类型
        if not isinstance(instance, Logger):
            raise TypeError("instance must be a Logger")
        with self._lock:
            self._registry[instance.context_name] = instance

    def get(self, name: str) -> Optional[Logger]:
        return self._registry.get(name)

    def create(self, name: str, **options: Any) -> Logger:
        """返回 name 对应的 Logger，不存在或已关闭时按 options 新建。

        已存在的实例直接返回，此时 options 被忽略。
        """
        with self._lock:
            existing = self._registry.get(name)
            if existing is not None and not existing.closed:
                return existing
            instance = Logger(name, **options)
            self._registry[name] = instance
            return instance

    def close_all(self) -> None:
        with self._lock:
            instances = list(self._registry.values())
            self._registry.clear()
        for instance in instances:
            instance.close()

    def __contains__(self, name: str) -> bool:
        return name in self._registry

    def __len__(self) -> int:
        return len(self._registry)


# 模块级默认注册表
_REGISTRY = LoggerRegistry()


def get_logger(name: str, **options: Any) -> Logger:
    """从默认注册表获取（或创建）上下文 Logger。"""
    return _REGISTRY.create(name, **options)


def close_all() -> None:
    _REGISTRY.close_all()


__all__ = ["LoggerRegistry", "get_logger", "close_all"]
