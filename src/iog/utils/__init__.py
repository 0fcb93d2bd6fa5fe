"""
iog.utils 包

库内部复用的工具（目前为基于 loguru 的诊断日志）。
"""

# 便捷导出
from .log import logger as logger

__all__ = ["logger"]
