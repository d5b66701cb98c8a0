"""轻量日志工具，统一 CLI 与引擎模块的输出格式。"""

from __future__ import annotations

import logging
from typing import Optional


def setup_logging(level: str = "INFO") -> None:
    """设置全局日志级别，默认 INFO，可在 CLI 入口覆盖。"""

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """获取模块专属 logger，统一挂在 automanual 命名空间下。"""

    if not name:
        return logging.getLogger("automanual")
    if name == "automanual" or name.startswith("automanual."):
        return logging.getLogger(name)
    return logging.getLogger(f"automanual.{name}")
