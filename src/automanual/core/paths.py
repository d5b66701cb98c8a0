"""路径工具：集中处理输出目录。"""

from __future__ import annotations

import os
from pathlib import Path


OUTPUT_ENV_KEY = "AUTOMANUAL_OUTPUT_ROOT"


def resolve_output_root() -> Path:
    """优先取 AUTOMANUAL_OUTPUT_ROOT，否则落到当前目录下的 output。"""

    env_value = os.getenv(OUTPUT_ENV_KEY)
    if env_value:
        return Path(env_value).expanduser().resolve()
    return Path.cwd() / "output"
