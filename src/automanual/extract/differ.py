"""栅格差异：RGB 三通道平均绝对差，归一化到 0-1。"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def frame_difference(frame_a: NDArray[np.uint8], frame_b: NDArray[np.uint8]) -> float:
    """score = Σ(|Δr|+|Δg|+|Δb|) / (3 · 255 · P)，第 4 通道（alpha）忽略。"""

    if frame_a.shape != frame_b.shape:
        raise ValueError(f"栅格尺寸不一致: {frame_a.shape} vs {frame_b.shape}")
    if frame_a.ndim != 3 or frame_a.shape[2] < 3:
        raise ValueError(f"需要 (H, W, C>=3) 的栅格: {frame_a.shape}")
    if frame_a.size == 0:
        return 0.0

    # 转 int16 避免 uint8 相减回绕
    delta = np.abs(frame_a[..., :3].astype(np.int16) - frame_b[..., :3].astype(np.int16))
    pixel_count = frame_a.shape[0] * frame_a.shape[1]
    return float(delta.sum(dtype=np.int64) / (3 * 255 * pixel_count))
