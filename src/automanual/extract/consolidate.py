"""变化点整理：合并时间相近的重复检测，超出上限时按得分截断。"""

from __future__ import annotations

from typing import List, Sequence

from automanual.core.datamodels import ChangePoint


def merge_close_changes(points: Sequence[ChangePoint], min_interval: float) -> List[ChangePoint]:
    """与上一个保留点间隔小于 min_interval 的视为同一次切换，保留得分更高者。"""

    merged: List[ChangePoint] = []
    for point in points:
        if merged and point.timestamp - merged[-1].timestamp < min_interval:
            if point.change_score > merged[-1].change_score:
                merged[-1] = point
            continue
        merged.append(point)
    return merged


def consolidate_changes(
    points: Sequence[ChangePoint],
    max_frames: int,
    min_interval: float = 1.0,
) -> List[ChangePoint]:
    """先时间合并，再按得分取前 max_frames 个，最终结果按时间升序。"""

    if max_frames < 1:
        raise ValueError("max_frames must be >= 1")

    merged = merge_close_changes(points, min_interval)
    if len(merged) <= max_frames:
        return merged

    # 得分只用于挑选，输出顺序始终按时间
    top = sorted(merged, key=lambda point: point.change_score, reverse=True)[:max_frames]
    return sorted(top, key=lambda point: point.timestamp)
