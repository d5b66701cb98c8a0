"""等间隔取点：manual 模式的全部策略，也是 auto 模式结果过少时的补点来源。"""

from __future__ import annotations

from typing import List, Sequence

from automanual.core.datamodels import ChangePoint


def interval_points(duration: float, count: int) -> List[ChangePoint]:
    """在 (0, duration) 内均匀取 count 个点，间隔 duration / (count + 1)，首尾不取。"""

    if count < 0:
        raise ValueError("count must be >= 0")
    return [ChangePoint(timestamp=index * duration / (count + 1), change_score=0.0) for index in range(1, count + 1)]


def backfill_points(
    points: Sequence[ChangePoint],
    duration: float,
    *,
    min_count: int,
    max_frames: int,
    decimals: int = 1,
) -> List[ChangePoint]:
    """把等间隔点补进检测结果：按 decimals 位小数去重，合并后按时间排序。

    检测点优先占位，补点只填剩余名额，总数不超过 max_frames。
    """

    if max_frames < 1:
        raise ValueError("max_frames must be >= 1")

    combined = sorted(points, key=lambda point: point.change_score, reverse=True)[:max_frames]
    seen = {round(point.timestamp, decimals) for point in combined}
    for candidate in interval_points(duration, min(min_count, max_frames)):
        if len(combined) >= max_frames:
            break
        key = round(candidate.timestamp, decimals)
        if key in seen:
            continue
        seen.add(key)
        combined.append(candidate)

    combined.sort(key=lambda point: point.timestamp)
    return combined
