"""粗粒度扫描：按固定间隔 seek + 缩略渲染 + 差异比较，产出变化候选点。"""

from __future__ import annotations

from typing import Callable, List, Optional

import numpy as np
from numpy.typing import NDArray

from automanual.core.config import ExtractionConfig
from automanual.core.datamodels import ChangePoint
from automanual.core.logging_utils import get_logger

from .differ import frame_difference
from .source import VideoSource

logger = get_logger(__name__)


def scan_timestamps(duration: float, interval: float) -> List[float]:
    """0, interval, 2*interval, ... 中严格小于 duration 的时间点。"""

    if interval <= 0:
        raise ValueError("scan interval must be positive")
    timestamps: List[float] = []
    index = 0
    while index * interval < duration:
        timestamps.append(index * interval)
        index += 1
    return timestamps


class ScanSession:
    """单次扫描的比较状态，只保存上一张缩略帧，不与其它视频共享。"""

    def __init__(self, sensitivity: float) -> None:
        self.sensitivity = sensitivity
        self.previous: Optional[NDArray[np.uint8]] = None
        self.points: List[ChangePoint] = []

    def feed(self, timestamp: float, raster: NDArray[np.uint8]) -> Optional[ChangePoint]:
        """喂入一帧；首帧只作为比较基准，不产出变化点。"""

        previous, self.previous = self.previous, raster
        if previous is None:
            return None
        score = frame_difference(previous, raster)
        if score < self.sensitivity:
            return None
        point = ChangePoint(timestamp=timestamp, change_score=score)
        self.points.append(point)
        logger.debug("变化候选 %.2fs score=%.4f", timestamp, score)
        return point


def scan_changes(
    source: VideoSource,
    config: ExtractionConfig,
    *,
    progress_callback: Callable[[float], None] | None = None,
) -> List[ChangePoint]:
    """单遍扫描全片，按时间顺序返回得分 >= sensitivity 的变化点。

    progress_callback 收到本阶段 0-100 的进度。
    """

    timestamps = scan_timestamps(source.duration, config.scan_interval)
    size = (config.scan_width, config.scan_height)
    session = ScanSession(config.sensitivity)
    total = len(timestamps)

    for index, timestamp in enumerate(timestamps, start=1):
        source.seek(timestamp)
        session.feed(timestamp, source.render(size))
        if progress_callback is not None:
            progress_callback(index / total * 100.0)

    logger.info("扫描完成：%d 个采样点，%d 个变化候选", total, len(session.points))
    return session.points
