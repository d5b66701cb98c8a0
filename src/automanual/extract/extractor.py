"""抽帧主入口：选择时间点（auto 扫描 / manual 等间隔）后按原始分辨率重新截取。"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Sequence

from automanual.core.config import ExtractionConfig, ExtractionMode, resolve_policy
from automanual.core.datamodels import ChangePoint, ExtractedFrame
from automanual.core.logging_utils import get_logger

from .consolidate import consolidate_changes
from .fallback import backfill_points, interval_points
from .scanner import scan_changes
from .source import VideoLoadError, VideoSource, encode_jpeg, open_video

logger = get_logger(__name__)

ProgressCallback = Callable[[float], None]


def _select_auto(
    source: VideoSource,
    policy: ExtractionConfig,
    progress_callback: ProgressCallback | None,
) -> List[ChangePoint]:
    def scan_callback(percent: float) -> None:
        if progress_callback is not None:
            progress_callback(percent * policy.scan_progress_share)

    raw_points = scan_changes(source, policy, progress_callback=scan_callback)
    points = consolidate_changes(raw_points, policy.max_frames, policy.min_change_interval)
    floor = min(policy.min_frames, policy.max_frames)
    if len(points) < floor:
        logger.info("检测到 %d 个变化点，少于 %d，使用等间隔补点", len(points), floor)
        points = backfill_points(
            points,
            source.duration,
            min_count=policy.min_frames,
            max_frames=policy.max_frames,
            decimals=policy.dedup_decimals,
        )
    return points


def _select_manual(
    source: VideoSource,
    policy: ExtractionConfig,
    progress_callback: ProgressCallback | None,
) -> List[ChangePoint]:
    return interval_points(source.duration, policy.max_frames)


_SELECTORS: Dict[ExtractionMode, Callable[[VideoSource, ExtractionConfig, ProgressCallback | None], List[ChangePoint]]] = {
    "auto": _select_auto,
    "manual": _select_manual,
}


def select_change_points(
    source: VideoSource,
    policy: ExtractionConfig,
    *,
    progress_callback: ProgressCallback | None = None,
) -> List[ChangePoint]:
    """按 mode 选择要截取的时间点，结果按时间升序且不超过 max_frames。"""

    return _SELECTORS[policy.mode](source, policy, progress_callback)


def capture_frames(
    source: VideoSource,
    points: Sequence[ChangePoint],
    policy: ExtractionConfig,
    *,
    progress_callback: ProgressCallback | None = None,
    progress_start: float = 0.0,
) -> List[ExtractedFrame]:
    """逐个时间点按原始分辨率 seek + 渲染 + JPEG 编码，保留选点时的得分。"""

    frames: List[ExtractedFrame] = []
    total = len(points)
    for index, point in enumerate(points, start=1):
        source.seek(point.timestamp)
        image = encode_jpeg(source.render(), policy.jpeg_quality)
        frames.append(ExtractedFrame(timestamp=point.timestamp, image=image, change_score=point.change_score))
        if progress_callback is not None:
            progress_callback(progress_start + (100.0 - progress_start) * index / total)
    return frames


def extract_from_source(
    source: VideoSource,
    policy: ExtractionConfig | None = None,
    *,
    progress_callback: ProgressCallback | None = None,
) -> List[ExtractedFrame]:
    """在已打开的视频源上执行抽帧；视频源的释放由调用方负责。

    progress_callback 收到整体 0-100 进度：auto 模式扫描阶段占前 scan_progress_share，
    manual 模式没有扫描阶段。
    """

    policy = policy or ExtractionConfig()
    if source.duration <= 0:
        raise VideoLoadError(f"视频时长无效: {source.duration}")

    logger.info(
        "开始抽帧 mode=%s max_frames=%d sensitivity=%.3f duration=%.2fs",
        policy.mode,
        policy.max_frames,
        policy.sensitivity,
        source.duration,
    )
    points = select_change_points(source, policy, progress_callback=progress_callback)
    progress_start = policy.scan_progress_share * 100.0 if policy.mode == "auto" else 0.0
    frames = capture_frames(
        source,
        points,
        policy,
        progress_callback=progress_callback,
        progress_start=progress_start,
    )
    logger.info("抽帧完成：%d 帧", len(frames))
    return frames


def extract_frames(
    video_path: str | Path,
    config: ExtractionConfig | None = None,
    *,
    mode: ExtractionMode | None = None,
    max_frames: int | None = None,
    sensitivity: float | None = None,
    progress_callback: ProgressCallback | None = None,
) -> List[ExtractedFrame]:
    """主入口：打开视频 -> 选点 -> 原分辨率截帧；任何异常都会先释放视频源再向上抛出。"""

    policy = resolve_policy(config, mode=mode, max_frames=max_frames, sensitivity=sensitivity)
    source = open_video(video_path)
    try:
        return extract_from_source(source, policy, progress_callback=progress_callback)
    finally:
        source.close()
