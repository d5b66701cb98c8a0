"""抽帧引擎：扫描变化、整理候选点、等间隔补点并按原分辨率截帧。"""

from .consolidate import consolidate_changes, merge_close_changes
from .differ import frame_difference
from .extractor import capture_frames, extract_frames, extract_from_source, select_change_points
from .fallback import backfill_points, interval_points
from .scanner import ScanSession, scan_changes, scan_timestamps
from .source import OpenCVVideoSource, SeekError, VideoLoadError, VideoSource, encode_jpeg, open_video

__all__ = [
    "extract_frames",
    "extract_from_source",
    "select_change_points",
    "capture_frames",
    "consolidate_changes",
    "merge_close_changes",
    "frame_difference",
    "backfill_points",
    "interval_points",
    "ScanSession",
    "scan_changes",
    "scan_timestamps",
    "OpenCVVideoSource",
    "VideoSource",
    "VideoLoadError",
    "SeekError",
    "encode_jpeg",
    "open_video",
]
