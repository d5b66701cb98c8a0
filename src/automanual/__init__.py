"""AutoManual：从操作视频中挑选关键帧，生成分步骤手册的素材。"""

from .core import ChangePoint, ExtractedFrame, ExtractionConfig, load_config
from .extract import SeekError, VideoLoadError, extract_frames, extract_from_source

__all__ = [
    "ChangePoint",
    "ExtractedFrame",
    "ExtractionConfig",
    "load_config",
    "SeekError",
    "VideoLoadError",
    "extract_frames",
    "extract_from_source",
]
