"""视频源封装：seek 到指定时间并把当前帧渲染成任意尺寸的栅格。"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, Tuple

import cv2
import numpy as np
from numpy.typing import NDArray

from automanual.core.logging_utils import get_logger

logger = get_logger(__name__)


class VideoLoadError(RuntimeError):
    """视频无法打开或读不到时长/尺寸等元数据时抛出。"""


class SeekError(RuntimeError):
    """某个时间点无法 seek 或解码失败时抛出，整次抽帧随之中止。"""


class VideoSource(Protocol):
    """抽帧引擎依赖的最小视频接口；同一时刻只允许一个 seek。"""

    duration: float
    width: int
    height: int

    def seek(self, timestamp: float) -> None:
        """阻塞直到定位完成，失败抛 SeekError。"""

    def render(self, size: Optional[Tuple[int, int]] = None) -> NDArray[np.uint8]:
        """把当前帧渲染为 (H, W, C) uint8 数组；size 为 (width, height)，None 表示原尺寸。"""

    def close(self) -> None:
        """释放解码资源。"""


class OpenCVVideoSource:
    """基于 cv2.VideoCapture 的视频源，按帧号定位以保证时间精度。"""

    def __init__(self, video_path: str | Path) -> None:
        path = Path(video_path)
        if not path.exists():
            raise VideoLoadError(f"视频不存在: {path}")

        capture = cv2.VideoCapture(str(path))
        if not capture.isOpened():
            raise VideoLoadError(f"无法打开视频: {path}")

        fps = float(capture.get(cv2.CAP_PROP_FPS) or 0.0)
        frame_count = int(capture.get(cv2.CAP_PROP_FRAME_COUNT) or 0)
        width = int(capture.get(cv2.CAP_PROP_FRAME_WIDTH) or 0)
        height = int(capture.get(cv2.CAP_PROP_FRAME_HEIGHT) or 0)
        if fps <= 0 or frame_count <= 0 or width <= 0 or height <= 0:
            capture.release()
            raise VideoLoadError(
                f"无法读取视频元数据: {path} (fps={fps}, frames={frame_count}, size={width}x{height})"
            )

        self.path = path
        self.fps = fps
        self.frame_count = frame_count
        self.width = width
        self.height = height
        self.duration = frame_count / fps
        self._capture: Optional[cv2.VideoCapture] = capture
        self._frame: Optional[NDArray[np.uint8]] = None
        logger.debug("打开视频 %s: %.2fs, %dx%d, %.2f fps", path, self.duration, width, height, fps)

    def seek(self, timestamp: float) -> None:
        if self._capture is None:
            raise SeekError("视频源已关闭")
        if not 0.0 <= timestamp < self.duration:
            raise SeekError(f"时间戳越界: {timestamp:.3f}s (duration={self.duration:.3f}s)")

        frame_index = min(int(timestamp * self.fps), self.frame_count - 1)
        self._capture.set(cv2.CAP_PROP_POS_FRAMES, frame_index)
        success, frame = self._capture.read()
        if not success or frame is None:
            raise SeekError(f"无法解码 {timestamp:.3f}s 处的帧 (frame={frame_index})")
        self._frame = frame

    def render(self, size: Optional[Tuple[int, int]] = None) -> NDArray[np.uint8]:
        if self._frame is None:
            raise SeekError("尚未 seek，无可渲染的帧")
        if size is None or size == (self._frame.shape[1], self._frame.shape[0]):
            return self._frame.copy()
        return cv2.resize(self._frame, size, interpolation=cv2.INTER_AREA)

    def close(self) -> None:
        if self._capture is not None:
            self._capture.release()
            self._capture = None
        self._frame = None

    def __enter__(self) -> "OpenCVVideoSource":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()


def open_video(video_path: str | Path) -> VideoSource:
    """默认视频源工厂，测试中可替换为内存实现。"""

    return OpenCVVideoSource(video_path)


def encode_jpeg(frame: NDArray[np.uint8], quality: int = 80) -> bytes:
    """将栅格编码为 JPEG 字节，quality 取 1-100。"""

    success, buffer = cv2.imencode(".jpg", frame, [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)])
    if not success:
        raise ValueError("JPEG 编码失败")
    return buffer.tobytes()
