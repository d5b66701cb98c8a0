"""共享测试工具：内存视频源，按时间返回纯色帧。"""

from typing import Callable, List, Optional, Tuple

import numpy as np
import pytest

from automanual.extract.source import SeekError

Color = Tuple[int, int, int]


class FakeVideoSource:
    def __init__(
        self,
        duration: float,
        color_at: Callable[[float], Color],
        *,
        width: int = 64,
        height: int = 36,
        fail_at: Optional[float] = None,
    ) -> None:
        self.duration = duration
        self.width = width
        self.height = height
        self.color_at = color_at
        self.fail_at = fail_at
        self.seeks: List[float] = []
        self.render_sizes: List[Optional[Tuple[int, int]]] = []
        self.closed = False
        self._timestamp: Optional[float] = None

    def seek(self, timestamp: float) -> None:
        if not 0.0 <= timestamp < self.duration:
            raise SeekError(f"out of range: {timestamp}")
        if self.fail_at is not None and abs(timestamp - self.fail_at) < 1e-9:
            raise SeekError(f"decode failed at {timestamp}")
        self.seeks.append(timestamp)
        self._timestamp = timestamp

    def render(self, size: Optional[Tuple[int, int]] = None) -> np.ndarray:
        assert self._timestamp is not None
        self.render_sizes.append(size)
        width, height = size or (self.width, self.height)
        return np.full((height, width, 3), self.color_at(self._timestamp), dtype=np.uint8)

    def close(self) -> None:
        self.closed = True


def two_tone(switch_at: float, before: Color = (0, 0, 0), after: Color = (255, 255, 255)) -> Callable[[float], Color]:
    return lambda t: before if t < switch_at else after


@pytest.fixture
def make_source() -> Callable[..., FakeVideoSource]:
    return FakeVideoSource


@pytest.fixture
def tones() -> Callable[..., Callable[[float], Color]]:
    return two_tone
