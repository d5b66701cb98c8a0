"""栅格差异测试。"""

import numpy as np
import pytest

from automanual.extract.differ import frame_difference


def test_identical_frames_score_zero() -> None:
    frame = np.random.default_rng(0).integers(0, 256, size=(90, 160, 3), dtype=np.uint8)

    assert frame_difference(frame, frame.copy()) == 0.0


def test_black_vs_white_scores_one() -> None:
    black = np.zeros((90, 160, 3), dtype=np.uint8)
    white = np.full((90, 160, 3), 255, dtype=np.uint8)

    assert frame_difference(black, white) == pytest.approx(1.0)
    assert frame_difference(white, black) == pytest.approx(1.0)


def test_half_changed_frame() -> None:
    before = np.zeros((10, 10, 3), dtype=np.uint8)
    after = before.copy()
    after[:5] = 255

    assert frame_difference(before, after) == pytest.approx(0.5)


def test_alpha_channel_ignored() -> None:
    a = np.zeros((4, 4, 4), dtype=np.uint8)
    b = a.copy()
    b[..., 3] = 255

    assert frame_difference(a, b) == 0.0


def test_mismatched_shapes_rejected() -> None:
    with pytest.raises(ValueError):
        frame_difference(np.zeros((90, 160, 3), dtype=np.uint8), np.zeros((90, 120, 3), dtype=np.uint8))
