"""等间隔取点与补点测试。"""

import pytest

from automanual.core.datamodels import ChangePoint
from automanual.extract.fallback import backfill_points, interval_points


def test_interval_points_exclude_endpoints() -> None:
    points = interval_points(12.0, 3)

    assert [p.timestamp for p in points] == [3.0, 6.0, 9.0]
    assert all(p.change_score == 0.0 for p in points)


def test_interval_points_formula() -> None:
    duration, count = 7.3, 4

    timestamps = [p.timestamp for p in interval_points(duration, count)]

    assert timestamps == [i * duration / (count + 1) for i in range(1, count + 1)]


def test_interval_points_zero_and_negative() -> None:
    assert interval_points(10.0, 0) == []
    with pytest.raises(ValueError):
        interval_points(10.0, -1)


def test_backfill_skips_represented_timestamps() -> None:
    detected = [ChangePoint(timestamp=5.0, change_score=0.8)]

    result = backfill_points(detected, 20.0, min_count=3, max_frames=10)

    assert [p.timestamp for p in result] == [5.0, 10.0, 15.0]
    assert result[0].change_score == 0.8


def test_backfill_rounding_granularity() -> None:
    detected = [ChangePoint(timestamp=5.04, change_score=0.8)]

    coarse = backfill_points(detected, 20.0, min_count=3, max_frames=10, decimals=1)
    fine = backfill_points(detected, 20.0, min_count=3, max_frames=10, decimals=2)

    assert len(coarse) == 3
    assert len(fine) == 4


def test_backfill_truncates_to_max_frames() -> None:
    detected = [ChangePoint(timestamp=5.0, change_score=0.8)]

    result = backfill_points(detected, 20.0, min_count=3, max_frames=2)

    assert len(result) == 2
    assert result[0].timestamp == 5.0
    assert result[0].timestamp < result[1].timestamp


def test_backfill_never_displaces_detected_points() -> None:
    detected = [ChangePoint(timestamp=17.0, change_score=0.6)]

    result = backfill_points(detected, 20.0, min_count=3, max_frames=2)

    assert [p.timestamp for p in result] == [pytest.approx(20.0 / 3), 17.0]
    assert result[1].change_score == 0.6
