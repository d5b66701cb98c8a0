"""操作框绘制：把 0-1000 归一化的 [ymin, xmin, ymax, xmax] 画到栅格上。"""

from __future__ import annotations

from typing import Optional, Sequence

import cv2
import numpy as np
from numpy.typing import NDArray

from automanual.core.config import RenderConfig

BOX_SCALE = 1000.0


def box_to_pixels(box: Sequence[float], width: int, height: int) -> tuple[int, int, int, int]:
    """归一化框 -> 像素坐标 (x1, y1, x2, y2)，并裁剪到画布范围。"""

    if len(box) != 4:
        raise ValueError(f"box 需为 [ymin, xmin, ymax, xmax]: {box!r}")
    ymin, xmin, ymax, xmax = (float(value) for value in box)

    def _scale(value: float, extent: int) -> int:
        return int(min(max(round(value / BOX_SCALE * extent), 0), max(extent - 1, 0)))

    return _scale(xmin, width), _scale(ymin, height), _scale(xmax, width), _scale(ymax, height)


def draw_annotation(
    canvas: Optional[NDArray[np.uint8]],
    box: Sequence[float],
    config: RenderConfig | None = None,
) -> Optional[NDArray[np.uint8]]:
    """原地画出实线框和标签；标签默认在框上方，框贴近顶部时改到下方。

    canvas 为 None 时直接返回，不报错。
    """

    if canvas is None:
        return None
    cfg = config or RenderConfig()
    height, width = canvas.shape[:2]
    x1, y1, x2, y2 = box_to_pixels(box, width, height)

    cv2.rectangle(canvas, (x1, y1), (x2, y2), cfg.color, cfg.thickness, lineType=cv2.LINE_AA)
    label_y = y1 - cfg.label_offset_above if y1 > cfg.top_margin else y2 + cfg.label_offset_below
    cv2.putText(
        canvas,
        cfg.label,
        (x1, label_y),
        cv2.FONT_HERSHEY_SIMPLEX,
        cfg.font_scale,
        cfg.color,
        cfg.font_thickness,
        cv2.LINE_AA,
    )
    return canvas
