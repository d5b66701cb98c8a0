"""手册步骤渲染：解码步骤截图，叠加操作框后落盘。"""

from __future__ import annotations

import base64
import binascii
from pathlib import Path
from typing import List

import cv2
import numpy as np
from numpy.typing import NDArray

from automanual.core.config import RenderConfig
from automanual.core.datamodels import Manual, Step
from automanual.core.logging_utils import get_logger

from .annotation import draw_annotation

logger = get_logger(__name__)


def decode_data_url(data_url: str) -> NDArray[np.uint8]:
    """解析 data URL（或裸 base64）为 BGR 栅格。"""

    payload = data_url.split(",", 1)[1] if "," in data_url else data_url
    try:
        raw = base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise ValueError("图像数据不是合法的 base64") from exc
    image = cv2.imdecode(np.frombuffer(raw, dtype=np.uint8), cv2.IMREAD_COLOR)
    if image is None:
        raise ValueError("无法解码图像数据")
    return image


def render_step(step: Step, config: RenderConfig | None = None) -> NDArray[np.uint8]:
    image = decode_data_url(step.image)
    if step.bounding_box is not None:
        draw_annotation(image, step.bounding_box, config)
    return image


def render_manual(manual: Manual, output_dir: str | Path, config: RenderConfig | None = None) -> List[Path]:
    """每个步骤输出一张 step_XX.jpg，返回写出的文件列表。"""

    target = Path(output_dir)
    target.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for index, step in enumerate(manual.steps, start=1):
        path = target / f"step_{index:02d}.jpg"
        if not cv2.imwrite(str(path), render_step(step, config)):
            raise OSError(f"写入失败: {path}")
        written.append(path)
    logger.info("渲染 %d 个步骤到 %s", len(written), target)
    return written
