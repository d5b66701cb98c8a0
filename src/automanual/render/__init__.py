"""标注渲染：操作框绘制与手册步骤图片输出。"""

from .annotation import box_to_pixels, draw_annotation
from .manual import decode_data_url, render_manual, render_step

__all__ = [
    "box_to_pixels",
    "draw_annotation",
    "decode_data_url",
    "render_manual",
    "render_step",
]
