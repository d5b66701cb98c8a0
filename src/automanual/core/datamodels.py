"""核心数据结构定义，覆盖变化点、抽帧结果与手册步骤。"""

from __future__ import annotations

import base64
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

BoundingBox = Tuple[float, float, float, float]

JPEG_DATA_URL_PREFIX = "data:image/jpeg;base64,"


@dataclass(frozen=True, slots=True)
class ChangePoint:
    """场景变化候选点；fallback 生成的点 change_score 恒为 0。"""

    timestamp: float
    change_score: float


@dataclass(slots=True)
class ExtractedFrame:
    """引擎输出单元：时间戳、JPEG 编码图像与变化得分。

    manual 模式下 change_score 为哨兵值 0，不代表“无变化”。
    """

    timestamp: float
    image: bytes
    change_score: float

    def data_url(self) -> str:
        """转成 data URL，便于直接交给下游分析服务。"""

        return JPEG_DATA_URL_PREFIX + base64.b64encode(self.image).decode("ascii")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "change_score": self.change_score,
            "data_url": self.data_url(),
        }


@dataclass(slots=True)
class Translation:
    title: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "description": self.description}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Translation":
        return cls(title=str(data["title"]), description=str(data["description"]))


def _parse_box(raw: Any) -> Optional[BoundingBox]:
    if raw is None:
        return None
    if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)) or len(raw) != 4:
        raise ValueError(f"bounding box 需为 4 个数值 [ymin, xmin, ymax, xmax]: {raw!r}")
    ymin, xmin, ymax, xmax = (float(value) for value in raw)
    return (ymin, xmin, ymax, xmax)


@dataclass(slots=True)
class Step:
    """手册中的一个步骤：多语言文本 + 截图 + 可选操作框（0-1000 归一化）。"""

    id: str
    timestamp: float
    translations: Dict[str, Translation]
    image: str
    bounding_box: Optional[BoundingBox] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "timestamp": self.timestamp,
            "translations": {lang: item.to_dict() for lang, item in self.translations.items()},
            "image": self.image,
        }
        if self.bounding_box is not None:
            payload["bounding_box"] = list(self.bounding_box)
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Step":
        return cls(
            id=str(data["id"]),
            timestamp=float(data["timestamp"]),
            translations={
                str(lang): Translation.from_dict(item) for lang, item in dict(data.get("translations", {})).items()
            },
            image=str(data["image"]),
            bounding_box=_parse_box(data.get("bounding_box")),
        )

    @classmethod
    def from_analysis(
        cls,
        frame: ExtractedFrame,
        response: Mapping[str, Any],
        *,
        step_id: Optional[str] = None,
    ) -> "Step":
        """由抽帧结果与分析服务响应（translations + 可选 box_2d）组装步骤。"""

        translations = {
            str(lang): Translation.from_dict(item) for lang, item in dict(response.get("translations", {})).items()
        }
        return cls(
            id=step_id or uuid.uuid4().hex[:9],
            timestamp=frame.timestamp,
            translations=translations,
            image=frame.data_url(),
            bounding_box=_parse_box(response.get("box_2d")),
        )


@dataclass(slots=True)
class Manual:
    title: str
    steps: List[Step] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "steps": [step.to_dict() for step in self.steps]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Manual":
        steps = data.get("steps", [])
        if not isinstance(steps, list):
            raise ValueError("steps 需为数组")
        return cls(title=str(data.get("title", "")), steps=[Step.from_dict(entry) for entry in steps])
