"""配置加载工具，集中管理抽帧引擎与标注渲染的参数。"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Dict, Literal, Mapping, MutableMapping, Sequence, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .paths import OUTPUT_ENV_KEY, resolve_output_root

CONFIG_ENV_KEY = "AUTOMANUAL_CONFIG_PATH"

ExtractionMode = Literal["auto", "manual"]


class ExtractionConfig(BaseModel):
    """抽帧策略：auto=场景变化检测，manual=等间隔。

    sensitivity 只保留这一处默认值，各入口统一从这里取。
    """

    mode: ExtractionMode = "auto"
    max_frames: int = Field(default=10, ge=1)
    sensitivity: float = Field(default=0.15, gt=0.0, le=1.0)
    scan_interval: float = Field(default=0.5, gt=0.0)
    min_change_interval: float = Field(default=1.0, ge=0.0)
    min_frames: int = Field(default=3, ge=1)
    scan_width: int = Field(default=160, ge=1)
    scan_height: int = Field(default=90, ge=1)
    jpeg_quality: int = Field(default=80, ge=1, le=100)
    dedup_decimals: int = Field(default=1, ge=0)
    scan_progress_share: float = Field(default=0.3, ge=0.0, le=1.0)


class RenderConfig(BaseModel):
    """标注框样式，颜色为 BGR 顺序（#ef4444）。"""

    color: Tuple[int, int, int] = (68, 68, 239)
    thickness: int = Field(default=4, ge=1)
    label: str = "CLICK HERE"
    font_scale: float = Field(default=0.6, gt=0.0)
    font_thickness: int = Field(default=2, ge=1)
    label_offset_above: int = 5
    label_offset_below: int = 20
    top_margin: int = 20


class PipelineConfig(BaseModel):
    """聚合各阶段配置，并包含输出目录。"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    output_root: Path = Field(default_factory=resolve_output_root)
    raw: Dict[str, Any] = Field(default_factory=dict, description="原始配置字典，便于调试。")

    def model_post_init(self, __context: Any) -> None:  # type: ignore[override]
        if not self.raw:
            self.raw = self.to_raw_dict()

    def to_raw_dict(self) -> Dict[str, Any]:
        """导出基础 dict，供日志输出。"""

        return {
            "extraction": self.extraction.model_dump(),
            "render": self.render.model_dump(),
            "output_root": str(self.output_root),
        }


def resolve_policy(base: ExtractionConfig | None = None, **overrides: Any) -> ExtractionConfig:
    """将调用方传入的选项覆盖到默认配置上，并重新校验。

    值为 None 的选项视为未指定。非法值抛出 pydantic.ValidationError（ValueError 子类）。
    """

    base = base or ExtractionConfig()
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return base
    return ExtractionConfig.model_validate({**base.model_dump(), **updates})


def _default_config_path() -> Path:
    return Path(__file__).resolve().parents[3] / "configs" / "baseline.yaml"


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
        if not isinstance(data, dict):
            raise ValueError(f"配置文件 {path} 内容需为字典")
        return data


ENV_OVERRIDE_MAP: Dict[str, Tuple[Sequence[str], Callable[[str], Any]]] = {
    "AUTOMANUAL_MODE": (("extraction", "mode"), str),
    "AUTOMANUAL_MAX_FRAMES": (("extraction", "max_frames"), int),
    "AUTOMANUAL_SENSITIVITY": (("extraction", "sensitivity"), float),
    "AUTOMANUAL_SCAN_INTERVAL": (("extraction", "scan_interval"), float),
}


def _apply_env_overrides(data: MutableMapping[str, Any], env: Mapping[str, str]) -> None:
    for env_key, (path, caster) in ENV_OVERRIDE_MAP.items():
        if env_key in env:
            _set_nested_value(data, path, caster(env[env_key]))


def _set_nested_value(target: MutableMapping[str, Any], path: Sequence[str], value: Any) -> None:
    cursor: MutableMapping[str, Any] = target
    *parents, last = path
    for key in parents:
        if key not in cursor or not isinstance(cursor[key], MutableMapping):
            cursor[key] = {}
        cursor = cursor[key]  # type: ignore[assignment]
    cursor[last] = value


def load_config(path: str | Path | None = None, *, env: Mapping[str, str] | None = None) -> PipelineConfig:
    """加载配置：优先显式路径，其次环境变量，最后回退默认 baseline。"""

    env_map = env if env is not None else os.environ
    config_path = path or env_map.get(CONFIG_ENV_KEY)
    target_path = Path(config_path).expanduser() if config_path else _default_config_path()
    data = _load_yaml(target_path)
    _apply_env_overrides(data, env_map)

    output_override = env_map.get(OUTPUT_ENV_KEY)
    if output_override:
        data["output_root"] = str(Path(output_override).expanduser().resolve())

    return PipelineConfig.model_validate({**data, "raw": data})
