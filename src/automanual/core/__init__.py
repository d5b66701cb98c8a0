"""核心模块入口，聚合数据模型与配置加载工具供各步骤复用。"""

from .datamodels import ChangePoint, ExtractedFrame, Manual, Step, Translation
from .config import ExtractionConfig, PipelineConfig, RenderConfig, load_config, resolve_policy
from .logging_utils import get_logger, setup_logging
from .paths import resolve_output_root

__all__ = [
    "ChangePoint",
    "ExtractedFrame",
    "Manual",
    "Step",
    "Translation",
    "ExtractionConfig",
    "PipelineConfig",
    "RenderConfig",
    "load_config",
    "resolve_policy",
    "get_logger",
    "setup_logging",
    "resolve_output_root",
]
