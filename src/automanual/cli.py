"""AutoManual Typer CLI，便于在命令行抽帧与渲染标注。"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import cv2
import typer

from automanual.core import ExtractedFrame, Manual, PipelineConfig, load_config, setup_logging
from automanual.core.logging_utils import get_logger
from automanual.extract import SeekError, VideoLoadError, extract_frames
from automanual.render import draw_annotation, render_manual

app = typer.Typer(help="AutoManual 开发 CLI")
logger = get_logger("cli")


@app.callback()
def main() -> None:
    """AutoManual 顶层 CLI，占位以展示子命令列表。"""

    return None


def _resolve_config(config_path: Optional[Path]) -> PipelineConfig:
    return load_config(config_path) if config_path else load_config()


def _write_frames(frames: List[ExtractedFrame], output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    manifest = []
    for index, frame in enumerate(frames, start=1):
        image_path = output_dir / f"frame_{index:02d}.jpg"
        image_path.write_bytes(frame.image)
        manifest.append(
            {
                "timestamp": round(frame.timestamp, 6),
                "change_score": round(frame.change_score, 6),
                "file": image_path.name,
            }
        )
    manifest_path = output_dir / "frames.json"
    manifest_path.write_text(json.dumps(manifest, ensure_ascii=False, indent=2), encoding="utf-8")
    return manifest_path


@app.command("extract")
def extract_cmd(
    video: Path = typer.Argument(..., exists=True, resolve_path=True, help="操作视频路径"),
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help="auto=场景变化检测，manual=等间隔"),
    max_frames: Optional[int] = typer.Option(None, "--max-frames", "-n", help="最大帧数"),
    sensitivity: Optional[float] = typer.Option(None, "--sensitivity", "-s", help="变化检测灵敏度 (0,1]"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="输出目录，默认 <output_root>/<视频名>"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="自定义配置文件"),
    log_level: str = typer.Option("INFO", "--log-level", help="日志级别"),
) -> None:
    """抽取关键帧，输出 frame_XX.jpg 与 frames.json。"""

    setup_logging(log_level)
    cfg = _resolve_config(config_path)

    def on_progress(percent: float) -> None:
        logger.debug("进度 %.1f%%", percent)

    try:
        frames = extract_frames(
            video,
            cfg.extraction,
            mode=mode,  # type: ignore[arg-type]
            max_frames=max_frames,
            sensitivity=sensitivity,
            progress_callback=on_progress,
        )
    except (VideoLoadError, SeekError) as exc:
        typer.echo(f"抽帧失败：{exc}", err=True)
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        typer.echo(f"参数错误：{exc}", err=True)
        raise typer.Exit(code=2) from exc

    target = output_dir or (cfg.output_root / video.stem)
    manifest_path = _write_frames(frames, target)
    typer.echo(f"抽取 {len(frames)} 帧，清单输出到 {manifest_path}")


@app.command("annotate")
def annotate_cmd(
    image: Path = typer.Argument(..., exists=True, resolve_path=True, help="待标注图片"),
    box: List[float] = typer.Argument(..., help="ymin xmin ymax xmax（0-1000）"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="输出路径，默认 <原名>_annotated.jpg"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="自定义配置文件"),
) -> None:
    """在单张图片上画出操作框。"""

    if len(box) != 4:
        typer.echo("box 需要 4 个数值：ymin xmin ymax xmax", err=True)
        raise typer.Exit(code=2)

    cfg = _resolve_config(config_path)
    canvas = cv2.imread(str(image), cv2.IMREAD_COLOR)
    if canvas is None:
        typer.echo(f"无法读取图片：{image}", err=True)
        raise typer.Exit(code=1)

    draw_annotation(canvas, box, cfg.render)
    output = output or image.with_name(f"{image.stem}_annotated.jpg")
    output.parent.mkdir(parents=True, exist_ok=True)
    try:
        written = cv2.imwrite(str(output), canvas)
    except cv2.error:  # 不支持的扩展名在新版 OpenCV 中直接抛异常
        written = False
    if not written:
        typer.echo(f"写入失败：{output}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"标注输出到 {output}")


@app.command("render-manual")
def render_manual_cmd(
    manual_path: Path = typer.Argument(..., exists=True, resolve_path=True, help="手册 JSON（title + steps）"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="输出目录"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="自定义配置文件"),
    log_level: str = typer.Option("INFO", "--log-level", help="日志级别"),
) -> None:
    """把手册中每个步骤的截图叠加操作框后输出。"""

    setup_logging(log_level)
    cfg = _resolve_config(config_path)
    try:
        manual = Manual.from_dict(json.loads(manual_path.read_text(encoding="utf-8")))
    except (KeyError, ValueError) as exc:
        typer.echo(f"手册 JSON 格式错误：{exc}", err=True)
        raise typer.Exit(code=2) from exc

    target = output_dir or (cfg.output_root / manual_path.stem)
    written = render_manual(manual, target, cfg.render)
    typer.echo(f"渲染 {len(written)} 个步骤，输出到 {target}")


if __name__ == "__main__":  # pragma: no cover
    app()
