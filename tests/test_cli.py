"""CLI 行为测试。"""

import json

import cv2
import numpy as np
from typer.testing import CliRunner

from automanual.cli import app
from automanual.core import ExtractedFrame, Manual, PipelineConfig, Step, Translation
from automanual.extract import VideoLoadError, encode_jpeg

runner = CliRunner()


def test_extract_cli(monkeypatch, tmp_path):
    video = tmp_path / "demo.mp4"
    video.write_bytes(b"fake")
    output = tmp_path / "out"
    calls = {}

    def fake_extract(path, config, **kwargs):
        calls.update(kwargs, path=path, config=config)
        return [
            ExtractedFrame(timestamp=3.0, image=b"\xff\xd8one", change_score=0.0),
            ExtractedFrame(timestamp=6.0, image=b"\xff\xd8two", change_score=0.0),
        ]

    monkeypatch.setattr("automanual.cli.load_config", lambda *_, **__: PipelineConfig())
    monkeypatch.setattr("automanual.cli.extract_frames", fake_extract)

    result = runner.invoke(
        app,
        ["extract", str(video), "--mode", "manual", "--max-frames", "2", "--output-dir", str(output)],
    )

    assert result.exit_code == 0
    assert calls["mode"] == "manual"
    assert calls["max_frames"] == 2
    assert calls["sensitivity"] is None
    data = json.loads((output / "frames.json").read_text())
    assert [entry["timestamp"] for entry in data] == [3.0, 6.0]
    assert (output / "frame_02.jpg").read_bytes() == b"\xff\xd8two"


def test_extract_cli_load_error(monkeypatch, tmp_path):
    video = tmp_path / "demo.mp4"
    video.write_bytes(b"fake")

    def broken(*_args, **_kwargs):
        raise VideoLoadError("无法打开视频")

    monkeypatch.setattr("automanual.cli.extract_frames", broken)

    result = runner.invoke(app, ["extract", str(video), "--output-dir", str(tmp_path / "out")])

    assert result.exit_code == 1
    assert not (tmp_path / "out").exists()


def test_annotate_cli(tmp_path):
    image = tmp_path / "shot.png"
    cv2.imwrite(str(image), np.zeros((100, 200, 3), dtype=np.uint8))
    output = tmp_path / "annotated.png"

    result = runner.invoke(app, ["annotate", str(image), "400", "100", "800", "500", "--output", str(output)])

    assert result.exit_code == 0
    assert cv2.imread(str(output))[40, 60, 2] > 200


def test_annotate_cli_write_failure(tmp_path):
    image = tmp_path / "shot.png"
    cv2.imwrite(str(image), np.zeros((100, 200, 3), dtype=np.uint8))
    output = tmp_path / "annotated.unknownext"

    result = runner.invoke(app, ["annotate", str(image), "400", "100", "800", "500", "--output", str(output)])

    assert result.exit_code == 1
    assert "标注输出到" not in result.output
    assert not output.exists()


def test_render_manual_cli(tmp_path):
    frame = ExtractedFrame(timestamp=1.0, image=encode_jpeg(np.zeros((50, 80, 3), dtype=np.uint8)), change_score=0.0)
    manual = Manual(
        title="demo",
        steps=[Step(id="a", timestamp=1.0, translations={"en": Translation("t", "d")}, image=frame.data_url())],
    )
    manual_path = tmp_path / "manual.json"
    manual_path.write_text(json.dumps(manual.to_dict()))

    result = runner.invoke(app, ["render-manual", str(manual_path), "--output-dir", str(tmp_path / "steps")])

    assert result.exit_code == 0
    assert (tmp_path / "steps" / "step_01.jpg").exists()
