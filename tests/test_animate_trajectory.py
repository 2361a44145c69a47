import os

import numpy as np
import pytest
from PIL import Image

import animate_trajectory
import render_frames
from animate_trajectory import main, output_path, parseargs, run


def cli(input_dir, output_dir, *extra):
    return ["--filekey", "line", "-i", str(input_dir), "-o", str(output_dir), *extra]


def test_defaults():
    args = parseargs([])
    assert args.frames == 0
    assert args.secs == 40
    assert args.initial_pitch == pytest.approx(0.5234)
    assert args.skip == 40
    assert args.filekey == "walker"
    assert args.output_dir == "data"
    assert args.input_dir == "input"


def test_invalid_skip_rejected():
    with pytest.raises(SystemExit):
        parseargs(["--skip", "0"])


def test_output_path():
    assert output_path("data", "walker") == os.path.join("data", "walker_traj.gif")


def test_200_rows_give_one_frame(line_200, input_dir, tmp_path, monkeypatch):
    seen = []
    real_render = animate_trajectory.render_frame

    def spy(fig, projections, camera, t0, title):
        seen.append((projections, camera, t0))
        return real_render(fig, projections, camera, t0, title)

    monkeypatch.setattr(animate_trajectory, "render_frame", spy)

    out = tmp_path / "out"
    path = run(parseargs(cli(input_dir, out)))

    assert path == os.path.join(str(out), "line_traj.gif")
    with Image.open(path) as im:
        assert im.n_frames == 1
        assert im.size == (render_frames.CANVAS_W, render_frames.CANVAS_H)

    assert len(seen) == 1
    projections, camera, t0 = seen[0]
    assert render_frames.annotation_lines(t0)[1] == "time: 0.00"
    xs = [p[0] for p in projections.body]
    assert len(xs) == 160
    assert min(xs) == 0.0 and max(xs) == 159.0
    # wall chosen before the first camera step, chart drawn after it
    assert all(p[0] == -1.0 for p in projections.yz)
    assert camera.yaw == pytest.approx(1.048)


def test_frame_cap_reduces_frames(make_line_csv, input_dir, tmp_path):
    make_line_csv("line", 300)

    full = run(parseargs(cli(input_dir, tmp_path / "full")))
    capped = run(parseargs(cli(input_dir, tmp_path / "capped", "--frames", "250")))

    with Image.open(full) as im:
        assert im.n_frames == 4
    with Image.open(capped) as im:
        assert im.n_frames == 3


def test_short_table_gives_empty_gif(make_line_csv, input_dir, tmp_path):
    make_line_csv("line", 100)
    path = run(parseargs(cli(input_dir, tmp_path / "out")))

    with open(path, "rb") as f:
        data = f.read()
    assert data.startswith(b"GIF89a")
    assert data.endswith(b";")
    assert int.from_bytes(data[6:8], "little") == render_frames.CANVAS_W
    assert int.from_bytes(data[8:10], "little") == render_frames.CANVAS_H


def test_render_failure_closes_output(make_line_csv, input_dir, tmp_path, monkeypatch):
    make_line_csv("line", 300)
    sinks = []

    class RecordingSink(animate_trajectory.GifSink):
        def __init__(self, *a, **kw):
            super().__init__(*a, **kw)
            sinks.append(self)

    calls = []

    def flaky_render(fig, projections, camera, t0, title):
        calls.append(t0)
        if len(calls) == 3:
            raise RuntimeError("drawing failed")
        return np.zeros((render_frames.CANVAS_H, render_frames.CANVAS_W, 3), dtype=np.uint8)

    monkeypatch.setattr(animate_trajectory, "GifSink", RecordingSink)
    monkeypatch.setattr(animate_trajectory, "render_frame", flaky_render)

    with pytest.raises(RuntimeError, match="drawing failed"):
        run(parseargs(cli(input_dir, tmp_path / "out")))

    sink = sinks[0]
    assert sink.f.closed
    assert sink.frame_count == 2
    assert not sink.finished
    # truncated output: frames so far, no trailer
    with open(sink.path, "rb") as f:
        data = f.read()
    assert data.startswith(b"GIF89a")
    assert not data.endswith(b";")


def test_main_exit_code_on_failure(input_dir, tmp_path, monkeypatch, capsys):
    (input_dir / "line.csv").write_text("a,b\n1,2\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main(cli(input_dir, tmp_path / "out"))

    assert exc.value.code == 1
    assert "Application error:" in capsys.readouterr().err


def test_main_success(line_200, input_dir, tmp_path):
    assert main(cli(input_dir, tmp_path / "out")) == 0
    assert os.path.exists(os.path.join(str(tmp_path / "out"), "line_traj.gif"))
