import os

import pytest
from PIL import Image

from mandelview.video.opencv_writer import collect_frames, encode_frames, encode_with_opencv


def _write_frames(directory, count, size=16):
    directory.mkdir()
    for i in range(count):
        Image.new("RGB", (size, size), (i * 20, 0, 0)).save(directory / f"frame_{i}.png")


def test_collect_frames_natural_order(tmp_path):
    frames = tmp_path / "frames"
    _write_frames(frames, 12)
    (frames / "notes.txt").write_text("x")
    names = [os.path.basename(p) for p in collect_frames(str(frames))]
    assert names[:3] == ["frame_0.png", "frame_1.png", "frame_2.png"]
    assert names[-1] == "frame_11.png"
    assert len(names) == 12


def test_encode_requires_frames(tmp_path):
    pytest.importorskip("cv2")
    (tmp_path / "empty").mkdir()
    with pytest.raises(ValueError):
        encode_with_opencv(input_dir=str(tmp_path / "empty"), output_file=str(tmp_path / "o.mp4"), fps=2)


def test_encode_writes_video(tmp_path):
    pytest.importorskip("cv2")
    frames = tmp_path / "frames"
    _write_frames(frames, 3)
    out = tmp_path / "zoom.mp4"
    encode_with_opencv(input_dir=str(frames), output_file=str(out), fps=2)
    assert out.exists() and out.stat().st_size > 0


def test_encode_rejects_mixed_sizes(tmp_path):
    pytest.importorskip("cv2")
    frames = tmp_path / "frames"
    _write_frames(frames, 2)
    Image.new("RGB", (8, 8)).save(frames / "frame_2.png")
    with pytest.raises(ValueError):
        encode_frames(collect_frames(str(frames)), output_file=str(tmp_path / "o.mp4"), fps=2)


def test_encode_returns_frame_count(tmp_path):
    pytest.importorskip("cv2")
    frames = tmp_path / "frames"
    _write_frames(frames, 4)
    assert encode_with_opencv(input_dir=str(frames), output_file=str(tmp_path / "o.mp4"), fps=2) == 4


def test_encode_nothing():
    with pytest.raises(ValueError):
        encode_frames([], output_file="unused.mp4", fps=2)
