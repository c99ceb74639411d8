"""Command line runs on real files"""

import numpy as np
from PIL import Image

import crush
from pixelcrush.constants import DEFAULT_PALETTE
from pixelcrush.dithering import palette_membership
from pixelcrush.image_io import load_image_rgba, save_png_rgba


def _write(path, seed, size=(24, 16)):
    rng = np.random.default_rng(seed)
    rgb = rng.integers(0, 256, size=(size[1], size[0], 3), dtype=np.uint8)
    return save_png_rgba(path, rgb)


def test_single_file(tmp_path, capsys):
    src = _write(tmp_path / "cat.png", 1)
    assert crush.main([str(src), "--jobs", "1", "--pixel-size", "50"]) == 0
    out_path = tmp_path / "cat_crushed.png"
    rgb, alpha = load_image_rgba(out_path)
    assert rgb.shape == (16, 24, 3)
    assert np.all(alpha == 255)
    assert palette_membership(rgb, DEFAULT_PALETTE)
    assert "Colours used:" in capsys.readouterr().out


def test_named_palette_and_outdir(tmp_path):
    src = _write(tmp_path / "dog.png", 2)
    outdir = tmp_path / "out"
    code = crush.main(
        [str(src), "--outdir", str(outdir), "--palette", "gameboy", "--algorithm", "ordered"]
    )
    assert code == 0
    rgb, _ = load_image_rgba(outdir / "dog_crushed.png")
    assert palette_membership(rgb, ["#0f380f", "#306230", "#8bac0f", "#9bbc0f"])


def test_folder_with_extract_and_gif(tmp_path):
    _write(tmp_path / "a.png", 3)
    _write(tmp_path / "b.png", 4)
    gif = tmp_path / "anim.gif"
    code = crush.main(
        [str(tmp_path), "--jobs", "1", "--extract", "3", "--gif", str(gif), "--delay", "150"]
    )
    assert code == 0
    assert (tmp_path / "a_crushed.png").exists()
    assert (tmp_path / "b_crushed.png").exists()
    with Image.open(gif) as im:
        assert im.n_frames == 2
        assert im.info["duration"] == 150


def test_collect_inputs_skips_outputs(tmp_path):
    _write(tmp_path / "b.png", 5)
    _write(tmp_path / "a.png", 6)
    _write(tmp_path / "a_crushed.png", 7)
    (tmp_path / "notes.txt").write_text("x")
    assert [p.name for p in crush.collect_inputs(tmp_path)] == ["a.png", "b.png"]


def test_missing_input(tmp_path):
    assert crush.main([str(tmp_path / "nope.png")]) == 2


def test_bad_palette(tmp_path):
    src = _write(tmp_path / "x.png", 8)
    assert crush.main([str(src), "--palette", " , "]) == 2


def test_gif_target_is_not_an_input(tmp_path):
    _write(tmp_path / "a.png", 9)
    _write(tmp_path / "b.png", 10)
    gif = tmp_path / "anim.gif"
    args = [str(tmp_path), "--jobs", "1", "--gif", str(gif)]
    assert crush.main(args) == 0
    assert [p.name for p in crush.collect_inputs(tmp_path, skip=gif)] == ["a.png", "b.png"]
    # a second run must not pick up the GIF it wrote last time
    assert crush.main(args) == 0
    assert not (tmp_path / "anim_crushed.png").exists()
    with Image.open(gif) as im:
        assert im.n_frames == 2


def test_failure_is_reported_after_its_own_output(tmp_path, capsys):
    bad = tmp_path / "bad.png"
    bad.write_text("not an image")
    settings = crush.make_settings()
    text, frame, failure = crush._process_one_captured(bad, None, settings, None, False)
    assert frame is None
    assert "=== bad.png ===" in text
    assert failure.startswith("bad.png:")
    assert capsys.readouterr().err == ""

    _write(tmp_path / "good.png", 11)
    assert crush.main([str(tmp_path), "--jobs", "1"]) == 1
    captured = capsys.readouterr()
    assert "[error] bad.png:" in captured.err
    assert "=== good.png ===" in captured.out
