import numpy as np

from pixelcrush.image_io import (
    decode_image_rgba,
    encode_png,
    is_image_file,
    load_image_rgba,
    save_png_rgba,
)


def test_png_round_trip_with_alpha(tmp_path, noise_image):
    alpha = np.full(noise_image.shape[:2], 255, dtype=np.uint8)
    alpha[:5, :5] = 0
    written = save_png_rgba(tmp_path / "out.jpg", noise_image, alpha)
    assert written.suffix == ".png"
    assert written.exists()
    rgb, a = load_image_rgba(written)
    assert np.array_equal(rgb, noise_image)
    assert np.array_equal(a, alpha)


def test_missing_alpha_is_opaque(noise_image):
    rgb, a = decode_image_rgba(encode_png(noise_image))
    assert np.array_equal(rgb, noise_image)
    assert np.all(a == 255)


def test_is_image_file(tmp_path, noise_image):
    good = save_png_rgba(tmp_path / "a.png", noise_image)
    bad = tmp_path / "b.png"
    bad.write_text("not an image")
    assert is_image_file(good)
    assert not is_image_file(bad)
