"""Dither engine: Floyd-Steinberg and ordered (Bayer)"""

import numpy as np
import pytest

from pixelcrush.assign import palette_rows, resolve_index
from pixelcrush.colour_model import luminance_vec
from pixelcrush.constants import SPREAD_FACTOR
from pixelcrush.core_types import DITHER_MODES, PALETTE_MODES, palette_to_array
from pixelcrush.dithering import bayer_threshold, dither, palette_membership
from pixelcrush.dithering.ordered import bayer_threshold_map

from conftest import BW, GREYS

PAL5 = ["#1a0f5a", "#e939f1", "#349cfc", "#ff9a57", "#ffffff"]


@pytest.mark.parametrize("mode", DITHER_MODES)
@pytest.mark.parametrize("palette_mode", PALETTE_MODES)
def test_output_is_palette_only(mode, palette_mode, gradient_image):
    out = dither(gradient_image, PAL5, mode, palette_mode)
    assert out.shape == gradient_image.shape
    assert out.dtype == np.uint8
    assert palette_membership(out, PAL5)


@pytest.mark.parametrize("mode", DITHER_MODES)
@pytest.mark.parametrize("palette_mode", PALETTE_MODES)
def test_deterministic(mode, palette_mode, noise_image):
    a = dither(noise_image, PAL5, mode, palette_mode)
    b = dither(noise_image, PAL5, mode, palette_mode)
    assert a.tobytes() == b.tobytes()


def test_input_not_modified(noise_image):
    before = noise_image.copy()
    dither(noise_image, BW, "floyd-steinberg", "nearest")
    dither(noise_image, BW, "ordered", "nearest")
    assert np.array_equal(noise_image, before)


@pytest.mark.parametrize("mode", DITHER_MODES)
def test_single_red_pixel_becomes_black(mode):
    # red is 255 from black and ~360.6 from white
    img = np.array([[[255, 0, 0]]], dtype=np.uint8)
    out = dither(img, BW, mode, "nearest")
    assert out[0, 0].tolist() == [0, 0, 0]


def test_luminance_mode_picks_ends():
    img = np.array([[[0, 0, 0], [255, 255, 255]]], dtype=np.uint8)
    out = dither(img, GREYS, "floyd-steinberg", "luminance")
    assert out[0, 0].tolist() == [0, 0, 0]
    assert out[0, 1].tolist() == [255, 255, 255]


def test_single_colour_palette():
    img = np.full((5, 7, 3), 200, dtype=np.uint8)
    for mode in DITHER_MODES:
        for palette_mode in PALETTE_MODES:
            out = dither(img, ["#336699"], mode, palette_mode)
            assert np.all(out == np.array([0x33, 0x66, 0x99], dtype=np.uint8))


def test_empty_palette_is_rejected(noise_image):
    with pytest.raises(ValueError):
        dither(noise_image, [], "floyd-steinberg", "nearest")


def test_unknown_names_are_rejected(noise_image):
    with pytest.raises(ValueError):
        dither(noise_image, BW, "atkinson", "nearest")
    with pytest.raises(ValueError):
        dither(noise_image, BW, "ordered", "closest")


def test_wrong_dtype_is_rejected():
    with pytest.raises(TypeError):
        dither(np.zeros((4, 4, 3), dtype=np.float32), BW)


def test_empty_buffer_passes_through():
    img = np.zeros((0, 5, 3), dtype=np.uint8)
    for mode in DITHER_MODES:
        assert dither(img, BW, mode, "nearest").shape == (0, 5, 3)


class TestFloydSteinberg:
    def test_flat_grey_keeps_average(self):
        img = np.full((32, 32, 3), 128, dtype=np.uint8)
        out = dither(img, BW, "floyd-steinberg", "nearest")
        mean_luma = float(luminance_vec(out).mean())
        assert abs(mean_luma - 128.0) < 10.0
        # both palette entries appear in a mixed pattern
        white_share = float(np.mean(out[..., 0] == 255))
        assert 0.4 < white_share < 0.6

    def test_exact_palette_colours_have_no_error(self):
        img = np.zeros((6, 6, 3), dtype=np.uint8)
        img[::2] = 255
        out = dither(img, BW, "floyd-steinberg", "nearest")
        assert np.array_equal(out, img)

    def test_depends_on_scan_order(self, noise_image):
        direct = dither(noise_image, BW, "floyd-steinberg", "nearest")
        mirrored = dither(noise_image[:, ::-1], BW, "floyd-steinberg", "nearest")[:, ::-1]
        assert not np.array_equal(direct, mirrored)


class TestOrdered:
    def test_threshold_range(self):
        values = {bayer_threshold(x, y) for y in range(4) for x in range(4)}
        assert len(values) == 16
        assert min(values) == -0.5
        assert max(values) == 0.4375

    def test_threshold_map_tiles(self):
        tm = bayer_threshold_map(9, 10)
        for y in range(9):
            for x in range(10):
                assert tm[y, x] == bayer_threshold(x, y)

    def test_flat_image_repeats_every_four_pixels(self):
        img = np.full((12, 12, 3), 100, dtype=np.uint8)
        out = dither(img, GREYS, "ordered", "nearest")
        assert np.array_equal(out[:4, :4], out[4:8, 4:8])
        assert np.array_equal(out[:4, :4], out[8:12, :4])

    @pytest.mark.parametrize("palette_mode", PALETTE_MODES)
    def test_processing_order_does_not_matter(self, palette_mode, noise_image):
        pal_arr = palette_to_array(PAL5)
        pal = palette_rows(pal_arr)
        h, w = noise_image.shape[:2]
        out = dither(noise_image, pal_arr, "ordered", palette_mode)

        coords = [(x, y) for y in range(h) for x in range(w)]
        order = np.random.default_rng(3).permutation(len(coords))
        for k in order[:400]:
            x, y = coords[int(k)]
            offset = bayer_threshold(x, y) * SPREAD_FACTOR
            perturbed = [
                min(255.0, max(0.0, float(v) + offset)) for v in noise_image[y, x]
            ]
            j = resolve_index(perturbed, x, y, w, h, pal, palette_mode)
            assert out[y, x].tolist() == list(pal[j])

    def test_does_not_spread_error(self):
        img = np.full((4, 8, 3), 255, dtype=np.uint8)
        img[:, 0] = 0
        out = dither(img, BW, "ordered", "nearest")
        # column 0 is black, the rest stays white: nothing leaks sideways
        assert np.all(out[:, 0] == 0)
        assert np.all(out[:, 1:] == 255)
