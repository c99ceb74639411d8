"""Colour model: hex parsing, distances, luminance, lerp"""

import math

import numpy as np
import pytest

from pixelcrush.colour_model import (
    distance,
    lerp,
    lerp_vec,
    luminance,
    luminance_vec,
    perceptual_distance,
    saturation_brightness,
    squared_distance_to_palette,
)
from pixelcrush.core_types import (
    palette_to_array,
    parse_hex,
    rgb_to_hex,
    round_half_up,
)


class TestParseHex:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("#ff0000", (255, 0, 0)),
            ("00FF7f", (0, 255, 127)),
            ("#1A0F5A", (26, 15, 90)),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_hex(text) == expected

    @pytest.mark.parametrize(
        "text", ["", "#fff", "#ff00000", "zz0000", "##ff0000", " #ff0000", "#ff0000\n"]
    )
    def test_malformed_is_black(self, text):
        assert parse_hex(text) == (0, 0, 0)

    def test_non_string_is_black(self):
        assert parse_hex(None) == (0, 0, 0)  # type: ignore[arg-type]

    def test_hex_round_trip_format(self):
        assert rgb_to_hex((26, 15, 90)) == "#1a0f5a"


class TestDistances:
    def test_euclidean(self):
        assert distance((255, 0, 0), (0, 0, 0)) == pytest.approx(255.0)
        assert distance((255, 0, 0), (255, 255, 255)) == pytest.approx(math.sqrt(2) * 255)

    def test_redmean_matches_formula(self):
        a, b = (200, 30, 10), (50, 90, 240)
        r_mean = (200 + 50) / 2
        expected = math.sqrt(
            (2 + r_mean / 256) * 150 ** 2
            + 4 * 60 ** 2
            + (2 + (255 - r_mean) / 256) * 230 ** 2
        )
        assert perceptual_distance(a, b) == pytest.approx(expected)
        assert perceptual_distance(b, a) == pytest.approx(expected)

    def test_zero_for_identical(self):
        assert distance((1, 2, 3), (1, 2, 3)) == 0.0
        assert perceptual_distance((1, 2, 3), (1, 2, 3)) == 0.0

    def test_vectorized_distances(self):
        pal = palette_to_array(["#000000", "#ffffff"])
        d2 = squared_distance_to_palette(np.array([[255, 0, 0]]), pal)
        assert d2.shape == (1, 2)
        assert math.sqrt(d2[0, 0]) == pytest.approx(distance((255, 0, 0), (0, 0, 0)))
        assert math.sqrt(d2[0, 1]) == pytest.approx(distance((255, 0, 0), (255, 255, 255)))


class TestLuminanceAndLerp:
    def test_luminance_range(self):
        assert luminance((0, 0, 0)) == 0.0
        assert luminance((255, 255, 255)) == pytest.approx(255.0)
        assert luminance((255, 0, 0)) == pytest.approx(0.299 * 255)

    def test_luminance_vec_matches_scalar(self):
        rows = np.array([[12, 200, 45], [255, 255, 255], [0, 0, 0]], dtype=np.uint8)
        got = luminance_vec(rows)
        for row, value in zip(rows.tolist(), got.tolist()):
            assert value == luminance(row)

    def test_lerp_rounds_half_up(self):
        assert lerp((0, 0, 0), (1, 3, 5), 0.5) == (1, 2, 3)
        assert lerp((10, 20, 30), (20, 40, 60), 0.0) == (10, 20, 30)
        assert lerp((10, 20, 30), (20, 40, 60), 1.0) == (20, 40, 60)

    def test_lerp_vec_matches_scalar(self):
        a = np.array([[0, 0, 0], [255, 10, 3]], dtype=np.float64)
        b = np.array([[1, 3, 5], [0, 11, 200]], dtype=np.float64)
        got = lerp_vec(a, b, 0.5)
        assert tuple(got[0].astype(int)) == lerp(a[0], b[0], 0.5)
        assert tuple(got[1].astype(int)) == lerp(a[1], b[1], 0.5)

    def test_round_half_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(-0.5) == 0
        assert round_half_up(1.49) == 1

    def test_saturation_brightness(self):
        assert saturation_brightness((0, 0, 0)) == (0.0, 0.0)
        sat, bright = saturation_brightness((255, 0, 0))
        assert sat == 1.0 and bright == 1.0
        sat, bright = saturation_brightness((128, 128, 128))
        assert sat == 0.0
        assert bright == pytest.approx(128 / 255)


def test_palette_to_array_accepts_mixed_inputs():
    pal = palette_to_array(["#ff0000", (0, 255, 0), "oops"])
    assert pal.dtype == np.uint8
    assert pal.tolist() == [[255, 0, 0], [0, 255, 0], [0, 0, 0]]
