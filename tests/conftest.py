import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


BW = ["#000000", "#ffffff"]
GREYS = ["#000000", "#808080", "#ffffff"]


@pytest.fixture
def gradient_image():
    """48x32 horizontal red ramp with a vertical blue ramp."""
    h, w = 32, 48
    img = np.zeros((h, w, 3), dtype=np.uint8)
    img[..., 0] = np.linspace(0, 255, w, dtype=np.float64)[None, :].round().astype(np.uint8)
    img[..., 2] = np.linspace(0, 255, h, dtype=np.float64)[:, None].round().astype(np.uint8)
    img[..., 1] = 90
    return img


@pytest.fixture
def noise_image():
    rng = np.random.default_rng(7)
    return rng.integers(0, 256, size=(40, 60, 3), dtype=np.uint8)


@pytest.fixture
def swatch_image():
    """Four flat quadrants: red, green, blue, yellow."""
    img = np.zeros((80, 80, 3), dtype=np.uint8)
    img[:40, :40] = (220, 20, 30)
    img[:40, 40:] = (20, 200, 40)
    img[40:, :40] = (30, 40, 210)
    img[40:, 40:] = (240, 230, 20)
    return img
