import numpy as np
import pytest
from PIL import Image

from bgsource import PIXEL_FORMAT_4BPP_INDEXED, PixelSource

# 16 distinct colors, none of them a grey ramp
TEST_PALETTE = [
    (0, 0, 0), (255, 255, 255), (255, 0, 0), (0, 255, 0),
    (0, 0, 255), (255, 255, 0), (0, 255, 255), (255, 0, 255),
    (128, 64, 32), (32, 64, 128), (64, 128, 32), (200, 100, 50),
    (50, 100, 200), (100, 200, 50), (31, 32, 224), (224, 223, 33),
]


@pytest.fixture
def palette16():
    return list(TEST_PALETTE)


@pytest.fixture
def make_source():
    def _make(indices, palette=TEST_PALETTE, pixel_format=PIXEL_FORMAT_4BPP_INDEXED):
        return PixelSource(pixel_format, np.asarray(indices, dtype=np.uint8), palette)
    return _make


@pytest.fixture
def write_4bpp_png(tmp_path):
    def _write(indices, name="image.png", palette=TEST_PALETTE):
        indices = np.asarray(indices, dtype=np.uint8)
        height, width = indices.shape
        image = Image.new("P", (width, height))
        image.putdata(indices.flatten().tolist())
        image.putpalette([c for rgb in palette for c in rgb])
        path = tmp_path / name
        image.save(path, bits=4)
        return str(path)
    return _write


def tile_of(value, width=8, height=8):
    return np.full((height, width), value, dtype=np.uint8)


@pytest.fixture
def solid_tile():
    return tile_of
