import pytest

from bgerrors import InvalidPaletteSize, MissingPalette
from bgpalette import pack_color, quantize_channel, quantize_palette


def test_white_and_black():
    assert pack_color((255, 255, 255)) == (7 << 1) | (7 << 5) | (7 << 9) == 0x0EEE
    assert pack_color((0, 0, 0)) == 0x0000


def test_channel_positions():
    assert pack_color((255, 0, 0)) == 0x000E
    assert pack_color((0, 255, 0)) == 0x00E0
    assert pack_color((0, 0, 255)) == 0x0E00


def test_channel_truncates():
    # floor(c / 256 * 8)
    for value in range(256):
        assert quantize_channel(value) == int(value / 256 * 8)
    assert quantize_channel(31) == 0
    assert quantize_channel(32) == 1
    assert quantize_channel(223) == 6
    assert quantize_channel(224) == 7


def test_channel_out_of_range():
    with pytest.raises(ValueError):
        quantize_channel(256)
    with pytest.raises(ValueError):
        quantize_channel(-1)


def test_quantize_palette_keeps_order(palette16):
    packed = quantize_palette(palette16)
    assert len(packed) == 16
    assert packed[0] == 0x0000
    assert packed[1] == 0x0EEE
    assert packed[2] == 0x000E
    assert packed[14] == (0 << 1) | (1 << 5) | (7 << 9)
    assert packed[15] == (7 << 1) | (6 << 5) | (1 << 9)
    assert all(0 <= value <= 0xFFFF for value in packed)


def test_quantize_palette_wrong_size(palette16):
    with pytest.raises(InvalidPaletteSize):
        quantize_palette(palette16[:4])
    with pytest.raises(InvalidPaletteSize):
        quantize_palette(palette16 + [(0, 0, 0)])


def test_quantize_palette_missing():
    with pytest.raises(MissingPalette):
        quantize_palette(None)
