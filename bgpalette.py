#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from bgerrors import InvalidPaletteSize, MissingPalette

# --- Palette Constants ---
PALETTE_SIZE = 16
CHANNEL_BITS = 3
RED_SHIFT = 1
GREEN_SHIFT = 5
BLUE_SHIFT = 9


def quantize_channel(value_0_255):
    # Truncates, floor(c / 256 * 8). No rounding.
    if not 0 <= value_0_255 <= 255:
        raise ValueError(f"Color channel value {value_0_255} out of range 0-255.")
    return int(value_0_255) >> (8 - CHANNEL_BITS)


def pack_color(rgb_tuple_0_255):
    r, g, b = rgb_tuple_0_255
    red = quantize_channel(r)
    green = quantize_channel(g)
    blue = quantize_channel(b)
    return (red << RED_SHIFT) | (green << GREEN_SHIFT) | (blue << BLUE_SHIFT)


def quantize_palette(palette):
    """
    Converts 16 8-bit (r, g, b) entries to 16-bit color words, 3 bits per
    channel: red in bits 1-3, green in bits 5-7, blue in bits 9-11.
    """
    if palette is None:
        raise MissingPalette("No palette found.")
    if len(palette) != PALETTE_SIZE:
        raise InvalidPaletteSize(f"Palette doesn't contain {PALETTE_SIZE} entries (found {len(palette)}).")
    return [pack_color(rgb) for rgb in palette]
