#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os
import numpy as np
from PIL import Image, UnidentifiedImageError

from bgerrors import MissingInputFile, TileSizeMismatch, UnsupportedPixelFormat

# --- Pixel Format Tags ---
PIXEL_FORMAT_4BPP_INDEXED = "4bpp-indexed"
MAX_PALETTE_INDEX = 15

# Pillow decoder raw modes for indexed images
RAW_MODE_TO_PIXEL_FORMAT = {
    "P;1": "1bpp-indexed",
    "P;2": "2bpp-indexed",
    "P;4": PIXEL_FORMAT_4BPP_INDEXED,
    "P": "8bpp-indexed",
}


class PixelSource:
    """
    A decoded indexed bitmap: pixel format tag, per-pixel palette indices and
    the active palette as ordered (r, g, b) triples.
    """
    def __init__(self, pixel_format, indices, palette=None):
        self.pixel_format = pixel_format
        data = np.array(indices)
        if data.ndim != 2:
            raise ValueError(f"Pixel indices must be a 2D array, got shape {data.shape}.")
        if data.size and (data.min() < 0 or data.max() > MAX_PALETTE_INDEX):
            raise ValueError(f"Pixel indices must be in range 0-{MAX_PALETTE_INDEX}, "
                             f"found {data.min()}-{data.max()}.")
        # Own copy, the caller's array stays writable
        self.indices = data.astype(np.uint8)
        self.indices.setflags(write=False)
        self.palette = None if palette is None else [tuple(int(c) for c in rgb) for rgb in palette]

    @property
    def width(self):
        return self.indices.shape[1]

    @property
    def height(self):
        return self.indices.shape[0]

    def get_index(self, x, y):
        return int(self.indices[y, x])

    def validate(self, tile_width, tile_height):
        """
        Checks the source can be cut into tile_width x tile_height 4bpp tiles.
        """
        if self.pixel_format != PIXEL_FORMAT_4BPP_INDEXED:
            raise UnsupportedPixelFormat(
                "Error: image isn't an indexed 4 bits per pixel format. Only 16 color images are supported.")
        check_tile_fit(self.width, self.height, tile_width, tile_height)


def check_tile_fit(width, height, tile_width, tile_height):
    if width % tile_width != 0:
        raise TileSizeMismatch(f"Error: Tile width {tile_width} doesn't fit given image width {width}.")
    if height % tile_height != 0:
        raise TileSizeMismatch(f"Error: Tile height {tile_height} doesn't fit given image height {height}.")


def _decoder_raw_mode(image: Image.Image):
    # Must be read before load(), Pillow clears image.tile once decoded.
    if not image.tile:
        return image.mode
    args = image.tile[0][3]
    if isinstance(args, (tuple, list)) and args:
        args = args[0]
    return args if isinstance(args, str) else image.mode


def _group_palette(flat_palette):
    if not flat_palette:
        return None
    return [tuple(flat_palette[i:i + 3]) for i in range(0, len(flat_palette) - 2, 3)]


def load_pixel_source(filename):
    if not os.path.isfile(filename):
        raise MissingInputFile(f"Can't find file {filename}.")

    try:
        with Image.open(filename) as image:
            raw_mode = _decoder_raw_mode(image)
            if image.mode == "P":
                pixel_format = RAW_MODE_TO_PIXEL_FORMAT.get(raw_mode, "8bpp-indexed")
            else:
                pixel_format = image.mode
            image.load()
            indices = np.array(image, dtype=np.uint8)
            palette = _group_palette(image.getpalette()) if image.mode == "P" else None
    except UnidentifiedImageError:
        raise UnsupportedPixelFormat(f"Error: {filename} isn't a recognized image file.")
    except (OSError, Image.DecompressionBombError) as e:
        raise UnsupportedPixelFormat(f"Error: {filename} could not be decoded ({e}).")

    # Only 4bpp sources reach PixelSource
    if indices.ndim != 2 or pixel_format != PIXEL_FORMAT_4BPP_INDEXED:
        raise UnsupportedPixelFormat(
            "Error: image isn't an indexed 4 bits per pixel format. Only 16 color images are supported.")

    return PixelSource(pixel_format, indices, palette)
