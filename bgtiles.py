#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import numpy as np
from tqdm import tqdm

from bgerrors import EmptyTileset
from bgsource import check_tile_fit

# --- Constants ---
TILE_WIDTH = 8
TILE_HEIGHT = 8
PIXELS_PER_BYTE = 2


def _check_tile_size(tile_width, tile_height):
    if tile_width <= 0 or tile_height <= 0:
        raise ValueError(f"Tile size must be positive, got {tile_width}x{tile_height}.")


def bytes_per_row(width):
    return (width + 1) // PIXELS_PER_BYTE


# --- Tile Extraction ---
def extract_tiles(source, tile_width=TILE_WIDTH, tile_height=TILE_HEIGHT, progress=False):
    """
    Cuts the source into tiles, left to right then top to bottom.
    Every tile is a read-only (tile_height, tile_width) uint8 array.
    """
    _check_tile_size(tile_width, tile_height)
    check_tile_fit(source.width, source.height, tile_width, tile_height)

    num_tiles_x = source.width // tile_width
    num_tiles_y = source.height // tile_height

    tiles = []
    for ty in tqdm(range(num_tiles_y), desc="   Extracting tiles", unit="row", leave=False, disable=not progress):
        for tx in range(num_tiles_x):
            block = source.indices[ty*tile_height:(ty+1)*tile_height, tx*tile_width:(tx+1)*tile_width]
            tile = np.array(block, dtype=np.uint8)
            tile.setflags(write=False)
            tiles.append(tile)
    return tiles


# --- Tile Deduplication ---
def tiles_equal(tile1, tile2):
    if tile1.shape != tile2.shape:
        return False
    return bool(np.array_equal(tile1, tile2))


def find_matching_tile(tile, unique_tiles):
    # First match wins, the scan order decides the tile index.
    for idx, unique_tile in enumerate(unique_tiles):
        if tiles_equal(tile, unique_tile):
            return idx
    return -1


def deduplicate_tiles(tiles, progress=False):
    """
    Builds the unique tile set and the tile map pointing into it.

    A tile is compared pixel by pixel against every unique tile found so far,
    in order. No flipped or mirrored matches are looked for.
    Returns (unique_tiles, tile_map).
    """
    unique_tiles = []
    tile_map = []

    for tile in tqdm(tiles, desc="   Removing duplicates", unit="tile", leave=False, disable=not progress):
        idx = find_matching_tile(tile, unique_tiles)
        if idx < 0:
            idx = len(unique_tiles)
            unique_tiles.append(tile)
        tile_map.append(idx)

    return unique_tiles, tile_map


# --- Tile Packing ---
def pack_tiles(unique_tiles, tile_width=TILE_WIDTH, tile_height=TILE_HEIGHT):
    """
    Stacks the unique tiles into one column, tile_width pixels wide, and packs
    it at 4 bits per pixel: high nibble is the even x pixel, low nibble the
    odd one. Rows are not padded.
    """
    _check_tile_size(tile_width, tile_height)
    if len(unique_tiles) == 0:
        raise EmptyTileset("Error generating tileset. No tiles were found.")

    row_bytes = bytes_per_row(tile_width)
    packed = np.zeros((len(unique_tiles) * tile_height, row_bytes), dtype=np.uint8)

    for i, tile in enumerate(unique_tiles):
        if tile.shape != (tile_height, tile_width):
            raise ValueError(f"Tile {i} is {tile.shape[1]}x{tile.shape[0]}, expected {tile_width}x{tile_height}.")
        rows = packed[i*tile_height:(i+1)*tile_height]
        nibbles = tile & 0x0F
        rows[:, :] = nibbles[:, 0::2] << 4
        odd = nibbles[:, 1::2]
        rows[:, :odd.shape[1]] |= odd

    return packed.tobytes()


def unpack_tiles(packed, tile_width=TILE_WIDTH, tile_height=TILE_HEIGHT):
    """Splits a buffer made by pack_tiles back into tiles."""
    _check_tile_size(tile_width, tile_height)
    row_bytes = bytes_per_row(tile_width)
    tile_bytes = row_bytes * tile_height
    if len(packed) % tile_bytes != 0:
        raise ValueError(f"Packed buffer of {len(packed)} bytes is not a whole number of {tile_bytes} byte tiles.")

    data = np.frombuffer(bytes(packed), dtype=np.uint8).reshape((-1, row_bytes))
    pixels = np.empty((data.shape[0], row_bytes * PIXELS_PER_BYTE), dtype=np.uint8)
    pixels[:, 0::2] = data >> 4
    pixels[:, 1::2] = data & 0x0F
    pixels = pixels[:, :tile_width]

    tiles = []
    for i in range(data.shape[0] // tile_height):
        tile = np.array(pixels[i*tile_height:(i+1)*tile_height], dtype=np.uint8)
        tile.setflags(write=False)
        tiles.append(tile)
    return tiles
