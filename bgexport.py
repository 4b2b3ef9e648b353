#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os
import re
import struct

from bgtiles import TILE_HEIGHT, TILE_WIDTH, bytes_per_row

# --- BMP Constants ---
BMP_FILE_HEADER_SIZE = 14
BMP_INFO_HEADER_SIZE = 40
BMP_BITS_PER_PIXEL = 4
BMP_PALETTE_ENTRIES = 16
BMP_PIXELS_PER_METER = 2835  # 72 dpi


def c_identifier(name):
    identifier = re.sub(r"\W", "_", name)
    if not identifier or identifier[0].isdigit():
        identifier = "_" + identifier
    return identifier


def _header_text(name, declaration):
    guard = f"{c_identifier(name).upper()}_INCLUDE_H"
    return (
        f"#ifndef {guard}\n"
        f"#define {guard}\n"
        "\n"
        f"{declaration}\n"
        "\n"
        f"#endif // {guard}\n"
    )


def _write_text(filepath, content):
    with open(filepath, "w", newline="\n") as f:
        f.write(content)


# --- Tilemap ---
def tilemap_source_text(name, tile_map, tilemap_width, tilemap_height):
    ident = c_identifier(name)
    count = tilemap_width * tilemap_height
    lines = [
        f'#include "{name}.h"\n',
        "\n",
        f"// tilemap width: {tilemap_width}, tilemap height {tilemap_height}\n",
        f"const unsigned short {ident}[{count}] = \n",
        "{\n",
        "    ",
    ]
    for counter, tile_index in enumerate(tile_map, start=1):
        lines.append(f"0x{tile_index:04X}, ")
        if counter % tilemap_width == 0:
            lines.append("\n")
            if counter < len(tile_map):
                lines.append("    ")
    lines.append("};\n")
    return "".join(lines)


def write_c_tilemap(name, tile_map, tilemap_width, tilemap_height, destination_folder):
    count = tilemap_width * tilemap_height
    header = _header_text(name, f"extern const unsigned short {c_identifier(name)}[{count}];")
    _write_text(os.path.join(destination_folder, name + ".h"), header)
    source = tilemap_source_text(name, tile_map, tilemap_width, tilemap_height)
    _write_text(os.path.join(destination_folder, name + ".c"), source)


# --- Tileset ---
def tileset_source_text(name, packed, width, height, tile_height=TILE_HEIGHT):
    """
    One line per pixel row, a '// tile n' marker before each tile and a
    blank line after it.
    """
    ident = c_identifier(name)
    row_bytes = bytes_per_row(width)
    array_size = width * height // 2
    num_tiles = array_size // (row_bytes * tile_height)

    lines = [
        f'#include "{name}.h"\n',
        "\n",
        f" // {num_tiles} tiles\n",
        f"const unsigned char {ident}[{array_size}] = \n",
        "{\n",
    ]
    for row in range(height):
        if row % tile_height == 0:
            lines.append(f" // tile {row // tile_height}\n")
        row_data = packed[row*row_bytes:(row+1)*row_bytes]
        lines.append("    " + ", ".join(f"0x{b:02X}" for b in row_data) + ",\n")
        if row > 0 and (row + 1) % tile_height == 0:
            lines.append("\n")
    lines.append("};\n")
    return "".join(lines)


def write_c_tileset(name, packed, width, height, destination_folder, tile_height=TILE_HEIGHT):
    array_size = width * height // 2
    num_tiles = array_size // (bytes_per_row(width) * tile_height)
    header = _header_text(name, f"extern const unsigned char {c_identifier(name)}[{array_size}]; // {num_tiles} tiles")
    _write_text(os.path.join(destination_folder, name + ".h"), header)
    source = tileset_source_text(name, packed, width, height, tile_height)
    _write_text(os.path.join(destination_folder, name + ".c"), source)


# --- Palette ---
def palette_source_text(name, packed_palette):
    lines = [
        f'#include "{name}.h"\n',
        "\n",
        f"const unsigned short {c_identifier(name)}[{len(packed_palette)}] =\n",
        "{\n",
    ]
    for value in packed_palette:
        lines.append(f"    0x{value:x},\n")
    lines.append("};\n")
    return "".join(lines)


def write_c_palette(name, packed_palette, destination_folder):
    header = _header_text(name, f"extern const unsigned short {c_identifier(name)}[{len(packed_palette)}];")
    _write_text(os.path.join(destination_folder, name + ".h"), header)
    _write_text(os.path.join(destination_folder, name + ".c"), palette_source_text(name, packed_palette))


# --- Tileset Bitmap ---
def write_tileset_bmp(filepath, packed, width=TILE_WIDTH, height=None, palette=None):
    """
    Writes the packed tileset as an uncompressed 4bpp BMP with a 16 color
    table. Missing palette entries are written as black.
    """
    row_bytes = bytes_per_row(width)
    if height is None:
        height = len(packed) // row_bytes
    if len(packed) != row_bytes * height:
        raise ValueError(f"Packed buffer has {len(packed)} bytes, expected {row_bytes * height} for {width}x{height}.")

    stride = ((width * BMP_BITS_PER_PIXEL + 31) // 32) * 4
    image_size = stride * height
    pixel_offset = BMP_FILE_HEADER_SIZE + BMP_INFO_HEADER_SIZE + BMP_PALETTE_ENTRIES * 4
    file_size = pixel_offset + image_size

    colors = list(palette or [])[:BMP_PALETTE_ENTRIES]
    colors.extend([(0, 0, 0)] * (BMP_PALETTE_ENTRIES - len(colors)))

    with open(filepath, "wb") as f:
        f.write(struct.pack("<2sIHHI", b"BM", file_size, 0, 0, pixel_offset))
        f.write(struct.pack("<IiiHHIIiiII", BMP_INFO_HEADER_SIZE, width, height, 1, BMP_BITS_PER_PIXEL, 0,
                            image_size, BMP_PIXELS_PER_METER, BMP_PIXELS_PER_METER,
                            BMP_PALETTE_ENTRIES, BMP_PALETTE_ENTRIES))
        for r, g, b in colors:
            f.write(struct.pack("BBBB", b, g, r, 0))
        padding = b"\x00" * (stride - row_bytes)
        # Bottom-up row order
        for row in range(height - 1, -1, -1):
            f.write(bytes(packed[row*row_bytes:(row+1)*row_bytes]))
            f.write(padding)
