#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# --- Program Identification ---
APP_VERSION = "<unreleased>"
SCRIPT_NAME = "BMP to Background"
SCRIPT_VERSION = APP_VERSION

# --- Imports ---
import os
import sys
import argparse

from bgerrors import RETURN_CODE_OK, ConversionError, MissingArguments
from bgexport import write_c_palette, write_c_tilemap, write_c_tileset, write_tileset_bmp
from bgpalette import quantize_palette
from bgsource import load_pixel_source
from bgtiles import TILE_HEIGHT, TILE_WIDTH, deduplicate_tiles, extract_tiles, pack_tiles

# --- Splash Screen ---
# The logo is a 4x4 tilemap drawn with four reused tiles
SPLASH_LOGO_TILEMAP = ("0110", "1231", "1321", "0110")
SPLASH_TILE_COLORS = ('\033[34m', '\033[94m', '\033[32m', '\033[92m')


def print_splash_screen(script_name, script_version):
    tile_colors = list(SPLASH_TILE_COLORS)
    color_title = '\033[1;97m'
    color_text = '\033[97m'
    color_reset = '\033[0m'

    if not sys.stdout.isatty():
        tile_colors = [""] * len(tile_colors)
        color_title = color_text = color_reset = ""

    block_char = "\u2588" * 2
    logo_lines = ["".join(f"{tile_colors[int(t)]}{block_char}{color_reset}" for t in row)
                  for row in SPLASH_LOGO_TILEMAP]

    text_lines = [
        "",
        f"{color_title}{script_name}{color_reset} (v{script_version})",
        f"{color_text}4bpp image to tileset, tilemap and palette C data{color_reset}",
        f"{color_text}{TILE_WIDTH}x{TILE_HEIGHT} tiles, 16 color palette{color_reset}",
    ]

    print()
    for logo, text in zip(logo_lines, text_lines):
        print(f"{logo}  {text}".rstrip())
    print("-" * 60)


class ConversionResult:
    """
    Everything a conversion produces, ready to be handed to the exporters.
    """
    def __init__(self, tilemap_width, tilemap_height, unique_tiles, tile_map, packed_tileset, packed_palette,
                 source_palette, tile_width=TILE_WIDTH, tile_height=TILE_HEIGHT):
        self.tilemap_width = tilemap_width
        self.tilemap_height = tilemap_height
        self.unique_tiles = unique_tiles
        self.tile_map = tile_map
        self.packed_tileset = packed_tileset
        self.packed_palette = packed_palette
        self.source_palette = source_palette
        self.tile_width = tile_width
        self.tile_height = tile_height

    @property
    def num_unique_tiles(self):
        return len(self.unique_tiles)

    @property
    def tileset_width(self):
        return self.tile_width

    @property
    def tileset_height(self):
        return self.tile_height * len(self.unique_tiles)


def build_tiles(source, tile_width=TILE_WIDTH, tile_height=TILE_HEIGHT, progress=False):
    """
    Validates the source, cuts it into tiles and removes duplicates.
    Returns (tiles, unique_tiles, tile_map).
    """
    source.validate(tile_width, tile_height)
    tiles = extract_tiles(source, tile_width, tile_height, progress=progress)
    unique_tiles, tile_map = deduplicate_tiles(tiles, progress=progress)
    return tiles, unique_tiles, tile_map


def convert_image(source, tile_width=TILE_WIDTH, tile_height=TILE_HEIGHT, progress=False):
    """In-memory conversion of a loaded PixelSource, the same stages run() writes out."""
    _, unique_tiles, tile_map = build_tiles(source, tile_width, tile_height, progress=progress)
    packed_tileset = pack_tiles(unique_tiles, tile_width, tile_height)
    packed_palette = quantize_palette(source.palette)
    return ConversionResult(source.width // tile_width, source.height // tile_height, unique_tiles, tile_map,
                            packed_tileset, packed_palette, source.palette, tile_width, tile_height)


def run(source_filename, destination_folder, basename=None, write_bitmap=True, progress=True):
    # --- 1. Load Source ---
    print("1. Loading source image...")
    source = load_pixel_source(source_filename)
    print(f"   [INFO] {source.width}x{source.height} pixels, {len(source.palette or [])} palette entries.")

    # --- 2. Split into tiles and remove duplicates ---
    print("2. Extracting tiles and removing duplicates...")
    tiles, unique_tiles, tile_map = build_tiles(source, TILE_WIDTH, TILE_HEIGHT, progress=progress)
    print(f"   [INFO] Image contains a total of {len(tiles)} tiles (including duplicates).")
    print(f"   [INFO] Final tile count: {len(unique_tiles)}")

    root_name = basename or os.path.splitext(os.path.basename(source_filename))[0]
    tilemap_name = root_name + "_tilemap"
    tileset_name = root_name + "_tileset"
    palette_name = root_name + "_palette"
    tilemap_width = source.width // TILE_WIDTH
    tilemap_height = source.height // TILE_HEIGHT

    # --- 3. Output files ---
    print("3. Generating output files...")
    if not os.path.isdir(destination_folder):
        print(f"   [INFO] Output directory not found. Creating '{destination_folder}'...")
        os.makedirs(destination_folder, exist_ok=True)
    print(f"   [INFO] Exporting to {destination_folder}")

    write_c_tilemap(tilemap_name, tile_map, tilemap_width, tilemap_height, destination_folder)
    print(f"Exported {tilemap_name} .c/.h")

    packed_tileset = pack_tiles(unique_tiles, TILE_WIDTH, TILE_HEIGHT)
    tileset_height = TILE_HEIGHT * len(unique_tiles)

    if write_bitmap:
        bmp_path = os.path.join(destination_folder, tileset_name + ".bmp")
        write_tileset_bmp(bmp_path, packed_tileset, TILE_WIDTH, tileset_height, source.palette)
        print(f"Exported {tileset_name}.bmp")

    write_c_tileset(tileset_name, packed_tileset, TILE_WIDTH, tileset_height, destination_folder)
    print(f"Exported {tileset_name} .c/.h")

    packed_palette = quantize_palette(source.palette)
    write_c_palette(palette_name, packed_palette, destination_folder)
    print(f"Exported {palette_name} .c/.h")

    print("\nExport done.")
    return ConversionResult(tilemap_width, tilemap_height, unique_tiles, tile_map, packed_tileset, packed_palette,
                            source.palette)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Converts a 16 color (4bpp indexed) image into a deduplicated tileset,\n"
                    "a tilemap and a palette, exported as C source files.\n"
                    f"Tiles are {TILE_WIDTH}x{TILE_HEIGHT} pixels.",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument("source", nargs="?", help="Source 4bpp indexed image (.bmp, .png).")
    parser.add_argument("destination", nargs="?", default=None,
                        help="Destination folder for the exported files (defaults to the current directory).")
    parser.add_argument("--output-basename", help="Base name for exported files (defaults to the source file's name).")
    parser.add_argument("--no-bitmap", action="store_true", help="Skip writing the intermediate <name>_tileset.bmp image.")
    parser.add_argument("--quiet", action="store_true", help="Don't show the splash header and progress bars.")
    args = parser.parse_args(argv)

    if not args.quiet:
        print_splash_screen(SCRIPT_NAME, SCRIPT_VERSION)

    try:
        if not args.source:
            raise MissingArguments("bmp2background.py <source .bmp> <destination folder>")
        destination_folder = args.destination or os.getcwd()
        run(args.source, destination_folder, basename=args.output_basename,
            write_bitmap=not args.no_bitmap, progress=not args.quiet)
    except ConversionError as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        return e.return_code
    except OSError as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        return 1

    return RETURN_CODE_OK


if __name__ == "__main__":
    sys.exit(main())
