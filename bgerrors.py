#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# --- Return codes ---
# Other command line tools branch on these, keep them stable.
RETURN_CODE_OK = 0
RETURN_CODE_NO_PARAMETERS = -1
RETURN_CODE_TILE_SIZE_DOESNT_FIT = -2
RETURN_CODE_TILESET_IS_EMPTY = -3
RETURN_CODE_NOT_4BPP_FORMAT = -4
RETURN_CODE_FILE_DOES_NOT_EXIST = -5
RETURN_CODE_NO_PALETTE_FOUND = -6
RETURN_CODE_PALETTE_IS_NOT_16_COLORS = -7


class ConversionError(Exception):
    """
    Base class for every fatal condition of a conversion run. Carries the
    process return code the command line entry point exits with.
    """
    return_code = 1


class MissingArguments(ConversionError):
    return_code = RETURN_CODE_NO_PARAMETERS


class TileSizeMismatch(ConversionError):
    return_code = RETURN_CODE_TILE_SIZE_DOESNT_FIT


class EmptyTileset(ConversionError):
    return_code = RETURN_CODE_TILESET_IS_EMPTY


class UnsupportedPixelFormat(ConversionError):
    return_code = RETURN_CODE_NOT_4BPP_FORMAT


class MissingInputFile(ConversionError):
    return_code = RETURN_CODE_FILE_DOES_NOT_EXIST


class MissingPalette(ConversionError):
    return_code = RETURN_CODE_NO_PALETTE_FOUND


class InvalidPaletteSize(ConversionError):
    return_code = RETURN_CODE_PALETTE_IS_NOT_16_COLORS
