import pytest

import bgerrors


@pytest.mark.parametrize("error_class, code", [
    (bgerrors.MissingArguments, -1),
    (bgerrors.TileSizeMismatch, -2),
    (bgerrors.EmptyTileset, -3),
    (bgerrors.UnsupportedPixelFormat, -4),
    (bgerrors.MissingInputFile, -5),
    (bgerrors.MissingPalette, -6),
    (bgerrors.InvalidPaletteSize, -7),
])
def test_return_codes_are_distinct_per_error(error_class, code):
    error = error_class("message")
    assert isinstance(error, bgerrors.ConversionError)
    assert error.return_code == code
    assert str(error) == "message"


def test_return_code_comes_from_the_class():
    error = bgerrors.MissingPalette("message", -99)
    assert error.return_code == bgerrors.RETURN_CODE_NO_PALETTE_FOUND
    assert error.args == ("message", -99)
