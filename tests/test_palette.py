# -*- coding: utf-8 -*-
# vim: set fenc=utf-8 ai ts=4 sw=4 sts=4 et:

import pytest

from quarantine_sprites.errors import MalformedPaletteError, TruncatedInputError
from quarantine_sprites.palette import (
    decode_palette,
    format_palette,
    load_palette_file,
    PaletteTable,
    RGB,
    PALETTE_FILE_SIZE,
)

from helpers import make_palette_data


def test_palette_file_size() -> None:
    assert PALETTE_FILE_SIZE == 781


def test_decode_palette_reads_rgb_after_header() -> None:
    data = bytes(range(256)) * 3 + bytes(13)
    data = data[:PALETTE_FILE_SIZE]

    palette = decode_palette(data)

    assert len(palette) == 256
    for i in range(256):
        assert palette[i] == RGB(data[13 + 3 * i], data[13 + 3 * i + 1], data[13 + 3 * i + 2])


def test_decode_palette_ignores_header() -> None:
    a = decode_palette(make_palette_data(header=b"A" * 13))
    b = decode_palette(make_palette_data(header=b"\xff" * 13))

    assert a == b


def test_decode_palette_ignores_trailing_bytes() -> None:
    data = make_palette_data({7: (1, 2, 3)})

    assert decode_palette(data + b"extra") == decode_palette(data)
    assert decode_palette(data)[7] == RGB(1, 2, 3)


@pytest.mark.parametrize("size", [0, 1, 13, 14, 100, 780])
def test_decode_palette_truncated(size: int) -> None:
    data = make_palette_data()[:size]

    with pytest.raises(TruncatedInputError) as e:
        decode_palette(data)

    assert e.value.expected == 781
    assert e.value.available == size


def test_palette_table_requires_256_colors() -> None:
    with pytest.raises(ValueError):
        PaletteTable([RGB(0, 0, 0)] * 255)

    with pytest.raises(ValueError):
        PaletteTable([RGB(0, 0, 0)] * 257)


def test_load_palette_file(tmp_path) -> None:
    fn = tmp_path / "QUARPAL.IMG"
    fn.write_bytes(make_palette_data({1: (10, 20, 30)}))

    palette = load_palette_file(str(fn))

    assert palette[1] == RGB(10, 20, 30)


def test_load_palette_file_truncated(tmp_path) -> None:
    fn = tmp_path / "SHORT.IMG"
    fn.write_bytes(make_palette_data()[:500])

    with pytest.raises(MalformedPaletteError) as e:
        load_palette_file(str(fn))

    assert e.value.path == (str(fn),)
    assert "Truncated input" in e.value.message


def test_load_palette_file_missing(tmp_path) -> None:
    with pytest.raises(MalformedPaletteError):
        load_palette_file(str(tmp_path / "MISSING.IMG"))


def test_format_palette() -> None:
    lines = format_palette(decode_palette(make_palette_data({0: (1, 2, 3)}))).splitlines()

    assert len(lines) == 256
    assert lines[0] == "0x00 : (1, 2, 3)"
    assert lines[255] == "0xFF : (255, 0, 127)"
