# -*- coding: utf-8 -*-
# vim: set fenc=utf-8 ai ts=4 sw=4 sts=4 et:

from typing import Final, Iterator, NamedTuple, Sequence

from .errors import DecodeError, MalformedPaletteError, TruncatedInputError
from .json_formats import Filename


# The palette table starts after an opaque 13 byte header
PALETTE_DATA_OFFSET: Final = 13
PALETTE_SIZE_COLORS: Final = 256

PALETTE_FILE_SIZE: Final = PALETTE_DATA_OFFSET + PALETTE_SIZE_COLORS * 3


class RGB(NamedTuple):
    red: int
    green: int
    blue: int


class PaletteTable:
    "256 RGB colours, indexed by a pixel byte"

    def __init__(self, colors: Sequence[RGB]):
        if len(colors) != PALETTE_SIZE_COLORS:
            raise ValueError(f"A palette requires { PALETTE_SIZE_COLORS } colors, got { len(colors) }")
        self.colors: Final = tuple(colors)

    def __getitem__(self, index: int) -> RGB:
        return self.colors[index]

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[RGB]:
        return iter(self.colors)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PaletteTable):
            return self.colors == other.colors
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.colors)


def decode_palette(data: bytes) -> PaletteTable:
    if len(data) < PALETTE_FILE_SIZE:
        raise TruncatedInputError("palette table", PALETTE_FILE_SIZE, len(data))

    table: Final = data[PALETTE_DATA_OFFSET:PALETTE_FILE_SIZE]

    return PaletteTable([RGB(r, g, b) for r, g, b in zip(table[0::3], table[1::3], table[2::3])])


def load_palette_file(filename: Filename) -> PaletteTable:
    try:
        with open(filename, "rb") as fp:
            data = fp.read()
    except OSError as e:
        raise MalformedPaletteError(filename, f"cannot read palette file: { e.strerror }")

    try:
        return decode_palette(data)
    except DecodeError as e:
        raise MalformedPaletteError(filename, str(e))


def format_palette(palette: PaletteTable) -> str:
    return "\n".join(f"0x{ i:02X} : ({ c.red }, { c.green }, { c.blue })" for i, c in enumerate(palette))
