# -*- coding: utf-8 -*-
# vim: set fenc=utf-8 ai ts=4 sw=4 sts=4 et:

from dataclasses import dataclass
from typing import Final, NamedTuple

from .errors import DecodeError, SpriteFileError, TruncatedInputError
from .json_formats import Filename


@dataclass(frozen=True)
class SpriteRecord:
    width: int
    height: int
    # palette indexes, not colours
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width < 0 or self.width > 0xFF or self.height < 0 or self.height > 0xFF:
            raise ValueError(f"Invalid sprite size: { self.width }x{ self.height }")
        if len(self.pixels) != self.width * self.height:
            raise ValueError(f"Sprite pixel data size mismatch: expected { self.width * self.height }, got { len(self.pixels) }")


class SpriteSpan(NamedTuple):
    width: int
    height: int
    start: int
    end: int


def read_sprite_spans(data: bytes) -> list[SpriteSpan]:
    """
    Reads the sprite count and dimension table of a sprite container.

    Returns the location of every sprite's pixel data within `data`.
    The pixel data is not bounds checked.
    """

    if len(data) < 1:
        raise TruncatedInputError("sprite count", 1, 0)

    count: Final = data[0]

    table_end: Final = 1 + count * 2
    if len(data) < table_end:
        raise TruncatedInputError("dimension table", table_end, len(data))

    spans = list()
    pos = table_end

    for i in range(count):
        width = data[1 + i * 2]
        height = data[2 + i * 2]

        spans.append(SpriteSpan(width, height, pos, pos + width * height))
        pos += width * height

    return spans


def decode_sprite_container(data: bytes) -> list[SpriteRecord]:
    spans: Final = read_sprite_spans(data)

    out = list()

    for i, s in enumerate(spans):
        if s.end > len(data):
            raise TruncatedInputError(f"sprite { i } pixel data", s.end - s.start, max(0, len(data) - s.start))

        out.append(SpriteRecord(s.width, s.height, bytes(data[s.start : s.end])))

    return out


def load_sprite_container_file(filename: Filename) -> list[SpriteRecord]:
    try:
        with open(filename, "rb") as fp:
            data = fp.read()
    except OSError as e:
        raise SpriteFileError(filename, f"cannot read sprites file: { e.strerror }")

    try:
        return decode_sprite_container(data)
    except DecodeError as e:
        raise SpriteFileError(filename, str(e))
