# -*- coding: utf-8 -*-
# vim: set fenc=utf-8 ai ts=4 sw=4 sts=4 et:

from typing import Final, NamedTuple, Optional

from .palette import RGB, PaletteTable
from .sprites import SpriteRecord


PPM_FORMAT_TAG: Final = "P3"
PPM_MAX_VALUE: Final = 255

ALPHA_TRANSPARENT: Final = 0x00
ALPHA_OPAQUE: Final = 0xFF

# The background colour of the sprites
TRANSPARENT_COLOR: Final = RGB(0, 0, 0)


class IntermediateImage(NamedTuple):
    width: int
    height: int
    # row-major
    pixels: list[RGB]
    # One alpha byte per pixel, `None` if the image is opaque
    alpha: Optional[bytes] = None

    def get_pixel(self, x: int, y: int) -> RGB:
        return self.pixels[x + y * self.width]


def rasterize(sprite: SpriteRecord, palette: PaletteTable, transparent_color: Optional[RGB] = None) -> IntermediateImage:
    """
    Converts the palette indexes of `sprite` to RGB colours.

    If `transparent_color` is set, every pixel whose colour matches it is
    marked transparent in the alpha channel.  The match is on colour, not
    palette index; the RGB values are never changed.
    """

    pixels: Final = [palette[p] for p in sprite.pixels]

    alpha = None
    if transparent_color is not None:
        alpha = bytes(ALPHA_TRANSPARENT if c == transparent_color else ALPHA_OPAQUE for c in pixels)

    return IntermediateImage(sprite.width, sprite.height, pixels, alpha)


def ppm_text(image: IntermediateImage) -> str:
    # The alpha channel cannot be stored in a PPM file
    lines = [
        PPM_FORMAT_TAG,
        f"{ image.width } { image.height }",
        str(PPM_MAX_VALUE),
    ]
    lines.extend(f"{ c.red } { c.green } { c.blue }" for c in image.pixels)
    lines.append("")

    return "\n".join(lines)


def _ppm_tokens(text: str) -> list[str]:
    tokens = list()
    for line in text.splitlines():
        line = line.split("#", 1)[0]
        tokens.extend(line.split())
    return tokens


def parse_ppm_text(text: str) -> IntermediateImage:
    tokens: Final = _ppm_tokens(text)

    if len(tokens) < 4:
        raise ValueError("PPM header is incomplete")

    if tokens[0] != PPM_FORMAT_TAG:
        raise ValueError(f"Not a plain PPM image: { tokens[0] }")

    try:
        values = [int(t) for t in tokens[1:]]
    except ValueError as e:
        raise ValueError(f"Invalid PPM value: { e }") from None

    width, height, max_value = values[0:3]

    if width < 0 or height < 0:
        raise ValueError(f"Invalid PPM size: { width }x{ height }")

    if max_value != PPM_MAX_VALUE:
        raise ValueError(f"Unsupported PPM maximum value: { max_value }")

    channels: Final = values[3:]
    if len(channels) != width * height * 3:
        raise ValueError(f"PPM size mismatch: expected { width * height * 3 } channel values, got { len(channels) }")

    if any(c < 0 or c > max_value for c in channels):
        raise ValueError("PPM channel value out of range")

    pixels = [RGB(r, g, b) for r, g, b in zip(channels[0::3], channels[1::3], channels[2::3])]

    return IntermediateImage(width, height, pixels)
