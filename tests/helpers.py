# -*- coding: utf-8 -*-
# vim: set fenc=utf-8 ai ts=4 sw=4 sts=4 et:

from typing import Optional

from quarantine_sprites.palette import PALETTE_DATA_OFFSET, PALETTE_SIZE_COLORS


def make_palette_data(colors: Optional[dict[int, tuple[int, int, int]]] = None, header: bytes = b"PALHEADER0123") -> bytes:
    "Builds a palette file.  Unset colours are (i, 255 - i, i // 2)."

    assert len(header) == PALETTE_DATA_OFFSET

    out = bytearray(header)
    for i in range(PALETTE_SIZE_COLORS):
        if colors and i in colors:
            out += bytes(colors[i])
        else:
            out += bytes((i, 255 - i, i // 2))
    return bytes(out)


def make_container_data(*sprites: tuple[int, int, bytes]) -> bytes:
    out = bytearray([len(sprites)])
    for w, h, _ in sprites:
        out += bytes((w, h))
    for _, _, pixels in sprites:
        out += pixels
    return bytes(out)


def make_installation(tmp_path) -> str:
    "Builds a Quarantine installation with six sprites files, three of them fail to extract."

    root = tmp_path / "quarantine"
    (root / "DATA").mkdir(parents=True)

    (root / "QUARPAL.IMG").write_bytes(make_palette_data({0: (0, 0, 0), 1: (10, 20, 30), 2: (40, 50, 60)}))
    (root / "DATA" / "titlepal.img").write_bytes(make_palette_data({0: (0, 0, 0), 1: (200, 201, 202)}))
    (root / "DATA" / "BROKEN.IMG").write_bytes(b"too short")

    (root / "A.SPR").write_bytes(make_container_data((2, 1, b"\x01\x02"), (1, 1, b"\x00")))
    (root / "B.SPR").write_bytes(bytes([2, 1, 1, 4, 4, 0x01]))
    (root / "C.SPR").write_bytes(make_container_data((1, 2, b"\x02\x01")))
    (root / "DATA" / "TITLE.SPR").write_bytes(make_container_data((1, 1, b"\x01")))
    (root / "DATA" / "NOPAL.SPR").write_bytes(make_container_data((1, 1, b"\x01")))
    (root / "DATA" / "BADPAL.SPR").write_bytes(make_container_data((1, 1, b"\x01")))
    (root / "readme.txt").write_text("not a sprite")

    return str(root)
