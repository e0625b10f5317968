# -*- coding: utf-8 -*-
# vim: set fenc=utf-8 ai ts=4 sw=4 sts=4 et:

import os.path
from typing import Iterable, Optional, Sequence

from .json_formats import Filename, Name, PaletteMapping


def resolve_palette_name(sprite_name: Name, mappings: Sequence[PaletteMapping], default_palette: Name) -> Name:
    """
    Returns the palette name to use for the `sprite_name` sprites file.

    The first mapping that lists `sprite_name` (case-insensitive) wins,
    even if a later mapping also lists it.
    """

    key = sprite_name.casefold()

    for m in mappings:
        if any(s.casefold() == key for s in m.sprites):
            if m.source:
                return m.source
            break

    return default_palette


# NOTE: Returns the first match if there are multiple files with the same name
def find_file_by_name(name: Name, filenames: Iterable[Filename]) -> Optional[Filename]:
    if not name:
        return None

    key = name.casefold()

    for fn in filenames:
        if os.path.basename(fn).casefold() == key:
            return fn

    return None
