# -*- coding: utf-8 -*-
# vim: set fenc=utf-8 ai ts=4 sw=4 sts=4 et:

import threading
from typing import Callable, Final, Optional

from .palette import PaletteTable, load_palette_file
from .json_formats import Filename


# Thread Safety: This class MUST ONLY be accessed via method calls.
# Thread Safety: All methods in this class must acquire the `_lock` before accessing fields.
class PaletteCache:
    """
    Decoded palettes, keyed by palette filename.

    A palette is loaded at most once per run and is never evicted.

    Failed loads are not cached.  A broken palette file is re-read (and
    fails again) for every sprites file that maps to it, so each of those
    sprites files reports its own `MalformedPaletteError`.
    """

    def __init__(self, loader: Callable[[Filename], PaletteTable] = load_palette_file) -> None:
        self._lock: Final[threading.Lock] = threading.Lock()

        with self._lock:
            self._loader: Final = loader
            self._palettes: dict[Filename, PaletteTable] = dict()

    # Holds the lock while loading, a palette is never decoded twice.
    # Nothing is inserted if `loader` raises an exception.
    def get_or_load(self, filename: Filename) -> PaletteTable:
        with self._lock:
            p = self._palettes.get(filename)
            if p is None:
                p = self._loader(filename)
                self._palettes[filename] = p
            return p

    def get(self, filename: Filename) -> Optional[PaletteTable]:
        with self._lock:
            return self._palettes.get(filename)

    def __contains__(self, filename: Filename) -> bool:
        with self._lock:
            return filename in self._palettes

    def __len__(self) -> int:
        with self._lock:
            return len(self._palettes)
