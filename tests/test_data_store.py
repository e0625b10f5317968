# -*- coding: utf-8 -*-
# vim: set fenc=utf-8 ai ts=4 sw=4 sts=4 et:

import threading
import time

import pytest

from quarantine_sprites.data_store import PaletteCache
from quarantine_sprites.errors import MalformedPaletteError
from quarantine_sprites.palette import decode_palette, PaletteTable

from helpers import make_palette_data


class CountingLoader:
    def __init__(self, delay: float = 0.0) -> None:
        self.lock = threading.Lock()
        self.calls: list[str] = list()
        self.delay = delay

    def __call__(self, filename: str) -> PaletteTable:
        with self.lock:
            self.calls.append(filename)
        if self.delay:
            time.sleep(self.delay)
        if filename.endswith("BAD.IMG"):
            raise MalformedPaletteError(filename, "bad palette")
        return decode_palette(make_palette_data({0: (len(filename), 0, 0)}))


def test_palette_is_loaded_once() -> None:
    loader = CountingLoader()
    cache = PaletteCache(loader)

    a = cache.get_or_load("A.IMG")
    b = cache.get_or_load("A.IMG")
    c = cache.get_or_load("LONGER.IMG")

    assert a is b
    assert a != c
    assert loader.calls == ["A.IMG", "LONGER.IMG"]
    assert len(cache) == 2
    assert "A.IMG" in cache
    assert cache.get("A.IMG") is a
    assert cache.get("MISSING.IMG") is None


def test_failed_load_is_not_cached() -> None:
    loader = CountingLoader()
    cache = PaletteCache(loader)

    for i in range(2):
        with pytest.raises(MalformedPaletteError):
            cache.get_or_load("BAD.IMG")

    assert "BAD.IMG" not in cache
    assert loader.calls == ["BAD.IMG", "BAD.IMG"]


def test_concurrent_get_or_load() -> None:
    loader = CountingLoader(delay=0.01)
    cache = PaletteCache(loader)

    barrier = threading.Barrier(8)
    results: list[PaletteTable] = list()
    results_lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        p = cache.get_or_load("SHARED.IMG")
        with results_lock:
            results.append(p)

    threads = [threading.Thread(target=worker) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert loader.calls == ["SHARED.IMG"]
    assert len(results) == 8
    assert all(r is results[0] for r in results)


def test_default_loader_reads_palette_files(tmp_path) -> None:
    fn = tmp_path / "QUARPAL.IMG"
    fn.write_bytes(make_palette_data({9: (9, 9, 9)}))

    cache = PaletteCache()

    assert cache.get_or_load(str(fn))[9] == (9, 9, 9)
