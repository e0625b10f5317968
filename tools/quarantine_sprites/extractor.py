# -*- coding: utf-8 -*-
# vim: set fenc=utf-8 ai ts=4 sw=4 sts=4 et:

import os
import os.path
from concurrent.futures import ThreadPoolExecutor
from enum import unique, Enum
from typing import Callable, Final, NamedTuple, Optional, Sequence, Union

from .data_store import PaletteCache
from .errors import MissingPaletteError, SetupError
from .image_emitter import emit_image, get_image_writer, output_filename
from .json_formats import Config, Filename, Name
from .palette_mappings import find_file_by_name, resolve_palette_name
from .raster import rasterize, TRANSPARENT_COLOR
from .sprites import load_sprite_container_file


PALETTE_EXTENSION: Final = ".img"
SPRITES_EXTENSION: Final = ".spr"


@unique
class ExtractionStage(Enum):
    PALETTE = "palette"
    SPRITES = "sprites"
    OUTPUT = "output"


class ExtractedFile(NamedTuple):
    sprites_filename: Filename
    palette_filename: Filename
    output_files: list[Filename]


class ExtractionFailure(NamedTuple):
    sprites_filename: Filename
    palette_name: Name
    stage: ExtractionStage
    error: Exception

    def res_string(self) -> str:
        return f"{ os.path.basename(self.sprites_filename) } ({ self.stage.value })"


ExtractionResult = Union[ExtractedFile, ExtractionFailure]


class InputFiles(NamedTuple):
    palette_files: list[Filename]
    sprites_files: list[Filename]


def discover_files(directory: Filename, extension: str) -> list[Filename]:
    out = list()

    for dirpath, dirnames, filenames in os.walk(directory):
        for fn in filenames:
            if os.path.splitext(fn)[1].lower() == extension:
                out.append(os.path.join(dirpath, fn))

    out.sort()

    return out


def prepare_run(config: Config) -> InputFiles:
    "Finds the input files and creates the output directory"

    if not os.path.isdir(config.installation_directory):
        raise SetupError(f"Quarantine installation folder could not be found: { config.installation_directory }")

    palette_files: Final = discover_files(config.installation_directory, PALETTE_EXTENSION)
    if not palette_files:
        raise SetupError(f"No .img files containing palettes found in: { config.installation_directory }")

    sprites_files: Final = discover_files(config.installation_directory, SPRITES_EXTENSION)
    if not sprites_files:
        raise SetupError(f"No .spr files containing sprites found in: { config.installation_directory }")

    try:
        os.makedirs(config.output_directory, exist_ok=True)
    except OSError as e:
        raise SetupError(f"Cannot create output folder { config.output_directory }: { e.strerror }")

    return InputFiles(palette_files, sprites_files)


def extract_sprites_file(
    sprites_filename: Filename, config: Config, palette_files: Sequence[Filename], palette_cache: PaletteCache
) -> ExtractionResult:
    palette_name: Final = resolve_palette_name(os.path.basename(sprites_filename), config.palette_mappings, config.default_palette)

    try:
        palette_filename = find_file_by_name(palette_name, palette_files)
        if palette_filename is None:
            raise MissingPaletteError(sprites_filename, palette_name)

        palette = palette_cache.get_or_load(palette_filename)
    except Exception as e:
        return ExtractionFailure(sprites_filename, palette_name, ExtractionStage.PALETTE, e)

    try:
        sprites = load_sprite_container_file(sprites_filename)
    except Exception as e:
        return ExtractionFailure(sprites_filename, palette_name, ExtractionStage.SPRITES, e)

    transparent_color: Final = TRANSPARENT_COLOR if config.background_transparent else None
    file_type: Final = config.output_file_type.lower()

    output_files = list()

    try:
        get_image_writer(file_type)

        for i, s in enumerate(sprites):
            image = rasterize(s, palette, transparent_color)
            fn = output_filename(config.output_directory, sprites_filename, i, file_type)
            emit_image(image, fn, file_type)
            output_files.append(fn)
    except Exception as e:
        return ExtractionFailure(sprites_filename, palette_name, ExtractionStage.OUTPUT, e)

    return ExtractedFile(sprites_filename, palette_filename, output_files)


def extract_all(
    config: Config,
    input_files: InputFiles,
    palette_cache: PaletteCache,
    n_threads: Optional[int] = None,
    result_handler: Optional[Callable[[ExtractionResult], None]] = None,
) -> list[ExtractionResult]:
    """
    Extracts the sprites of every sprites file in `input_files`.

    A failure in one sprites file does not stop the others from being extracted.
    The results (and the `result_handler` calls) are in the same order as `input_files.sprites_files`.
    """

    def _extract(fn: Filename) -> ExtractionResult:
        return extract_sprites_file(fn, config, input_files.palette_files, palette_cache)

    out: list[ExtractionResult] = list()

    def _add_result(r: ExtractionResult) -> None:
        out.append(r)
        if result_handler:
            result_handler(r)

    if n_threads is not None and n_threads > 1:
        # Uses threads to speed up the extraction
        with ThreadPoolExecutor(max_workers=n_threads) as executor:
            for r in executor.map(_extract, input_files.sprites_files):
                _add_result(r)
    else:
        for fn in input_files.sprites_files:
            _add_result(_extract(fn))

    return out


def run_extraction(
    config: Config, n_threads: Optional[int] = None, result_handler: Optional[Callable[[ExtractionResult], None]] = None
) -> list[ExtractionResult]:
    input_files: Final = prepare_run(config)
    palette_cache: Final = PaletteCache()

    return extract_all(config, input_files, palette_cache, n_threads, result_handler)


def summary_line(results: Sequence[ExtractionResult]) -> str:
    total: Final = len(results)
    n_failed: Final = sum(1 for r in results if isinstance(r, ExtractionFailure))

    return f"{ n_failed }/{ total } FAILED. { total - n_failed }/{ total } SUCCESS."
