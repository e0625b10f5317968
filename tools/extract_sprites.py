#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# vim: set fenc=utf-8 ai ts=4 sw=4 sts=4 et:

import os.path
import sys
import argparse
from typing import Final

from quarantine_sprites.ansi_color import AnsiColors
from quarantine_sprites.errors import print_error, SetupError
from quarantine_sprites.extractor import (
    discover_files,
    run_extraction,
    summary_line,
    ExtractedFile,
    ExtractionFailure,
    ExtractionResult,
    PALETTE_EXTENSION,
)
from quarantine_sprites.image_emitter import OUTPUT_FORMATS
from quarantine_sprites.json_formats import load_config, Config
from quarantine_sprites.palette import load_palette_file, format_palette
from quarantine_sprites.palette_mappings import find_file_by_name


def print_config(config: Config) -> None:
    print(f"Quarantine installation folder: { config.installation_directory }")
    print(f"Sprites output folder: { config.output_directory }")
    print(f"Output file type: { config.output_file_type }")
    print(f"Default palette file: { config.default_palette }")
    print(f"Background transparent: { config.background_transparent }")
    print()


def print_result(r: ExtractionResult) -> None:
    if isinstance(r, ExtractedFile):
        print(
            f"Processing: { os.path.basename(r.sprites_filename) } Palette: { os.path.basename(r.palette_filename) } "
            + f"{ AnsiColors.BRIGHT_GREEN }SUCCESS!{ AnsiColors.RESET } ({ len(r.output_files) } sprites)"
        )
    else:
        print_error(f"Processing: { r.res_string() } Palette: { r.palette_name } FAILED", r.error, sys.stdout)


def print_palette(config: Config, palette_name: str) -> None:
    palette_filename = find_file_by_name(palette_name, discover_files(config.installation_directory, PALETTE_EXTENSION))
    if palette_filename is None:
        raise SetupError(f"Cannot find palette file: { palette_name }")

    print(f"{ palette_filename }:")
    print(format_palette(load_palette_file(palette_filename)))


def parse_arguments() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract the sprites of Quarantine .spr files")
    parser.add_argument("-o", "--output", required=False, help="output directory (overrides the config file)")
    parser.add_argument(
        "-t", "--type", required=False, choices=OUTPUT_FORMATS.keys(), help="output file type (overrides the config file)"
    )
    parser.add_argument("-j", "--threads", required=False, type=int, default=None, help="Number of threads to use (default=1)")
    parser.add_argument("--print-palette", required=False, metavar="NAME", help="Print the colors of a palette file and exit")
    parser.add_argument("config_file", help="config file (.json or .xml)")

    args = parser.parse_args()

    return args


def main() -> None:
    args = parse_arguments()

    try:
        config = load_config(args.config_file)
    except Exception as e:
        print_error("Reading config failed", e)
        sys.exit(2)

    if args.output:
        config = config._replace(output_directory=os.path.abspath(args.output))
    if args.type:
        config = config._replace(output_file_type=args.type)

    if args.print_palette:
        try:
            print_palette(config, args.print_palette)
        except Exception as e:
            print_error("ERROR", e)
            sys.exit(1)
        return

    print_config(config)

    try:
        results: Final = run_extraction(config, args.threads, print_result)
    except SetupError as e:
        print_error("ERROR", e)
        sys.exit(2)

    print()
    print(summary_line(results))

    if any(isinstance(r, ExtractionFailure) for r in results):
        sys.exit(1)


if __name__ == "__main__":
    main()
