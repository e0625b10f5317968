# -*- coding: utf-8 -*-
# vim: set fenc=utf-8 ai ts=4 sw=4 sts=4 et:

import os
import sys
from typing import final, Final, TextIO, Type, Union


@final
class NoAnsiColors:
    RESET: Final = ""

    BOLD: Final = ""
    NORMAL: Final = ""

    BRIGHT_RED: Final = ""
    BRIGHT_GREEN: Final = ""
    BRIGHT_WHITE: Final = ""


@final
class ForceAnsiColors:
    RESET: Final = "\033[0m"

    BOLD: Final = "\033[1m"
    NORMAL: Final = "\033[22m"

    BRIGHT_RED: Final = "\033[91m"
    BRIGHT_GREEN: Final = "\033[92m"
    BRIGHT_WHITE: Final = "\033[97m"


AnsiColorsType = Union[Type[NoAnsiColors], Type[ForceAnsiColors]]


def should_use_ansi_colors(fp: TextIO) -> bool:
    return os.getenv("NO_COLOR", "") == "" and fp.isatty()


def ansi_colors_for(fp: TextIO) -> AnsiColorsType:
    return ForceAnsiColors if should_use_ansi_colors(fp) else NoAnsiColors


# Assumes `sys.stdout` and `sys.stderr` is never changed.
AnsiColors: AnsiColorsType = ForceAnsiColors if should_use_ansi_colors(sys.stdout) and sys.stderr.isatty() else NoAnsiColors
