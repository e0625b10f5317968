# -*- coding: utf-8 -*-
# vim: set fenc=utf-8 ai ts=4 sw=4 sts=4 et:

import os.path
import PIL.Image  # type: ignore
from typing import Callable, Final

from .errors import EmitError, UnsupportedOutputFormatError
from .json_formats import Filename
from .raster import IntermediateImage, ppm_text


def to_pil_image(image: IntermediateImage) -> PIL.Image.Image:
    size: Final = (image.width, image.height)

    out = PIL.Image.new("RGB", size)
    out.putdata(image.pixels)

    if image.alpha is not None:
        out.putalpha(PIL.Image.frombytes("L", size, image.alpha))

    return out


def write_ppm_image(image: IntermediateImage, filename: Filename) -> None:
    with open(filename, "w", encoding="ascii", newline="\n") as fp:
        fp.write(ppm_text(image))


def write_png_image(image: IntermediateImage, filename: Filename) -> None:
    if image.width == 0 or image.height == 0:
        raise EmitError(filename, f"Cannot save a { image.width }x{ image.height } sprite as a png image")

    with to_pil_image(image) as pil_image:
        pil_image.save(filename, "PNG")


OUTPUT_FORMATS: Final[dict[str, Callable[[IntermediateImage, Filename], None]]] = {
    "ppm": write_ppm_image,
    "png": write_png_image,
}


def output_filename(output_directory: Filename, sprites_filename: Filename, index: int, file_type: str) -> Filename:
    stem: Final = os.path.splitext(os.path.basename(sprites_filename))[0]

    return os.path.join(output_directory, f"{ stem }_{ index }.{ file_type }")


def get_image_writer(file_type: str) -> Callable[[IntermediateImage, Filename], None]:
    writer = OUTPUT_FORMATS.get(file_type.lower())
    if writer is None:
        raise UnsupportedOutputFormatError(file_type)
    return writer


def emit_image(image: IntermediateImage, filename: Filename, file_type: str) -> None:
    writer: Final = get_image_writer(file_type)

    try:
        writer(image, filename)
    except EmitError:
        raise
    except Exception as e:
        raise EmitError(filename, str(e))
