"""
Reading and writing images on disk.

Plain-text PPM files (".ppm") are parsed and written directly; every other
extension goes through Pillow, which decodes to 8-bit RGB.

Functions:
    load_image: Read any supported file into a PixelImage
    save_image: Write a PixelImage, choosing the format from the extension
    read_ppm: Parse plain-text PPM content
    write_ppm: Serialize an image as plain-text PPM
    from_pil_image: Convert a Pillow image to a PixelImage
    to_pil_image: Convert a PixelImage to an 8-bit RGB Pillow image
"""

import logging
from pathlib import Path
from typing import Iterable, List, Union

import numpy as np

from IP_Libs.constants import (
    DEFAULT_MAX_VALUE,
    EXTENSION_FORMAT_ALIASES,
    PPM_COMMENT_PREFIX,
    PPM_CREATOR_COMMENT,
    PPM_EXTENSION,
    PPM_MAGIC,
)
from IP_Libs.errors import InvalidOperationError
from IP_Libs.ImageEditingLib.image_models import Pixel, PixelImage
from IP_Libs.pillow_compat import Image

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _is_ppm(path: Path) -> bool:
    return path.suffix.lower() == PPM_EXTENSION


# ============================================================================
# PPM
# ============================================================================

def read_ppm(lines: Iterable[str]) -> PixelImage:
    """
    Parse plain-text PPM content.

    Lines starting with '#' are comments. The remaining tokens are the
    "P3" header, width, height, max value and then one integer per channel
    in row-major r, g, b order.

    Args:
        lines: Text lines of the file

    Returns:
        The decoded image

    Raises:
        InvalidOperationError: If the header is wrong or the data is short or not numeric
    """
    tokens: List[str] = []
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith(PPM_COMMENT_PREFIX):
            continue
        tokens.extend(stripped.split())

    if not tokens or tokens[0] != PPM_MAGIC:
        raise InvalidOperationError(f"Invalid PPM file: plain RGB PPM should begin with {PPM_MAGIC}")

    try:
        values = [int(token) for token in tokens[1:]]
    except ValueError as e:
        raise InvalidOperationError(f"Invalid PPM file: {e}") from e

    if len(values) < 3:
        raise InvalidOperationError("Invalid PPM file: header is incomplete.")

    cols, rows, max_value = values[0], values[1], values[2]
    if cols < 1 or rows < 1:
        raise InvalidOperationError(f"Invalid PPM file: bad dimensions {cols}x{rows}")

    data = values[3:]
    expected = rows * cols * 3
    if len(data) < expected:
        raise InvalidOperationError(
            f"Invalid PPM file: expected {expected} channel values, found {len(data)}"
        )

    pixels = []
    index = 0
    for _ in range(rows):
        row = []
        for _ in range(cols):
            r, g, b = data[index], data[index + 1], data[index + 2]
            row.append(Pixel(r, g, b, max_value))
            index += 3
        pixels.append(row)

    return PixelImage(pixels)


def write_ppm(image: PixelImage) -> str:
    """
    Serialize an image as plain-text PPM, one channel value per line.

    Returns:
        The file content, ending with a newline
    """
    lines = [
        PPM_MAGIC,
        PPM_CREATOR_COMMENT,
        f"{image.cols} {image.rows}",
        str(image.max_value),
    ]
    for _, _, pixel in image.iter_pixels():
        lines.append(str(pixel.red))
        lines.append(str(pixel.green))
        lines.append(str(pixel.blue))
    return "\n".join(lines) + "\n"


# ============================================================================
# Pillow bridge
# ============================================================================

def from_pil_image(pil_image) -> PixelImage:
    """
    Convert a Pillow image (any mode) to a PixelImage with max value 255.
    """
    array = np.asarray(pil_image.convert("RGB"), dtype=np.uint8)
    pixels = [
        [Pixel(int(r), int(g), int(b), DEFAULT_MAX_VALUE) for r, g, b in row]
        for row in array
    ]
    return PixelImage(pixels)


def to_pil_image(image: PixelImage):
    """
    Convert a PixelImage to an 8-bit RGB Pillow image.

    Channels are rescaled to 0-255 (truncating) when the image's max value
    is not 255.
    """
    array = np.zeros((image.rows, image.cols, 3), dtype=np.int64)
    max_values = np.zeros((image.rows, image.cols, 1), dtype=np.int64)
    for i, j, pixel in image.iter_pixels():
        array[i, j] = pixel.channels()
        max_values[i, j] = pixel.max_value

    scale = np.where(max_values == 0, 1, max_values)
    scaled = np.where(
        max_values == DEFAULT_MAX_VALUE,
        array,
        array * DEFAULT_MAX_VALUE // scale,
    )
    return Image.fromarray(np.clip(scaled, 0, DEFAULT_MAX_VALUE).astype(np.uint8))


def _pil_format(path: Path) -> str:
    extension = path.suffix.lower().lstrip(".")
    if not extension:
        raise InvalidOperationError(f"Pathname has no file extension: {path}")
    return EXTENSION_FORMAT_ALIASES.get(extension, extension.upper())


# ============================================================================
# File I/O
# ============================================================================

def load_image(path: PathLike) -> PixelImage:
    """
    Read an image file.

    Args:
        path: File to read; ".ppm" is parsed as plain-text PPM, anything
              else is decoded by Pillow

    Returns:
        A newly created PixelImage

    Raises:
        InvalidOperationError: If the file is missing, unreadable or malformed
    """
    path = Path(path)

    if _is_ppm(path):
        try:
            with path.open("r", encoding="ascii") as handle:
                image = read_ppm(handle)
        except FileNotFoundError as e:
            raise InvalidOperationError(f"File not found: {path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidOperationError(f"File reading failed: {path}") from e
    else:
        try:
            with Image.open(path) as pil_image:
                image = from_pil_image(pil_image)
        except FileNotFoundError as e:
            raise InvalidOperationError(f"File not found: {path}") from e
        except OSError as e:
            raise InvalidOperationError(f"File type not supported: {path}") from e

    logger.debug(f"Loaded {image.cols}x{image.rows} image from {path}")
    return image


def save_image(path: PathLike, image: PixelImage) -> Path:
    """
    Write an image to disk.

    Args:
        path: Destination; ".ppm" writes plain-text PPM, other extensions
              select the Pillow encoder
        image: Image to write

    Returns:
        The path written

    Raises:
        InvalidOperationError: If the path has no extension, the format is
                               unsupported or the file cannot be written
    """
    path = Path(path)

    if _is_ppm(path):
        try:
            path.write_text(write_ppm(image), encoding="ascii")
        except OSError as e:
            raise InvalidOperationError(f"File creation failed: {path}") from e
    else:
        save_format = _pil_format(path)
        try:
            to_pil_image(image).save(path, format=save_format)
        except KeyError as e:
            raise InvalidOperationError(f"Unsupported file format: {save_format}") from e
        except (OSError, ValueError) as e:
            raise InvalidOperationError(f"File writing failed: {path}") from e

    logger.debug(f"Saved {image.cols}x{image.rows} image to {path}")
    return path
