"""
Core image transformation operations.

Every function takes a PixelImage, works on a private copy and returns the
resulting image; the argument is never modified. All arithmetic truncates
toward zero and is clamped through Pixel.constrain().

Functions:
    flip: Mirror an image left-right or top-bottom
    brighten: Shift every channel by a constant
    greyscale: Reduce each pixel to a single component
    transform_color: Apply a 3x3 color matrix
    apply_filter: Convolve with an odd-sized kernel
    downsize: Resample to a smaller size
    create_histogram_data: Count channel and intensity values
"""

from typing import List

import numpy as np

from IP_Libs.constants import HISTOGRAM_BINS
from IP_Libs.errors import InvalidOperationError
from IP_Libs.ImageEditingLib.image_models import (
    GreyscaleComponent,
    ImageHistogram,
    Matrix,
    Pixel,
    PixelImage,
)


# ============================================================================
# Geometry
# ============================================================================

def flip(image: PixelImage, vertical: bool) -> PixelImage:
    """
    Mirror an image.

    Args:
        image: Image to flip
        vertical: True swaps column j with column (cols - 1 - j), mirroring
                  left-right. False swaps row i with row (rows - 1 - i).

    Returns:
        The flipped image
    """
    img = image.get_copy()
    rows, cols = img.rows, img.cols

    if vertical:
        for i in range(rows):
            for j in range(cols // 2):
                temp = img.get_pixel(i, j)
                img.set_pixel(i, j, img.get_pixel(i, cols - 1 - j))
                img.set_pixel(i, cols - 1 - j, temp)
    else:
        for i in range(rows // 2):
            for j in range(cols):
                temp = img.get_pixel(i, j)
                img.set_pixel(i, j, img.get_pixel(rows - 1 - i, j))
                img.set_pixel(rows - 1 - i, j, temp)

    return img


def downsize(image: PixelImage, new_width: int, new_height: int) -> PixelImage:
    """
    Resample an image to a smaller (or equal) size.

    Destination pixel (i, j) maps to source (i * rows // new_height,
    j * cols // new_width). The four floor/ceil neighbours of that point are
    summed and divided by 4 regardless of how many were in range; the max
    value comes from the last neighbour sampled.

    Args:
        image: Image to shrink
        new_width: Target column count (1..cols)
        new_height: Target row count (1..rows)

    Returns:
        A new image of new_height rows and new_width columns

    Raises:
        InvalidOperationError: If either dimension is < 1 or larger than the original
    """
    if new_width < 1 or new_height < 1:
        raise InvalidOperationError("Dimensions must be greater than 0.")
    if new_width > image.cols or new_height > image.rows:
        raise InvalidOperationError(
            "Width and height must be less than original width and height to downsize."
        )

    rows, cols = image.rows, image.cols
    downsized: List[List[Pixel]] = []

    for i in range(new_height):
        out_row = []
        for j in range(new_width):
            # Integer division keeps the sample point on the grid, so
            # floor and ceil coincide.
            old_x = j * cols // new_width
            old_y = i * rows // new_height
            top, bottom = old_y, old_y
            left, right = old_x, old_x

            r = g = b = 0
            max_value = 0
            for row, col in ((top, left), (top, right), (bottom, left), (bottom, right)):
                if not image.in_bounds(row, col):
                    continue
                sample = image.get_pixel(row, col)
                r += sample.red
                g += sample.green
                b += sample.blue
                max_value = sample.max_value

            out_row.append(Pixel(r // 4, g // 4, b // 4, max_value))
        downsized.append(out_row)

    return PixelImage(downsized)


# ============================================================================
# Per-pixel color operations
# ============================================================================

def brighten(image: PixelImage, increment: int) -> PixelImage:
    """
    Add increment to every channel, clamping at 0 and max value.

    A negative increment darkens; zero leaves the image unchanged.
    """
    img = image.get_copy()
    for i, j, pixel in image.iter_pixels():
        pixel.add(increment)
        img.set_pixel(i, j, pixel)
    return img


def greyscale(image: PixelImage, component: GreyscaleComponent) -> PixelImage:
    """
    Replace each pixel's channels with one scalar taken from that pixel.

    Args:
        image: Image to reduce
        component: Which scalar to use (red, green, blue, intensity or value)

    Returns:
        Greyscale image

    Raises:
        InvalidOperationError: If component is not a GreyscaleComponent
    """
    if not isinstance(component, GreyscaleComponent):
        raise InvalidOperationError(f"Invalid component type: {component!r}")

    img = image.get_copy()
    for i, j, pixel in image.iter_pixels():
        pixel.set_rgb(component.pick(pixel))
        img.set_pixel(i, j, pixel)
    return img


def transform_color(image: PixelImage, matrix: Matrix) -> PixelImage:
    """
    Multiply every [r, g, b] vector by a 3x3 matrix.

    Each output channel is truncated and then clamped.

    Raises:
        InvalidOperationError: If matrix is not 3x3
    """
    if len(matrix) != 3 or any(len(row) != 3 for row in matrix):
        raise InvalidOperationError("Color transformation matrix must be 3x3.")

    img = image.get_copy()
    for i, j, pixel in image.iter_pixels():
        values = pixel.channels()
        result = [sum(values[y] * matrix[x][y] for y in range(3)) for x in range(3)]
        img.set_pixel(i, j, Pixel(
            pixel.constrain(int(result[0])),
            pixel.constrain(int(result[1])),
            pixel.constrain(int(result[2])),
            pixel.max_value,
        ))
    return img


# ============================================================================
# Neighbourhood operations
# ============================================================================

def apply_filter(image: PixelImage, kernel: Matrix) -> PixelImage:
    """
    Convolve an image with a kernel centered on each pixel.

    Kernel cells whose source pixel falls outside the image are left out of
    the sum entirely, so edge and corner pixels add up fewer terms and are
    not renormalized. Reads always come from the unfiltered source.

    Args:
        image: Image to filter
        kernel: Rectangular weight matrix with odd height and width

    Returns:
        Filtered image with the same dimensions

    Raises:
        InvalidOperationError: If the kernel is empty, ragged or has an even dimension
    """
    kernel_rows = len(kernel)
    if kernel_rows == 0:
        raise InvalidOperationError("Filter kernel cannot be empty.")
    kernel_cols = len(kernel[0])
    if any(len(row) != kernel_cols for row in kernel):
        raise InvalidOperationError("Filter kernel rows must all have the same length.")
    if kernel_rows % 2 == 0 or kernel_cols % 2 == 0:
        raise InvalidOperationError(
            f"Filter kernel dimensions must be odd, got {kernel_rows}x{kernel_cols}"
        )

    half_rows = kernel_rows // 2
    half_cols = kernel_cols // 2
    img = image.get_copy()

    for i in range(image.rows):
        for j in range(image.cols):
            r = g = b = 0.0
            for x in range(kernel_rows):
                for y in range(kernel_cols):
                    src_row = i - (half_rows - x)
                    src_col = j - (half_cols - y)
                    if not image.in_bounds(src_row, src_col):
                        continue
                    weight = kernel[x][y]
                    source = image.get_pixel(src_row, src_col)
                    r += source.red * weight
                    g += source.green * weight
                    b += source.blue * weight

            center = image.get_pixel(i, j)
            img.set_pixel(i, j, Pixel(
                center.constrain(int(r)),
                center.constrain(int(g)),
                center.constrain(int(b)),
                center.max_value,
            ))

    return img


# ============================================================================
# Analysis
# ============================================================================

def create_histogram_data(image: PixelImage) -> ImageHistogram:
    """
    Count how often each value occurs per channel and for intensity.

    Returns:
        ImageHistogram with four tables of HISTOGRAM_BINS counts each

    Raises:
        InvalidOperationError: If any channel value does not fit the table
    """
    channels = np.array(
        [pixel.channels() for _, _, pixel in image.iter_pixels()],
        dtype=np.int64,
    )
    if channels.max() >= HISTOGRAM_BINS:
        raise InvalidOperationError(
            f"Histogram supports channel values below {HISTOGRAM_BINS}, got {int(channels.max())}"
        )

    intensity = channels.sum(axis=1) // 3

    def _count(values: np.ndarray) -> tuple:
        return tuple(int(n) for n in np.bincount(values, minlength=HISTOGRAM_BINS))

    return ImageHistogram(
        red=_count(channels[:, 0]),
        green=_count(channels[:, 1]),
        blue=_count(channels[:, 2]),
        intensity=_count(intensity),
    )
