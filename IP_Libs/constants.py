"""
Constants and configuration values for the image processor.

This module centralizes all constant values, built-in matrices and kernels,
and file format settings used throughout the library.
"""

# Pixel model
DEFAULT_MAX_VALUE = 255
HISTOGRAM_BINS = 256

# Color transformation matrices (rows produce r, g, b)
LUMA_MATRIX = (
    (0.2126, 0.7152, 0.0722),
    (0.2126, 0.7152, 0.0722),
    (0.2126, 0.7152, 0.0722),
)
SEPIA_MATRIX = (
    (0.393, 0.769, 0.189),
    (0.349, 0.686, 0.168),
    (0.272, 0.534, 0.131),
)

# Convolution kernels (odd dimensions, centered)
BLUR_KERNEL = (
    (0.0625, 0.125, 0.0625),
    (0.125, 0.25, 0.125),
    (0.0625, 0.125, 0.0625),
)
SHARPEN_KERNEL = (
    (-0.125, -0.125, -0.125, -0.125, -0.125),
    (-0.125, 0.25, 0.25, 0.25, -0.125),
    (-0.125, 0.25, 1.0, 0.25, -0.125),
    (-0.125, 0.25, 0.25, 0.25, -0.125),
    (-0.125, -0.125, -0.125, -0.125, -0.125),
)

# Named lookups resolved at command construction
MATRIX_GREYSCALE = "Greyscale"
MATRIX_SEPIA = "Sepia"
FILTER_BLUR = "Blur"
FILTER_SHARPEN = "Sharpen"

KNOWN_MATRICES = {
    MATRIX_GREYSCALE: LUMA_MATRIX,
    MATRIX_SEPIA: SEPIA_MATRIX,
}
KNOWN_FILTERS = {
    FILTER_BLUR: BLUR_KERNEL,
    FILTER_SHARPEN: SHARPEN_KERNEL,
}

# Mask stencil: pixels equal to Pixel(*MASK_KEEP_COLOR, MASK_KEEP_MAX_VALUE) keep the edit
MASK_KEEP_COLOR = (0, 0, 0)
MASK_KEEP_MAX_VALUE = DEFAULT_MAX_VALUE

# PPM (plain text) format
PPM_EXTENSION = ".ppm"
PPM_MAGIC = "P3"
PPM_COMMENT_PREFIX = "#"
PPM_CREATOR_COMMENT = "# Image created by program."

# Pillow format names that differ from the file extension
EXTENSION_FORMAT_ALIASES = {
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "tif": "TIFF",
}

# Script controller keywords
CMD_QUIT = "quit"
CMD_MENU = "menu"
CMD_HISTOGRAM = "histogram"
SCRIPT_COMMENT_PREFIX = "#"
SCRIPT_FILE_FLAG = "-file"
