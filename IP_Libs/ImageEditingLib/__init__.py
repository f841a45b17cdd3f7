"""
ImageEditingLib - Core image editing functionality

This module provides the pixel and image models, the transformation
engine and the file codecs.
"""

from IP_Libs.ImageEditingLib.image_models import (
    Pixel,
    PixelImage,
    GreyscaleComponent,
    ImageHistogram,
)
from IP_Libs.ImageEditingLib.image_editing_ops import (
    flip,
    brighten,
    greyscale,
    transform_color,
    apply_filter,
    downsize,
    create_histogram_data,
)
from IP_Libs.ImageEditingLib.image_codecs import (
    load_image,
    save_image,
    read_ppm,
    write_ppm,
    from_pil_image,
    to_pil_image,
)

__all__ = [
    "Pixel",
    "PixelImage",
    "GreyscaleComponent",
    "ImageHistogram",
    "flip",
    "brighten",
    "greyscale",
    "transform_color",
    "apply_filter",
    "downsize",
    "create_histogram_data",
    "load_image",
    "save_image",
    "read_ppm",
    "write_ppm",
    "from_pil_image",
    "to_pil_image",
]
