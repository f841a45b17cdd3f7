"""
Replayable image processing commands.

A command is an immutable description of one operation: the names it
reads, the name it writes and its parameters. Parameters are validated at
construction; execute() reads a private copy of the source from the
collection, runs the transformation and writes the result back under the
target name only after it succeeded.

Classes:
    ImageCommand: Base class for all commands
    BrightnessCommand: Brighten or darken by a constant
    FlipCommand: Mirror horizontally or vertically
    GreyscaleCommand: Reduce to a single component
    ColorTransformCommand: Apply a named color matrix ("Greyscale", "Sepia")
    FilterCommand: Apply a named kernel ("Blur", "Sharpen")
    DownsizeCommand: Shrink to a new width and height
    LoadCommand: Read a file into the collection
    SaveCommand: Write a stored image to a file
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from IP_Libs.constants import KNOWN_FILTERS, KNOWN_MATRICES
from IP_Libs.errors import InvalidOperationError
from IP_Libs.ImageEditingLib import image_codecs
from IP_Libs.ImageEditingLib.image_editing_ops import (
    apply_filter,
    brighten,
    downsize,
    flip,
    greyscale,
    transform_color,
)
from IP_Libs.ImageEditingLib.image_models import GreyscaleComponent, Matrix

if TYPE_CHECKING:
    from IP_Libs.CollectionStoreLib.image_collection import ImageCollection

logger = logging.getLogger(__name__)


def require_names(**names: str) -> None:
    """Raise if any of the given names is missing or blank."""
    for label, value in names.items():
        if value is None or not str(value).strip():
            raise InvalidOperationError(f"Parameters cannot be null: {label} is required")


def resolve_matrix(matrix_name: str) -> Matrix:
    """
    Look up a built-in color matrix by name.

    Raises:
        InvalidOperationError: If the name is unknown
    """
    matrix = KNOWN_MATRICES.get(matrix_name)
    if matrix is None:
        valid = ", ".join(sorted(KNOWN_MATRICES))
        raise InvalidOperationError(f"Matrix not found: {matrix_name}. Valid matrices: {valid}")
    return matrix


def resolve_filter(filter_name: str) -> Matrix:
    """
    Look up a built-in convolution kernel by name.

    Raises:
        InvalidOperationError: If the name is unknown
    """
    kernel = KNOWN_FILTERS.get(filter_name)
    if kernel is None:
        valid = ", ".join(sorted(KNOWN_FILTERS))
        raise InvalidOperationError(f"Filter not found: {filter_name}. Valid filters: {valid}")
    return kernel


class ImageCommand(ABC):
    """A unit of work run against an ImageCollection."""

    @abstractmethod
    def execute(self, collection: "ImageCollection") -> None:
        """
        Run the command.

        Args:
            collection: Store to read sources from and write results to

        Raises:
            InvalidOperationError: If a name is unknown or the operation fails
        """


# ============================================================================
# Transformations
# ============================================================================

@dataclass(frozen=True)
class BrightnessCommand(ImageCommand):
    """Brighten (positive increment) or darken (negative) an image."""
    source: str
    target: str
    increment: int

    def __post_init__(self) -> None:
        require_names(source=self.source, target=self.target)
        if isinstance(self.increment, bool) or not isinstance(self.increment, int):
            raise InvalidOperationError(f"increment must be an integer, got {self.increment!r}")

    def execute(self, collection: "ImageCollection") -> None:
        result = brighten(collection.get_image(self.source), self.increment)
        collection.add_image(self.target, result)


@dataclass(frozen=True)
class FlipCommand(ImageCommand):
    """Flip an image; vertical=True mirrors left-right, False mirrors top-bottom."""
    source: str
    target: str
    vertical: bool

    def __post_init__(self) -> None:
        require_names(source=self.source, target=self.target)
        if not isinstance(self.vertical, bool):
            raise InvalidOperationError(f"vertical must be True or False, got {self.vertical!r}")

    def execute(self, collection: "ImageCollection") -> None:
        result = flip(collection.get_image(self.source), self.vertical)
        collection.add_image(self.target, result)


@dataclass(frozen=True)
class GreyscaleCommand(ImageCommand):
    """Greyscale an image by one component; accepts the enum or its name."""
    source: str
    target: str
    component: Union[GreyscaleComponent, str]

    def __post_init__(self) -> None:
        require_names(source=self.source, target=self.target)
        if self.component is None:
            raise InvalidOperationError("Parameters cannot be null: component is required")
        object.__setattr__(self, "component", GreyscaleComponent.from_name(self.component))

    def execute(self, collection: "ImageCollection") -> None:
        result = greyscale(collection.get_image(self.source), self.component)
        collection.add_image(self.target, result)


@dataclass(frozen=True)
class ColorTransformCommand(ImageCommand):
    """Apply a named color matrix ("Greyscale" for luma, "Sepia")."""
    source: str
    target: str
    matrix_name: str
    matrix: Matrix = field(init=False, repr=False)

    def __post_init__(self) -> None:
        require_names(source=self.source, target=self.target, matrix_name=self.matrix_name)
        object.__setattr__(self, "matrix", resolve_matrix(self.matrix_name))

    def execute(self, collection: "ImageCollection") -> None:
        result = transform_color(collection.get_image(self.source), self.matrix)
        collection.add_image(self.target, result)


@dataclass(frozen=True)
class FilterCommand(ImageCommand):
    """Apply a named convolution kernel ("Blur", "Sharpen")."""
    source: str
    target: str
    filter_name: str
    kernel: Matrix = field(init=False, repr=False)

    def __post_init__(self) -> None:
        require_names(source=self.source, target=self.target, filter_name=self.filter_name)
        object.__setattr__(self, "kernel", resolve_filter(self.filter_name))

    def execute(self, collection: "ImageCollection") -> None:
        result = apply_filter(collection.get_image(self.source), self.kernel)
        collection.add_image(self.target, result)


@dataclass(frozen=True)
class DownsizeCommand(ImageCommand):
    """Shrink an image; the upper bound is checked against the source at execute time."""
    source: str
    target: str
    width: int
    height: int

    def __post_init__(self) -> None:
        require_names(source=self.source, target=self.target)
        for label, value in (("width", self.width), ("height", self.height)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidOperationError(f"{label} must be an integer, got {value!r}")
        if self.width < 1 or self.height < 1:
            raise InvalidOperationError("Dimensions must be greater than 0.")

    def execute(self, collection: "ImageCollection") -> None:
        result = downsize(collection.get_image(self.source), self.width, self.height)
        collection.add_image(self.target, result)


# ============================================================================
# File I/O
# ============================================================================

@dataclass(frozen=True)
class LoadCommand(ImageCommand):
    """Read an image file and store it under name."""
    path: str
    name: str

    def __post_init__(self) -> None:
        require_names(path=self.path, name=self.name)

    def execute(self, collection: "ImageCollection") -> None:
        image = image_codecs.load_image(self.path)
        collection.add_image(self.name, image)
        logger.info(f"Loaded '{self.name}' from {self.path}")


@dataclass(frozen=True)
class SaveCommand(ImageCommand):
    """Write the image stored under name to path."""
    path: str
    name: str

    def __post_init__(self) -> None:
        require_names(path=self.path, name=self.name)

    def execute(self, collection: "ImageCollection") -> None:
        image_codecs.save_image(self.path, collection.get_image(self.name))
        logger.info(f"Saved '{self.name}' to {self.path}")
