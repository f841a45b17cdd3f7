"""
Image data models for the image processor.

This module defines the core data structures used throughout the library.

Classes:
    Pixel: Mutable RGB channel triple with a per-pixel max value ceiling
    PixelImage: Rectangular grid of pixels with copy-in/copy-out access
    GreyscaleComponent: Closed set of scalars a greyscale reduction can use
    ImageHistogram: Per-value frequency tables for red, green, blue and intensity

Type Aliases:
    PixelGrid: A list of rows, each a list of Pixel objects
    Matrix: A tuple of rows of float weights (color matrices and kernels)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Sequence, Tuple

from IP_Libs.constants import DEFAULT_MAX_VALUE
from IP_Libs.errors import InvalidOperationError

Matrix = Sequence[Sequence[float]]


class Pixel:
    """
    A single RGB pixel whose channels live in [0, max_value].

    Construction rejects out-of-range channels. Every mutator routes its
    arithmetic through constrain(), so the range invariant holds after
    any change.
    """

    __slots__ = ("_red", "_green", "_blue", "_max_value")

    def __init__(self, red: int, green: int, blue: int, max_value: int = DEFAULT_MAX_VALUE):
        if red < 0 or green < 0 or blue < 0 or max_value < 0:
            raise InvalidOperationError("Pixels cannot have negative values.")
        if red > max_value or green > max_value or blue > max_value:
            raise InvalidOperationError(
                f"Pixel values cannot be greater than the maximum value ({max_value})."
            )
        self._red = int(red)
        self._green = int(green)
        self._blue = int(blue)
        self._max_value = int(max_value)

    @property
    def red(self) -> int:
        return self._red

    @property
    def green(self) -> int:
        return self._green

    @property
    def blue(self) -> int:
        return self._blue

    @property
    def max_value(self) -> int:
        """Largest value any channel may hold (255 for 24-bit RGB)."""
        return self._max_value

    def intensity(self) -> int:
        """Average of the three channels, truncated toward zero."""
        return (self._red + self._green + self._blue) // 3

    def value(self) -> int:
        """Largest of the three channels."""
        return max(self._red, self._green, self._blue)

    def constrain(self, value: int) -> int:
        """
        Clamp a value into this pixel's allowed range.

        Args:
            value: Any integer

        Returns:
            The value limited to [0, max_value]
        """
        return max(0, min(int(value), self._max_value))

    def add(self, increment: int) -> None:
        """Shift every channel by increment, clamping the result."""
        self._red = self.constrain(self._red + increment)
        self._green = self.constrain(self._green + increment)
        self._blue = self.constrain(self._blue + increment)

    def set_rgb(self, value: int) -> None:
        """Set all three channels to the same (clamped) value."""
        clamped = self.constrain(value)
        self._red = clamped
        self._green = clamped
        self._blue = clamped

    def set_red(self, value: int) -> None:
        self._red = self.constrain(value)

    def set_green(self, value: int) -> None:
        self._green = self.constrain(value)

    def set_blue(self, value: int) -> None:
        self._blue = self.constrain(value)

    def channels(self) -> Tuple[int, int, int]:
        return self._red, self._green, self._blue

    def copy(self) -> "Pixel":
        return Pixel(self._red, self._green, self._blue, self._max_value)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Pixel):
            return NotImplemented
        return (
            self._max_value == other._max_value
            and self._red == other._red
            and self._green == other._green
            and self._blue == other._blue
        )

    # Mutable value object
    __hash__ = None

    def __repr__(self) -> str:
        return f"Pixel({self._red}, {self._green}, {self._blue}, max_value={self._max_value})"

    def __str__(self) -> str:
        return f"{self._red} {self._green} {self._blue}"


PixelGrid = List[List[Pixel]]


class PixelImage:
    """
    A rectangular raster of pixels.

    The image exclusively owns its grid: the constructor copies the pixels
    it is given, get_pixel() hands out copies and set_pixel() stores a copy,
    so no internal reference ever escapes.

    Example:
        >>> image = PixelImage([[Pixel(10, 20, 30), Pixel(0, 0, 0)]])
        >>> image.size
        (2, 1)
        >>> image.get_pixel(0, 1)
        Pixel(0, 0, 0, max_value=255)
    """

    __slots__ = ("_pixels", "_rows", "_cols")

    def __init__(self, pixels: Sequence[Sequence[Pixel]]):
        if pixels is None:
            raise InvalidOperationError("Image pixels cannot be None.")
        if len(pixels) < 1 or len(pixels[0]) < 1:
            raise InvalidOperationError("An image needs at least one row and one column.")

        cols = len(pixels[0])
        grid: PixelGrid = []
        for row in pixels:
            if len(row) != cols:
                raise InvalidOperationError("Image rows must all have the same length.")
            copied_row = []
            for pixel in row:
                if not isinstance(pixel, Pixel):
                    raise InvalidOperationError(f"Expected Pixel, got {type(pixel).__name__}")
                copied_row.append(pixel.copy())
            grid.append(copied_row)

        self._pixels = grid
        self._rows = len(grid)
        self._cols = cols

    @classmethod
    def filled(cls, rows: int, cols: int, pixel: Pixel) -> "PixelImage":
        """Create a rows x cols image where every pixel equals `pixel`."""
        if rows < 1 or cols < 1:
            raise InvalidOperationError("An image needs at least one row and one column.")
        return cls([[pixel for _ in range(cols)] for _ in range(rows)])

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height), matching the Pillow convention."""
        return self._cols, self._rows

    @property
    def max_value(self) -> int:
        """Max value of the top-left pixel, used as the image's header value."""
        return self._pixels[0][0].max_value

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._rows and 0 <= col < self._cols

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise InvalidOperationError(
                f"Pixel ({row}, {col}) is out of range for a {self._rows}x{self._cols} image."
            )

    def get_pixel(self, row: int, col: int) -> Pixel:
        """Return a copy of the pixel at (row, col)."""
        self._check_bounds(row, col)
        return self._pixels[row][col].copy()

    def set_pixel(self, row: int, col: int, pixel: Pixel) -> None:
        """Store a copy of `pixel` at (row, col)."""
        self._check_bounds(row, col)
        if pixel is None:
            raise InvalidOperationError("Cannot set a pixel to None.")
        self._pixels[row][col] = pixel.copy()

    def get_copy(self) -> "PixelImage":
        """Deep copy: every pixel of the result is a new object."""
        return PixelImage(self._pixels)

    def iter_pixels(self) -> Iterator[Tuple[int, int, Pixel]]:
        """Yield (row, col, pixel copy) in row-major order."""
        for i in range(self._rows):
            for j in range(self._cols):
                yield i, j, self._pixels[i][j].copy()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, PixelImage):
            return NotImplemented
        if self._rows != other._rows or self._cols != other._cols:
            return False
        return self._pixels == other._pixels

    __hash__ = None

    def __repr__(self) -> str:
        return f"PixelImage(rows={self._rows}, cols={self._cols}, max_value={self.max_value})"


class GreyscaleComponent(Enum):
    """Scalar assigned to all three channels by a greyscale reduction."""

    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    INTENSITY = "intensity"
    VALUE = "value"

    @classmethod
    def from_name(cls, name: str) -> "GreyscaleComponent":
        """
        Resolve a component from its name (case-insensitive).

        Raises:
            InvalidOperationError: If the name is not a known component
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        for component in cls:
            if component.value == key:
                return component
        valid = ", ".join(c.value for c in cls)
        raise InvalidOperationError(f"Unknown greyscale component: {name}. Valid components: {valid}")

    def pick(self, pixel: Pixel) -> int:
        if self is GreyscaleComponent.RED:
            return pixel.red
        if self is GreyscaleComponent.GREEN:
            return pixel.green
        if self is GreyscaleComponent.BLUE:
            return pixel.blue
        if self is GreyscaleComponent.INTENSITY:
            return pixel.intensity()
        return pixel.value()


@dataclass(frozen=True)
class ImageHistogram:
    """Frequency tables indexed by channel value.

    Attributes:
        red: Count of pixels per red value
        green: Count of pixels per green value
        blue: Count of pixels per blue value
        intensity: Count of pixels per intensity value
    """
    red: Tuple[int, ...]
    green: Tuple[int, ...]
    blue: Tuple[int, ...]
    intensity: Tuple[int, ...]

    @property
    def max_frequency(self) -> int:
        """Largest count across all four tables, for scaling a plot."""
        return max(max(self.red), max(self.green), max(self.blue), max(self.intensity))

    def to_rows(self) -> List[List[int]]:
        """Tables as [red, green, blue, intensity] lists."""
        return [list(self.red), list(self.green), list(self.blue), list(self.intensity)]
