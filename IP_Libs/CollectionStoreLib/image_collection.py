"""
In-memory store of named image variants.

The collection is the only place images are kept between commands. Reads
and writes both deep-copy, so no caller ever holds a live reference to a
stored image and two names never share a pixel buffer.

Classes:
    ImageCollection: Named mapping of image variants that executes commands
"""

import logging
from typing import TYPE_CHECKING, Dict, List

from IP_Libs.errors import InvalidOperationError
from IP_Libs.ImageEditingLib.image_models import PixelImage

if TYPE_CHECKING:
    from IP_Libs.CommandsLib.commands import ImageCommand

logger = logging.getLogger(__name__)


class ImageCollection:
    """
    Named collection of images that commands read from and write to.

    Example:
        >>> collection = ImageCollection()
        >>> collection.execute_command(LoadCommand("images/koala.ppm", "koala"))
        >>> collection.execute_command(BrightnessCommand("koala", "koala-bright", 10))
        >>> collection.get_image("koala-bright").size
        (1024, 768)
    """

    def __init__(self):
        """Initialize an empty collection."""
        self._images: Dict[str, PixelImage] = {}

    def execute_command(self, command: "ImageCommand") -> None:
        """
        Run a command against this collection.

        Args:
            command: Any object with an execute(collection) method

        Raises:
            InvalidOperationError: If the command fails; stored images are left unchanged
        """
        if command is None:
            raise InvalidOperationError("Cannot execute a null command.")
        logger.debug(f"Executing {type(command).__name__}")
        command.execute(self)

    def get_image(self, name: str) -> PixelImage:
        """
        Get a copy of a stored image.

        Args:
            name: Name of the variant (e.g. "koala-brighter")

        Returns:
            A deep copy the caller may freely modify

        Raises:
            InvalidOperationError: If no image is stored under name
        """
        if name not in self._images:
            raise InvalidOperationError(
                f"{name} image not found. Please load an image or check that "
                f"the image name is correct."
            )
        return self._images[name].get_copy()

    def add_image(self, name: str, image: PixelImage) -> None:
        """
        Store a copy of an image under name, replacing any existing variant.

        Raises:
            InvalidOperationError: If name is empty or image is None
        """
        if not name:
            raise InvalidOperationError("Image name cannot be empty.")
        if image is None:
            raise InvalidOperationError("Cannot add a null image.")
        replaced = name in self._images
        self._images[name] = image.get_copy()
        logger.debug(f"{'Replaced' if replaced else 'Stored'} image '{name}' ({image.cols}x{image.rows})")

    def discard_image(self, name: str) -> None:
        """Forget a variant; used to roll back a masked command that failed."""
        if self._images.pop(name, None) is not None:
            logger.debug(f"Discarded image '{name}'")

    def has_image(self, name: str) -> bool:
        return name in self._images

    def list_names(self) -> List[str]:
        """Sorted names of all stored variants."""
        return sorted(self._images)

    @property
    def num_images(self) -> int:
        return len(self._images)

    def __contains__(self, name: object) -> bool:
        return name in self._images

    def __len__(self) -> int:
        return len(self._images)
