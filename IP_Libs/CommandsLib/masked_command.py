"""
Partial (masked) application of any command.

MaskedCommand wraps an unmodified inner command. It snapshots the source
image, lets the inner command write its full result to the target name,
then walks a mask image of the same size: where the mask pixel is pure
black (0, 0, 0 with max value 255) the edited pixel is kept, anywhere
else the pixel reverts to the snapshot. The merged image replaces the full
result under the target name.

Example:
    >>> inner = BrightnessCommand("koala", "koala-partial", 50)
    >>> collection.execute_command(
    ...     MaskedCommand(inner, "koala", "koala-partial", "koala-mask")
    ... )
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from IP_Libs.CommandsLib.commands import ImageCommand, require_names
from IP_Libs.constants import MASK_KEEP_COLOR, MASK_KEEP_MAX_VALUE
from IP_Libs.errors import InvalidOperationError
from IP_Libs.ImageEditingLib.image_models import Pixel, PixelImage

if TYPE_CHECKING:
    from IP_Libs.CollectionStoreLib.image_collection import ImageCollection

logger = logging.getLogger(__name__)

KEEP_PIXEL = Pixel(*MASK_KEEP_COLOR, MASK_KEEP_MAX_VALUE)


@dataclass(frozen=True)
class MaskedCommand(ImageCommand):
    """Run `command` only where `mask` is black.

    Attributes:
        command: Command with a `target` equal to this one's; it writes its
                 full result there
        source: Name of the pre-edit image to revert from
        target: Name the inner command writes to and the merged result replaces
        mask: Name of the stencil image, same size as the result
    """
    command: ImageCommand
    source: str
    target: str
    mask: str

    def __post_init__(self) -> None:
        if self.command is None:
            raise InvalidOperationError("Parameters cannot be null: command is required")
        require_names(source=self.source, target=self.target, mask=self.mask)
        # Rollback only covers the target, so the inner command may write nowhere else.
        inner_target = getattr(self.command, "target", None)
        if inner_target != self.target:
            raise InvalidOperationError(
                f"Masked {type(self.command).__name__} must write to '{self.target}', "
                f"not {inner_target!r}"
            )

    def execute(self, collection: "ImageCollection") -> None:
        original = collection.get_image(self.source)
        previous = collection.get_image(self.target) if collection.has_image(self.target) else None

        collection.execute_command(self.command)

        try:
            merged = self._merge(collection, original)
        except InvalidOperationError:
            # The inner command already wrote its full result; undo it.
            if previous is not None:
                collection.add_image(self.target, previous)
            else:
                collection.discard_image(self.target)
            raise

        collection.add_image(self.target, merged)

    def _merge(self, collection: "ImageCollection", original: PixelImage) -> PixelImage:
        edited = collection.get_image(self.target)
        mask = collection.get_image(self.mask)

        if mask.rows != edited.rows or mask.cols != edited.cols:
            raise InvalidOperationError(
                f"Image must be the same size as its mask counterpart: "
                f"image is {edited.cols}x{edited.rows}, mask is {mask.cols}x{mask.rows}"
            )
        if original.rows != edited.rows or original.cols != edited.cols:
            raise InvalidOperationError(
                f"Masked commands must preserve the image size: "
                f"{original.cols}x{original.rows} became {edited.cols}x{edited.rows}"
            )

        reverted = 0
        for i, j, stencil in mask.iter_pixels():
            if stencil != KEEP_PIXEL:
                edited.set_pixel(i, j, original.get_pixel(i, j))
                reverted += 1

        logger.debug(
            f"Masked {type(self.command).__name__}: kept {mask.rows * mask.cols - reverted} "
            f"pixel(s), reverted {reverted}"
        )
        return edited
