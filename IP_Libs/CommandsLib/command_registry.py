"""
Script keyword table.

Every script line has the shape "keyword first [mask] second extra...":
two names (source/target for edits, path/name for file I/O), an optional
mask name between them for keywords that allow partial application, and a
fixed number of trailing arguments such as an amount or a size. The
registry keeps one CommandEntry per keyword and turns argument tokens into
ready-to-run commands, wrapping them in MaskedCommand when a mask is given.

Classes:
    CommandEntry: How one keyword is built and described
    CommandRegistry: Keyword to CommandEntry table

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_commands: Register all built-in keywords
"""

from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Sequence
import logging

from IP_Libs.CommandsLib.commands import (
    BrightnessCommand,
    ColorTransformCommand,
    DownsizeCommand,
    FilterCommand,
    FlipCommand,
    GreyscaleCommand,
    ImageCommand,
    LoadCommand,
    SaveCommand,
)
from IP_Libs.CommandsLib.masked_command import MaskedCommand
from IP_Libs.constants import FILTER_BLUR, FILTER_SHARPEN, MATRIX_GREYSCALE, MATRIX_SEPIA
from IP_Libs.errors import InvalidOperationError
from IP_Libs.ImageEditingLib.image_models import GreyscaleComponent

logger = logging.getLogger(__name__)

# build(first_name, second_name, extra_args) -> command
CommandBuilder = Callable[[str, str, Sequence[str]], ImageCommand]


@dataclass(frozen=True)
class CommandEntry:
    """One script keyword.

    Attributes:
        keyword: Lower-case keyword
        build: Callable(first, second, extra_args) returning the plain command
        description: Menu text
        extra: Number of arguments after the two names
        maskable: Whether "first mask second ..." is accepted
    """
    keyword: str
    build: CommandBuilder
    description: str = ""
    extra: int = 0
    maskable: bool = False
    first: str = "src"
    second: str = "dst"
    extra_labels: Sequence[str] = ()

    @property
    def usage(self) -> str:
        names = [self.first, "[mask]", self.second] if self.maskable else [self.first, self.second]
        return " ".join(names + list(self.extra_labels))

    def arg_counts(self) -> List[int]:
        plain = 2 + self.extra
        return [plain, plain + 1] if self.maskable else [plain]

    def make(self, args: Sequence[str]) -> ImageCommand:
        """
        Build the command for a list of argument tokens.

        Raises:
            InvalidOperationError: On a wrong argument count or bad extra argument
        """
        counts = self.arg_counts()
        if len(args) not in counts:
            expected = " or ".join(str(c) for c in counts)
            raise InvalidOperationError(
                f"'{self.keyword}' expects {expected} arguments, got {len(args)}"
            )
        if len(args) == 2 + self.extra:
            return self.build(args[0], args[1], args[2:])
        first, mask, second = args[0], args[1], args[2]
        return MaskedCommand(self.build(first, second, args[3:]), first, second, mask)


class CommandRegistry:
    """
    Table of script keywords.

    Example:
        >>> registry = CommandRegistry()
        >>> registry.register(CommandEntry(
        ...     "brighten",
        ...     lambda s, t, rest: BrightnessCommand(s, t, int(rest[0])),
        ...     extra=1,
        ...     maskable=True,
        ... ))
        >>> command = registry.build("brighten", ["koala", "koala-mask", "koala-bright", "10"])
        >>> collection.execute_command(command)
    """

    def __init__(self):
        self._entries: Dict[str, CommandEntry] = {}

    def register(self, entry: CommandEntry) -> None:
        """
        Add a keyword.

        Raises:
            ValueError: If the keyword is blank or the builder is not callable
            RuntimeError: If the keyword is taken
        """
        keyword = str(entry.keyword).strip().lower()
        if not keyword:
            raise ValueError("keyword cannot be empty")
        if not callable(entry.build):
            raise ValueError(f"build must be callable, got {type(entry.build)}")
        if keyword in self._entries:
            raise RuntimeError(f"Keyword '{keyword}' is already registered")

        self._entries[keyword] = replace(entry, keyword=keyword)
        logger.debug(f"Registered keyword: {keyword}")

    def has_command(self, keyword: str) -> bool:
        return str(keyword).strip().lower() in self._entries

    def get_entry(self, keyword: str) -> CommandEntry:
        """
        Raises:
            KeyError: If keyword is not registered
        """
        keyword = str(keyword).strip().lower()
        if keyword not in self._entries:
            raise KeyError(f"No command registered for keyword '{keyword}'")
        return self._entries[keyword]

    def build(self, keyword: str, args: Sequence[str]) -> ImageCommand:
        """
        Build a command from a keyword and its argument tokens.

        Raises:
            KeyError: If keyword is not registered
            InvalidOperationError: If the arguments do not fit the keyword
        """
        return self.get_entry(keyword).make(list(args))

    def list_keywords(self) -> List[str]:
        """Sorted list of registered keywords."""
        return sorted(self._entries)


def _parse_int(token: str, label: str) -> int:
    try:
        return int(token)
    except (TypeError, ValueError) as e:
        raise InvalidOperationError(f"{label} must be an integer, got '{token}'") from e


# ============================================================================
# Default registry
# ============================================================================

_default_registry: Optional[CommandRegistry] = None


def get_default_registry() -> CommandRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers the built-in keywords.
    """
    global _default_registry

    if _default_registry is None:
        _default_registry = CommandRegistry()
        register_default_commands(_default_registry)

    return _default_registry


def register_default_commands(registry: CommandRegistry) -> None:
    """
    Register all built-in keywords.

    Every image-to-image keyword except downsize also accepts a mask name.
    """
    registry.register(CommandEntry(
        "load", lambda path, name, rest: LoadCommand(path, name),
        description="Load an image file under a name",
        first="path", second="name",
    ))
    registry.register(CommandEntry(
        "save", lambda path, name, rest: SaveCommand(path, name),
        description="Save a named image to a file (format from extension)",
        first="path", second="name",
    ))

    for keyword, sign in (("brighten", 1), ("darken", -1)):
        registry.register(CommandEntry(
            keyword,
            lambda s, t, rest, k=sign: BrightnessCommand(s, t, k * _parse_int(rest[0], "amount")),
            description=f"{keyword.capitalize()} an image by an amount",
            extra=1, maskable=True, extra_labels=("amount",),
        ))

    for keyword, vertical in (("flip-horizontal", False), ("flip-vertical", True)):
        registry.register(CommandEntry(
            keyword,
            lambda s, t, rest, v=vertical: FlipCommand(s, t, v),
            description=f"Flip an image {'left-right' if vertical else 'top-bottom'}",
            maskable=True,
        ))

    for component in GreyscaleComponent:
        registry.register(CommandEntry(
            f"{component.value}-component",
            lambda s, t, rest, c=component: GreyscaleCommand(s, t, c),
            description=f"Greyscale an image using its {component.value} component",
            maskable=True,
        ))

    for keyword, matrix_name in (("greyscale", MATRIX_GREYSCALE), ("sepia", MATRIX_SEPIA)):
        registry.register(CommandEntry(
            keyword,
            lambda s, t, rest, m=matrix_name: ColorTransformCommand(s, t, m),
            description=f"Apply the {matrix_name} color matrix",
            maskable=True,
        ))

    for keyword, filter_name in (("blur", FILTER_BLUR), ("sharpen", FILTER_SHARPEN)):
        registry.register(CommandEntry(
            keyword,
            lambda s, t, rest, f=filter_name: FilterCommand(s, t, f),
            description=f"Apply the {filter_name} filter",
            maskable=True,
        ))

    registry.register(CommandEntry(
        "downsize",
        lambda s, t, rest: DownsizeCommand(
            s, t, _parse_int(rest[0], "width"), _parse_int(rest[1], "height")
        ),
        description="Shrink an image to a new width and height",
        extra=2, extra_labels=("width", "height"),
    ))

    logger.info("Registered default command keywords")
