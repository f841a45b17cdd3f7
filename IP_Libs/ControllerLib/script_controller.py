"""
Line-oriented script controller.

Reads one command per line ("brighten koala koala-bright 10"), builds the
command through a CommandRegistry, runs it against an ImageCollection and
writes a one-line status message to an output stream. Failures are
reported and the session continues.

Classes:
    ScriptController: Drives an ImageCollection from script lines
"""

import logging
import shlex
import sys
from typing import Iterable, Optional, TextIO

from IP_Libs.CollectionStoreLib.image_collection import ImageCollection
from IP_Libs.CommandsLib.command_registry import CommandRegistry, get_default_registry
from IP_Libs.CommandsLib.masked_command import MaskedCommand
from IP_Libs.constants import (
    CMD_HISTOGRAM,
    CMD_MENU,
    CMD_QUIT,
    HISTOGRAM_BINS,
    SCRIPT_COMMENT_PREFIX,
)
from IP_Libs.errors import InvalidOperationError
from IP_Libs.ImageEditingLib.image_editing_ops import create_histogram_data

logger = logging.getLogger(__name__)


class ScriptController:
    """
    Runs script lines against an image collection.

    Example:
        >>> controller = ScriptController(out=io.StringIO())
        >>> controller.run([
        ...     "load images/koala.ppm koala",
        ...     "sepia koala koala-sepia",
        ...     "save out/koala-sepia.png koala-sepia",
        ... ])
    """

    def __init__(
        self,
        collection: Optional[ImageCollection] = None,
        out: Optional[TextIO] = None,
        registry: Optional[CommandRegistry] = None,
    ):
        self.collection = collection if collection is not None else ImageCollection()
        self.out = out if out is not None else sys.stdout
        self.registry = registry if registry is not None else get_default_registry()

    def render_message(self, message: str) -> None:
        self.out.write(message + "\n")

    def run(self, lines: Iterable[str]) -> None:
        """
        Process lines until they run out or a "quit" line is read.
        """
        self.render_message(
            "Welcome to the image processing application.\n"
            "Enter 'menu' to see the list of supported commands."
        )
        for line in lines:
            if not self.process_line(line):
                self.render_message("Image Processor quit!")
                return

    def process_line(self, line: str) -> bool:
        """
        Handle a single line.

        Returns:
            False when the line asks to quit, True otherwise
        """
        stripped = line.strip()
        if not stripped or stripped.startswith(SCRIPT_COMMENT_PREFIX):
            return True

        try:
            tokens = shlex.split(stripped)
        except ValueError as e:
            self.render_message(f"An input you entered is not valid: {e}")
            return True

        keyword, args = tokens[0].lower(), tokens[1:]

        if keyword == CMD_QUIT:
            return False
        if keyword == CMD_MENU:
            self.print_menu()
            return True
        if keyword == CMD_HISTOGRAM:
            self._run_histogram(args)
            return True
        if not self.registry.has_command(keyword):
            self.render_message(
                f"Command '{keyword}' not found!\n"
                f"Enter 'menu' to see the list of supported commands."
            )
            return True

        try:
            command = self.registry.build(keyword, args)
            self.collection.execute_command(command)
        except InvalidOperationError as e:
            logger.debug(f"'{keyword}' failed: {e}")
            self.render_message(str(e))
            return True

        if isinstance(command, MaskedCommand):
            self.render_message(f"Partial {keyword} was successful")
        else:
            self.render_message(f"{keyword.capitalize()} was successful")
        return True

    def print_menu(self) -> None:
        lines = ["Supported Commands:", "'Quit': Exits the application"]
        for keyword in self.registry.list_keywords():
            entry = self.registry.get_entry(keyword)
            lines.append(f"'{keyword.capitalize()}' {entry.usage}: {entry.description}")
        lines.append(f"'{CMD_HISTOGRAM.capitalize()}' name: Show value counts of an image")
        self.render_message("\n".join(lines))

    def _run_histogram(self, args) -> None:
        if len(args) != 1:
            self.render_message(f"'{CMD_HISTOGRAM}' expects 1 arguments, got {len(args)}")
            return
        try:
            histogram = create_histogram_data(self.collection.get_image(args[0]))
        except InvalidOperationError as e:
            self.render_message(str(e))
            return

        lines = [f"Histogram of {args[0]} (max frequency {histogram.max_frequency}):"]
        for label, table in zip(("red", "green", "blue", "intensity"), histogram.to_rows()):
            counts = " ".join(f"{v}:{table[v]}" for v in range(HISTOGRAM_BINS) if table[v])
            lines.append(f"{label}: {counts}")
        self.render_message("\n".join(lines))
