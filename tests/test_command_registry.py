"""
Tests for Command Registry.

Tests cover:
- Registry creation and keyword registration
- Entry usage text and argument counts
- Building commands from argument tokens (plain and masked)
- Error handling
- Singleton pattern
"""

import unittest

from IP_Libs.CommandsLib.command_registry import (
    CommandEntry,
    CommandRegistry,
    get_default_registry,
    register_default_commands,
)
from IP_Libs.CommandsLib.commands import (
    BrightnessCommand,
    ColorTransformCommand,
    DownsizeCommand,
    FilterCommand,
    FlipCommand,
    GreyscaleCommand,
    LoadCommand,
    SaveCommand,
)
from IP_Libs.CommandsLib.masked_command import MaskedCommand
from IP_Libs.errors import InvalidOperationError
from IP_Libs.ImageEditingLib.image_models import GreyscaleComponent


def _flip(source, target, rest):
    return FlipCommand(source, target, True)


class TestCommandRegistry(unittest.TestCase):
    """Test CommandRegistry basic functionality."""

    def setUp(self):
        """Create a fresh registry for each test."""
        self.registry = CommandRegistry()

    def test_registry_creation(self):
        self.assertEqual(len(self.registry.list_keywords()), 0)

    def test_register_entry(self):
        self.registry.register(CommandEntry("Flip", _flip, description="Flips"))

        self.assertTrue(self.registry.has_command("flip"))
        self.assertTrue(self.registry.has_command("FLIP"))
        self.assertEqual(self.registry.list_keywords(), ["flip"])
        self.assertEqual(self.registry.get_entry("flip").keyword, "flip")
        self.assertEqual(self.registry.get_entry("flip").description, "Flips")

    def test_register_empty_keyword_raises_error(self):
        with self.assertRaises(ValueError):
            self.registry.register(CommandEntry("  ", _flip))

    def test_register_non_callable_raises_error(self):
        with self.assertRaises(ValueError):
            self.registry.register(CommandEntry("flip", "not callable"))

    def test_register_duplicate_raises_error(self):
        self.registry.register(CommandEntry("flip", _flip))

        with self.assertRaises(RuntimeError):
            self.registry.register(CommandEntry("Flip", _flip))

    def test_unknown_keyword_raises_key_error(self):
        with self.assertRaises(KeyError):
            self.registry.get_entry("missing")
        with self.assertRaises(KeyError):
            self.registry.build("missing", ["a", "b"])

    def test_build_passes_extra_args(self):
        self.registry.register(CommandEntry(
            "brighten",
            lambda s, t, rest: BrightnessCommand(s, t, int(rest[0])),
            extra=1,
        ))

        command = self.registry.build("brighten", ["a", "b", "3"])

        self.assertEqual(command, BrightnessCommand("a", "b", 3))


class TestCommandEntry(unittest.TestCase):
    """Test the plain and masked argument forms of one keyword."""

    def setUp(self):
        self.entry = CommandEntry("flip-vertical", _flip, maskable=True)

    def test_plain_form(self):
        self.assertEqual(self.entry.make(["a", "b"]), FlipCommand("a", "b", True))

    def test_masked_form(self):
        command = self.entry.make(["a", "m", "b"])

        self.assertIsInstance(command, MaskedCommand)
        self.assertEqual(command.command, FlipCommand("a", "b", True))
        self.assertEqual((command.source, command.target, command.mask), ("a", "b", "m"))

    def test_wrong_arity(self):
        with self.assertRaises(InvalidOperationError):
            self.entry.make(["a"])
        with self.assertRaises(InvalidOperationError):
            self.entry.make(["a", "b", "c", "d"])

    def test_not_maskable_rejects_mask(self):
        entry = CommandEntry("flip-vertical", _flip)

        self.assertEqual(entry.arg_counts(), [2])
        with self.assertRaises(InvalidOperationError):
            entry.make(["a", "m", "b"])

    def test_usage(self):
        self.assertEqual(self.entry.usage, "src [mask] dst")
        entry = CommandEntry(
            "downsize", _flip, extra=2, extra_labels=("width", "height"),
        )
        self.assertEqual(entry.usage, "src dst width height")
        self.assertEqual(entry.arg_counts(), [4])


class TestDefaultCommands(unittest.TestCase):
    """Test the built-in keywords."""

    def setUp(self):
        self.registry = CommandRegistry()
        register_default_commands(self.registry)

    def test_all_keywords_registered(self):
        expected = {
            "load", "save", "brighten", "darken",
            "flip-horizontal", "flip-vertical",
            "red-component", "green-component", "blue-component",
            "value-component", "intensity-component",
            "greyscale", "sepia", "blur", "sharpen", "downsize",
        }
        self.assertEqual(set(self.registry.list_keywords()), expected)

    def test_load_and_save(self):
        self.assertEqual(self.registry.build("load", ["in.ppm", "koala"]),
                         LoadCommand("in.ppm", "koala"))
        self.assertEqual(self.registry.build("save", ["out.png", "koala"]),
                         SaveCommand("out.png", "koala"))
        self.assertEqual(self.registry.get_entry("load").usage, "path name")

    def test_brighten_and_darken(self):
        self.assertEqual(self.registry.build("brighten", ["a", "b", "10"]),
                         BrightnessCommand("a", "b", 10))
        self.assertEqual(self.registry.build("darken", ["a", "b", "10"]),
                         BrightnessCommand("a", "b", -10))

    def test_masked_darken(self):
        command = self.registry.build("darken", ["a", "mask", "b", "10"])

        self.assertIsInstance(command, MaskedCommand)
        self.assertEqual(command.command, BrightnessCommand("a", "b", -10))
        self.assertEqual(command.mask, "mask")

    def test_non_integer_amount(self):
        with self.assertRaises(InvalidOperationError):
            self.registry.build("brighten", ["a", "b", "lots"])

    def test_flip(self):
        self.assertEqual(self.registry.build("flip-vertical", ["a", "b"]),
                         FlipCommand("a", "b", True))
        self.assertEqual(self.registry.build("flip-horizontal", ["a", "b"]),
                         FlipCommand("a", "b", False))

    def test_components(self):
        command = self.registry.build("intensity-component", ["a", "b"])

        self.assertIsInstance(command, GreyscaleCommand)
        self.assertIs(command.component, GreyscaleComponent.INTENSITY)

    def test_color_and_filters(self):
        self.assertEqual(self.registry.build("sepia", ["a", "b"]),
                         ColorTransformCommand("a", "b", "Sepia"))
        self.assertEqual(self.registry.build("greyscale", ["a", "b"]),
                         ColorTransformCommand("a", "b", "Greyscale"))
        self.assertEqual(self.registry.build("blur", ["a", "b"]),
                         FilterCommand("a", "b", "Blur"))
        self.assertEqual(self.registry.build("sharpen", ["a", "m", "b"]).command,
                         FilterCommand("a", "b", "Sharpen"))

    def test_downsize(self):
        self.assertEqual(self.registry.build("downsize", ["a", "b", "4", "3"]),
                         DownsizeCommand("a", "b", 4, 3))
        with self.assertRaises(InvalidOperationError):
            self.registry.build("downsize", ["a", "m", "b", "4", "3"])

    def test_maskable_keywords(self):
        self.assertTrue(self.registry.get_entry("blur").maskable)
        self.assertFalse(self.registry.get_entry("downsize").maskable)
        self.assertFalse(self.registry.get_entry("load").maskable)
        with self.assertRaises(InvalidOperationError):
            self.registry.build("load", ["in.ppm", "mask", "koala"])


class TestDefaultRegistry(unittest.TestCase):
    """Test the global singleton."""

    def test_singleton(self):
        self.assertIs(get_default_registry(), get_default_registry())

    def test_has_defaults(self):
        self.assertTrue(get_default_registry().has_command("sepia"))


if __name__ == "__main__":
    unittest.main()
