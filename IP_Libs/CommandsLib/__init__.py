"""
CommandsLib - Replayable image commands

This module provides the command objects run against an ImageCollection,
the masking decorator and the keyword registry used by controllers.
"""

from IP_Libs.CommandsLib.commands import (
    ImageCommand,
    BrightnessCommand,
    FlipCommand,
    GreyscaleCommand,
    ColorTransformCommand,
    FilterCommand,
    DownsizeCommand,
    LoadCommand,
    SaveCommand,
    resolve_matrix,
    resolve_filter,
)
from IP_Libs.CommandsLib.masked_command import MaskedCommand
from IP_Libs.CommandsLib.command_registry import (
    CommandEntry,
    CommandRegistry,
    get_default_registry,
    register_default_commands,
)

__all__ = [
    "ImageCommand",
    "BrightnessCommand",
    "FlipCommand",
    "GreyscaleCommand",
    "ColorTransformCommand",
    "FilterCommand",
    "DownsizeCommand",
    "LoadCommand",
    "SaveCommand",
    "resolve_matrix",
    "resolve_filter",
    "MaskedCommand",
    "CommandEntry",
    "CommandRegistry",
    "get_default_registry",
    "register_default_commands",
]
