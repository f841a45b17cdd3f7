"""
ControllerLib - Text front end

This module provides the script controller that turns text lines into
commands against an image collection.
"""

from IP_Libs.ControllerLib.script_controller import ScriptController

__all__ = [
    "ScriptController",
]
