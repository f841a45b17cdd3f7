"""
Single import point for Pillow.

Modules that need Pillow import `Image` from here so the dependency is
declared in one place and a missing install fails with a clear message.
"""
from importlib import import_module
from types import ModuleType


def _import(name: str) -> ModuleType:
    try:
        return import_module(name)
    except ImportError as e:
        raise ImportError(
            "pillow (PIL) is required: install with 'pip install Pillow'"
        ) from e


Image = _import("PIL.Image")
