"""
CollectionStoreLib - Named image storage

This module holds the in-memory collection of image variants that
commands read from and write back to.
"""

from IP_Libs.CollectionStoreLib.image_collection import ImageCollection

__all__ = [
    "ImageCollection",
]
