"""
IP_Libs - Image Processing Library Modules

This package contains core functionality for the image processor,
organized into specialized sub-packages:

- ImageEditingLib: Pixel/image models, transformation engine and codecs
- CommandsLib: Replayable commands, the masking decorator and the command registry
- CollectionStoreLib: Named in-memory store of image variants
- ControllerLib: Line-oriented script controller
"""

__version__ = "0.1.0"
