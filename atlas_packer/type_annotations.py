"""Type annotations for the atlas packer.

This module defines custom type hints used throughout the package to keep
signatures readable. It centralizes the pixel buffer and geometry aliases to
avoid repetition and ensure consistency.
"""

from typing import BinaryIO, Callable, Tuple, Union

from numpy import ndarray

Size = Tuple[int, int]

# A 'pixel buffer' is an uint8 numpy array viewed in the 3D shape
# (height, width, channels), origin at the top left pixel.
PixelBuffer = ndarray

PixelData = Union[bytes, bytearray, memoryview, ndarray]

# (left, upper) pixel a buffer is pasted at
Corner = Tuple[int, int]

SinkFactory = Callable[[int], BinaryIO]
