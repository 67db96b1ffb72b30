import logging

import numpy as np

from .pixel_types import background_value, pixel_dtype
from ...errors import InvalidImageError
from ...type_annotations import Corner, PixelBuffer, PixelData, Size

logger = logging.getLogger(__name__)

# A 'pixel buffer' is an uint8 numpy array, viewed in the 3D shape (height, width, channels),
# used to store data representing image pixels. (0, 0) is the top left pixel.


def new_pixel_buffer(size: Size, channels: int, value: int = background_value) -> PixelBuffer:
    """Create a new blank pixel buffer, filled with a single channel value.

    Default fill value is transparent black.

    :return: a new pixel buffer ndarray
    """
    width, height = size
    if channels > 4 or channels == 0:
        raise TypeError("A pixel can have between 1 and 4 (inclusive) channels, but found {}".format(channels))
    return np.full((height, width, channels), fill_value=value, dtype=pixel_dtype)


def pixel_buffer_from_data(data: PixelData, width: int, height: int, channels: int) -> PixelBuffer:
    """Create a read-only pixel buffer holding a copy of raw pixel data.

    data is either a flat bytes-like object of exactly width * height * channels bytes, or an ndarray of shape
    (height, width, channels). A 2D (height, width) array is accepted for single channel images.

    :return: a new read-only pixel buffer"""
    if width <= 0 or height <= 0:
        raise InvalidImageError("Image dimensions must be positive, got {}x{}".format(width, height))

    expected_shape = (height, width, channels)
    if isinstance(data, np.ndarray):
        array = data
        if array.ndim == 2 and channels == 1:
            array = array[:, :, np.newaxis]
        if array.shape != expected_shape:
            raise InvalidImageError(
                "Pixel array shape {} does not match {}".format(array.shape, expected_shape))
        if array.dtype != pixel_dtype:
            raise InvalidImageError("Pixel array dtype must be {}, got {}".format(
                np.dtype(pixel_dtype).name, array.dtype))
        buffer = np.array(array, dtype=pixel_dtype, copy=True)
    elif isinstance(data, (bytes, bytearray, memoryview)):
        expected_length = width * height * channels
        raw = bytes(data)
        if len(raw) != expected_length:
            raise InvalidImageError("Pixel data holds {} bytes, {}x{}x{} needs {}".format(
                len(raw), width, height, channels, expected_length))
        buffer = np.frombuffer(raw, dtype=pixel_dtype).reshape(expected_shape).copy()
    else:
        raise InvalidImageError("Unsupported pixel data type {}".format(type(data).__name__))

    buffer.flags.writeable = False
    return buffer


def pixel_buffer_bytes(buffer: PixelBuffer) -> bytes:
    """Raw bytes of a pixel buffer in row major order."""
    return np.ascontiguousarray(buffer).tobytes()


def pixel_buffer_paste(target_buffer: PixelBuffer, source_buffer: PixelBuffer, corner: Corner):
    """Copy a source pixel buffer into the target pixel buffer in place.

    corner is the (left, upper) pixel of the target the source's top left pixel lands on, (0, 0) being the top left.

    Pixels are copied verbatim and the source must lie completely inside the target, nothing is clipped.
    """
    if not isinstance(source_buffer, np.ndarray) or len(source_buffer.shape) != 3:
        raise TypeError("source buffer could not be parsed for pasting")

    left, upper = corner
    right = left + source_buffer.shape[1]
    lower = upper + source_buffer.shape[0]

    if target_buffer.shape[-1] != source_buffer.shape[-1]:
        raise TypeError("Source has {} channels but target has {}, they cannot be pasted".format(
            source_buffer.shape[-1], target_buffer.shape[-1]))

    buffer_height, buffer_width, _buffer_channels = target_buffer.shape
    if left < 0 or upper < 0 or right > buffer_width or lower > buffer_height:
        raise ValueError("Box {} does not fit into a {}x{} buffer".format(
            (left, upper, right, lower), buffer_width, buffer_height))

    logger.debug("Pasting into box %s of target", (left, upper, right, lower))
    target_buffer[upper:lower, left:right] = source_buffer
