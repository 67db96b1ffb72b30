"""Codec boundary between raw pixel buffers and image files.

The packer never reads or writes files itself. Decoding of ingested bytes and
encoding of rendered canvases go through an object implementing ``Codec``;
``PillowCodec`` is the implementation used when none is supplied.

Typical usage example:
    codec = PillowCodec(channels=4)
    pixels, width, height = codec.decode(png_bytes)
    with open("atlas.png", "wb") as sink:
        codec.encode(canvas, width, height, sink)
"""

import io
from typing import BinaryIO, Optional, Protocol, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from .. import globs
from ..errors import DecodeError, InvalidImageError
from ..type_annotations import PixelBuffer
from .pixels.pixel_types import pixel_dtype


class Codec(Protocol):
    """Capability interface of the external image codec."""

    def decode(self, data: bytes) -> Tuple[PixelBuffer, int, int]:
        ...

    def encode(self, pixels: PixelBuffer, width: int, height: int, sink: BinaryIO,
               format: Optional[str] = None) -> None:
        ...


def image_to_pixel_buffer(img: Image.Image, channels: int) -> PixelBuffer:
    """Convert a Pillow image into a pixel buffer with the given channel count.

    :return: a new pixel buffer containing a copy of the image's pixels"""
    mode = globs.CHANNEL_MODES[channels]
    if img.mode != mode:
        img = img.convert(mode)
    buffer = np.asarray(img, dtype=pixel_dtype)
    # View the buffer in a shape that better represents the data
    return buffer.reshape(img.height, img.width, channels)


def buffer_to_image(buffer: PixelBuffer) -> Image.Image:
    """Write a pixel buffer's pixels to a new Pillow image.

    :return: the newly created image with pixels set to the pixel buffer."""
    if buffer.shape[2] == 1:
        buffer = buffer[:, :, 0]
    return Image.fromarray(np.ascontiguousarray(buffer, dtype=pixel_dtype))


class PillowCodec:
    """Decodes and encodes images through Pillow.

    Attributes:
        channels: Channel count every decoded image is converted to.
        format: Pillow format name used by ``encode``.
    """

    def __init__(self, channels: int = globs.DEFAULT_CHANNELS, format: str = "PNG"):
        if channels not in globs.CHANNEL_MODES:
            raise ValueError("Unsupported channel count {}".format(channels))
        self.channels = channels
        self.format = format

    def decode(self, data: bytes) -> Tuple[PixelBuffer, int, int]:
        """Decode encoded image bytes.

        Args:
            data: The encoded image, in any format Pillow can read.

        Returns:
            The pixel buffer, its width and its height.

        Raises:
            DecodeError: If the data is not bytes-like or Pillow cannot read it.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise DecodeError("Image data must be bytes-like, got {}".format(type(data).__name__))
        if not data:
            raise DecodeError("No image data to decode")
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                buffer = image_to_pixel_buffer(img, self.channels)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise DecodeError("Could not decode image: {}".format(e)) from e
        height, width = buffer.shape[:2]
        return buffer, width, height

    def encode(self, pixels: PixelBuffer, width: int, height: int, sink: BinaryIO,
               format: Optional[str] = None) -> None:
        """Encode a pixel buffer into a writable binary sink.

        Raises:
            InvalidImageError: If the buffer does not have the given size.
        """
        if pixels.shape[:2] != (height, width):
            raise InvalidImageError("Buffer shape {} does not match {}x{}".format(pixels.shape, width, height))
        buffer_to_image(pixels).save(sink, format=format or self.format)
