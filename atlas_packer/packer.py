"""Packer orchestrating ingestion, placement and rendering.

This module provides the entry point of the package. A ``Packer`` owns its
configuration and the registry of ingested images, and every ``pack()`` call
recomputes the whole layout from the full set of images.

Typical usage example:
    packer = Packer(Config(texture_width=512, texture_height=512))
    handle = packer.add_image_bytes(png_bytes)
    packer.pack()
    atlas = packer.output_images[0]
    x, y = handle.placement.x, handle.placement.y
"""

import logging
from typing import BinaryIO, List, Optional

from . import globs
from .combiner import render_canvases
from .config import Config, default_config
from .errors import DecodeError, InvalidConfigError, PackerError
from .type_annotations import PixelBuffer, PixelData, SinkFactory
from .utils.codec import Codec, PillowCodec
from .utils.images import DuplicateOf, ImageRegistry, InputImage, Placed, Placement
from .utils.packers.bin_packer import BinPacker, Canvas

logger = logging.getLogger(__name__)


class Packer:
    """Packs ingested images into one or more canvases.

    Ingestion may happen from several threads. ``pack()`` must not run
    concurrently with itself or with ingestion on the same instance.

    Attributes:
        config: Options applied by the next ``pack()`` call.
        codec: Decoder used by ``add_image_bytes``/``add_image_reader`` and
            encoder used by ``save_output_images``.
    """

    def __init__(self, config: Optional[Config] = None, codec: Optional[Codec] = None):
        self.config = config if config is not None else default_config()
        self.codec = codec if codec is not None else PillowCodec(self.config.channels)
        self._registry = ImageRegistry(self.config.channels)
        self._canvases: List[Canvas] = []
        self._output_images: List[PixelBuffer] = []

    @property
    def images(self) -> List[InputImage]:
        """Every ingested image, in insertion order."""
        return self._registry.snapshot()

    @property
    def canvases(self) -> List[Canvas]:
        """Canvases of the last successful ``pack()``, in creation order."""
        return list(self._canvases)

    @property
    def output_images(self) -> List[PixelBuffer]:
        """Rendered canvases of the last successful ``pack()``, in creation order."""
        return list(self._output_images)

    def add_image(self, pixels: PixelData, width: int, height: int) -> InputImage:
        """Ingest decoded pixels.

        Args:
            pixels: Flat bytes of width * height * channels, or a uint8 ndarray
                of shape (height, width, channels).
            width: Image width in pixels.
            height: Image height in pixels.

        Returns:
            The handle of the new image.

        Raises:
            InvalidImageError: If the dimensions are not positive or the pixel
                data does not match them.
        """
        return self._registry.add(pixels, width, height)

    def add_image_bytes(self, data: bytes) -> InputImage:
        """Decode an encoded image through the codec and ingest it.

        Raises:
            DecodeError: If the codec cannot decode the data.
            InvalidImageError: If the decoded image is empty.
        """
        pixels, width, height = self.codec.decode(data)
        return self.add_image(pixels, width, height)

    def add_image_reader(self, stream: BinaryIO) -> InputImage:
        """Read an encoded image from a binary stream and ingest it.

        Raises:
            DecodeError: If the stream cannot be read or decoded.
        """
        try:
            data = stream.read()
        except (OSError, ValueError) as e:
            raise DecodeError("Could not read image stream: {}".format(e)) from e
        if not isinstance(data, (bytes, bytearray)):
            raise DecodeError("Image stream must be binary, got {}".format(type(data).__name__))
        return self.add_image_bytes(bytes(data))

    def pack(self) -> None:
        """Place every ingested image and render the canvases.

        The layout is recomputed from all images ingested so far. Results are
        only committed when the whole call succeeds; on failure the results of
        the previous successful call stay in place.

        Raises:
            InvalidConfigError: If the configuration is invalid.
            ImageTooLargeError: If an image can never fit a permitted canvas.
            GrowthLimitExceededError: If the canvas cannot grow far enough.
            BinLimitExceededError: If too many canvases are needed.
        """
        try:
            config = self.config.copy()
            if config.channels != self._registry.channels:
                raise InvalidConfigError(
                    "channels changed from {} to {} after images were ingested".format(
                        self._registry.channels, config.channels
                    )
                )

            images = self._registry.snapshot()
            logger.debug("[%s] %d images", globs.PackStates.SORTING, len(images))
            pending = self._registry.pending(images)

            bin_packer = BinPacker(config)
            canvases = bin_packer.pack(pending)

            logger.debug("[%s] %d canvases", globs.PackStates.RENDERING, len(canvases))
            output_images = render_canvases(canvases, images, config.channels)
        except PackerError as e:
            logger.warning("[%s] %s", globs.PackStates.FAILED, e)
            raise

        placements = {}
        for canvas in canvases:
            for placement in canvas.placements:
                placements[placement.image_id] = Placed(canvas.index, placement.x, placement.y)
        for image in images:
            if not image.is_duplicate:
                image.placement = placements[image.id]

        self._canvases = canvases
        self._output_images = output_images
        logger.info(
            "[%s] %d images (%d duplicates) on %d canvases %s, %d growth steps, plot ratio %s",
            globs.PackStates.DONE,
            len(images),
            len(images) - len(pending),
            len(canvases),
            ", ".join("{}x{}".format(c.width, c.height) for c in canvases),
            bin_packer.growth_steps,
            ", ".join("{:.3f}".format(c.plot_ratio) for c in canvases),
        )

    def resolve(self, image: InputImage) -> Placement:
        """Placement of an image, following a duplicate to its original."""
        placement = image.placement
        if isinstance(placement, DuplicateOf):
            return self._registry.get(placement.original_id).placement
        return placement

    def save_output_images(self, sink_factory: SinkFactory, format: Optional[str] = None) -> int:
        """Encode every rendered canvas through the codec.

        Args:
            sink_factory: Called with the canvas index, returns a writable
                binary sink. Sinks are not closed.
            format: Image format passed to the codec, its default when None.

        Returns:
            The number of canvases written.
        """
        for index, atlas in enumerate(self._output_images):
            height, width = atlas.shape[:2]
            sink = sink_factory(index)
            if format is None:
                self.codec.encode(atlas, width, height, sink)
            else:
                self.codec.encode(atlas, width, height, sink, format)
        return len(self._output_images)


def new(config: Optional[Config] = None) -> Packer:
    """Creates a packer, using ``default_config()`` when no configuration is given."""
    return Packer(config)

