"""Image ingestion and duplicate detection.

This module provides the records created for every ingested image, their
placement states and the registry that owns them. Duplicates are detected by
a content fingerprint over the raw pixel bytes together with the dimensions.
"""

import hashlib
import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from ..type_annotations import PixelBuffer, PixelData
from .pixels.pixel_buffer import pixel_buffer_bytes, pixel_buffer_from_data

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unplaced:
    """The image has no position yet."""


@dataclass(frozen=True)
class Placed:
    """The image sits at (x, y) on canvas ``bin_index``."""

    bin_index: int
    x: int
    y: int


@dataclass(frozen=True)
class DuplicateOf:
    """The image has the same content as image ``original_id`` and is never packed itself."""

    original_id: int


Placement = Union[Unplaced, Placed, DuplicateOf]

UNPLACED = Unplaced()


def fingerprint(buffer: PixelBuffer) -> str:
    """SHA-256 hex digest of the raw pixel bytes."""
    return hashlib.sha256(pixel_buffer_bytes(buffer)).hexdigest()


class InputImage:
    """One ingested image.

    Attributes:
        id: Sequence number assigned at ingestion, starting at 0.
        width: Width in pixels.
        height: Height in pixels.
        fingerprint: Content fingerprint of the pixel bytes.
        pixels: Read-only pixel buffer of shape (height, width, channels).
        placement: ``Unplaced``, ``Placed`` or ``DuplicateOf``.
    """

    def __init__(self, image_id: int, pixels: PixelBuffer, digest: str, placement: Placement = UNPLACED):
        self.id = image_id
        self.pixels = pixels
        self.height, self.width = pixels.shape[:2]
        self.fingerprint = digest
        self.placement = placement

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def is_duplicate(self) -> bool:
        return isinstance(self.placement, DuplicateOf)

    @property
    def original_id(self) -> Optional[int]:
        return self.placement.original_id if self.is_duplicate else None

    def sort_key(self) -> Tuple[int, int, int]:
        """Decreasing height, then decreasing width, then ascending id."""
        return -self.height, -self.width, self.id

    def __repr__(self) -> str:
        return "InputImage(id={}, size={}x{}, placement={!r})".format(
            self.id, self.width, self.height, self.placement
        )


class ImageRegistry:
    """Owns every ingested image in insertion order.

    Lookup and insertion of fingerprints happen under one lock, so two
    identical images added concurrently never both become originals.

    Attributes:
        channels: Channel count every ingested buffer must have.
    """

    def __init__(self, channels: int):
        self.channels = channels
        self._lock = threading.Lock()
        self._images: List[InputImage] = []
        self._originals: Dict[Tuple[str, int, int], int] = {}

    def add(self, pixels: PixelData, width: int, height: int) -> InputImage:
        """Ingests raw pixels.

        Args:
            pixels: Flat bytes of width * height * channels, or an ndarray of
                shape (height, width, channels).
            width: Image width in pixels.
            height: Image height in pixels.

        Returns:
            The new record, marked ``DuplicateOf`` when identical content was
            ingested before, ``Unplaced`` otherwise.

        Raises:
            InvalidImageError: If the dimensions are not positive or do not
                match the pixel data.
        """
        buffer = pixel_buffer_from_data(pixels, width, height, self.channels)
        digest = fingerprint(buffer)
        key = (digest, width, height)

        with self._lock:
            image_id = len(self._images)
            original_id = self._originals.get(key)
            if original_id is None:
                self._originals[key] = image_id
                image = InputImage(image_id, buffer, digest)
            else:
                image = InputImage(image_id, buffer, digest, DuplicateOf(original_id))
            self._images.append(image)

        if original_id is not None:
            logger.debug("Image %d is a duplicate of image %d", image_id, original_id)
        return image

    def snapshot(self) -> List[InputImage]:
        """Returns the images ingested so far, in insertion order."""
        with self._lock:
            return list(self._images)

    def pending(self, images: Optional[List[InputImage]] = None) -> List[InputImage]:
        """Returns the non-duplicate images in packing order.

        Args:
            images: A snapshot to filter, the current images when None.
        """
        if images is None:
            images = self.snapshot()
        return sorted((image for image in images if not image.is_duplicate), key=InputImage.sort_key)

    def get(self, image_id: int) -> InputImage:
        with self._lock:
            return self._images[image_id]

    def __len__(self) -> int:
        with self._lock:
            return len(self._images)
