"""Canvas growth and multi-canvas placement.

``BinPacker`` drives the placement heuristic and the free region tracker over
a sorted list of images. Depending on the configuration it either grows one
canvas and re-lays out everything after each failed pass, or seals the
current canvas and continues with the leftovers on a new one.

Typical usage:
    canvases = BinPacker(config).pack(sorted_images)
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from ... import globs
from ...errors import BinLimitExceededError, GrowthLimitExceededError, ImageTooLargeError
from .free_rects import FreeRectTracker, Rectangle
from .heuristics import Heuristic

if TYPE_CHECKING:
    from ...config import Config
    from ..images import InputImage

logger = logging.getLogger(__name__)

AXIS_WIDTH = "width"
AXIS_HEIGHT = "height"


@dataclass(frozen=True)
class CanvasPlacement:
    """An image placed on a canvas, its size without padding."""

    image_id: int
    x: int
    y: int
    width: int
    height: int

    @property
    def rectangle(self) -> Rectangle:
        return Rectangle(self.x, self.y, self.width, self.height)


class Canvas:
    """One output raster and the images placed on it.

    The free space is tracked over the canvas enlarged by ``padding`` on the
    right and bottom, so padding separates neighbours without reducing the
    usable area.

    Attributes:
        index: Creation order of the canvas.
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        padding: Spacing reserved right of and below every image.
        placements: Images placed so far, in placement order.
        sealed: True once no further image may be placed.
    """

    def __init__(self, index: int, width: int, height: int, padding: int = 0):
        self.index = index
        self.padding = padding
        self.sealed = False
        self.width = width
        self.height = height
        self.placements: List[CanvasPlacement] = []
        self.tracker = FreeRectTracker(width + padding, height + padding)

    def reset(self, width: int, height: int) -> None:
        """Discards every placement and resizes the empty canvas."""
        self.placements = []
        self.sealed = False
        self.width = width
        self.height = height
        self.tracker = FreeRectTracker(width + self.padding, height + self.padding)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def free_regions(self) -> List[Rectangle]:
        return self.tracker.free_rectangles

    @property
    def is_empty(self) -> bool:
        return not self.placements

    @property
    def used_area(self) -> int:
        """Area covered by images, padding excluded."""
        return sum(p.width * p.height for p in self.placements)

    @property
    def plot_ratio(self) -> float:
        """Ratio of image surface to canvas area."""
        return self.used_area / float(self.width * self.height)

    def fill(self, images: Sequence["InputImage"], heuristic: Heuristic) -> List["InputImage"]:
        """Places as many images as possible, in the given order.

        An image that finds no free region is skipped and the pass continues
        with the next one.

        Returns:
            The images that could not be placed, order preserved.
        """
        if self.sealed:
            raise RuntimeError("Canvas {} is sealed".format(self.index))

        still_pending = []
        for image in images:
            width = image.width + self.padding
            height = image.height + self.padding
            region_index = heuristic.find_position(self.tracker.regions(), width, height)
            if region_index is None:
                still_pending.append(image)
                continue
            x, y = self.tracker.place(region_index, width, height)
            self.placements.append(CanvasPlacement(image.id, x, y, image.width, image.height))
        return still_pending

    def __repr__(self) -> str:
        return "Canvas(index={}, size={}x{}, placements={})".format(
            self.index, self.width, self.height, len(self.placements)
        )


class BinPacker:
    """Places sorted images onto one growing canvas or onto several fixed ones.

    Attributes:
        config: The configuration snapshot of this pack() call.
        heuristic: The placement heuristic in use.
        growth_steps: Number of growth steps taken by the last ``pack``.
    """

    def __init__(self, config: "Config"):
        self.config = config
        self.heuristic = config.heuristic
        self.padding = config.padding
        self.growth_steps = 0

    def pack(self, images: Sequence["InputImage"]) -> List[Canvas]:
        """Places every image.

        Args:
            images: Non-duplicate images, already in packing order.

        Returns:
            The canvases in creation order, every one holding at least one image.

        Raises:
            ImageTooLargeError: If an image can never fit a permitted canvas.
            GrowthLimitExceededError: If the canvas cannot grow any further.
            BinLimitExceededError: If more than ``max_bin_count`` canvases are needed.
        """
        self.growth_steps = 0
        if not images:
            return []
        if self.config.auto_grow:
            return [self._pack_growing(images)]
        return self._pack_bins(images)

    def _check_sizes(self, images: Sequence["InputImage"], limit: Tuple[int, int]) -> None:
        for image in images:
            if image.width > limit[0] or image.height > limit[1]:
                raise ImageTooLargeError(image.id, image.size, limit)

    def _pack_growing(self, images: Sequence["InputImage"]) -> Canvas:
        max_dimension = self.config.max_dimension
        self._check_sizes(images, (max_dimension, max_dimension))

        canvas = Canvas(0, *self.config.base_size, padding=self.padding)
        while True:
            logger.debug("[%s] %d images on %dx%d", globs.PackStates.PLACING, len(images), canvas.width, canvas.height)
            failed = canvas.fill(images, self.heuristic)
            if not failed:
                return canvas

            new_size = self._grown_size(canvas, failed)
            if new_size is None:
                raise GrowthLimitExceededError(
                    "{} images left over on a {}x{} canvas, max dimension {} reached".format(
                        len(failed), canvas.width, canvas.height, max_dimension
                    )
                )

            self.growth_steps += 1
            logger.debug(
                "[%s] %d images failed, from %dx%d to %dx%d",
                globs.PackStates.GROW_CANVAS, len(failed), canvas.width, canvas.height, new_size[0], new_size[1],
            )
            # Growth invalidates the layout, so every image is placed again.
            canvas.reset(*new_size)

    def _grown_size(self, canvas: Canvas, failed: Sequence["InputImage"]) -> Optional[Tuple[int, int]]:
        """Next canvas size after a failed pass, or None when it cannot grow."""
        max_dimension = self.config.max_dimension

        if self.config.square:
            side = canvas.width
            if side >= max_dimension:
                return None
            side = min(side * 2, max_dimension)
            return side, side

        axis = self._limiting_axis(canvas, failed)
        other = AXIS_HEIGHT if axis == AXIS_WIDTH else AXIS_WIDTH
        for grow_axis in (axis, other):
            current = getattr(canvas, grow_axis)
            if current < max_dimension:
                grown = min(current * 2, max_dimension)
                if grow_axis == AXIS_WIDTH:
                    return grown, canvas.height
                return canvas.width, grown
        return None

    def _limiting_axis(self, canvas: Canvas, failed: Sequence["InputImage"]) -> str:
        """The axis responsible for most of the failures of the last pass.

        A failed image blames width when no free region is wide enough for it
        while one is tall enough, and height in the opposite case. Otherwise it
        blames the shorter canvas side.
        """
        shorter = AXIS_WIDTH if canvas.width <= canvas.height else AXIS_HEIGHT
        max_width, max_height = canvas.tracker.max_free_size()
        votes = {AXIS_WIDTH: 0, AXIS_HEIGHT: 0}

        for image in failed:
            width = image.width + self.padding
            height = image.height + self.padding
            wide_enough = max_width >= width
            tall_enough = max_height >= height
            if tall_enough and not wide_enough:
                votes[AXIS_WIDTH] += 1
            elif wide_enough and not tall_enough:
                votes[AXIS_HEIGHT] += 1
            else:
                votes[shorter] += 1

        if votes[AXIS_WIDTH] == votes[AXIS_HEIGHT]:
            return shorter
        return AXIS_WIDTH if votes[AXIS_WIDTH] > votes[AXIS_HEIGHT] else AXIS_HEIGHT

    def _pack_bins(self, images: Sequence["InputImage"]) -> List[Canvas]:
        base_size = self.config.base_size
        self._check_sizes(images, base_size)

        max_bin_count = self.config.max_bin_count
        canvases = []
        pending = list(images)
        while pending:
            if max_bin_count is not None and len(canvases) >= max_bin_count:
                raise BinLimitExceededError(
                    "{} images left over after filling {} canvases".format(len(pending), max_bin_count)
                )
            canvas = Canvas(len(canvases), *base_size, padding=self.padding)
            logger.debug(
                "[%s] canvas %d for %d images", globs.PackStates.OPEN_NEW_BIN, canvas.index, len(pending)
            )
            pending = canvas.fill(pending, self.heuristic)
            canvas.sealed = True
            canvases.append(canvas)
        return canvases
