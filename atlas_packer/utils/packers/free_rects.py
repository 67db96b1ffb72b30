"""Free space bookkeeping for a single canvas.

The tracker keeps the free regions of a canvas in an index addressed arena:
a list whose slots are never reused, so an index handed out by ``regions()``
stays valid until that region is consumed. Iteration order equals insertion
order, which the placement heuristics rely on to break ties.

Typical usage:
    tracker = FreeRectTracker(256, 256)
    index = Heuristic.BEST_AREA_FIT.find_position(tracker.regions(), 64, 32)
    x, y = tracker.place(index, 64, 32)
"""

import logging
from typing import Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


class Rectangle:
    """Represents a rectangle with position and dimensions.

    Attributes:
        left: The x-coordinate of the left edge.
        top: The y-coordinate of the top edge.
        width: The width of the rectangle.
        height: The height of the rectangle.
        right: The x-coordinate of the right edge.
        bottom: The y-coordinate of the bottom edge.
        area: The area of the rectangle.
    """

    __slots__ = ("left", "top", "width", "height", "right", "bottom", "area")

    def __init__(self, left: int, top: int, width: int, height: int):
        self.left = left
        self.top = top
        self.width = width
        self.height = height
        self.right = left + width
        self.bottom = top + height
        self.area = width * height

    def contains(self, other_rect: "Rectangle") -> bool:
        """Checks if this rectangle completely contains another rectangle.

        Args:
            other_rect: The rectangle to check for containment.

        Returns:
            True if other_rect is contained within this rectangle, False otherwise.
        """
        return (
            other_rect.left >= self.left
            and other_rect.right <= self.right
            and other_rect.top >= self.top
            and other_rect.bottom <= self.bottom
        )

    def intersects(self, other_rect: "Rectangle") -> bool:
        """Checks if the interiors of two rectangles overlap."""
        return not (
            other_rect.left >= self.right
            or other_rect.right <= self.left
            or other_rect.top >= self.bottom
            or other_rect.bottom <= self.top
        )

    def fits(self, width: int, height: int) -> bool:
        return self.width >= width and self.height >= height

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.left, self.top, self.width, self.height

    def __eq__(self, other) -> bool:
        return isinstance(other, Rectangle) and self.as_tuple() == other.as_tuple()

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __repr__(self) -> str:
        return "Rectangle(left={}, top={}, w={}, h={})".format(
            self.left, self.top, self.width, self.height
        )


class FreeRectTracker:
    """Guillotine style free region tracker for one canvas.

    Attributes:
        width: Width of the tracked area.
        height: Height of the tracked area.
        used_rectangles: Rectangles placed so far, in placement order.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.used_rectangles: List[Rectangle] = []
        self._slots: List[Optional[Rectangle]] = [Rectangle(0, 0, width, height)]

    def regions(self) -> Iterator[Tuple[int, Rectangle]]:
        """Yields ``(index, region)`` for every live free region in insertion order."""
        for index, region in enumerate(self._slots):
            if region is not None:
                yield index, region

    @property
    def free_rectangles(self) -> List[Rectangle]:
        return [region for _, region in self.regions()]

    def region(self, index: int) -> Rectangle:
        region = self._slots[index]
        if region is None:
            raise KeyError("Free region {} was already consumed".format(index))
        return region

    def place(self, index: int, width: int, height: int) -> Tuple[int, int]:
        """Places a rectangle at the origin of a free region.

        The region is consumed and the leftover space is split into at most
        two new regions, after which redundant regions are pruned.

        Args:
            index: Arena index of the chosen free region.
            width: Width of the rectangle, padding included.
            height: Height of the rectangle, padding included.

        Returns:
            The (x, y) offset the rectangle was placed at.

        Raises:
            ValueError: If the rectangle does not fit the region.
        """
        region = self.region(index)
        if not region.fits(width, height):
            raise ValueError(
                "{}x{} does not fit into free region {}".format(width, height, region)
            )

        used = Rectangle(region.left, region.top, width, height)
        self._slots[index] = None
        self.split_after_placement(region, used)
        self.prune()
        self.used_rectangles.append(used)
        return used.left, used.top

    def split_after_placement(self, free_node: Rectangle, used_node: Rectangle) -> None:
        """Splits the leftover space of a consumed region into two regions.

        The placed rectangle sits in the top left corner of ``free_node``. The
        remainder is cut into a region to the right and a region below, with
        the cut running along the shorter leftover axis.

        Args:
            free_node: The region that was consumed.
            used_node: The rectangle placed at the region's origin.
        """
        leftover_w = free_node.width - used_node.width
        leftover_h = free_node.height - used_node.height

        if leftover_w <= leftover_h:
            # Horizontal cut, the region below spans the full width.
            right = Rectangle(used_node.right, free_node.top, leftover_w, used_node.height)
            below = Rectangle(free_node.left, used_node.bottom, free_node.width, leftover_h)
        else:
            # Vertical cut, the region to the right spans the full height.
            right = Rectangle(used_node.right, free_node.top, leftover_w, free_node.height)
            below = Rectangle(free_node.left, used_node.bottom, used_node.width, leftover_h)

        for new_region in (right, below):
            # Zero sized strips are not free space
            if new_region.area > 0:
                self._slots.append(new_region)

    def prune(self) -> None:
        """Removes free regions entirely contained within another free region."""
        live = list(self.regions())
        pruned = 0
        for k_idx, rect_k in live:
            for m_idx, rect_m in live:
                if k_idx == m_idx or self._slots[m_idx] is None:
                    continue
                if rect_m.contains(rect_k):
                    logger.debug("Pruning %s (contained by %s)", rect_k, rect_m)
                    self._slots[k_idx] = None
                    pruned += 1
                    break
        if pruned:
            logger.debug("Pruned %d free regions, %d left", pruned, len(self.free_rectangles))

    def max_free_size(self) -> Tuple[int, int]:
        """Returns the largest free width and largest free height, independently."""
        widths = [region.width for _, region in self.regions()]
        heights = [region.height for _, region in self.regions()]
        return max(widths, default=0), max(heights, default=0)
