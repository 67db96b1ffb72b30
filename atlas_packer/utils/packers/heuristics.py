"""Placement heuristics choosing a free region for a rectangle.

Every heuristic scores each free region able to hold the request and picks
the lowest score. Scores are compared as tuples and only a strictly better
score replaces the current best, so ties go to the region inserted first.
"""

from enum import Enum
from typing import Iterable, Optional, Tuple

from .free_rects import Rectangle

Score = Tuple[int, int]


def _score_baf(free_rect: Rectangle, width: int, height: int) -> Score:
    """Best Area Fit: remaining area first, then the shorter leftover side."""
    area_fit = free_rect.area - width * height
    short_side_fit = min(free_rect.width - width, free_rect.height - height)
    return area_fit, short_side_fit


def _score_bssf(free_rect: Rectangle, width: int, height: int) -> Score:
    """Best Short Side Fit: shorter leftover side first, then the longer one."""
    leftover_horiz = free_rect.width - width
    leftover_vert = free_rect.height - height
    return min(leftover_horiz, leftover_vert), max(leftover_horiz, leftover_vert)


def _score_bl(free_rect: Rectangle, width: int, height: int) -> Score:
    """Bottom-Left: lowest y position first, then lowest x."""
    return free_rect.top, free_rect.left


class Heuristic(Enum):
    """Closed set of placement heuristics.

    The values are the short codes accepted by the configuration.
    """

    BEST_AREA_FIT = "BAF"
    BEST_SHORT_SIDE_FIT = "BSSF"
    BOTTOM_LEFT = "BL"

    @classmethod
    def parse(cls, value) -> "Heuristic":
        """Resolves a member from itself, its name or its short code.

        Raises:
            ValueError: If the value names no heuristic.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
            for member in cls:
                if member.value == key:
                    return member
        raise ValueError("Unknown heuristic: {!r}".format(value))

    def score(self, free_rect: Rectangle, width: int, height: int) -> Score:
        return _SCORERS[self](free_rect, width, height)

    def find_position(
        self, regions: Iterable[Tuple[int, Rectangle]], width: int, height: int
    ) -> Optional[int]:
        """Finds the best free region for a rectangle.

        Args:
            regions: ``(index, region)`` pairs in insertion order.
            width: Width of the rectangle, padding included.
            height: Height of the rectangle, padding included.

        Returns:
            The index of the chosen region, or None if no region can hold the
            rectangle.
        """
        scorer = _SCORERS[self]
        best_index = None
        best_score = None

        for index, free_rect in regions:
            if not free_rect.fits(width, height):
                continue
            score = scorer(free_rect, width, height)
            if best_score is None or score < best_score:
                best_score = score
                best_index = index

        return best_index


_SCORERS = {
    Heuristic.BEST_AREA_FIT: _score_baf,
    Heuristic.BEST_SHORT_SIDE_FIT: _score_bssf,
    Heuristic.BOTTOM_LEFT: _score_bl,
}
